"""Exa web search backend."""

from typing import Optional

import httpx

from repo_radar.core import RawHit, SearchBackend


class ExaSearch(SearchBackend):
    """Primary discovery backend backed by the Exa search API."""

    emoji = "🔎"
    name = "exa"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://api.exa.ai",
        search_type: str = "fast",
        timeout: float = 30.0,
        snippet_chars: int = 800,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.search_type = search_type
        self.timeout = timeout
        self.snippet_chars = snippet_chars

    async def search(self, query: str, num_results: int) -> list[RawHit]:
        """Search the web for query.

        Raises:
            httpx.HTTPError: On transport failure or non-2xx response
        """
        payload = {
            "query": query,
            "numResults": num_results,
            "type": self.search_type,
            "contents": {"text": {"maxCharacters": self.snippet_chars}},
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                f"{self.base_url}/search",
                headers=self._get_headers(),
                json=payload,
            )
            response.raise_for_status()
            data = response.json()

        hits = []
        for result in data.get("results") or []:
            url = (result.get("url") or "").strip()
            if not url:
                continue
            hits.append(RawHit(
                title=(result.get("title") or "").strip() or url,
                url=url,
                snippet=(result.get("text") or "").strip()[:self.snippet_chars],
                backend=self.name,
            ))

        return hits

    def _get_headers(self) -> dict[str, str]:
        """Get headers for Exa API requests."""
        headers = {"Content-Type": "application/json"}

        if self.api_key:
            headers["x-api-key"] = self.api_key

        return headers
