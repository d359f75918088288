"""SearXNG meta-search backend used as a fallback."""

import httpx

from repo_radar.core import RawHit, SearchBackend


class SearxngSearch(SearchBackend):
    """Query a self-hosted SearXNG instance through its JSON API."""

    emoji = "🛟"
    name = "searxng"

    def __init__(self, base_url: str, timeout: float = 20.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def search(self, query: str, num_results: int) -> list[RawHit]:
        """Search through SearXNG, keeping the first num_results hits."""
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            response = await client.get(
                f"{self.base_url}/search",
                params={"q": query, "format": "json"},
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
                snippet=(result.get("content") or "").strip(),
                backend=self.name,
            ))
            if len(hits) >= num_results:
                break

        return hits
