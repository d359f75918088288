"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from datetime import date

from repo_radar.core.entities import RawHit, ScoredCandidate


class SearchBackend(ABC):
    """Interface for discovery backends returning web search hits."""

    name: str = "search"

    @abstractmethod
    async def search(self, query: str, num_results: int) -> list[RawHit]:
        """Run a free-text query.

        Returns an empty list when nothing matches; raises only on transport
        or protocol failure.
        """
        pass


class ReportGenerator(ABC):
    """Interface for rendering radar reports."""

    @abstractmethod
    async def generate(
        self,
        chosen: list[ScoredCandidate],
        repo_purposes: dict[str, str],
        report_date: date,
    ) -> str:
        """Render selected items as a report."""
        pass
