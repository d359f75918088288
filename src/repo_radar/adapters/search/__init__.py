"""Discovery backends."""

from repo_radar.adapters.search.exa_search import ExaSearch
from repo_radar.adapters.search.searxng_search import SearxngSearch

__all__ = ["ExaSearch", "SearxngSearch"]
