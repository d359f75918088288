"""Core domain entities."""

from dataclasses import asdict, dataclass, field
from typing import Any

# Repo assigned to cross-repo hits that mention no tracked repo
CROSS_REPO = "cross-repo"


@dataclass(frozen=True)
class RawHit:
    """Single result returned by a discovery backend."""

    title: str
    url: str
    snippet: str
    backend: str


@dataclass(frozen=True)
class SubScores:
    """Per-signal scores, each in the 0..5 range."""

    novelty: int
    relevance: int
    authority: int
    impact: int
    diversity: int

    def __post_init__(self) -> None:
        for name, value in asdict(self).items():
            if not 0 <= value <= 5:
                raise ValueError(f"Sub-score {name} out of range: {value}")


@dataclass(frozen=True)
class ScoredCandidate:
    """Discovered URL scored for inclusion in a radar run."""

    url: str
    title: str
    repo: str
    backend: str
    domain: str
    snippet: str
    scores: SubScores
    total: int
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("URL cannot be empty")
        if self.total < 0:
            raise ValueError("Total score cannot be negative")


@dataclass
class HistoryRecord:
    """Item selected by a past run, one line in the history log."""

    ts: str
    repo: str
    url: str
    title: str
    backend: str
    scores: dict[str, int] = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_candidate(cls, candidate: ScoredCandidate, ts: str) -> "HistoryRecord":
        scores = asdict(candidate.scores)
        scores["total"] = candidate.total
        return cls(
            ts=ts,
            repo=candidate.repo,
            url=candidate.url,
            title=candidate.title,
            backend=candidate.backend,
            scores=scores,
            tags=list(candidate.tags),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryRecord":
        """Build a record from a parsed JSON line.

        Raises:
            ValueError: If the payload is not a mapping or has no URL.
        """
        if not isinstance(data, dict) or not data.get("url"):
            raise ValueError("History record must be an object with a url")
        return cls(
            ts=str(data.get("ts", "")),
            repo=str(data.get("repo", "")),
            url=str(data["url"]),
            title=str(data.get("title", "")),
            # Older records used "engine" for the backend tag
            backend=str(data.get("backend", data.get("engine", ""))),
            scores=dict(data.get("scores") or {}),
            tags=list(data.get("tags") or []),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
