"""Tests for core entities."""

import pytest

from repo_radar.core import HistoryRecord, ScoredCandidate, SubScores


def test_sub_scores_range() -> None:
    """Test sub-scores outside 0..5 are rejected."""
    assert SubScores(novelty=0, relevance=1, authority=2, impact=5, diversity=3).impact == 5

    with pytest.raises(ValueError, match="Sub-score relevance out of range"):
        SubScores(novelty=5, relevance=6, authority=2, impact=2, diversity=3)

    with pytest.raises(ValueError, match="Sub-score novelty out of range"):
        SubScores(novelty=-1, relevance=1, authority=2, impact=2, diversity=3)


def test_candidate_validation() -> None:
    """Test candidate validation."""
    scores = SubScores(novelty=5, relevance=5, authority=5, impact=5, diversity=3)

    with pytest.raises(ValueError, match="URL cannot be empty"):
        ScoredCandidate(
            url="", title="t", repo="r", backend="exa", domain="", snippet="", scores=scores, total=1,
        )

    with pytest.raises(ValueError, match="Total score cannot be negative"):
        ScoredCandidate(
            url="https://example.com", title="t", repo="r", backend="exa",
            domain="example.com", snippet="", scores=scores, total=-1,
        )


def test_history_record_from_candidate() -> None:
    """Test history records capture scores, total and tags."""
    candidate = ScoredCandidate(
        url="https://github.com/acme/tuivision/releases",
        title="tuivision 0.4",
        repo="tuivision",
        backend="exa",
        domain="github.com",
        snippet="snippet is not persisted",
        scores=SubScores(novelty=5, relevance=5, authority=5, impact=4, diversity=3),
        total=109,
        tags=("new-to-radar", "github"),
    )

    record = HistoryRecord.from_candidate(candidate, "2026-10-12T00:00:00+00:00")

    assert record.to_dict() == {
        "ts": "2026-10-12T00:00:00+00:00",
        "repo": "tuivision",
        "url": "https://github.com/acme/tuivision/releases",
        "title": "tuivision 0.4",
        "backend": "exa",
        "scores": {"novelty": 5, "relevance": 5, "authority": 5, "impact": 4, "diversity": 3, "total": 109},
        "tags": ["new-to-radar", "github"],
    }


def test_history_record_requires_url() -> None:
    """Test records without URL are invalid."""
    with pytest.raises(ValueError):
        HistoryRecord.from_dict({"repo": "a"})
    with pytest.raises(ValueError):
        HistoryRecord.from_dict("https://example.com")
