"""Tests for the Markdown report generator."""

from datetime import date

import pytest

from repo_radar.adapters.report import MarkdownReportGenerator
from repo_radar.core import ScoredCandidate, SubScores


def make_candidate(repo: str, total: int, title: str) -> ScoredCandidate:
    """Create a selected candidate."""
    return ScoredCandidate(
        url=f"https://example.com/{repo}/{total}",
        title=title,
        repo=repo,
        backend="exa",
        domain="example.com",
        snippet="",
        scores=SubScores(novelty=5, relevance=4, authority=2, impact=5, diversity=3),
        total=total,
        tags=("new-to-radar", "exa"),
    )


@pytest.mark.asyncio
async def test_generate_sections() -> None:
    """Test TL;DR and per-repo sections."""
    chosen = [
        make_candidate("moltbot", 90, "moltbot 2.0 released"),
        make_candidate("interdoc", 80, "interdoc breaking change"),
        make_candidate("moltbot", 70, "moltbot security advisory"),
    ]
    purposes = {"interdoc": "AGENTS.md generator", "moltbot": "assistant gateway", "tuivision": "TUI tests"}

    report = await MarkdownReportGenerator().generate(chosen, purposes, date(2026, 10, 17))

    assert report.startswith("# 📡 Engineering Radar — 2026-10-17\n")
    assert "## TL;DR" in report
    assert "- **moltbot**: moltbot 2.0 released (90) — https://example.com/moltbot/90" in report
    assert "- Purpose: assistant gateway" in report
    assert (
        "  - Scores: novelty 5/5, relevance 4/5, authority 2/5, impact 5/5 → **80**" in report
    )
    assert "  - Tags: new-to-radar, exa" in report
    # Repos follow the configured order; repos without items are omitted
    assert report.index("### interdoc") < report.index("### moltbot")
    assert "### tuivision" not in report


@pytest.mark.asyncio
async def test_tldr_limited() -> None:
    """Test TL;DR lists only the top items."""
    chosen = [make_candidate("moltbot", 100 - i, f"item {i}") for i in range(7)]

    report = await MarkdownReportGenerator(tldr_items=5).generate(chosen, {"moltbot": ""}, date(2026, 10, 17))

    tldr = report.split("## Per repo")[0]
    assert tldr.count("- **moltbot**") == 5
    assert "- Purpose" not in report


@pytest.mark.asyncio
async def test_cross_repo_section() -> None:
    """Test items outside tracked repos get their own section."""
    chosen = [make_candidate("cross-repo", 60, "Rust profiling guide")]

    report = await MarkdownReportGenerator().generate(chosen, {"moltbot": "x"}, date(2026, 10, 17))

    assert "### Cross-repo" in report
    assert "Rust profiling guide" in report


@pytest.mark.asyncio
async def test_empty_report() -> None:
    """Test the report notes when nothing was selected."""
    report = await MarkdownReportGenerator().generate([], {"moltbot": "x"}, date(2026, 10, 17))

    assert "No new items found for this run." in report
    assert "## TL;DR" not in report
