"""Markdown radar report generator."""

from datetime import date

from repo_radar.core import CROSS_REPO, ReportGenerator, ScoredCandidate


class MarkdownReportGenerator(ReportGenerator):
    """Generate markdown report from selected items."""

    def __init__(self, tldr_items: int = 5) -> None:
        self.tldr_items = tldr_items

    async def generate(
        self,
        chosen: list[ScoredCandidate],
        repo_purposes: dict[str, str],
        report_date: date,
    ) -> str:
        """Generate markdown report.

        Args:
            chosen: Selected candidates, best first
            repo_purposes: Tracked repos of this run mapped to their purpose
            report_date: Date shown in the title
        """
        lines = [
            f"# 📡 Engineering Radar — {report_date.isoformat()}",
            "",
        ]

        if not chosen:
            lines.append("No new items found for this run.")
            return "\n".join(lines) + "\n"

        lines.extend(["## TL;DR", ""])
        for item in chosen[:self.tldr_items]:
            lines.append(f"- **{item.repo}**: {item.title} ({item.total}) — {item.url}")
        lines.extend(["", "## Per repo"])

        grouped: dict[str, list[ScoredCandidate]] = {}
        for item in chosen:
            grouped.setdefault(item.repo, []).append(item)

        for repo, purpose in repo_purposes.items():
            items = grouped.get(repo)
            if not items:
                continue
            lines.extend(["", f"### {repo}"])
            if purpose:
                lines.append(f"- Purpose: {purpose}")
            for item in items:
                lines.extend(self._format_item(item))

        extra = [repo for repo in grouped if repo not in repo_purposes]
        for repo in extra:
            heading = "Cross-repo" if repo == CROSS_REPO else repo
            lines.extend(["", f"### {heading}"])
            for item in grouped[repo]:
                lines.extend(self._format_item(item))

        return "\n".join(lines) + "\n"

    def _format_item(self, item: ScoredCandidate) -> list[str]:
        """Format single report item."""
        s = item.scores
        return [
            f"- **{item.title}** — {item.url}",
            f"  - Scores: novelty {s.novelty}/5, relevance {s.relevance}/5, "
            f"authority {s.authority}/5, impact {s.impact}/5 → **{item.total}**",
            f"  - Tags: {', '.join(item.tags)}",
        ]
