"""Business logic use cases."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import AbstractSet, Optional

from repo_radar.core import (
    CROSS_REPO,
    HistoryLog,
    Policy,
    RawHit,
    ReportGenerator,
    ScoredCandidate,
    SearchBackend,
    dedupe_by_url,
    score_candidate,
    select_top,
)


@dataclass
class RunStats:
    """Counters collected during a radar run."""

    queries: int = 0
    failed_queries: int = 0
    hits: int = 0
    rejected: int = 0
    fallback_repos: list[str] = field(default_factory=list)


@dataclass
class RadarRun:
    """Outcome of a radar run."""

    report: str
    candidates: list[ScoredCandidate]
    chosen: list[ScoredCandidate]
    stats: RunStats
    recorded: int = 0


class RadarService:
    """Service collecting, scoring and selecting radar items for tracked repos."""

    def __init__(
        self,
        policy: Policy,
        search: SearchBackend,
        history: HistoryLog,
        report_generator: ReportGenerator,
        repo_purposes: dict[str, str],
        fallback: Optional[SearchBackend] = None,
    ) -> None:
        self.policy = policy
        self.search = search
        self.fallback = fallback
        self.history = history
        self.report_generator = report_generator
        self.repo_purposes = repo_purposes

    async def run(
        self,
        repos: Optional[list[str]] = None,
        dry_run: bool = False,
        report_date: Optional[date] = None,
        output_path: Optional[Path] = None,
    ) -> RadarRun:
        """Run the radar for repos (all tracked repos by default).

        History is appended once the report has been rendered, and never in
        dry-run mode. The report file is written to output_path only after
        that, so a failed history write leaves no report behind.
        """
        repos = list(repos or self.repo_purposes)
        report_date = report_date or date.today()
        stats = RunStats()

        seen = self.history.seen_urls()
        print(f"\n📚 В истории: {len(seen)} URL")

        candidates = await self.collect_candidates(repos, seen, stats)
        unique = dedupe_by_url(candidates)
        chosen = select_top(self.policy, unique, repos)

        print("\n" + "=" * 70)
        print("📊 ОТБОР")
        print("=" * 70)
        print(f"✓ Кандидатов: {len(candidates)} (уникальных URL: {len(unique)})")
        print(f"✓ Отклонено guardrail: {stats.rejected}")
        print(f"✓ Выбрано: {len(chosen)} из {len({c.repo for c in chosen})} репозиториев")
        if stats.failed_queries:
            print(f"⚠️  Неудачных запросов: {stats.failed_queries} из {stats.queries}")

        purposes = {repo: self.repo_purposes.get(repo, "") for repo in repos}
        report = await self.report_generator.generate(chosen, purposes, report_date)

        recorded = 0
        if dry_run:
            print("\n🧪 Dry run: история не обновлена")
        else:
            recorded = self.history.append(chosen, datetime.now(timezone.utc))
            print(f"\n💾 В историю добавлено: {recorded}")

        if output_path is not None:
            self.save_report(report, output_path)

        return RadarRun(
            report=report,
            candidates=unique,
            chosen=chosen,
            stats=stats,
            recorded=recorded,
        )

    async def collect_candidates(
        self,
        repos: list[str],
        seen: AbstractSet[str],
        stats: Optional[RunStats] = None,
    ) -> list[ScoredCandidate]:
        """Query backends sequentially and score every hit."""
        stats = stats or RunStats()
        limits = self.policy.limits
        templates = self.policy.query_templates
        candidates: list[ScoredCandidate] = []

        print("\n" + "=" * 70)
        print("📥 СБОР КАНДИДАТОВ")
        print("=" * 70)

        for repo in repos:
            print(f"\n📦 {repo}")
            for template in templates.per_repo[:limits.per_repo_queries]:
                query = template.replace("{repo}", repo)
                hits = await self._safe_search(self.search, query, limits.results_per_query, stats)
                self._score_hits(hits, repo, seen, candidates, stats)

        cross_queries = templates.cross_repo[:limits.cross_repo_queries]
        if cross_queries:
            print("\n🌐 Общие запросы")
        for query in cross_queries:
            hits = await self._safe_search(self.search, query, limits.results_per_query, stats)
            for hit in hits:
                self._score_hits([hit], self._assign_repo(hit, repos), seen, candidates, stats)

        if self.fallback is not None:
            await self._collect_fallback(repos, seen, candidates, stats)

        print(f"\n✓ Всего кандидатов: {len(candidates)}")
        return candidates

    async def _collect_fallback(
        self,
        repos: list[str],
        seen: AbstractSet[str],
        candidates: list[ScoredCandidate],
        stats: RunStats,
    ) -> None:
        """Backstop repos with too few novel candidates with the fallback backend."""
        limits = self.policy.limits
        novel_by_repo: dict[str, int] = {}
        for candidate in candidates:
            if candidate.scores.novelty == 5:
                novel_by_repo[candidate.repo] = novel_by_repo.get(candidate.repo, 0) + 1

        for repo in repos:
            if novel_by_repo.get(repo, 0) >= limits.fallback_min_novel:
                continue
            stats.fallback_repos.append(repo)
            print(f"\n🛟 Fallback: {repo}")
            hits = await self._safe_search(
                self.fallback, f"{repo} release notes", limits.max_urls_per_repo, stats
            )
            self._score_hits(hits, repo, seen, candidates, stats)

    async def _safe_search(
        self,
        backend: SearchBackend,
        query: str,
        num_results: int,
        stats: RunStats,
    ) -> list[RawHit]:
        """Run a query, treating any backend failure as zero results."""
        stats.queries += 1
        name = getattr(backend, "name", backend.__class__.__name__)
        emoji = getattr(backend, "emoji", "🔍")
        try:
            hits = await backend.search(query, num_results)
        except Exception as e:
            stats.failed_queries += 1
            print(f"  └─ ⚠️  Warning: {name} query failed: {query!r}: {e}")
            return []

        print(f"  └─ {emoji} {name} '{query}': {len(hits)}")
        return hits

    def _score_hits(
        self,
        hits: list[RawHit],
        repo: str,
        seen: AbstractSet[str],
        candidates: list[ScoredCandidate],
        stats: RunStats,
    ) -> None:
        for hit in hits:
            if not hit.url:
                continue
            stats.hits += 1
            candidate = score_candidate(
                self.policy, seen, repo, hit.url, hit.title, hit.snippet, hit.backend
            )
            if candidate is None:
                stats.rejected += 1
                continue
            candidates.append(candidate)

    @staticmethod
    def _assign_repo(hit: RawHit, repos: list[str]) -> str:
        """Attribute a cross-repo hit to the first repo its title mentions."""
        title = (hit.title or "").lower()
        return next((repo for repo in repos if repo.lower() in title), CROSS_REPO)

    def save_report(self, report: str, output_path: Path) -> None:
        """Save report to file."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(report, encoding="utf-8")
        print(f"📄 Отчёт сохранён: {output_path}")
