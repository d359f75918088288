"""CLI entry point for repo radar."""

import asyncio
from datetime import date
from pathlib import Path
from typing import Optional

import typer

from repo_radar.adapters.report import MarkdownReportGenerator
from repo_radar.adapters.search import ExaSearch, SearxngSearch
from repo_radar.config import Settings, get_settings
from repo_radar.core import HistoryLog, PolicyStore
from repo_radar.use_cases import RadarRun, RadarService


def parse_repos(value: Optional[str], settings: Settings) -> list[str]:
    """Parse a comma-separated repo subset, keeping only tracked repos.

    Raises:
        typer.BadParameter: If a name is not a tracked repo
    """
    if not value:
        return settings.tracked_repos

    repos = [name.strip() for name in value.split(",") if name.strip()]
    unknown = [name for name in repos if name not in settings.repos]
    if unknown:
        raise typer.BadParameter(
            f"Unknown repo(s): {', '.join(unknown)}", param_hint="--repos"
        )
    return repos or settings.tracked_repos


def main(
    repos: Optional[str] = typer.Option(None, "--repos", help="Comma-separated subset of tracked repos"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Do not append selected items to history"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Report file path"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="Config file path"),
) -> None:
    """Run the weekly engineering radar and write a Markdown report."""
    try:
        settings = get_settings(config)
    except Exception as e:
        _fail(e)

    selected = parse_repos(repos, settings)

    try:
        asyncio.run(async_run(settings, selected, dry_run, output))
    except Exception as e:
        _fail(e)


def _fail(error: Exception) -> None:
    """Print the diagnostic for an unhandled failure and exit non-zero."""
    print(f"\n❌ Radar failed: {type(error).__name__}: {error}")
    raise typer.Exit(code=1)


def app() -> None:
    """CLI entry point."""
    typer.run(main)


async def async_run(
    settings: Settings,
    repos: list[str],
    dry_run: bool,
    output: Optional[Path],
) -> RadarRun:
    """Async implementation of run command."""
    print("\n" + "=" * 70)
    print("📡 REPO RADAR - Weekly engineering radar")
    print("=" * 70)

    print(f"\n🔑 Креды:")
    if settings.exa_api_key:
        print(f"  ✓ EXA_API_KEY - основной поиск")
    else:
        print(f"  ⚠️  EXA_API_KEY - не найден (запросы к Exa, скорее всего, не пройдут)")

    policy = PolicyStore(settings.policy_path).load()
    history = HistoryLog(settings.history_path)

    print(f"\n⚙️  Настройки:")
    print(f"  • Репозитории: {len(repos)}")
    print(f"  • Макс. элементов на репо: {policy.limits.max_items_per_repo}")
    print(f"  • Мин. репозиториев в отчёте: {policy.limits.min_repos_represented}")
    print(f"  • SearXNG: {policy.searxng_base_url}")
    if dry_run:
        print(f"  • 🧪 Dry run")

    search = ExaSearch(
        api_key=settings.exa_api_key,
        base_url=settings.exa.base_url,
        search_type=settings.exa.search_type,
        timeout=settings.exa.timeout,
        snippet_chars=settings.exa.snippet_chars,
    )
    fallback = SearxngSearch(policy.searxng_base_url, timeout=settings.searxng.timeout)

    service = RadarService(
        policy=policy,
        search=search,
        history=history,
        report_generator=MarkdownReportGenerator(),
        repo_purposes=settings.repos,
        fallback=fallback,
    )

    report_date = date.today()
    if output is None:
        output = settings.output_dir / f"{report_date.isoformat()}_radar.md"

    result = await service.run(
        repos=repos,
        dry_run=dry_run,
        report_date=report_date,
        output_path=output,
    )

    print("\n" + "=" * 70)
    print(f"✅ ГОТОВО!")
    print("=" * 70)
    print(f"📄 Отчёт: {output}")
    print()

    return result


if __name__ == "__main__":
    app()
