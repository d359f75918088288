"""Tests for the command line entry point."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
import typer
from typer.testing import CliRunner

from repo_radar.cli import main
from repo_radar.core import RawHit

runner = CliRunner()


@pytest.fixture
def cli_app() -> typer.Typer:
    """Single-command app wrapping main, as typer.run does."""
    app = typer.Typer()
    app.command()(main)
    return app


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Config keeping all state under tmp_path."""
    path = tmp_path / "config.yaml"
    path.write_text(
        f"paths:\n"
        f"  state_dir: {tmp_path / 'state'}\n"
        f"  output_dir: {tmp_path / 'reports'}\n"
        f"repos:\n"
        f"  moltbot: assistant gateway\n"
        f"  interdoc: AGENTS.md generator\n",
        encoding="utf-8",
    )
    return path


def test_unknown_repo_rejected(cli_app: typer.Typer, config_file: Path) -> None:
    """Test --repos only accepts tracked repos."""
    result = runner.invoke(cli_app, ["--repos", "moltbot,nope", "--config", str(config_file)])

    assert result.exit_code == 2
    assert "nope" in result.output


def test_unhandled_failure_exits_non_zero(cli_app: typer.Typer, config_file: Path) -> None:
    """Test fatal errors print a diagnostic and exit 1."""
    with patch("repo_radar.cli.async_run", side_effect=PermissionError("state dir is read-only")):
        result = runner.invoke(cli_app, ["--config", str(config_file)])

    assert result.exit_code == 1
    assert "Radar failed: PermissionError: state dir is read-only" in result.output


def test_run_writes_report_policy_and_history(
    cli_app: typer.Typer, config_file: Path, tmp_path: Path
) -> None:
    """Test a successful run end to end with stubbed backends."""
    hits = [RawHit(
        title="moltbot 2.0 release",
        url="https://github.com/acme/moltbot/releases/tag/v2",
        snippet="",
        backend="exa",
    )]
    output = tmp_path / "out" / "radar.md"

    with patch("repo_radar.cli.ExaSearch") as exa_class, patch("repo_radar.cli.SearxngSearch") as searx_class:
        exa_class.return_value.name = "exa"
        exa_class.return_value.search = AsyncMock(
            side_effect=lambda query, num_results: hits if query.startswith("moltbot") else []
        )
        searx_class.return_value.name = "searxng"
        searx_class.return_value.search = AsyncMock(return_value=[])

        result = runner.invoke(
            cli_app, ["--repos", "moltbot", "--config", str(config_file), "--output", str(output)]
        )

    assert result.exit_code == 0, result.output
    assert (tmp_path / "state" / "policy.yaml").exists()
    assert "https://github.com/acme/moltbot/releases/tag/v2" in output.read_text(encoding="utf-8")
    history = (tmp_path / "state" / "history.jsonl").read_text(encoding="utf-8")
    assert history.count("\n") == 1


def test_dry_run_skips_history(cli_app: typer.Typer, config_file: Path, tmp_path: Path) -> None:
    """Test --dry-run writes the report but no history."""
    with patch("repo_radar.cli.ExaSearch") as exa_class, patch("repo_radar.cli.SearxngSearch") as searx_class:
        exa_class.return_value.name = "exa"
        exa_class.return_value.search = AsyncMock(return_value=[])
        searx_class.return_value.name = "searxng"
        searx_class.return_value.search = AsyncMock(return_value=[])

        result = runner.invoke(cli_app, ["--config", str(config_file), "--dry-run"])

    assert result.exit_code == 0, result.output
    reports = list((tmp_path / "reports").glob("*_radar.md"))
    assert len(reports) == 1
    assert "No new items found" in reports[0].read_text(encoding="utf-8")
    assert not (tmp_path / "state" / "history.jsonl").exists()
