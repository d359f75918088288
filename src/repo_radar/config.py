"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_REPOS = {
    "tool-time": "internal tooling/docs/scripts around agent tooling; fast iteration, integration quality",
    "Ong-Lots": "Next.js + Prisma (Postgres) app using LLM SDK; product quality, data correctness, speed, testability, deployment ergonomics",
    "Autarch": "Go monorepo for AI agent dev tools; developer experience, reliability, orchestration workflows, research intel",
    "moltbot": "open-source personal AI assistant + gateway/channels/skills; robustness, security, plugin ecosystem, contributor DX",
    "shadow-work": "ambitious Rust + Tauri grand strategy / moral laboratory sim; simulation scale, performance, correctness, profiling/testing tooling",
    "ong-back": "Chrome extension converting Twitter videos to text; UX/DX, model quality, latency/cost, extension best practices",
    "Intermute": "Go coordination/messaging service for Autarch agents; reliability, observability, API design, security boundaries",
    "tldr-swinton": "token-efficient code analysis tooling; analysis quality, benchmark methodology, language support, agent workflow integration",
    "tuivision": "MCP server for TUI automation/visual testing; devex, stability, compatibility with agent CLI workflows, test reliability",
    "pattern-royale": "Rust backend + web frontend real-time multiplayer CA arena; correctness, performance, networking, rapid iteration",
    "interdoc": "recursive AGENTS.md generator; devex, reliability, compatibility across agent CLIs",
    "interpeer": "cross-AI peer review plugin; devex, correctness of review flows, safe prompt/context handling",
    "Linsenkasten": "MCP server + CLI + web + API for FLUX lenses; product UX, API correctness, schema/contracts, deployment reliability",
}


@dataclass
class PathsConfig:
    """Path settings."""
    state_dir: Path = Path("state")
    output_dir: Path = Path("reports")


@dataclass
class ExaConfig:
    """Exa search API settings."""
    base_url: str = "https://api.exa.ai"
    search_type: str = "fast"
    timeout: float = 30.0
    snippet_chars: int = 800


@dataclass
class SearxngConfig:
    """SearXNG fallback settings (base URL lives in the policy)."""
    timeout: float = 20.0


@dataclass
class Settings:
    """Application settings."""

    # API keys (from environment only)
    exa_api_key: Optional[str] = None

    # Config sections
    paths: PathsConfig = field(default_factory=PathsConfig)
    exa: ExaConfig = field(default_factory=ExaConfig)
    searxng: SearxngConfig = field(default_factory=SearxngConfig)
    repos: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_REPOS))

    @property
    def state_dir(self) -> Path:
        return self.paths.state_dir

    @property
    def output_dir(self) -> Path:
        return self.paths.output_dir

    @property
    def policy_path(self) -> Path:
        return self.paths.state_dir / "policy.yaml"

    @property
    def history_path(self) -> Path:
        return self.paths.state_dir / "history.jsonl"

    @property
    def tracked_repos(self) -> list[str]:
        return list(self.repos)


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings(exa_api_key=os.getenv("EXA_API_KEY") or None)

    if "paths" in config:
        for key, value in config["paths"].items():
            setattr(settings.paths, key, Path(value))

    if "exa" in config:
        for key, value in config["exa"].items():
            setattr(settings.exa, key, value)

    if "searxng" in config:
        for key, value in config["searxng"].items():
            setattr(settings.searxng, key, value)

    if config.get("repos"):
        # A plain list declares repos without purposes
        repos = config["repos"]
        if isinstance(repos, list):
            repos = {name: "" for name in repos}
        settings.repos = {str(name): purpose or "" for name, purpose in repos.items()}

    return settings
