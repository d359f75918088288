"""Radar policy: weights, domain multipliers, guardrails and limits."""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

POLICY_VERSION = 1


class PolicyError(ValueError):
    """Raised when policy content violates its invariants."""


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class Weights:
    """Weight of each signal in the total score."""

    novelty: float = 30
    relevance: float = 30
    authority: float = 20
    impact: float = 15
    diversity: float = 5

    def total(self) -> float:
        return self.novelty + self.relevance + self.authority + self.impact + self.diversity


@dataclass
class Limits:
    """Numeric limits for discovery and selection."""

    results_per_query: int = 8
    max_urls_per_repo: int = 6
    max_items_per_repo: int = 3
    min_repos_represented: int = 6
    per_repo_queries: int = 4
    cross_repo_queries: int = 2
    # Repos with fewer novel candidates than this get a fallback query
    fallback_min_novel: int = 2
    # Overall report size; None leaves it bounded only by the per-repo cap
    max_total_items: Optional[int] = None


@dataclass
class QueryTemplates:
    """Search query templates; ``{repo}`` is replaced with the repo name."""

    per_repo: list[str] = field(default_factory=lambda: [
        "{repo} release notes",
        "{repo} changelog",
        "{repo} breaking changes",
        "{repo} security advisory",
        "{repo} performance regression",
        "{repo} benchmark",
    ])
    cross_repo: list[str] = field(default_factory=lambda: [
        "Rust perf profiling flamegraph 2026",
        "Tauri performance profiling 2026",
        "Go OpenTelemetry best practices 2026",
        "MCP server testing visual regression TUI",
    ])


@dataclass
class Policy:
    """Versioned scoring and selection policy."""

    version: int = POLICY_VERSION
    exploration_rate: float = 0.12
    weights: Weights = field(default_factory=Weights)
    domain_multipliers: dict[str, float] = field(default_factory=lambda: {
        "github.com": 1.15,
        "docs.rs": 1.10,
        "crates.io": 1.05,
        "go.dev": 1.05,
        "developer.chrome.com": 1.10,
    })
    authority_hosts: list[str] = field(default_factory=lambda: [
        "docs.",
        "developer.",
        "go.dev",
        "docs.rs",
        "crates.io",
        "pkg.go.dev",
        "npmjs.com",
        "pypi.org",
    ])
    forge_host: str = "github.com"
    canonical_sources: dict[str, str] = field(default_factory=dict)
    strict_repos: list[str] = field(default_factory=list)
    query_templates: QueryTemplates = field(default_factory=QueryTemplates)
    limits: Limits = field(default_factory=Limits)
    searxng_base_url: str = "http://localhost:8081"
    fallback_backend: str = "searxng"

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check invariants.

        Raises:
            PolicyError: If a weight or multiplier is not a non-negative
                number or a limit is not a positive integer.
        """
        for name, value in asdict(self.weights).items():
            if not _is_number(value):
                raise PolicyError(f"Weight {name} must be a number, got {value!r}")
            if value < 0:
                raise PolicyError(f"Weight {name} must be non-negative, got {value}")

        if not isinstance(self.domain_multipliers, dict):
            raise PolicyError(
                f"domain_multipliers must be a mapping, got {self.domain_multipliers!r}"
            )
        for domain, value in self.domain_multipliers.items():
            if not _is_number(value):
                raise PolicyError(f"Multiplier for {domain} must be a number, got {value!r}")
            if value < 0:
                raise PolicyError(f"Multiplier for {domain} must be non-negative, got {value}")

        for name, value in asdict(self.limits).items():
            if name == "max_total_items" and value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise PolicyError(f"Limit {name} must be an integer, got {value!r}")
            minimum = 0 if name == "fallback_min_novel" else 1
            if value < minimum:
                raise PolicyError(f"Limit {name} must be >= {minimum}, got {value}")

    def multiplier_for(self, domain: str) -> float:
        return self.domain_multipliers.get(domain, 1.0)

    def is_authority_host(self, domain: str) -> bool:
        """Check domain against the documentation/registry host list.

        Entries ending with a dot (``docs.``) match as host prefixes, other
        entries match the host itself or any of its subdomains.
        """
        for host in self.authority_hosts:
            if host.endswith("."):
                if domain.startswith(host):
                    return True
            elif domain == host or domain.endswith("." + host):
                return True
        return False

    def is_strict(self, repo: str) -> bool:
        return repo in self.strict_repos

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Policy":
        """Build policy from stored mapping, filling missing keys with defaults."""
        data = dict(data or {})
        try:
            weights = Weights(**(data.pop("weights", None) or {}))
            limits = Limits(**(data.pop("limits", None) or {}))
            templates = QueryTemplates(**(data.pop("query_templates", None) or {}))
            return cls(weights=weights, limits=limits, query_templates=templates, **data)
        except TypeError as e:
            raise PolicyError(f"Unknown policy field: {e}") from e


class PolicyStore:
    """Policy persisted as a single YAML document."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Policy:
        """Load the policy, writing defaults first if none exists yet."""
        if not self.path.exists():
            policy = Policy()
            self.save(policy)
            print(f"📝 Default policy written to {self.path}")
            return policy

        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise PolicyError(f"Policy file {self.path} must contain a mapping")

        return Policy.from_dict(data)

    def save(self, policy: Policy) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.dump(policy.to_dict(), f, allow_unicode=True, default_flow_style=False, sort_keys=False)
