"""Candidate scoring with canonical-source guardrails."""

import math
import re
from typing import AbstractSet, Optional

from repo_radar.core.entities import ScoredCandidate, SubScores
from repo_radar.core.policy import Policy
from repo_radar.core.urls import domain_of, normalize_url

MAX_SUB_SCORE = 5
DIVERSITY_PLACEHOLDER = 3
FALLBACK_PENALTY = 5

FORGE_ITEM_RE = re.compile(r"github\.com/[^/?#]+/[^/?#]+/(releases|pull|issues)\b")
RELEASES_PATH_RE = re.compile(r"/releases\b")

HIGH_IMPACT_RE = re.compile(
    r"(breaking|deprecat|cve-|security|vulnerab|\brca\b|postmortem|outage)", re.IGNORECASE
)
MEDIUM_IMPACT_RE = re.compile(
    r"(release|changelog|benchmark|performance|latency|profil)", re.IGNORECASE
)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def is_canonical_url(policy: Policy, canonical: str, url: str) -> bool:
    """Check whether url lives under ``<forge_host>/<canonical>``."""
    prefix = f"{policy.forge_host}/{canonical}".lower().strip("/")
    location = re.sub(r"^[a-z][a-z0-9+.-]*://", "", url.lower())
    if location.startswith("www."):
        location = location[4:]
    return location == prefix or location.startswith(prefix + "/") or location.startswith(prefix + "?")


def score_relevance(policy: Policy, repo: str, text: str, url: str) -> int:
    repo_key = repo.lower()
    canonical = policy.canonical_sources.get(repo, "").lower()

    if canonical and (canonical in text or f"{policy.forge_host}/{canonical}" in url.lower()):
        return 5
    if repo_key in text:
        return 5
    if repo_key.replace("-", " ") in text:
        return 4
    return 1


def score_authority(policy: Policy, url: str, domain: str) -> int:
    if FORGE_ITEM_RE.search(url):
        return 5
    if RELEASES_PATH_RE.search(url) or policy.is_authority_host(domain):
        return 4
    return 2


def score_impact(text: str) -> int:
    if HIGH_IMPACT_RE.search(text):
        return 5
    if MEDIUM_IMPACT_RE.search(text):
        return 4
    return 2


def weighted_total(policy: Policy, scores: SubScores, domain: str) -> int:
    """Weighted sum on a 0..100 scale, scaled by the domain multiplier."""
    w = policy.weights
    max_raw = w.total() * MAX_SUB_SCORE
    if max_raw <= 0:
        return 0

    raw = (
        w.novelty * scores.novelty
        + w.relevance * scores.relevance
        + w.authority * scores.authority
        + w.impact * scores.impact
        + w.diversity * scores.diversity
    )
    total = round_half_up(raw / max_raw * 100)
    return round_half_up(total * policy.multiplier_for(domain))


def fallback_penalty(policy: Policy, backend: str, authority: int) -> int:
    """Penalty keeping low-authority meta-search hits below primary results."""
    if backend == policy.fallback_backend and authority < 4:
        return FALLBACK_PENALTY
    return 0


def score_candidate(
    policy: Policy,
    seen: AbstractSet[str],
    repo: str,
    url: str,
    title: str,
    snippet: str,
    backend: str,
) -> Optional[ScoredCandidate]:
    """
    Score a raw discovery hit for a tracked repo.

    Args:
        policy: Active radar policy
        seen: Normalized URLs selected by previous runs
        repo: Tracked repo the hit was discovered for
        url: Hit URL as returned by the backend
        title: Hit title
        snippet: Hit snippet/excerpt
        backend: Tag of the backend that produced the hit

    Returns:
        Scored candidate, or None when a strict repo's canonical-source
        guardrail rejects the URL
    """
    nurl = normalize_url(url)
    domain = domain_of(nurl)
    text = f"{title or ''} {snippet or ''}".lower()

    novelty = 0 if nurl in seen else MAX_SUB_SCORE
    relevance = score_relevance(policy, repo, text, nurl)
    authority = score_authority(policy, nurl, domain)

    canonical = policy.canonical_sources.get(repo)
    if canonical:
        on_canonical = is_canonical_url(policy, canonical, nurl)
        if policy.is_strict(repo) and not on_canonical:
            return None
        if domain == policy.forge_host and not on_canonical:
            # Same forge, different project: keep it but demote it
            relevance = min(relevance, 1)
            authority = min(authority, 2)

    scores = SubScores(
        novelty=novelty,
        relevance=relevance,
        authority=authority,
        impact=score_impact(text),
        diversity=DIVERSITY_PLACEHOLDER,
    )

    total = weighted_total(policy, scores, domain)
    total = max(0, total - fallback_penalty(policy, backend, authority))

    tags = []
    if novelty == MAX_SUB_SCORE:
        tags.append("new-to-radar")
    if authority >= 4:
        tags.append("high-signal")
    if domain == policy.forge_host:
        tags.append(policy.forge_host.split(".")[0])
    if backend:
        tags.append(backend)

    return ScoredCandidate(
        url=nurl,
        title=title or url,
        repo=repo,
        backend=backend,
        domain=domain,
        snippet=snippet or "",
        scores=scores,
        total=total,
        tags=tuple(tags),
    )
