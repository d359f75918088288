"""Diversity-constrained top-N selection over scored candidates."""

from collections import Counter
from typing import Iterable, Sequence

from repo_radar.core.entities import ScoredCandidate
from repo_radar.core.policy import Policy


def _rank_key(candidate: ScoredCandidate) -> tuple[int, str]:
    return (-candidate.total, candidate.url)


def dedupe_by_url(candidates: Iterable[ScoredCandidate]) -> list[ScoredCandidate]:
    """Keep the highest-scoring candidate per URL; the first one wins ties."""
    best: dict[str, ScoredCandidate] = {}
    for candidate in candidates:
        current = best.get(candidate.url)
        if current is None or candidate.total > current.total:
            best[candidate.url] = candidate
    return list(best.values())


def select_top(
    policy: Policy,
    candidates: Sequence[ScoredCandidate],
    tracked_repos: Sequence[str],
) -> list[ScoredCandidate]:
    """
    Pick the final items for a radar run.

    Candidates are admitted greedily by descending total under the per-repo
    cap and the optional ``max_total_items`` limit. When fewer than
    ``min_repos_represented`` repos made it in, tracked repos that are
    missing get their best candidate swapped in for the lowest-scoring item
    of a repo holding more than one slot. This is a
    greedy repair, not an optimal assignment: it stops once the threshold is
    met or no repo has a spare slot, and never removes a repo's only item.

    Args:
        policy: Policy providing the per-repo cap and diversity threshold
        candidates: Candidates already deduplicated by URL
        tracked_repos: Repos eligible for diversity repair, in priority order

    Returns:
        Selected candidates sorted by descending total, ties by URL
    """
    max_per_repo = policy.limits.max_items_per_repo
    min_repos = policy.limits.min_repos_represented
    max_total = policy.limits.max_total_items

    ranked = sorted(candidates, key=_rank_key)

    chosen: list[ScoredCandidate] = []
    per_repo: Counter[str] = Counter()
    for candidate in ranked:
        if max_total is not None and len(chosen) >= max_total:
            break
        if per_repo[candidate.repo] >= max_per_repo:
            continue
        chosen.append(candidate)
        per_repo[candidate.repo] += 1

    def represented() -> int:
        return sum(1 for count in per_repo.values() if count > 0)

    if represented() < min_repos:
        chosen_urls = {c.url for c in chosen}
        for repo in tracked_repos:
            if represented() >= min_repos:
                break
            if per_repo[repo] > 0:
                continue

            replacement = next(
                (c for c in ranked if c.repo == repo and c.url not in chosen_urls), None
            )
            if replacement is None:
                continue

            evictable = [c for c in chosen if per_repo[c.repo] > 1]
            if not evictable:
                break

            # Last in rank order: lowest total, largest URL on ties
            evicted = max(evictable, key=_rank_key)
            chosen.remove(evicted)
            chosen_urls.discard(evicted.url)
            per_repo[evicted.repo] -= 1

            chosen.append(replacement)
            chosen_urls.add(replacement.url)
            per_repo[replacement.repo] += 1

    return sorted(chosen, key=_rank_key)
