"""Core domain layer."""

from repo_radar.core.entities import CROSS_REPO, HistoryRecord, RawHit, ScoredCandidate, SubScores
from repo_radar.core.history import HistoryLog
from repo_radar.core.interfaces import ReportGenerator, SearchBackend
from repo_radar.core.policy import Limits, Policy, PolicyError, PolicyStore, QueryTemplates, Weights
from repo_radar.core.scorer import score_candidate
from repo_radar.core.selector import dedupe_by_url, select_top
from repo_radar.core.urls import domain_of, normalize_url

__all__ = [
    "CROSS_REPO",
    "RawHit",
    "SubScores",
    "ScoredCandidate",
    "HistoryRecord",
    "HistoryLog",
    "Policy",
    "PolicyError",
    "PolicyStore",
    "Weights",
    "Limits",
    "QueryTemplates",
    "SearchBackend",
    "ReportGenerator",
    "score_candidate",
    "dedupe_by_url",
    "select_top",
    "normalize_url",
    "domain_of",
]
