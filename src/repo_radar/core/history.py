"""Append-only history of selected items and the seen index built from it."""

import json
from collections import Counter, deque
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

from repo_radar.core.entities import HistoryRecord, ScoredCandidate
from repo_radar.core.urls import normalize_url

DEFAULT_MAX_RECORDS = 50_000


class HistoryLog:
    """Selected radar items stored as JSON lines, one record per line."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def read_records(self, max_records: int = DEFAULT_MAX_RECORDS) -> list[HistoryRecord]:
        """Read the most recent records.

        Lines that are not valid UTF-8 JSON or lack a URL are skipped.

        Args:
            max_records: Only the last N lines of the log are considered
        """
        if not self.path.exists():
            return []

        with open(self.path, "rb") as f:
            lines = deque((line for line in f if line.strip()), maxlen=max_records)

        records = []
        skipped = 0
        for line in lines:
            try:
                records.append(HistoryRecord.from_dict(json.loads(line.decode("utf-8"))))
            except (TypeError, ValueError):
                skipped += 1

        if skipped:
            print(f"⚠️  Warning: skipped {skipped} malformed history line(s) in {self.path}")

        return records

    def seen_urls(self, max_records: int = DEFAULT_MAX_RECORDS) -> set[str]:
        """Normalized URLs of every item selected by a previous run."""
        return {normalize_url(record.url) for record in self.read_records(max_records)}

    def append(
        self,
        candidates: Iterable[ScoredCandidate],
        timestamp: Optional[datetime] = None,
    ) -> int:
        """Append one record per selected candidate.

        Returns:
            Number of records written
        """
        ts = (timestamp or datetime.now(timezone.utc)).isoformat()
        records = [HistoryRecord.from_candidate(c, ts) for c in candidates]
        if not records:
            return 0

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            for record in records:
                f.write(json.dumps(record.to_dict(), ensure_ascii=False) + "\n")

        return len(records)

    def get_stats(self) -> dict:
        """Get statistics about recorded items."""
        records = self.read_records()
        by_repo = Counter(record.repo for record in records)
        return {
            "total_records": len(records),
            "by_repo": dict(by_repo.most_common()),
        }
