#!/usr/bin/env python3
"""
Reconciliation of a repository's latest snapshot with its stored history.
"""

import logging
from dataclasses import replace
from typing import List

from .date_range import compute_missing_dates
from .dedupe import get_unique_list_by
from .errors import NotFoundError
from .models import DayRecord, TrafficSnapshot
from .storage import TrafficStore


class TrafficReconciler:
    """Builds the full view and clone series for a repository."""

    def __init__(self, store: TrafficStore):
        self.store = store
        self.logger = logging.getLogger(__name__)

    def reconcile(self, repo_path: str) -> TrafficSnapshot:
        """
        Merge the latest snapshot with the days stored before it.

        Referrers and paths always come from the latest snapshot alone.
        Nothing is written back.

        Raises:
            NotFoundError: If no snapshot exists for the repository
            InvalidRangeError: If the snapshot predates the repository
        """
        snapshot = self.store.get_latest_snapshot(repo_path)
        if snapshot is None:
            raise NotFoundError(f"No traffic data for {repo_path}")

        missing = compute_missing_dates(snapshot.repo_created_at, snapshot.date)
        if missing is None:
            self.logger.debug(f"Snapshot for {repo_path} is current, no history needed")
            return snapshot

        stored = self.store.batch_get_day_records(repo_path, [d.isoformat() for d in missing])

        views: List[DayRecord] = list(snapshot.views)
        clones: List[DayRecord] = list(snapshot.clones)
        # Prepend newest first so the oldest fetch ends up in front
        for day in sorted(stored, key=lambda s: s.date, reverse=True):
            views[:0] = day.views
            clones[:0] = day.clones

        self.logger.info(f"Merged {len(stored)} stored days into traffic for {repo_path}")
        return replace(
            snapshot,
            views=self._merge(views),
            clones=self._merge(clones),
        )

    @staticmethod
    def _merge(records: List[DayRecord]) -> List[DayRecord]:
        unique = get_unique_list_by(records, "timestamp")
        return sorted(unique, key=lambda record: record.timestamp)
