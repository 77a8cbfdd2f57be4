#!/usr/bin/env python3
"""
GitHub traffic fetcher.

Reads a repository's traffic from the GitHub API and stores it as a
snapshot dated today.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from .config import DEFAULT_GITHUB_API_URL
from .date_range import utc_today
from .models import DayRecord, TrafficSnapshot
from .storage import TrafficStore


class GitHubTrafficFetcher:
    """Fetches repository traffic from GitHub and persists it."""

    def __init__(self, store: TrafficStore, api_url: str = DEFAULT_GITHUB_API_URL,
                 session: Optional[requests.Session] = None, timeout: int = 30):
        """
        Initialize the fetcher.

        Args:
            store: Where fetched snapshots are written
            api_url: Base URL of the GitHub REST API
            session: HTTP session to use (a new one if None)
            timeout: Per-request timeout in seconds
        """
        self.store = store
        self.api_url = api_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def _get(self, path: str, token: str) -> Any:
        url = f"{self.api_url}{path}"
        headers = {
            "Authorization": f"token {token}",
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "repo-traffic/1.0",
        }
        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            self.logger.error(f"Error fetching {path}: {e}")
            raise

    def _fetch_day_records(self, repo_path: str, kind: str, token: str) -> List[DayRecord]:
        data = self._get(f"/repos/{repo_path}/traffic/{kind}", token)
        return [DayRecord.from_github_entry(entry) for entry in data.get(kind, [])]

    def _fetch_popular(self, repo_path: str, kind: str, token: str) -> List[Dict[str, Any]]:
        return list(self._get(f"/repos/{repo_path}/traffic/popular/{kind}", token))

    def fetch(self, repo_path: str, token: str) -> TrafficSnapshot:
        """Read a repository's current traffic without storing it."""
        self.logger.info(f"Fetching traffic for {repo_path}")
        metadata = self._get(f"/repos/{repo_path}", token)
        return TrafficSnapshot(
            repo=repo_path,
            date=utc_today().isoformat(),
            repo_created_at=metadata["created_at"][:10],
            views=self._fetch_day_records(repo_path, "views", token),
            clones=self._fetch_day_records(repo_path, "clones", token),
            referrers=self._fetch_popular(repo_path, "referrers", token),
            paths=self._fetch_popular(repo_path, "paths", token),
        )

    def fetch_and_store(self, repo_path: str, token: str) -> TrafficSnapshot:
        """
        Fetch a repository's traffic and store it as today's snapshot.

        Every request completes before the single write, so a failed fetch
        stores nothing.

        Raises:
            requests.RequestException: On HTTP or network failure
        """
        snapshot = self.fetch(repo_path, token)
        self.store.put_snapshot(snapshot)
        self.logger.info(
            f"Stored {len(snapshot.views)} view and {len(snapshot.clones)} clone records for {repo_path}"
        )
        return snapshot
