#!/usr/bin/env python3
"""
Persistence for traffic snapshots, accounts and repository registrations.

TrafficStore describes the operations the rest of the application relies
on; DatabaseManager implements them on SQLite.
"""

import logging
import sqlite3
from datetime import datetime
from typing import List, Optional, Sequence

from .models import Account, RepoRegistration, StoredDayRecords, TrafficSnapshot


class TrafficStore:
    """Base interface for traffic storage backends."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        pass

    def setup_database(self):
        raise NotImplementedError

    def get_latest_snapshot(self, repo: str) -> Optional[TrafficSnapshot]:
        raise NotImplementedError

    def batch_get_day_records(self, repo: str, dates: Sequence[str]) -> List[StoredDayRecords]:
        raise NotImplementedError

    def put_snapshot(self, snapshot: TrafficSnapshot):
        raise NotImplementedError

    def get_account(self, username: str) -> Optional[Account]:
        raise NotImplementedError

    def put_account(self, account: Account):
        raise NotImplementedError

    def put_registration(self, registration: RepoRegistration):
        raise NotImplementedError

    def get_registrations_for_user(self, username: str) -> List[RepoRegistration]:
        raise NotImplementedError

    def get_all_registrations(self) -> List[RepoRegistration]:
        raise NotImplementedError


class DatabaseManager(TrafficStore):
    """Handles all database operations for traffic data on SQLite."""

    # SQLite's default limit on bound parameters is 999
    BATCH_SIZE = 500

    def __init__(self, db_path: str):
        """
        Initialize the database manager.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self.conn = None
        self.logger = logging.getLogger(__name__)

    def __enter__(self):
        self.conn = sqlite3.connect(self.db_path)
        self.conn.row_factory = sqlite3.Row
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.conn:
            self.conn.close()
            self.conn = None

    def setup_database(self):
        """Create the necessary tables if they don't exist."""
        try:
            with self.conn:
                self.conn.execute("""
                    CREATE TABLE IF NOT EXISTS traffic (
                        repo TEXT NOT NULL,
                        date TEXT NOT NULL,
                        repo_created_at TEXT NOT NULL,
                        views TEXT NOT NULL,
                        clones TEXT NOT NULL,
                        referrers TEXT NOT NULL,
                        paths TEXT NOT NULL,
                        PRIMARY KEY (repo, date)
                    )
                """)
                self.conn.execute("""
                    CREATE TABLE IF NOT EXISTS users (
                        username TEXT PRIMARY KEY,
                        access_token TEXT NOT NULL,
                        display_name TEXT,
                        email TEXT,
                        photo TEXT
                    )
                """)
                self.conn.execute("""
                    CREATE TABLE IF NOT EXISTS repos (
                        username TEXT NOT NULL,
                        repo TEXT NOT NULL,
                        added_at TEXT NOT NULL,
                        PRIMARY KEY (username, repo)
                    )
                """)
            self.logger.info("Database setup complete.")
        except sqlite3.Error as e:
            self.logger.error(f"Database setup failed: {e}")
            raise

    def _execute_query(self, query: str, params: tuple = (), fetch_all: bool = True):
        """Execute a read query with consistent error handling."""
        try:
            with self.conn:
                cursor = self.conn.execute(query, params)
                if fetch_all:
                    return cursor.fetchall()
                return cursor.fetchone()
        except sqlite3.Error as e:
            self.logger.error(f"Database query failed: {e}")
            raise

    def _execute_write(self, query: str, params: tuple, description: str):
        try:
            with self.conn:
                self.conn.execute(query, params)
        except sqlite3.Error as e:
            self.logger.error(f"Failed to {description}: {e}")
            raise

    def get_latest_snapshot(self, repo: str) -> Optional[TrafficSnapshot]:
        """Get the most recently stored snapshot for a repository."""
        row = self._execute_query(
            "SELECT * FROM traffic WHERE repo = ? ORDER BY date DESC LIMIT 1",
            (repo,),
            fetch_all=False
        )
        return TrafficSnapshot.from_row(dict(row)) if row else None

    def batch_get_day_records(self, repo: str, dates: Sequence[str]) -> List[StoredDayRecords]:
        """Get the views and clones stored on each of the given dates."""
        dates = [str(d)[:10] for d in dates]
        results = []
        for start in range(0, len(dates), self.BATCH_SIZE):
            chunk = dates[start:start + self.BATCH_SIZE]
            placeholders = ", ".join("?" for _ in chunk)
            rows = self._execute_query(
                f"SELECT date, views, clones FROM traffic WHERE repo = ? AND date IN ({placeholders})",
                (repo, *chunk)
            )
            results.extend(StoredDayRecords.from_row(dict(row)) for row in rows)
        self.logger.info(f"Read {len(results)} stored days of {len(dates)} requested for {repo}")
        return results

    def put_snapshot(self, snapshot: TrafficSnapshot):
        """Insert or replace the snapshot stored for a repository on its date."""
        row = snapshot.to_row()
        self._execute_write(
            "INSERT OR REPLACE INTO traffic (repo, date, repo_created_at, views, clones, referrers, paths) "
            "VALUES (?, ?, ?, ?, ?, ?, ?)",
            (row["repo"], row["date"], row["repo_created_at"], row["views"],
             row["clones"], row["referrers"], row["paths"]),
            f"store traffic for {snapshot.repo}"
        )
        self.logger.info(f"Stored traffic snapshot for {snapshot.repo} on {snapshot.date}")

    def get_account(self, username: str) -> Optional[Account]:
        row = self._execute_query(
            "SELECT username, access_token, display_name, email, photo FROM users WHERE username = ?",
            (username,),
            fetch_all=False
        )
        return Account(**dict(row)) if row else None

    def put_account(self, account: Account):
        self._execute_write(
            "INSERT OR REPLACE INTO users (username, access_token, display_name, email, photo) "
            "VALUES (?, ?, ?, ?, ?)",
            (account.username, account.access_token, account.display_name, account.email, account.photo),
            f"store account {account.username}"
        )
        self.logger.info(f"Stored account {account.username}")

    def put_registration(self, registration: RepoRegistration):
        """Register a repository for a user; registering twice keeps one entry."""
        self._execute_write(
            "INSERT OR REPLACE INTO repos (username, repo, added_at) VALUES (?, ?, ?)",
            (registration.username, registration.repo, datetime.now().isoformat()),
            f"register {registration.repo} for {registration.username}"
        )
        self.logger.info(f"Added {registration.repo} to repos of {registration.username}")

    def get_registrations_for_user(self, username: str) -> List[RepoRegistration]:
        rows = self._execute_query(
            "SELECT username, repo FROM repos WHERE username = ? ORDER BY added_at, repo",
            (username,)
        )
        return [RepoRegistration(row["username"], row["repo"]) for row in rows]

    def get_all_registrations(self) -> List[RepoRegistration]:
        rows = self._execute_query("SELECT username, repo FROM repos ORDER BY repo, username")
        return [RepoRegistration(row["username"], row["repo"]) for row in rows]
