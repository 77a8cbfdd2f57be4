#!/usr/bin/env python3
"""
Data models for GitHub repository traffic.

Contains the core data classes used throughout the application. Serialized
storage rows are turned into these types here and nowhere else.
"""

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


def _day(value: str) -> str:
    """Truncate an ISO timestamp string to its YYYY-MM-DD day."""
    return str(value)[:10]


@dataclass
class DayRecord:
    """One day's view or clone activity: total count and unique visitors."""
    timestamp: str
    count: int
    uniques: int

    def __str__(self) -> str:
        return f"{self.count} {self.timestamp} {self.uniques}"

    @classmethod
    def from_github_entry(cls, entry: Dict[str, Any]) -> 'DayRecord':
        """Create a DayRecord from a GitHub API response entry."""
        return cls(_day(entry["timestamp"]), int(entry["count"]), int(entry["uniques"]))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _parse_records(raw: Optional[str]) -> List[DayRecord]:
    if not raw:
        return []
    return [DayRecord.from_github_entry(entry) for entry in json.loads(raw)]


def _dump_records(records: List[DayRecord]) -> str:
    return json.dumps([record.to_dict() for record in records])


@dataclass
class TrafficSnapshot:
    """
    The traffic data stored by one fetch of a repository.

    views and clones hold day records; referrers and paths are GitHub's
    14-day popularity lists and are passed through untouched.
    """
    repo: str
    date: str
    repo_created_at: str
    views: List[DayRecord] = field(default_factory=list)
    clones: List[DayRecord] = field(default_factory=list)
    referrers: List[Dict[str, Any]] = field(default_factory=list)
    paths: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'TrafficSnapshot':
        """Create a snapshot from a stored row whose list fields are JSON strings."""
        return cls(
            repo=row["repo"],
            date=_day(row["date"]),
            repo_created_at=_day(row["repo_created_at"]),
            views=_parse_records(row.get("views")),
            clones=_parse_records(row.get("clones")),
            referrers=json.loads(row.get("referrers") or "[]"),
            paths=json.loads(row.get("paths") or "[]"),
        )

    def to_row(self) -> Dict[str, Any]:
        """Serialize into the stored row shape."""
        return {
            "repo": self.repo,
            "date": self.date,
            "repo_created_at": self.repo_created_at,
            "views": _dump_records(self.views),
            "clones": _dump_records(self.clones),
            "referrers": json.dumps(self.referrers),
            "paths": json.dumps(self.paths),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Presentation payload."""
        return {
            "date": self.date,
            "repoCreatedAt": self.repo_created_at,
            "views": [record.to_dict() for record in self.views],
            "clones": [record.to_dict() for record in self.clones],
            "referrers": self.referrers,
            "paths": self.paths,
        }


@dataclass
class StoredDayRecords:
    """Views and clones stored by a historical fetch on a given date."""
    date: str
    views: List[DayRecord]
    clones: List[DayRecord]

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'StoredDayRecords':
        return cls(
            date=_day(row["date"]),
            views=_parse_records(row.get("views")),
            clones=_parse_records(row.get("clones")),
        )


@dataclass
class RepoRegistration:
    """A repository added to a user's dashboard."""
    username: str
    repo: str


@dataclass
class Account:
    """A GitHub account and the access token used to read its traffic."""
    username: str
    access_token: str = field(repr=False)
    display_name: Optional[str] = None
    email: Optional[str] = None
    photo: Optional[str] = None
