from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from repo_traffic.models import Account, DayRecord, RepoRegistration, StoredDayRecords, TrafficSnapshot
from repo_traffic.storage import TrafficStore


class FakeStore(TrafficStore):
    """In-memory traffic store that records every call."""

    def __init__(self) -> None:
        self.snapshots: Dict[Tuple[str, str], TrafficSnapshot] = {}
        self.accounts: Dict[str, Account] = {}
        self.registrations: List[RepoRegistration] = []
        self.batch_calls: List[Tuple[str, List[str]]] = []
        self.fail_batch = False

    def setup_database(self) -> None:
        pass

    def get_latest_snapshot(self, repo: str) -> Optional[TrafficSnapshot]:
        dates = sorted(d for (r, d) in self.snapshots if r == repo)
        return self.snapshots[(repo, dates[-1])] if dates else None

    def batch_get_day_records(self, repo: str, dates: Sequence[str]) -> List[StoredDayRecords]:
        self.batch_calls.append((repo, list(dates)))
        if self.fail_batch:
            raise RuntimeError("batch read failed")
        return [
            StoredDayRecords(date=d, views=self.snapshots[(repo, d)].views, clones=self.snapshots[(repo, d)].clones)
            for d in dates
            if (repo, d) in self.snapshots
        ]

    def put_snapshot(self, snapshot: TrafficSnapshot) -> None:
        self.snapshots[(snapshot.repo, snapshot.date)] = snapshot

    def get_account(self, username: str) -> Optional[Account]:
        return self.accounts.get(username)

    def put_account(self, account: Account) -> None:
        self.accounts[account.username] = account

    def put_registration(self, registration: RepoRegistration) -> None:
        if registration not in self.registrations:
            self.registrations.append(registration)

    def get_registrations_for_user(self, username: str) -> List[RepoRegistration]:
        return [r for r in self.registrations if r.username == username]

    def get_all_registrations(self) -> List[RepoRegistration]:
        return list(self.registrations)


def day(timestamp: str, count: int = 1, uniques: int = 1) -> DayRecord:
    return DayRecord(timestamp=timestamp, count=count, uniques=uniques)


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()
