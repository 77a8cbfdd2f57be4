from datetime import date, timedelta

import pytest

from repo_traffic.errors import InvalidRangeError, NotFoundError
from repo_traffic.models import TrafficSnapshot
from repo_traffic.reconciler import TrafficReconciler
from tests.conftest import FakeStore, day

REPO = "timqian/star-history"


def window(end: date, days: int = 3, count: int = 1) -> list:
    return [day((end - timedelta(days=offset)).isoformat(), count) for offset in range(days, 0, -1)]


def snapshot(on: date, created: str = "2019-01-01", **kwargs) -> TrafficSnapshot:
    return TrafficSnapshot(
        repo=REPO,
        date=on.isoformat(),
        repo_created_at=created,
        views=kwargs.get("views", window(on)),
        clones=kwargs.get("clones", window(on)),
        referrers=[{"referrer": "github.com", "count": 4, "uniques": 2}],
        paths=[{"path": f"/{REPO}", "title": "star-history", "count": 4, "uniques": 2}],
    )


@pytest.fixture
def today(monkeypatch: pytest.MonkeyPatch) -> date:
    fixed = date(2019, 3, 20)
    monkeypatch.setattr("repo_traffic.date_range.utc_today", lambda: fixed)
    return fixed


def test_missing_snapshot_is_not_found(store: FakeStore) -> None:
    with pytest.raises(NotFoundError):
        TrafficReconciler(store).reconcile(REPO)


def test_current_snapshot_is_returned_without_batch_reads(store: FakeStore, today: date) -> None:
    latest = snapshot(today - timedelta(days=1))
    store.put_snapshot(latest)

    result = TrafficReconciler(store).reconcile(REPO)

    assert result == latest
    assert store.batch_calls == []


def test_history_is_merged_oldest_first_without_duplicates(store: FakeStore, today: date) -> None:
    # Three fetches two days apart with overlapping three-day windows
    for fetched in (date(2019, 3, 6), date(2019, 3, 8)):
        store.put_snapshot(snapshot(fetched, views=window(fetched, count=7), clones=window(fetched, count=2)))
    latest = snapshot(date(2019, 3, 10))
    store.put_snapshot(latest)

    result = TrafficReconciler(store).reconcile(REPO)

    assert len(store.batch_calls) == 1
    requested = store.batch_calls[0][1]
    assert requested[0] == "2019-01-02" and requested[-1] == "2019-03-09"
    timestamps = [record.timestamp for record in result.views]
    assert timestamps == [f"2019-03-0{n}" for n in range(3, 10)]
    assert len(set(r.timestamp for r in result.clones)) == len(result.clones)
    # The fetched history comes first, so it wins on overlapping days
    assert result.views[-1] == day("2019-03-09", 1)
    assert [r.count for r in result.views] == [7, 7, 7, 7, 7, 1, 1]
    assert result.referrers == latest.referrers
    assert result.paths == latest.paths


def test_merge_does_not_modify_stored_snapshot(store: FakeStore, today: date) -> None:
    store.put_snapshot(snapshot(date(2019, 3, 8)))
    latest = snapshot(date(2019, 3, 10))
    store.put_snapshot(latest)
    original_views = list(latest.views)

    TrafficReconciler(store).reconcile(REPO)

    assert store.get_latest_snapshot(REPO).views == original_views


def test_batch_failure_returns_nothing(store: FakeStore, today: date) -> None:
    store.put_snapshot(snapshot(date(2019, 3, 10)))
    store.fail_batch = True

    with pytest.raises(RuntimeError):
        TrafficReconciler(store).reconcile(REPO)


def test_snapshot_older_than_repo_is_invalid(store: FakeStore, today: date) -> None:
    store.put_snapshot(snapshot(date(2019, 3, 10), created="2019-03-12"))

    with pytest.raises(InvalidRangeError):
        TrafficReconciler(store).reconcile(REPO)


def test_no_stored_history_keeps_snapshot_series(store: FakeStore, today: date) -> None:
    latest = snapshot(date(2019, 3, 10))
    store.put_snapshot(latest)

    result = TrafficReconciler(store).reconcile(REPO)

    assert result.views == latest.views
    assert result.clones == latest.clones
