from datetime import date, datetime, timedelta

import pytest

from repo_traffic.date_range import compute_missing_dates, to_day
from repo_traffic.errors import InvalidRangeError

TODAY = date(2019, 3, 20)


def test_missing_dates_cover_days_strictly_between_creation_and_snapshot() -> None:
    missing = compute_missing_dates("2019-01-01", "2019-03-10", today=TODAY)

    assert len(missing) == 67
    assert missing[0] == date(2019, 1, 2)
    assert missing[-1] == date(2019, 3, 9)
    assert all(later - earlier == timedelta(days=1) for earlier, later in zip(missing, missing[1:]))


@pytest.mark.parametrize("snapshot", [TODAY, TODAY - timedelta(days=1), TODAY + timedelta(days=1)])
def test_recent_snapshot_needs_no_history(snapshot: date) -> None:
    assert compute_missing_dates(date(2018, 6, 1), snapshot, today=TODAY) is None


def test_snapshot_two_days_old_is_a_gap() -> None:
    missing = compute_missing_dates("2019-03-10", TODAY - timedelta(days=2), today=TODAY)
    assert missing == [date(2019, 3, 11), date(2019, 3, 12), date(2019, 3, 13), date(2019, 3, 14),
                       date(2019, 3, 15), date(2019, 3, 16), date(2019, 3, 17)]


def test_time_of_day_is_ignored() -> None:
    missing = compute_missing_dates("2019-01-01T23:59:59Z", datetime(2019, 1, 4, 0, 30), today=TODAY)
    assert missing == [date(2019, 1, 2), date(2019, 1, 3)]


@pytest.mark.parametrize("created, snapshot", [("2019-01-01", "2019-01-01"), ("2019-01-01", "2019-01-02")])
def test_adjacent_or_equal_dates_have_nothing_between(created: str, snapshot: str) -> None:
    assert compute_missing_dates(created, snapshot, today=TODAY) == []


def test_creation_after_snapshot_is_invalid() -> None:
    with pytest.raises(InvalidRangeError):
        compute_missing_dates("2019-03-11", "2019-03-10", today=TODAY)


def test_missing_dates_stay_inside_bounds() -> None:
    created, snapshot = date(2018, 12, 25), date(2019, 2, 3)
    missing = compute_missing_dates(created, snapshot, today=TODAY)

    assert len(set(missing)) == len(missing)
    assert missing == sorted(missing)
    assert all(created < d < snapshot for d in missing)


def test_to_day_accepts_strings_dates_and_datetimes() -> None:
    assert to_day("2019-03-12T10:00:00+02:00") == date(2019, 3, 12)
    assert to_day(datetime(2019, 3, 12, 23, 0)) == date(2019, 3, 12)
    assert to_day(date(2019, 3, 12)) == date(2019, 3, 12)
