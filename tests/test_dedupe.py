import logging

import pytest

from repo_traffic.dedupe import get_unique_list_by
from tests.conftest import day


def test_first_occurrence_wins_and_order_is_kept() -> None:
    records = [day("2019-03-02", 5), day("2019-03-01", 2), day("2019-03-02", 9), day("2019-03-03", 1)]

    unique = get_unique_list_by(records, "timestamp")

    assert unique == [day("2019-03-02", 5), day("2019-03-01", 2), day("2019-03-03", 1)]


@pytest.mark.parametrize("records", [[], [day("2019-03-01")]])
def test_empty_and_single_inputs_pass_through(records: list) -> None:
    assert get_unique_list_by(records, "timestamp") == records


def test_dedupe_is_idempotent() -> None:
    records = [day("2019-03-01"), day("2019-03-01"), day("2019-03-02"), day("2019-03-01", 4)]

    once = get_unique_list_by(records, "timestamp")

    assert get_unique_list_by(once, "timestamp") == once


def test_works_on_mappings() -> None:
    records = [{"path": "/a", "count": 1}, {"path": "/b", "count": 2}, {"path": "/a", "count": 3}]
    assert get_unique_list_by(records, "path") == [{"path": "/a", "count": 1}, {"path": "/b", "count": 2}]


def test_conflicting_duplicate_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="repo_traffic.dedupe"):
        get_unique_list_by([day("2019-03-01", 3), day("2019-03-01", 3)], "timestamp")
        assert not caplog.records

        get_unique_list_by([day("2019-03-01", 3), day("2019-03-01", 8)], "timestamp")

    assert "2019-03-01" in caplog.text
