#!/usr/bin/env python3
"""
Deduplication of keyed record lists.
"""

import logging
from collections.abc import Mapping
from typing import Any, List, Sequence, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _key_of(record: Any, key: str) -> Any:
    if isinstance(record, Mapping):
        return record[key]
    return getattr(record, key)


def get_unique_list_by(records: Sequence[T], key: str) -> List[T]:
    """
    Keep one record per distinct value of ``key``.

    The first occurrence wins and first occurrences keep their relative
    order. A later duplicate with different data is dropped with a warning,
    since it may carry a revised count.
    """
    kept = {}
    unique = []
    for record in records:
        value = _key_of(record, key)
        if value in kept:
            if kept[value] != record:
                logger.warning(f"Dropping conflicting record for {key}={value}: kept {kept[value]}, dropped {record}")
            continue
        kept[value] = record
        unique.append(record)
    return unique
