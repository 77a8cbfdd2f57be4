"""
GitHub Repository Traffic History

Tracks per-repository view, clone, referrer and path traffic fetched from the
GitHub API and merges the stored history into one gap-free daily series.
"""

__version__ = "1.0.0"

from .date_range import compute_missing_dates
from .dedupe import get_unique_list_by
from .errors import (
    BadTokenError,
    InvalidRangeError,
    NotFoundError,
    PermissionDeniedError,
    TokenMismatchError,
    TrafficError,
)
from .models import Account, DayRecord, RepoRegistration, StoredDayRecords, TrafficSnapshot
from .reconciler import TrafficReconciler
from .registrar import RepoRegistrar

__all__ = [
    "compute_missing_dates",
    "get_unique_list_by",
    "TrafficReconciler",
    "RepoRegistrar",
    "DayRecord",
    "TrafficSnapshot",
    "StoredDayRecords",
    "RepoRegistration",
    "Account",
    "TrafficError",
    "InvalidRangeError",
    "NotFoundError",
    "BadTokenError",
    "TokenMismatchError",
    "PermissionDeniedError",
]
