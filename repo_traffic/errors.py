#!/usr/bin/env python3
"""
Error kinds raised by the traffic reconciliation and registration flows.
"""


class TrafficError(Exception):
    """Base class for errors surfaced to callers."""
    kind = "ERROR"


class InvalidRangeError(TrafficError):
    """Raised when a repository creation date falls after its snapshot date."""
    kind = "INVALID_RANGE"


class NotFoundError(TrafficError):
    """Raised when a snapshot, account or registration does not exist."""
    kind = "NOT_FOUND"


class BadTokenError(TrafficError):
    """Raised when a credential token cannot be decoded."""
    kind = "BAD_TOKEN"


class TokenMismatchError(TrafficError):
    """Raised when a token belongs to a different user than the one named."""
    kind = "TOKEN_MISMATCH"


class PermissionDeniedError(TrafficError):
    """Raised when the GitHub access token cannot read a repository's traffic."""
    kind = "PERMISSION_DENIED"
