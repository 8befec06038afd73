# mentor_matching/errors.py
from __future__ import annotations

from typing import Any, Optional


class MatchingError(Exception):
    """Base class for every error the engine reports to its caller."""


class NotFound(MatchingError, LookupError):
    """A referenced mentor, startup or connection does not exist or is inactive."""

    def __init__(self, kind: str, record_id: Any, reason: str = "not found"):
        self.kind = kind
        self.record_id = record_id
        self.reason = reason
        super().__init__(f"{kind} {record_id!r} {reason}")


class InvalidTransition(MatchingError, ValueError):
    """Requested status change is not an edge of the connection state machine."""

    def __init__(self, connection_id: Any, current: Any, requested: Any, reason: Optional[str] = None):
        self.connection_id = connection_id
        self.current = current
        self.requested = requested
        msg = f"Connection {connection_id!r}: cannot move from {current} to {requested}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class InvalidState(MatchingError, ValueError):
    """Operation is not permitted in the connection's current state."""

    def __init__(self, connection_id: Any, status: Any, operation: str):
        self.connection_id = connection_id
        self.status = status
        self.operation = operation
        super().__init__(
            f"Connection {connection_id!r}: cannot {operation} while {status}"
        )


class InvalidRating(MatchingError, ValueError):
    """Rating value is not an integer inside the accepted bounds."""

    def __init__(self, field: str, value: Any, low: int, high: int):
        self.field = field
        self.value = value
        self.low = low
        self.high = high
        super().__init__(
            f"{field}={value!r} is not an integer between {low} and {high}"
        )


class UnknownStatus(MatchingError, ValueError):
    """Status name outside the closed set Pending / Active / Completed."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Unknown connection status: {value!r}")
