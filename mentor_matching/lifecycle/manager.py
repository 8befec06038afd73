# mentor_matching/lifecycle/manager.py
from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional, Union

from ..config import RATING_MIN, RATING_MAX
from ..errors import InvalidRating, InvalidState, InvalidTransition, UnknownStatus
from ..logger import logger
from ..models import Connection, ConnectionStatus
from .state_machine import can_transition, is_rateable, parse_status


def create(
    mentor_id: int,
    startup_id: int,
    notes: str = "",
    connection_id: Optional[int] = None,
) -> Connection:
    """
    New connection, always Pending. Duplicate pairs are not checked here;
    callers use MatchResult.already_connected for that.
    """
    conn = Connection(
        id=connection_id,
        mentor_id=mentor_id,
        startup_id=startup_id,
        status=ConnectionStatus.PENDING,
        notes=notes or "",
        created_at=datetime.now().isoformat(timespec="seconds"),
    )
    logger.info(
        "Created pending connection {} (mentor {} -> startup {})",
        connection_id, mentor_id, startup_id,
    )
    return conn


def transition(
    connection: Connection,
    new_status: Union[str, ConnectionStatus],
) -> Connection:
    """
    Single authority for status changes. Returns an updated copy; the
    given connection is never modified, so a rejected request leaves it
    exactly as it was.
    """
    try:
        target = parse_status(new_status)
    except UnknownStatus:
        logger.warning(
            "Rejected unknown status {!r} for connection {}", new_status, connection.id
        )
        raise InvalidTransition(
            connection.id, connection.status, new_status, "unknown status"
        ) from None

    if not can_transition(connection.status, target):
        logger.warning(
            "Rejected transition {} -> {} for connection {}",
            connection.status, target, connection.id,
        )
        raise InvalidTransition(connection.id, connection.status, target)

    updated = replace(connection, status=target)
    logger.info(
        "Connection {} moved {} -> {}", connection.id, connection.status, target
    )
    return updated


def validate_rating(field: str, value) -> Optional[int]:
    if value is None:
        return None
    # bool is an int subclass but never a rating
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRating(field, value, RATING_MIN, RATING_MAX)
    if not (RATING_MIN <= value <= RATING_MAX):
        raise InvalidRating(field, value, RATING_MIN, RATING_MAX)
    return value


def rate(
    connection: Connection,
    startup_rating: Optional[int] = None,
    mentor_rating: Optional[int] = None,
) -> Connection:
    """
    Attach ratings to an Active or Completed connection. Omitted ratings
    keep their current value; given ones overwrite it.
    """
    if not is_rateable(connection.status):
        logger.warning(
            "Rejected rating on connection {} in state {}", connection.id, connection.status
        )
        raise InvalidState(connection.id, connection.status, "rate")

    # validate both before touching anything
    sr = validate_rating("startup_rating", startup_rating)
    mr = validate_rating("mentor_rating", mentor_rating)

    changes = {}
    if sr is not None:
        changes["startup_rating"] = sr
    if mr is not None:
        changes["mentor_rating"] = mr

    if not changes:
        return replace(connection)

    logger.info("Connection {} rated: {}", connection.id, changes)
    return replace(connection, **changes)


def update_notes(connection: Connection, notes: str) -> Connection:
    """Notes are free text and editable in every state."""
    return replace(connection, notes=notes or "")
