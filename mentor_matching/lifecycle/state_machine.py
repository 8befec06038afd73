# mentor_matching/lifecycle/state_machine.py
from __future__ import annotations

from typing import Dict, FrozenSet, Union

from ..errors import UnknownStatus
from ..models import ConnectionStatus

Pending = ConnectionStatus.PENDING
Active = ConnectionStatus.ACTIVE
Completed = ConnectionStatus.COMPLETED

# Completed is terminal: a finished pairing is never reopened, a new
# connection is created instead. Pending -> Completed closes a connection
# that never became active.
TRANSITIONS: Dict[ConnectionStatus, FrozenSet[ConnectionStatus]] = {
    Pending: frozenset({Active, Completed}),
    Active: frozenset({Completed}),
    Completed: frozenset(),
}

# States in which ratings may be attached
RATEABLE: FrozenSet[ConnectionStatus] = frozenset({Active, Completed})


def parse_status(value: Union[str, ConnectionStatus]) -> ConnectionStatus:
    """Raises UnknownStatus for anything outside the closed set of statuses."""
    if isinstance(value, ConnectionStatus):
        return value
    text = str(value).strip()
    for status in ConnectionStatus:
        if status.value.lower() == text.lower():
            return status
    raise UnknownStatus(value)


def can_transition(current: ConnectionStatus, new: ConnectionStatus) -> bool:
    return new in TRANSITIONS[current]


def is_rateable(status: ConnectionStatus) -> bool:
    return status in RATEABLE


def is_terminal(status: ConnectionStatus) -> bool:
    return not TRANSITIONS[status]
