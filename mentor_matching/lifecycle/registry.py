# mentor_matching/lifecycle/registry.py
from __future__ import annotations

import threading
from collections import Counter, defaultdict
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Union

from ..errors import InvalidState, InvalidTransition, NotFound, UnknownStatus
from ..logger import logger
from ..matching.matcher import match
from ..models import (
    Connection,
    ConnectionStatus,
    MatchResult,
    Mentor,
    MentorInteraction,
    Startup,
)
from . import manager
from .state_machine import is_rateable, parse_status


def average_rating(interactions: Iterable[MentorInteraction]) -> Optional[float]:
    """Mean of the non-null ratings, one decimal; None when nothing is rated."""
    ratings = [i.rating for i in interactions if i.rating is not None]
    if not ratings:
        return None
    return round(sum(ratings) / len(ratings), 1)


class ConnectionRegistry:
    """
    In-memory snapshot of mentors, startups and connections.

    Every status change goes through `transition`, which keeps the
    per-mentor Active count in step with the connection table. Writes to one
    connection are serialized by a per-connection lock; readers get copies
    taken under the registry lock, so a match never sees half an update.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._conn_locks: Dict[int, threading.Lock] = {}
        self._mentors: Dict[int, Mentor] = {}
        self._startups: Dict[int, Startup] = {}
        self._connections: Dict[int, Connection] = {}
        self._interactions: List[MentorInteraction] = []
        self._active_counts: Counter = Counter()
        self._next_id = 1

    # ------------------------------------------------------------------
    # records
    # ------------------------------------------------------------------
    def add_mentor(self, mentor: Mentor) -> Mentor:
        with self._lock:
            self._mentors[mentor.id] = mentor
        return mentor

    def add_startup(self, startup: Startup) -> Startup:
        with self._lock:
            self._startups[startup.id] = startup
        return startup

    def add_interaction(self, interaction: MentorInteraction) -> MentorInteraction:
        manager.validate_rating("rating", interaction.rating)
        with self._lock:
            if interaction.mentor_id not in self._mentors:
                raise NotFound("Mentor", interaction.mentor_id)
            self._interactions.append(interaction)
        return interaction

    def add_connection(self, connection: Connection) -> Connection:
        """
        Load an existing connection record (e.g. from storage). Inactive
        mentors and startups are allowed here since history outlives them;
        status and ratings are held to the same rules as live updates.
        """
        connection = replace(connection, status=parse_status(connection.status))
        manager.validate_rating("startup_rating", connection.startup_rating)
        manager.validate_rating("mentor_rating", connection.mentor_rating)
        rated = connection.startup_rating is not None or connection.mentor_rating is not None
        if rated and not is_rateable(connection.status):
            raise InvalidState(connection.id, connection.status, "carry ratings")
        with self._lock:
            self._require_pair(connection.mentor_id, connection.startup_id)
            if connection.id is None:
                connection = replace(connection, id=self._next_id)
            self._next_id = max(self._next_id, connection.id + 1)
            old = self._connections.get(connection.id)
            if old is not None and old.status is ConnectionStatus.ACTIVE:
                self._active_counts[old.mentor_id] -= 1
            self._connections[connection.id] = connection
            if connection.status is ConnectionStatus.ACTIVE:
                self._active_counts[connection.mentor_id] += 1
        return connection

    def get_mentor(self, mentor_id) -> Mentor:
        with self._lock:
            try:
                mentor = self._mentors[mentor_id]
            except KeyError:
                raise NotFound("Mentor", mentor_id) from None
            return replace(mentor, active_connection_count=self._active_counts[mentor_id])

    def get_startup(self, startup_id) -> Startup:
        with self._lock:
            try:
                return self._startups[startup_id]
            except KeyError:
                raise NotFound("Startup", startup_id) from None

    def get_connection(self, connection_id) -> Connection:
        with self._lock:
            try:
                return self._connections[connection_id]
            except KeyError:
                raise NotFound("Connection", connection_id) from None

    def _require_pair(self, mentor_id, startup_id, active_only: bool = False) -> None:
        mentor = self._mentors.get(mentor_id)
        if mentor is None:
            raise NotFound("Mentor", mentor_id)
        startup = self._startups.get(startup_id)
        if startup is None:
            raise NotFound("Startup", startup_id)
        if active_only and not mentor.active:
            raise NotFound("Mentor", mentor_id, "is inactive")
        if active_only and not startup.active:
            raise NotFound("Startup", startup_id, "is inactive")

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def create_connection(self, mentor_id, startup_id, notes: str = "") -> Connection:
        with self._lock:
            self._require_pair(mentor_id, startup_id, active_only=True)
            conn = manager.create(mentor_id, startup_id, notes, connection_id=self._next_id)
            self._next_id += 1
            self._connections[conn.id] = conn
        return conn

    def transition(
        self,
        connection_id,
        new_status: Union[str, ConnectionStatus],
        expected_status: Union[str, ConnectionStatus, None] = None,
    ) -> Connection:
        """
        Validated status change. With `expected_status`, the change only
        applies if the stored record is still in that state; a writer that
        acted on a stale read gets InvalidTransition.
        """
        with self._lock_for(connection_id):
            current = self.get_connection(connection_id)
            if expected_status is not None:
                try:
                    expected = parse_status(expected_status)
                except UnknownStatus:
                    raise InvalidTransition(
                        connection_id, current.status, new_status,
                        f"unknown expected status {expected_status!r}",
                    ) from None
                if current.status is not expected:
                    raise InvalidTransition(
                        connection_id, current.status, new_status,
                        f"expected {expected}, record changed concurrently",
                    )
            updated = manager.transition(current, new_status)
            with self._lock:
                self._connections[connection_id] = updated
                self._apply_count_delta(current, updated)
        return updated

    def _lock_for(self, connection_id) -> threading.Lock:
        with self._lock:
            return self._conn_locks.setdefault(connection_id, threading.Lock())

    def _apply_count_delta(self, before: Connection, after: Connection) -> None:
        was_active = before.status is ConnectionStatus.ACTIVE
        is_active = after.status is ConnectionStatus.ACTIVE
        if was_active and not is_active:
            self._active_counts[before.mentor_id] -= 1
        elif is_active and not was_active:
            self._active_counts[after.mentor_id] += 1

    def rate(self, connection_id, startup_rating=None, mentor_rating=None) -> Connection:
        with self._lock_for(connection_id):
            current = self.get_connection(connection_id)
            updated = manager.rate(current, startup_rating, mentor_rating)
            with self._lock:
                self._connections[connection_id] = updated
        return updated

    def update_notes(self, connection_id, notes: str) -> Connection:
        with self._lock_for(connection_id):
            updated = manager.update_notes(self.get_connection(connection_id), notes)
            with self._lock:
                self._connections[connection_id] = updated
        return updated

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------
    def list_connections(self, status: Union[str, ConnectionStatus, None] = None) -> List[Connection]:
        """Newest first, optionally only one status (UnknownStatus otherwise)."""
        wanted = parse_status(status) if status else None
        with self._lock:
            conns = list(self._connections.values())
        if wanted is not None:
            conns = [c for c in conns if c.status is wanted]
        return sorted(conns, key=lambda c: (c.created_at or "", c.id), reverse=True)

    def connections_for_startup(self, startup_id) -> List[Connection]:
        with self._lock:
            return [c for c in self._connections.values() if c.startup_id == startup_id]

    def mentors(self) -> List[Mentor]:
        with self._lock:
            return [self.get_mentor(mid) for mid in self._mentors]

    def startups(self) -> List[Startup]:
        with self._lock:
            return list(self._startups.values())

    def active_connection_count(self, mentor_id) -> int:
        with self._lock:
            if mentor_id not in self._mentors:
                raise NotFound("Mentor", mentor_id)
            return self._active_counts[mentor_id]

    def mentor_pool(self) -> List[Mentor]:
        """Active mentors with current Active counts and average ratings."""
        with self._lock:
            by_mentor = defaultdict(list)
            for i in self._interactions:
                by_mentor[i.mentor_id].append(i)
            return [
                replace(
                    m,
                    active_connection_count=self._active_counts[m.id],
                    avg_rating=average_rating(by_mentor[m.id]),
                )
                for m in self._mentors.values()
                if m.active
            ]

    def match_for_startup(self, startup_id) -> List[MatchResult]:
        with self._lock:
            startup = self.get_startup(startup_id)
            pool = self.mentor_pool()
            connections = self.connections_for_startup(startup_id)
        return match(startup, pool, connections)

    def recount(self) -> Dict[int, int]:
        """Rebuild the Active-count view from the connection table."""
        with self._lock:
            counts = Counter(
                c.mentor_id
                for c in self._connections.values()
                if c.status is ConnectionStatus.ACTIVE
            )
            if counts != +self._active_counts:
                logger.warning("Active connection counts were stale; rebuilt from connections")
            self._active_counts = counts
            return dict(counts)
