# mentor_matching/matching/matcher.py
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set

from ..config import HOURS_PER_ACTIVE_CONNECTION, MAX_MATCH_SCORE
from ..errors import NotFound
from ..logger import logger
from ..models import Connection, ConnectionStatus, MatchResult, Mentor, Startup
from .tags import count_distinct_needs, matched_needs, matching_skills

# Connections in these states mean the pair is already linked
OPEN_STATUSES = (ConnectionStatus.PENDING, ConnectionStatus.ACTIVE)


def score_overlap(overlap: int, num_needs: int) -> int:
    """
    Percentage of needs covered, rounded half-up to a whole number.
    No needs -> 0.
    """
    if num_needs <= 0:
        return 0
    # integer half-up rounding of overlap / num_needs * 100
    score = (2 * overlap * MAX_MATCH_SCORE + num_needs) // (2 * num_needs)
    return max(0, min(MAX_MATCH_SCORE, score))


def has_capacity(mentor: Mentor) -> bool:
    """Heuristic admission signal; strictly greater, so equality means full."""
    return mentor.hours_per_week > mentor.active_connection_count * HOURS_PER_ACTIVE_CONNECTION


def connected_mentor_ids(startup_id, connections: Iterable[Connection]) -> Set:
    return {
        c.mentor_id
        for c in connections
        if c.startup_id == startup_id and c.status in OPEN_STATUSES
    }


def score_mentor(mentor: Mentor, needs: Sequence[str], connected: Set) -> MatchResult:
    overlap = len(matched_needs(mentor.skills, needs))
    return MatchResult(
        mentor=mentor,
        match_score=score_overlap(overlap, count_distinct_needs(needs)),
        has_capacity=has_capacity(mentor),
        already_connected=mentor.id in connected,
        matching_skills=matching_skills(mentor.skills, needs),
    )


def rank_results(results: Sequence[MatchResult]) -> List[MatchResult]:
    # sorted() is stable, so remaining ties keep input order
    return sorted(results, key=lambda r: (-r.match_score, not r.has_capacity))


def match(
    startup: Optional[Startup],
    mentor_pool: Iterable[Mentor],
    existing_connections: Iterable[Connection] = (),
) -> List[MatchResult]:
    """
    Score every active mentor in `mentor_pool` against the startup's needs
    and return them ranked: score descending, mentors with capacity first
    among equal scores.

    Mentors are expected to carry an up-to-date active_connection_count.
    Nothing is filtered apart from inactive mentors; capacity and existing
    connections are reported as flags.
    """
    if startup is None:
        raise NotFound("Startup", None)
    if not startup.active:
        raise NotFound("Startup", startup.id, "is inactive")

    connected = connected_mentor_ids(startup.id, existing_connections)
    scored = [
        score_mentor(m, startup.needs, connected)
        for m in mentor_pool
        if m.active
    ]
    ranked = rank_results(scored)

    logger.debug(
        "Matched startup {} ({} needs) against {} mentors; top score {}",
        startup.id,
        len(startup.needs),
        len(ranked),
        ranked[0].match_score if ranked else None,
    )
    return ranked
