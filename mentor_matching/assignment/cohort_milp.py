# mentor_matching/assignment/cohort_milp.py
from __future__ import annotations

import math
import sys
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pulp

from ..config import (
    HOURS_PER_ACTIVE_CONNECTION,
    MAX_MENTORS_PER_STARTUP_DEFAULT,
    MIN_COHORT_SCORE_DEFAULT,
)
from ..logger import logger
from ..matching.matcher import match
from ..models import Connection, Mentor, Startup


def remaining_slots(mentor: Mentor, limit: Optional[int] = None) -> int:
    """
    How many new connections the mentor can take if each one is only
    handed out while the mentor still has capacity, i.e. the number of
    counts c >= active with hours > c * 1.5. Unbounded hours give `limit`
    (or sys.maxsize).
    """
    hours = mentor.hours_per_week
    active = mentor.active_connection_count
    if math.isnan(hours) or hours <= 0:
        return 0
    if math.isinf(hours):
        return sys.maxsize if limit is None else limit
    slots = max(0, math.ceil(hours / HOURS_PER_ACTIVE_CONNECTION) - active)
    # float division can land one above an exact multiple
    if slots and not hours > (active + slots - 1) * HOURS_PER_ACTIVE_CONNECTION:
        slots -= 1
    return slots if limit is None else min(slots, limit)


def assign_cohort(
    startups: Sequence[Startup],
    mentor_pool: Sequence[Mentor],
    connections: Iterable[Connection] = (),
    max_mentors_per_startup: int = MAX_MENTORS_PER_STARTUP_DEFAULT,
    min_score: int = MIN_COHORT_SCORE_DEFAULT,
) -> Tuple[str, List[Tuple[int, int, int]]]:
    """
    Propose new mentor -> startup pairings for a whole cohort at once.

    MILP:
      y[s, m] = 1 if mentor m is proposed for startup s

      maximize   sum match_score[s, m] * y[s, m]
      subject to
        ∀s: sum_m y[s, m] <= max_mentors_per_startup
        ∀m: sum_s y[s, m] <= remaining_slots(m)

    Only pairs with match_score >= min_score that are not already
    connected (Pending/Active) become variables. Inactive startups are
    skipped. Nothing is created; the proposals are for an operator.

    Returns (status, [(startup_id, mentor_id, match_score), ...]).
    """
    connections = list(connections)
    mentors = [m for m in mentor_pool if m.active]
    # a mentor is proposed at most once per startup
    slots: Dict[int, int] = {m.id: remaining_slots(m, limit=len(startups)) for m in mentors}

    score: Dict[Tuple[int, int], int] = {}
    for st in startups:
        if not st.active:
            continue
        for r in match(st, mentors, connections):
            if r.already_connected or r.match_score < min_score:
                continue
            if slots[r.mentor.id] <= 0:
                continue
            score[(st.id, r.mentor.id)] = r.match_score

    if not score:
        logger.info("Cohort assignment: no eligible mentor/startup pairs")
        return "Optimal", []

    prob = pulp.LpProblem("Cohort_Mentor_Assignment", pulp.LpMaximize)

    y: Dict[Tuple[int, int], pulp.LpVariable] = {
        (s_id, m_id): pulp.LpVariable(f"y_{s_id}_{m_id}", lowBound=0, upBound=1, cat="Binary")
        for (s_id, m_id) in score
    }

    prob += pulp.lpSum(score[key] * var for key, var in y.items())

    for s_id in {s for s, _ in y}:
        prob += (
            pulp.lpSum(var for (s, _), var in y.items() if s == s_id) <= max_mentors_per_startup,
            f"startup_cap_{s_id}",
        )
    for m_id in {m for _, m in y}:
        prob += (
            pulp.lpSum(var for (_, m), var in y.items() if m == m_id) <= slots[m_id],
            f"mentor_cap_{m_id}",
        )

    solver = pulp.PULP_CBC_CMD(msg=False)
    prob.solve(solver)
    status = pulp.LpStatus[prob.status]

    proposals: List[Tuple[int, int, int]] = []
    if status in ("Optimal", "Feasible"):
        for (s_id, m_id), var in y.items():
            val = var.varValue
            if val is not None and val > 0.5:
                proposals.append((s_id, m_id, score[(s_id, m_id)]))

    proposals.sort(key=lambda p: (p[0], -p[2], p[1]))
    logger.info(
        "Cohort assignment: status={}, {} proposal(s), total score {}",
        status, len(proposals), sum(p[2] for p in proposals),
    )
    return status, proposals
