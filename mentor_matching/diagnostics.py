# mentor_matching/diagnostics.py
from __future__ import annotations

from collections import Counter
from typing import Any, Dict, List, Tuple

from .config import HOURS_PER_ACTIVE_CONNECTION, TOP_MENTORS_DEFAULT
from .lifecycle.registry import ConnectionRegistry
from .matching.matcher import OPEN_STATUSES, has_capacity
from .models import ConnectionStatus


def analyze_mentor_load(registry: ConnectionRegistry) -> Dict[str, Any]:
    """
    Check the active mentor pool against the capacity heuristic
    (hours_per_week > active * HOURS_PER_ACTIVE_CONNECTION).

    Returns a dict with:
      - 'ok': bool  (every active mentor still has capacity)
      - 'messages': list[str] (human-readable diagnostics)
      - 'suggestion': str (summary)
      - 'over_capacity': List[Tuple[mentor_id, active_count, hours_per_week]]
      - 'idle': List[mentor_id]  (no Active or Pending connection at all)
      - 'pending_on_full': List[Tuple[connection_id, mentor_id]]
            Pending connections whose mentor has no capacity left; activating
            them would overload the mentor further.
    """
    messages: List[str] = []
    pool = registry.mentor_pool()
    connections = registry.list_connections()

    open_by_mentor = Counter(c.mentor_id for c in connections if c.status in OPEN_STATUSES)

    over_capacity: List[Tuple[int, int, float]] = []
    for m in pool:
        if not has_capacity(m):
            over_capacity.append((m.id, m.active_connection_count, m.hours_per_week))
            messages.append(
                f"Mentor {m.id} ({m.name}) has {m.active_connection_count} active "
                f"connections but only {m.hours_per_week:g} h/week; needs more than "
                f"{m.active_connection_count * HOURS_PER_ACTIVE_CONNECTION:g} h/week "
                f"to take on more."
            )

    full_ids = {mid for mid, _, _ in over_capacity}
    pending_on_full = [
        (c.id, c.mentor_id)
        for c in connections
        if c.status is ConnectionStatus.PENDING and c.mentor_id in full_ids
    ]
    for cid, mid in pending_on_full:
        messages.append(
            f"Pending connection {cid} is waiting on mentor {mid}, who has no capacity left."
        )

    idle = [m.id for m in pool if open_by_mentor[m.id] == 0]

    ok = not over_capacity
    if ok:
        suggestion = "All active mentors have capacity for new connections."
    else:
        suggestion = (
            "Some mentors are at capacity: prefer mentors flagged with capacity "
            "when creating connections, or complete finished engagements first."
        )
    if idle:
        suggestion += f" {len(idle)} mentor(s) have no open connections."

    return {
        "ok": ok,
        "messages": messages,
        "suggestion": suggestion,
        "over_capacity": over_capacity,
        "idle": idle,
        "pending_on_full": pending_on_full,
    }


def summarize_connections(
    registry: ConnectionRegistry,
    top_n: int = TOP_MENTORS_DEFAULT,
) -> Dict[str, Any]:
    """Headline numbers for the mentoring pipeline."""
    connections = registry.list_connections()
    by_status = Counter(c.status for c in connections)
    pool = registry.mentor_pool()
    mentor_names = {m.id: m.name for m in registry.mentors()}

    # stable sort keeps registry order among equal counts
    top = sorted(pool, key=lambda m: m.active_connection_count, reverse=True)[:top_n]
    pending = [c for c in connections if c.status is ConnectionStatus.PENDING][:top_n]

    return {
        "mentors": len(pool),
        "startups": sum(1 for s in registry.startups() if s.active),
        "by_status": {s.value: by_status.get(s, 0) for s in ConnectionStatus},
        "top_mentors": [
            {"id": m.id, "name": m.name, "industry": m.industry,
             "connections": m.active_connection_count}
            for m in top
        ],
        "pending_connections": [
            {**c.to_dict(), "mentor_name": mentor_names.get(c.mentor_id)}
            for c in pending
        ],
    }
