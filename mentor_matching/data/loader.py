# mentor_matching/data/loader.py
from __future__ import annotations

import os
from typing import List, Optional, Sequence

import pandas as pd

from ..config import DEFAULT_HOURS_PER_WEEK, DEFAULT_STAGE_PREF
from ..lifecycle.registry import ConnectionRegistry
from ..lifecycle.state_machine import parse_status
from ..matching.tags import parse_tags
from ..models import Connection, MatchResult, Mentor, MentorInteraction, Startup


def _read(path: str) -> pd.DataFrame:
    df = pd.read_csv(path)
    df.columns = [c.strip() for c in df.columns]
    return df


def _opt(value, cast=None):
    """pandas NaN -> None."""
    if value is None or pd.isna(value):
        return None
    return cast(value) if cast else value


def _flag(value, default: bool = True) -> bool:
    if value is None or pd.isna(value):
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y")
    return bool(value)


def _text(value) -> str:
    return "" if value is None or pd.isna(value) else str(value)


def load_mentors(path: str) -> List[Mentor]:
    """
    Reads a CSV with at least `id,name`; optional columns:
        skills (JSON array or ';'-separated), hours_per_week, active,
        email, company, industry, stage_pref, account_manager
    """
    df = _read(path)
    mentors = []
    for row in df.to_dict(orient="records"):
        hours = _opt(row.get("hours_per_week"), float)
        mentors.append(
            Mentor(
                id=int(row["id"]),
                name=_text(row["name"]),
                skills=parse_tags(row.get("skills")),
                hours_per_week=DEFAULT_HOURS_PER_WEEK if hours is None else hours,
                active=_flag(row.get("active")),
                email=_text(row.get("email")),
                company=_text(row.get("company")),
                industry=_text(row.get("industry")),
                stage_pref=_text(row.get("stage_pref")) or DEFAULT_STAGE_PREF,
                account_manager=_text(row.get("account_manager")),
            )
        )
    return mentors


def load_startups(path: str) -> List[Startup]:
    df = _read(path)
    return [
        Startup(
            id=int(row["id"]),
            name=_text(row["name"]),
            needs=parse_tags(row.get("needs")),
            active=_flag(row.get("active")),
            industry=_text(row.get("industry")),
            stage=_text(row.get("stage")) or "Idea",
            account_manager=_text(row.get("account_manager")),
        )
        for row in df.to_dict(orient="records")
    ]


def load_connections(path: str) -> List[Connection]:
    df = _read(path)
    return [
        Connection(
            id=_opt(row.get("id"), int),
            mentor_id=int(row["mentor_id"]),
            startup_id=int(row["startup_id"]),
            status=parse_status(_text(row.get("status")) or "Pending"),
            notes=_text(row.get("notes")),
            startup_rating=_opt(row.get("startup_rating"), int),
            mentor_rating=_opt(row.get("mentor_rating"), int),
            created_at=_opt(row.get("created_at"), str),
        )
        for row in df.to_dict(orient="records")
    ]


def load_interactions(path: str) -> List[MentorInteraction]:
    df = _read(path)
    return [
        MentorInteraction(
            mentor_id=int(row["mentor_id"]),
            date=_text(row["date"]),
            startup_id=_opt(row.get("startup_id"), int),
            type=_text(row.get("type")) or "Meeting",
            description=_text(row.get("description")),
            rating=_opt(row.get("rating"), int),
        )
        for row in df.to_dict(orient="records")
    ]


def load_registry(
    mentors_csv: str,
    startups_csv: str,
    connections_csv: Optional[str] = None,
    interactions_csv: Optional[str] = None,
) -> ConnectionRegistry:
    """Build a registry from CSV snapshots; optional files may be missing."""
    registry = ConnectionRegistry()
    for m in load_mentors(mentors_csv):
        registry.add_mentor(m)
    for s in load_startups(startups_csv):
        registry.add_startup(s)
    if connections_csv and os.path.exists(connections_csv):
        for c in load_connections(connections_csv):
            registry.add_connection(c)
    if interactions_csv and os.path.exists(interactions_csv):
        for i in load_interactions(interactions_csv):
            registry.add_interaction(i)
    return registry


def results_to_frame(results: Sequence[MatchResult]) -> pd.DataFrame:
    """Ranked results as a DataFrame for console inspection."""
    rows = [
        {
            "mentor_id": r.mentor.id,
            "mentor": r.mentor.name,
            "score": r.match_score,
            "capacity": r.has_capacity,
            "connected": r.already_connected,
            "active": r.mentor.active_connection_count,
            "hours": r.mentor.hours_per_week,
            "avg_rating": r.mentor.avg_rating,
            "matching_skills": ", ".join(r.matching_skills),
        }
        for r in results
    ]
    columns = [
        "mentor_id", "mentor", "score", "capacity", "connected",
        "active", "hours", "avg_rating", "matching_skills",
    ]
    return pd.DataFrame(rows, columns=columns)
