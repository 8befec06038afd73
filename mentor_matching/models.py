# mentor_matching/models.py
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional


class ConnectionStatus(str, Enum):
    PENDING = "Pending"
    ACTIVE = "Active"
    COMPLETED = "Completed"

    def __str__(self) -> str:
        return self.value


@dataclass
class Mentor:
    id: int
    name: str
    skills: List[str] = field(default_factory=list)
    hours_per_week: float = 2
    active_connection_count: int = 0   # derived: connections currently Active
    active: bool = True
    avg_rating: Optional[float] = None  # mean historical interaction rating
    email: str = ""
    company: str = ""
    industry: str = ""
    stage_pref: str = "Any"
    account_manager: str = ""

    def __post_init__(self):
        if self.active_connection_count < 0:
            raise ValueError(
                f"Mentor {self.id}: active_connection_count must be >= 0, "
                f"got {self.active_connection_count}."
            )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Startup:
    id: int
    name: str
    needs: List[str] = field(default_factory=list)
    active: bool = True
    industry: str = ""
    stage: str = "Idea"
    account_manager: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Connection:
    id: Optional[int]
    mentor_id: int
    startup_id: int
    status: ConnectionStatus = ConnectionStatus.PENDING
    notes: str = ""
    startup_rating: Optional[int] = None
    mentor_rating: Optional[int] = None
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["status"] = self.status.value
        return d


@dataclass
class MentorInteraction:
    mentor_id: int
    date: str
    startup_id: Optional[int] = None
    type: str = "Meeting"
    description: str = ""
    rating: Optional[int] = None


@dataclass
class MatchResult:
    mentor: Mentor
    match_score: int
    has_capacity: bool
    already_connected: bool
    matching_skills: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Full mentor payload plus the four derived match fields."""
        d = self.mentor.to_dict()
        d.update(
            match_score=self.match_score,
            has_capacity=self.has_capacity,
            already_connected=self.already_connected,
            matching_skills=list(self.matching_skills),
        )
        return d
