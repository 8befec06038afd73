# mentor_matching/data/sample_dataset.py
from __future__ import annotations
from typing import List, Tuple

from ..lifecycle.registry import ConnectionRegistry
from ..models import Connection, ConnectionStatus, Mentor, MentorInteraction, Startup


def sample_mentors() -> List[Mentor]:
    return [
        Mentor(
            id=1, name="Sarah Chen", company="TechVentures LLC", industry="Technology",
            skills=["Product Development", "Tech Strategy", "Fundraising",
                    "Team Building", "Product-Market Fit"],
            hours_per_week=4, stage_pref="Early Stage", account_manager="Harry",
        ),
        Mentor(
            id=2, name="Michael Johnson", company="Capital Group", industry="Finance",
            skills=["Financial Planning", "Fundraising", "Investor Relations",
                    "Accounting", "Cap Table", "Financial Modeling"],
            hours_per_week=3, account_manager="Dana",
        ),
        Mentor(
            id=3, name="Lisa Rodriguez", company="BrandHouse", industry="Marketing",
            skills=["Marketing", "Brand Strategy", "Social Media", "PR",
                    "Customer Acquisition", "Content Strategy"],
            hours_per_week=5, account_manager="Harry",
        ),
        Mentor(
            id=4, name="David Park", company="Park & Associates", industry="Legal",
            skills=["Legal", "Contracts", "IP Protection", "Compliance",
                    "Operations", "Incorporation"],
            hours_per_week=2, stage_pref="Idea", account_manager="Dana",
        ),
        Mentor(
            id=5, name="Jennifer Williams", company="BD Solutions",
            industry="Business Development",
            skills=["Sales", "Business Development", "Partnerships",
                    "Customer Acquisition", "Enterprise", "B2B Strategy"],
            hours_per_week=4, stage_pref="Growth Stage", account_manager="Harry",
        ),
        Mentor(
            id=6, name="Robert Kim", company="OperationsCo", industry="Operations",
            skills=["Operations", "Supply Chain", "Process Improvement",
                    "Team Building", "Financial Planning", "Vendor Management"],
            hours_per_week=3, stage_pref="Growth Stage", account_manager="Dana",
        ),
    ]


def sample_startups() -> List[Startup]:
    return [
        Startup(id=1, name="AgriTech Iowa", industry="AgTech", stage="Pre-Launch",
                needs=["Fundraising", "Marketing", "Customer Acquisition"],
                account_manager="Harry"),
        Startup(id=2, name="HealthSync", industry="HealthTech", stage="Early Stage",
                needs=["Product Development", "Investor Relations", "Legal"],
                account_manager="Dana"),
        Startup(id=3, name="EduLeap", industry="EdTech", stage="Idea",
                needs=["Marketing", "Financial Planning", "Product Development"],
                account_manager="Harry"),
        Startup(id=4, name="GreenOps", industry="CleanTech", stage="Growth Stage",
                needs=["Operations", "Fundraising", "Business Development", "Enterprise"],
                account_manager="Dana"),
        Startup(id=5, name="BrewLocal", industry="Marketplace", stage="Early Stage",
                needs=["Sales", "Marketing", "Financial Planning"],
                account_manager="Harry"),
    ]


# (mentor_id, startup_id, status, notes)
_SAMPLE_CONNECTIONS: List[Tuple[int, int, ConnectionStatus, str]] = [
    (1, 2, ConnectionStatus.ACTIVE, "Product roadmap prioritization and Series A prep. Meeting bi-weekly."),
    (2, 1, ConnectionStatus.ACTIVE, "3-year financial model and investor deck."),
    (3, 5, ConnectionStatus.ACTIVE, "Go-to-market strategy and brand positioning for multi-state expansion."),
    (5, 4, ConnectionStatus.COMPLETED, "Enterprise sales coaching for the Fortune 500 pilot. Engagement complete."),
    (6, 4, ConnectionStatus.ACTIVE, "Scaling operations infrastructure ahead of Series A deployment."),
    (4, 3, ConnectionStatus.PENDING, "Incorporation and IP protection. Awaiting founder response."),
    (2, 5, ConnectionStatus.PENDING, "Financial modeling workshop requested. Mentor reviewing capacity."),
    (1, 1, ConnectionStatus.PENDING, "Product strategy session requested."),
]


# (mentor_id, startup_id, date, type, rating)
_SAMPLE_INTERACTIONS = [
    (1, 2, "2025-12-15", "Meeting", 5),
    (1, 2, "2026-01-20", "Meeting", 5),
    (1, 2, "2026-02-10", "Email", 5),
    (2, 1, "2025-11-30", "Meeting", 4),
    (2, 1, "2026-01-08", "Meeting", 4),
    (3, 5, "2025-10-10", "Meeting", 5),
    (3, 5, "2025-11-18", "Review", 4),
    (5, 4, "2025-08-20", "Meeting", 5),
    (5, 4, "2025-09-15", "Meeting", 5),
    (6, 4, "2026-01-10", "Meeting", 4),
    (6, 4, "2026-02-12", "Meeting", 5),
    (4, None, "2025-09-01", "Event", None),
    (2, None, "2025-10-15", "Event", None),
    (3, None, "2025-10-15", "Event", None),
    (1, None, "2025-12-08", "Event", None),
]


def make_sample_registry() -> ConnectionRegistry:
    """
    Registry pre-populated with a small incubator snapshot:
    6 mentors, 5 startups, 8 connections and the mentors' interaction log.
    """
    registry = ConnectionRegistry()
    for m in sample_mentors():
        registry.add_mentor(m)
    for s in sample_startups():
        registry.add_startup(s)
    for cid, (mid, sid, status, notes) in enumerate(_SAMPLE_CONNECTIONS, start=1):
        registry.add_connection(
            Connection(id=cid, mentor_id=mid, startup_id=sid, status=status, notes=notes)
        )
    for mid, sid, date, kind, rating in _SAMPLE_INTERACTIONS:
        registry.add_interaction(
            MentorInteraction(mentor_id=mid, startup_id=sid, date=date, type=kind, rating=rating)
        )
    return registry
