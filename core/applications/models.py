#!/usr/bin/env python3
"""
Application Models - tracked job applications and their status timeline.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class ApplicationStatus(str, Enum):
    APPLIED = "applied"
    INTERVIEW = "interview"
    OFFER = "offer"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"

    @classmethod
    def values(cls) -> List[str]:
        return [s.value for s in cls]


@dataclass(frozen=True)
class TimelineEntry:
    status: ApplicationStatus
    timestamp: datetime
    note: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat(),
            "note": self.note,
        }


@dataclass
class Application:
    """
    One user's application to one job.

    match_score is a snapshot taken when the application was created. The
    last timeline entry always carries the current status.
    """
    id: str
    owner_user_id: str
    job_id: str
    job_title: str
    company: str
    status: ApplicationStatus
    timeline: List[TimelineEntry]
    created_at: datetime
    updated_at: datetime
    location: str = ""
    apply_url: str = ""
    match_score: Optional[int] = None
    # Insertion order, breaks created_at ties when listing
    sequence: int = field(default=0, compare=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "owner_user_id": self.owner_user_id,
            "job_id": self.job_id,
            "job_title": self.job_title,
            "company": self.company,
            "location": self.location,
            "apply_url": self.apply_url,
            "match_score": self.match_score,
            "status": self.status.value,
            "timeline": [entry.to_dict() for entry in self.timeline],
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
