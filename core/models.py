#!/usr/bin/env python3
"""
Domain Models - job postings and résumé profiles.

JobPosting is produced by the job sources and never mutated afterwards;
scoring wraps it in a ScoredJob rather than copying fields onto it.
"""
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class JobType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["JobType"]:
        """
        Normalize the spellings used by sources and the UI.

        "fulltime", "full_time", "Full-time" and "FULL TIME" all map to
        FULL_TIME. Freelance work is reported as CONTRACT. Returns None for
        empty input and raises ValueError for anything unrecognized.
        """
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        key = re.sub(r"[\s_\-]+", "", str(value).lower())
        if not key:
            return None
        aliases = {
            "fulltime": cls.FULL_TIME,
            "parttime": cls.PART_TIME,
            "contract": cls.CONTRACT,
            "freelance": cls.CONTRACT,
            "internship": cls.INTERNSHIP,
            "intern": cls.INTERNSHIP,
        }
        if key not in aliases:
            raise ValueError(f"Unknown job type: {value!r}")
        return aliases[key]


class WorkMode(str, Enum):
    REMOTE = "remote"
    HYBRID = "hybrid"
    ONSITE = "onsite"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["WorkMode"]:
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        key = re.sub(r"[\s_\-]+", "", str(value).lower())
        if not key:
            return None
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown work mode: {value!r}") from None


@dataclass(frozen=True)
class JobPosting:
    """A normalized job posting as emitted by a job source."""
    id: str
    title: str
    company: str
    location: str = ""
    description: str = ""
    job_type: JobType = JobType.FULL_TIME
    work_mode: WorkMode = WorkMode.REMOTE
    salary: str = "Salary not specified"
    posted_at: Optional[datetime] = None
    apply_url: str = ""
    skills: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "description": self.description,
            "job_type": self.job_type.value,
            "work_mode": self.work_mode.value,
            "salary": self.salary,
            "posted_at": self.posted_at.isoformat() if self.posted_at else None,
            "apply_url": self.apply_url,
            "skills": list(self.skills),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "JobPosting":
        posted_at = data.get("posted_at")
        if isinstance(posted_at, str):
            posted_at = datetime.fromisoformat(posted_at)
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            company=data.get("company", ""),
            location=data.get("location", ""),
            description=data.get("description", ""),
            job_type=JobType.parse(data.get("job_type")) or JobType.FULL_TIME,
            work_mode=WorkMode.parse(data.get("work_mode")) or WorkMode.REMOTE,
            salary=data.get("salary") or "Salary not specified",
            posted_at=posted_at,
            apply_url=data.get("apply_url", ""),
            skills=tuple(data.get("skills") or ()),
        )


@dataclass
class ResumeProfile:
    """One résumé per user. Read-only to the scoring engine."""
    user_id: str
    resume_text: Optional[str] = None
    file_name: Optional[str] = None
    updated_at: Optional[datetime] = None

    @property
    def has_resume(self) -> bool:
        return bool(self.resume_text and self.resume_text.strip())
