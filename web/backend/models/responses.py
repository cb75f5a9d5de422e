#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class ScoredJobResponse(BaseModel):
    """A job posting with its match against the caller's résumé."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "remotive-1234567",
                "title": "Senior Python Developer",
                "company": "TechCorp",
                "location": "Worldwide",
                "description": "<p>Build APIs...</p>",
                "job_type": "full-time",
                "work_mode": "remote",
                "salary": "$120k - $150k",
                "posted_at": "2026-02-01T12:00:00+00:00",
                "apply_url": "https://remotive.com/remote-jobs/software-dev/1234567",
                "skills": ["python", "django"],
                "match_score": 78,
                "match_badge": "green",
                "match_explanation": "Strong match! ..."
            }
        }
    )

    id: str
    title: str
    company: str
    location: str
    description: str
    job_type: str
    work_mode: str
    salary: str
    posted_at: Optional[str]
    apply_url: str
    skills: List[str]
    match_score: int = Field(ge=0, le=100)
    match_badge: str
    match_explanation: str


class JobsResponse(BaseModel):
    success: bool = True
    jobs: List[ScoredJobResponse]
    best_matches: List[ScoredJobResponse]
    total: int
    page: int
    has_more: bool


class RefreshResponse(BaseModel):
    success: bool = True
    message: str
    cleared: int


class TimelineEntryResponse(BaseModel):
    status: str
    timestamp: str
    note: str


class ApplicationResponse(BaseModel):
    id: str
    owner_user_id: str
    job_id: str
    job_title: str
    company: str
    location: str
    apply_url: str
    match_score: Optional[int]
    status: str
    timeline: List[TimelineEntryResponse]
    created_at: str
    updated_at: str


class ApplicationEnvelope(BaseModel):
    success: bool = True
    application: ApplicationResponse
    next_statuses: List[str] = Field(default_factory=list)


class ApplicationsResponse(BaseModel):
    success: bool = True
    applications: List[ApplicationResponse]


class ApplicationCheckResponse(BaseModel):
    applied: bool
    application: Optional[ApplicationResponse] = None


class ResumeResponse(BaseModel):
    has_resume: bool
    file_name: Optional[str] = None
    resume_text: Optional[str] = None
    updated_at: Optional[str] = None


class FilterStateResponse(BaseModel):
    success: bool = True
    filters: dict
    match_score: str
    active_filters: int
