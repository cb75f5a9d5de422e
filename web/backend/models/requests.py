#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import List, Optional

from core.search.filters import DatePosted, FilterUpdate, MatchBand


class CreateApplicationRequest(BaseModel):
    """Record an application the user completed on the employer's site."""
    job_id: str = Field(..., min_length=1)
    job_title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    location: str = ""
    apply_url: str = ""
    match_score: Optional[int] = Field(None, ge=0, le=100)


class StatusUpdateRequest(BaseModel):
    """Move an application to a new status."""
    status: str = Field(..., description="applied, interview, offer, rejected or withdrawn")
    note: Optional[str] = Field(None, description="Timeline note; defaults to 'Status updated to <status>'")


class ResumeUploadRequest(BaseModel):
    """Résumé already converted to plain text."""
    text: str = Field(..., min_length=1)
    file_name: Optional[str] = None


class FilterState(BaseModel):
    """Filters as held by the client."""
    query: str = ""
    skills: List[str] = Field(default_factory=list)
    date_posted: DatePosted = "any"
    job_type: Optional[str] = None
    work_mode: Optional[str] = None
    location: str = ""
    page_size: int = Field(default=20, ge=1, le=100)


class AssistantFilterRequest(BaseModel):
    """Apply a structured filter update produced by the assistant."""
    filters: FilterState = Field(default_factory=FilterState)
    match_score: MatchBand = "all"
    update: FilterUpdate
