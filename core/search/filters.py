#!/usr/bin/env python3
"""
Filter Specification - the canonical form of a job search request.

A FilterSpec is normalized when it is built, so two requests that only differ
in whitespace, skill order or job-type spelling compare equal and produce the
same cache fingerprint.
"""
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.models import JobType, WorkMode

DatePosted = Literal["last24h", "lastWeek", "lastMonth", "any"]
MatchBand = Literal["all", "high", "medium"]


def _collapse_whitespace(value: str) -> str:
    return " ".join(str(value).split())


class FilterSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: str = ""
    skills: Tuple[str, ...] = ()
    date_posted: DatePosted = "any"
    job_type: Optional[JobType] = None
    work_mode: Optional[WorkMode] = None
    location: str = ""
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)

    @field_validator("query", "location", mode="before")
    @classmethod
    def _normalize_text(cls, value):
        if value is None:
            return ""
        return _collapse_whitespace(value)

    @field_validator("skills", mode="before")
    @classmethod
    def _normalize_skills(cls, value):
        if value is None:
            return ()
        if isinstance(value, str):
            value = value.split(",")
        cleaned = {_collapse_whitespace(s) for s in value if s is not None}
        cleaned.discard("")
        return tuple(sorted(cleaned, key=lambda s: (s.lower(), s)))

    @field_validator("date_posted", mode="before")
    @classmethod
    def _default_date_posted(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return "any"
        return value.strip() if isinstance(value, str) else value

    @field_validator("job_type", mode="before")
    @classmethod
    def _parse_job_type(cls, value):
        return JobType.parse(value)

    @field_validator("work_mode", mode="before")
    @classmethod
    def _parse_work_mode(cls, value):
        return WorkMode.parse(value)

    def canonical(self) -> dict:
        """JSON-safe dict of every recognized field, used for fingerprinting."""
        return self.model_dump(mode="json")


class FilterUpdate(BaseModel):
    """
    Structured filter change emitted by the assistant.

    Only fields that are set are applied; ``clear_all`` resets everything.
    """
    query: Optional[str] = None
    skills: Optional[List[str]] = None
    date_posted: Optional[DatePosted] = None
    job_type: Optional[str] = None
    work_mode: Optional[str] = None
    location: Optional[str] = None
    match_score: Optional[MatchBand] = None
    clear_all: bool = False


def apply_filter_update(
    current: FilterSpec,
    band: MatchBand,
    update: FilterUpdate
) -> Tuple[FilterSpec, MatchBand]:
    """
    Merge an assistant filter update into the current filters.

    Args:
        current: Filters currently in effect
        band: Current match-score band
        update: Update to apply

    Returns:
        Tuple of (new filters, new band). Any change to the filters moves the
        search back to the first page.
    """
    if update.clear_all:
        return FilterSpec(page_size=current.page_size), "all"

    changes = update.model_dump(exclude_none=True, exclude={"clear_all", "match_score"})
    new_band = update.match_score or band

    if not changes:
        return current, new_band

    data = current.model_dump()
    data.update(changes)
    data["page"] = 1
    return FilterSpec(**data), new_band


def count_active_filters(filters: FilterSpec, band: MatchBand = "all") -> int:
    """Number of filters that differ from their defaults."""
    count = 0
    if filters.query:
        count += 1
    if filters.skills:
        count += 1
    if filters.date_posted != "any":
        count += 1
    if filters.job_type:
        count += 1
    if filters.work_mode:
        count += 1
    if filters.location:
        count += 1
    if band != "all":
        count += 1
    return count
