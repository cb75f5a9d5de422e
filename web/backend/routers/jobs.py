#!/usr/bin/env python3
"""
Job endpoints - search, score and refresh.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from core.matcher.aggregator import MATCH_BANDS
from core.search.filters import FilterSpec
from core.search.service import JobSearchService
from ..config import get_config
from ..dependencies import get_current_user_id, get_search_service
from ..models.responses import JobsResponse, RefreshResponse, ScoredJobResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


def split_skills(skills: Optional[List[str]]) -> List[str]:
    """Flatten repeated and comma-separated skill parameters."""
    return [part for value in skills or [] for part in value.split(",")]


def build_filters(
    query: str,
    skills: Optional[List[str]],
    date_posted: str,
    job_type: Optional[str],
    work_mode: Optional[str],
    location: str,
    page: int,
    limit: int
) -> FilterSpec:
    """Build a FilterSpec from query parameters, mapping bad input to 400."""
    try:
        return FilterSpec(
            query=query,
            skills=split_skills(skills),
            date_posted=date_posted,
            job_type=job_type,
            work_mode=work_mode,
            location=location,
            page=page,
            page_size=limit
        )
    except ValidationError as e:
        errors = "; ".join(err.get("msg", "") for err in e.errors())
        raise HTTPException(status_code=400, detail=f"Invalid filters: {errors}")


@router.get("", response_model=JobsResponse)
def search_jobs(
    query: str = Query(default="", description="Free-text search"),
    skills: Optional[List[str]] = Query(default=None, description="Skill filters; repeat or comma-separate"),
    date_posted: str = Query(default="any", description="last24h, lastWeek, lastMonth or any"),
    job_type: Optional[str] = Query(default=None, description="full-time, part-time, contract or internship"),
    work_mode: Optional[str] = Query(default=None, description="remote, hybrid or onsite"),
    location: str = Query(default=""),
    match_score: str = Query(default="all", description="Match band: all, high or medium"),
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1, le=100, description="Page size; defaults to search.default_page_size"),
    user_id: str = Depends(get_current_user_id),
    service: JobSearchService = Depends(get_search_service)
):
    """
    Search jobs and score them against the caller's résumé.

    best_matches is computed from the whole page before the match band is
    applied to the listed jobs.
    """
    if match_score not in MATCH_BANDS:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid match_score: {match_score}. Must be one of: {', '.join(MATCH_BANDS)}"
        )

    if limit is None:
        limit = get_config().search.default_page_size

    filters = build_filters(query, skills, date_posted, job_type, work_mode, location, page, limit)
    result = service.search(user_id, filters, match_score)

    return JobsResponse(
        success=True,
        jobs=[ScoredJobResponse(**job.to_dict()) for job in result.jobs],
        best_matches=[ScoredJobResponse(**job.to_dict()) for job in result.best_matches],
        total=result.total,
        page=result.page,
        has_more=result.has_more
    )


@router.post("/refresh", response_model=RefreshResponse)
def refresh_jobs(
    user_id: str = Depends(get_current_user_id),
    service: JobSearchService = Depends(get_search_service)
):
    """Clear cached searches; the next search fetches fresh postings."""
    cleared = service.refresh()
    logger.info(f"Job cache refreshed by user {user_id}, {cleared} entries cleared")
    return RefreshResponse(
        success=True,
        message="Cache cleared. Next search will fetch fresh jobs.",
        cleared=cleared
    )
