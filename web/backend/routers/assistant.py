#!/usr/bin/env python3
"""
Assistant endpoints - apply structured filter updates.

The conversational side lives in the client; it hands us a FilterUpdate and
we return the merged filter state for the next search.
"""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from core.search.filters import FilterSpec, apply_filter_update, count_active_filters
from ..models.requests import AssistantFilterRequest
from ..models.responses import FilterStateResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/assistant", tags=["assistant"])


@router.post("/filters", response_model=FilterStateResponse)
def apply_filters(request: AssistantFilterRequest):
    try:
        current = FilterSpec(**request.filters.model_dump())
        filters, band = apply_filter_update(current, request.match_score, request.update)
    except ValidationError as e:
        errors = "; ".join(err.get("msg", "") for err in e.errors())
        raise HTTPException(status_code=400, detail=f"Invalid filters: {errors}")

    return FilterStateResponse(
        success=True,
        filters=filters.canonical(),
        match_score=band,
        active_filters=count_active_filters(filters, band)
    )
