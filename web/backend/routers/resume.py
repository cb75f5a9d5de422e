#!/usr/bin/env python3
"""
Résumé endpoints - the text every job is scored against.
"""

import logging

from fastapi import APIRouter, Depends

from core.models import ResumeProfile
from core.resume.store import ResumeStore
from ..dependencies import get_current_user_id, get_resume_store
from ..models.requests import ResumeUploadRequest
from ..models.responses import ResumeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resume", tags=["resume"])


def to_response(profile: ResumeProfile) -> ResumeResponse:
    return ResumeResponse(
        has_resume=profile.has_resume,
        file_name=profile.file_name,
        resume_text=profile.resume_text,
        updated_at=profile.updated_at.isoformat() if profile.updated_at else None
    )


@router.get("", response_model=ResumeResponse)
def get_resume(
    user_id: str = Depends(get_current_user_id),
    store: ResumeStore = Depends(get_resume_store)
):
    return to_response(store.get(user_id))


@router.put("", response_model=ResumeResponse)
def upload_resume(
    request: ResumeUploadRequest,
    user_id: str = Depends(get_current_user_id),
    store: ResumeStore = Depends(get_resume_store)
):
    """Store résumé text. Cached job lists stay valid; scores follow the new text."""
    return to_response(store.save(user_id, request.text, request.file_name))


@router.delete("", response_model=ResumeResponse)
def delete_resume(
    user_id: str = Depends(get_current_user_id),
    store: ResumeStore = Depends(get_resume_store)
):
    store.delete(user_id)
    return to_response(store.get(user_id))
