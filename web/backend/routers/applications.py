#!/usr/bin/env python3
"""
Application endpoints - track jobs the user applied to.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from core.applications.models import Application
from core.applications.service import ApplicationService
from ..dependencies import get_application_service, get_current_user_id
from ..models.requests import CreateApplicationRequest, StatusUpdateRequest
from ..models.responses import (
    ApplicationCheckResponse,
    ApplicationEnvelope,
    ApplicationResponse,
    ApplicationsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/applications", tags=["applications"])


def to_response(application: Application) -> ApplicationResponse:
    return ApplicationResponse(**application.to_dict())


def envelope(service: ApplicationService, application: Application) -> ApplicationEnvelope:
    next_statuses = sorted(s.value for s in service.allowed_transitions(application))
    return ApplicationEnvelope(
        success=True,
        application=to_response(application),
        next_statuses=next_statuses
    )


def get_owned_application(
    application_id: str,
    user_id: str,
    service: ApplicationService
) -> Application:
    """Load an application and make sure the caller owns it."""
    application = service.get(application_id)
    if application.owner_user_id != user_id:
        raise HTTPException(status_code=403, detail="Not authorized to access this application")
    return application


@router.get("", response_model=ApplicationsResponse)
def list_applications(
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service)
):
    """List the caller's applications, newest first."""
    applications = service.list_by_owner(user_id)
    return ApplicationsResponse(
        success=True,
        applications=[to_response(a) for a in applications]
    )


@router.post("", response_model=ApplicationEnvelope, status_code=201)
def create_application(
    request: CreateApplicationRequest,
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service)
):
    """
    Record an application. A second application to the same job returns 409
    with the existing record.
    """
    application = service.create(
        owner_user_id=user_id,
        job_id=request.job_id,
        job_title=request.job_title,
        company=request.company,
        location=request.location,
        apply_url=request.apply_url,
        match_score=request.match_score
    )
    return envelope(service, application)


@router.get("/check/{job_id}", response_model=ApplicationCheckResponse)
def check_application(
    job_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service)
):
    """Whether the caller already applied to a job."""
    application = service.find_by_owner_and_job(user_id, job_id)
    if application is None:
        return ApplicationCheckResponse(applied=False)
    return ApplicationCheckResponse(applied=True, application=to_response(application))


@router.get("/{application_id}", response_model=ApplicationEnvelope)
def get_application(
    application_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service)
):
    application = get_owned_application(application_id, user_id, service)
    return envelope(service, application)


@router.patch("/{application_id}/status", response_model=ApplicationEnvelope)
def update_application_status(
    application_id: str,
    request: StatusUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service)
):
    """Move an application to a new status and append to its timeline."""
    get_owned_application(application_id, user_id, service)
    application = service.update_status(application_id, request.status, request.note)
    return envelope(service, application)
