#!/usr/bin/env python3
"""
Application Service - application lifecycle and status timeline.

Status updates are permissive by default: any recognized status may follow
any other, matching what the tracking UI has always allowed. With
``strict_transitions`` the documented transition graph is enforced.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, FrozenSet, List, Optional, Union

from core.applications.models import Application, ApplicationStatus, TimelineEntry
from core.applications.repository import ApplicationRepository
from core.applications.transitions import allowed_transitions, is_transition_allowed
from core.exceptions import (
    ConflictException,
    InvalidStatusException,
    InvalidTransitionException,
    NotFoundException,
)

logger = logging.getLogger(__name__)

INITIAL_NOTE = "Applied to position"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_status(value: Union[str, ApplicationStatus, None]) -> ApplicationStatus:
    """Convert user input to an ApplicationStatus or raise InvalidStatusException."""
    if isinstance(value, ApplicationStatus):
        return value
    try:
        return ApplicationStatus(value)
    except ValueError:
        raise InvalidStatusException(
            f"Invalid status. Must be one of: {', '.join(ApplicationStatus.values())}"
        ) from None


class ApplicationService:
    """Service for creating and tracking job applications."""

    def __init__(
        self,
        repo: ApplicationRepository,
        strict_transitions: bool = False,
        clock: Callable[[], datetime] = _utcnow
    ):
        self.repo = repo
        self.strict_transitions = strict_transitions
        self._clock = clock

    def create(
        self,
        owner_user_id: str,
        job_id: str,
        job_title: str,
        company: str,
        location: str = "",
        apply_url: str = "",
        match_score: Optional[int] = None
    ) -> Application:
        """
        Record that the user applied to a job.

        Raises:
            ConflictException: if the user already has an application for this job
        """
        with self.repo.lock_owner_job(owner_user_id, job_id):
            existing = self.repo.find_by_owner_and_job(owner_user_id, job_id)
            if existing:
                raise ConflictException("Already applied to this job", existing=existing)

            now = self._clock()
            application = Application(
                id=f"app-{uuid.uuid4().hex}",
                owner_user_id=owner_user_id,
                job_id=job_id,
                job_title=job_title,
                company=company,
                location=location or "",
                apply_url=apply_url or "",
                match_score=match_score,
                status=ApplicationStatus.APPLIED,
                timeline=[TimelineEntry(ApplicationStatus.APPLIED, now, INITIAL_NOTE)],
                created_at=now,
                updated_at=now
            )
            application = self.repo.add(application)

        logger.info(f"User {owner_user_id} applied to job {job_id} ({application.id})")
        return application

    def get(self, application_id: str) -> Application:
        application = self.repo.get(application_id)
        if not application:
            raise NotFoundException(f"Application {application_id} not found")
        return application

    def update_status(
        self,
        application_id: str,
        new_status: Union[str, ApplicationStatus],
        note: Optional[str] = None
    ) -> Application:
        """
        Move an application to a new status and append a timeline entry.

        Raises:
            InvalidStatusException: if new_status is not a recognized status
            NotFoundException: if the application does not exist
            InvalidTransitionException: in strict mode, for a transition outside the graph
        """
        status = parse_status(new_status)

        with self.repo.lock_application(application_id):
            application = self.get(application_id)

            if self.strict_transitions and not is_transition_allowed(application.status, status):
                raise InvalidTransitionException(
                    f"Cannot move application from {application.status.value} to {status.value}"
                )

            # Keep the timeline ordered even if the wall clock steps back
            now = max(self._clock(), application.timeline[-1].timestamp)
            application.timeline.append(
                TimelineEntry(status, now, note or f"Status updated to {status.value}")
            )
            application.status = status
            application.updated_at = now
            application = self.repo.save(application)

        logger.info(f"Application {application_id} moved to {status.value}")
        return application

    def find_by_owner_and_job(self, owner_user_id: str, job_id: str) -> Optional[Application]:
        return self.repo.find_by_owner_and_job(owner_user_id, job_id)

    def list_by_owner(self, owner_user_id: str) -> List[Application]:
        """Applications for the user, most recently created first."""
        return self.repo.list_by_owner(owner_user_id)

    def allowed_transitions(self, application: Application) -> FrozenSet[ApplicationStatus]:
        """Statuses the interface should offer next for this application."""
        if not self.strict_transitions:
            return frozenset(s for s in ApplicationStatus if s != application.status)
        return allowed_transitions(application.status)
