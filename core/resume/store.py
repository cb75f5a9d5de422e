import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, Optional

from core.locks import KeyedLock
from core.models import ResumeProfile

logger = logging.getLogger(__name__)


class ResumeStore(ABC):
    """One résumé profile per user."""

    @abstractmethod
    def get(self, user_id: str) -> ResumeProfile:
        """Return the user's profile; an empty one if nothing was uploaded."""
        pass

    @abstractmethod
    def save(self, user_id: str, resume_text: str, file_name: Optional[str] = None) -> ResumeProfile:
        pass

    @abstractmethod
    def delete(self, user_id: str) -> bool:
        pass


class InMemoryResumeStore(ResumeStore):

    def __init__(self):
        self._profiles: Dict[str, ResumeProfile] = {}
        self._locks = KeyedLock()

    def get(self, user_id: str) -> ResumeProfile:
        profile = self._profiles.get(user_id)
        if profile is None:
            return ResumeProfile(user_id=user_id)
        return replace(profile)

    def save(self, user_id: str, resume_text: str, file_name: Optional[str] = None) -> ResumeProfile:
        with self._locks.hold(user_id):
            profile = ResumeProfile(
                user_id=user_id,
                resume_text=resume_text,
                file_name=file_name,
                updated_at=datetime.now(timezone.utc)
            )
            self._profiles[user_id] = profile
        logger.info(f"Stored resume for user {user_id} ({len(resume_text or '')} chars)")
        return replace(profile)

    def delete(self, user_id: str) -> bool:
        with self._locks.hold(user_id):
            removed = self._profiles.pop(user_id, None) is not None
        if removed:
            logger.info(f"Deleted resume for user {user_id}")
        return removed
