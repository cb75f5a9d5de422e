import copy
import itertools
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Tuple

from core.applications.models import Application
from core.locks import KeyedLock

logger = logging.getLogger(__name__)


class ApplicationRepository(ABC):
    """Storage for applications. Durability is up to the implementation."""

    @abstractmethod
    def get(self, application_id: str) -> Optional[Application]:
        pass

    @abstractmethod
    def find_by_owner_and_job(self, owner_user_id: str, job_id: str) -> Optional[Application]:
        pass

    @abstractmethod
    def list_by_owner(self, owner_user_id: str) -> List[Application]:
        pass

    @abstractmethod
    def add(self, application: Application) -> Application:
        pass

    @abstractmethod
    def save(self, application: Application) -> Application:
        pass

    @abstractmethod
    def lock_owner_job(self, owner_user_id: str, job_id: str):
        """Context manager serializing creation for one (owner, job) pair."""
        pass

    @abstractmethod
    def lock_application(self, application_id: str):
        """Context manager serializing updates to one application."""
        pass


class InMemoryApplicationRepository(ApplicationRepository):
    """
    Process-local application store.

    Objects handed out are copies; changes only land through save().
    """

    def __init__(self):
        self._applications: Dict[str, Application] = {}
        self._by_owner_job: Dict[Tuple[str, str], str] = {}
        self._owner_job_locks = KeyedLock()
        self._application_locks = KeyedLock()
        self._sequence = itertools.count(1)

    def get(self, application_id: str) -> Optional[Application]:
        application = self._applications.get(application_id)
        return copy.deepcopy(application) if application else None

    def find_by_owner_and_job(self, owner_user_id: str, job_id: str) -> Optional[Application]:
        application_id = self._by_owner_job.get((owner_user_id, job_id))
        if application_id is None:
            return None
        return self.get(application_id)

    def list_by_owner(self, owner_user_id: str) -> List[Application]:
        owned = [
            copy.deepcopy(a) for a in list(self._applications.values())
            if a.owner_user_id == owner_user_id
        ]
        owned.sort(key=lambda a: (a.created_at, a.sequence), reverse=True)
        return owned

    def add(self, application: Application) -> Application:
        stored = copy.deepcopy(application)
        stored.sequence = next(self._sequence)
        self._applications[stored.id] = stored
        self._by_owner_job[(stored.owner_user_id, stored.job_id)] = stored.id
        logger.debug(f"Stored application {stored.id} for job {stored.job_id}")
        return copy.deepcopy(stored)

    def save(self, application: Application) -> Application:
        if application.id not in self._applications:
            raise KeyError(application.id)
        self._applications[application.id] = copy.deepcopy(application)
        return copy.deepcopy(application)

    @contextmanager
    def lock_owner_job(self, owner_user_id: str, job_id: str) -> Iterator[None]:
        with self._owner_job_locks.hold((owner_user_id, job_id)):
            yield

    @contextmanager
    def lock_application(self, application_id: str) -> Iterator[None]:
        with self._application_locks.hold(application_id):
            yield
