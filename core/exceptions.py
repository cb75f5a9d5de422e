"""
Service-layer exceptions shared by the core components and the web layer.
"""
from typing import Any, Optional


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class NotFoundException(ServiceException):
    """Raised when an application id is unknown."""
    pass


class ConflictException(ServiceException):
    """Raised when the user already has an application for the job."""

    def __init__(self, message: str, existing: Optional[Any] = None):
        super().__init__(message)
        self.existing = existing


class InvalidStatusException(ServiceException):
    """Raised when a status value is not one of the recognized statuses."""
    pass


class InvalidTransitionException(ServiceException):
    """Raised in strict mode when a status change is outside the transition graph."""
    pass


class ProviderFailureException(ServiceException):
    """Raised by similarity/explanation providers. Always absorbed by scoring."""
    pass


class AdapterFailureException(ServiceException):
    """Raised when no job source could produce postings."""
    pass
