"""Applications Module - application lifecycle tracking."""
from core.applications.models import Application, ApplicationStatus, TimelineEntry
from core.applications.repository import ApplicationRepository, InMemoryApplicationRepository
from core.applications.service import ApplicationService, parse_status

__all__ = [
    'Application', 'ApplicationStatus', 'TimelineEntry',
    'ApplicationRepository', 'InMemoryApplicationRepository',
    'ApplicationService', 'parse_status'
]
