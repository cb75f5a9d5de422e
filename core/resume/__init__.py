"""Resume Module - résumé profile storage."""
from core.resume.store import ResumeStore, InMemoryResumeStore

__all__ = ['ResumeStore', 'InMemoryResumeStore']
