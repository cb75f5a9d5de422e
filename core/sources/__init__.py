"""Sources Module - job source adapters."""
from core.sources.base import JobSource
from core.sources.remotive import RemotiveJobSource
from core.sources.mock import MockJobSource
from core.sources.fallback import FallbackJobSource

__all__ = ['JobSource', 'RemotiveJobSource', 'MockJobSource', 'FallbackJobSource']
