import logging
from typing import List, Sequence

from core.exceptions import AdapterFailureException
from core.models import JobPosting
from core.search.filters import FilterSpec
from core.sources.base import JobSource

logger = logging.getLogger(__name__)


class FallbackJobSource(JobSource):
    """
    Tries each source in order and returns the first successful result.

    An empty list counts as success. Raises AdapterFailureException only
    when every source failed.
    """

    name = "fallback"

    def __init__(self, sources: Sequence[JobSource]):
        if not sources:
            raise ValueError("FallbackJobSource needs at least one source")
        self.sources = list(sources)

    def fetch(self, filters: FilterSpec) -> List[JobPosting]:
        errors = []
        for source in self.sources:
            try:
                return source.fetch(filters)
            except AdapterFailureException as e:
                logger.warning(f"Job source {source.name} failed, trying next: {e}")
                errors.append(f"{source.name}: {e}")

        raise AdapterFailureException("All job sources failed: " + "; ".join(errors))
