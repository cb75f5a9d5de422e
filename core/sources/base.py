from abc import ABC, abstractmethod
from typing import List

from core.models import JobPosting
from core.search.filters import FilterSpec


class JobSource(ABC):
    """
    Produces normalized postings for a filter specification.

    Sources may ignore filter fields they cannot apply.
    """

    name: str = "source"

    @abstractmethod
    def fetch(self, filters: FilterSpec) -> List[JobPosting]:
        """
        Raises:
            AdapterFailureException: if the upstream could not be queried
        """
        pass
