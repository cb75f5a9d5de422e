"""Remotive API client - remote job listings, no API key required."""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import requests
from tenacity import (
    retry,
    stop_after_attempt,
    wait_fixed,
    retry_if_exception,
    before_sleep_log
)

from core.exceptions import AdapterFailureException
from core.models import JobPosting, JobType, WorkMode
from core.search.filters import FilterSpec
from core.sources.base import JobSource

logger = logging.getLogger(__name__)

REMOTIVE_API_URL = "https://remotive.com/api/remote-jobs"

# Locations that accept candidates from anywhere match every location filter
WORLDWIDE_MARKERS = ("worldwide", "anywhere", "global", "remote")

DATE_POSTED_MAX_DAYS = {
    "last24h": 1,
    "lastWeek": 7,
    "lastMonth": 30,
}


def _is_retryable_error(exc: Exception) -> bool:
    """
    Determine if an exception is retryable.

    Retries timeouts, 5xx responses and connection errors; never 4xx.
    """
    if isinstance(exc, requests.Timeout):
        return True

    if isinstance(exc, requests.HTTPError):
        response = getattr(exc, 'response', None)
        if response is not None:
            return response.status_code >= 500
        return True

    if isinstance(exc, requests.RequestException):
        response = getattr(exc, 'response', None)
        if response is not None and 400 <= response.status_code < 500:
            return False
        return True

    return False


def map_job_type(raw: Optional[str]) -> JobType:
    """Map Remotive's job_type (e.g. 'full_time', 'freelance') onto JobType."""
    if not raw:
        return JobType.FULL_TIME
    t = raw.lower()
    if "full_time" in t:
        return JobType.FULL_TIME
    if "part_time" in t:
        return JobType.PART_TIME
    if "contract" in t or "freelance" in t:
        return JobType.CONTRACT
    if "internship" in t:
        return JobType.INTERNSHIP
    return JobType.FULL_TIME


def _parse_timestamp(raw: Optional[str]) -> Optional[datetime]:
    if not raw:
        return None
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"Unparseable publication_date: {raw!r}")
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_job_posting(item: Dict[str, Any]) -> JobPosting:
    """Normalize one Remotive job record."""
    return JobPosting(
        id=f"remotive-{item['id']}",
        title=item.get("title") or "",
        company=item.get("company_name") or "",
        location=item.get("candidate_required_location") or "Remote",
        description=item.get("description") or "",
        job_type=map_job_type(item.get("job_type")),
        work_mode=WorkMode.REMOTE,
        salary=item.get("salary") or "Salary not specified",
        posted_at=_parse_timestamp(item.get("publication_date")),
        apply_url=item.get("url") or "",
        skills=tuple(item.get("tags") or ()),
    )


def matches_filters(job: JobPosting, filters: FilterSpec, now: datetime) -> bool:
    """
    Client-side filtering for the fields Remotive cannot apply itself.

    Work mode is not filtered: every Remotive posting is remote, and
    dropping them all for an "onsite" filter would leave nothing to show.
    """
    if filters.query:
        q = filters.query.lower()
        if not (q in job.title.lower() or q in job.company.lower() or q in job.description.lower()):
            return False

    if filters.location:
        job_loc = job.location.lower()
        strict_match = filters.location.lower() in job_loc
        is_worldwide = any(marker in job_loc for marker in WORLDWIDE_MARKERS)
        if not strict_match and not is_worldwide:
            return False

    if filters.job_type and job.job_type != filters.job_type:
        return False

    max_days = DATE_POSTED_MAX_DAYS.get(filters.date_posted)
    if max_days is not None and job.posted_at is not None:
        age_days = math.ceil(abs((now - job.posted_at).total_seconds()) / 86400)
        if age_days > max_days:
            return False

    return True


def paginate(jobs: List[JobPosting], page: int, page_size: int) -> List[JobPosting]:
    start = (page - 1) * page_size
    return jobs[start:start + page_size]


class RemotiveJobSource(JobSource):
    """
    Job source backed by the public Remotive API.

    Remotive only supports a free-text ``search`` parameter, so the rest of
    the filters and the pagination are applied locally.
    """

    name = "remotive"

    def __init__(
        self,
        base_url: str = REMOTIVE_API_URL,
        request_timeout_seconds: int = 15,
        session: Optional[requests.Session] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)
    ):
        self.base_url = base_url
        self.request_timeout_seconds = request_timeout_seconds
        self.session = session or requests.Session()
        self._clock = clock

        logger.info(
            f"RemotiveJobSource initialized: base_url={self.base_url}, "
            f"timeout={request_timeout_seconds}s"
        )

    @staticmethod
    def _search_term(filters: FilterSpec) -> Optional[str]:
        if filters.query:
            return filters.query
        if filters.skills:
            return filters.skills[0]
        return None

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_fixed(1),
        retry=retry_if_exception(_is_retryable_error),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True
    )
    def _request_jobs(self, search: Optional[str]) -> List[Dict[str, Any]]:
        params = {"search": search} if search else None
        response = self.session.get(self.base_url, params=params, timeout=self.request_timeout_seconds)
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, dict):
            raise AdapterFailureException("Unexpected Remotive payload: expected a JSON object")
        jobs = payload.get("jobs")
        if jobs is None:
            return []
        if not isinstance(jobs, list):
            raise AdapterFailureException("Unexpected Remotive payload: 'jobs' is not a list")
        return jobs

    def fetch(self, filters: FilterSpec) -> List[JobPosting]:
        search = self._search_term(filters)
        logger.info(f"Fetching jobs from Remotive (search={search!r})")

        try:
            raw_jobs = self._request_jobs(search)
        except (requests.RequestException, ValueError) as e:
            raise AdapterFailureException(f"Remotive API unavailable: {e}") from e

        jobs = []
        for item in raw_jobs:
            try:
                jobs.append(to_job_posting(item))
            except (KeyError, TypeError) as e:
                logger.warning(f"Skipping malformed Remotive job: {e}")

        now = self._clock()
        filtered = [job for job in jobs if matches_filters(job, filters, now)]
        page = paginate(filtered, filters.page, filters.page_size)

        logger.info(f"Remotive returned {len(jobs)} jobs, {len(filtered)} after filters, {len(page)} on page {filters.page}")
        return page
