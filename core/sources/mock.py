"""Static job postings served when no live source is reachable."""

from dataclasses import replace
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from core.models import JobPosting, JobType, WorkMode
from core.search.filters import FilterSpec
from core.sources.base import JobSource
from core.sources.remotive import paginate

MOCK_JOBS: Sequence[JobPosting] = (
    JobPosting(
        id="mock-1",
        title="Senior React Developer",
        company="TechCorp Solutions",
        location="Remote",
        description="We are looking for an experienced React developer to build customer-facing dashboards.",
        job_type=JobType.FULL_TIME,
        work_mode=WorkMode.REMOTE,
        salary="£70,000 - £90,000",
        apply_url="https://example.com/jobs/mock-1",
        skills=("React", "JavaScript", "TypeScript"),
    ),
    JobPosting(
        id="mock-2",
        title="Backend Python Engineer",
        company="DataFlow Labs",
        location="London, UK",
        description="Design and operate Python services and data pipelines on AWS.",
        job_type=JobType.FULL_TIME,
        work_mode=WorkMode.HYBRID,
        salary="£65,000 - £80,000",
        apply_url="https://example.com/jobs/mock-2",
        skills=("Python", "FastAPI", "PostgreSQL", "AWS"),
    ),
    JobPosting(
        id="mock-3",
        title="Machine Learning Intern",
        company="Insight AI",
        location="Worldwide",
        description="Help train and evaluate NLP models alongside the research team.",
        job_type=JobType.INTERNSHIP,
        work_mode=WorkMode.REMOTE,
        salary="Salary not specified",
        apply_url="https://example.com/jobs/mock-3",
        skills=("Python", "PyTorch", "NLP"),
    ),
    JobPosting(
        id="mock-4",
        title="Node.js Contractor",
        company="Brightside Agency",
        location="Manchester, UK",
        description="Six month contract extending a Node.js and GraphQL API.",
        job_type=JobType.CONTRACT,
        work_mode=WorkMode.ONSITE,
        salary="£500/day",
        apply_url="https://example.com/jobs/mock-4",
        skills=("Node.js", "GraphQL", "TypeScript"),
    ),
)


class MockJobSource(JobSource):
    """Never fails. Applies the job-type filter and pagination only."""

    name = "mock"

    def __init__(self, jobs: Optional[Sequence[JobPosting]] = None):
        self.jobs = list(jobs if jobs is not None else MOCK_JOBS)

    def fetch(self, filters: FilterSpec) -> List[JobPosting]:
        now = datetime.now(timezone.utc)
        jobs = [
            j if j.posted_at else replace(j, posted_at=now)
            for j in self.jobs
            if not filters.job_type or j.job_type == filters.job_type
        ]
        return paginate(jobs, filters.page, filters.page_size)
