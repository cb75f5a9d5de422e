"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For provider fakes, see tests/mocks/
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.models import JobPosting, JobType, WorkMode


class FakeClock:
    """Clock the test moves by hand. Works for monotonic floats and datetimes."""

    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds: float):
        if isinstance(self.now, datetime):
            self.now = self.now + timedelta(seconds=seconds)
        else:
            self.now += seconds


@pytest.fixture
def utc_clock():
    return FakeClock(datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def make_posting():
    """Factory for JobPosting with sensible defaults."""
    def _make(job_id="remotive-1", title="Python Developer", **overrides):
        fields = dict(
            id=job_id,
            title=title,
            company="TechCorp",
            location="Worldwide",
            description="Build APIs",
            job_type=JobType.FULL_TIME,
            work_mode=WorkMode.REMOTE,
            skills=("python",),
        )
        fields.update(overrides)
        return JobPosting(**fields)
    return _make
