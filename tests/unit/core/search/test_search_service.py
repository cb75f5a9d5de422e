"""
Tests for JobSearchService: cache, source, scoring and ranking together.
"""
from unittest.mock import Mock

import pytest

from core.cache.job_cache import InMemoryJobCache
from core.exceptions import AdapterFailureException
from core.resume.store import InMemoryResumeStore
from core.scorer.badges import NO_RESUME_EXPLANATION
from core.scorer.lexical import no_noise
from core.scorer.service import ScoringService
from core.search.filters import FilterSpec
from core.search.service import JobSearchService
from core.sources.base import JobSource


class CountingSource(JobSource):
    name = "counting"

    def __init__(self, postings):
        self.postings = postings
        self.calls = 0

    def fetch(self, filters):
        self.calls += 1
        return list(self.postings)


@pytest.fixture
def postings(make_posting):
    return [
        make_posting("j1", "Java Developer", skills=("java",)),
        make_posting("j2", "Python Developer", skills=("python", "django")),
        make_posting("j3", "React Developer", skills=("react",)),
    ]


@pytest.fixture
def source(postings):
    return CountingSource(postings)


@pytest.fixture
def resumes():
    return InMemoryResumeStore()


@pytest.fixture
def service(source, resumes):
    return JobSearchService(
        cache=InMemoryJobCache(),
        source=source,
        scoring=ScoringService(noise=no_noise),
        resumes=resumes,
        best_matches_limit=2
    )


class TestJobSearchService:

    def test_01_second_search_served_from_cache(self, service, source):
        first = service.search("u1", FilterSpec(query="developer"))
        second = service.search("u1", FilterSpec(query="  developer "))

        assert source.calls == 1
        assert first.from_cache is False
        assert second.from_cache is True
        assert first.fingerprint == second.fingerprint

    def test_02_different_filters_fetch_again(self, service, source):
        service.search("u1", FilterSpec(query="python"))
        service.search("u1", FilterSpec(query="java"))

        assert source.calls == 2

    def test_03_scores_against_users_resume(self, service, resumes):
        resumes.save("u1", "Python developer with django experience")

        result = service.search("u1", FilterSpec())

        scores = {j.id: j.match_score for j in result.jobs}
        assert scores["j2"] == 100
        assert scores["j1"] == 33
        assert [j.id for j in result.best_matches] == ["j2", "j1"]

    def test_04_without_resume_every_job_has_notice(self, service):
        result = service.search("nobody", FilterSpec())

        assert all(j.match_score == 0 for j in result.jobs)
        assert all(j.match_explanation == NO_RESUME_EXPLANATION for j in result.jobs)

    def test_05_band_filters_jobs_but_not_best_matches(self, service, resumes):
        resumes.save("u1", "Python developer with django experience")

        result = service.search("u1", FilterSpec(), band="high")

        assert [j.id for j in result.jobs] == ["j2"]
        assert result.total == 1
        assert [j.id for j in result.best_matches] == ["j2", "j1"]

    def test_06_has_more_when_page_is_full(self, service):
        assert service.search("u1", FilterSpec(page_size=3)).has_more is True
        assert service.search("u1", FilterSpec(page_size=20)).has_more is False

    def test_07_has_more_counts_jobs_left_after_band(self, service, resumes):
        resumes.save("u1", "Python developer with django experience")

        result = service.search("u1", FilterSpec(page_size=3), band="high")

        assert result.total == 1
        assert result.has_more is False

    def test_08_page_echoed(self, service):
        assert service.search("u1", FilterSpec(page=2)).page == 2

    def test_09_resume_change_rescores_cached_postings(self, service, source, resumes):
        service.search("u1", FilterSpec())
        resumes.save("u1", "React developer")

        result = service.search("u1", FilterSpec())

        assert source.calls == 1
        assert {j.id: j.match_score for j in result.jobs}["j3"] == 100

    def test_10_source_failure_propagates_and_is_not_cached(self, resumes):
        source = Mock(spec=JobSource)
        source.fetch.side_effect = AdapterFailureException("down")
        cache = InMemoryJobCache()
        service = JobSearchService(cache, source, ScoringService(noise=no_noise), resumes)

        with pytest.raises(AdapterFailureException):
            service.search("u1", FilterSpec())
        assert cache.stats()["entries"] == 0

    def test_11_refresh_clears_cache(self, service, source):
        service.search("u1", FilterSpec())

        assert service.refresh() == 1
        service.search("u1", FilterSpec())
        assert source.calls == 2
