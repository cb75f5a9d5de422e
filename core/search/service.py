#!/usr/bin/env python3
"""
Job Search Service - cache, fetch, score and rank in one call.

    filters -> cache (hit) ------------------------> scoring -> band filter
            -> cache (miss) -> job source -> put -^            + best matches
"""
import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from core.cache.fingerprint import FilterFingerprinter
from core.cache.job_cache import JobCache
from core.matcher.aggregator import DEFAULT_BEST_MATCHES_LIMIT, best_matches, filter_by_band
from core.models import JobPosting
from core.resume.store import ResumeStore
from core.scorer.models import ScoredJob
from core.scorer.service import ScoringService
from core.search.filters import FilterSpec
from core.sources.base import JobSource

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    jobs: List[ScoredJob]
    best_matches: List[ScoredJob]
    total: int
    page: int
    has_more: bool
    from_cache: bool = False
    fingerprint: str = field(default="", repr=False)


class JobSearchService:
    """
    Runs a job search for one user.

    AdapterFailureException from the job source propagates: with nothing
    fetched there is nothing to cache or score.
    """

    def __init__(
        self,
        cache: JobCache,
        source: JobSource,
        scoring: ScoringService,
        resumes: ResumeStore,
        best_matches_limit: int = DEFAULT_BEST_MATCHES_LIMIT
    ):
        self.cache = cache
        self.source = source
        self.scoring = scoring
        self.resumes = resumes
        self.best_matches_limit = best_matches_limit

    def fetch_postings(self, filters: FilterSpec) -> Tuple[List[JobPosting], bool, str]:
        """Return (postings, from_cache, fingerprint) for the filters."""
        fingerprint = FilterFingerprinter.calculate(filters)
        postings = self.cache.get(fingerprint)
        if postings is not None:
            return postings, True, fingerprint

        postings = self.source.fetch(filters)
        self.cache.put(fingerprint, postings)
        return postings, False, fingerprint

    def search(self, user_id: str, filters: FilterSpec, band: str = "all") -> SearchResult:
        """
        Search, score against the user's résumé, and rank.

        Args:
            user_id: Owner of the résumé to score against
            filters: Canonical filter specification
            band: Match-score band applied to the displayed list

        Returns:
            SearchResult whose best_matches come from the unfiltered scored set
        """
        postings, from_cache, fingerprint = self.fetch_postings(filters)

        profile = self.resumes.get(user_id)
        scored = self.scoring.score_all(postings, profile.resume_text)

        displayed = filter_by_band(scored, band)
        top = best_matches(scored, self.best_matches_limit)

        logger.info(
            f"Search for user {user_id}: {len(postings)} postings "
            f"({'cache' if from_cache else 'source'}), {len(displayed)} in band '{band}'"
        )

        return SearchResult(
            jobs=displayed,
            best_matches=top,
            total=len(displayed),
            page=filters.page,
            has_more=len(displayed) == filters.page_size,
            from_cache=from_cache,
            fingerprint=fingerprint
        )

    def refresh(self) -> int:
        """Drop cached searches so the next request refetches."""
        return self.cache.clear()
