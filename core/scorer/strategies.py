#!/usr/bin/env python3
"""
Scoring Strategies - semantic (embeddings) and lexical (keyword overlap).

Strategies form a chain: the semantic strategy hands jobs it cannot score to
its lexical fallback, and the lexical strategy never fails.
"""
import logging
import math
import time
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable, Dict, List, Optional, Sequence

from core.llm.interfaces import ExplanationProvider, SimilarityProvider
from core.models import JobPosting
from core.scorer.badges import badge_for_score, template_explanation
from core.scorer.lexical import NoiseFunction, lexical_score, no_noise
from core.scorer.models import STRATEGY_LEXICAL, STRATEGY_SEMANTIC, ScoredJob
from core.scorer.similarity import cosine_similarity, similarity_to_score
from core.utils import truncate_text

logger = logging.getLogger(__name__)


class ScoringStrategy(ABC):
    name: str

    @abstractmethod
    def score_batch(self, jobs: Sequence[JobPosting], resume_text: str) -> List[ScoredJob]:
        """Score every job, returning results in input order."""
        pass


class LexicalStrategy(ScoringStrategy):
    """Keyword-overlap scoring with templated explanations."""

    name = STRATEGY_LEXICAL

    def __init__(self, noise: NoiseFunction = no_noise):
        self.noise = noise

    def score_job(self, job: JobPosting, resume_text: str) -> ScoredJob:
        score = lexical_score(job, resume_text, self.noise)
        return ScoredJob(
            job=job,
            match_score=score,
            match_badge=badge_for_score(score),
            match_explanation=template_explanation(score),
            strategy=self.name
        )

    def score_batch(self, jobs: Sequence[JobPosting], resume_text: str) -> List[ScoredJob]:
        return [self.score_job(job, resume_text) for job in jobs]


class SemanticStrategy(ScoringStrategy):
    """
    Embedding similarity scoring.

    Provider calls fan out over a bounded thread pool. Each stage (job
    embeddings, explanations) gets a deadline proportional to the number of
    waves the pool needs; calls still running at the deadline are treated as
    failed.
    """

    name = STRATEGY_SEMANTIC

    def __init__(
        self,
        similarity: SimilarityProvider,
        fallback: LexicalStrategy,
        explainer: Optional[ExplanationProvider] = None,
        resume_max_chars: int = 8000,
        job_max_chars: int = 4000,
        notable_threshold: int = 50,
        max_workers: int = 8,
        provider_timeout_seconds: float = 30.0
    ):
        self.similarity = similarity
        self.fallback = fallback
        self.explainer = explainer
        self.resume_max_chars = resume_max_chars
        self.job_max_chars = job_max_chars
        self.notable_threshold = notable_threshold
        self.max_workers = max(1, max_workers)
        self.provider_timeout_seconds = provider_timeout_seconds

    def _job_text(self, job: JobPosting) -> str:
        return truncate_text(f"{job.title} {job.description}", self.job_max_chars)

    def _stage_timeout(self, calls: int) -> float:
        waves = math.ceil(calls / self.max_workers) if calls else 1
        return self.provider_timeout_seconds * waves

    def _run_bounded(
        self,
        calls: Dict[int, Callable[[], object]]
    ) -> Dict[int, object]:
        """
        Run provider calls concurrently and collect what finished in time.

        Returns a dict with one entry per index; failed or timed-out calls map
        to the exception that stands in for their result.
        """
        if not calls:
            return {}

        pool = ThreadPoolExecutor(max_workers=min(self.max_workers, len(calls)))
        try:
            futures: Dict[int, Future] = {idx: pool.submit(fn) for idx, fn in calls.items()}
            wait(futures.values(), timeout=self._stage_timeout(len(calls)))

            results: Dict[int, object] = {}
            for idx, future in futures.items():
                if not future.done():
                    future.cancel()
                    results[idx] = TimeoutError(
                        f"Provider call exceeded {self.provider_timeout_seconds}s"
                    )
                    continue
                exc = future.exception()
                results[idx] = exc if exc is not None else future.result()
            return results
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

    def _embed_resume(self, resume_text: str) -> Optional[List[float]]:
        text = truncate_text(resume_text, self.resume_max_chars)
        result = self._run_bounded({0: lambda: self.similarity.embed(text)})[0]
        if isinstance(result, BaseException):
            logger.warning(f"Resume embedding failed, scoring batch lexically: {result}")
            return None
        return result

    def score_batch(self, jobs: Sequence[JobPosting], resume_text: str) -> List[ScoredJob]:
        if not jobs:
            return []

        resume_vector = self._embed_resume(resume_text)
        if resume_vector is None:
            return self.fallback.score_batch(jobs, resume_text)

        embeddings = self._run_bounded({
            idx: (lambda job=job: self.similarity.embed(self._job_text(job)))
            for idx, job in enumerate(jobs)
        })

        results: List[Optional[ScoredJob]] = [None] * len(jobs)
        semantic_scores: Dict[int, int] = {}
        for idx, job in enumerate(jobs):
            outcome = embeddings[idx]
            if not isinstance(outcome, BaseException):
                try:
                    semantic_scores[idx] = similarity_to_score(
                        cosine_similarity(resume_vector, outcome)
                    )
                    continue
                except (TypeError, ValueError) as e:
                    outcome = e
            logger.warning(f"Error scoring job {job.id}, using keyword fallback: {outcome}")
            results[idx] = self.fallback.score_job(job, resume_text)

        explanations = self._explain(jobs, resume_text, semantic_scores)

        for idx, score in semantic_scores.items():
            results[idx] = ScoredJob(
                job=jobs[idx],
                match_score=score,
                match_badge=badge_for_score(score),
                match_explanation=explanations.get(idx) or template_explanation(score),
                strategy=self.name
            )

        return results

    def _explain(
        self,
        jobs: Sequence[JobPosting],
        resume_text: str,
        scores: Dict[int, int]
    ) -> Dict[int, str]:
        """Request explanations for notable scores; failures are left out."""
        if self.explainer is None:
            return {}

        calls = {
            idx: (lambda job=jobs[idx], score=score: self.explainer.explain(
                job.title, job.description, resume_text, score
            ))
            for idx, score in scores.items()
            if score > self.notable_threshold
        }
        if not calls:
            return {}

        started = time.monotonic()
        outcomes = self._run_bounded(calls)
        explanations: Dict[int, str] = {}
        for idx, outcome in outcomes.items():
            if isinstance(outcome, BaseException) or not isinstance(outcome, str) or not outcome.strip():
                logger.warning(f"Explanation unavailable for job {jobs[idx].id}, using template: {outcome!r}")
                continue
            explanations[idx] = outcome
        logger.debug(f"Explained {len(explanations)}/{len(calls)} notable matches in {time.monotonic() - started:.2f}s")
        return explanations
