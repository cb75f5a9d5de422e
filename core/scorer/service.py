#!/usr/bin/env python3
"""
Scoring Service - ranks job postings against a résumé.

The strategy is picked once, when the service is built:
- Semantic: a similarity provider was injected. Embedding cosine similarity,
  with LLM explanations for notable scores when an explanation provider is
  also available.
- Lexical: no similarity provider. Keyword overlap with templated
  explanations.

Provider failures never escape score_all: individual jobs fall back to the
lexical strategy and explanations fall back to templates.
"""
import logging
from typing import List, Optional, Sequence

from core.config_loader import ScoringConfig
from core.llm.interfaces import ExplanationProvider, SimilarityProvider
from core.models import JobPosting
from core.scorer.badges import MatchBadge, NO_RESUME_EXPLANATION
from core.scorer.lexical import NoiseFunction, no_noise, seeded_noise
from core.scorer.models import STRATEGY_NONE, ScoredJob
from core.scorer.strategies import LexicalStrategy, ScoringStrategy, SemanticStrategy

logger = logging.getLogger(__name__)


class ScoringService:
    """
    Service for scoring job postings against a résumé.

    Output order always matches input order; sorting is left to the match
    aggregator.
    """

    def __init__(
        self,
        similarity_provider: Optional[SimilarityProvider] = None,
        explanation_provider: Optional[ExplanationProvider] = None,
        config: Optional[ScoringConfig] = None,
        noise: Optional[NoiseFunction] = None
    ):
        self.config = config or ScoringConfig()
        if noise is None:
            noise = seeded_noise if self.config.lexical_noise else no_noise

        lexical = LexicalStrategy(noise=noise)
        if similarity_provider is not None:
            self.strategy: ScoringStrategy = SemanticStrategy(
                similarity=similarity_provider,
                fallback=lexical,
                explainer=explanation_provider,
                resume_max_chars=self.config.resume_max_chars,
                job_max_chars=self.config.job_max_chars,
                notable_threshold=self.config.notable_threshold,
                max_workers=self.config.max_workers,
                provider_timeout_seconds=self.config.provider_timeout_seconds
            )
        else:
            self.strategy = lexical

        logger.info(f"Job scoring strategy: {self.strategy.name}")

    @property
    def strategy_name(self) -> str:
        return self.strategy.name

    def score_all(
        self,
        jobs: Sequence[JobPosting],
        resume_text: Optional[str]
    ) -> List[ScoredJob]:
        """Score every job against the résumé.

        Args:
            jobs: Postings to score
            resume_text: Résumé text, or None when the user has not uploaded one

        Returns:
            One ScoredJob per input job, in input order
        """
        if not resume_text or not resume_text.strip():
            return [
                ScoredJob(
                    job=job,
                    match_score=0,
                    match_badge=MatchBadge.GRAY,
                    match_explanation=NO_RESUME_EXPLANATION,
                    strategy=STRATEGY_NONE
                )
                for job in jobs
            ]

        scored = self.strategy.score_batch(jobs, resume_text)
        logger.debug(f"Scored {len(scored)} jobs using {self.strategy.name} strategy")
        return scored

    def score_one(self, job: JobPosting, resume_text: Optional[str]) -> ScoredJob:
        """Score a single job (on-demand scoring)."""
        return self.score_all([job], resume_text)[0]
