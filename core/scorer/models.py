#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""
from dataclasses import dataclass
from typing import Any, Dict

from core.models import JobPosting
from core.scorer.badges import MatchBadge

STRATEGY_SEMANTIC = "semantic"
STRATEGY_LEXICAL = "lexical"
STRATEGY_NONE = "none"


@dataclass(frozen=True)
class ScoredJob:
    """A job posting annotated with its match against one résumé."""
    job: JobPosting
    match_score: int
    match_badge: MatchBadge
    match_explanation: str
    strategy: str = STRATEGY_NONE

    @property
    def id(self) -> str:
        return self.job.id

    def to_dict(self) -> Dict[str, Any]:
        data = self.job.to_dict()
        data.update({
            "match_score": self.match_score,
            "match_badge": self.match_badge.value,
            "match_explanation": self.match_explanation,
        })
        return data
