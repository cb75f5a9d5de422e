#!/usr/bin/env python3
"""
Scoring Module - résumé-to-job match scoring.

Public API:
- ScoringService: Main scoring service orchestrator
- ScoredJob: Dataclass for scored results

- models.py: Data structures (ScoredJob)
- badges.py: Score bands, badges and templated explanations
- similarity.py: Cosine similarity between embeddings
- lexical.py: Keyword-overlap scoring and deterministic noise
- strategies.py: Semantic and lexical strategies
- service.py: ScoringService orchestrator
"""

from core.scorer.badges import MatchBadge, badge_for_score
from core.scorer.models import ScoredJob
from core.scorer.service import ScoringService

__all__ = ['ScoringService', 'ScoredJob', 'MatchBadge', 'badge_for_score']
