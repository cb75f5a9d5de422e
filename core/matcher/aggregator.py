#!/usr/bin/env python3
"""
Match Aggregator - score-band filtering and best-match selection.
"""
from typing import List, Sequence

from core.scorer.badges import is_high_match, is_medium_match
from core.scorer.models import ScoredJob

BAND_ALL = "all"
BAND_HIGH = "high"
BAND_MEDIUM = "medium"
MATCH_BANDS = (BAND_ALL, BAND_HIGH, BAND_MEDIUM)

DEFAULT_BEST_MATCHES_LIMIT = 8


def filter_by_band(scored_jobs: Sequence[ScoredJob], band: str) -> List[ScoredJob]:
    """
    Keep the jobs whose score falls in the requested band.

    Args:
        scored_jobs: Scored jobs in display order
        band: "all", "high" (>70) or "medium" (40-70 inclusive)

    Returns:
        Matching jobs, input order preserved

    Raises:
        ValueError: for an unknown band
    """
    if band == BAND_ALL:
        return list(scored_jobs)
    if band == BAND_HIGH:
        return [j for j in scored_jobs if is_high_match(j.match_score)]
    if band == BAND_MEDIUM:
        return [j for j in scored_jobs if is_medium_match(j.match_score)]
    raise ValueError(f"Unknown match band: {band!r}. Must be one of: {', '.join(MATCH_BANDS)}")


def best_matches(
    scored_jobs: Sequence[ScoredJob],
    limit: int = DEFAULT_BEST_MATCHES_LIMIT
) -> List[ScoredJob]:
    """
    Top ``limit`` jobs by score, highest first.

    Pass the unfiltered scored set: best matches do not depend on the active
    band filter. sorted() is stable, so ties keep their input order.
    """
    if limit <= 0:
        return []
    return sorted(scored_jobs, key=lambda j: j.match_score, reverse=True)[:limit]
