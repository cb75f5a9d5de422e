"""Matcher Module - band filtering and best-match selection over scored jobs."""
from core.matcher.aggregator import (
    filter_by_band,
    best_matches,
    MATCH_BANDS,
    BAND_ALL,
    BAND_HIGH,
    BAND_MEDIUM,
    DEFAULT_BEST_MATCHES_LIMIT
)

__all__ = [
    'filter_by_band', 'best_matches', 'MATCH_BANDS',
    'BAND_ALL', 'BAND_HIGH', 'BAND_MEDIUM', 'DEFAULT_BEST_MATCHES_LIMIT'
]
