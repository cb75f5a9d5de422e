"""
Badge and template explanations.

The score bands are defined once here and shared by both scoring strategies,
the match aggregator and the templated explanations.
"""
from enum import Enum

HIGH_MATCH_THRESHOLD = 70    # strictly above => green / "high"
MEDIUM_MATCH_THRESHOLD = 40  # at or above (up to HIGH) => yellow / "medium"

NO_RESUME_EXPLANATION = "Upload a resume to see match scores"


class MatchBadge(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    GRAY = "gray"


def is_high_match(score: int) -> bool:
    return score > HIGH_MATCH_THRESHOLD


def is_medium_match(score: int) -> bool:
    return MEDIUM_MATCH_THRESHOLD <= score <= HIGH_MATCH_THRESHOLD


def badge_for_score(score: int) -> MatchBadge:
    if is_high_match(score):
        return MatchBadge.GREEN
    if is_medium_match(score):
        return MatchBadge.YELLOW
    return MatchBadge.GRAY


_TEMPLATES = {
    MatchBadge.GREEN: (
        "Strong match! Your skills and experience align well with this role. "
        "Key qualifications match the job requirements."
    ),
    MatchBadge.YELLOW: (
        "Moderate match. Some of your skills are relevant, but additional "
        "qualifications may be beneficial."
    ),
    MatchBadge.GRAY: (
        "Lower match score. This role may require skills or experience not "
        "prominently featured in your resume."
    ),
}


def template_explanation(score: int) -> str:
    """Static explanation keyed by the same bands as the badge."""
    return _TEMPLATES[badge_for_score(score)]
