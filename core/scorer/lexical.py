#!/usr/bin/env python3
"""
Lexical Scoring - keyword overlap between a job and a résumé.

Used when no similarity provider is configured, and for individual jobs whose
embedding could not be produced.
"""
import hashlib
from typing import Callable, List

from core.models import JobPosting
from core.utils import clamp_score

MIN_KEYWORD_LENGTH = 3
MAX_KEYWORDS_CONSIDERED = 10
NOISE_AMPLITUDE = 10

NoiseFunction = Callable[[JobPosting], int]


def no_noise(job: JobPosting) -> int:
    return 0


def seeded_noise(job: JobPosting) -> int:
    """
    Deterministic perturbation in [-NOISE_AMPLITUDE, +NOISE_AMPLITUDE].

    Derived from the job id so a posting always gets the same offset, which
    spreads out otherwise identical keyword scores without making results
    change between requests.
    """
    digest = hashlib.sha256(job.id.encode('utf-8')).hexdigest()
    span = 2 * NOISE_AMPLITUDE + 1
    return int(digest[:8], 16) % span - NOISE_AMPLITUDE


def extract_keywords(job: JobPosting) -> List[str]:
    """Lowercased title words followed by skills, duplicates kept."""
    keywords = job.title.lower().split()
    keywords.extend(skill.lower() for skill in job.skills)
    return keywords


def count_keyword_matches(keywords: List[str], resume_text: str) -> int:
    resume_lower = resume_text.lower()
    return sum(
        1 for keyword in keywords
        if len(keyword) >= MIN_KEYWORD_LENGTH and keyword in resume_lower
    )


def baseline_score(job: JobPosting, resume_text: str) -> float:
    """Keyword-overlap percentage before noise and clamping."""
    keywords = extract_keywords(job)
    max_possible = min(len(keywords), MAX_KEYWORDS_CONSIDERED)
    if max_possible == 0:
        return 0.0
    matches = count_keyword_matches(keywords, resume_text)
    return matches / max_possible * 100


def lexical_score(job: JobPosting, resume_text: str, noise: NoiseFunction = no_noise) -> int:
    return clamp_score(baseline_score(job, resume_text) + noise(job))
