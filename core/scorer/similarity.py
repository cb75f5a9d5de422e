#!/usr/bin/env python3
"""
Similarity Calculations - cosine similarity between embedding vectors.
"""
from typing import Sequence

import numpy as np

from core.utils import clamp_score


def cosine_similarity(vec1: Sequence[float], vec2: Sequence[float]) -> float:
    """
    Calculate cosine similarity between two vectors.

    Args:
        vec1: First vector
        vec2: Second vector

    Returns:
        Raw cosine similarity in [-1.0, 1.0], or 0.0 if either vector is zero

    Raises:
        ValueError: if the vectors have different dimensions
    """
    a = np.asarray(vec1, dtype=float)
    b = np.asarray(vec2, dtype=float)
    if a.shape != b.shape:
        raise ValueError(f"Embedding dimensions differ: {a.shape} vs {b.shape}")

    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    return float(np.dot(a, b) / (norm_a * norm_b))


def similarity_to_score(similarity: float) -> int:
    """Map a cosine similarity onto the 0-100 match score."""
    return clamp_score(similarity * 100)
