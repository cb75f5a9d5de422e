import math



def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's round() uses banker's rounding (round(50.5) == 50); scores are
    displayed as whole percentages and should round the way users expect.
    """
    return int(math.floor(value + 0.5))


def clamp_score(value: float, low: int = 0, high: int = 100) -> int:
    """Round and clamp a raw score into the [low, high] integer range."""
    return max(low, min(high, round_half_up(value)))


def truncate_text(text: str, max_chars: int) -> str:
    """Limit text length before sending it to an external provider."""
    if not text:
        return ""
    return text[:max_chars] if max_chars > 0 else text
