from typing import Optional

# (lower bound, label), highest first
SCORE_LABELS = [
    (80, "Strong Match"),
    (60, "Good Match"),
    (40, "Potential Match"),
]


def match_label(score: Optional[int]) -> str:
    """Human-readable label for a match score."""
    if score is None:
        return "No match data"
    for threshold, label in SCORE_LABELS:
        if score >= threshold:
            return label
    return "Low Match"
