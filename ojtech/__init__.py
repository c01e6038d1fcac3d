from .scoring import match_score, score_breakdown

__version__ = "0.1.0"

__all__ = ["match_score", "score_breakdown", "__version__"]
