from .features import extract_features
from .resolver import (
    MATCH_THRESHOLD,
    DuplicateDetector,
    InvalidArgument,
    MatchResult,
    find_matches,
)
from .scoring import ScoreBreakdown, score_record

__all__ = [
    "MATCH_THRESHOLD",
    "DuplicateDetector",
    "InvalidArgument",
    "MatchResult",
    "ScoreBreakdown",
    "extract_features",
    "find_matches",
    "score_record",
]
