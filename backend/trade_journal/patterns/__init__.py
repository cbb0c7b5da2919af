"""Pattern heuristics and their presentation helpers."""

from .detection import (
    PatternDetectionResult,
    PatternSummary,
    PatternType,
    TradingPattern,
    detect_patterns,
)
from .recommendations import pattern_recommendations

__all__ = [
    "PatternDetectionResult",
    "PatternSummary",
    "PatternType",
    "TradingPattern",
    "detect_patterns",
    "pattern_recommendations",
]
