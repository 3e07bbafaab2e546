"""Post-match rating modules."""

from matchmaking.ratings.calculator import (
    MatchRatingCalculator,
    RatingConfig,
    calculate_expected_score,
    compute_deltas,
    performance_score,
)
from matchmaking.ratings.common import PerformanceRecord, RatingBreakdown, RatingDelta
from matchmaking.ratings.config import (
    RatingSystemConfig,
    load_rating_system_config,
    load_rating_system_configs,
)
from matchmaking.ratings.formatting import format_rating_delta
from matchmaking.ratings.validation import validate_match_data

__all__ = [
    "MatchRatingCalculator",
    "PerformanceRecord",
    "RatingBreakdown",
    "RatingConfig",
    "RatingDelta",
    "RatingSystemConfig",
    "calculate_expected_score",
    "compute_deltas",
    "format_rating_delta",
    "load_rating_system_config",
    "load_rating_system_configs",
    "performance_score",
    "validate_match_data",
]
