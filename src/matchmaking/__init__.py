"""Team balancing and post-match rating for 5v5 ranked matches."""

from matchmaking.common import TEAM_SIZE, Role, Side
from matchmaking.exceptions import ConfigurationError, InvalidMatchDataError, MatchmakingError

__all__ = [
    "ConfigurationError",
    "InvalidMatchDataError",
    "MatchmakingError",
    "Role",
    "Side",
    "TEAM_SIZE",
]
