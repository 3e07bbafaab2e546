"""Exception hierarchy for the matchmaking core.

Balancing failures are reported as ``None`` results, not exceptions. The
errors below are caller errors: bad configuration or match data that must
not be rated.
"""

from __future__ import annotations

from typing import Any


class MatchmakingError(Exception):
    """Base exception for all matchmaking errors.

    Attributes:
        message: Human-readable error description
        details: Extra context for logging/debugging
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(MatchmakingError, ValueError):
    """Raised when a rating configuration is malformed."""


class InvalidMatchDataError(MatchmakingError, ValueError):
    """Raised when a match result cannot be rated."""


__all__ = ["ConfigurationError", "InvalidMatchDataError", "MatchmakingError"]
