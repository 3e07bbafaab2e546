"""Shared types for post-match rating."""

from __future__ import annotations

from dataclasses import dataclass

from matchmaking.common import Side


@dataclass(frozen=True)
class PerformanceRecord:
    """Per-player match payload used by the rating calculator."""

    player_id: int
    side: Side
    score: int
    matches_played: int
    kills: int
    deaths: int
    assists: int
    headshots: int
    won: bool
    abandoned: bool = False
    placement_completed: bool = False
    username: str | None = None

    @property
    def kd_ratio(self) -> float:
        return self.kills / self.deaths if self.deaths > 0 else float(self.kills)

    @property
    def kda_ratio(self) -> float:
        total = self.kills + self.assists
        return total / self.deaths if self.deaths > 0 else float(total)


@dataclass(frozen=True)
class RatingBreakdown:
    """Additive components of one player's rating change."""

    base: float = 0.0
    performance: float = 0.0
    disadvantage: float = 0.0
    abandon_penalty: float = 0.0
    placement_seeding: float = 0.0
    win_streak: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.base
            + self.performance
            + self.disadvantage
            + self.abandon_penalty
            + self.placement_seeding
            + self.win_streak
        )


@dataclass(frozen=True)
class RatingDelta:
    player_id: int
    side: Side
    old_score: int
    new_score: int
    change: int
    breakdown: RatingBreakdown
    k_factor: float | None = None
    expected_score: float | None = None
    username: str | None = None


__all__ = ["PerformanceRecord", "RatingBreakdown", "RatingDelta"]
