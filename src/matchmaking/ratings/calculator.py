"""Post-match skill-score (MMR) logic.

Each non-abandoning player's change is the sum of:

- an Elo term, ``K * (actual - expected)``, with K tiered by experience and
  the expectation taken against the opposing side's mean score;
- a performance term scaling ``|Elo term|`` by how the player's K/D, kill
  participation and headshot accuracy compare with their own side;
- a bonus for winning short-handed;
- a one-off seeding bonus for dominant placement-match wins.

The sum is capped at ``max_change`` (lifted to the seeding bonus when it
applies) and the resulting score is kept inside ``[min_score, max_score]``.
Abandoning players get a flat penalty instead.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, fields

from matchmaking.common import TEAM_SIZE, Side
from matchmaking.exceptions import ConfigurationError
from matchmaking.ratings.common import PerformanceRecord, RatingBreakdown, RatingDelta
from matchmaking.ratings.validation import validate_match_data

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RatingConfig:
    initial_score: int = 1000
    placement_matches: int = 10
    new_player_matches: int = 50
    experienced_matches: int = 200
    placement_k_factor: float = 60.0
    new_player_k_factor: float = 32.0
    experienced_k_factor: float = 24.0
    veteran_k_factor: float = 16.0
    scale_factor: float = 400.0
    abandon_penalty: int = -50
    team_disadvantage_bonus: float = 25.0
    performance_multiplier: float = 0.15
    kd_ratio_weight: float = 0.50
    kill_participation_weight: float = 0.30
    headshot_accuracy_weight: float = 0.20
    headshot_accuracy_scale: float = 2.0
    placement_jump_threshold: float = 3.0
    placement_seeding_bonus: int = 300
    min_score: int = 0
    max_score: int = 3000
    max_change: int = 60

    def __post_init__(self) -> None:
        for name in (
            "placement_k_factor",
            "new_player_k_factor",
            "experienced_k_factor",
            "veteran_k_factor",
            "scale_factor",
            "max_change",
            "placement_matches",
        ):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"[rating].{name} must be > 0", details={name: getattr(self, name)})
        for name in (
            "team_disadvantage_bonus",
            "performance_multiplier",
            "kd_ratio_weight",
            "kill_participation_weight",
            "headshot_accuracy_weight",
            "headshot_accuracy_scale",
            "placement_jump_threshold",
            "placement_seeding_bonus",
        ):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"[rating].{name} must be >= 0", details={name: getattr(self, name)})
        if self.abandon_penalty > 0:
            raise ConfigurationError(
                "[rating].abandon_penalty must be <= 0",
                details={"abandon_penalty": self.abandon_penalty},
            )
        if self.min_score >= self.max_score:
            raise ConfigurationError(
                "[rating].min_score must be < max_score",
                details={"min_score": self.min_score, "max_score": self.max_score},
            )
        if not self.min_score <= self.initial_score <= self.max_score:
            raise ConfigurationError(
                "[rating].initial_score must be between min_score and max_score",
                details={"initial_score": self.initial_score},
            )
        if not self.placement_matches <= self.new_player_matches <= self.experienced_matches:
            raise ConfigurationError(
                "[rating] match thresholds must satisfy "
                "placement_matches <= new_player_matches <= experienced_matches"
            )

    def as_dict(self) -> dict[str, int | float]:
        return {field.name: getattr(self, field.name) for field in fields(self)}


def calculate_expected_score(rating: float, opponent_rating: float, scale_factor: float) -> float:
    """Compute the Elo expected score for one side."""
    return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / scale_factor))


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def performance_score(
    record: PerformanceRecord,
    teammates: Sequence[PerformanceRecord],
    config: RatingConfig,
) -> float:
    """Weighted K/D, kill participation and headshot accuracy; about 1.0 for an average player."""
    team_kills = sum(teammate.kills for teammate in teammates)
    kill_participation = (record.kills + record.assists) / team_kills if team_kills > 0 else 0.0
    headshot_accuracy = record.headshots / record.kills if record.kills > 0 else 0.0

    team_mean_kd = sum(teammate.kd_ratio for teammate in teammates) / len(teammates) if teammates else 0.0
    kd_score = record.kd_ratio / (team_mean_kd or 1.0)

    return (
        kd_score * config.kd_ratio_weight
        + kill_participation * config.kill_participation_weight
        + headshot_accuracy * config.headshot_accuracy_scale * config.headshot_accuracy_weight
    )


class MatchRatingCalculator:
    """Stateless per-match MMR calculator."""

    def __init__(self, config: RatingConfig | None = None) -> None:
        self.config = config or RatingConfig()

    def k_factor(self, matches_played: int) -> float:
        if matches_played < self.config.placement_matches:
            return self.config.placement_k_factor
        if matches_played < self.config.new_player_matches:
            return self.config.new_player_k_factor
        if matches_played < self.config.experienced_matches:
            return self.config.experienced_k_factor
        return self.config.veteran_k_factor

    def _clamp_score(self, value: float) -> float:
        return max(float(self.config.min_score), min(float(self.config.max_score), value))

    def _side_mean(self, records: Sequence[PerformanceRecord]) -> float:
        if not records:
            return float(self.config.initial_score)
        return sum(record.score for record in records) / float(len(records))

    def _abandon_delta(self, record: PerformanceRecord) -> RatingDelta:
        penalty = self.config.abandon_penalty
        return RatingDelta(
            player_id=record.player_id,
            side=record.side,
            old_score=record.score,
            new_score=round_half_up(self._clamp_score(record.score + penalty)),
            change=penalty,
            breakdown=RatingBreakdown(abandon_penalty=float(penalty)),
            username=record.username,
        )

    def _performance_term(
        self,
        record: PerformanceRecord,
        teammates: Sequence[PerformanceRecord],
        base: float,
    ) -> float:
        score = performance_score(record, teammates, self.config)
        bonus = (score - 1.0) * abs(base) * self.config.performance_multiplier
        logger.debug(
            "performance player_id=%s kd=%.2f score=%.2f bonus=%.1f",
            record.player_id,
            record.kd_ratio,
            score,
            bonus,
        )
        return bonus

    def _disadvantage_term(self, record: PerformanceRecord, disadvantage: int) -> float:
        if record.won and disadvantage > 0:
            return disadvantage * self.config.team_disadvantage_bonus
        return 0.0

    def _placement_term(self, record: PerformanceRecord) -> float:
        in_placement = (
            not record.placement_completed
            and record.matches_played < self.config.placement_matches
        )
        if not (in_placement and record.won):
            return 0.0
        if record.kda_ratio < self.config.placement_jump_threshold:
            return 0.0

        logger.info(
            "placement jump player_id=%s kda=%.2f bonus=+%d",
            record.player_id,
            record.kda_ratio,
            self.config.placement_seeding_bonus,
        )
        return float(self.config.placement_seeding_bonus)

    def _player_delta(
        self,
        record: PerformanceRecord,
        *,
        teammates: Sequence[PerformanceRecord],
        opponent_mean: float,
        disadvantage: int,
    ) -> RatingDelta:
        k_factor = self.k_factor(record.matches_played)
        expected = calculate_expected_score(
            rating=record.score,
            opponent_rating=opponent_mean,
            scale_factor=self.config.scale_factor,
        )
        actual = 1.0 if record.won else 0.0
        base = k_factor * (actual - expected)
        logger.debug(
            "elo player_id=%s score=%d opponent_mean=%.1f k=%s expected=%.2f delta=%.1f",
            record.player_id,
            record.score,
            opponent_mean,
            k_factor,
            expected,
            base,
        )

        placement_seeding = self._placement_term(record)
        max_change = float(self.config.max_change)
        if placement_seeding > 0.0:
            max_change = max(max_change, placement_seeding)

        breakdown = RatingBreakdown(
            base=base,
            performance=self._performance_term(record, teammates, base),
            disadvantage=self._disadvantage_term(record, disadvantage),
            placement_seeding=placement_seeding,
            # Needs cross-match history, which is not available here.
            win_streak=0.0,
        )
        total = max(-max_change, min(max_change, breakdown.total))

        return RatingDelta(
            player_id=record.player_id,
            side=record.side,
            old_score=record.score,
            new_score=round_half_up(self._clamp_score(record.score + total)),
            change=round_half_up(total),
            breakdown=breakdown,
            k_factor=k_factor,
            expected_score=expected,
            username=record.username,
        )

    def process_match(
        self,
        records: Sequence[PerformanceRecord],
        winning_side: Side | None = None,
    ) -> list[RatingDelta]:
        """Return one delta per record, in input order."""
        validate_match_data(records, winning_side)

        by_side: dict[Side, list[PerformanceRecord]] = {Side.ALPHA: [], Side.BRAVO: []}
        for record in records:
            by_side[record.side].append(record)

        means = {side: self._side_mean(members) for side, members in by_side.items()}
        disadvantages = {side: max(0, TEAM_SIZE - len(members)) for side, members in by_side.items()}
        logger.info(
            "side means alpha=%.1f bravo=%.1f",
            means[Side.ALPHA],
            means[Side.BRAVO],
        )

        deltas: list[RatingDelta] = []
        for record in records:
            if record.abandoned:
                deltas.append(self._abandon_delta(record))
                continue
            deltas.append(
                self._player_delta(
                    record,
                    teammates=by_side[record.side],
                    opponent_mean=means[record.side.opponent],
                    disadvantage=disadvantages[record.side],
                )
            )
        return deltas


def compute_deltas(
    records: Sequence[PerformanceRecord],
    winning_side: Side | None = None,
    config: RatingConfig | None = None,
) -> list[RatingDelta]:
    """Compute every player's rating change for one finished match."""
    return MatchRatingCalculator(config).process_match(records, winning_side)


__all__ = [
    "MatchRatingCalculator",
    "RatingConfig",
    "calculate_expected_score",
    "compute_deltas",
    "performance_score",
    "round_half_up",
]
