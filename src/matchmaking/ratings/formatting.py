"""Human-readable summaries of rating changes."""

from __future__ import annotations

from matchmaking.ratings.calculator import round_half_up
from matchmaking.ratings.common import RatingDelta


def _signed(value: int) -> str:
    return f"+{value}" if value >= 0 else str(value)


def format_rating_delta(delta: RatingDelta) -> str:
    """Render one delta as ``name: old -> new (+change)`` plus tags for notable terms."""
    name = delta.username or f"player {delta.player_id}"
    line = f"{name}: {delta.old_score} -> {delta.new_score} ({_signed(delta.change)})"

    breakdown = delta.breakdown
    performance = round_half_up(breakdown.performance)
    disadvantage = round_half_up(breakdown.disadvantage)
    placement = round_half_up(breakdown.placement_seeding)
    abandon = round_half_up(breakdown.abandon_penalty)

    if performance != 0:
        line += f" [perf: {_signed(performance)}]"
    if disadvantage > 0:
        line += f" [disadvantage: +{disadvantage}]"
    if placement > 0:
        line += f" [placement: +{placement}]"
    if abandon < 0:
        line += f" [abandon: {abandon}]"
    return line


__all__ = ["format_rating_delta"]
