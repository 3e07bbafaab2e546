"""Precondition checks for rating a finished match."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from matchmaking.common import Side
from matchmaking.exceptions import InvalidMatchDataError
from matchmaking.ratings.common import PerformanceRecord

MIN_SIDE_SIZE = 3
MAX_SIDE_SIZE_GAP = 2

_COUNT_FIELDS = ("kills", "deaths", "assists", "headshots", "matches_played")


def validate_match_data(
    records: Sequence[PerformanceRecord],
    winning_side: Side | None = None,
) -> None:
    """Raise InvalidMatchDataError unless the match is fit to be rated.

    Requires at least three players per side, side sizes within two of each
    other, non-negative counts and unique players. When ``winning_side`` is
    given, every non-abandoning player's win flag must agree with it.
    """
    for record in records:
        if not isinstance(record.side, Side):
            raise InvalidMatchDataError(
                f"player_id={record.player_id} has unknown side {record.side!r}",
                details={"player_id": record.player_id},
            )

    side_sizes = Counter(record.side for record in records)
    alpha_size = side_sizes[Side.ALPHA]
    bravo_size = side_sizes[Side.BRAVO]

    if alpha_size < MIN_SIDE_SIZE or bravo_size < MIN_SIDE_SIZE:
        raise InvalidMatchDataError(
            f"not enough players per side (alpha={alpha_size}, bravo={bravo_size})",
            details={"alpha": alpha_size, "bravo": bravo_size},
        )

    gap = abs(alpha_size - bravo_size)
    if gap > MAX_SIDE_SIZE_GAP:
        raise InvalidMatchDataError(
            f"side sizes differ by {gap} players",
            details={"alpha": alpha_size, "bravo": bravo_size},
        )

    duplicates = sorted(
        player_id
        for player_id, count in Counter(record.player_id for record in records).items()
        if count > 1
    )
    if duplicates:
        raise InvalidMatchDataError(
            f"duplicate player ids in match data: {duplicates}",
            details={"player_ids": duplicates},
        )

    for record in records:
        negative = [name for name in _COUNT_FIELDS if getattr(record, name) < 0]
        if negative:
            raise InvalidMatchDataError(
                f"player_id={record.player_id} has negative stats: {', '.join(negative)}",
                details={"player_id": record.player_id, "fields": negative},
            )

    if winning_side is None:
        return

    for record in records:
        if record.abandoned:
            continue
        if record.won != (record.side is winning_side):
            raise InvalidMatchDataError(
                f"player_id={record.player_id} on {record.side.value} has won={record.won} "
                f"but winning side is {winning_side.value}",
                details={"player_id": record.player_id, "winning_side": winning_side.value},
            )


__all__ = ["MAX_SIDE_SIZE_GAP", "MIN_SIDE_SIZE", "validate_match_data"]
