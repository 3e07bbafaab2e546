"""Shared types for team balancing."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from matchmaking.common import TEAM_SIZE, Role, Side

# Roles assumed for a player who never picked classes.
DEFAULT_ROLES = (Role.T3, Role.SMG)


@dataclass(frozen=True)
class QueuedPlayer:
    """One eligible player from the queue snapshot."""

    player_id: int
    score: int
    queued_at: datetime
    primary_role: Role = DEFAULT_ROLES[0]
    secondary_role: Role = DEFAULT_ROLES[1]
    username: str | None = None


@dataclass(frozen=True)
class RoleSlot:
    side: Side
    role: Role


@dataclass(frozen=True)
class RoleAssignment:
    player: QueuedPlayer
    role: Role


@dataclass(frozen=True)
class TeamAssignment:
    """A complete 5v5 split with one role per player."""

    alpha: tuple[RoleAssignment, ...]
    bravo: tuple[RoleAssignment, ...]

    def __post_init__(self) -> None:
        if len(self.alpha) != TEAM_SIZE or len(self.bravo) != TEAM_SIZE:
            raise ValueError(
                f"team assignment needs {TEAM_SIZE} players per side "
                f"(alpha={len(self.alpha)}, bravo={len(self.bravo)})"
            )

    def side(self, side: Side) -> tuple[RoleAssignment, ...]:
        return self.alpha if side is Side.ALPHA else self.bravo

    def side_score(self, side: Side) -> int:
        return sum(assignment.player.score for assignment in self.side(side))

    @property
    def score_diff(self) -> int:
        return abs(self.side_score(Side.ALPHA) - self.side_score(Side.BRAVO))

    def player_ids(self) -> list[int]:
        return [assignment.player.player_id for assignment in (*self.alpha, *self.bravo)]
