"""Role-aware 5v5 team balancing by exhaustive slot search."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from matchmaking.balance.common import QueuedPlayer, RoleAssignment, TeamAssignment
from matchmaking.balance.roles import ROLE_SLOTS, role_priority
from matchmaking.common import Side

logger = logging.getLogger(__name__)


@dataclass
class _SlotFrame:
    """Search state for one slot: its ordered candidates and the one currently placed."""

    slot_index: int
    candidates: list[int]
    cursor: int = 0
    placed: int | None = None


class TeamBalancer:
    """Search the fixed slot order for the lowest score-difference split.

    Candidates for each slot are tried in (role priority, queue time, score
    descending) order, so among equally balanced splits the first one found
    is always the same. A perfectly even split ends the search early.
    """

    def __init__(self) -> None:
        self.slots = ROLE_SLOTS

    @property
    def pool_size(self) -> int:
        return len(self.slots)

    def balance(self, players: Sequence[QueuedPlayer]) -> TeamAssignment | None:
        if len(players) < self.pool_size:
            logger.debug(
                "not enough players to balance (have=%d need=%d)",
                len(players),
                self.pool_size,
            )
            return None

        ordered = sorted(players, key=lambda player: player.queued_at)
        best_picks = self._search(ordered)
        if best_picks is None:
            logger.debug("no role-complete split for %d players", len(ordered))
            return None

        assignment = self._build_assignment(ordered, best_picks)
        logger.debug(
            "balanced teams alpha=%d bravo=%d diff=%d",
            assignment.side_score(Side.ALPHA),
            assignment.side_score(Side.BRAVO),
            assignment.score_diff,
        )
        return assignment

    def _ordered_candidates(
        self,
        ordered: list[QueuedPlayer],
        used: list[bool],
        slot_index: int,
    ) -> list[int]:
        role = self.slots[slot_index].role
        ranked: list[tuple[int, int]] = []
        for index, player in enumerate(ordered):
            if used[index]:
                continue
            priority = role_priority(player, role)
            if priority is not None:
                ranked.append((priority, index))

        ranked.sort(
            key=lambda item: (
                item[0],
                ordered[item[1]].queued_at,
                -ordered[item[1]].score,
            )
        )
        return [index for _, index in ranked]

    def _score_diff(self, ordered: list[QueuedPlayer], picks: list[int]) -> int:
        totals = {Side.ALPHA: 0, Side.BRAVO: 0}
        for slot, index in zip(self.slots, picks):
            totals[slot.side] += ordered[index].score
        return abs(totals[Side.ALPHA] - totals[Side.BRAVO])

    def _search(self, ordered: list[QueuedPlayer]) -> list[int] | None:
        used = [False] * len(ordered)
        picks: list[int] = []
        best_picks: list[int] | None = None
        best_diff: int | None = None

        stack = [_SlotFrame(slot_index=0, candidates=self._ordered_candidates(ordered, used, 0))]
        while stack:
            frame = stack[-1]
            if frame.placed is not None:
                used[frame.placed] = False
                picks.pop()
                frame.placed = None

            if frame.cursor >= len(frame.candidates):
                stack.pop()
                continue

            index = frame.candidates[frame.cursor]
            frame.cursor += 1
            used[index] = True
            picks.append(index)
            frame.placed = index

            next_slot = frame.slot_index + 1
            if next_slot < len(self.slots):
                stack.append(
                    _SlotFrame(
                        slot_index=next_slot,
                        candidates=self._ordered_candidates(ordered, used, next_slot),
                    )
                )
                continue

            diff = self._score_diff(ordered, picks)
            if best_diff is None or diff < best_diff:
                best_diff = diff
                best_picks = list(picks)
            if diff == 0:
                break

        return best_picks

    def _build_assignment(self, ordered: list[QueuedPlayer], picks: list[int]) -> TeamAssignment:
        alpha: list[RoleAssignment] = []
        bravo: list[RoleAssignment] = []
        for slot, index in zip(self.slots, picks):
            target = alpha if slot.side is Side.ALPHA else bravo
            target.append(RoleAssignment(player=ordered[index], role=slot.role))
        return TeamAssignment(alpha=tuple(alpha), bravo=tuple(bravo))


def balance_teams(players: Sequence[QueuedPlayer]) -> TeamAssignment | None:
    """Split queued players into two role-complete teams, or None if impossible."""
    return TeamBalancer().balance(players)


__all__ = ["TeamBalancer", "balance_teams"]
