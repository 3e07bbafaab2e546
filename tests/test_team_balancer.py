"""Unit tests for role-aware team balancing."""

from __future__ import annotations

from datetime import datetime, timedelta

from matchmaking.balance import QueuedPlayer, TeamAssignment, balance_teams
from matchmaking.common import Role, Side

BASE_TIME = datetime(2026, 1, 1, 12, 0, 0)


def _player(
    player_id: int,
    score: int,
    primary: Role,
    secondary: Role | None = None,
    *,
    minute: int | None = None,
) -> QueuedPlayer:
    return QueuedPlayer(
        player_id=player_id,
        score=score,
        queued_at=BASE_TIME + timedelta(minutes=player_id if minute is None else minute),
        primary_role=primary,
        secondary_role=primary if secondary is None else secondary,
    )


def _role_pairs(scores: dict[Role, tuple[int, int]]) -> list[QueuedPlayer]:
    """Two dedicated players per slot role, queued in id order."""
    players: list[QueuedPlayer] = []
    player_id = 1
    for role in (Role.SNIPER, Role.T1, Role.T2, Role.T3, Role.T4):
        for score in scores[role]:
            players.append(_player(player_id, score, role))
            player_id += 1
    return players


def _roles_by_player(assignment: TeamAssignment, side: Side) -> dict[int, Role]:
    return {entry.player.player_id: entry.role for entry in assignment.side(side)}


def test_fewer_than_ten_players_returns_none() -> None:
    players = _role_pairs(
        {role: (1000, 1000) for role in (Role.SNIPER, Role.T1, Role.T2, Role.T3, Role.T4)}
    )[:9]
    assert balance_teams(players) is None


def test_unfillable_sniper_slot_returns_none() -> None:
    players = [_player(player_id, 1000, Role.T1, Role.T2) for player_id in range(1, 11)]
    assert balance_teams(players) is None


def test_missing_role_coverage_returns_none_even_with_snipers() -> None:
    players = [_player(1, 1000, Role.SNIPER), _player(2, 1000, Role.SNIPER)]
    players += [_player(player_id, 1000, Role.T1, Role.T2) for player_id in range(3, 11)]
    assert balance_teams(players) is None


def test_lowest_difference_split_keeps_role_priority() -> None:
    players = _role_pairs(
        {
            Role.SNIPER: (1000, 1100),
            Role.T1: (1000, 1100),
            Role.T2: (1000, 1100),
            Role.T3: (1000, 1000),
            Role.T4: (1000, 1000),
        }
    )

    assignment = balance_teams(players)

    assert assignment is not None
    assert assignment.score_diff == 100
    assert _roles_by_player(assignment, Side.ALPHA) == {
        1: Role.SNIPER,
        3: Role.T1,
        6: Role.T2,
        7: Role.T3,
        9: Role.T4,
    }
    assert _roles_by_player(assignment, Side.BRAVO) == {
        2: Role.SNIPER,
        4: Role.T1,
        5: Role.T2,
        8: Role.T3,
        10: Role.T4,
    }


def test_perfect_split_is_returned() -> None:
    players = _role_pairs(
        {
            Role.SNIPER: (1000, 1100),
            Role.T1: (1000, 1100),
            Role.T2: (1100, 1100),
            Role.T3: (1000, 1000),
            Role.T4: (1000, 1000),
        }
    )

    assignment = balance_teams(players)

    assert assignment is not None
    assert assignment.score_diff == 0
    assert assignment.side_score(Side.ALPHA) == assignment.side_score(Side.BRAVO) == 5200
    assert set(_roles_by_player(assignment, Side.ALPHA)) == {1, 4, 5, 7, 9}


def test_assignment_uses_ten_distinct_players_five_per_side() -> None:
    players = _role_pairs(
        {
            Role.SNIPER: (1500, 900),
            Role.T1: (1200, 1300),
            Role.T2: (800, 1700),
            Role.T3: (1100, 1000),
            Role.T4: (1400, 1250),
        }
    )

    assignment = balance_teams(players)

    assert assignment is not None
    assert len(assignment.alpha) == 5
    assert len(assignment.bravo) == 5
    assert sorted(assignment.player_ids()) == list(range(1, 11))
    for side in (Side.ALPHA, Side.BRAVO):
        roles = sorted(entry.role.value for entry in assignment.side(side))
        assert roles == ["SNIPER", "T1", "T2", "T3", "T4"]


def test_snipers_land_on_opposite_sniper_slots() -> None:
    players = _role_pairs(
        {
            Role.SNIPER: (2000, 500),
            Role.T1: (1000, 1010),
            Role.T2: (1020, 1030),
            Role.T3: (1040, 1050),
            Role.T4: (1060, 1070),
        }
    )

    assignment = balance_teams(players)

    assert assignment is not None
    alpha_sniper = next(e for e in assignment.alpha if e.role is Role.SNIPER)
    bravo_sniper = next(e for e in assignment.bravo if e.role is Role.SNIPER)
    assert {alpha_sniper.player.player_id, bravo_sniper.player.player_id} == {1, 2}


def test_smg_players_fill_every_rifle_slot() -> None:
    players = [
        _player(1, 1200, Role.SNIPER, Role.SMG),
        _player(2, 1100, Role.SNIPER, Role.SMG),
    ]
    players += [
        _player(player_id, 900 + player_id * 25, Role.SMG, Role.T1) for player_id in range(3, 11)
    ]

    assignment = balance_teams(players)

    assert assignment is not None
    snipers = {
        entry.player.player_id
        for entry in (*assignment.alpha, *assignment.bravo)
        if entry.role is Role.SNIPER
    }
    assert snipers == {1, 2}
    assert sorted(assignment.player_ids()) == list(range(1, 11))


def test_only_ten_players_are_selected_from_a_larger_pool() -> None:
    players = _role_pairs(
        {role: (1000, 1050) for role in (Role.SNIPER, Role.T1, Role.T2, Role.T3, Role.T4)}
    )
    players.append(_player(11, 1000, Role.SNIPER, Role.T1))
    players.append(_player(12, 1000, Role.T4, Role.T3))

    assignment = balance_teams(players)

    assert assignment is not None
    assert len(set(assignment.player_ids())) == 10


def test_balance_is_deterministic_regardless_of_input_order() -> None:
    players = _role_pairs(
        {
            Role.SNIPER: (1310, 1290),
            Role.T1: (990, 1015),
            Role.T2: (1200, 1180),
            Role.T3: (870, 905),
            Role.T4: (1500, 1440),
        }
    )

    first = balance_teams(players)
    second = balance_teams(players)
    reversed_input = balance_teams(list(reversed(players)))

    assert first is not None
    assert first == second
    assert first == reversed_input


def test_earlier_queue_time_wins_ties_between_equal_candidates() -> None:
    players = _role_pairs(
        {role: (1000, 1000) for role in (Role.SNIPER, Role.T1, Role.T2, Role.T3, Role.T4)}
    )

    assignment = balance_teams(players)

    assert assignment is not None
    assert assignment.score_diff == 0
    assert set(_roles_by_player(assignment, Side.ALPHA)) == {1, 3, 5, 7, 9}
