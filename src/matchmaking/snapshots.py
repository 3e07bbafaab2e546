"""Build engine inputs from JSON queue and match-result snapshots."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from matchmaking.balance.common import DEFAULT_ROLES, QueuedPlayer
from matchmaking.common import Role, Side
from matchmaking.exceptions import InvalidMatchDataError
from matchmaking.ratings.common import PerformanceRecord

_MISSING = object()


def _enum_value(enum_type: type[Role] | type[Side], raw: Any, *, field: str, player_id: Any) -> Any:
    try:
        return enum_type(str(raw).upper())
    except ValueError as exc:
        raise InvalidMatchDataError(
            f"player_id={player_id} has invalid {field} {raw!r}",
            details={"player_id": player_id, "field": field},
        ) from exc


def _int_value(row: dict[str, Any], field: str, *, player_id: Any, default: Any = _MISSING) -> int:
    raw = row.get(field, default)
    if raw is _MISSING:
        raise InvalidMatchDataError(
            f"row for player_id={player_id} is missing {field!r}",
            details={"player_id": player_id, "field": field},
        )
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        raise InvalidMatchDataError(
            f"player_id={player_id} has non-integer {field} {raw!r}",
            details={"player_id": player_id, "field": field},
        )
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidMatchDataError(
            f"player_id={player_id} has non-integer {field} {raw!r}",
            details={"player_id": player_id, "field": field},
        ) from exc


def _parse_time(raw: Any, *, player_id: Any) -> datetime:
    """Parse ISO text or epoch milliseconds into a UTC-aware datetime."""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return datetime.fromtimestamp(raw / 1000.0, tz=UTC)
    try:
        parsed = datetime.fromisoformat(str(raw))
    except ValueError as exc:
        raise InvalidMatchDataError(
            f"player_id={player_id} has invalid queued_at {raw!r}",
            details={"player_id": player_id, "field": "queued_at"},
        ) from exc
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def parse_queue_snapshot(raw_players: list[dict[str, Any]]) -> list[QueuedPlayer]:
    """Convert queue rows into QueuedPlayer values; missing roles fall back to the defaults."""
    players: list[QueuedPlayer] = []
    for row in raw_players:
        player_id = row.get("player_id")
        if "queued_at" not in row:
            raise InvalidMatchDataError(
                f"row for player_id={player_id} is missing 'queued_at'",
                details={"player_id": player_id, "field": "queued_at"},
            )
        primary_raw = row.get("primary_role") or DEFAULT_ROLES[0].value
        secondary_raw = row.get("secondary_role") or DEFAULT_ROLES[1].value
        players.append(
            QueuedPlayer(
                player_id=_int_value(row, "player_id", player_id=player_id),
                score=_int_value(row, "score", player_id=player_id),
                queued_at=_parse_time(row["queued_at"], player_id=player_id),
                primary_role=_enum_value(Role, primary_raw, field="primary_role", player_id=player_id),
                secondary_role=_enum_value(Role, secondary_raw, field="secondary_role", player_id=player_id),
                username=row.get("username"),
            )
        )
    return players


def parse_match_result(raw: dict[str, Any]) -> tuple[Side | None, list[PerformanceRecord]]:
    """Return ``(winning_side, records)`` from a match result payload."""
    winning_raw = raw.get("winning_side")
    winning_side = (
        None if winning_raw is None else _enum_value(Side, winning_raw, field="winning_side", player_id=None)
    )

    records: list[PerformanceRecord] = []
    for row in raw.get("players", []):
        player_id = row.get("player_id")
        if "side" not in row:
            raise InvalidMatchDataError(
                f"row for player_id={player_id} is missing 'side'",
                details={"player_id": player_id, "field": "side"},
            )
        side = _enum_value(Side, row["side"], field="side", player_id=player_id)
        records.append(
            PerformanceRecord(
                player_id=_int_value(row, "player_id", player_id=player_id),
                side=side,
                score=_int_value(row, "score", player_id=player_id),
                matches_played=_int_value(row, "matches_played", player_id=player_id, default=0),
                placement_completed=bool(row.get("placement_completed", False)),
                kills=_int_value(row, "kills", player_id=player_id, default=0),
                deaths=_int_value(row, "deaths", player_id=player_id, default=0),
                assists=_int_value(row, "assists", player_id=player_id, default=0),
                headshots=_int_value(row, "headshots", player_id=player_id, default=0),
                won=bool(row["won"]) if "won" in row else side is winning_side,
                abandoned=bool(row.get("abandoned", False)),
                username=row.get("username"),
            )
        )
    return winning_side, records


def load_json(file_path: Path) -> Any:
    with file_path.open("r", encoding="utf-8") as file:
        return json.load(file)


__all__ = ["load_json", "parse_match_result", "parse_queue_snapshot"]
