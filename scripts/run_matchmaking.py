#!/usr/bin/env python3
"""Balance queue snapshots and rate finished matches from the command line."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from matchmaking.balance import balance_teams
from matchmaking.common import Side
from matchmaking.exceptions import ConfigurationError, InvalidMatchDataError
from matchmaking.ratings import (
    RatingSystemConfig,
    compute_deltas,
    format_rating_delta,
    load_rating_system_configs,
)
from matchmaking.snapshots import load_json, parse_match_result, parse_queue_snapshot

DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "ratings" / "mmr"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Team balancing and MMR commands.",
)


@app.callback()
def main(
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)."),
    ] = "WARNING",
) -> None:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"unknown log level '{log_level}'", param_hint="--log-level")
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _select_config(config_dir: Path, config_name: str | None) -> RatingSystemConfig:
    try:
        configs = load_rating_system_configs(config_dir)
    except ConfigurationError as exc:
        raise typer.BadParameter(exc.message, param_hint="--config-dir") from exc

    if config_name is None:
        return configs[0]
    for config in configs:
        if config.name == config_name or config.file_path.name == config_name:
            return config
    raise typer.BadParameter(
        f"No config named '{config_name}' found in {config_dir}",
        param_hint="--config-name",
    )


@app.command()
def balance(
    snapshot: Annotated[
        Path,
        typer.Argument(help="JSON list of queued players.", exists=True, dir_okay=False),
    ],
) -> None:
    """Split a queue snapshot into two role-complete teams."""
    try:
        players = parse_queue_snapshot(load_json(snapshot))
    except InvalidMatchDataError as exc:
        raise typer.BadParameter(exc.message, param_hint="SNAPSHOT") from exc

    assignment = balance_teams(players)
    if assignment is None:
        typer.echo(f"no balanced split for {len(players)} players")
        raise typer.Exit(code=1)

    for side in (Side.ALPHA, Side.BRAVO):
        typer.echo(f"{side.value} score={assignment.side_score(side)}")
        for entry in assignment.side(side):
            name = entry.player.username or f"player {entry.player.player_id}"
            typer.echo(f"  {entry.role.value:<6} {name:<20} score={entry.player.score}")
    typer.echo(f"diff={assignment.score_diff}")


@app.command()
def rate(
    result: Annotated[
        Path,
        typer.Argument(help="JSON match result with winning_side and players.", exists=True, dir_okay=False),
    ],
    config_dir: Annotated[
        Path,
        typer.Option("--config-dir", help="Directory of rating TOML configs."),
    ] = DEFAULT_CONFIG_DIR,
    config_name: Annotated[
        str | None,
        typer.Option(
            "--config-name",
            help="System name or filename to use (defaults to the first config).",
        ),
    ] = None,
) -> None:
    """Compute every player's MMR change for a finished match."""
    system = _select_config(config_dir, config_name)
    try:
        winning_side, records = parse_match_result(load_json(result))
        deltas = compute_deltas(records, winning_side, system.parameters)
    except InvalidMatchDataError as exc:
        raise typer.BadParameter(exc.message, param_hint="RESULT") from exc

    typer.echo(f"system={system.name} players={len(deltas)}")
    for delta in deltas:
        typer.echo(format_rating_delta(delta))


@app.command()
def show_config(
    config_dir: Annotated[
        Path,
        typer.Option("--config-dir", help="Directory of rating TOML configs."),
    ] = DEFAULT_CONFIG_DIR,
) -> None:
    """Print every rating system found in the config directory."""
    try:
        configs = load_rating_system_configs(config_dir)
    except ConfigurationError as exc:
        raise typer.BadParameter(exc.message, param_hint="--config-dir") from exc

    for config in configs:
        typer.echo(f"{config.name} file={config.file_path.name}")
        for key, value in config.as_config_json().items():
            typer.echo(f"  {key}={value}")


if __name__ == "__main__":
    app()
