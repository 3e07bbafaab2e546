"""Tests for TOML-based rating config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from matchmaking.exceptions import ConfigurationError
from matchmaking.ratings import (
    RatingConfig,
    load_rating_system_config,
    load_rating_system_configs,
)

REPO_CONFIG_DIR = Path(__file__).resolve().parents[1] / "configs" / "ratings" / "mmr"


def test_load_rating_system_configs_from_directory(tmp_path: Path) -> None:
    config_path = tmp_path / "default.toml"
    config_path.write_text(
        """
[system]
name = "system_a"
description = "A test system"

[rating]
initial_score = 1200
placement_matches = 5
placement_k_factor = 80.0
new_player_k_factor = 40.0
abandon_penalty = -75
team_disadvantage_bonus = 20.0
performance_multiplier = 0.2
placement_jump_threshold = 2.5
placement_seeding_bonus = 250
max_score = 4000
max_change = 50
""".strip()
    )

    configs = load_rating_system_configs(tmp_path)
    assert len(configs) == 1

    system = configs[0]
    assert system.name == "system_a"
    assert system.description == "A test system"
    assert system.file_path == config_path
    assert system.parameters.initial_score == 1200
    assert system.parameters.placement_matches == 5
    assert system.parameters.placement_k_factor == pytest.approx(80.0)
    assert system.parameters.new_player_k_factor == pytest.approx(40.0)
    assert system.parameters.abandon_penalty == -75
    assert system.parameters.team_disadvantage_bonus == pytest.approx(20.0)
    assert system.parameters.performance_multiplier == pytest.approx(0.2)
    assert system.parameters.placement_jump_threshold == pytest.approx(2.5)
    assert system.parameters.placement_seeding_bonus == 250
    assert system.parameters.max_score == 4000
    assert system.parameters.max_change == 50
    assert system.as_config_json()["veteran_k_factor"] == pytest.approx(16.0)


def test_all_rating_defaults_when_omitted(tmp_path: Path) -> None:
    (tmp_path / "defaulted.toml").write_text(
        """
[system]
name = "system_defaulted"

[rating]
""".strip()
    )

    system = load_rating_system_configs(tmp_path)[0]
    assert system.description is None
    assert system.parameters == RatingConfig()


def test_shipped_default_config_matches_code_defaults() -> None:
    system = load_rating_system_config(REPO_CONFIG_DIR / "default.toml")
    assert system.name == "mmr_default"
    assert system.parameters == RatingConfig()


def test_duplicate_names_raise_error(tmp_path: Path) -> None:
    template = """
[system]
name = "dup"

[rating]
max_change = 60
""".strip()
    (tmp_path / "a.toml").write_text(template)
    (tmp_path / "b.toml").write_text(template)

    with pytest.raises(ConfigurationError, match="Duplicate rating system names"):
        load_rating_system_configs(tmp_path)


def test_missing_name_raises(tmp_path: Path) -> None:
    (tmp_path / "nameless.toml").write_text("[rating]\nmax_change = 60\n")
    with pytest.raises(ConfigurationError, match=r"\[system\].name is required"):
        load_rating_system_configs(tmp_path)


def test_negative_k_factor_raises_with_file_path(tmp_path: Path) -> None:
    config_path = tmp_path / "invalid.toml"
    config_path.write_text(
        """
[system]
name = "system_invalid"

[rating]
veteran_k_factor = -4.0
""".strip()
    )

    with pytest.raises(ConfigurationError, match=r"invalid.toml: \[rating\].veteran_k_factor must be > 0"):
        load_rating_system_configs(tmp_path)


def test_unknown_rating_key_raises(tmp_path: Path) -> None:
    (tmp_path / "typo.toml").write_text(
        """
[system]
name = "system_typo"

[rating]
max_chnage = 60
""".strip()
    )

    with pytest.raises(ConfigurationError, match=r"unknown \[rating\] keys: max_chnage"):
        load_rating_system_configs(tmp_path)


def test_non_numeric_value_raises(tmp_path: Path) -> None:
    (tmp_path / "text.toml").write_text(
        """
[system]
name = "system_text"

[rating]
scale_factor = "wide"
""".strip()
    )

    with pytest.raises(ConfigurationError, match=r"\[rating\].scale_factor must be float"):
        load_rating_system_configs(tmp_path)


@pytest.mark.parametrize(
    ("line", "message"),
    [
        ("max_change = 60.9", r"text.toml: \[rating\].max_change must be int, got 60.9"),
        ("min_score = true", r"text.toml: \[rating\].min_score must be int, got True"),
        ("performance_multiplier = false", r"text.toml: \[rating\].performance_multiplier must be float, got False"),
    ],
)
def test_lossy_or_boolean_values_raise(tmp_path: Path, line: str, message: str) -> None:
    (tmp_path / "text.toml").write_text(f'[system]\nname = "system_lossy"\n\n[rating]\n{line}\n')

    with pytest.raises(ConfigurationError, match=message):
        load_rating_system_configs(tmp_path)


def test_integral_float_accepted_for_int_field(tmp_path: Path) -> None:
    (tmp_path / "whole.toml").write_text('[system]\nname = "system_whole"\n\n[rating]\nmax_change = 45.0\n')

    system = load_rating_system_configs(tmp_path)[0]
    assert system.parameters.max_change == 45
    assert isinstance(system.parameters.max_change, int)


def test_empty_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="No .toml config files found"):
        load_rating_system_configs(tmp_path)


def test_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_rating_system_configs(tmp_path / "absent")


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"placement_k_factor": 0.0}, r"placement_k_factor must be > 0"),
        ({"scale_factor": -400.0}, r"scale_factor must be > 0"),
        ({"abandon_penalty": 10}, r"abandon_penalty must be <= 0"),
        ({"performance_multiplier": -0.1}, r"performance_multiplier must be >= 0"),
        ({"min_score": 3000}, r"min_score must be < max_score"),
        ({"initial_score": 5000}, r"initial_score must be between"),
        ({"placement_matches": 60}, r"match thresholds"),
    ],
)
def test_rating_config_validates_on_construction(overrides: dict[str, float], message: str) -> None:
    with pytest.raises(ConfigurationError, match=message):
        RatingConfig(**overrides)
