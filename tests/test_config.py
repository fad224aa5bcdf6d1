from __future__ import annotations

import pytest

from rocket_game.camera import camera_offset, to_screen_x
from rocket_game.config import ConfigError, GameConfig
from rocket_game.levels import LEVELS, MAX_LEVEL, get_level_config


def test_default_config_is_valid() -> None:
    config = GameConfig()
    assert config.validate() is config
    assert (config.level_threshold, config.win_score) == (1200, 9000)


@pytest.mark.parametrize('overrides', [
    {'level_threshold': 0},
    {'start_score': -1},
    {'win_score': 500, 'start_score': 500},
    {'start_lives': 0},
    {'bg_star_count': -3},
])
def test_invalid_config(overrides) -> None:
    with pytest.raises(ConfigError):
        GameConfig(**overrides).validate()


def test_camera_never_scrolls_left_of_zero() -> None:
    assert camera_offset(100.0, 800.0) == 0.0
    assert camera_offset(400.0, 800.0) == 0.0
    assert camera_offset(1000.0, 800.0) == 600.0
    assert to_screen_x(1000.0, 600.0) == 400.0


def test_level_table() -> None:
    assert MAX_LEVEL == len(LEVELS) == 6
    assert get_level_config(1).name == 'Launch'
    assert get_level_config(6).name == 'Event Horizon'
    assert len({level.name for level in LEVELS}) == MAX_LEVEL


@pytest.mark.parametrize('level', [0, 7, -1])
def test_level_out_of_range(level: int) -> None:
    with pytest.raises(ValueError):
        get_level_config(level)
