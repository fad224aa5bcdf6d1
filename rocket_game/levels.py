"""
Level Table
============
Per-level colour themes. Difficulty itself is derived from the level
number (see progression.py); this table only carries the look.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class LevelConfig:
    """Palette for one level (ANSI 256 colour indices)."""
    name: str
    obstacle_outer: int
    obstacle_inner: int
    star_color: int
    bg_star_color: int


LEVELS: Tuple[LevelConfig, ...] = (
    LevelConfig('Launch', obstacle_outer=28, obstacle_inner=160,
                star_color=255, bg_star_color=255),
    LevelConfig('Nebula', obstacle_outer=93, obstacle_inner=51,
                star_color=226, bg_star_color=147),
    LevelConfig('Solar Wind', obstacle_outer=214, obstacle_inner=226,
                star_color=51, bg_star_color=226),
    LevelConfig('Red Giant', obstacle_outer=196, obstacle_inner=88,
                star_color=214, bg_star_color=208),
    LevelConfig('Ice Belt', obstacle_outer=159, obstacle_inner=21,
                star_color=195, bg_star_color=152),
    LevelConfig('Event Horizon', obstacle_outer=201, obstacle_inner=90,
                star_color=196, bg_star_color=203),
)

MAX_LEVEL = len(LEVELS)


def get_level_config(level: int) -> LevelConfig:
    """Look up the theme for a 1-based level number."""
    if not 1 <= level <= MAX_LEVEL:
        raise ValueError(f'level {level} outside 1..{MAX_LEVEL}')
    return LEVELS[level - 1]
