"""
Game Configuration
===================
Tuning constants and per-run options.
"""

from dataclasses import dataclass
from typing import Optional


class ConfigError(ValueError):
    """Raised when a GameConfig holds values the game cannot run with."""


# =============================================================================
# SCALE
# =============================================================================

GAME_SCALE = 0.6
BASE_VELOCITY_SCALE = 0.41
VELOCITY_SCALE_STEP = 0.07

# =============================================================================
# SHIP PHYSICS (per tick, ~60Hz)
# =============================================================================

ROT_SPEED = 0.1
THRUST = 0.5
GRAVITY = 0.18
DRAG = 0.991
MAX_SPEED = 15.0
WALL_BOUNCE = -0.4
FLOOR_BOUNCE = -0.3
SHIP_HALF_SIZE = 35 * GAME_SCALE

# =============================================================================
# SPAWNING
# =============================================================================

OBSTACLE_TIMER_RATE = 0.82
STAR_TIMER_RATE = 1.2
OBSTACLE_THRESHOLD_BASE = 42.0
OBSTACLE_THRESHOLD_STEP = 3.7
OBSTACLE_THRESHOLD_MIN = 16.0
STAR_THRESHOLD = 75.0

OBSTACLE_SPAWN_OFFSET = (50.0, 150.0)
STAR_SPAWN_OFFSET = (100.0, 400.0)
OBSTACLE_SIZE_RANGE = (80.0, 160.0)
STAR_SPEED_RANGE = (4.5, 6.5)
STAR_SIZE_RANGE = (4.0, 8.0)

BG_STAR_SPEED_RANGE = (1.0, 3.5)
BG_STAR_RECYCLE_EDGE = -10.0
BG_STAR_RECYCLE_OFFSET = 100.0

# =============================================================================
# SCORING
# =============================================================================

OBSTACLE_PASS_REWARD = 20
STAR_REWARD = 100
OBSTACLE_SPEED_BASE = 4.8
OBSTACLE_SPEED_STEP = 1.7

# =============================================================================
# EXHAUST TRAIL
# =============================================================================

TRAIL_OFFSET = 22 * GAME_SCALE
TRAIL_SPREAD = 0.55
TRAIL_SPEED_RANGE = (0.8, 3.0)
TRAIL_LIFE_RANGE = (38.0, 63.0)
TRAIL_EMIT_CHANCE = 0.35
TRAIL_EMIT_THRUSTING = 2.2
TRAIL_EMIT_COASTING = 1.1
PARTICLE_SIZE = 2.5 * GAME_SCALE
PARTICLE_ALPHA = 0.8

# =============================================================================
# TIMING & TERMINAL
# =============================================================================

TARGET_FPS = 60
FRAME_TIME = 1.0 / TARGET_FPS
MAX_TICKS_PER_FRAME = 4

# Virtual pixels per terminal cell. Each cell is a 2x4 braille block,
# so one braille dot covers a 4x4 pixel square.
CELL_WIDTH = 8
CELL_HEIGHT = 16
MIN_WIDTH = 60
MIN_HEIGHT = 20


@dataclass
class GameConfig:
    """Per-run options, filled from the command line."""
    level_threshold: int = 1200
    win_score: int = 9000
    start_score: int = 0
    start_lives: int = 1
    bg_star_count: int = 1070
    seed: Optional[int] = None

    def validate(self) -> 'GameConfig':
        """Check the options and return self so calls can be chained."""
        if self.level_threshold <= 0:
            raise ConfigError(f'level_threshold must be positive, got {self.level_threshold}')
        if self.start_score < 0:
            raise ConfigError(f'start_score must not be negative, got {self.start_score}')
        if self.win_score <= self.start_score:
            raise ConfigError(
                f'win_score ({self.win_score}) must be above start_score ({self.start_score})'
            )
        if self.start_lives < 1:
            raise ConfigError(f'start_lives must be at least 1, got {self.start_lives}')
        if self.bg_star_count < 0:
            raise ConfigError(f'bg_star_count must not be negative, got {self.bg_star_count}')
        return self
