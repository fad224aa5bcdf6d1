"""
Spawner
========
Timer-driven obstacle and star spawning just past the right edge of the
screen, plus the recycled background starfield.
"""

from dataclasses import dataclass
from typing import List, Optional
import logging
import random

from .camera import Viewport, to_screen_x
from .components import Obstacle, BonusStar, BackgroundStar
from .config import (
    GAME_SCALE,
    OBSTACLE_TIMER_RATE, STAR_TIMER_RATE,
    OBSTACLE_THRESHOLD_BASE, OBSTACLE_THRESHOLD_STEP, OBSTACLE_THRESHOLD_MIN,
    STAR_THRESHOLD,
    OBSTACLE_SPAWN_OFFSET, STAR_SPAWN_OFFSET,
    OBSTACLE_SIZE_RANGE, STAR_SPEED_RANGE, STAR_SIZE_RANGE,
    BG_STAR_SPEED_RANGE, BG_STAR_RECYCLE_EDGE, BG_STAR_RECYCLE_OFFSET,
)

logger = logging.getLogger(__name__)


@dataclass
class SpawnTimers:
    """Accumulators, one per spawned entity kind."""
    obstacle: float = 0.0
    star: float = 0.0


def _uniform(rng: random.Random, lo: float, hi: float) -> float:
    """Uniform draw in [lo, hi)."""
    return lo + rng.random() * (hi - lo)


# =============================================================================
# THRESHOLDS
# =============================================================================

def obstacle_spawn_threshold(level: int) -> float:
    """Timer value an obstacle spawn needs. Shrinks with level, floored."""
    return max(OBSTACLE_THRESHOLD_BASE - level * OBSTACLE_THRESHOLD_STEP,
               OBSTACLE_THRESHOLD_MIN)


# =============================================================================
# FACTORIES
# =============================================================================

def create_obstacle(rng: random.Random, spawn_x: float, viewport_height: float) -> Obstacle:
    """Random-sized obstacle that fits vertically inside the viewport."""
    width = _uniform(rng, *OBSTACLE_SIZE_RANGE) * GAME_SCALE
    height = _uniform(rng, *OBSTACLE_SIZE_RANGE) * GAME_SCALE
    screen_y = rng.random() * max(0.0, viewport_height - height)
    return Obstacle(world_x=spawn_x, width=width, height=height, screen_y=screen_y)


def create_star(rng: random.Random, spawn_x: float, viewport_height: float,
                velocity_scale: float) -> BonusStar:
    """Bonus star. Its speed is fixed now and ignores later level changes."""
    speed = _uniform(rng, *STAR_SPEED_RANGE) * velocity_scale
    size = _uniform(rng, *STAR_SIZE_RANGE) * GAME_SCALE
    screen_y = rng.random() * max(0.0, viewport_height - size)
    return BonusStar(world_x=spawn_x, screen_y=screen_y, speed=speed, size=size)


# =============================================================================
# SPAWN SYSTEM
# =============================================================================

def spawn_system(
    timers: SpawnTimers,
    level: int,
    velocity_scale: float,
    cam_x: float,
    viewport: Viewport,
    rng: random.Random,
    obstacles: List[Obstacle],
    stars: List[BonusStar],
) -> List[dict]:
    """
    Advance both spawn timers and spawn past the right edge when due.

    Appends to obstacles/stars in place and returns spawn events.
    """
    events = []

    timers.obstacle += OBSTACLE_TIMER_RATE * velocity_scale
    if timers.obstacle > obstacle_spawn_threshold(level):
        spawn_x = cam_x + viewport.width + _uniform(rng, *OBSTACLE_SPAWN_OFFSET)
        obstacle = create_obstacle(rng, spawn_x, viewport.height)
        obstacles.append(obstacle)
        timers.obstacle = 0.0
        events.append({'type': 'obstacle_spawned', 'entity': obstacle})
        logger.debug('obstacle spawned at x=%.1f size=%.0fx%.0f',
                     spawn_x, obstacle.width, obstacle.height)

    timers.star += STAR_TIMER_RATE * velocity_scale
    if timers.star > STAR_THRESHOLD:
        spawn_x = cam_x + viewport.width + _uniform(rng, *STAR_SPAWN_OFFSET)
        star = create_star(rng, spawn_x, viewport.height, velocity_scale)
        stars.append(star)
        timers.star = 0.0
        events.append({'type': 'star_spawned', 'entity': star})
        logger.debug('star spawned at x=%.1f speed=%.2f', spawn_x, star.speed)

    return events


# =============================================================================
# BACKGROUND STARFIELD
# =============================================================================

def generate_starfield(
    rng: random.Random,
    count: int,
    viewport: Viewport,
    velocity_scale: float,
    start_x: float = 0.0,
    spread: Optional[float] = None,
) -> List[BackgroundStar]:
    """
    Generate background stars with world X in [start_x, start_x + spread).

    spread defaults to the viewport width. A new game fills the screen
    (start_x=0); a level-up places the whole field ahead of the camera.
    """
    if spread is None:
        spread = viewport.width
    return [
        BackgroundStar(
            world_x=start_x + rng.random() * spread,
            screen_y=rng.random() * viewport.height,
            speed=_uniform(rng, *BG_STAR_SPEED_RANGE) * velocity_scale,
        )
        for _ in range(count)
    ]


def starfield_system(stars: List[BackgroundStar], cam_x: float,
                     viewport: Viewport, rng: random.Random):
    """Scroll background stars; recycle the ones that left the screen."""
    for star in stars:
        star.world_x -= star.speed
        if to_screen_x(star.world_x, cam_x) < BG_STAR_RECYCLE_EDGE:
            star.world_x = cam_x + viewport.width + rng.random() * BG_STAR_RECYCLE_OFFSET
            star.screen_y = rng.random() * viewport.height
