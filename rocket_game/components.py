"""
Entity Definitions
===================
All entities are plain dataclasses with no behavior. Systems in
player.py, spawner.py, particles.py and systems.py update them.

Coordinates: world_x is unbounded and scrolls with the camera;
screen_x is derived each tick (world_x - cam_x). Y never scrolls.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from .config import GAME_SCALE, SHIP_HALF_SIZE, PARTICLE_SIZE


Point = Tuple[float, float]


# =============================================================================
# SHIP
# =============================================================================

# Ship-local outlines, nose pointing along +X
SHIP_BODY: List[Point] = [
    (35 * GAME_SCALE, 0.0),
    (8 * GAME_SCALE, -18 * GAME_SCALE),
    (-8 * GAME_SCALE, -18 * GAME_SCALE),
    (-22 * GAME_SCALE, -12 * GAME_SCALE),
    (-22 * GAME_SCALE, 12 * GAME_SCALE),
    (-8 * GAME_SCALE, 18 * GAME_SCALE),
    (8 * GAME_SCALE, 18 * GAME_SCALE),
]

SHIP_FLAME: List[Point] = [
    (-30 * GAME_SCALE, -8 * GAME_SCALE),
    (-30 * GAME_SCALE, 8 * GAME_SCALE),
    (-50 * GAME_SCALE, 0.0),
]


@dataclass
class Ship:
    """The player's ship. One per session, replaced on restart."""
    world_x: float
    screen_y: float
    vx: float = 0.0
    vy: float = 0.0
    angle: float = 0.0  # radians, 0 = facing right
    cam_x: float = 0.0
    screen_x: float = 0.0
    thrusting: bool = False
    half_w: float = SHIP_HALF_SIZE
    half_h: float = SHIP_HALF_SIZE
    body_points: List[Point] = field(default_factory=lambda: list(SHIP_BODY))
    flame_points: List[Point] = field(default_factory=lambda: list(SHIP_FLAME))


# =============================================================================
# MOVING HAZARDS & PICKUPS
# =============================================================================

@dataclass
class Obstacle:
    """Rectangular hazard. Size and height are fixed at spawn."""
    world_x: float
    width: float
    height: float
    screen_y: float
    screen_x: float = 0.0


@dataclass
class BonusStar:
    """Collectible star with its own scroll speed."""
    world_x: float
    screen_y: float
    speed: float
    size: float
    screen_x: float = 0.0


# =============================================================================
# EFFECTS
# =============================================================================

@dataclass
class Particle:
    """Exhaust particle in screen space (does not follow the camera)."""
    x: float
    y: float
    vx: float
    vy: float
    life: float
    max_life: float
    color: int
    size: float = PARTICLE_SIZE


@dataclass
class BackgroundStar:
    """Parallax dot. Recycled at the right edge instead of destroyed."""
    world_x: float
    screen_y: float
    speed: float
