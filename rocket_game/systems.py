"""
Game Systems
=============
Functions that advance the moving entities, test them against the ship
and draw them. Systems report what happened as event dicts; scoring and
life loss are applied by the caller.
"""

from typing import List, Tuple
import math

from .camera import to_screen_x
from .components import Ship, Obstacle, BonusStar, Particle, BackgroundStar
from .config import GAME_SCALE, OBSTACLE_SPEED_BASE, OBSTACLE_SPEED_STEP
from .engine import GameRenderer, SHIP_BLUE, NEON_ORANGE, fade
from .levels import LevelConfig
from .particles import particle_alpha
from .player import ship_polygons


# Inset of an obstacle's inner panel
OBSTACLE_BORDER = 20 * GAME_SCALE


# =============================================================================
# MOVEMENT
# =============================================================================

def obstacle_speed(level: int, velocity_scale: float) -> float:
    """Scroll speed shared by every obstacle this tick."""
    return (OBSTACLE_SPEED_BASE + level * OBSTACLE_SPEED_STEP) * velocity_scale


def advance_obstacle(obstacle: Obstacle, cam_x: float, speed: float) -> bool:
    """Scroll an obstacle left. Returns False once it is fully off-screen."""
    obstacle.world_x -= speed
    obstacle.screen_x = to_screen_x(obstacle.world_x, cam_x)
    return obstacle.screen_x + obstacle.width > 0


def advance_star(star: BonusStar, cam_x: float) -> bool:
    """Scroll a star left at its own speed. False once fully off-screen."""
    star.world_x -= star.speed
    star.screen_x = to_screen_x(star.world_x, cam_x)
    return star.screen_x + star.size > 0


# =============================================================================
# COLLISION
# =============================================================================

def obstacle_collides(ship: Ship, obstacle: Obstacle) -> bool:
    """AABB overlap; touching edges do not count."""
    return (
        ship.screen_x - ship.half_w < obstacle.screen_x + obstacle.width and
        ship.screen_x + ship.half_w > obstacle.screen_x and
        ship.screen_y - ship.half_h < obstacle.screen_y + obstacle.height and
        ship.screen_y + ship.half_h > obstacle.screen_y
    )


def star_collides(ship: Ship, star: BonusStar) -> bool:
    """Pickup radius is the ship's half width; the star's size is ignored."""
    dx = ship.screen_x - (star.screen_x + star.size / 2)
    dy = ship.screen_y - (star.screen_y + star.size / 2)
    return math.hypot(dx, dy) < ship.half_w


def ceiling_breached(ship: Ship) -> bool:
    """True when the top of the ship's box reaches the top of the world."""
    return ship.screen_y - ship.half_h <= 0


# =============================================================================
# ADVANCE + PARTITION
# =============================================================================

def obstacle_system(obstacles: List[Obstacle], ship: Ship,
                    speed: float) -> Tuple[List[Obstacle], List[dict]]:
    """
    Advance obstacles and split them into retained ones and events.

    An obstacle that scrolled off counts as passed even if it also
    overlaps the ship; only on-screen obstacles can hit.
    """
    retained = []
    events = []
    for obstacle in obstacles:
        if not advance_obstacle(obstacle, ship.cam_x, speed):
            events.append({'type': 'obstacle_passed', 'entity': obstacle})
        elif obstacle_collides(ship, obstacle):
            events.append({'type': 'obstacle_hit', 'entity': obstacle})
        else:
            retained.append(obstacle)
    return retained, events


def star_system(stars: List[BonusStar], ship: Ship) -> Tuple[List[BonusStar], List[dict]]:
    """Advance stars and split them into retained ones and events."""
    retained = []
    events = []
    for star in stars:
        if not advance_star(star, ship.cam_x):
            events.append({'type': 'star_missed', 'entity': star})
        elif star_collides(ship, star):
            events.append({'type': 'star_collected', 'entity': star})
        else:
            retained.append(star)
    return retained, events


# =============================================================================
# RENDERING SYSTEMS
# =============================================================================

def render_starfield(renderer: GameRenderer, stars: List[BackgroundStar],
                     cam_x: float, palette: LevelConfig):
    for star in stars:
        renderer.fill_rect(to_screen_x(star.world_x, cam_x), star.screen_y, 1, 1,
                           palette.bg_star_color)


def render_obstacles(renderer: GameRenderer, obstacles: List[Obstacle], palette: LevelConfig):
    """Outer block with an inset inner panel."""
    for obs in obstacles:
        renderer.fill_rect(obs.screen_x, obs.screen_y, obs.width, obs.height,
                           palette.obstacle_outer)
        renderer.fill_rect(
            obs.screen_x + OBSTACLE_BORDER, obs.screen_y + OBSTACLE_BORDER,
            obs.width - 2 * OBSTACLE_BORDER, obs.height - 2 * OBSTACLE_BORDER,
            palette.obstacle_inner
        )


def render_stars(renderer: GameRenderer, stars: List[BonusStar], palette: LevelConfig):
    for star in stars:
        renderer.fill_circle(star.screen_x + star.size / 2, star.screen_y + star.size / 2,
                             star.size, palette.star_color)


def render_particles(renderer: GameRenderer, particles: List[Particle]):
    for p in particles:
        renderer.fill_rect(p.x - p.size / 2, p.y - p.size / 2, p.size, p.size,
                           fade(p.color, particle_alpha(p)))


def render_ship(renderer: GameRenderer, ship: Ship):
    body, flame = ship_polygons(ship)
    renderer.fill_polygon(body, SHIP_BLUE)
    if flame is not None:
        renderer.fill_polygon(flame, NEON_ORANGE)
