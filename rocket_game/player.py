"""
Player Module
==============
Ship creation, ship physics and input handling.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import math

from .camera import Viewport, camera_offset, to_screen_x
from .components import Ship, Point
from .config import (
    ROT_SPEED, THRUST, GRAVITY, DRAG, MAX_SPEED,
    WALL_BOUNCE, FLOOR_BOUNCE
)


# Held-key names used by InputHandler
ROTATE_LEFT = 'rotate_left'
ROTATE_RIGHT = 'rotate_right'
THRUST_KEY = 'thrust'

_HELD_KEYS = {
    'KEY_LEFT': ROTATE_LEFT,
    'KEY_RIGHT': ROTATE_RIGHT,
    'KEY_UP': THRUST_KEY,
    'a': ROTATE_LEFT,
    'd': ROTATE_RIGHT,
    'w': THRUST_KEY,
}


def create_ship(viewport: Viewport) -> Ship:
    """Create a ship in the middle of the screen, nose up."""
    ship = Ship(
        world_x=viewport.width / 2,
        screen_y=viewport.height / 2,
        angle=-math.pi / 2,
    )
    ship.cam_x = camera_offset(ship.world_x, viewport.width)
    ship.screen_x = to_screen_x(ship.world_x, ship.cam_x)
    return ship


@dataclass(frozen=True)
class Controls:
    """Input sampled once per tick."""
    rotate_left: bool = False
    rotate_right: bool = False
    thrust: bool = False
    resume: bool = False
    restart: bool = False
    quit: bool = False


def ship_physics_system(ship: Ship, controls: Controls, viewport: Viewport,
                        velocity_scale: float):
    """
    Advance the ship by one tick.

    Order matters: rotate, thrust, gravity, drag, clamp, integrate,
    camera, then wall and floor bounces. There is no ceiling bounce;
    leaving through the top is handled by the game as a life loss.
    """
    if controls.rotate_left:
        ship.angle -= ROT_SPEED
    if controls.rotate_right:
        ship.angle += ROT_SPEED

    if controls.thrust:
        ship.vx += math.cos(ship.angle) * THRUST
        ship.vy += math.sin(ship.angle) * THRUST
        ship.thrusting = True
    else:
        ship.thrusting = False

    ship.vy += GRAVITY

    ship.vx *= DRAG
    ship.vy *= DRAG

    # Per-axis clamp, not a magnitude clamp
    max_speed = MAX_SPEED * velocity_scale
    ship.vx = max(-max_speed, min(max_speed, ship.vx))
    ship.vy = max(-max_speed, min(max_speed, ship.vy))

    ship.world_x += ship.vx
    ship.screen_y += ship.vy

    ship.cam_x = camera_offset(ship.world_x, viewport.width)
    ship.screen_x = to_screen_x(ship.world_x, ship.cam_x)

    # Horizontal bounce against both screen edges
    if ship.screen_x < ship.half_w:
        ship.world_x = ship.cam_x + ship.half_w
        ship.vx *= WALL_BOUNCE
    if ship.screen_x > viewport.width - ship.half_w:
        ship.world_x = ship.cam_x + (viewport.width - ship.half_w)
        ship.vx *= WALL_BOUNCE
    ship.cam_x = camera_offset(ship.world_x, viewport.width)
    ship.screen_x = to_screen_x(ship.world_x, ship.cam_x)

    # Floor bounce
    if ship.screen_y > viewport.height - ship.half_h:
        ship.screen_y = viewport.height - ship.half_h
        ship.vy *= FLOOR_BOUNCE


def rotate_points(points: List[Point], angle: float) -> List[Point]:
    """Rotate ship-local points around the origin."""
    cos = math.cos(angle)
    sin = math.sin(angle)
    return [(x * cos - y * sin, x * sin + y * cos) for x, y in points]


def ship_polygons(ship: Ship) -> Tuple[List[Point], Optional[List[Point]]]:
    """
    Screen-space outlines for the ship.

    Returns (body, flame); flame is None unless the ship is thrusting.
    """
    def place(points):
        return [(ship.screen_x + x, ship.screen_y + y)
                for x, y in rotate_points(points, ship.angle)]

    body = place(ship.body_points)
    flame = place(ship.flame_points) if ship.thrusting else None
    return body, flame


class InputHandler:
    """
    Turns terminal key presses into per-tick Controls.

    Terminals report presses but not releases, so held keys are simulated
    with a frame countdown that every repeat press refreshes. Resume,
    restart and quit are one-shot triggers consumed by sample().
    """

    def __init__(self, hold_duration: int = 10):
        self.keys_held: Dict[str, int] = {}  # held-key name -> frames remaining
        self.hold_duration = hold_duration

        self._resume_triggered = False
        self._restart_triggered = False
        self._quit_triggered = False

    def process_key(self, key) -> None:
        """Process a single key press from blessed's inkey()."""
        if key is None or not key:
            return

        if key.is_sequence:
            name = key.name or ''
        else:
            name = key.lower()

        if name == 'q' or name == 'KEY_ESCAPE':
            self._quit_triggered = True
        elif name == ' ':
            self._resume_triggered = True
        elif name == 'r':
            self._restart_triggered = True
        elif name in _HELD_KEYS:
            self.keys_held[_HELD_KEYS[name]] = self.hold_duration

    def update(self) -> None:
        """Age held keys (call once per tick, after sample())."""
        expired = []
        for key, frames in self.keys_held.items():
            self.keys_held[key] = frames - 1
            if self.keys_held[key] <= 0:
                expired.append(key)
        for key in expired:
            del self.keys_held[key]

    def sample(self) -> Controls:
        """Snapshot the held keys and consume the one-shot triggers."""
        controls = Controls(
            rotate_left=ROTATE_LEFT in self.keys_held,
            rotate_right=ROTATE_RIGHT in self.keys_held,
            thrust=THRUST_KEY in self.keys_held,
            resume=self._resume_triggered,
            restart=self._restart_triggered,
            quit=self._quit_triggered,
        )
        self._resume_triggered = False
        self._restart_triggered = False
        self._quit_triggered = False
        return controls
