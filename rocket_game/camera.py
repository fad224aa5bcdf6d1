"""
Camera Model
=============
Horizontal-only scrolling. The camera follows the ship once it passes the
middle of the screen and never scrolls left of world X 0.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Viewport:
    """Screen size in virtual pixels."""
    width: float
    height: float


def camera_offset(world_x: float, viewport_width: float) -> float:
    """Camera X for a ship at world_x."""
    return max(0.0, world_x - viewport_width / 2)


def to_screen_x(world_x: float, cam_x: float) -> float:
    return world_x - cam_x
