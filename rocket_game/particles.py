"""
Particle System
================
Exhaust trail emitter and particle physics. Particles live in screen
space and keep drifting on their own velocity.
"""

import math
import random
from typing import List

from .components import Particle, Ship
from .config import (
    TRAIL_OFFSET, TRAIL_SPREAD, TRAIL_SPEED_RANGE, TRAIL_LIFE_RANGE,
    TRAIL_EMIT_CHANCE, TRAIL_EMIT_THRUSTING, TRAIL_EMIT_COASTING,
    PARTICLE_ALPHA,
)

TRAIL_COLOR_THRUST = 222  # warm
TRAIL_COLOR_COAST = 153   # cool


def spawn_particle(
    particles: List[Particle],
    x: float, y: float,
    vx: float, vy: float,
    life: float,
    color: int,
) -> Particle:
    """Append a single particle and return it."""
    particle = Particle(x=x, y=y, vx=vx, vy=vy, life=life, max_life=life, color=color)
    particles.append(particle)
    return particle


def emit_exhaust_trail(particles: List[Particle], ship: Ship, rng: random.Random) -> int:
    """
    Emit trail particles from behind the ship.

    Thrusting doubles the number of attempts; each attempt only fires
    with TRAIL_EMIT_CHANCE. Returns how many particles were added.
    """
    back_angle = ship.angle + math.pi
    emit_x = ship.screen_x + math.cos(back_angle) * TRAIL_OFFSET
    emit_y = ship.screen_y + math.sin(back_angle) * TRAIL_OFFSET

    if ship.thrusting:
        color = TRAIL_COLOR_THRUST
        attempts = math.ceil(TRAIL_EMIT_THRUSTING)
    else:
        color = TRAIL_COLOR_COAST
        attempts = math.ceil(TRAIL_EMIT_COASTING)

    emitted = 0
    for _ in range(attempts):
        if rng.random() > TRAIL_EMIT_CHANCE:
            continue

        lo, hi = TRAIL_SPEED_RANGE
        speed = lo + rng.random() * (hi - lo)
        angle = back_angle + (rng.random() - 0.5) * TRAIL_SPREAD
        life_lo, life_hi = TRAIL_LIFE_RANGE
        spawn_particle(
            particles, emit_x, emit_y,
            math.cos(angle) * speed,
            math.sin(angle) * speed,
            life=life_lo + rng.random() * (life_hi - life_lo),
            color=color,
        )
        emitted += 1

    return emitted


def particle_system(particles: List[Particle]) -> List[Particle]:
    """Move particles, age them, and return the ones still alive."""
    alive = []
    for p in particles:
        p.x += p.vx
        p.y += p.vy
        p.life -= 1
        if p.life > 0:
            alive.append(p)
    return alive


def particle_alpha(particle: Particle) -> float:
    """Opacity in [0, PARTICLE_ALPHA], fading with remaining life."""
    return max(0.0, particle.life / particle.max_life) * PARTICLE_ALPHA
