"""
Frame Orchestrator
===================
Owns one play session and runs the fixed-order tick:
input -> ship -> ceiling -> trail -> spawns -> obstacles/stars ->
particles -> level/win -> render.
"""

from dataclasses import dataclass
from typing import List, Optional
import logging
import random

from .camera import Viewport
from .components import Obstacle, BonusStar, Particle, BackgroundStar
from .config import GameConfig
from .levels import get_level_config
from .particles import emit_exhaust_trail, particle_system
from .player import Controls, create_ship, ship_physics_system
from .progression import SessionState, new_session
from .spawner import spawn_system, generate_starfield, starfield_system
from .systems import (
    obstacle_speed, obstacle_system, star_system, ceiling_breached,
    render_starfield, render_obstacles, render_stars,
    render_particles, render_ship,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HudSnapshot:
    """What the HUD needs after a tick."""
    score: int
    lives: int
    level: int
    level_name: str
    paused: bool
    game_over: bool
    win: bool


class Game:
    """Central game state container for one session at a time."""

    def __init__(self, config: GameConfig, viewport: Viewport,
                 rng: Optional[random.Random] = None):
        self.config = config.validate()
        self.rng = rng if rng is not None else random.Random(config.seed)
        self.viewport = viewport
        self._pending_viewport: Optional[Viewport] = None
        self.running = True
        self.frame = 0

        # Set up by restart()
        self.session: SessionState = None  # type: ignore
        self.ship = None
        self.obstacles: List[Obstacle] = []
        self.stars: List[BonusStar] = []
        self.particles: List[Particle] = []
        self.starfield: List[BackgroundStar] = []

        self.restart()

    def restart(self):
        """Throw away the current session and start over."""
        self.session = new_session(self.config)
        self.ship = create_ship(self.viewport)
        self.obstacles = []
        self.stars = []
        self.particles = []
        self.starfield = generate_starfield(
            self.rng, self.config.bg_star_count, self.viewport,
            self.session.velocity_scale
        )
        self.frame = 0
        logger.info('session started: score=%d lives=%d',
                    self.session.score, self.session.lives)

    def resize(self, viewport: Viewport):
        """Record a new viewport; it takes effect at the next tick."""
        self._pending_viewport = viewport

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    def update(self, controls: Controls):
        """Run one tick of game logic."""
        if self._pending_viewport is not None:
            logger.debug('viewport %s -> %s', self.viewport, self._pending_viewport)
            self.viewport = self._pending_viewport
            self._pending_viewport = None

        session = self.session
        session.begin_tick()
        self.frame += 1

        if controls.quit:
            self.running = False
            logger.info('quit at score %d', session.score)
            return

        if session.game_over or session.win:
            if controls.restart:
                self.restart()
                return
        elif session.paused and controls.resume:
            session.resume()
            logger.info('resumed at level %d', session.level)

        starfield_system(self.starfield, self.ship.cam_x, self.viewport, self.rng)

        if session.running:
            self._advance_world(controls)

        self.particles = particle_system(self.particles)

        if session.running:
            self._check_progression()

    def _advance_world(self, controls: Controls):
        session = self.session
        ship = self.ship

        ship_physics_system(ship, controls, self.viewport, session.velocity_scale)

        if ceiling_breached(ship):
            session.lose_life('ceiling')

        emit_exhaust_trail(self.particles, ship, self.rng)

        spawn_system(
            session.timers, session.level, session.velocity_scale,
            ship.cam_x, self.viewport, self.rng,
            self.obstacles, self.stars
        )

        speed = obstacle_speed(session.level, session.velocity_scale)
        self.obstacles, obstacle_events = obstacle_system(self.obstacles, ship, speed)
        self.stars, star_events = star_system(self.stars, ship)

        for event in obstacle_events + star_events:
            if event['type'] == 'obstacle_hit':
                session.lose_life('obstacle')
            else:
                session.apply_score_event(event)

    def _check_progression(self):
        session = self.session
        new_level = session.check_level_up(self.config.level_threshold)
        if new_level is not None:
            # Fresh field entirely ahead of the camera for the new theme
            self.starfield = generate_starfield(
                self.rng, self.config.bg_star_count, self.viewport,
                session.velocity_scale,
                start_x=self.ship.cam_x + self.viewport.width,
            )
        session.check_win(self.config.win_score)

    # -------------------------------------------------------------------------
    # Render
    # -------------------------------------------------------------------------

    def render(self, surface):
        """Draw the world (not the HUD) onto a drawing surface."""
        palette = get_level_config(self.session.level)
        surface.clear()
        render_starfield(surface, self.starfield, self.ship.cam_x, palette)
        render_obstacles(surface, self.obstacles, palette)
        render_stars(surface, self.stars, palette)
        render_particles(surface, self.particles)
        render_ship(surface, self.ship)

    def tick(self, controls: Controls, surface) -> HudSnapshot:
        """Update fully, then render. Returns the HUD snapshot."""
        self.update(controls)
        self.render(surface)
        return self.snapshot()

    def snapshot(self) -> HudSnapshot:
        session = self.session
        return HudSnapshot(
            score=session.score,
            lives=session.lives,
            level=session.level,
            level_name=get_level_config(session.level).name,
            paused=session.paused,
            game_over=session.game_over,
            win=session.win,
        )
