"""
Progression
============
Session state and the level / phase state machine.

Phases:
    running    -> paused     on level-up
    paused     -> running    on resume
    running    -> game_over  when lives run out
    running    -> win        when the score reaches the win score
game_over and win only leave through a restart, which builds a fresh
session.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

from .config import (
    GameConfig, BASE_VELOCITY_SCALE, VELOCITY_SCALE_STEP,
    OBSTACLE_PASS_REWARD, STAR_REWARD
)
from .levels import MAX_LEVEL
from .spawner import SpawnTimers

logger = logging.getLogger(__name__)


# Game phases
PHASE_RUNNING = 'running'
PHASE_PAUSED = 'paused'
PHASE_GAME_OVER = 'game_over'
PHASE_WIN = 'win'

# Score awarded per event type; other events score nothing
SCORE_REWARDS = {
    'obstacle_passed': OBSTACLE_PASS_REWARD,
    'star_collected': STAR_REWARD,
}


def target_level(score: int, level_threshold: int) -> int:
    """Level a score qualifies for."""
    return min(1 + score // level_threshold, MAX_LEVEL)


def velocity_scale_for(level: int) -> float:
    return BASE_VELOCITY_SCALE + (level - 1) * VELOCITY_SCALE_STEP


@dataclass
class SessionState:
    """Score, lives, level and phase for one play session."""
    score: int = 0
    lives: int = 1
    level: int = 1
    velocity_scale: float = BASE_VELOCITY_SCALE
    timers: SpawnTimers = field(default_factory=SpawnTimers)
    phase: str = PHASE_RUNNING
    life_lost_this_tick: bool = False

    @property
    def running(self) -> bool:
        return self.phase == PHASE_RUNNING

    @property
    def paused(self) -> bool:
        return self.phase == PHASE_PAUSED

    @property
    def game_over(self) -> bool:
        return self.phase == PHASE_GAME_OVER

    @property
    def win(self) -> bool:
        return self.phase == PHASE_WIN

    def begin_tick(self):
        """Reset per-tick bookkeeping."""
        self.life_lost_this_tick = False

    def apply_score_event(self, event: dict) -> int:
        """Add the reward for an event and return it."""
        reward = SCORE_REWARDS.get(event['type'], 0)
        self.score += reward
        return reward

    def lose_life(self, cause: str) -> bool:
        """
        Take one life, at most once per tick.

        Returns True if a life was actually taken. Running out of lives
        ends the game.
        """
        if self.life_lost_this_tick:
            return False
        self.life_lost_this_tick = True
        self.lives -= 1
        logger.info('life lost (%s), %d left', cause, self.lives)
        if self.lives <= 0:
            self.phase = PHASE_GAME_OVER
            logger.info('game over at score %d, level %d', self.score, self.level)
        return True

    def check_level_up(self, level_threshold: int) -> Optional[int]:
        """
        Promote to the level the score qualifies for.

        Returns the new level and pauses the game, or None if the level
        did not change. Levels never go down.
        """
        new_level = target_level(self.score, level_threshold)
        if new_level <= self.level:
            return None
        self.level = new_level
        self.velocity_scale = velocity_scale_for(new_level)
        self.phase = PHASE_PAUSED
        logger.info('level up: %d (velocity scale %.2f)', new_level, self.velocity_scale)
        return new_level

    def check_win(self, win_score: int) -> bool:
        if self.score >= win_score:
            self.phase = PHASE_WIN
            logger.info('win at score %d', self.score)
            return True
        return False

    def resume(self) -> bool:
        """Leave the level-up pause."""
        if not self.paused:
            return False
        self.phase = PHASE_RUNNING
        return True


def new_session(config: GameConfig) -> SessionState:
    """Fresh session with the configured starting score and lives."""
    return SessionState(
        score=config.start_score,
        lives=config.start_lives,
        level=1,
        velocity_scale=velocity_scale_for(1),
    )
