#!/usr/bin/env python3
"""
ROCKET DRIFT - Terminal Gravity Arcade
=======================================
Keep the ship airborne, dodge the blocks, grab the stars.

Controls:
    LEFT/RIGHT  - Rotate (A/D also work)
    UP          - Thrust (W also works)
    SPACE       - Continue after a level-up
    R           - Restart after game over / win
    Q/ESC       - Quit
"""

import argparse
import logging
import sys
import time

try:
    from blessed import Terminal
except ImportError:
    print("ERROR: 'blessed' library required. Install with: pip install blessed")
    sys.exit(1)

from .camera import Viewport
from .config import (
    GameConfig, ConfigError, GAME_SCALE,
    FRAME_TIME, MAX_TICKS_PER_FRAME, MIN_WIDTH, MIN_HEIGHT
)
from .engine import GameRenderer, WHITE, NEON_GREEN, NEON_RED
from .game import Game, HudSnapshot
from .player import InputHandler

logger = logging.getLogger(__name__)


# =============================================================================
# UI RENDERING
# =============================================================================

def render_ui(surface, hud: HudSnapshot, viewport: Viewport):
    """Draw the HUD and any pause / end-of-game banner."""
    font_size = int(viewport.height / 20 * GAME_SCALE)
    small_font_size = int(viewport.height / 35 * GAME_SCALE)
    big_font_size = int(viewport.height / 15 * GAME_SCALE)
    margin_x = 30 * GAME_SCALE
    margin_y = 40 * GAME_SCALE
    line_height = font_size + 10 * GAME_SCALE
    center_x = viewport.width / 2
    center_y = viewport.height / 2

    surface.draw_text(f'Score: {hud.score}', margin_x, margin_y, font_size, WHITE)
    surface.draw_text(f'Lives: {hud.lives}', margin_x, margin_y + line_height, font_size, WHITE)
    surface.draw_text(f'Level: {hud.level}', margin_x, margin_y + line_height * 2, font_size, WHITE)

    if hud.paused:
        surface.draw_text(f'Level {hud.level}: {hud.level_name}!', center_x, center_y,
                          big_font_size, NEON_GREEN, align='center')
        surface.draw_text('Press SPACE to Continue', center_x, center_y + 50 * GAME_SCALE,
                          font_size, WHITE, align='center')
    elif hud.game_over or hud.win:
        banner = 'GAME OVER!' if hud.game_over else 'YOU WIN! Rocket Legend!'
        surface.draw_text(banner, center_x, center_y - 80 * GAME_SCALE, big_font_size,
                          NEON_RED if hud.game_over else NEON_GREEN, align='center')
        surface.draw_text(f'Final Score: {hud.score}', center_x, center_y - 20 * GAME_SCALE,
                          font_size, WHITE, align='center')
        surface.draw_text('R: Restart | ESC/Q: Quit', center_x, center_y + 40 * GAME_SCALE,
                          small_font_size, WHITE, align='center')
    else:
        surface.draw_text('LEFT/RIGHT: Rotate | UP: Thrust', margin_x,
                          viewport.height - 60 * GAME_SCALE, small_font_size, WHITE)
        surface.draw_text('(Gravity pulls down! Dodge & Collect!)', margin_x,
                          viewport.height - 30 * GAME_SCALE, small_font_size, WHITE)


# =============================================================================
# SETUP
# =============================================================================

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='rocket-game',
        description='Terminal gravity arcade: dodge obstacles, collect stars.'
    )
    parser.add_argument('--seed', type=int, default=None,
                        help='seed for the random source (default: random)')
    parser.add_argument('--start-score', type=int, default=0,
                        help='score at the start of every session')
    parser.add_argument('--lives', type=int, default=1,
                        help='lives at the start of every session')
    parser.add_argument('--log-file', default='rocket_game.log',
                        help='where to write the game log')
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> GameConfig:
    return GameConfig(
        start_score=args.start_score,
        start_lives=args.lives,
        seed=args.seed,
    ).validate()


def setup_logging(log_file: str, level: str):
    """Log to a file; the terminal itself is the game screen."""
    logging.basicConfig(
        level=getattr(logging, level),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        handlers=[logging.FileHandler(log_file)]
    )


# =============================================================================
# MAIN LOOP
# =============================================================================

def drain_input(term: Terminal, input_handler: InputHandler):
    """Feed every pending key press to the input handler."""
    key = term.inkey(timeout=0)
    while key:
        input_handler.process_key(key)
        key = term.inkey(timeout=0)


def run(term: Terminal, config: GameConfig):
    """Fixed-timestep loop: update at 60 ticks/s, render once per frame."""
    renderer = GameRenderer(term)
    input_handler = InputHandler()
    game = Game(config, renderer.viewport())
    term_size = (term.width, term.height)

    last_time = time.perf_counter()
    accumulator = 0.0

    # Initial clear (only time we clear the whole screen)
    print(term.home + term.clear, end='', flush=True)

    while game.running:
        now = time.perf_counter()
        delta = min(now - last_time, FRAME_TIME * 5)
        last_time = now
        accumulator += delta

        if (term.width, term.height) != term_size:
            term_size = (term.width, term.height)
            renderer.resize(*term_size)
            game.resize(renderer.viewport())
            print(term.home + term.clear, end='', flush=True)

        drain_input(term, input_handler)

        ticks = 0
        while accumulator >= FRAME_TIME and ticks < MAX_TICKS_PER_FRAME and game.running:
            game.update(input_handler.sample())
            input_handler.update()
            accumulator -= FRAME_TIME
            ticks += 1

        game.render(renderer)
        render_ui(renderer, game.snapshot(), game.viewport)
        output = renderer.end_frame()
        if output:
            print(output, end='', flush=True)

        elapsed = time.perf_counter() - now
        sleep_time = FRAME_TIME - elapsed
        if sleep_time > 0.001:
            time.sleep(sleep_time * 0.9)


def main(argv=None):
    """Entry point. Checks the terminal, then runs the game."""
    args = parse_args(argv)
    try:
        config = config_from_args(args)
    except ConfigError as exc:
        print(f'ERROR: {exc}')
        sys.exit(1)

    setup_logging(args.log_file, args.log_level)

    term = Terminal()
    if not term.is_a_tty:
        print('ERROR: rocket-game needs an interactive terminal.')
        sys.exit(1)
    if term.width < MIN_WIDTH or term.height < MIN_HEIGHT:
        print(
            f'Terminal too small: {term.width}x{term.height}. '
            f'Minimum: {MIN_WIDTH}x{MIN_HEIGHT}'
        )
        sys.exit(1)

    logger.info('starting on a %dx%d terminal, seed=%s', term.width, term.height, config.seed)
    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        try:
            run(term, config)
        except KeyboardInterrupt:
            logger.info('interrupted')
        # Restore terminal
        print(term.normal, end='', flush=True)


if __name__ == '__main__':
    main()
