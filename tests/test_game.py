from __future__ import annotations

import random

import pytest

from rocket_game.camera import Viewport
from rocket_game.components import Obstacle, Particle
from rocket_game.config import GameConfig
from rocket_game.game import Game
from rocket_game.player import Controls
from rocket_game.progression import PHASE_GAME_OVER, PHASE_PAUSED, PHASE_WIN


def make_game(viewport: Viewport, seed: int = 11, **overrides) -> Game:
    config = GameConfig(bg_star_count=20, **overrides)
    return Game(config, viewport, rng=random.Random(seed))


def test_new_game_state(viewport: Viewport) -> None:
    game = make_game(viewport)
    hud = game.snapshot()
    assert (hud.score, hud.lives, hud.level) == (0, 1, 1)
    assert hud.level_name == 'Launch'
    assert not (hud.paused or hud.game_over or hud.win)
    assert game.running
    assert len(game.starfield) == 20
    assert game.obstacles == [] and game.stars == [] and game.particles == []


def test_ceiling_and_obstacle_in_one_tick_cost_one_life(viewport: Viewport) -> None:
    game = make_game(viewport, start_lives=3)
    ship = game.ship
    ship.screen_y = ship.half_h - 5
    ship.vy = -1.0
    game.obstacles.append(
        Obstacle(world_x=ship.world_x - 30, width=60.0, height=100.0, screen_y=0.0)
    )

    game.update(Controls())

    assert game.session.lives == 2
    assert game.session.running
    assert game.obstacles == []


def test_ceiling_breach_ends_a_one_life_game(viewport: Viewport) -> None:
    game = make_game(viewport)
    game.ship.screen_y = game.ship.half_h - 1
    game.update(Controls())
    assert game.snapshot().game_over


@pytest.mark.parametrize('phase', [PHASE_GAME_OVER, PHASE_WIN])
def test_restart_from_terminal_state_resets_everything(viewport: Viewport, phase: str) -> None:
    game = make_game(viewport, start_score=40, start_lives=2)
    game.session.score = 7000
    game.session.lives = 0
    game.session.level = 4
    game.session.phase = phase
    game.obstacles.append(Obstacle(world_x=900.0, width=50.0, height=50.0, screen_y=0.0))
    game.particles.append(Particle(x=0, y=0, vx=0, vy=0, life=10, max_life=10, color=1))
    game.ship.world_x = 5000.0

    game.update(Controls(restart=True))

    hud = game.snapshot()
    assert (hud.score, hud.lives, hud.level) == (40, 2, 1)
    assert game.session.running
    assert game.session.velocity_scale == pytest.approx(0.41)
    assert game.obstacles == [] and game.stars == [] and game.particles == []
    assert game.ship.world_x == viewport.width / 2
    assert game.ship.cam_x == 0
    assert len(game.starfield) == 20


def test_restart_is_ignored_while_running(viewport: Viewport) -> None:
    game = make_game(viewport)
    game.session.score = 500
    game.update(Controls(restart=True))
    assert game.session.score == 500


def test_terminal_state_freezes_the_world(viewport: Viewport) -> None:
    game = make_game(viewport)
    game.session.phase = PHASE_GAME_OVER
    y = game.ship.screen_y
    game.update(Controls(thrust=True))
    assert game.ship.screen_y == y
    assert game.particles == []


def test_level_up_pauses_and_moves_starfield_ahead(viewport: Viewport) -> None:
    game = make_game(viewport)
    game.session.score = 1200
    game.update(Controls())

    hud = game.snapshot()
    assert hud.level == 2 and hud.paused
    assert hud.level_name == 'Nebula'
    assert game.session.velocity_scale == pytest.approx(0.48)
    edge = game.ship.cam_x + viewport.width
    assert len(game.starfield) == 20
    assert all(s.world_x >= edge for s in game.starfield)


def test_pause_freezes_ship_timers_and_emission(viewport: Viewport) -> None:
    game = make_game(viewport)
    game.session.phase = PHASE_PAUSED
    game.particles.append(Particle(x=0, y=0, vx=1, vy=0, life=10, max_life=10, color=1))
    ship_state = (game.ship.world_x, game.ship.screen_y, game.ship.vx, game.ship.vy)

    for _ in range(5):
        game.update(Controls(thrust=True, rotate_left=True))

    assert (game.ship.world_x, game.ship.screen_y, game.ship.vx, game.ship.vy) == ship_state
    assert (game.session.timers.obstacle, game.session.timers.star) == (0.0, 0.0)
    assert len(game.particles) == 1
    assert game.particles[0].life == 5

    game.update(Controls(resume=True))
    assert game.session.running
    assert game.ship.vy > 0
    assert game.session.timers.star > 0


def test_reaching_win_score_wins_over_level_up_pause(viewport: Viewport) -> None:
    game = make_game(viewport)
    game.session.score = 9000
    game.update(Controls())
    hud = game.snapshot()
    assert hud.win
    assert not hud.paused


def test_quit_stops_the_game_in_any_phase(viewport: Viewport) -> None:
    game = make_game(viewport)
    game.session.phase = PHASE_PAUSED
    game.update(Controls(quit=True))
    assert not game.running


def test_resize_takes_effect_on_the_next_update(viewport: Viewport) -> None:
    game = make_game(viewport)
    small = Viewport(400, 300)
    game.resize(small)
    assert game.viewport == viewport
    game.update(Controls())
    assert game.viewport == small


def test_passing_an_obstacle_scores(viewport: Viewport) -> None:
    game = make_game(viewport)
    game.obstacles.append(Obstacle(world_x=-58.0, width=60.0, height=60.0, screen_y=0.0))
    game.update(Controls())
    assert game.session.score == 20
    assert game.session.lives == 1
    assert game.obstacles == []


def test_score_never_decreases(viewport: Viewport) -> None:
    game = make_game(viewport, seed=3, start_lives=50)
    rng = random.Random(8)
    last = 0
    for _ in range(600):
        game.update(Controls(
            thrust=rng.random() < 0.4,
            rotate_left=rng.random() < 0.1,
            rotate_right=rng.random() < 0.1,
            resume=rng.random() < 0.05,
        ))
        assert game.session.score >= last
        last = game.session.score


def test_same_seed_same_session(viewport: Viewport) -> None:
    def play(game: Game):
        for i in range(300):
            game.update(Controls(thrust=i % 3 == 0))
        return game.session.score, game.ship.world_x, len(game.obstacles), len(game.particles)

    assert play(make_game(viewport, seed=21, start_lives=9)) == \
        play(make_game(viewport, seed=21, start_lives=9))


def test_tick_renders_world_and_returns_hud(viewport: Viewport, surface) -> None:
    game = make_game(viewport)
    hud = game.tick(Controls(), surface)
    assert hud == game.snapshot()
    kinds = surface.kinds()
    assert kinds[0] == 'clear'
    assert kinds[-1] == 'polygon'
    assert kinds.count('rect') >= 20
