from __future__ import annotations

import pytest

from rocket_game.camera import Viewport
from rocket_game.engine import (
    GRAY_DARK, GRAY_MED, NEON_RED, BrailleCanvas, GameRenderer, fade,
)


@pytest.fixture()
def renderer(term) -> GameRenderer:
    r = GameRenderer(term)
    r.resize(10, 5)
    r.begin_frame()
    return r


def cell_char(renderer: GameRenderer, cx: int, cy: int) -> str:
    return renderer.braille.get_char(cx, cy)[0]


def test_viewport_is_measured_in_virtual_pixels(renderer: GameRenderer) -> None:
    assert renderer.viewport() == Viewport(80, 80)
    assert (renderer.width, renderer.height) == (10, 5)


def test_braille_dot_bits() -> None:
    canvas = BrailleCanvas(1, 1)
    canvas.set_dot(0, 0)
    canvas.set_dot(1, 3, NEON_RED)
    assert canvas.get_char(0, 0) == (chr(0x2800 + 0x01 + 0x80), NEON_RED)
    assert canvas.get_char(5, 5) == ('', 255)


def test_rect_covering_a_cell_lights_every_dot(renderer: GameRenderer) -> None:
    renderer.fill_rect(0, 0, 8, 16)
    assert cell_char(renderer, 0, 0) == chr(0x28FF)
    assert cell_char(renderer, 1, 0) == ''


def test_tiny_rect_still_lights_one_dot(renderer: GameRenderer) -> None:
    renderer.fill_rect(5, 5, 1, 1)
    assert cell_char(renderer, 0, 0) == chr(0x2800 + 0x10)


def test_polygon_fill(renderer: GameRenderer) -> None:
    renderer.fill_polygon([(8, 16), (16, 16), (16, 32), (8, 32)])
    assert cell_char(renderer, 1, 1) == chr(0x28FF)
    assert cell_char(renderer, 0, 0) == ''


def test_tiny_circle_lights_its_centre(renderer: GameRenderer) -> None:
    renderer.fill_circle(40, 40, 0.5)
    assert cell_char(renderer, 5, 2) == chr(0x2800 + 0x04)


def test_text_alignment_and_weight(renderer: GameRenderer) -> None:
    renderer.draw_text('HI', 40, 32, size=16, align='center')
    renderer.draw_text('GO', 0, 64, size=30)
    back = renderer.buffer.back
    assert (back[2][4].char, back[2][5].char) == ('H', 'I')
    assert not back[2][4].bold
    assert back[4][0].char == 'G' and back[4][0].bold


def test_unknown_alignment_is_rejected(renderer: GameRenderer) -> None:
    with pytest.raises(ValueError):
        renderer.draw_text('X', 0, 0, align='right')


def test_text_wins_over_dots_and_unchanged_frames_emit_nothing(renderer: GameRenderer) -> None:
    renderer.fill_rect(0, 0, 16, 16)
    renderer.draw_text('X', 0, 0)
    output = renderer.end_frame()
    assert 'X' in output
    assert renderer.buffer.front[0][0].char == 'X'
    assert renderer.buffer.front[0][1].char == chr(0x28FF)

    renderer.clear()
    renderer.fill_rect(0, 0, 16, 16)
    renderer.draw_text('X', 0, 0)
    assert renderer.end_frame() == ''


def test_a_run_of_changed_cells_needs_one_cursor_move(renderer: GameRenderer, term) -> None:
    renderer.draw_text('ABC', 16, 16, color=NEON_RED)
    output = renderer.end_frame()
    assert 'ABC' in output
    assert output.count(term.move_xy(2, 1)) == 1
    assert term.move_xy(3, 1) not in output
    assert output.count(term.color(NEON_RED)) == 1


def test_fade_steps_down_to_grays() -> None:
    assert fade(NEON_RED, 0.8) == NEON_RED
    assert fade(NEON_RED, 0.4) == GRAY_MED
    assert fade(NEON_RED, 0.1) == GRAY_DARK
