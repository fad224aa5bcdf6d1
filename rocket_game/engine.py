"""
Rendering Engine
=================
Double-buffered terminal renderer with a braille pixel canvas.

The game draws in virtual pixels. Every terminal cell is
CELL_WIDTH x CELL_HEIGHT pixels and shows a 2x4 braille block, so shapes
land on braille dots while text lands on whole cells.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple
import math

try:
    from blessed import Terminal
except ImportError:
    raise ImportError("'blessed' library required. Install with: pip install blessed")

from .camera import Viewport
from .config import CELL_WIDTH, CELL_HEIGHT


# ANSI 256 colours used by the HUD and the ship
NEON_GREEN = 46
NEON_RED = 196
NEON_ORANGE = 214
SHIP_BLUE = 27
WHITE = 255

# Fade steps for dying particles
GRAY_MED = 245
GRAY_DARK = 238

# Text at or above this size renders bold
BOLD_FONT_SIZE = 24

# Pixels covered by one braille dot
DOT_WIDTH = CELL_WIDTH / 2
DOT_HEIGHT = CELL_HEIGHT / 4


def fade(color: int, alpha: float) -> int:
    """Approximate transparency by stepping down to grays."""
    if alpha > 0.5:
        return color
    if alpha > 0.25:
        return GRAY_MED
    return GRAY_DARK


@dataclass(frozen=True)
class Cell:
    """What one terminal cell shows. Cells are replaced, never mutated."""
    char: str = ' '
    fg_color: int = 7
    bold: bool = False


BLANK = Cell()


class DoubleBuffer:
    """
    Double-buffered terminal output.

    Writes go to the back buffer. present() compares it with what is on
    screen and emits each run of changed cells with one cursor move,
    switching style only where it changes inside the run.
    """

    def __init__(self, term: Terminal, width: int, height: int):
        self.term = term
        self.width = width
        self.height = height
        self.front: List[List[Cell]] = self._blank_grid()
        self.back: List[List[Cell]] = self._blank_grid()

    def _blank_grid(self) -> List[List[Cell]]:
        return [[BLANK] * self.width for _ in range(self.height)]

    def resize(self, width: int, height: int):
        """New size; everything on screen counts as blank afterwards."""
        self.width = width
        self.height = height
        self.front = self._blank_grid()
        self.back = self._blank_grid()

    def clear_back(self):
        self.back = self._blank_grid()

    def put(self, x: int, y: int, char: str, fg_color: int = 7, bold: bool = False):
        if 0 <= x < self.width and 0 <= y < self.height:
            self.back[y][x] = Cell(char, fg_color, bold)

    def put_string(self, x: int, y: int, text: str, fg_color: int = 7, bold: bool = False):
        for offset, char in enumerate(text):
            self.put(x + offset, y, char, fg_color, bold)

    def _style(self, cell: Cell) -> str:
        style = self.term.normal
        if cell.bold:
            style += self.term.bold
        return style + self.term.color(cell.fg_color)

    def present(self) -> str:
        """Swap buffers and return the escape sequences for changed cells."""
        parts = []
        for y, (back_row, front_row) in enumerate(zip(self.back, self.front)):
            x = 0
            while x < self.width:
                if back_row[x] == front_row[x]:
                    x += 1
                    continue
                parts.append(self.term.move_xy(x, y))
                style = None
                while x < self.width and back_row[x] != front_row[x]:
                    cell = back_row[x]
                    if (cell.fg_color, cell.bold) != style:
                        parts.append(self._style(cell))
                        style = (cell.fg_color, cell.bold)
                    parts.append(cell.char or ' ')
                    x += 1

        self.front, self.back = self.back, self._blank_grid()
        return ''.join(parts)


class BrailleCanvas:
    """
    Sub-pixel canvas using Unicode Braille patterns.

    Each character cell maps to a 2x4 dot grid. A cell takes the colour
    of the last dot written into it.
    """

    # Bit for dot (column, row) is DOT_BITS[row][column]
    DOT_BITS = (
        (0x01, 0x08),
        (0x02, 0x10),
        (0x04, 0x20),
        (0x40, 0x80),
    )
    BASE = 0x2800

    def __init__(self, char_width: int, char_height: int):
        self.char_width = char_width
        self.char_height = char_height
        self.pixel_width = char_width * 2
        self.pixel_height = char_height * 4
        self.canvas: List[List[int]] = []
        self.colors: List[List[int]] = []
        self.clear()

    def clear(self):
        self.canvas = [[0] * self.char_width for _ in range(self.char_height)]
        self.colors = [[WHITE] * self.char_width for _ in range(self.char_height)]

    def set_dot(self, dx: int, dy: int, color: int = WHITE):
        """Set one braille dot, in dot coordinates."""
        if 0 <= dx < self.pixel_width and 0 <= dy < self.pixel_height:
            cx, cy = dx // 2, dy // 4
            self.canvas[cy][cx] |= self.DOT_BITS[dy % 4][dx % 2]
            self.colors[cy][cx] = color

    def get_char(self, cx: int, cy: int) -> Tuple[str, int]:
        """Braille character and colour at a cell, or ('', WHITE) if empty."""
        if 0 <= cx < self.char_width and 0 <= cy < self.char_height:
            pattern = self.canvas[cy][cx]
            if pattern > 0:
                return chr(self.BASE + pattern), self.colors[cy][cx]
        return '', WHITE

    def blit_to_buffer(self, buffer: DoubleBuffer):
        """Copy dots into the buffer. Cells that already hold text win."""
        for cy in range(min(self.char_height, buffer.height)):
            for cx in range(min(self.char_width, buffer.width)):
                char, color = self.get_char(cx, cy)
                if char and buffer.back[cy][cx].char == ' ':
                    buffer.put(cx, cy, char, color)


def _point_in_polygon(x: float, y: float, points: Sequence[Tuple[float, float]]) -> bool:
    """Even-odd ray casting test."""
    inside = False
    j = len(points) - 1
    for i in range(len(points)):
        xi, yi = points[i]
        xj, yj = points[j]
        if (yi > y) != (yj > y):
            cross_x = xi + (y - yi) * (xj - xi) / (yj - yi)
            if x < cross_x:
                inside = not inside
        j = i
    return inside


@dataclass
class GameRenderer:
    """
    Drawing surface for the game, in virtual pixels.

    Shapes (rectangles, polygons, circles) go to the braille canvas,
    text goes straight to the character buffer.
    """
    term: Terminal
    buffer: DoubleBuffer = field(init=False)
    braille: BrailleCanvas = field(init=False)

    def __post_init__(self):
        self.buffer = DoubleBuffer(self.term, self.term.width, self.term.height)
        self.braille = BrailleCanvas(self.term.width, self.term.height)

    @property
    def width(self) -> int:
        """Width in terminal cells."""
        return self.buffer.width

    @property
    def height(self) -> int:
        """Height in terminal cells."""
        return self.buffer.height

    def viewport(self) -> Viewport:
        """Current drawable area in virtual pixels."""
        return Viewport(self.width * CELL_WIDTH, self.height * CELL_HEIGHT)

    def resize(self, width: int, height: int):
        """Handle terminal resize (sizes in cells)."""
        self.buffer.resize(width, height)
        self.braille = BrailleCanvas(width, height)

    def begin_frame(self):
        self.buffer.clear_back()
        self.braille.clear()

    def end_frame(self) -> str:
        """Finalize frame: blit braille overlay and present."""
        self.braille.blit_to_buffer(self.buffer)
        return self.buffer.present()

    # -------------------------------------------------------------------------
    # Drawing surface
    # -------------------------------------------------------------------------

    def clear(self):
        """Blank the whole frame (the terminal background is the black)."""
        self.begin_frame()

    def _dot_range(self, lo: float, hi: float, dot_size: float, limit: int) -> range:
        start = max(0, int(math.floor(lo / dot_size)))
        stop = min(limit, int(math.ceil(hi / dot_size)))
        return range(start, stop)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: int = WHITE):
        """Fill the dots whose centres fall inside the rectangle.

        Rectangles smaller than a dot still light the dot they sit on.
        """
        if w <= 0 or h <= 0:
            return
        if w < DOT_WIDTH and h < DOT_HEIGHT:
            self.braille.set_dot(int(math.floor((x + w / 2) / DOT_WIDTH)),
                                 int(math.floor((y + h / 2) / DOT_HEIGHT)), color)
            return
        for dy in self._dot_range(y, y + h, DOT_HEIGHT, self.braille.pixel_height):
            cy = (dy + 0.5) * DOT_HEIGHT
            if not y <= cy < y + h:
                continue
            for dx in self._dot_range(x, x + w, DOT_WIDTH, self.braille.pixel_width):
                cx = (dx + 0.5) * DOT_WIDTH
                if x <= cx < x + w:
                    self.braille.set_dot(dx, dy, color)

    def fill_polygon(self, points: Sequence[Tuple[float, float]], color: int = WHITE):
        """Fill a closed polygon given in pixel coordinates."""
        if len(points) < 3:
            return
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        for dy in self._dot_range(min(ys), max(ys), DOT_HEIGHT, self.braille.pixel_height):
            cy = (dy + 0.5) * DOT_HEIGHT
            for dx in self._dot_range(min(xs), max(xs), DOT_WIDTH, self.braille.pixel_width):
                if _point_in_polygon((dx + 0.5) * DOT_WIDTH, cy, points):
                    self.braille.set_dot(dx, dy, color)

    def fill_circle(self, cx: float, cy: float, radius: float, color: int = WHITE):
        """Fill a circle; tiny circles still light their centre dot."""
        self.braille.set_dot(int(math.floor(cx / DOT_WIDTH)),
                             int(math.floor(cy / DOT_HEIGHT)), color)
        r2 = radius * radius
        for dy in self._dot_range(cy - radius, cy + radius, DOT_HEIGHT, self.braille.pixel_height):
            py = (dy + 0.5) * DOT_HEIGHT - cy
            for dx in self._dot_range(cx - radius, cx + radius, DOT_WIDTH, self.braille.pixel_width):
                px = (dx + 0.5) * DOT_WIDTH - cx
                if px * px + py * py <= r2:
                    self.braille.set_dot(dx, dy, color)

    def draw_text(self, text: str, x: float, y: float, size: float = 16,
                  color: int = WHITE, align: str = 'start'):
        """
        Draw text with its baseline at pixel y.

        align is 'start' (x is the left edge) or 'center'. Sizes at or
        above BOLD_FONT_SIZE render bold; a terminal has one font size.
        """
        col = int(x // CELL_WIDTH)
        row = int(y // CELL_HEIGHT)
        if align == 'center':
            col -= len(text) // 2
        elif align != 'start':
            raise ValueError(f'unknown text alignment: {align!r}')
        self.buffer.put_string(col, row, text, color, bold=size >= BOLD_FONT_SIZE)
