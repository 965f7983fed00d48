"""
Renderers for the game.

- format_rows / format_frame: pure text frame, used by the curses renderer
  and by tests; occupied cells are "[]", empty cells two blanks, each row
  bounded by "|".
- CursesRenderer: draws the text frame into a terminal with a colour per
  tetromino type.
- PygameRenderer: window renderer with pre-rendered cell sprites, a ghost
  outline of the landing spot and a HUD panel.
"""
from __future__ import annotations
import curses
from typing import Dict, List, Optional, Protocol, Tuple

import pygame

from tetris_board import Cell, Field, check_collision, ghost_blocks
from tetris_layout import PANEL_W, Dims, compute_dims
from tetris_piece import Piece, TetrominoType

FILLED, EMPTY, BORDER = "[]", "  ", "|"

CONTROLS = [
    "Arrows/A D  Move",
    "Up/W/X  Rotate",
    "Down/S  Soft drop",
    "Space  Hard drop",
    "P  Pause   Q  Quit",
]


class Renderer(Protocol):
    def render(self, field: Field, piece: Piece, score: int, level: int) -> None: ...
    def show_message(self, text: str) -> None: ...


def frame_cells(field: Field, piece: Optional[Piece]) -> List[List[Cell]]:
    """Field cells with the active piece drawn over them; off-field blocks are skipped."""
    cells = [row[:] for row in field.cells]
    if piece is not None:
        for x, y in piece.blocks:
            if 0 <= y < field.height and 0 <= x < field.width:
                cells[y][x] = piece.t
    return cells


def format_rows(field: Field, piece: Optional[Piece] = None) -> List[str]:
    rows = [BORDER + "".join(FILLED if c is not None else EMPTY for c in row) + BORDER
            for row in frame_cells(field, piece)]
    rows.append("+" + "-" * (2 * field.width) + "+")
    return rows


def format_frame(field: Field, piece: Optional[Piece], score: int, level: int) -> List[str]:
    return [f"Score: {score} Level: {level}"] + format_rows(field, piece)


# ---------- curses ----------
CURSES_COLORS: Dict[TetrominoType, int] = {
    TetrominoType.I: 6,
    TetrominoType.J: 4,
    TetrominoType.L: 3,
    TetrominoType.O: 2,
    TetrominoType.S: 5,
    TetrominoType.T: 1,
    TetrominoType.Z: 7,
}


class CursesRenderer:
    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.colors = False
        curses.curs_set(0)
        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()
            for i in range(1, 8):
                curses.init_pair(i, i, -1)
            self.colors = True
        self.width = self.height = 0

    def _put(self, y: int, x: int, text: str, attr: int = 0):
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            # terminal too small; the row is clipped
            pass

    def render(self, field: Field, piece: Piece, score: int, level: int):
        self.stdscr.erase()
        lines = format_frame(field, piece, score, level)
        for y, line in enumerate(lines):
            self._put(y, 0, line)
        if self.colors:
            for y, row in enumerate(frame_cells(field, piece)):
                for x, c in enumerate(row):
                    if c is not None:
                        self._put(y + 1, 1 + 2 * x, FILLED, curses.color_pair(CURSES_COLORS[c]))
        for i, text in enumerate(CONTROLS):
            self._put(1 + i, 2 * field.width + 4, text)
        self.width, self.height = field.width, len(lines)
        self.stdscr.refresh()

    def show_message(self, text: str):
        y = self.height // 2 if self.width else 0
        x = max(0, self.width + 1 - len(text) // 2) if self.width else 0
        self._put(y, x, text, curses.A_REVERSE if self.width else 0)
        self.stdscr.refresh()


# ---------- pygame ----------
COLORS: Dict[TetrominoType, Tuple[int, int, int]] = {
    TetrominoType.I: (102, 224, 255),
    TetrominoType.J: (106, 119, 255),
    TetrominoType.L: (255, 158, 94),
    TetrominoType.O: (255, 224, 102),
    TetrominoType.S: (94, 224, 142),
    TetrominoType.T: (200, 119, 255),
    TetrominoType.Z: (255, 102, 119),
}


class PygameRenderer:
    """Holds pre-rendered sprites and draws whole frames to the window."""
    def __init__(self, cols: int, rows: int, caption: str = "Tetris"):
        self.dims: Dims = compute_dims(cols, rows)
        self.screen = pygame.display.set_mode((self.dims.total_w, self.dims.total_h))
        pygame.display.set_caption(caption)
        self.font = pygame.font.SysFont(None, 22)
        self.big_font = pygame.font.SysFont(None, 36)
        self._make_static()
        self._make_cells()

    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill((10, 13, 34))
        grid_col = (40, 50, 90)
        x0, y0 = d.cell_origin(0, 0)
        for x in range(d.cols + 1):
            X = x0 + x * d.cell
            pygame.draw.line(self.bg, grid_col, (X, y0), (X, y0 + d.board_h))
        for y in range(d.rows + 1):
            Y = y0 + y * d.cell
            pygame.draw.line(self.bg, grid_col, (x0, Y), (x0 + d.board_w, Y))
        panel = pygame.Rect(d.panel_x, y0, PANEL_W, d.board_h)
        pygame.draw.rect(self.bg, (21, 25, 53), panel)
        pygame.draw.rect(self.bg, (50, 60, 100), panel, 1)
        for i, text in enumerate(CONTROLS):
            self.bg.blit(self.font.render(text, True, (165, 175, 215)), d.panel_line(4 + i))

    def _make_cells(self):
        self.cell_surf: Dict[TetrominoType, pygame.Surface] = {}
        self.ghost_surf: Dict[TetrominoType, pygame.Surface] = {}
        c = self.dims.cell
        for t, col in COLORS.items():
            s = pygame.Surface((c - 2, c - 2))
            s.fill(col)
            self.cell_surf[t] = s
            g = pygame.Surface((c - 8, c - 8), pygame.SRCALPHA)
            pygame.draw.rect(g, col, (0, 0, c - 8, c - 8), 2)
            self.ghost_surf[t] = g

    def _blit_cell(self, surf: pygame.Surface, x: int, y: int, inset: int):
        px, py = self.dims.cell_origin(x, y)
        self.screen.blit(surf, (px + inset, py + inset))

    def render(self, field: Field, piece: Piece, score: int, level: int):
        self.screen.blit(self.bg, (0, 0))
        for y, row in enumerate(field.cells):
            for x, t in enumerate(row):
                if t is not None:
                    self._blit_cell(self.cell_surf[t], x, y, 1)
        if piece.t in COLORS and not check_collision(piece.blocks, field):
            for x, y in ghost_blocks(field, piece):
                if y >= 0: self._blit_cell(self.ghost_surf[piece.t], x, y, 4)
            for x, y in piece.blocks:
                if y >= 0: self._blit_cell(self.cell_surf[piece.t], x, y, 1)
        hud = [("Tetris", (197, 202, 233)), (f"Score: {score}", (200, 210, 240)),
               (f"Level: {level}", (200, 210, 240))]
        for i, (text, col) in enumerate(hud):
            self.screen.blit(self.font.render(text, True, col), self.dims.panel_line(i))
        pygame.display.flip()

    def show_message(self, text: str):
        msg = self.big_font.render(text, True, (255, 220, 220))
        rect = msg.get_rect(center=self.dims.board_center())
        pygame.draw.rect(self.screen, (20, 25, 40), rect.inflate(16, 12))
        self.screen.blit(msg, rect)
        pygame.display.flip()
