# tetris_layout.py
from dataclasses import dataclass
from typing import Optional, Tuple
from tetris_config import CONFIG

MARGIN = 16
PANEL_W = 200
LINE_H = 24


@dataclass
class Dims:
    """Pixel geometry of the pygame window: board on the left, HUD panel on the right."""
    cols: int
    rows: int
    cell: int

    @property
    def board_w(self) -> int: return self.cols * self.cell
    @property
    def board_h(self) -> int: return self.rows * self.cell
    @property
    def total_w(self) -> int: return MARGIN + self.board_w + MARGIN + PANEL_W + MARGIN
    @property
    def total_h(self) -> int: return MARGIN + self.board_h + MARGIN
    @property
    def panel_x(self) -> int: return MARGIN + self.board_w + MARGIN

    def cell_origin(self, x: int, y: int) -> Tuple[int, int]:
        return MARGIN + x * self.cell, MARGIN + y * self.cell

    def panel_line(self, i: int) -> Tuple[int, int]:
        return self.panel_x + 12, MARGIN + 12 + i * LINE_H

    def board_center(self) -> Tuple[int, int]:
        return MARGIN + self.board_w // 2, MARGIN + self.board_h // 2


def compute_dims(cols: int, rows: int, cell: Optional[int] = None) -> Dims:
    cell = int(CONFIG["CELL_SIZE"] if cell is None else cell)
    return Dims(cols, rows, max(8, cell))
