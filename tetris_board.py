"""Field grid and board helpers: collide, merge, clear, ghost"""
import logging
from typing import Iterable, List, Optional
from tetris_piece import Piece, Point, TetrominoType

log = logging.getLogger(__name__)

Cell = Optional[TetrominoType]


class Field:
    def __init__(self, width: int = 10, height: int = 20):
        self.width = width
        self.height = height
        self.cells: List[List[Cell]] = [[None] * width for _ in range(height)]

    def __getitem__(self, p: Point) -> Cell:
        return self.cells[p[1]][p[0]]

    def __setitem__(self, p: Point, value: Cell):
        self.cells[p[1]][p[0]] = value

    def occupied(self, x: int, y: int) -> bool:
        return self.cells[y][x] is not None

    def row_full(self, y: int) -> bool:
        return all(c is not None for c in self.cells[y])

    def filled_count(self) -> int:
        return sum(c is not None for row in self.cells for c in row)

    def __repr__(self):
        return f"Field({self.width}x{self.height}, filled={self.filled_count()})"


def check_collision(blocks: Iterable[Point], field: Field) -> bool:
    """True if any block is outside the side/bottom bounds or on a filled cell.

    Rows above the field (negative y) are open.
    """
    for bx, by in blocks:
        if bx < 0 or bx >= field.width or by >= field.height: return True
        if by >= 0 and field.occupied(bx, by): return True
    return False


def merge(field: Field, piece: Piece) -> int:
    """Copy the piece into the field; blocks above the top are dropped."""
    placed = 0
    for bx, by in piece.blocks:
        if by >= 0:
            field.cells[by][bx] = piece.t; placed += 1
    return placed


def full_rows(field: Field) -> List[int]:
    return [y for y in range(field.height) if field.row_full(y)]


def clear_lines(field: Field) -> int:
    """Remove every full row in one pass and return how many went."""
    kept = [row for y, row in enumerate(field.cells) if not field.row_full(y)]
    cleared = field.height - len(kept)
    if cleared:
        field.cells = [[None] * field.width for _ in range(cleared)] + kept
        log.debug("swept %d row(s)", cleared)
    return cleared


def drop_distance(field: Field, piece: Piece) -> int:
    """Rows the piece can fall before the next step would collide."""
    if not piece.offsets: return 0
    d = 0
    while not check_collision(piece.moved(0, d + 1), field):
        d += 1
    return d


def ghost_blocks(field: Field, piece: Piece) -> List[Point]:
    return piece.moved(0, drop_distance(field, piece))
