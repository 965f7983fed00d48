"""Piece model, shape library, naive rotation"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, NamedTuple, Tuple


class Point(NamedTuple):
    x: int
    y: int


class TetrominoType(Enum):
    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"
    NONE = "NONE"

    @classmethod
    def playable(cls) -> List["TetrominoType"]:
        return [t for t in cls if t is not cls.NONE]


def _shape(*cells) -> Tuple[Point, ...]:
    return tuple(Point(x, y) for x, y in cells)

SHAPES: Dict[TetrominoType, Tuple[Point, ...]] = {
    TetrominoType.I: _shape((0,0),(1,0),(2,0),(3,0)),
    TetrominoType.O: _shape((0,0),(1,0),(0,1),(1,1)),
    TetrominoType.T: _shape((0,0),(1,0),(2,0),(1,1)),
    TetrominoType.S: _shape((1,0),(2,0),(0,1),(1,1)),
    TetrominoType.Z: _shape((0,0),(1,0),(1,1),(2,1)),
    TetrominoType.J: _shape((0,0),(0,1),(1,1),(2,1)),
    TetrominoType.L: _shape((2,0),(0,1),(1,1),(2,1)),
}


def base_shape(t: TetrominoType) -> Tuple[Point, ...]:
    try:
        return SHAPES[t]
    except KeyError:
        raise ValueError(f"no shape for {t}") from None


def rotate_cw(p: Point) -> Point:
    return Point(-p.y, p.x)


@dataclass
class Piece:
    """The falling piece: a local frame origin plus four offsets.

    Rotation turns the offsets about the frame origin and never moves the
    origin, so four rotations give back the original blocks exactly. There
    are no kicks: a rotation that leaves the field is simply rejected.
    """
    t: TetrominoType
    origin: Point = Point(0, 0)
    offsets: List[Point] = field(default_factory=list)
    rotation_state: int = 0

    @staticmethod
    def spawn(t: TetrominoType, origin: Point = Point(0, 0)) -> "Piece":
        if t is TetrominoType.NONE:
            return Piece(t, origin)
        return Piece(t, origin, list(base_shape(t)), 0)

    @property
    def blocks(self) -> List[Point]:
        ox, oy = self.origin
        return [Point(ox + x, oy + y) for x, y in self.offsets]

    def moved(self, dx: int, dy: int) -> List[Point]:
        return [Point(x + dx, y + dy) for x, y in self.blocks]

    def rotated(self) -> List[Point]:
        ox, oy = self.origin
        return [Point(ox + r.x, oy + r.y) for r in map(rotate_cw, self.offsets)]

    def commit_move(self, dx: int, dy: int) -> None:
        self.origin = Point(self.origin.x + dx, self.origin.y + dy)

    def commit_rotate(self) -> None:
        self.offsets = [rotate_cw(p) for p in self.offsets]
        self.rotation_state = (self.rotation_state + 1) % 4
