"""Uniform piece randomizer"""
import random
from typing import Optional
from tetris_piece import TetrominoType


class UniformRandom:
    """Every piece is drawn independently and uniformly from the seven types."""
    PIECES = TetrominoType.playable()

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def next_piece(self) -> TetrominoType:
        return self._rng.choice(self.PIECES)
