import logging
import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from tetris_config import CONFIG
from tetris_game import Game
from tetris_input import Key
from tetris_piece import TetrominoType


@pytest.fixture(autouse=True)
def restore_config():
    saved = dict(CONFIG)
    root_level = logging.getLogger().level
    yield
    CONFIG.clear()
    CONFIG.update(saved)
    logging.getLogger().setLevel(root_level)


class ScriptedRandom:
    """Hands out the given piece types in order, then repeats the last one."""
    def __init__(self, *types):
        self.types = list(types) or [TetrominoType.O]
        self.i = 0

    def next_piece(self):
        t = self.types[min(self.i, len(self.types) - 1)]
        self.i += 1
        return t


class FakeInput:
    def __init__(self, keys=(), start=Key.ANY):
        self.keys = list(keys)
        self.start = start
        self.waits = 0

    def wait_key(self):
        self.waits += 1
        return self.start

    def read_key(self):
        return self.keys.pop(0) if self.keys else Key.QUIT


class RecordingRenderer:
    def __init__(self):
        self.frames = []
        self.messages = []

    def render(self, field, piece, score, level):
        self.frames.append((piece.origin, score, level))

    def show_message(self, text):
        self.messages.append(text)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def sleep(self, ms):
        self.now += ms


def make_game(*types, width=10, height=20, start=True):
    game = Game(width, height, rng=ScriptedRandom(*types))
    if start:
        game.start()
    return game
