"""Logical keys and the curses / pygame input sources"""
import curses
from collections import deque
from enum import Enum
from typing import Deque, Dict, Optional, Protocol

import pygame


class Key(Enum):
    MOVE_LEFT = "left"
    MOVE_RIGHT = "right"
    ROTATE_CW = "rotate"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    PAUSE = "pause"
    QUIT = "quit"
    ANY = "any"


class InputSource(Protocol):
    def read_key(self) -> Optional[Key]:
        """Next pending key, or None without blocking."""

    def wait_key(self) -> Key:
        """Block until a key is pressed."""


def _chars(keys: str, k: Key) -> Dict[int, Key]:
    return {ord(c): k for c in keys}

CURSES_KEYS: Dict[int, Key] = {
    curses.KEY_LEFT: Key.MOVE_LEFT,
    curses.KEY_RIGHT: Key.MOVE_RIGHT,
    curses.KEY_UP: Key.ROTATE_CW,
    curses.KEY_DOWN: Key.SOFT_DROP,
    27: Key.PAUSE,
    **_chars("aA", Key.MOVE_LEFT),
    **_chars("dD", Key.MOVE_RIGHT),
    **_chars("wWxX", Key.ROTATE_CW),
    **_chars("sS", Key.SOFT_DROP),
    **_chars(" ", Key.HARD_DROP),
    **_chars("pP", Key.PAUSE),
    **_chars("qQ", Key.QUIT),
}

PYGAME_KEYS: Dict[int, Key] = {
    pygame.K_LEFT: Key.MOVE_LEFT, pygame.K_a: Key.MOVE_LEFT,
    pygame.K_RIGHT: Key.MOVE_RIGHT, pygame.K_d: Key.MOVE_RIGHT,
    pygame.K_UP: Key.ROTATE_CW, pygame.K_w: Key.ROTATE_CW, pygame.K_x: Key.ROTATE_CW,
    pygame.K_DOWN: Key.SOFT_DROP, pygame.K_s: Key.SOFT_DROP,
    pygame.K_SPACE: Key.HARD_DROP,
    pygame.K_p: Key.PAUSE, pygame.K_ESCAPE: Key.PAUSE,
    pygame.K_q: Key.QUIT,
}


class CursesInput:
    def __init__(self, stdscr):
        self.stdscr = stdscr
        stdscr.keypad(True)
        stdscr.nodelay(True)

    def read_key(self) -> Optional[Key]:
        ch = self.stdscr.getch()
        if ch == -1: return None
        return CURSES_KEYS.get(ch)

    def wait_key(self) -> Key:
        self.stdscr.nodelay(False)
        try:
            ch = self.stdscr.getch()
        finally:
            self.stdscr.nodelay(True)
        return CURSES_KEYS.get(ch, Key.ANY)


class PygameInput:
    """Buffers window events so each tick consumes at most one key."""
    def __init__(self):
        self.pending: Deque[Key] = deque()
        pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN])

    @staticmethod
    def translate(event) -> Optional[Key]:
        if event.type == pygame.QUIT: return Key.QUIT
        if event.type == pygame.KEYDOWN: return PYGAME_KEYS.get(event.key)
        return None

    def read_key(self) -> Optional[Key]:
        for e in pygame.event.get():
            k = self.translate(e)
            if k is not None: self.pending.append(k)
        return self.pending.popleft() if self.pending else None

    def wait_key(self) -> Key:
        while True:
            e = pygame.event.wait()
            if e.type == pygame.QUIT: return Key.QUIT
            if e.type == pygame.KEYDOWN: return PYGAME_KEYS.get(e.key, Key.ANY)
