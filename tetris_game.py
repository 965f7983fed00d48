"""Game state, piece operations, gravity/lock and the session loop"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from tetris_board import Field, check_collision, clear_lines, drop_distance, merge
from tetris_config import CONFIG
from tetris_input import InputSource, Key
from tetris_piece import Piece, Point, TetrominoType
from tetris_rng import UniformRandom
from tetris_scoring import fall_interval_ms, level_for_lines, score_for_lines

log = logging.getLogger(__name__)


class GameStatus(Enum):
    READY = "ready"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameState:
    field: Field
    active: Piece
    score: int = 0
    level: int = 1
    lines_cleared_total: int = 0
    fall_interval_ms: float = 800.0
    status: GameStatus = GameStatus.READY

    @property
    def is_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    @property
    def is_paused(self) -> bool:
        return self.status is GameStatus.PAUSED


class Game:
    """One session. Operations validate a candidate and commit only if legal;
    illegal moves are no-ops that return False."""

    def __init__(self, width: Optional[int] = None, height: Optional[int] = None, rng=None):
        width = CONFIG["WIDTH"] if width is None else width
        height = CONFIG["HEIGHT"] if height is None else height
        self.rng = rng if rng is not None else UniformRandom(CONFIG["SEED"])
        self.state = GameState(Field(width, height), Piece.spawn(TetrominoType.NONE),
                               fall_interval_ms=fall_interval_ms(1))
        self.gravity_acc = 0.0
        self.spawn()

    @property
    def field(self) -> Field:
        return self.state.field

    @property
    def piece(self) -> Piece:
        return self.state.active

    @property
    def running(self) -> bool:
        return self.state.status is GameStatus.RUNNING

    # ---------- lifecycle ----------
    def start(self):
        if self.state.status is GameStatus.READY:
            self.state.status = GameStatus.RUNNING
            self.gravity_acc = 0.0
            log.info("game started")

    def toggle_pause(self):
        s = self.state
        if s.status is GameStatus.RUNNING: s.status = GameStatus.PAUSED
        elif s.status is GameStatus.PAUSED: s.status = GameStatus.RUNNING
        else: return
        log.info("paused" if s.is_paused else "resumed")

    def quit(self):
        if not self.state.is_over:
            self.state.status = GameStatus.GAME_OVER
            log.info("quit with score %d", self.state.score)

    def spawn_origin(self) -> Point:
        x = CONFIG["SPAWN_X"]
        if x is None: x = (self.field.width - 4) // 2
        return Point(x, 0)

    def spawn(self) -> bool:
        """Draw a new active piece; a colliding spawn ends the game."""
        t = self.rng.next_piece()
        self.state.active = Piece.spawn(t, self.spawn_origin())
        if check_collision(self.piece.blocks, self.field):
            self.state.status = GameStatus.GAME_OVER
            log.info("spawn of %s collided, game over with score %d", t.value, self.state.score)
            return False
        log.debug("spawned %s", t.value)
        return True

    # ---------- piece operations ----------
    def _try_move(self, dx: int, dy: int) -> bool:
        if check_collision(self.piece.moved(dx, dy), self.field): return False
        self.piece.commit_move(dx, dy)
        return True

    def move_left(self) -> bool:
        return self.running and self._try_move(-1, 0)

    def move_right(self) -> bool:
        return self.running and self._try_move(1, 0)

    def rotate(self) -> bool:
        if not self.running: return False
        if check_collision(self.piece.rotated(), self.field): return False
        self.piece.commit_rotate()
        return True

    def soft_drop(self) -> bool:
        if not (self.running and self._try_move(0, 1)): return False
        self.state.score += CONFIG["SOFT_DROP_POINTS"]
        return True

    def hard_drop(self) -> int:
        """Drop as far as possible and lock at once; returns rows cleared."""
        if not self.running: return 0
        d = drop_distance(self.field, self.piece)
        self.piece.commit_move(0, d)
        self.state.score += d * CONFIG["HARD_DROP_POINTS"]
        self.gravity_acc = 0.0
        return self.lock_piece()

    def step_gravity(self) -> bool:
        """Move down one row, or lock if that is illegal. True if the piece fell."""
        if not self.running: return False
        if self._try_move(0, 1): return True
        self.lock_piece()
        return False

    # ---------- lock / clear / score ----------
    def lock_piece(self) -> int:
        merge(self.field, self.piece)
        cleared = clear_lines(self.field)
        log.debug("locked %s at %s", self.piece.t.value, self.piece.blocks)
        self.award(cleared)
        self.spawn()
        return cleared

    def award(self, cleared: int):
        s = self.state
        if not cleared: return
        s.score += score_for_lines(cleared, s.level)
        s.lines_cleared_total += cleared
        log.info("cleared %d line(s), score %d, lines %d", cleared, s.score, s.lines_cleared_total)
        new_level = level_for_lines(s.lines_cleared_total)
        if new_level > s.level:
            s.level = new_level
            s.fall_interval_ms = fall_interval_ms(new_level)
            log.info("level %d, fall interval %.0f ms", s.level, s.fall_interval_ms)

    def tick(self, elapsed_ms: float):
        """Advance gravity by the time since the last tick."""
        if not self.running: return
        self.gravity_acc += elapsed_ms
        while self.running and self.gravity_acc >= self.state.fall_interval_ms:
            self.gravity_acc -= self.state.fall_interval_ms
            if not self.step_gravity():
                self.gravity_acc = 0.0
                break

    # ---------- input dispatch ----------
    def handle(self, key: Key):
        status = self.state.status
        if key is Key.QUIT:
            self.quit()
        elif status is GameStatus.READY:
            self.start()
        elif key is Key.PAUSE:
            self.toggle_pause()
        elif status is GameStatus.RUNNING:
            action = {
                Key.MOVE_LEFT: self.move_left,
                Key.MOVE_RIGHT: self.move_right,
                Key.ROTATE_CW: self.rotate,
                Key.SOFT_DROP: self.soft_drop,
                Key.HARD_DROP: self.hard_drop,
            }.get(key)
            if action: action()


def draw(game: Game, renderer):
    s = game.state
    renderer.render(s.field, s.active, s.score, s.level)
    if s.is_paused:
        renderer.show_message("PAUSED (P to resume, Q to quit)")


def run_session(game: Game, inputs: InputSource, renderer,
                sleep_ms: Callable[[float], None], clock_ms: Callable[[], float],
                frame_ms: Optional[float] = None) -> GameState:
    """Drive one game: start prompt, poll/mutate/render/sleep until over."""
    frame_ms = CONFIG["FRAME_MS"] if frame_ms is None else frame_ms
    if game.state.status is GameStatus.READY:
        renderer.show_message("Press any key to start...")
        game.handle(inputs.wait_key())
        game.start()

    last = clock_ms()
    while not game.state.is_over:
        key = inputs.read_key()
        if key is not None:
            game.handle(key)
        now = clock_ms()
        game.tick(now - last)
        last = now
        draw(game, renderer)
        sleep_ms(frame_ms)

    renderer.show_message(f"Game Over! Score: {game.state.score}")
    return game.state
