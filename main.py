import os
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import curses, logging, sys, time
import pygame
from tetris_config import CONFIG, apply_env
from tetris_game import Game, GameState, run_session
from tetris_input import CursesInput, PygameInput
from tetris_log import setup_logging
from tetris_render import CursesRenderer, PygameRenderer

log = logging.getLogger("main")

BACKENDS = ("auto", "curses", "pygame")


def choose_backend(name: str, isatty: bool) -> str:
    name = (name or "auto").lower()
    if name not in BACKENDS:
        raise ValueError(f"unknown backend {name!r}, expected one of {', '.join(BACKENDS)}")
    if name == "auto":
        return "curses" if isatty else "pygame"
    return name


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def play_curses(game: Game) -> GameState:
    def session(stdscr):
        return run_session(game, CursesInput(stdscr), CursesRenderer(stdscr),
                           sleep_ms=lambda ms: curses.napms(int(ms)), clock_ms=monotonic_ms)
    return curses.wrapper(session)


def play_pygame(game: Game) -> GameState:
    pygame.init()
    try:
        renderer = PygameRenderer(game.field.width, game.field.height)
        return run_session(game, PygameInput(), renderer,
                           sleep_ms=lambda ms: pygame.time.wait(int(ms)),
                           clock_ms=pygame.time.get_ticks)
    finally:
        pygame.quit()


def main() -> int:
    apply_env()
    setup_logging(CONFIG["LOG_FILE"], CONFIG["LOG_LEVEL"])
    backend = choose_backend(CONFIG["BACKEND"], sys.stdout.isatty())
    log.info("starting %dx%d game with %s backend", CONFIG["WIDTH"], CONFIG["HEIGHT"], backend)

    game = Game()
    try:
        (play_curses if backend == "curses" else play_pygame)(game)
    except KeyboardInterrupt:
        game.quit()
    state = game.state
    log.info("session over: score %d, level %d, lines %d", state.score, state.level, state.lines_cleared_total)
    print(f"Game Over! Score: {state.score}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
