from conftest import make_game

from tetris_config import CONFIG
from tetris_game import GameStatus
from tetris_input import Key
from tetris_piece import Point, TetrominoType

O, T, I = TetrominoType.O, TetrominoType.T, TetrominoType.I


def fill_row_except(field, y, *holes):
    for x in range(field.width):
        if x not in holes:
            field.cells[y][x] = TetrominoType.J


def test_new_game_waits_for_any_key():
    game = make_game(O, start=False)
    assert game.state.status is GameStatus.READY
    assert game.state.level == 1 and game.state.score == 0
    assert not game.move_left()
    assert game.piece.origin == (3, 0)
    game.handle(Key.ANY)
    assert game.state.status is GameStatus.RUNNING


def test_spawn_is_centred_and_draws_one_piece():
    game = make_game(O, T)
    assert game.piece.t is O
    assert game.piece.blocks == [(3, 0), (4, 0), (3, 1), (4, 1)]
    # no lookahead: each spawn draws exactly one piece
    assert game.rng.i == 1
    game.hard_drop()
    assert game.piece.t is T
    assert game.rng.i == 2


def test_spawn_column_is_configurable():
    CONFIG["SPAWN_X"] = 0
    game = make_game(I)
    assert game.piece.blocks == [(0, 0), (1, 0), (2, 0), (3, 0)]


def test_wall_stops_horizontal_moves():
    game = make_game(O)
    assert all(game.move_left() for _ in range(3))
    before = list(game.piece.blocks)
    assert not game.move_left()
    assert game.piece.blocks == before
    for _ in range(8):
        game.move_right()
    assert max(x for x, _ in game.piece.blocks) == 9


def test_rotation_rejected_at_left_wall():
    # naive rotation has no kicks, so a T flush with the wall cannot turn
    game = make_game(T)
    for _ in range(3):
        game.move_left()
    before = list(game.piece.blocks)
    assert not game.rotate()
    assert game.piece.blocks == before
    assert game.piece.rotation_state == 0


def test_rotation_may_reach_above_the_field():
    game = make_game(T)
    assert game.rotate() and game.rotate()
    assert game.piece.rotation_state == 2
    assert min(y for _, y in game.piece.blocks) == -1


def test_hard_drop_locks_at_floor():
    game = make_game(O, T)
    assert game.hard_drop() == 0
    f = game.field
    assert f.filled_count() == 4
    assert all(f[Point(x, y)] is O for x in (3, 4) for y in (18, 19))
    assert game.piece.t is T
    assert game.piece.origin == (3, 0)
    assert game.gravity_acc == 0


def test_hard_drop_stops_on_stack():
    game = make_game(O, O)
    game.field.cells[10][4] = TetrominoType.L
    game.hard_drop()
    assert game.field[Point(3, 9)] is O and game.field[Point(4, 8)] is O
    assert game.field.filled_count() == 5


def test_gravity_locks_o_piece_at_bottom():
    game = make_game(O, T)
    falls = 0
    while game.step_gravity():
        falls += 1
    assert falls == 18
    f = game.field
    assert f.filled_count() == 4
    assert {(x, y) for y, row in enumerate(f.cells) for x, c in enumerate(row) if c} == \
        {(3, 18), (4, 18), (3, 19), (4, 19)}
    assert not game.state.is_over
    assert game.piece.t is T


def test_tick_uses_accumulated_time():
    game = make_game(O)
    interval = game.state.fall_interval_ms
    game.tick(interval - 1)
    assert game.piece.origin.y == 0
    game.tick(1)
    assert game.piece.origin.y == 1
    game.tick(interval * 3)
    assert game.piece.origin.y == 4


def test_pause_freezes_piece():
    game = make_game(O)
    game.handle(Key.PAUSE)
    assert game.state.is_paused
    game.handle(Key.MOVE_LEFT)
    game.handle(Key.HARD_DROP)
    game.tick(10000)
    assert game.piece.origin == (3, 0)
    assert game.field.filled_count() == 0
    game.handle(Key.PAUSE)
    assert game.state.status is GameStatus.RUNNING
    game.handle(Key.MOVE_LEFT)
    assert game.piece.origin == (2, 0)


def test_dispatch_maps_keys_to_operations():
    game = make_game(T, O)
    game.handle(Key.MOVE_RIGHT)
    game.handle(Key.SOFT_DROP)
    assert game.piece.origin == (4, 1)
    game.handle(Key.ROTATE_CW)
    assert game.piece.rotation_state == 1
    game.handle(Key.HARD_DROP)
    assert game.piece.t is O
    assert game.field.filled_count() == 4


def test_soft_drop_at_floor_is_a_noop():
    CONFIG["SOFT_DROP_POINTS"] = 1
    game = make_game(O)
    game.piece.commit_move(0, 18)
    assert not game.soft_drop()
    assert game.piece.origin.y == 18
    assert game.field.filled_count() == 0
    assert game.state.score == 0


def test_drop_bonuses():
    CONFIG["SOFT_DROP_POINTS"] = 1
    CONFIG["HARD_DROP_POINTS"] = 2
    game = make_game(O)
    game.soft_drop()
    game.soft_drop()
    game.hard_drop()
    assert game.state.score == 2 + 16 * 2


def test_filling_last_hole_clears_row():
    game = make_game(T, O)
    fill_row_except(game.field, 19, 4)
    level = game.state.level
    assert game.hard_drop() == 1
    s = game.state
    assert s.score == 40 * (level + 1)
    assert s.lines_cleared_total == 1
    # the T's top bar drops into the cleared row
    assert game.field.filled_count() == 3
    assert all(game.field[Point(x, 19)] is T for x in (3, 4, 5))
    assert not s.is_over


def test_gravity_lock_clears_two_rows():
    game = make_game(O, T)
    fill_row_except(game.field, 18, 3, 4)
    fill_row_except(game.field, 19, 3, 4)
    while game.step_gravity():
        pass
    assert game.state.lines_cleared_total == 2
    assert game.state.score == 100 * 2
    assert game.field.filled_count() == 0


def test_level_up_speeds_gravity():
    CONFIG["LINES_PER_LEVEL"] = 1
    game = make_game(T, O)
    before = game.state.fall_interval_ms
    fill_row_except(game.field, 19, 4)
    game.hard_drop()
    assert game.state.level == 2
    assert game.state.fall_interval_ms < before
    assert game.state.score == 80


def test_spawn_collision_ends_game():
    game = make_game(O, O)
    game.field.cells[2][3] = TetrominoType.L
    game.hard_drop()
    s = game.state
    assert s.is_over and s.status is GameStatus.GAME_OVER
    assert s.score == 0
    assert not game.move_left() and not game.rotate()
    assert game.hard_drop() == 0


def test_quit_ends_from_any_state():
    game = make_game(O)
    game.handle(Key.PAUSE)
    game.handle(Key.QUIT)
    assert game.state.is_over
    game.handle(Key.PAUSE)
    assert game.state.is_over
