from __future__ import annotations

from dataclasses import replace

import numpy as np
import pytest

from blockdrop.config import GameConfig
from blockdrop.engine import BoardEngine, Command, POINTS_TABLE, score_for_lines
from blockdrop.game_state import GameState, Position
from blockdrop.pieces import COLOR_TOKENS, Piece, ShapeType


PLAY_COMMANDS = [
    Command.TICK,
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.SOFT_DROP,
    Command.ROTATE,
    Command.MIRROR,
]


def _with_piece(engine: BoardEngine, kind: ShapeType, x: int, y: int) -> GameState:
    return replace(
        engine.initial_state(),
        current_piece=Piece.from_type(kind),
        position=Position(x, y),
    )


def _blocked_spawn_state(engine: BoardEngine) -> GameState:
    """Return a state whose next merge ends the game."""

    state = _with_piece(engine, ShapeType.O, 0, 18)
    state.board.grid[0, 4] = COLOR_TOKENS[ShapeType.L]
    return state


@pytest.mark.parametrize(
    "cleared, points",
    [(0, 0), (1, 10), (2, 30), (3, 50), (4, 80), (5, 0)],
)
def test_score_table(cleared, points):
    assert score_for_lines(cleared) == points
    assert BoardEngine.score(cleared) == points
    assert POINTS_TABLE[4] == 80


def test_new_piece_is_seeded_and_from_catalog():
    first = BoardEngine(GameConfig(seed=7))
    second = BoardEngine(GameConfig(seed=7))
    kinds = [first.new_piece().kind for _ in range(50)]
    assert kinds == [second.new_piece().kind for _ in range(50)]
    assert set(kinds) <= set(ShapeType)


def test_initial_state_is_empty():
    state = BoardEngine().initial_state()
    assert state.current_piece is None
    assert state.score == 0
    assert not state.game_over
    assert state.board.is_clear()


def test_tick_on_empty_state_spawns(make_engine):
    engine = make_engine(ShapeType.T)
    state = engine.apply(engine.initial_state(), Command.TICK)
    assert state.current_piece == Piece.from_type(ShapeType.T)
    assert state.position == Position(4, 0)


def test_o_piece_falls_to_bottom_and_next_piece_spawns(make_engine):
    engine = make_engine(ShapeType.S)
    state = _with_piece(engine, ShapeType.O, 4, 0)

    for expected_y in range(1, 19):
        state = engine.apply(state, Command.TICK)
        assert state.position == Position(4, expected_y)
    assert state.board.is_clear()

    state = engine.apply(state, Command.TICK)

    token = COLOR_TOKENS[ShapeType.O]
    expected = np.zeros_like(state.board.grid)
    expected[18:20, 4:6] = token
    assert np.array_equal(state.board.grid, expected)
    assert state.current_piece == Piece.from_type(ShapeType.S)
    assert state.position == Position(4, 0)
    assert state.pieces == 1
    assert state.score == 0


def test_filling_gap_clears_one_line(make_engine):
    engine = make_engine(ShapeType.O)
    state = replace(
        _with_piece(engine, ShapeType.I, 4, 16),
        current_piece=Piece.from_type(ShapeType.I).rotated(),
    )
    state.board.grid[19, :] = COLOR_TOKENS[ShapeType.L]
    state.board.grid[19, 4] = 0

    after = engine.apply(state, Command.TICK)

    assert after.score == state.score + 10
    assert after.lines == 1
    assert after.board.grid.shape == (20, 10)
    token = COLOR_TOKENS[ShapeType.I]
    assert [after.board.get_cell(r, 4) for r in (17, 18, 19)] == [token] * 3
    assert int(np.count_nonzero(after.board.grid)) == 3
    assert not after.game_over


def test_moves_are_validated(make_engine):
    engine = make_engine()
    state = _with_piece(engine, ShapeType.I, 0, 5)

    assert engine.apply(state, Command.MOVE_LEFT) is state
    moved = engine.apply(state, Command.MOVE_RIGHT)
    assert moved.position == Position(1, 5)
    dropped = engine.apply(moved, Command.SOFT_DROP)
    assert dropped.position == Position(1, 6)


def test_soft_drop_on_floor_does_not_merge(make_engine):
    engine = make_engine()
    state = _with_piece(engine, ShapeType.O, 0, 18)
    assert engine.apply(state, Command.SOFT_DROP) is state


def test_rotation_rejected_when_candidate_collides(make_engine):
    engine = make_engine()
    vertical = Piece.from_type(ShapeType.I).rotated()
    state = replace(engine.initial_state(), current_piece=vertical, position=Position(9, 0))

    assert engine.apply(state, Command.ROTATE) is state

    free = replace(state, position=Position(3, 0))
    rotated = engine.apply(free, Command.ROTATE)
    assert rotated.current_piece == vertical.rotated()
    assert rotated.position == free.position


def test_mirror_rejected_when_candidate_collides(make_engine):
    engine = make_engine()
    state = _with_piece(engine, ShapeType.L, 0, 0)
    state.board.grid[1, 2] = COLOR_TOKENS[ShapeType.T]
    assert engine.apply(state, Command.MIRROR) is state

    state.board.grid[1, 2] = 0
    mirrored = engine.apply(state, Command.MIRROR)
    assert mirrored.current_piece == Piece.from_type(ShapeType.L).mirrored()


def test_commands_without_active_piece_are_ignored(make_engine):
    engine = make_engine()
    state = engine.initial_state()
    for command in PLAY_COMMANDS[1:]:
        assert engine.apply(state, command) is state


def test_apply_does_not_mutate_input(make_engine):
    engine = make_engine(ShapeType.T)
    state = _with_piece(engine, ShapeType.O, 4, 18)
    before = state.board.grid.copy()
    engine.apply(state, Command.TICK)
    assert np.array_equal(state.board.grid, before)
    assert state.position == Position(4, 18)


def test_blocked_spawn_ends_game(make_engine):
    engine = make_engine(ShapeType.T)
    state = _blocked_spawn_state(engine)

    over = engine.apply(state, Command.TICK)

    assert over.game_over
    assert over.current_piece is None
    token = COLOR_TOKENS[ShapeType.O]
    assert over.board.get_cell(18, 0) == token
    assert over.board.get_cell(19, 1) == token
    assert over.pieces == 1


def test_game_over_ignores_everything_but_reset(make_engine):
    engine = make_engine(ShapeType.T)
    over = engine.apply(_blocked_spawn_state(engine), Command.TICK)
    over = replace(over, score=30)

    for command in PLAY_COMMANDS:
        assert engine.apply(over, command) is over

    fresh = engine.apply(over, Command.RESET)
    assert not fresh.game_over
    assert fresh.score == 0
    assert fresh.current_piece is None
    assert fresh.board.is_clear()


def test_reset_ignored_while_playing(make_engine):
    engine = make_engine()
    state = _with_piece(engine, ShapeType.T, 4, 3)
    assert engine.apply(state, Command.RESET) is state


def test_spawn_on_full_stack_sets_game_over(make_engine):
    engine = make_engine(ShapeType.I)
    state = engine.initial_state()
    state.board.grid[0, 5] = 1
    over = engine.spawn(state)
    assert over.game_over
    assert over.current_piece is None


def test_score_never_decreases_over_random_play():
    engine = BoardEngine(GameConfig(seed=3))
    state = engine.spawn(engine.initial_state())
    commands = PLAY_COMMANDS * 200
    last = 0
    for command in commands:
        state = engine.apply(state, command)
        assert state.score >= last
        last = state.score
        assert state.board.grid.shape == (20, 10)
