"""Terminal key handling — key mapping and dispatch onto the engine."""

from __future__ import annotations

import pytest

from backend.engine.gamestate import PlayState
from frontend.cli.controls import dispatch, slide_numbered
from frontend.cli.input_handler import resolve

NEAR_WIN = [1, 2, 3, 4, 5, 6, 7, 0, 8]


@pytest.mark.parametrize(
    "ch, action",
    [
        ("w", "up"),
        ("D", "right"),
        ("q", "quit"),
        ("\x03", "quit"),
        ("n", "new"),
        ("v", "solve"),
        ("7", "7"),
        ("\x1b", ""),
        ("", ""),
    ],
)
def test_resolve(ch: str, action: str) -> None:
    assert resolve(ch) == action


def test_typed_number_slides_that_tile(make_engine) -> None:
    engine = make_engine(NEAR_WIN)
    assert not slide_numbered(engine, "1")
    assert not slide_numbered(engine, "0")
    assert not slide_numbered(engine, "9")
    assert slide_numbered(engine, "5")
    assert engine.blank_pos == (1, 1)


def test_dispatch_quit(make_engine) -> None:
    assert dispatch(make_engine(NEAR_WIN), "quit") is False


def test_dispatch_direction_wins(make_engine, listener) -> None:
    engine = make_engine(NEAR_WIN)
    assert dispatch(engine, "left")
    assert engine.play_state is PlayState.WON
    assert len(listener.wins) == 1


def test_dispatch_solve_and_new(make_engine) -> None:
    engine = make_engine(NEAR_WIN)
    dispatch(engine, "solve")
    assert engine.play_state is PlayState.SOLVING
    dispatch(engine, "new")
    assert engine.play_state is PlayState.PLAYING
    assert engine.moves == 0


def test_dispatch_ignores_unknown_keys(make_engine) -> None:
    engine = make_engine(NEAR_WIN)
    assert dispatch(engine, "x")
    assert list(engine.grid) == NEAR_WIN


def test_typed_numbers_disabled_beyond_single_digit_tiles(make_engine) -> None:
    tiles = [1, 2, 3, 4, 5, 6, 7, 8, 9, 0, 10, 11, 12, 13, 14, 15]
    engine = make_engine(tiles)
    assert engine.is_tile_movable(*engine.board.find(9))

    assert not slide_numbered(engine, "9")
    assert dispatch(engine, "9")
    assert list(engine.grid) == tiles
    assert engine.moves == 0
