"""Key-to-engine dispatch and the polling loop shared by the terminal frontends."""

from __future__ import annotations

from collections.abc import Callable

from backend.engine.gameplay import PuzzleEngine
from backend.engine.scheduler import PollingScheduler
from backend.models.board import Direction
from frontend.cli.input_handler import get_key_timeout

# Longest wait for a key before the scheduler gets a chance to run.
MAX_POLL = 0.1

DIRECTIONS: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


def digits_reach_all_tiles(engine: PuzzleEngine) -> bool:
    """True when every tile has a one-digit number (boards up to 3x3)."""
    return engine.size * engine.size - 1 <= 9


def slide_numbered(engine: PuzzleEngine, key: str) -> bool:
    """Slide the tile whose number was typed, like clicking it.

    Only active on boards where one keypress can name every tile.
    """
    if not digits_reach_all_tiles(engine):
        return False
    value = int(key)
    if value not in engine.grid or value == 0:
        return False
    row, col = engine.board.find(value)
    return engine.attempt_move(row, col)


def dispatch(engine: PuzzleEngine, key: str) -> bool:
    """Apply one key to the engine.  Returns False when the user quits."""
    if key == "quit":
        return False
    if key in DIRECTIONS:
        engine.move(DIRECTIONS[key])
    elif key.isdigit():
        slide_numbered(engine, key)
    elif key == "new":
        engine.new_game()
    elif key == "solve":
        engine.solve()
    return True


def run_loop(
    engine: PuzzleEngine,
    scheduler: PollingScheduler,
    on_key: Callable[[str], None] | None = None,
) -> None:
    """Poll keys and fire scheduled ticks until the user quits."""
    while True:
        wait = scheduler.time_until_next()
        key = get_key_timeout(MAX_POLL if wait is None else min(wait, MAX_POLL))
        scheduler.run_pending()
        if key is None:
            continue
        if not dispatch(engine, key):
            return
        if on_key is not None:
            on_key(key)
