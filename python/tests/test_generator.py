"""Generator tests — parity rule, reshuffle loop and its attempt cap."""

from __future__ import annotations

import random
from collections import deque

import pytest

from backend.engine.gamegenerator import GameGenerator


class ScriptedRng:
    """Stands in for ``random.Random``: each shuffle yields the next script entry."""

    def __init__(self, *arrangements: list[int]) -> None:
        self._script = deque(arrangements)
        self.shuffles = 0

    def shuffle(self, tiles: list[int]) -> None:
        self.shuffles += 1
        nxt = self._script[0] if len(self._script) == 1 else self._script.popleft()
        tiles[:] = nxt


def _neighbours(tiles: tuple[int, ...], size: int) -> list[tuple[int, ...]]:
    b = tiles.index(0)
    br, bc = divmod(b, size)
    out = []
    for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
        r, c = br + dr, bc + dc
        if 0 <= r < size and 0 <= c < size:
            t = list(tiles)
            t[b], t[r * size + c] = t[r * size + c], t[b]
            out.append(tuple(t))
    return out


def _reachable(size: int, limit: int) -> set[tuple[int, ...]]:
    """Arrangements reachable from the goal by legal slides (BFS, capped)."""
    start = tuple(GameGenerator.solved(size).tiles)
    seen = {start}
    queue = deque([start])
    while queue and len(seen) < limit:
        for nxt in _neighbours(queue.popleft(), size):
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return seen


# -- inversions ---------------------------------------------------------------


@pytest.mark.parametrize(
    "tiles, expected",
    [
        ([1, 2, 3, 4, 5, 6, 7, 8, 0], 0),
        ([1, 2, 3, 4, 5, 6, 8, 7, 0], 1),
        ([0, 1, 2, 3, 4, 5, 6, 7, 8], 0),
        ([8, 7, 6, 5, 4, 3, 2, 1, 0], 28),
        ([2, 3, 1, 4, 5, 6, 7, 8, 0], 2),
    ],
)
def test_count_inversions_ignores_blank(tiles: list[int], expected: int) -> None:
    assert GameGenerator.count_inversions(tiles) == expected


def test_single_swap_is_unsolvable() -> None:
    assert not GameGenerator.is_solvable([1, 2, 3, 4, 5, 6, 8, 7, 0], 3)


def test_goal_is_solvable() -> None:
    assert GameGenerator.is_solvable([1, 2, 3, 4, 5, 6, 7, 8, 0], 3)


@pytest.mark.parametrize("size", [3, 4])
def test_parity_rule_matches_reachability(size: int) -> None:
    """Every arrangement reachable from the goal passes the parity test,
    and swapping two numbered tiles of one always fails it."""
    for tiles in _reachable(size, limit=3000):
        assert GameGenerator.is_solvable(list(tiles), size), tiles
        broken = list(tiles)
        i, j = [k for k, v in enumerate(broken) if v != 0][:2]
        broken[i], broken[j] = broken[j], broken[i]
        assert not GameGenerator.is_solvable(broken, size), broken


# -- generate -----------------------------------------------------------------


@pytest.mark.parametrize("seed", range(200))
def test_generated_3x3_boards_are_solvable(seed: int) -> None:
    board = GameGenerator.generate(3, random.Random(seed))
    assert sorted(board.tiles) == list(range(9))
    assert GameGenerator.is_solvable(board.tiles, 3)
    assert board.get_tile(*board.blank_pos) == 0


def test_unsolvable_shuffle_is_reshuffled() -> None:
    rng = ScriptedRng(
        [1, 2, 3, 4, 5, 6, 8, 7, 0],
        [1, 2, 3, 4, 5, 6, 8, 7, 0],
        [4, 1, 2, 0, 5, 3, 7, 8, 6],
    )
    board = GameGenerator.generate(3, rng)
    assert rng.shuffles == 3
    assert board.tiles == [4, 1, 2, 0, 5, 3, 7, 8, 6]
    assert board.blank_pos == (1, 0)


def test_attempt_cap_repairs_parity(caplog: pytest.LogCaptureFixture) -> None:
    rng = ScriptedRng([1, 2, 3, 4, 5, 6, 8, 7, 0])
    with caplog.at_level("WARNING"):
        board = GameGenerator.generate(3, rng, max_attempts=5)
    assert rng.shuffles == 5
    assert board.tiles == [2, 1, 3, 4, 5, 6, 8, 7, 0]
    assert GameGenerator.is_solvable(board.tiles, 3)
    assert "repairing parity" in caplog.text


def test_generate_does_not_reject_goal() -> None:
    rng = ScriptedRng([1, 2, 3, 4, 5, 6, 7, 8, 0])
    assert GameGenerator.generate(3, rng).is_solved()
