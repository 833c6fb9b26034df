"""PyQt6 GUI frontend.

A grid of tile buttons, live stats and "New game" / "Solve" buttons.  The
engine's periodic activities run on ``QTimer`` through ``_QtScheduler``.
"""

from __future__ import annotations

import sys
from collections.abc import Callable

from PyQt6.QtCore import QObject, Qt, QTimer
from PyQt6.QtGui import QFont, QKeyEvent
from PyQt6.QtWidgets import (
    QApplication,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from backend.config import GameConfig
from backend.engine.gameplay import PuzzleEngine
from backend.engine.gamestate import PlayState
from backend.models.board import Direction

# ---------------------------------------------------------------------------
# Catppuccin Mocha CSS colours
# ---------------------------------------------------------------------------
_BASE = "#1e1e2e"
_MANTLE = "#181825"
_SURFACE0 = "#313244"
_SURFACE1 = "#45475a"
_OVERLAY0 = "#6c7086"
_TEXT = "#cdd6f4"
_BLUE = "#89b4fa"
_BLUE_H = "#a4c4fc"
_GREEN = "#a6e3a1"
_GREEN_H = "#b8ecb4"
_PINK = "#f5c2e7"
_YELLOW = "#f9e2af"
_LAVENDER = "#b4befe"

_GLOBAL_CSS = f"""
    QMainWindow, QWidget#page {{ background: {_BASE}; }}
    QLabel {{ color: {_TEXT}; }}
"""

_HELP = "Click / Arrows / WASD  move     N  new game     V  solve     Esc  quit"


def _fmt(secs: float) -> str:
    m, s = divmod(int(secs), 60)
    return f"{m:02d}:{s:02d}"


def _styled_btn(
    text: str,
    *,
    bg: str = _SURFACE0,
    hover: str = _SURFACE1,
    fg: str = _TEXT,
    min_w: int = 150,
) -> QPushButton:
    btn = QPushButton(text)
    btn.setFont(QFont("Helvetica", 13, QFont.Weight.Bold))
    btn.setMinimumHeight(44)
    btn.setMinimumWidth(min_w)
    btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
    btn.setCursor(Qt.CursorShape.PointingHandCursor)
    btn.setStyleSheet(
        f"QPushButton {{ background:{bg}; color:{fg};"
        f" border:none; border-radius:8px; padding:6px 18px; }}"
        f" QPushButton:hover {{ background:{hover}; }}"
        f" QPushButton:disabled {{ background:{_SURFACE0}; color:{_OVERLAY0}; }}"
    )
    return btn


# ═══════════════════════════════════════════════════════════════════════════
# Scheduler on the Qt event loop
# ═══════════════════════════════════════════════════════════════════════════


class _QtTimerHandle:
    def __init__(self, timer: QTimer) -> None:
        self._timer: QTimer | None = timer

    @property
    def active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None


class _QtScheduler:
    """Runs engine callbacks from ``QTimer`` timeouts on the GUI thread."""

    def __init__(self, parent: QObject) -> None:
        self._parent = parent

    def call_every(
        self, interval: float, callback: Callable[[], None]
    ) -> _QtTimerHandle:
        timer = QTimer(self._parent)
        timer.timeout.connect(callback)
        timer.start(int(interval * 1000))
        return _QtTimerHandle(timer)


# ═══════════════════════════════════════════════════════════════════════════
# Game page
# ═══════════════════════════════════════════════════════════════════════════


class _GamePage(QWidget):
    """The puzzle board with tile buttons and live stats."""

    def __init__(self, config: GameConfig) -> None:
        super().__init__()
        self.setObjectName("page")
        self.engine = PuzzleEngine(config, scheduler=_QtScheduler(self))

        size = config.size
        tile_px = max(40, min(96, 400 // size))
        f_sz = max(12, tile_px // 3)

        root = QVBoxLayout(self)
        root.setSpacing(8)
        root.setContentsMargins(16, 12, 16, 12)

        t = QLabel(f"Sliding Puzzle  {size}×{size}")
        t.setFont(QFont("Helvetica", 18, QFont.Weight.Bold))
        t.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(t)

        self._stats = QLabel()
        self._stats.setFont(QFont("Helvetica", 13))
        self._stats.setStyleSheet(f"color:{_PINK};")
        self._stats.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._stats)

        frame = QFrame()
        frame.setStyleSheet(f"background:{_MANTLE}; border-radius:10px;")
        grid = QGridLayout(frame)
        grid.setSpacing(5)
        grid.setContentsMargins(8, 8, 8, 8)
        root.addWidget(frame, alignment=Qt.AlignmentFlag.AlignCenter)

        self._btns: list[QPushButton] = []
        for r in range(size):
            for c in range(size):
                b = QPushButton()
                b.setFixedSize(tile_px, tile_px)
                b.setFont(QFont("Helvetica", f_sz, QFont.Weight.Bold))
                b.setFocusPolicy(Qt.FocusPolicy.NoFocus)
                b.clicked.connect(lambda _, rr=r, cc=c: self.engine.attempt_move(rr, cc))
                grid.addWidget(b, r, c)
                self._btns.append(b)

        actions = QHBoxLayout()
        actions.setAlignment(Qt.AlignmentFlag.AlignCenter)
        actions.setSpacing(12)
        self.new_btn = _styled_btn("NEW GAME", bg=_BLUE, hover=_LAVENDER, fg=_BASE)
        self.new_btn.clicked.connect(self.new_game)
        self.solve_btn = _styled_btn("SOLVE", bg=_GREEN, hover=_GREEN_H, fg=_BASE)
        self.solve_btn.clicked.connect(self.solve)
        actions.addWidget(self.new_btn)
        actions.addWidget(self.solve_btn)
        root.addLayout(actions)

        self._status = QLabel(_HELP)
        self._status.setFont(QFont("Helvetica", 11))
        self._status.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._status)

        self.engine.add_listener(self)
        self.new_game()

    # -- actions --

    def new_game(self) -> None:
        self.engine.new_game()
        self._set_status(_HELP, _OVERLAY0, bold=False)
        self.solve_btn.setEnabled(True)

    def solve(self) -> None:
        if self.engine.solve():
            self._set_status("Auto-solving…", _YELLOW)
            self.solve_btn.setEnabled(False)

    def move(self, d: Direction) -> None:
        self.engine.move(d)

    # -- PuzzleListener --

    def on_state_changed(
        self, grid: tuple[int, ...], blank_pos: tuple[int, int]
    ) -> None:
        board = self.engine.board
        playing = self.engine.play_state is PlayState.PLAYING
        for i, v in enumerate(grid):
            r, c = board.position(i)
            b = self._btns[i]
            if v == 0:
                b.setText("")
                b.setStyleSheet(
                    f"QPushButton{{background:{_MANTLE};border:none;border-radius:8px;}}"
                )
                continue
            b.setText(str(v))
            if board.is_tile_correct(r, c):
                bg, hv = _GREEN, _GREEN_H
            elif playing and self.engine.is_tile_movable(r, c):
                bg, hv = _LAVENDER, _BLUE_H
            else:
                bg, hv = _BLUE, _BLUE_H
            b.setStyleSheet(
                f"QPushButton{{background:{bg};color:{_BASE};"
                f"border:none;border-radius:8px;font-weight:bold;}}"
                f"QPushButton:hover{{background:{hv};}}"
            )

    def on_move_count_changed(self, count: int) -> None:
        self._show_stats(count, self.engine.elapsed_time)

    def on_solve_stalled(self, moves: int) -> None:
        self._set_status(f"Solver stalled after {moves} moves, your turn.", _YELLOW)
        self.solve_btn.setEnabled(True)

    def on_elapsed_tick(self, elapsed: float) -> None:
        self._show_stats(self.engine.moves, elapsed)

    def on_win(self, moves: int, elapsed: float) -> None:
        self._show_stats(moves, elapsed)
        self._set_status(f"★  Solved in {moves} moves, {_fmt(elapsed)}  ★", _GREEN)
        self.solve_btn.setEnabled(False)

    # -- helpers --

    def _show_stats(self, moves: int, elapsed: float) -> None:
        self._stats.setText(f"Moves: {moves}    Time: {_fmt(elapsed)}")

    def _set_status(self, text: str, colour: str, bold: bool = True) -> None:
        weight = "font-weight:bold;" if bold else ""
        self._status.setText(text)
        self._status.setStyleSheet(f"color:{colour};{weight}")


# ═══════════════════════════════════════════════════════════════════════════
# Main window
# ═══════════════════════════════════════════════════════════════════════════

_KEY_DIRECTIONS = {
    Qt.Key.Key_Up: Direction.UP,
    Qt.Key.Key_W: Direction.UP,
    Qt.Key.Key_Down: Direction.DOWN,
    Qt.Key.Key_S: Direction.DOWN,
    Qt.Key.Key_Left: Direction.LEFT,
    Qt.Key.Key_A: Direction.LEFT,
    Qt.Key.Key_Right: Direction.RIGHT,
    Qt.Key.Key_D: Direction.RIGHT,
}


class _MainWindow(QMainWindow):
    def __init__(self, config: GameConfig) -> None:
        super().__init__()
        self.setWindowTitle("Sliding Puzzle")
        self.setStyleSheet(_GLOBAL_CSS)
        self._page = _GamePage(config)
        self.setCentralWidget(self._page)

    def keyPressEvent(self, event: QKeyEvent | None) -> None:  # noqa: N802
        if event is None:
            return
        key = event.key()
        if key in _KEY_DIRECTIONS:
            self._page.move(_KEY_DIRECTIONS[key])
        elif key == Qt.Key.Key_N:
            self._page.new_game()
        elif key == Qt.Key.Key_V:
            self._page.solve()
        elif key in (Qt.Key.Key_Q, Qt.Key.Key_Escape):
            self.close()
        else:
            super().keyPressEvent(event)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def run(config: GameConfig) -> None:
    """Launch the PyQt6 GUI."""
    qapp = QApplication.instance() or QApplication(sys.argv)
    window = _MainWindow(config)
    window.show()
    qapp.exec()
