"""Pygame GUI frontend.

Click a tile next to the blank to slide it; "New game" deals a fresh
shuffle and "Solve" runs the greedy auto-solver one step per tick.
"""

from __future__ import annotations

import pygame

from backend.config import GameConfig
from backend.engine.gameplay import PuzzleEngine
from backend.engine.gamestate import PlayState
from backend.engine.scheduler import PollingScheduler
from backend.models.board import Direction

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_BLUE = (137, 180, 250)
COL_LAVENDER = (180, 190, 254)
COL_GREEN = (166, 227, 161)
COL_PINK = (245, 194, 231)
COL_YELLOW = (249, 226, 175)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 460, 600
TILE_GAP = 6
MARGIN = 30
BOARD_TOP = 84
BOARD_MAX = WIN_W - 2 * MARGIN  # max board width/height in px
FPS = 30

_KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}


def _fmt(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def _cx(w: int) -> int:
    return (WIN_W - w) // 2


def _blit_center(surf: pygame.Surface, rendered: pygame.Surface, y: int) -> None:
    surf.blit(rendered, (_cx(rendered.get_width()), y))


def _blit_in(surf: pygame.Surface, rendered: pygame.Surface, rect: pygame.Rect) -> None:
    surf.blit(rendered, rendered.get_rect(center=rect.center))


# ---------------------------------------------------------------------------
# Buttons
# ---------------------------------------------------------------------------
class _Button:
    """A labelled rectangle that brightens under the mouse."""

    __slots__ = ("rect", "label", "font", "colours", "hovered")

    def __init__(
        self,
        rect: pygame.Rect,
        label: str,
        font: pygame.font.Font,
        colours: tuple[tuple, tuple],
    ) -> None:
        self.rect = rect
        self.label = label
        self.font = font
        self.colours = colours  # (idle, hovered)
        self.hovered = False

    def draw(self, surf: pygame.Surface, enabled: bool = True) -> None:
        idle, lit = self.colours
        pygame.draw.rect(
            surf, lit if self.hovered and enabled else idle, self.rect, border_radius=8
        )
        text = self.font.render(self.label, True, COL_BASE if enabled else COL_OVERLAY0)
        _blit_in(surf, text, self.rect)

    def contains(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    """Window, input and drawing.  Listens to the engine it owns."""

    def __init__(self, config: GameConfig) -> None:
        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Sliding Puzzle")
        self._clock = pygame.time.Clock()

        self._f_title = pygame.font.SysFont("Helvetica", 24, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 17)
        self._f_btn = pygame.font.SysFont("Helvetica", 15, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)

        self._scheduler = PollingScheduler()
        self.engine = PuzzleEngine(config, scheduler=self._scheduler)
        self.engine.add_listener(self)

        self._moves = 0
        self._elapsed = 0.0
        self._banner = ""

        self.engine.new_game()
        self._build_btns()

    def _build_btns(self) -> None:
        width, gap = 140, 16
        left = _cx(2 * width + gap)
        top = BOARD_TOP + self._tile_layout()[3] + 18
        self._new_btn = _Button(
            pygame.Rect(left, top, width, 42), "NEW GAME (N)", self._f_btn,
            (COL_BLUE, COL_LAVENDER),
        )
        self._solve_btn = _Button(
            pygame.Rect(left + width + gap, top, width, 42), "SOLVE (V)", self._f_btn,
            (COL_GREEN, (190, 240, 190)),
        )

    # ── PuzzleListener ──────────────────────────────────────────────────────

    def on_state_changed(
        self, grid: tuple[int, ...], blank_pos: tuple[int, int]
    ) -> None:
        if self.engine.moves == 0:
            self._elapsed = 0.0
            self._banner = ""

    def on_move_count_changed(self, count: int) -> None:
        self._moves = count

    def on_solve_stalled(self, moves: int) -> None:
        self._banner = f"Solver stalled after {moves} moves, your turn"

    def on_elapsed_tick(self, elapsed: float) -> None:
        self._elapsed = elapsed

    def on_win(self, moves: int, elapsed: float) -> None:
        self._elapsed = elapsed
        self._banner = f"Solved in {moves} moves, {_fmt(elapsed)}!"

    # ── helpers ─────────────────────────────────────────────────────────────

    def _tile_layout(self) -> tuple[int, int, int, int]:
        """Return (tile_px, origin_x, origin_y, total_px) for the board."""
        sz = self.engine.size
        tile_px = (BOARD_MAX - (sz + 1) * TILE_GAP) // sz
        total = sz * tile_px + (sz + 1) * TILE_GAP
        ox = _cx(total) + TILE_GAP
        oy = BOARD_TOP + TILE_GAP
        return tile_px, ox, oy, total

    def _tile_rect(
        self, r: int, c: int, tpx: int, ox: int, oy: int
    ) -> pygame.Rect:
        return pygame.Rect(
            ox + c * (tpx + TILE_GAP),
            oy + r * (tpx + TILE_GAP),
            tpx,
            tpx,
        )

    def _cell_at(self, pos: tuple[int, int]) -> tuple[int, int] | None:
        tpx, ox, oy, _ = self._tile_layout()
        for r in range(self.engine.size):
            for c in range(self.engine.size):
                if self._tile_rect(r, c, tpx, ox, oy).collidepoint(pos):
                    return r, c
        return None

    # ── actions ─────────────────────────────────────────────────────────────

    def _new_game(self) -> None:
        self.engine.new_game()

    def _solve(self) -> None:
        if self.engine.solve():
            self._banner = "Auto-solving…"

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw(self) -> None:
        self._surf.fill(COL_BASE)
        engine = self.engine
        board = engine.board
        sz = engine.size
        tpx, ox, oy, total = self._tile_layout()
        f_tile = pygame.font.SysFont("Helvetica", max(14, tpx // 3), bold=True)

        _blit_center(
            self._surf,
            self._f_title.render(f"Sliding Puzzle  {sz}×{sz}", True, COL_TEXT),
            16,
        )
        _blit_center(
            self._surf,
            self._f_body.render(
                f"Moves: {self._moves}    Time: {_fmt(self._elapsed)}",
                True,
                COL_PINK,
            ),
            50,
        )

        pygame.draw.rect(
            self._surf,
            COL_MANTLE,
            pygame.Rect(_cx(total), BOARD_TOP, total, total),
            border_radius=10,
        )

        playing = engine.play_state is PlayState.PLAYING
        for r in range(sz):
            for c in range(sz):
                val = board.get_tile(r, c)
                if val == 0:
                    continue
                rect = self._tile_rect(r, c, tpx, ox, oy)
                if board.is_tile_correct(r, c):
                    col = COL_GREEN
                elif playing and engine.is_tile_movable(r, c):
                    col = COL_LAVENDER
                else:
                    col = COL_BLUE
                pygame.draw.rect(self._surf, col, rect, border_radius=6)
                _blit_in(self._surf, f_tile.render(str(val), True, COL_BASE), rect)

        self._new_btn.draw(self._surf)
        self._solve_btn.draw(self._surf, enabled=playing)

        y = self._new_btn.rect.bottom + 16
        if self._banner:
            colour = COL_GREEN if engine.play_state is PlayState.WON else COL_YELLOW
            _blit_center(self._surf, self._f_body.render(self._banner, True, colour), y)
        _blit_center(
            self._surf,
            self._f_small.render(
                "Click / Arrows / WASD  move     N  new     V  solve     Esc  quit",
                True,
                COL_OVERLAY0,
            ),
            WIN_H - 28,
        )

    # ── event handling ──────────────────────────────────────────────────────

    def _handle(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            for btn in (self._new_btn, self._solve_btn):
                btn.hovered = btn.contains(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._new_btn.contains(ev.pos):
                self._new_game()
            elif self._solve_btn.contains(ev.pos):
                self._solve()
            else:
                cell = self._cell_at(ev.pos)
                if cell is not None:
                    self.engine.attempt_move(*cell)
        elif ev.type == pygame.KEYDOWN:
            if ev.key in _KEY_DIRECTIONS:
                self.engine.move(_KEY_DIRECTIONS[ev.key])
            elif ev.key == pygame.K_n:
                self._new_game()
            elif ev.key == pygame.K_v:
                self._solve()
            elif ev.key in (pygame.K_q, pygame.K_ESCAPE):
                return False
        return True

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        running = True
        while running:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT or not self._handle(ev):
                    running = False
                    break
            self._scheduler.run_pending()
            self._draw()
            pygame.display.flip()
            self._clock.tick(FPS)

        self._scheduler.cancel_all()
        pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(config: GameConfig) -> None:
    """Launch the Pygame GUI."""
    app = PygameApp(config)
    app.run_loop()
