"""Rich terminal frontend — tables, colours, and panels.

Uses the ``rich`` library for styled output while sharing the same
input handling and engine as the vanilla CLI.
"""

from __future__ import annotations

import sys

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.config import GameConfig
from backend.engine.gameplay import PuzzleEngine
from backend.engine.gamestate import PlayState
from backend.engine.scheduler import PollingScheduler
from backend.models.board import Board
from frontend.cli.controls import digits_reach_all_tiles, run_loop

console = Console()


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


# -- board rendering ----------------------------------------------------------


def _render_board(board: Board) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    width = len(str(board.size * board.size - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.size):
        table.add_column(width=width + 1, justify="center")

    for r, row in enumerate(board.rows()):
        cells: list[str] = []
        for c, val in enumerate(row):
            if val == 0:
                cells.append("[dim]·[/dim]")
            elif board.is_tile_correct(r, c):
                cells.append(f"[bold green]{val:>{width}}[/bold green]")
            elif board.is_adjacent_to_blank(r, c):
                cells.append(f"[bold cyan]{val:>{width}}[/bold cyan]")
            else:
                cells.append(f"[bold white]{val:>{width}}[/bold white]")
        table.add_row(*cells)

    return table


def _stats(moves: int, elapsed: float) -> Text:
    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(elapsed), style="bold yellow")
    return stats


def _controls(last_tile: int | None) -> Text:
    keys = [("↑↓←→", "move")]
    if last_tile is not None:
        keys.append((f"1-{last_tile}", "slide tile"))
    keys += [("V", "solve"), ("N", "new game"), ("Q", "quit")]
    controls = Text()
    for key, label in keys:
        controls.append(f"  {key}", style="bold cyan")
        controls.append(f"  {label} ", style="dim")
    return controls


# -- screen -------------------------------------------------------------------


class _RichView:
    """Draws the game panel; listens to the engine for redraws."""

    def __init__(self, engine: PuzzleEngine) -> None:
        self.engine = engine
        self.status = ""

    def draw(self) -> None:
        engine = self.engine
        console.clear()

        size = engine.size
        if engine.play_state is PlayState.WON:
            title = f"[bold green]Sliding Puzzle  {size}×{size}[/bold green]"
            border = "bold green"
        elif engine.play_state is PlayState.SOLVING:
            title = f"[bold cyan]Auto-Solve  {size}×{size}[/bold cyan]"
            border = "cyan"
        else:
            title = f"[bold cyan]Sliding Puzzle  {size}×{size}[/bold cyan]"
            border = "bright_blue"

        panel = Panel(
            Align.center(_render_board(engine.board)),
            title=title,
            border_style=border,
            padding=(1, 2),
        )

        console.print()
        console.print(Align.center(panel))
        if self.status:
            console.print(Align.center(Text.from_markup(f"  {self.status}")))
        last_tile = size * size - 1 if digits_reach_all_tiles(engine) else None
        console.print(Align.center(_controls(last_tile)))
        # Save the cursor right before the stats line so _update_time()
        # can come back and overwrite only this line.
        sys.stdout.write("\033[s")
        sys.stdout.flush()
        console.print(Align.center(_stats(engine.moves, engine.elapsed_time)))

    def _update_time(self, elapsed: float) -> None:
        """Overwrite just the stats line using the saved cursor position."""
        with console.capture() as capture:
            console.print(Align.center(_stats(self.engine.moves, elapsed)))
        sys.stdout.write(f"\033[u\033[K{capture.get()}")
        sys.stdout.flush()

    # -- PuzzleListener -------------------------------------------------------

    def on_state_changed(
        self, grid: tuple[int, ...], blank_pos: tuple[int, int]
    ) -> None:
        self.draw()

    def on_move_count_changed(self, count: int) -> None:
        self._update_time(self.engine.elapsed_time)

    def on_solve_stalled(self, moves: int) -> None:
        self.status = f"[yellow]Solver stalled after {moves} moves, your turn.[/yellow]"
        self.draw()

    def on_elapsed_tick(self, elapsed: float) -> None:
        self._update_time(elapsed)

    def on_win(self, moves: int, elapsed: float) -> None:
        self.status = (
            "[bold yellow]★[/bold yellow] [bold green]CONGRATULATIONS![/bold green]"
            f" [green]Solved in {moves} moves, {_format_time(elapsed)}[/green]"
            " [bold yellow]★[/bold yellow]   [dim]N  play again   Q  quit[/dim]"
        )
        self.draw()

    # -- key feedback ---------------------------------------------------------

    def on_key(self, key: str) -> None:
        if key == "new":
            self.status = ""
            self.draw()
        elif key == "solve" and self.engine.play_state is PlayState.SOLVING:
            self.status = "[cyan]Auto-solving…[/cyan]"
            self.draw()


def _goodbye() -> None:
    console.clear()
    console.print(Align.center(Group(Text(""), Text("Goodbye!", style="bold cyan"))))


# -- public entry point -------------------------------------------------------


def run(config: GameConfig) -> None:
    """Launch the Rich terminal game."""
    scheduler = PollingScheduler()
    engine = PuzzleEngine(config, scheduler=scheduler)
    view = _RichView(engine)
    engine.add_listener(view)
    engine.new_game()
    try:
        run_loop(engine, scheduler, on_key=view.on_key)
    finally:
        _goodbye()
