#!/usr/bin/env python3
"""Sliding Puzzle Game.

Usage::

    python main.py                    # interactive menu
    python main.py -f rich            # Rich terminal, 3×3
    python main.py -f pygame -s 4     # Pygame GUI, 4×4
    python main.py -f pyqt --solve-interval 0.5 --log-level info
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Prompt

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import GameConfig  # noqa: E402

logger = logging.getLogger(__name__)


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"
    pygame = "pygame"
    pyqt = "pyqt"


class LogLevel(StrEnum):
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"


_RUNNERS = {
    Frontend.vanilla: "frontend.cli.vanilla.app",
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
    Frontend.pyqt: "frontend.gui.pyqt.app",
}

_MENU = {
    "1": Frontend.vanilla,
    "2": Frontend.rich,
    "3": Frontend.pygame,
    "4": Frontend.pyqt,
}


# -- helpers ------------------------------------------------------------------


def _configure_logging(level: LogLevel, log_file: Optional[Path]) -> None:
    """Route log records to *log_file*, or to stderr through Rich."""
    if log_file is not None:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s")
        )
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(
        level=level.value.upper(), handlers=[handler], format="%(message)s", force=True
    )


def _launch(frontend: Frontend, config: GameConfig) -> None:
    logger.info("Launching %s frontend (%dx%d)", frontend.value, config.size, config.size)
    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(config)


def _menu_loop(config: GameConfig) -> None:
    console = Console()
    labels = {
        Frontend.vanilla: "Vanilla Terminal",
        Frontend.rich: "Rich Terminal",
        Frontend.pygame: "Pygame GUI",
        Frontend.pyqt: "PyQt GUI",
    }
    while True:
        console.print()
        console.rule(f"[bold]Sliding Puzzle[/]  {config.size}x{config.size}")
        for key, frontend in _MENU.items():
            console.print(f"  [cyan]{key}[/]  Play ({labels[frontend]})")
        console.print("  [cyan]0[/]  Quit")

        choice = Prompt.ask("  Select", choices=["0", *_MENU], show_choices=False)
        if choice == "0":
            console.print("\n  Goodbye!\n")
            return
        _launch(_MENU[choice], config)


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    size: int = typer.Option(
        3, "-s", "--size",
        min=3, max=8,
        help="Grid size (3-8).",
    ),
    solve_interval: float = typer.Option(
        0.2, "--solve-interval",
        min=0.01,
        help="Seconds between auto-solver steps.",
    ),
    tick_interval: float = typer.Option(
        1.0, "--tick-interval",
        min=0.1,
        help="Seconds between elapsed-time refreshes.",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.warning, "--log-level",
        help="Logging verbosity.",
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file",
        dir_okay=False,
        help="Write logs to this file instead of stderr.",
    ),
) -> None:
    """Sliding Puzzle Game."""
    _configure_logging(log_level, log_file)
    config = GameConfig(
        size=size, tick_interval=tick_interval, solve_interval=solve_interval
    )

    if frontend is None:
        _menu_loop(config)
        return

    _launch(frontend, config)


if __name__ == "__main__":
    app()
