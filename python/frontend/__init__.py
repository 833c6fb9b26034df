"""Presentation adapters: terminal and GUI frontends over the puzzle engine."""
