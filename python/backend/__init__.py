"""Puzzle-state engine: board model, generator, solver and game session."""
