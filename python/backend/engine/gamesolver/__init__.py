from backend.engine.gamesolver.solver import GreedySolver

__all__ = ["GreedySolver"]
