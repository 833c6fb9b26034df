from backend.models.board import BLANK_OFFSETS, Board, Direction

__all__ = ["BLANK_OFFSETS", "Board", "Direction"]
