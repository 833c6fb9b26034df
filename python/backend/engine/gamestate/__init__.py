from backend.engine.gamestate.state import GameState, PlayState

__all__ = ["GameState", "PlayState"]
