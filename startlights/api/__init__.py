from .snapshot import Attempt, GameState, Snapshot
from .config import TrainerConfig

__all__ = ["Attempt", "GameState", "Snapshot", "TrainerConfig"]
