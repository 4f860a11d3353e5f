from .api import Attempt, GameState, Snapshot, TrainerConfig
from .app.machine import GameStateMachine, build_machine

__all__ = [
    "Attempt",
    "GameState",
    "Snapshot",
    "TrainerConfig",
    "GameStateMachine",
    "build_machine",
]
