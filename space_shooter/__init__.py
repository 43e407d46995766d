"""Space shooter - arcade shooter simulation core with Gymnasium and Arcade front-ends"""

from .game import GameController, ManualFrameSource
from .interface import Intents, LifecycleState, Snapshot
from .simulation import Simulation

__all__ = [
    "GameController",
    "ManualFrameSource",
    "Intents",
    "LifecycleState",
    "Snapshot",
    "Simulation",
]
