"""Round engine and state management."""

from core.game.actions import Action, PlaceBet
from core.game.events import GameEvent, EventType
from core.game.state import GameState
from core.game.table import Table
from core.game.snapshot import TableSnapshot, HandView
from core.game.engine import BlackjackGame, Transition, step

__all__ = [
    "Action",
    "PlaceBet",
    "GameEvent",
    "EventType",
    "GameState",
    "Table",
    "TableSnapshot",
    "HandView",
    "BlackjackGame",
    "Transition",
    "step",
]
