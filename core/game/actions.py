"""Intents accepted by the round engine."""

from dataclasses import dataclass
from enum import Enum

from core.errors import IllegalActionError


class Action(Enum):
    """Player-turn actions."""

    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"
    SPLIT = "split"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "Action | str") -> "Action":
        """Accept an Action or its lowercase name, e.g. ``"double"``."""
        if isinstance(value, Action):
            return value
        try:
            return cls(value.strip().lower())
        except (AttributeError, ValueError):
            raise IllegalActionError(f"Unknown action: {value!r}", action=str(value)) from None


@dataclass(frozen=True)
class PlaceBet:
    """Wager ``amount`` and deal a new round."""

    amount: int


Intent = PlaceBet | Action
