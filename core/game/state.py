"""Round state enumeration."""

from enum import Enum, auto


class GameState(Enum):
    """
    Round state machine states.

    Flow: BETTING → DEALING → PLAYER_TURN → DEALER_TURN → RESOLVED → DEALING ...
    """

    # Waiting for the first bet of the session
    BETTING = auto()

    # Cards being dealt and naturals checked
    DEALING = auto()

    # Player actions
    PLAYER_TURN = auto()

    # Dealer reveals and plays
    DEALER_TURN = auto()

    # Round paid out; the next bet starts a new round
    RESOLVED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


# Valid state transitions
VALID_TRANSITIONS: dict[GameState, list[GameState]] = {
    GameState.BETTING: [GameState.DEALING],
    GameState.DEALING: [GameState.PLAYER_TURN, GameState.RESOLVED],  # RESOLVED on naturals
    GameState.PLAYER_TURN: [GameState.PLAYER_TURN, GameState.DEALER_TURN],
    GameState.DEALER_TURN: [GameState.RESOLVED],
    GameState.RESOLVED: [GameState.DEALING],
}


def is_valid_transition(from_state: GameState, to_state: GameState) -> bool:
    """
    Check if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Desired state

    Returns:
        True if the transition is allowed
    """
    return to_state in VALID_TRANSITIONS.get(from_state, [])


def accepts_bet(state: GameState) -> bool:
    """Check if a new round may be started from ``state``."""
    return is_valid_transition(state, GameState.DEALING)
