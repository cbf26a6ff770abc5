"""Exceptions raised by the blackjack engine."""


class BlackjackError(Exception):
    """Base class for all engine errors."""


class InvalidBetError(BlackjackError):
    """A bet outside the table minimum or the player's bankroll."""

    def __init__(self, message: str, amount: int | None = None) -> None:
        super().__init__(message)
        self.amount = amount


class InsufficientFundsError(InvalidBetError):
    """The bankroll cannot cover the stake an action requires."""

    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            f"Insufficient funds: {required} required, {available} available",
            amount=required,
        )
        self.required = required
        self.available = available


class IllegalActionError(BlackjackError):
    """An action that is not valid in the current round state."""

    def __init__(self, message: str, action: str | None = None) -> None:
        super().__init__(message)
        self.action = action


class EmptyShoeError(BlackjackError):
    """
    A card was requested from an exhausted shoe.

    The engine replaces the shoe before every round, so this signals an
    internal consistency failure rather than a user mistake.
    """
