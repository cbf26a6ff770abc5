"""Core blackjack engine - 100% UI-agnostic."""

from core.cards import Card, Shoe, Rank, Suit
from core.errors import (
    BlackjackError,
    EmptyShoeError,
    IllegalActionError,
    InsufficientFundsError,
    InvalidBetError,
)
from core.hand import Hand
from core.participants import Dealer, Player
from core.rules import RuleSet

__all__ = [
    "Card",
    "Shoe",
    "Rank",
    "Suit",
    "Hand",
    "Player",
    "Dealer",
    "RuleSet",
    "BlackjackError",
    "InvalidBetError",
    "InsufficientFundsError",
    "IllegalActionError",
    "EmptyShoeError",
]
