"""Blackjack table rules."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from core.cards import DEFAULT_RESHUFFLE_THRESHOLD

if TYPE_CHECKING:
    from config import GameConfig


@dataclass(frozen=True)
class RuleSet:
    """
    Blackjack table rules configuration.

    Every constant the round engine consults lives here so a table can be
    reconfigured without touching engine code.
    """

    # Shoe configuration
    num_decks: int = 6
    reshuffle_threshold: int = DEFAULT_RESHUFFLE_THRESHOLD

    # Table minimum; the maximum is whatever the bankroll covers
    min_bet: int = 15

    # Blackjack payout (3:2 = 1.5, 6:5 = 1.2)
    blackjack_payout: float = 1.5

    # Dealer rules
    dealer_hits_soft_17: bool = True  # H17 vs S17

    # Double down and split rules
    double_after_split: bool = True  # DAS
    max_hands: int = 4  # Maximum number of hands from splitting

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.num_decks < 1 or self.num_decks > 8:
            raise ValueError("num_decks must be between 1 and 8")
        if self.reshuffle_threshold < 0:
            raise ValueError("reshuffle_threshold cannot be negative")
        if self.min_bet < 1:
            raise ValueError("min_bet must be at least 1")
        if self.blackjack_payout < 1.0:
            raise ValueError("blackjack_payout must be at least 1.0")
        if self.max_hands < 1:
            raise ValueError("max_hands must be at least 1")

    @classmethod
    def from_config(cls, game_config: "GameConfig") -> "RuleSet":
        """Build a rule set from the application's game configuration."""
        return cls(
            num_decks=game_config.num_decks,
            reshuffle_threshold=game_config.reshuffle_threshold,
            min_bet=game_config.min_bet,
            blackjack_payout=game_config.blackjack_payout,
            dealer_hits_soft_17=game_config.dealer_hits_soft_17,
            double_after_split=game_config.double_after_split,
            max_hands=game_config.max_hands,
        )

    @classmethod
    def single_deck(cls) -> "RuleSet":
        """Single deck, replaced before every round."""
        return cls(num_decks=1, double_after_split=False)

    @classmethod
    def vegas_strip(cls) -> "RuleSet":
        """Six decks, dealer stands on soft 17."""
        return cls(num_decks=6, dealer_hits_soft_17=False)
