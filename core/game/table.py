"""The table aggregate a round is played on."""

from dataclasses import dataclass, field
from random import Random

from core.cards import Card, Shoe
from core.game.state import GameState
from core.hand import Hand
from core.participants import Dealer, Player
from core.rules import RuleSet


@dataclass
class Table:
    """
    Everything one session's round engine owns.

    Tables are treated as values: the engine clones the current table,
    applies an intent to the clone and only then replaces the original.
    """

    shoe: Shoe
    player: Player
    dealer: Dealer = field(default_factory=Dealer)
    state: GameState = GameState.BETTING
    current_hand_index: int = 0
    discards: list[Card] = field(default_factory=list)
    message: str = ""
    bankroll_delta: int = 0
    round_number: int = 0

    @classmethod
    def new(
        cls,
        rules: RuleSet,
        bankroll: int,
        rng: Random | None = None,
        shoe: Shoe | None = None,
    ) -> "Table":
        """Open a table with a freshly shuffled shoe (or the one given)."""
        if shoe is None:
            shoe = Shoe(
                deck_count=rules.num_decks,
                reshuffle_threshold=rules.reshuffle_threshold,
                rng=rng,
            )
        return cls(shoe=shoe, player=Player(bankroll=bankroll, min_bet=rules.min_bet))

    def clone(self) -> "Table":
        return Table(
            shoe=self.shoe.clone(),
            player=self.player.copy(),
            dealer=self.dealer.copy(),
            state=self.state,
            current_hand_index=self.current_hand_index,
            discards=list(self.discards),
            message=self.message,
            bankroll_delta=self.bankroll_delta,
            round_number=self.round_number,
        )

    @property
    def current_hand(self) -> Hand:
        """The hand being played, or the last hand once the player is done."""
        hands = self.player.hands
        return hands[min(self.current_hand_index, len(hands) - 1)]

    @property
    def cards_in_play(self) -> int:
        """Cards held by the player and the dealer."""
        return sum(len(hand) for hand in self.player.hands) + len(self.dealer.hand)

    @property
    def card_count(self) -> int:
        """Cards in play, discarded and still in the shoe."""
        return self.cards_in_play + len(self.discards) + len(self.shoe)
