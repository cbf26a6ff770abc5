"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterator, Sequence

from core.cards import Card

BLACKJACK = 21

# Index of the dealer's face-down card
HOLE_CARD_INDEX = 1


def hand_total(cards: Sequence[Card]) -> int:
    """
    Calculate the best total for a set of cards.

    Aces count 11 while that keeps the total at or under 21, otherwise 1.
    A bust hand reports its minimal total (every Ace as 1).
    """
    total = 0
    aces = 0

    for card in cards:
        if card.is_ace:
            aces += 1
        total += card.value

    # Reduce aces from 11 to 1 as needed
    while total > BLACKJACK and aces > 0:
        total -= 10
        aces -= 1

    return total


def is_soft(cards: Sequence[Card]) -> bool:
    """Check if an ace is currently counted as 11."""
    if not any(card.is_ace for card in cards):
        return False
    hard_total = sum(1 if card.is_ace else card.value for card in cards)
    return hard_total + 10 <= BLACKJACK


def is_bust(cards: Sequence[Card]) -> bool:
    return hand_total(cards) > BLACKJACK


def is_blackjack(cards: Sequence[Card]) -> bool:
    """Check for a natural: exactly two cards totaling 21."""
    return len(cards) == 2 and hand_total(cards) == BLACKJACK


def visible_cards(cards: Sequence[Card], hole_revealed: bool) -> list[Card]:
    """Return the face-up cards of a dealer hand."""
    if hole_revealed:
        return list(cards)
    return [card for i, card in enumerate(cards) if i != HOLE_CARD_INDEX]


def visible_total(cards: Sequence[Card], hole_revealed: bool) -> int:
    """Total of the face-up cards; the full total once the hole card is shown."""
    return hand_total(visible_cards(cards, hole_revealed))


@dataclass
class Hand:
    """A blackjack hand with its wager."""

    cards: list[Card] = field(default_factory=list)
    bet: int = 0
    is_doubled: bool = False
    is_split_hand: bool = False

    def add_card(self, card: Card) -> None:
        self.cards.append(card)

    def clear(self) -> list[Card]:
        """Empty the hand and reset its wager, returning the removed cards."""
        removed = list(self.cards)
        self.cards.clear()
        self.bet = 0
        self.is_doubled = False
        self.is_split_hand = False
        return removed

    def copy(self) -> "Hand":
        return Hand(
            cards=list(self.cards),
            bet=self.bet,
            is_doubled=self.is_doubled,
            is_split_hand=self.is_split_hand,
        )

    @property
    def value(self) -> int:
        """Return the best total, or the minimal total when bust."""
        return hand_total(self.cards)

    @property
    def is_soft(self) -> bool:
        return is_soft(self.cards)

    @property
    def is_hard(self) -> bool:
        return not self.is_soft

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural blackjack (split hands never are)."""
        return is_blackjack(self.cards) and not self.is_split_hand

    @property
    def is_busted(self) -> bool:
        return is_bust(self.cards)

    @property
    def is_pair(self) -> bool:
        """Check if the hand is two cards of the same rank."""
        return (
            len(self.cards) == 2
            and self.cards[0].rank == self.cards[1].rank
        )

    @property
    def can_double(self) -> bool:
        """Check if the hand can be doubled down."""
        return len(self.cards) == 2 and not self.is_doubled

    @property
    def num_cards(self) -> int:
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, bet={self.bet}, value={self.value})"


def evaluate_hands(player_hand: Hand, dealer_hand: Hand) -> int:
    """
    Compare player and dealer hands.

    Returns:
        1 if player wins
        -1 if dealer wins
        0 if push (tie)
    """
    # Player busts always loses, even if the dealer busts too
    if player_hand.is_busted:
        return -1

    if dealer_hand.is_busted:
        return 1

    player_bj = player_hand.is_blackjack
    dealer_bj = dealer_hand.is_blackjack

    if player_bj and dealer_bj:
        return 0
    if player_bj:
        return 1
    if dealer_bj:
        return -1

    player_value = player_hand.value
    dealer_value = dealer_hand.value

    if player_value > dealer_value:
        return 1
    if dealer_value > player_value:
        return -1
    return 0
