"""Card and Shoe classes - immutable cards dealt from a multi-deck shoe."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Iterable, Iterator

from core.errors import EmptyShoeError

CARDS_PER_DECK = 52

# Remaining-card count at or below which the shoe is replaced
DEFAULT_RESHUFFLE_THRESHOLD = 52


class Suit(Enum):
    """Card suits."""

    CLUBS = auto()
    DIAMONDS = auto()
    HEARTS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks, Ace first."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        if 2 <= self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self == Rank.ACE:
            return 11
        return min(self.value, 10)

    @property
    def is_ace(self) -> bool:
        return self == Rank.ACE

    @property
    def is_ten_value(self) -> bool:
        return self.blackjack_value == 10


_RANK_LABELS = {
    "A": Rank.ACE,
    "2": Rank.TWO,
    "3": Rank.THREE,
    "4": Rank.FOUR,
    "5": Rank.FIVE,
    "6": Rank.SIX,
    "7": Rank.SEVEN,
    "8": Rank.EIGHT,
    "9": Rank.NINE,
    "10": Rank.TEN,
    "T": Rank.TEN,
    "J": Rank.JACK,
    "Q": Rank.QUEEN,
    "K": Rank.KING,
}

_SUIT_LABELS = {
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card. Equal rank and suit means equal card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        return self.rank.is_ace

    @property
    def is_ten_value(self) -> bool:
        return self.rank.is_ten_value

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', '10h'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        if rank_str not in _RANK_LABELS:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in _SUIT_LABELS:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(_RANK_LABELS[rank_str], _SUIT_LABELS[suit_str])


def cards_from_string(s: str) -> list[Card]:
    """Parse a space-separated list of cards, e.g. 'AS KH 9D'."""
    return [Card.from_string(part) for part in s.split()]


class Shoe:
    """
    A multi-deck shoe for blackjack.

    Cards are dealt from the end of the internal list, so the last element
    is the top of the shoe.
    """

    def __init__(
        self,
        deck_count: int = 6,
        reshuffle_threshold: int = DEFAULT_RESHUFFLE_THRESHOLD,
        rng: Random | None = None,
        shuffled: bool = True,
    ) -> None:
        """
        Initialize a shoe with multiple decks.

        Args:
            deck_count: Number of 52-card decks in the shoe
            reshuffle_threshold: Remaining-card count that triggers replacement
            rng: Random number generator for shuffling
            shuffled: Shuffle the freshly built shoe (False keeps suit-major order)
        """
        if deck_count < 1:
            raise ValueError("Shoe must have at least 1 deck")
        if reshuffle_threshold < 0:
            raise ValueError("Reshuffle threshold cannot be negative")

        self._deck_count = deck_count
        self._reshuffle_threshold = reshuffle_threshold
        self._rng = rng or Random()
        self._cards: list[Card] = []
        if shuffled:
            self.initialize()
        else:
            self._cards = self._ordered_cards()

    @classmethod
    def from_cards(
        cls,
        cards: Iterable[Card],
        deck_count: int = 6,
        reshuffle_threshold: int = DEFAULT_RESHUFFLE_THRESHOLD,
        rng: Random | None = None,
    ) -> "Shoe":
        """
        Build a stacked shoe.

        Args:
            cards: Cards in the order they will be dealt (first card dealt first)
        """
        shoe = cls(
            deck_count=deck_count,
            reshuffle_threshold=reshuffle_threshold,
            rng=rng,
            shuffled=False,
        )
        shoe._cards = list(reversed(list(cards)))
        return shoe

    def _ordered_cards(self) -> list[Card]:
        return [
            Card(rank, suit)
            for _ in range(self._deck_count)
            for suit in Suit
            for rank in Rank
        ]

    def initialize(self) -> None:
        """Refill with every card of every deck, then shuffle."""
        self._cards = self._ordered_cards()
        self.shuffle()

    def shuffle(self) -> None:
        """Shuffle the remaining cards in place (Fisher-Yates)."""
        cards = self._cards
        for i in range(len(cards) - 1, 0, -1):
            j = self._rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]

    def deal(self) -> Card:
        """Remove and return the top card."""
        if not self._cards:
            raise EmptyShoeError("Cannot deal from an empty shoe")
        return self._cards.pop()

    def needs_reshuffle(self) -> bool:
        """Check whether the remaining cards have reached the threshold."""
        return len(self._cards) <= self._reshuffle_threshold

    def fresh(self) -> "Shoe":
        """Return a newly initialized shoe with the same configuration."""
        return Shoe(
            deck_count=self._deck_count,
            reshuffle_threshold=self._reshuffle_threshold,
            rng=self._rng,
        )

    def clone(self) -> "Shoe":
        """Return an independent copy with the same remaining order."""
        rng = Random()
        rng.setstate(self._rng.getstate())
        other = Shoe(
            deck_count=self._deck_count,
            reshuffle_threshold=self._reshuffle_threshold,
            rng=rng,
            shuffled=False,
        )
        other._cards = list(self._cards)
        return other

    def peek(self) -> Card | None:
        """Return the top card without dealing it."""
        return self._cards[-1] if self._cards else None

    @property
    def cards_remaining(self) -> int:
        return len(self._cards)

    @property
    def cards_dealt(self) -> int:
        return self.total_cards - len(self._cards)

    @property
    def total_cards(self) -> int:
        """Return the number of cards in a full shoe."""
        return self._deck_count * CARDS_PER_DECK

    @property
    def deck_count(self) -> int:
        return self._deck_count

    @property
    def reshuffle_threshold(self) -> int:
        return self._reshuffle_threshold

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        """Iterate from the top of the shoe downwards."""
        return reversed(self._cards)
