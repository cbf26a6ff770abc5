"""Pytest fixtures for blackjack engine tests."""

import pytest
from hypothesis import strategies as st
from random import Random

from core.cards import Card, Shoe, Rank, Suit, cards_from_string
from core.hand import Hand
from core.participants import Dealer, Player
from core.rules import RuleSet
from core.game import BlackjackGame


def make_hand(labels: str, bet: int = 0) -> Hand:
    """Build a hand from a string like 'AS 6H'."""
    return Hand(cards=cards_from_string(labels), bet=bet)


def stacked_shoe(labels: str, deck_count: int = 6) -> Shoe:
    """
    A shoe that deals the given cards first, in order.

    The threshold is zero so the engine never replaces it before the
    stacked cards run out.
    """
    return Shoe.from_cards(cards_from_string(labels), deck_count=deck_count, reshuffle_threshold=0)


def stacked_game(labels: str, bankroll: int = 1000, rules: RuleSet | None = None) -> BlackjackGame:
    """A session whose shoe deals the given cards first.

    Deal order for a round is player, dealer, player, dealer (hole card).
    """
    return BlackjackGame(rules=rules, initial_bankroll=bankroll, shoe=stacked_shoe(labels))


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled 6-deck shoe."""
    return Shoe(deck_count=6, rng=rng)


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return make_hand("AS KH")


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    hand = Hand()
    hand.add_card(Card(Rank.ACE, Suit.SPADES))
    hand.add_card(Card(Rank.SIX, Suit.HEARTS))
    return hand


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return make_hand("10S 6H")


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return make_hand("10S 6H KC")


@pytest.fixture
def rules():
    """Default ruleset."""
    return RuleSet()


@pytest.fixture
def player():
    """A player with the default bankroll and table minimum."""
    return Player(bankroll=1000, min_bet=15)


@pytest.fixture
def dealer():
    """A dealer with an empty hand."""
    return Dealer()


@pytest.fixture
def game(rng):
    """A new game instance."""
    return BlackjackGame(initial_bankroll=1000, rng=rng)


# Hypothesis strategies for property-based testing
@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


@st.composite
def hand_strategy(draw, min_cards=2, max_cards=5):
    """Generate a random hand."""
    cards = draw(st.lists(card_strategy(), min_size=min_cards, max_size=max_cards))
    return Hand(cards=cards)
