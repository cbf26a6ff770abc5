"""Tests for Card and Shoe classes."""

import pytest
from random import Random

from core.cards import Card, Shoe, Rank, Suit, cards_from_string
from core.errors import EmptyShoeError


class TestCard:
    """Tests for the Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_immutability(self):
        """Test that cards are immutable."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_value(self):
        """Test card blackjack values."""
        assert Card(Rank.TWO, Suit.HEARTS).value == 2
        assert Card(Rank.TEN, Suit.HEARTS).value == 10
        assert Card(Rank.JACK, Suit.HEARTS).value == 10
        assert Card(Rank.QUEEN, Suit.HEARTS).value == 10
        assert Card(Rank.KING, Suit.HEARTS).value == 10
        assert Card(Rank.ACE, Suit.HEARTS).value == 11

    def test_card_is_ten_value(self):
        """Test ten-value detection."""
        assert Card(Rank.TEN, Suit.SPADES).is_ten_value
        assert Card(Rank.KING, Suit.SPADES).is_ten_value
        assert not Card(Rank.NINE, Suit.SPADES).is_ten_value
        assert not Card(Rank.ACE, Suit.SPADES).is_ten_value

    def test_card_from_string(self):
        """Test creating cards from strings."""
        assert Card.from_string("AS") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("2H") == Card(Rank.TWO, Suit.HEARTS)
        assert Card.from_string("10d") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("K♥") == Card(Rank.KING, Suit.HEARTS)

    @pytest.mark.parametrize("label", ["", "A", "1S", "AX", "11H"])
    def test_card_from_string_invalid(self, label):
        """Test that malformed labels are rejected."""
        with pytest.raises(ValueError):
            Card.from_string(label)

    def test_cards_from_string(self):
        """Test parsing a list of cards."""
        cards = cards_from_string("AS 10H kc")
        assert cards == [
            Card(Rank.ACE, Suit.SPADES),
            Card(Rank.TEN, Suit.HEARTS),
            Card(Rank.KING, Suit.CLUBS),
        ]

    def test_card_str(self):
        """Test string representation."""
        assert str(Card(Rank.ACE, Suit.SPADES)) == "A♠"
        assert str(Card(Rank.TEN, Suit.CLUBS)) == "10♣"

    def test_duplicate_cards_are_equal(self):
        """Test that cards have no identity beyond rank and suit."""
        card1 = Card(Rank.ACE, Suit.SPADES)
        card2 = Card(Rank.ACE, Suit.SPADES)
        assert card1 == card2
        assert len({card1, card2}) == 1


class TestShoe:
    """Tests for the Shoe class."""

    def test_shoe_creation(self):
        """Test creating a shoe with multiple decks."""
        shoe = Shoe(deck_count=6)
        assert len(shoe) == 312
        assert shoe.deck_count == 6
        assert shoe.total_cards == 312

    def test_shoe_single_deck_composition(self):
        """Test a single deck holds every card exactly once."""
        shoe = Shoe(deck_count=1)
        assert len(set(shoe)) == 52

    def test_shoe_multi_deck_duplicates(self):
        """Test each card appears once per deck."""
        shoe = Shoe(deck_count=2)
        cards = list(shoe)
        assert cards.count(Card(Rank.ACE, Suit.SPADES)) == 2

    def test_shoe_invalid_decks_raises(self):
        """Test that invalid deck count raises error."""
        with pytest.raises(ValueError):
            Shoe(deck_count=0)

    def test_unshuffled_order_is_suit_major(self):
        """Test that an unshuffled shoe is ordered by suit, then rank."""
        shoe = Shoe(deck_count=1, shuffled=False)
        # Iteration runs from the top of the shoe, the last card built
        cards = list(shoe)[::-1]
        assert cards[0] == Card(Rank.ACE, Suit.CLUBS)
        assert cards[12] == Card(Rank.KING, Suit.CLUBS)
        assert cards[13] == Card(Rank.ACE, Suit.DIAMONDS)
        assert cards[-1] == Card(Rank.KING, Suit.SPADES)

    def test_shuffle_is_reproducible(self):
        """Test that equal seeds produce equal orders."""
        shoe1 = Shoe(deck_count=6, rng=Random(7))
        shoe2 = Shoe(deck_count=6, rng=Random(7))
        assert list(shoe1) == list(shoe2)

    def test_shuffle_changes_order(self):
        """Test shuffling keeps composition but changes order."""
        ordered = Shoe(deck_count=1, shuffled=False)
        shuffled = Shoe(deck_count=1, rng=Random(42))
        assert sorted(map(repr, ordered)) == sorted(map(repr, shuffled))
        assert list(ordered) != list(shuffled)

    def test_deal_removes_top_card(self):
        """Test dealing returns the top card."""
        shoe = Shoe.from_cards(cards_from_string("AS KH 5D"))
        assert shoe.peek() == Card(Rank.ACE, Suit.SPADES)
        assert shoe.deal() == Card(Rank.ACE, Suit.SPADES)
        assert shoe.deal() == Card(Rank.KING, Suit.HEARTS)
        assert len(shoe) == 1

    def test_deal_n_cards(self, shoe):
        """Test dealing N cards shrinks the shoe by N, order preserved."""
        expected = list(shoe)[:5]
        size = len(shoe)

        dealt = [shoe.deal() for _ in range(5)]

        assert dealt == expected
        assert len(shoe) == size - 5
        assert shoe.cards_dealt == 5

    def test_deal_empty_raises(self):
        """Test that dealing from an empty shoe raises EmptyShoeError."""
        shoe = Shoe.from_cards([])
        with pytest.raises(EmptyShoeError):
            shoe.deal()

    def test_needs_reshuffle_threshold(self):
        """Test the reshuffle threshold boundary."""
        shoe = Shoe(deck_count=2, rng=Random(1))
        while len(shoe) > 53:
            shoe.deal()

        assert len(shoe) == 53
        assert not shoe.needs_reshuffle()

        shoe.deal()
        assert len(shoe) == 52
        assert shoe.needs_reshuffle()

    def test_single_deck_always_needs_reshuffle(self):
        """Test a full single deck sits at the threshold."""
        assert Shoe(deck_count=1).needs_reshuffle()

    def test_clone_preserves_order(self, shoe):
        """Test that a clone deals the same cards without reshuffling."""
        shoe.deal()
        copy = shoe.clone()
        assert list(copy) == list(shoe)
        assert copy.deal() == shoe.deal()

    def test_clone_is_independent(self, shoe):
        """Test that dealing from a clone leaves the original intact."""
        size = len(shoe)
        copy = shoe.clone()
        for _ in range(10):
            copy.deal()
        assert len(shoe) == size
        assert len(copy) == size - 10

    def test_fresh_shoe_is_full(self, shoe):
        """Test that a replacement shoe has full composition."""
        for _ in range(100):
            shoe.deal()
        replacement = shoe.fresh()
        assert len(replacement) == 312
        assert replacement.reshuffle_threshold == shoe.reshuffle_threshold
