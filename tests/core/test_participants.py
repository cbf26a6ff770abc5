"""Tests for Player and Dealer."""

import pytest

from conftest import make_hand, stacked_shoe
from core.cards import Card, Rank, Suit, cards_from_string
from core.errors import IllegalActionError, InsufficientFundsError, InvalidBetError
from core.hand import Hand
from core.participants import Dealer, Player


class TestPlaceBet:
    """Tests for Player.place_bet."""

    def test_bet_deducts_bankroll(self, player):
        player.place_bet(100)
        assert player.bankroll == 900
        assert player.hands[0].bet == 100

    def test_minimum_bet_accepted(self, player):
        player.place_bet(15)
        assert player.bankroll == 985

    def test_whole_bankroll_accepted(self, player):
        player.place_bet(1000)
        assert player.bankroll == 0

    @pytest.mark.parametrize("amount", [0, 10, 14, 1001, -5])
    def test_invalid_bet_leaves_bankroll(self, player, amount):
        """Test bets outside [minimum, bankroll] are rejected untouched."""
        with pytest.raises(InvalidBetError):
            player.place_bet(amount)
        assert player.bankroll == 1000
        assert player.hands[0].bet == 0

    @pytest.mark.parametrize("amount", [15.5, "20", True])
    def test_non_integer_bet_rejected(self, player, amount):
        with pytest.raises(InvalidBetError):
            player.place_bet(amount)
        assert player.bankroll == 1000

    def test_bet_set_once(self, player):
        """Test a hand's wager cannot be replaced."""
        player.place_bet(20)
        with pytest.raises(InvalidBetError):
            player.place_bet(30)
        assert player.hands[0].bet == 20
        assert player.bankroll == 980

    def test_bet_on_missing_hand(self, player):
        with pytest.raises(IllegalActionError):
            player.place_bet(20, hand_index=3)


class TestPlayerHands:
    """Tests for hit, clear_hands and the hand queries."""

    def test_hit_appends_in_order(self, player):
        shoe = stacked_shoe("9S 8H 2C")
        for _ in range(3):
            player.hit(shoe.deal())
        assert player.hands[0].cards == cards_from_string("9S 8H 2C")
        assert player.hand_total() == 19

    def test_queries(self, player):
        player.hands = [make_hand("AS KH"), make_hand("10S 6H KC")]
        assert player.has_blackjack(0)
        assert not player.has_busted(0)
        assert player.has_busted(1)
        assert player.hand_total(1) == 26

    def test_clear_hands_returns_cards(self, player):
        player.hands = [make_hand("AS KH", bet=20), make_hand("8S 8H", bet=20)]
        discards = player.clear_hands()
        assert len(discards) == 4
        assert len(player.hands) == 1
        assert player.hands[0].cards == []
        assert player.hands[0].bet == 0

    def test_copy_is_independent(self, player):
        player.place_bet(50)
        copy = player.copy()
        copy.hit(Card(Rank.TWO, Suit.CLUBS))
        copy.bankroll = 0
        assert player.hands[0].cards == []
        assert player.bankroll == 950


class TestDoubleDown:
    """Tests for Player.double_down."""

    def test_double_doubles_bet_and_deals_one(self, player):
        player.place_bet(50)
        player.hands[0].cards = cards_from_string("5S 6H")
        shoe = stacked_shoe("10D 2C")

        card = player.double_down(shoe)

        assert card == Card(Rank.TEN, Suit.DIAMONDS)
        assert player.hands[0].bet == 100
        assert player.hands[0].is_doubled
        assert player.bankroll == 900
        assert len(player.hands[0]) == 3
        assert len(shoe) == 1

    def test_double_exactly_once(self, player):
        """Test a second double on the same hand is rejected."""
        player.place_bet(50)
        player.hands[0].cards = cards_from_string("5S 6H")
        shoe = stacked_shoe("2D 3C")
        player.double_down(shoe)

        with pytest.raises(IllegalActionError):
            player.double_down(shoe)

        assert player.hands[0].bet == 100
        assert player.bankroll == 900
        assert len(shoe) == 1

    def test_double_after_hit_rejected(self, player):
        player.place_bet(50)
        player.hands[0].cards = cards_from_string("2S 3H 4D")
        with pytest.raises(IllegalActionError):
            player.double_down(stacked_shoe("5C"))

    def test_double_insufficient_funds(self):
        """Test doubling fails without touching the shoe when funds are short."""
        player = Player(bankroll=100, min_bet=15)
        player.place_bet(60)
        player.hands[0].cards = cards_from_string("5S 6H")
        shoe = stacked_shoe("10D")

        with pytest.raises(InsufficientFundsError):
            player.double_down(shoe)

        assert player.bankroll == 40
        assert player.hands[0].bet == 60
        assert len(shoe) == 1

    def test_insufficient_funds_is_invalid_bet(self):
        assert issubclass(InsufficientFundsError, InvalidBetError)


class TestSplit:
    """Tests for Player.split."""

    def test_split_pair(self, player):
        player.place_bet(20)
        player.hands[0].cards = cards_from_string("8S 8H")
        shoe = stacked_shoe("3C 10D")

        first, second = player.split(shoe)

        assert player.hands == [first, second]
        assert first.cards == cards_from_string("8S 3C")
        assert second.cards == cards_from_string("8H 10D")
        assert first.bet == second.bet == 20
        assert first.is_split_hand and second.is_split_hand
        assert player.bankroll == 960

    def test_split_requires_pair(self, player):
        player.place_bet(20)
        player.hands[0].cards = cards_from_string("8S 9H")
        with pytest.raises(IllegalActionError):
            player.split(stacked_shoe("3C 10D"))

    def test_split_hand_limit(self, player):
        player.hands = [make_hand("8S 8H", bet=20), Hand(), Hand(), Hand()]
        with pytest.raises(IllegalActionError):
            player.split(stacked_shoe("3C 10D"), max_hands=4)

    def test_split_insufficient_funds(self):
        player = Player(bankroll=30, min_bet=15)
        player.place_bet(20)
        player.hands[0].cards = cards_from_string("8S 8H")
        with pytest.raises(InsufficientFundsError):
            player.split(stacked_shoe("3C 10D"))
        assert len(player.hands) == 1


class TestDealer:
    """Tests for the Dealer."""

    def test_visible_total_hides_hole_card(self, dealer):
        dealer.hand = make_hand("10S 7H")
        assert dealer.visible_total() == 10
        assert dealer.visible_cards() == [Card(Rank.TEN, Suit.SPADES)]

        dealer.reveal_hole_card()
        assert dealer.visible_total() == 17
        assert len(dealer.visible_cards()) == 2

    def test_has_blackjack(self, dealer):
        dealer.hand = make_hand("AS KH")
        assert dealer.has_blackjack()

    def test_auto_play_from_16_draws_one(self, dealer):
        """Test dealer on 16 drawing a 5 takes exactly one card."""
        dealer.hand = make_hand("10S 6H")
        shoe = stacked_shoe("5D 9C")

        drawn = dealer.auto_play(shoe)

        assert drawn == [Card(Rank.FIVE, Suit.DIAMONDS)]
        assert len(dealer.hand) == 3
        assert dealer.total == 21
        assert len(shoe) == 1

    def test_auto_play_stands_on_hard_17(self, dealer):
        dealer.hand = make_hand("10S 7H")
        shoe = stacked_shoe("5D")
        assert dealer.auto_play(shoe) == []
        assert len(shoe) == 1

    def test_auto_play_hits_soft_17(self, dealer):
        dealer.hand = make_hand("AS 6H")
        shoe = stacked_shoe("3D")
        dealer.auto_play(shoe, hits_soft_17=True)
        assert dealer.total == 20

    def test_auto_play_stands_soft_17_when_rule_off(self, dealer):
        dealer.hand = make_hand("AS 6H")
        assert dealer.auto_play(stacked_shoe("3D"), hits_soft_17=False) == []

    def test_auto_play_until_bust(self, dealer):
        dealer.hand = make_hand("10S 2H")
        dealer.auto_play(stacked_shoe("3D KC 4S"))
        assert dealer.total == 25
        assert dealer.hand.is_busted

    def test_clear_hides_hole_card(self, dealer):
        dealer.hand = make_hand("10S 7H")
        dealer.reveal_hole_card()
        discards = dealer.clear()
        assert len(discards) == 2
        assert not dealer.hole_revealed
        assert dealer.cards == []


def test_player_default_single_hand():
    assert len(Player().hands) == 1
    assert isinstance(Dealer().hand, Hand)
