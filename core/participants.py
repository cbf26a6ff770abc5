"""Player and dealer state."""

from dataclasses import dataclass, field

from core.cards import Card, Shoe
from core.errors import IllegalActionError, InsufficientFundsError, InvalidBetError
from core.hand import Hand, hand_total, visible_cards, visible_total

DEALER_STANDS_ON = 17


@dataclass
class Player:
    """
    The player's hands and bankroll.

    Wagers leave the bankroll the moment they are placed; payouts are
    credited back by the round engine.
    """

    bankroll: int = 1000
    min_bet: int = 15
    hands: list[Hand] = field(default_factory=lambda: [Hand()])

    def copy(self) -> "Player":
        return Player(
            bankroll=self.bankroll,
            min_bet=self.min_bet,
            hands=[hand.copy() for hand in self.hands],
        )

    def hand(self, hand_index: int = 0) -> Hand:
        """Return the hand at ``hand_index``."""
        if not 0 <= hand_index < len(self.hands):
            raise IllegalActionError(f"No hand at index {hand_index}")
        return self.hands[hand_index]

    def place_bet(self, amount: int, hand_index: int = 0) -> None:
        """
        Wager ``amount`` on a hand, deducting it from the bankroll.

        Raises:
            InvalidBetError: amount is below the table minimum, above the
                bankroll, or the hand already carries a bet
        """
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise InvalidBetError(f"Bet must be a whole number, got {amount!r}", amount=None)
        if amount < self.min_bet:
            raise InvalidBetError(f"Bet must be at least {self.min_bet}", amount=amount)
        if amount > self.bankroll:
            raise InvalidBetError(
                f"Bet of {amount} exceeds bankroll of {self.bankroll}",
                amount=amount,
            )

        hand = self.hand(hand_index)
        if hand.bet:
            raise InvalidBetError("Hand already has a bet", amount=amount)

        self.bankroll -= amount
        hand.bet = amount

    def clear_hands(self) -> list[Card]:
        """Reset to a single empty hand, returning every card that was held."""
        discards: list[Card] = []
        for hand in self.hands:
            discards.extend(hand.clear())
        self.hands = [Hand()]
        return discards

    def hit(self, card: Card, hand_index: int = 0) -> None:
        self.hand(hand_index).add_card(card)

    def double_down(self, shoe: Shoe, hand_index: int = 0) -> Card:
        """
        Double the hand's wager and take exactly one more card.

        The extra stake is checked before any card leaves the shoe.

        Returns:
            The card dealt to the hand
        """
        hand = self.hand(hand_index)
        if hand.is_doubled:
            raise IllegalActionError("Hand has already been doubled", action="double")
        if len(hand.cards) != 2:
            raise IllegalActionError("Can only double down on a two-card hand", action="double")
        if hand.bet > self.bankroll:
            raise InsufficientFundsError(required=hand.bet, available=self.bankroll)

        card = shoe.deal()
        self.bankroll -= hand.bet
        hand.bet *= 2
        hand.is_doubled = True
        hand.add_card(card)
        return card

    def split(self, shoe: Shoe, hand_index: int = 0, max_hands: int = 4) -> tuple[Hand, Hand]:
        """
        Split a pair into two hands, each with the original wager.

        Returns:
            The two resulting hands, in table order
        """
        hand = self.hand(hand_index)
        if not hand.is_pair:
            raise IllegalActionError("Can only split a pair", action="split")
        if len(self.hands) >= max_hands:
            raise IllegalActionError(f"Cannot play more than {max_hands} hands", action="split")
        if hand.bet > self.bankroll:
            raise InsufficientFundsError(required=hand.bet, available=self.bankroll)

        first = shoe.deal()
        second = shoe.deal()

        self.bankroll -= hand.bet
        new_hand = Hand(cards=[hand.cards.pop()], bet=hand.bet, is_split_hand=True)
        hand.is_split_hand = True
        hand.add_card(first)
        new_hand.add_card(second)
        self.hands.insert(hand_index + 1, new_hand)
        return hand, new_hand

    def has_blackjack(self, hand_index: int = 0) -> bool:
        return self.hand(hand_index).is_blackjack

    def has_busted(self, hand_index: int = 0) -> bool:
        return self.hand(hand_index).is_busted

    def hand_total(self, hand_index: int = 0) -> int:
        return self.hand(hand_index).value

    @property
    def total_wagered(self) -> int:
        """Sum of the bets on every hand."""
        return sum(hand.bet for hand in self.hands)


@dataclass
class Dealer:
    """The dealer's single hand. The second card dealt is the hole card."""

    hand: Hand = field(default_factory=Hand)
    hole_revealed: bool = False

    def copy(self) -> "Dealer":
        return Dealer(hand=self.hand.copy(), hole_revealed=self.hole_revealed)

    @property
    def cards(self) -> list[Card]:
        return self.hand.cards

    @property
    def total(self) -> int:
        return self.hand.value

    def add_card(self, card: Card) -> None:
        self.hand.add_card(card)

    def clear(self) -> list[Card]:
        """Empty the hand and hide the hole card again."""
        self.hole_revealed = False
        return self.hand.clear()

    def reveal_hole_card(self) -> None:
        self.hole_revealed = True

    def has_blackjack(self) -> bool:
        return self.hand.is_blackjack

    def visible_cards(self) -> list[Card]:
        return visible_cards(self.hand.cards, self.hole_revealed)

    def visible_total(self) -> int:
        """Total of the face-up cards (full total once the hole card is shown)."""
        return visible_total(self.hand.cards, self.hole_revealed)

    def should_hit(self, hits_soft_17: bool = True) -> bool:
        """Determine if the dealer must draw."""
        value = hand_total(self.hand.cards)
        if value < DEALER_STANDS_ON:
            return True
        return value == DEALER_STANDS_ON and hits_soft_17 and self.hand.is_soft

    def auto_play(self, shoe: Shoe, hits_soft_17: bool = True) -> list[Card]:
        """
        Draw until the dealer stands or busts.

        Returns:
            The cards drawn, in order
        """
        drawn: list[Card] = []
        while self.should_hit(hits_soft_17):
            card = shoe.deal()
            self.hand.add_card(card)
            drawn.append(card)
        return drawn
