"""Read-only views of a table for presentation layers."""

from dataclasses import dataclass

from core.cards import Card
from core.game.actions import Action
from core.game.state import GameState
from core.game.table import Table
from core.hand import Hand
from core.rules import RuleSet


@dataclass(frozen=True)
class HandView:
    """A player hand as shown to the player."""

    cards: tuple[Card, ...]
    bet: int
    total: int
    is_soft: bool
    is_blackjack: bool
    is_busted: bool
    is_doubled: bool
    is_split_hand: bool

    @classmethod
    def from_hand(cls, hand: Hand) -> "HandView":
        return cls(
            cards=tuple(hand.cards),
            bet=hand.bet,
            total=hand.value,
            is_soft=hand.is_soft,
            is_blackjack=hand.is_blackjack,
            is_busted=hand.is_busted,
            is_doubled=hand.is_doubled,
            is_split_hand=hand.is_split_hand,
        )


@dataclass(frozen=True)
class TableSnapshot:
    """
    Everything a presentation layer needs after a transition.

    The dealer's hole card is left out of ``dealer_cards`` and
    ``dealer_total`` until it has been revealed.
    """

    state: GameState
    player_hands: tuple[HandView, ...]
    current_hand_index: int
    player_total: int
    dealer_cards: tuple[Card, ...]
    dealer_total: int
    hole_card_hidden: bool
    is_player_turn_active: bool
    bankroll: int
    message: str
    bankroll_delta: int
    cards_remaining: int
    round_number: int
    allowed_actions: tuple[Action, ...]


def allowed_actions(table: Table, rules: RuleSet) -> tuple[Action, ...]:
    """List the actions the current hand may take."""
    if table.state != GameState.PLAYER_TURN:
        return ()

    hand = table.current_hand
    bankroll = table.player.bankroll
    actions = [Action.HIT, Action.STAND]

    if hand.can_double and hand.bet <= bankroll:
        if not hand.is_split_hand or rules.double_after_split:
            actions.append(Action.DOUBLE)
    if hand.is_pair and len(table.player.hands) < rules.max_hands and hand.bet <= bankroll:
        actions.append(Action.SPLIT)

    return tuple(actions)


def build_snapshot(table: Table, rules: RuleSet) -> TableSnapshot:
    """Derive the read-only snapshot of ``table``."""
    dealer = table.dealer
    has_cards = bool(dealer.cards)
    return TableSnapshot(
        state=table.state,
        player_hands=tuple(HandView.from_hand(h) for h in table.player.hands),
        current_hand_index=min(table.current_hand_index, len(table.player.hands) - 1),
        player_total=table.current_hand.value,
        dealer_cards=tuple(dealer.visible_cards()),
        dealer_total=dealer.visible_total(),
        hole_card_hidden=has_cards and not dealer.hole_revealed,
        is_player_turn_active=table.state == GameState.PLAYER_TURN,
        bankroll=table.player.bankroll,
        message=table.message,
        bankroll_delta=table.bankroll_delta,
        cards_remaining=table.shoe.cards_remaining,
        round_number=table.round_number,
        allowed_actions=allowed_actions(table, rules),
    )
