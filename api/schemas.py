"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Literal

from core.cards import Card
from core.game import HandView, TableSnapshot


class BetRequest(BaseModel):
    """Request to place a bet."""

    amount: int = Field(..., description="Bet amount; must lie between the table minimum and the bankroll")


class ActionRequest(BaseModel):
    """Request for player action."""

    action: Literal["hit", "stand", "double", "split"]


class SessionResponse(BaseModel):
    """A newly created session."""

    session_id: str


class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    rank: str
    suit: str
    value: int

    @classmethod
    def from_card(cls, card: Card) -> "CardResponse":
        return cls(rank=str(card.rank), suit=str(card.suit), value=card.value)


class HandResponse(BaseModel):
    """Player hand representation."""

    cards: list[CardResponse]
    value: int
    bet: int
    is_soft: bool
    is_blackjack: bool
    is_busted: bool
    is_doubled: bool
    is_split_hand: bool

    @classmethod
    def from_view(cls, view: HandView) -> "HandResponse":
        return cls(
            cards=[CardResponse.from_card(c) for c in view.cards],
            value=view.total,
            bet=view.bet,
            is_soft=view.is_soft,
            is_blackjack=view.is_blackjack,
            is_busted=view.is_busted,
            is_doubled=view.is_doubled,
            is_split_hand=view.is_split_hand,
        )


class GameStateResponse(BaseModel):
    """Current table snapshot."""

    state: str
    player_hands: list[HandResponse]
    current_hand_index: int
    player_total: int
    dealer_cards: list[CardResponse]
    dealer_total: int
    hole_card_hidden: bool
    is_player_turn_active: bool
    bankroll: int
    message: str
    bankroll_delta: int
    cards_remaining: int
    round_number: int
    allowed_actions: list[str]

    @classmethod
    def from_snapshot(cls, snapshot: TableSnapshot) -> "GameStateResponse":
        return cls(
            state=snapshot.state.name,
            player_hands=[HandResponse.from_view(h) for h in snapshot.player_hands],
            current_hand_index=snapshot.current_hand_index,
            player_total=snapshot.player_total,
            dealer_cards=[CardResponse.from_card(c) for c in snapshot.dealer_cards],
            dealer_total=snapshot.dealer_total,
            hole_card_hidden=snapshot.hole_card_hidden,
            is_player_turn_active=snapshot.is_player_turn_active,
            bankroll=snapshot.bankroll,
            message=snapshot.message,
            bankroll_delta=snapshot.bankroll_delta,
            cards_remaining=snapshot.cards_remaining,
            round_number=snapshot.round_number,
            allowed_actions=[a.value for a in snapshot.allowed_actions],
        )
