"""Blackjack round engine with state machine."""

import logging
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from random import Random
from typing import Callable

from transitions import Machine

from core.cards import Shoe
from core.errors import EmptyShoeError, IllegalActionError, InvalidBetError
from core.game.actions import Action, Intent, PlaceBet
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.snapshot import TableSnapshot, build_snapshot
from core.game.state import GameState, accepts_bet
from core.game.table import Table
from core.hand import Hand, evaluate_hands
from core.rules import RuleSet

logger = logging.getLogger(__name__)

MSG_BOTH_BLACKJACK = "Push! Both you and the dealer have blackjack!"
MSG_DEALER_BLACKJACK = "Dealer has blackjack! You lose."
MSG_PLAYER_BLACKJACK = "You have blackjack! You win!"
MSG_BUST = "Bust! You lose."
MSG_DEALER_BUSTS = "Dealer busts! You win!"
MSG_WIN = "You win!"
MSG_PUSH = "Push!"
MSG_LOSE = "Dealer wins. You lose."
MSG_ABORTED = "Round aborted: the shoe ran out of cards. Wagers refunded."

# Events a session keeps for late subscribers and debugging
EVENT_HISTORY_LIMIT = 500


def blackjack_bonus(bet: int, payout: float) -> int:
    """Winnings on a natural, rounded down to whole units."""
    bonus = Decimal(bet) * Decimal(str(payout))
    return int(bonus.to_integral_value(rounding=ROUND_FLOOR))


@dataclass(frozen=True)
class Transition:
    """Result of applying one intent: the new table and what happened."""

    table: Table
    events: tuple[GameEvent, ...]


class RoundMachine:
    """
    Applies intents to a table using a state machine.

    A RoundMachine mutates the table it is given; ``step`` hands it a clone
    so callers never observe a partially applied intent.
    """

    # State machine states
    STATES = [s.name.lower() for s in GameState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "start_round", "source": ["betting", "resolved"], "dest": "dealing"},
        {"trigger": "open_player_turn", "source": "dealing", "dest": "player_turn"},
        {"trigger": "settle_naturals", "source": "dealing", "dest": "resolved"},
        {"trigger": "next_hand", "source": "player_turn", "dest": "player_turn"},
        {"trigger": "player_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "resolved"},
    ]

    def __init__(self, table: Table, rules: RuleSet) -> None:
        self.table = table
        self.rules = rules
        self.events = EventEmitter()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial=table.state.name.lower(),
            auto_transitions=False,
            model_attribute="_machine_state",
            after_state_change="_sync_table_state",
        )

    @property
    def state(self) -> GameState:
        """Get current round state as enum."""
        return GameState[self._machine_state.upper()]  # type: ignore[attr-defined]

    def _sync_table_state(self) -> None:
        self.table.state = self.state

    def dispatch(self, intent: Intent) -> None:
        """Apply one intent, raising if it is rejected."""
        if isinstance(intent, PlaceBet):
            self._bet(intent.amount)
            return

        if not isinstance(intent, Action):
            raise IllegalActionError(f"Unknown intent: {intent!r}")

        if self.state != GameState.PLAYER_TURN:
            raise IllegalActionError(
                f"Cannot {intent.value} during {self.state}",
                action=intent.value,
            )

        if intent is Action.HIT:
            self._hit()
        elif intent is Action.STAND:
            self._stand()
        elif intent is Action.DOUBLE:
            self._double_down()
        elif intent is Action.SPLIT:
            self._split()

    # Betting and dealing

    def _bet(self, amount: int) -> None:
        if not accepts_bet(self.state):
            raise IllegalActionError(f"Cannot bet during {self.state}", action="bet")

        table = self.table
        table.discards.extend(table.player.clear_hands())
        table.discards.extend(table.dealer.clear())
        table.player.place_bet(amount)

        table.current_hand_index = 0
        table.message = ""
        table.bankroll_delta = 0
        table.round_number += 1

        self.events.emit_new(
            EventType.BET_PLACED,
            amount=amount,
            bankroll=table.player.bankroll,
        )
        self.start_round()
        self._deal_initial_cards()

    def _deal_initial_cards(self) -> None:
        table = self.table

        # Replace, never top up, so every round starts from full composition
        if table.shoe.needs_reshuffle():
            table.shoe = table.shoe.fresh()
            table.discards.clear()
            self.events.emit_new(EventType.SHOE_SHUFFLED, cards=table.shoe.cards_remaining)

        player_hand = table.player.hand(0)

        # Deal: player, dealer, player, dealer (face down)
        self._deal_to(player_hand)
        self._deal_to(table.dealer.hand)
        self._deal_to(player_hand)
        self._deal_to(table.dealer.hand, face_up=False)

        self.events.emit_new(EventType.ROUND_STARTED, round_number=table.round_number)

        player_bj = player_hand.is_blackjack
        dealer_bj = table.dealer.has_blackjack()

        if not (player_bj or dealer_bj):
            self.open_player_turn()
            return

        self._reveal_hole_card()
        if dealer_bj:
            self.events.emit_new(EventType.DEALER_BLACKJACK)
        if player_bj:
            self.events.emit_new(EventType.PLAYER_BLACKJACK)

        self.settle_naturals()

        bet = player_hand.bet
        if player_bj and dealer_bj:
            self._settle([(bet, MSG_BOTH_BLACKJACK)])
        elif dealer_bj:
            self._settle([(0, MSG_DEALER_BLACKJACK)])
        else:
            self._settle([(bet + blackjack_bonus(bet, self.rules.blackjack_payout), MSG_PLAYER_BLACKJACK)])

    def _deal_to(self, hand: Hand, face_up: bool = True) -> None:
        card = self.table.shoe.deal()
        hand.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card) if face_up else "??",
            hand="dealer" if hand is self.table.dealer.hand else "player",
        )

    # Player turn

    def _hit(self) -> None:
        table = self.table
        hand = table.current_hand
        self._deal_to(hand)
        self.events.emit_new(
            EventType.PLAYER_HIT,
            hand_index=table.current_hand_index,
            hand_value=hand.value,
        )

        if hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_index=table.current_hand_index)
            self._advance()

    def _stand(self) -> None:
        self.events.emit_new(
            EventType.PLAYER_STAND,
            hand_index=self.table.current_hand_index,
            hand_value=self.table.current_hand.value,
        )
        self._advance()

    def _double_down(self) -> None:
        table = self.table
        index = table.current_hand_index
        hand = table.current_hand

        if hand.is_split_hand and not self.rules.double_after_split:
            raise IllegalActionError("Cannot double after splitting", action="double")

        card = table.player.double_down(table.shoe, index)
        self.events.emit_new(
            EventType.PLAYER_DOUBLE,
            hand_index=index,
            card=str(card),
            hand_value=hand.value,
            new_bet=hand.bet,
        )
        if hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_index=index)

        # A doubled hand stands whatever its total
        self._advance()

    def _split(self) -> None:
        table = self.table
        index = table.current_hand_index

        first, second = table.player.split(table.shoe, index, max_hands=self.rules.max_hands)
        self.events.emit_new(
            EventType.PLAYER_SPLIT,
            hand_index=index,
            hand1_value=first.value,
            hand2_value=second.value,
        )

        # Split aces get one card each and stand
        if first.cards[0].is_ace:
            self._advance(steps=2)
        else:
            self.next_hand()

    def _advance(self, steps: int = 1) -> None:
        """Move to the next hand, or to the dealer once every hand is done."""
        table = self.table
        table.current_hand_index += steps

        if table.current_hand_index < len(table.player.hands):
            self.next_hand()
            return

        self.player_done()
        self._play_dealer()

    # Dealer turn and resolution

    def _reveal_hole_card(self) -> None:
        dealer = self.table.dealer
        dealer.reveal_hole_card()
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            card=str(dealer.cards[1]),
            hand_value=dealer.total,
        )

    def _play_dealer(self) -> None:
        dealer = self.table.dealer
        self._reveal_hole_card()

        for card in dealer.auto_play(self.table.shoe, self.rules.dealer_hits_soft_17):
            self.events.emit_new(EventType.DEALER_HITS, card=str(card), hand_value=dealer.total)

        if dealer.hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=dealer.total)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=dealer.total)

        self.dealer_done()
        self._resolve_round()

    def _resolve_round(self) -> None:
        """Pay each hand against the dealer's final hand."""
        dealer_hand = self.table.dealer.hand
        results: list[tuple[int, str]] = []

        for hand in self.table.player.hands:
            if hand.is_busted:
                returned, message = 0, MSG_BUST
            else:
                outcome = evaluate_hands(hand, dealer_hand)
                if outcome == 1:
                    returned = hand.bet * 2
                    message = MSG_DEALER_BUSTS if dealer_hand.is_busted else MSG_WIN
                elif outcome == 0:
                    returned, message = hand.bet, MSG_PUSH
                else:
                    returned, message = 0, MSG_LOSE
            results.append((returned, message))

        self._settle(results)

    def _settle(self, results: list[tuple[int, str]]) -> None:
        """
        Credit payouts and record the outcome.

        Args:
            results: (amount returned to the bankroll, message) per hand
        """
        table = self.table
        hands = table.player.hands

        for i, (returned, _) in enumerate(results):
            bet = hands[i].bet
            if returned > bet:
                self.events.emit_new(EventType.PLAYER_WINS, hand_index=i, amount=returned - bet)
            elif returned == bet:
                self.events.emit_new(EventType.PUSH, hand_index=i)
            else:
                self.events.emit_new(EventType.PLAYER_LOSES, hand_index=i, amount=bet)
            self.events.emit_new(EventType.BET_RESOLVED, hand_index=i, bet=bet, returned=returned)

        total_returned = sum(returned for returned, _ in results)
        table.player.bankroll += total_returned
        table.bankroll_delta = total_returned - table.player.total_wagered

        if len(results) == 1:
            table.message = results[0][1]
        else:
            table.message = " ".join(
                f"Hand {i + 1}: {message}" for i, (_, message) in enumerate(results)
            )

        self.events.emit_new(
            EventType.ROUND_ENDED,
            result=table.bankroll_delta,
            bankroll=table.player.bankroll,
            message=table.message,
        )


def step(table: Table, intent: Intent, rules: RuleSet) -> Transition:
    """
    Apply ``intent`` to a copy of ``table``.

    The input table is never modified; a rejected intent raises and
    leaves nothing behind.

    Raises:
        InvalidBetError: bet outside [min_bet, bankroll]
        IllegalActionError: intent not valid in the table's state
        EmptyShoeError: the shoe ran out mid-round
    """
    draft = table.clone()
    round_machine = RoundMachine(draft, rules)
    round_machine.dispatch(intent)
    return Transition(table=draft, events=tuple(round_machine.events.history))


def _log_event(event: GameEvent) -> None:
    logger.debug("%s", event)


class BlackjackGame:
    """
    A single player's blackjack session.

    This is the core game logic, completely UI-agnostic.
    Communication happens through events and snapshots only.
    """

    def __init__(
        self,
        rules: RuleSet | None = None,
        initial_bankroll: int = 1000,
        rng: Random | None = None,
        shoe: Shoe | None = None,
    ) -> None:
        """
        Initialize a new blackjack session.

        Args:
            rules: Table rules (uses defaults if not provided)
            initial_bankroll: Starting bankroll
            rng: Random number generator for reproducible games
            shoe: Pre-built shoe, e.g. a stacked one for replaying a deal
        """
        self.rules = rules or RuleSet()
        self.table = Table.new(self.rules, initial_bankroll, rng=rng, shoe=shoe)
        self.events = EventEmitter(max_history=EVENT_HISTORY_LIMIT)
        self.events.subscribe(_log_event)

    @property
    def state(self) -> GameState:
        return self.table.state

    @property
    def bankroll(self) -> int:
        return self.table.player.bankroll

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def snapshot(self) -> TableSnapshot:
        return build_snapshot(self.table, self.rules)

    def submit_bet(self, amount: int) -> TableSnapshot:
        """Place a bet and deal a new round."""
        return self.apply(PlaceBet(amount))

    def player_action(self, action: Action | str) -> TableSnapshot:
        """Play ``action`` on the current hand."""
        try:
            parsed = Action.parse(action)
        except IllegalActionError as exc:
            self._reject(EventType.INVALID_ACTION, exc)
            raise
        return self.apply(parsed)

    def apply(self, intent: Intent) -> TableSnapshot:
        """
        Apply an intent and publish its events.

        Rejected intents leave the session untouched and are re-raised.
        """
        try:
            transition = step(self.table, intent, self.rules)
        except InvalidBetError as exc:
            self._reject(EventType.INVALID_BET, exc)
            raise
        except IllegalActionError as exc:
            self._reject(EventType.INVALID_ACTION, exc)
            raise
        except EmptyShoeError:
            logger.exception("Shoe exhausted in round %d", self.table.round_number)
            self._abort_round()
            raise

        self.table = transition.table
        for event in transition.events:
            self.events.emit(event)
        return self.snapshot()

    def _reject(self, event_type: EventType, exc: Exception) -> None:
        logger.info("Rejected intent in %s: %s", self.state, exc)
        self.events.emit_new(event_type, message=str(exc), state=self.state.name)

    def _abort_round(self) -> None:
        """Refund an unfinished round and start over with a fresh shoe."""
        table = self.table.clone()
        in_progress = table.state in (GameState.DEALING, GameState.PLAYER_TURN, GameState.DEALER_TURN)
        if in_progress:
            table.player.bankroll += table.player.total_wagered

        table.player.clear_hands()
        table.dealer.clear()
        table.discards.clear()
        table.shoe = table.shoe.fresh()
        table.state = GameState.BETTING
        table.current_hand_index = 0
        table.bankroll_delta = 0
        table.message = MSG_ABORTED

        self.table = table
        self.events.emit_new(
            EventType.ROUND_ABORTED,
            refunded=in_progress,
            bankroll=table.player.bankroll,
        )
