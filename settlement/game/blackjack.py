"""Single-bet blackjack round driven by a state machine."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable

from transitions import Machine

from settlement.cards import Card, Shoe
from settlement.errors import InvalidAction
from settlement.game.events import EventEmitter, EventType
from settlement.game.state import RoundPhase
from settlement.hand import Hand, Outcome, dealer_should_hit, resolve_outcome
from settlement.money import to_money, validate_amount

logger = logging.getLogger(__name__)

BLACKJACK_PAYOUT = Decimal("1.5")


@dataclass(frozen=True)
class BlackjackResult:
    """A settled blackjack round."""

    round_id: int
    player_hand: tuple[Card, ...]
    dealer_hand: tuple[Card, ...]
    player_value: int
    dealer_value: int
    outcome: Outcome
    bet_amount: Decimal
    payout: Decimal
    net_profit: Decimal


def round_payout(
    outcome: Outcome,
    amount: Decimal,
    blackjack_payout: Decimal = BLACKJACK_PAYOUT,
) -> Decimal:
    """
    Total returned to the player for a settled bet, stake included.

    Blackjack pays 3:2 by default, a win 1:1, a push returns the stake.
    """
    if outcome == Outcome.PLAYER_BLACKJACK:
        return to_money(amount + amount * blackjack_payout)
    if outcome.player_won:
        return to_money(amount * 2)
    if outcome.is_push:
        return to_money(amount)
    return to_money(0)


class BlackjackRound:
    """
    One blackjack hand against the dealer.

    Dealing order is player, dealer up card, player, dealer hole card. The
    hole card stays hidden until the dealer's turn. A two-card 21 for the
    player settles immediately. The dealer hits below 17.
    """

    STATES = [p.name.lower() for p in RoundPhase]

    TRANSITIONS = [
        {"trigger": "deal", "source": "waiting_for_bet", "dest": "player_turn"},
        {"trigger": "settle_natural", "source": "waiting_for_bet", "dest": "round_complete"},
        {"trigger": "player_busts", "source": "player_turn", "dest": "round_complete"},
        {"trigger": "player_stands", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "round_complete"},
    ]

    def __init__(
        self,
        shoe: Shoe,
        round_id: int = 0,
        events: EventEmitter | None = None,
        blackjack_payout: Decimal = BLACKJACK_PAYOUT,
        on_complete: Callable[[BlackjackResult], None] | None = None,
    ) -> None:
        """
        Set up a round waiting for its bet.

        Args:
            shoe: Shoe owned by the table for this round
            round_id: Table round number
            events: Emitter receiving the round's events
            blackjack_payout: Winnings multiplier for a natural
            on_complete: Called once with the result when the round settles
        """
        self.shoe = shoe
        self.round_id = round_id
        self.events = events or EventEmitter()
        self.blackjack_payout = blackjack_payout
        self._on_complete = on_complete

        self.player_hand = Hand()
        self.dealer_hand = Hand()
        self.bet_amount = Decimal("0")
        self.hole_card_revealed = False
        self.result: BlackjackResult | None = None

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="waiting_for_bet",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def phase(self) -> RoundPhase:
        """Get current round phase as enum."""
        return RoundPhase[self._machine_state.upper()]  # type: ignore[attr-defined]

    @property
    def dealer_visible_cards(self) -> list[Card]:
        """Dealer cards the player may see."""
        if self.hole_card_revealed:
            return list(self.dealer_hand.cards)
        return self.dealer_hand.cards[:1]

    @property
    def can_hit(self) -> bool:
        """Check if hitting is allowed."""
        return self.phase == RoundPhase.PLAYER_TURN

    @property
    def can_stand(self) -> bool:
        """Check if standing is allowed."""
        return self.phase == RoundPhase.PLAYER_TURN

    def _require(self, phase: RoundPhase, action: str) -> None:
        if self.phase != phase:
            raise InvalidAction(f"Cannot {action} during {self.phase}")

    def _draw(self) -> Card:
        if not self.shoe.cards_remaining:
            self.shoe.reshuffle()
            self.events.emit_new(EventType.SHOE_SHUFFLED, self.round_id, mid_round=True)
        return self.shoe.draw()

    def _deal_to(self, hand: Hand, face_up: bool = True) -> Card:
        card = self._draw()
        hand.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            self.round_id,
            card=str(card) if face_up else "??",
            hand="dealer" if hand is self.dealer_hand else "player",
        )
        return card

    def _reveal_hole_card(self) -> None:
        if self.hole_card_revealed:
            return
        self.hole_card_revealed = True
        if len(self.dealer_hand) >= 2:
            self.events.emit_new(
                EventType.DEALER_REVEALS,
                self.round_id,
                card=str(self.dealer_hand.cards[1]),
                hand_value=self.dealer_hand.value,
            )

    def start(self, amount: Decimal | int | float | str) -> "BlackjackRound":
        """
        Take the bet and deal the opening cards.

        Raises:
            InvalidBet: If the amount is not positive
            InvalidAction: If the round has already started
        """
        self._require(RoundPhase.WAITING_FOR_BET, "bet")
        self.bet_amount = validate_amount(amount)
        self.events.emit_new(EventType.BET_PLACED, self.round_id, amount=str(self.bet_amount))

        self._deal_to(self.player_hand)
        self._deal_to(self.dealer_hand)
        self._deal_to(self.player_hand)
        self._deal_to(self.dealer_hand, face_up=False)
        self.events.emit_new(EventType.ROUND_STARTED, self.round_id, game="blackjack")

        if self.player_hand.is_blackjack:
            self.events.emit_new(EventType.PLAYER_BLACKJACK, self.round_id)
            self._reveal_hole_card()
            outcome = Outcome.PUSH if self.dealer_hand.is_blackjack else Outcome.PLAYER_BLACKJACK
            self.settle_natural()
            self._settle(outcome)
        else:
            self.deal()
        return self

    def hit(self) -> Card:
        """
        Draw a card to the player's hand; a bust ends the round.

        Raises:
            InvalidAction: Outside the player's turn
        """
        self._require(RoundPhase.PLAYER_TURN, "hit")
        card = self._deal_to(self.player_hand)
        self.events.emit_new(EventType.PLAYER_HIT, self.round_id, hand_value=self.player_hand.value)

        if self.player_hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, self.round_id)
            self._reveal_hole_card()
            self.player_busts()
            self._settle(Outcome.PLAYER_BUST)
        return card

    def stand(self) -> BlackjackResult:
        """
        End the player's turn and play out the dealer's hand.

        Raises:
            InvalidAction: Outside the player's turn
        """
        self._require(RoundPhase.PLAYER_TURN, "stand")
        self.events.emit_new(EventType.PLAYER_STAND, self.round_id, hand_value=self.player_hand.value)
        self.player_stands()

        self._reveal_hole_card()
        while dealer_should_hit(self.dealer_hand):
            self._deal_to(self.dealer_hand)
            self.events.emit_new(EventType.DEALER_HITS, self.round_id, hand_value=self.dealer_hand.value)

        if self.dealer_hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, self.round_id)
        else:
            self.events.emit_new(
                EventType.DEALER_STANDS, self.round_id, hand_value=self.dealer_hand.value
            )

        self.dealer_done()
        return self._settle(resolve_outcome(self.player_hand, self.dealer_hand))

    def _settle(self, outcome: Outcome) -> BlackjackResult:
        payout = round_payout(outcome, self.bet_amount, self.blackjack_payout)
        self.result = BlackjackResult(
            round_id=self.round_id,
            player_hand=tuple(self.player_hand.cards),
            dealer_hand=tuple(self.dealer_hand.cards),
            player_value=self.player_hand.value,
            dealer_value=self.dealer_hand.value,
            outcome=outcome,
            bet_amount=self.bet_amount,
            payout=payout,
            net_profit=payout - self.bet_amount,
        )
        self.events.emit_new(
            EventType.BET_SETTLED,
            self.round_id,
            outcome=outcome.value,
            payout=str(payout),
        )
        self.events.emit_new(EventType.ROUND_ENDED, self.round_id, game="blackjack")
        logger.info(
            "Blackjack round %d: %s, bet %s -> payout %s",
            self.round_id,
            outcome.value,
            self.bet_amount,
            payout,
        )
        if self._on_complete is not None:
            self._on_complete(self.result)
        return self.result
