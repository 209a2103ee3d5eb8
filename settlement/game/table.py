"""Table session: the explicit per-player context of shoes, RNG and history."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from random import Random
from typing import Sequence, Union

from settlement.baccarat import (
    DEFAULT_DECKS,
    MAX_CARDS_PER_ROUND,
    BetSide,
    RoundResult,
    play_round,
)
from settlement.cards import Shoe, build_shoe
from settlement.errors import InvalidAction
from settlement.game.blackjack import BLACKJACK_PAYOUT, BlackjackResult, BlackjackRound
from settlement.game.events import EventEmitter, EventType
from settlement.game.state import RoundPhase
from settlement.money import validate_amount
from settlement.rng import secure_rng
from settlement.roulette.resolver import Bet, SpinResult, resolve_spin, validate_bets
from settlement.roulette.wheel import Variant, spin

logger = logging.getLogger(__name__)

HistoryEntry = Union[RoundResult, SpinResult, BlackjackResult]

# Enough for one long single-deck blackjack round
BLACKJACK_MIN_CARDS = 15


@dataclass(frozen=True)
class TableRules:
    """Per-table dealing rules."""

    baccarat_decks: int = DEFAULT_DECKS
    blackjack_decks: int = 1
    baccarat_reshuffle_threshold: int = MAX_CARDS_PER_ROUND
    blackjack_reshuffle_threshold: int = BLACKJACK_MIN_CARDS
    fresh_shoe_per_round: bool = True
    variant: Variant = Variant.EUROPEAN
    blackjack_payout: Decimal = BLACKJACK_PAYOUT


class TableSession:
    """
    Everything one player's rounds need, passed explicitly.

    A session owns its RNG and shoes; two sessions never share mutable
    state, so independent sessions can be played concurrently. Rounds
    within one session are played one at a time.
    """

    def __init__(
        self,
        rules: TableRules | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Build the shoes for a new table.

        Args:
            rules: Dealing rules (defaults if not provided)
            rng: Randomness source for shuffles and spins (OS entropy if omitted)
        """
        self.rules = rules or TableRules()
        self.rng = rng or secure_rng()
        self.events = EventEmitter()

        self.baccarat_shoe = build_shoe(
            self.rules.baccarat_decks,
            rng=self.rng,
            reshuffle_threshold=self.rules.baccarat_reshuffle_threshold,
        )
        self.blackjack_shoe = build_shoe(
            self.rules.blackjack_decks,
            rng=self.rng,
            reshuffle_threshold=self.rules.blackjack_reshuffle_threshold,
        )

        self._round_counter = 0
        self._history: list[HistoryEntry] = []
        self.blackjack: BlackjackRound | None = None

    @property
    def rounds_played(self) -> int:
        """Number of settled rounds."""
        return len(self._history)

    @property
    def history(self) -> tuple[HistoryEntry, ...]:
        """Settled rounds, oldest first."""
        return tuple(self._history)

    def _next_round_id(self) -> int:
        self._round_counter += 1
        return self._round_counter

    def _record(self, entry: HistoryEntry) -> None:
        self._history.append(entry)

    def _prepare_shoe(self, shoe: Shoe, needed: int, round_id: int) -> None:
        if self.rules.fresh_shoe_per_round:
            shoe.reshuffle()
            shuffled = True
        else:
            shuffled = shoe.ensure_cards(needed)
        if shuffled:
            logger.debug("Round %d: fresh %d-deck shoe", round_id, shoe.num_decks)
            self.events.emit_new(
                EventType.SHOE_SHUFFLED, round_id, num_decks=shoe.num_decks
            )

    def play_baccarat(
        self,
        amount: Decimal | int | float | str,
        bet_type: BetSide | str,
    ) -> RoundResult:
        """
        Deal and settle one baccarat round.

        Raises:
            InvalidBet: If the amount or bet type is invalid
        """
        stake = validate_amount(amount)
        side = BetSide.parse(bet_type)

        round_id = self._next_round_id()
        self._prepare_shoe(self.baccarat_shoe, MAX_CARDS_PER_ROUND, round_id)
        self.events.emit_new(EventType.ROUND_STARTED, round_id, game="baccarat")
        self.events.emit_new(EventType.BET_PLACED, round_id, amount=str(stake), bet_type=side.value)

        result = play_round(self.baccarat_shoe, stake, side, round_id=round_id)

        for card in result.player_hand:
            self.events.emit_new(EventType.CARD_DEALT, round_id, card=str(card), hand="player")
        for card in result.banker_hand:
            self.events.emit_new(EventType.CARD_DEALT, round_id, card=str(card), hand="banker")
        self.events.emit_new(
            EventType.BET_SETTLED,
            round_id,
            winner=result.winner.value,
            net_profit=str(result.net_profit),
            pushed=result.pushed,
        )
        self.events.emit_new(EventType.ROUND_ENDED, round_id, game="baccarat")

        self._record(result)
        return result

    def spin_roulette(self, bets: Sequence[Bet]) -> SpinResult:
        """
        Spin the wheel for a set of bets and settle them.

        Raises:
            InvalidBet: If a bet is malformed or unknown
            UnknownSelection: If a selection is off the layout
        """
        validate_bets(bets, self.rules.variant)

        round_id = self._next_round_id()
        self.events.emit_new(EventType.ROUND_STARTED, round_id, game="roulette")
        for bet in bets:
            self.events.emit_new(
                EventType.BET_PLACED,
                round_id,
                bet_type=bet.bet_type,
                selection=list(bet.selection),
                amount=str(bet.amount),
            )

        winning_number = spin(self.rng, self.rules.variant)
        self.events.emit_new(EventType.WHEEL_SPUN, round_id, winning_number=winning_number)

        result = resolve_spin(winning_number, bets, self.rules.variant, round_id=round_id)
        self.events.emit_new(
            EventType.BET_SETTLED,
            round_id,
            total_payout=str(result.total_payout),
        )
        self.events.emit_new(EventType.ROUND_ENDED, round_id, game="roulette")

        self._record(result)
        return result

    def start_blackjack(self, amount: Decimal | int | float | str) -> BlackjackRound:
        """
        Start a blackjack round with a bet.

        Raises:
            InvalidAction: If a blackjack round is still in progress
            InvalidBet: If the amount is not positive
        """
        if self.blackjack is not None and self.blackjack.phase != RoundPhase.ROUND_COMPLETE:
            raise InvalidAction("Finish the current blackjack round first")
        validate_amount(amount)

        round_id = self._next_round_id()
        self._prepare_shoe(self.blackjack_shoe, BLACKJACK_MIN_CARDS, round_id)
        self.blackjack = BlackjackRound(
            self.blackjack_shoe,
            round_id=round_id,
            events=self.events,
            blackjack_payout=self.rules.blackjack_payout,
            on_complete=self._record,
        )
        return self.blackjack.start(amount)

    def _active_blackjack(self) -> BlackjackRound:
        if self.blackjack is None or self.blackjack.phase != RoundPhase.PLAYER_TURN:
            raise InvalidAction("No blackjack hand is waiting for a decision")
        return self.blackjack

    def blackjack_hit(self) -> BlackjackRound:
        """Hit the active blackjack hand."""
        round_ = self._active_blackjack()
        round_.hit()
        return round_

    def blackjack_stand(self) -> BlackjackRound:
        """Stand on the active blackjack hand."""
        round_ = self._active_blackjack()
        round_.stand()
        return round_
