"""Baccarat dealing, third-card rules and bet settlement."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Sequence

from settlement.cards import Card, Shoe
from settlement.errors import InvalidBet
from settlement.money import to_money, validate_amount

logger = logging.getLogger(__name__)

DEFAULT_DECKS = 6
MAX_CARDS_PER_ROUND = 6
BANKER_COMMISSION = Decimal("0.05")
TIE_PAYOUT = 8


class BetSide(str, Enum):
    """Baccarat bet options; also used for the round winner."""

    PLAYER = "PLAYER"
    BANKER = "BANKER"
    TIE = "TIE"

    @classmethod
    def parse(cls, value: "BetSide | str") -> "BetSide":
        """Accept an enum member or its name in any case."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError as exc:
            raise InvalidBet(f"Unknown baccarat bet type: {value!r}") from exc


@dataclass(frozen=True)
class BaccaratRound:
    """Cards and totals of a dealt round, before any bet is settled."""

    player_hand: tuple[Card, ...]
    banker_hand: tuple[Card, ...]
    player_value: int
    banker_value: int
    winner: BetSide
    is_natural: bool
    player_third_card_value: int | None
    banker_drew_third_card: bool


@dataclass(frozen=True)
class Settlement:
    """Outcome of one bet against a round."""

    bet_type: BetSide
    bet_amount: Decimal
    net_profit: Decimal
    commission_paid: Decimal
    payout_multiplier: Decimal
    pushed: bool


@dataclass(frozen=True)
class RoundResult:
    """A settled round, as stored in table history."""

    round_id: int
    player_hand: tuple[Card, ...]
    banker_hand: tuple[Card, ...]
    player_value: int
    banker_value: int
    winner: BetSide
    is_natural: bool
    player_third_card_value: int | None
    banker_drew_third_card: bool
    bet_type: BetSide
    bet_amount: Decimal
    net_profit: Decimal
    commission_paid: Decimal
    payout_multiplier: Decimal
    pushed: bool

    @classmethod
    def combine(
        cls,
        round_id: int,
        dealt: BaccaratRound,
        settlement: Settlement,
    ) -> "RoundResult":
        """Merge a dealt round with its settlement."""
        return cls(
            round_id=round_id,
            player_hand=dealt.player_hand,
            banker_hand=dealt.banker_hand,
            player_value=dealt.player_value,
            banker_value=dealt.banker_value,
            winner=dealt.winner,
            is_natural=dealt.is_natural,
            player_third_card_value=dealt.player_third_card_value,
            banker_drew_third_card=dealt.banker_drew_third_card,
            bet_type=settlement.bet_type,
            bet_amount=settlement.bet_amount,
            net_profit=settlement.net_profit,
            commission_paid=settlement.commission_paid,
            payout_multiplier=settlement.payout_multiplier,
            pushed=settlement.pushed,
        )


def point_value(card: Card) -> int:
    """Return the baccarat point value of a card."""
    return card.rank.baccarat_value


def hand_value(cards: Sequence[Card]) -> int:
    """Return the hand total modulo 10."""
    return sum(point_value(card) for card in cards) % 10


def should_player_draw(player_value: int) -> bool:
    """Player draws a third card on 0-5."""
    return player_value <= 5


def should_banker_draw(banker_value: int, player_third_card_value: int | None) -> bool:
    """
    Apply the banker's third-card table.

    Args:
        banker_value: Banker's two-card total
        player_third_card_value: Point value of the player's third card,
            or None if the player stood

    Returns:
        True if the banker draws
    """
    if banker_value >= 7:
        return False
    if player_third_card_value is None:
        return banker_value <= 5

    p = player_third_card_value
    if banker_value <= 2:
        return True
    if banker_value == 3:
        return p != 8
    if banker_value == 4:
        return 2 <= p <= 7
    if banker_value == 5:
        return 4 <= p <= 7
    # banker_value == 6
    return p in (6, 7)


def deal_round(shoe: Shoe) -> BaccaratRound:
    """
    Deal a complete baccarat round from the shoe.

    Cards are dealt Player, Banker, Player, Banker, then the third-card
    rules decide whether either side draws one more card.

    Raises:
        EmptyShoe: If the shoe runs out mid-round
    """
    player = [shoe.draw()]
    banker = [shoe.draw()]
    player.append(shoe.draw())
    banker.append(shoe.draw())

    player_value = hand_value(player)
    banker_value = hand_value(banker)
    is_natural = player_value >= 8 or banker_value >= 8

    player_third_card_value: int | None = None
    banker_drew_third_card = False

    if not is_natural:
        if should_player_draw(player_value):
            third = shoe.draw()
            player.append(third)
            player_third_card_value = point_value(third)
            player_value = hand_value(player)

        if should_banker_draw(banker_value, player_third_card_value):
            banker.append(shoe.draw())
            banker_drew_third_card = True
            banker_value = hand_value(banker)

    if player_value > banker_value:
        winner = BetSide.PLAYER
    elif banker_value > player_value:
        winner = BetSide.BANKER
    else:
        winner = BetSide.TIE

    logger.debug(
        "Baccarat round: player %d, banker %d, winner %s%s",
        player_value,
        banker_value,
        winner.value,
        " (natural)" if is_natural else "",
    )

    return BaccaratRound(
        player_hand=tuple(player),
        banker_hand=tuple(banker),
        player_value=player_value,
        banker_value=banker_value,
        winner=winner,
        is_natural=is_natural,
        player_third_card_value=player_third_card_value,
        banker_drew_third_card=banker_drew_third_card,
    )


def settle_bet(
    dealt: BaccaratRound,
    amount: Decimal | int | float | str,
    bet_type: BetSide | str,
) -> Settlement:
    """
    Settle one bet against a dealt round.

    Player pays 1:1, Banker 1:1 less 5% commission, Tie 8:1. A Player or
    Banker bet on a tied round is a push and the stake is returned.

    Raises:
        InvalidBet: If the amount is not positive or the bet type is unknown
    """
    stake = validate_amount(amount)
    side = BetSide.parse(bet_type)

    if dealt.winner == side:
        if side == BetSide.PLAYER:
            return Settlement(side, stake, stake, to_money(0), Decimal("1"), False)
        if side == BetSide.BANKER:
            commission = to_money(stake * BANKER_COMMISSION)
            return Settlement(
                side,
                stake,
                to_money(stake - commission),
                commission,
                Decimal("1") - BANKER_COMMISSION,
                False,
            )
        return Settlement(
            side,
            stake,
            to_money(stake * TIE_PAYOUT),
            to_money(0),
            Decimal(TIE_PAYOUT),
            False,
        )

    if dealt.winner == BetSide.TIE:
        return Settlement(side, stake, to_money(0), to_money(0), Decimal("0"), True)

    return Settlement(side, stake, -stake, to_money(0), Decimal("-1"), False)


def play_round(
    shoe: Shoe,
    amount: Decimal | int | float | str,
    bet_type: BetSide | str,
    round_id: int = 0,
) -> RoundResult:
    """
    Validate a bet, deal a round and settle it.

    The bet is validated before any card leaves the shoe.
    """
    stake = validate_amount(amount)
    side = BetSide.parse(bet_type)
    dealt = deal_round(shoe)
    settlement = settle_bet(dealt, stake, side)
    logger.info(
        "Round %d settled: %s bet %s -> net %s%s",
        round_id,
        side.value,
        stake,
        settlement.net_profit,
        " (push)" if settlement.pushed else "",
    )
    return RoundResult.combine(round_id, dealt, settlement)
