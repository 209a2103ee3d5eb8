"""Roulette spin resolution against the bet registry."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from random import Random
from typing import Sequence

from settlement.errors import InvalidBet
from settlement.money import to_money, validate_amount
from settlement.roulette.registry import BetConfig, bet_id_for, get_registry
from settlement.roulette.wheel import (
    Color,
    Variant,
    color_of,
    pocket_label,
    spin,
    validate_number,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bet:
    """
    A roulette bet as placed by the player.

    ``bet_type`` is either a category tag with ``selection`` (``"straight"``,
    ``(17,)``) or a registry bet id with no selection (``"split_17_20"``).
    """

    bet_type: str
    amount: Decimal | int | float | str
    selection: tuple[int, ...] = ()


@dataclass(frozen=True)
class BetResult:
    """Settlement of a single bet."""

    bet: Bet
    bet_id: str
    stake: Decimal
    won: bool
    payout: Decimal


@dataclass(frozen=True)
class SpinResult:
    """All bets of one spin, settled."""

    winning_number: int
    label: str
    color: Color
    bet_results: tuple[BetResult, ...]
    total_staked: Decimal
    total_payout: Decimal
    net_profit: Decimal
    round_id: int = 0


def _lookup(bet: Bet, variant: Variant) -> BetConfig:
    bet_id = bet_id_for(bet.bet_type, bet.selection, variant)
    config = get_registry(variant).get(bet_id)
    if config is None:
        raise InvalidBet(f"Unknown bet: {bet_id!r}")
    return config


def resolve_spin(
    winning_number: int,
    bets: Sequence[Bet],
    variant: Variant = Variant.EUROPEAN,
    round_id: int = 0,
) -> SpinResult:
    """
    Settle every bet against the winning number.

    A winning bet pays ``amount * (payout + 1)``, stake included; a losing
    bet pays nothing since its stake was taken when it was placed. All bets
    are validated before any is settled.

    Args:
        winning_number: Pocket that came up (37 is "00")
        bets: Bets on the layout
        variant: Wheel the bets were placed on

    Raises:
        UnknownSelection: If the number or a selection is off the layout
        InvalidBet: If there are no bets, an amount is not positive or a
            bet id is not in the registry
    """
    validate_number(winning_number, variant)
    if not bets:
        raise InvalidBet("Must place at least one bet")

    resolved = [(bet, validate_amount(bet.amount), _lookup(bet, variant)) for bet in bets]

    results = []
    for bet, stake, config in resolved:
        won = config.covers(winning_number)
        payout = to_money(stake * (config.payout + 1)) if won else to_money(0)
        results.append(BetResult(bet, config.bet_id, stake, won, payout))

    total_staked = to_money(sum((r.stake for r in results), Decimal("0")))
    total_payout = to_money(sum((r.payout for r in results), Decimal("0")))

    logger.info(
        "Spin %s: %d bets, staked %s, paid %s",
        pocket_label(winning_number),
        len(results),
        total_staked,
        total_payout,
    )

    return SpinResult(
        winning_number=winning_number,
        label=pocket_label(winning_number),
        color=color_of(winning_number),
        bet_results=tuple(results),
        total_staked=total_staked,
        total_payout=total_payout,
        net_profit=total_payout - total_staked,
        round_id=round_id,
    )


def validate_bets(bets: Sequence[Bet], variant: Variant = Variant.EUROPEAN) -> list[BetConfig]:
    """Check amounts and look up every bet without spinning."""
    if not bets:
        raise InvalidBet("Must place at least one bet")
    configs = []
    for bet in bets:
        validate_amount(bet.amount)
        configs.append(_lookup(bet, variant))
    return configs


def play_spin(
    bets: Sequence[Bet],
    rng: Random,
    variant: Variant = Variant.EUROPEAN,
    round_id: int = 0,
) -> SpinResult:
    """Validate the bets, spin the wheel and settle."""
    validate_bets(bets, variant)
    return resolve_spin(spin(rng, variant), bets, variant, round_id=round_id)
