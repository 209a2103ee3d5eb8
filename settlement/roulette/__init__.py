"""Roulette wheel, bet registry and spin resolution."""

from settlement.roulette.wheel import Color, Variant, DOUBLE_ZERO, color_of, spin
from settlement.roulette.registry import (
    BetCategory,
    BetConfig,
    BetRegistry,
    bet_id_for,
    bets_covering,
    get_bet_config,
    get_registry,
)
from settlement.roulette.resolver import (
    Bet,
    BetResult,
    SpinResult,
    play_spin,
    resolve_spin,
    validate_bets,
)

__all__ = [
    "Bet",
    "BetCategory",
    "BetConfig",
    "BetRegistry",
    "BetResult",
    "Color",
    "DOUBLE_ZERO",
    "SpinResult",
    "Variant",
    "bet_id_for",
    "bets_covering",
    "color_of",
    "get_bet_config",
    "get_registry",
    "play_spin",
    "resolve_spin",
    "spin",
    "validate_bets",
]
