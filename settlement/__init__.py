"""Casino settlement engine - Baccarat, Roulette and Blackjack, UI-agnostic."""

from settlement.baccarat import (
    BaccaratRound,
    BetSide,
    RoundResult,
    Settlement,
    deal_round as deal_baccarat_round,
    settle_bet as settle_baccarat_bet,
)
from settlement.cards import Card, Rank, Shoe, Suit, build_shoe
from settlement.errors import (
    EmptyShoe,
    InvalidAction,
    InvalidBet,
    SettlementError,
    UnknownSelection,
)
from settlement.hand import Hand, Outcome, resolve_outcome as resolve_blackjack_outcome
from settlement.roulette import (
    Bet,
    BetConfig,
    SpinResult,
    Variant,
    get_bet_config,
    resolve_spin as resolve_roulette_spin,
)

__all__ = [
    "BaccaratRound",
    "Bet",
    "BetConfig",
    "BetSide",
    "Card",
    "EmptyShoe",
    "Hand",
    "InvalidAction",
    "InvalidBet",
    "Outcome",
    "Rank",
    "RoundResult",
    "Settlement",
    "SettlementError",
    "Shoe",
    "SpinResult",
    "Suit",
    "UnknownSelection",
    "Variant",
    "build_shoe",
    "deal_baccarat_round",
    "get_bet_config",
    "resolve_blackjack_outcome",
    "resolve_roulette_spin",
    "settle_baccarat_bet",
]
