"""Pydantic schemas for API requests and responses."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from settlement.baccarat import RoundResult
from settlement.cards import Card
from settlement.game.blackjack import BlackjackRound, BlackjackResult
from settlement.roulette.registry import BetConfig
from settlement.roulette.resolver import SpinResult


# Session schemas
class SessionResponse(BaseModel):
    """Session identity and balance."""

    session_id: str
    balance: Decimal
    rounds_played: int


class HistoryEntryResponse(BaseModel):
    """One settled round in the session history."""

    round_id: int
    game: Literal["baccarat", "roulette", "blackjack"]
    staked: Decimal
    net_profit: Decimal


class HistoryResponse(BaseModel):
    """Settled rounds, oldest first."""

    rounds: list[HistoryEntryResponse]


# Shared
class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    rank: str
    suit: str
    token: str


# Baccarat schemas
class BaccaratBetRequest(BaseModel):
    """Request to play one baccarat round."""

    amount: Decimal = Field(..., gt=0, description="Bet amount")
    bet_type: Literal["player", "banker", "tie"]

    @field_validator("bet_type", mode="before")
    @classmethod
    def _lowercase_bet_type(cls, value: object) -> object:
        """Accept sides in any case, as the engine does."""
        return value.lower() if isinstance(value, str) else value


class BaccaratRoundResponse(BaseModel):
    """A dealt and settled baccarat round."""

    round_id: int
    player_hand: list[CardResponse]
    banker_hand: list[CardResponse]
    player_value: int
    banker_value: int
    winner: str
    is_natural: bool
    bet_type: str
    bet_amount: Decimal
    net_profit: Decimal
    commission_paid: Decimal
    payout_multiplier: Decimal
    pushed: bool
    balance: Decimal


# Roulette schemas
class RouletteBetRequest(BaseModel):
    """A single roulette bet."""

    bet_type: str = Field(..., min_length=1, description="Category tag or registry bet id")
    amount: Decimal = Field(..., gt=0)
    selection: list[int] = Field(default_factory=list)


class SpinRequest(BaseModel):
    """Request to spin the wheel."""

    bets: list[RouletteBetRequest] = Field(..., min_length=1)


class BetResultResponse(BaseModel):
    """Settlement of one roulette bet."""

    bet_id: str
    stake: Decimal
    won: bool
    payout: Decimal


class SpinResponse(BaseModel):
    """A spin and its settled bets."""

    round_id: int
    winning_number: int
    label: str
    color: str
    bets: list[BetResultResponse]
    total_staked: Decimal
    total_payout: Decimal
    net_profit: Decimal
    balance: Decimal


class BetConfigResponse(BaseModel):
    """A registry entry."""

    bet_id: str
    category: str
    numbers: list[int]
    payout: int
    label: str


class BetRegistryResponse(BaseModel):
    """The full registry for a wheel variant."""

    variant: str
    count: int
    bets: list[BetConfigResponse]


# Blackjack schemas
class BlackjackBetRequest(BaseModel):
    """Request to start a blackjack round."""

    amount: Decimal = Field(..., gt=0, description="Bet amount")


class ActionRequest(BaseModel):
    """Request for player action."""

    action: Literal["hit", "stand"]


class BlackjackResultResponse(BaseModel):
    """Settlement of a finished blackjack round."""

    outcome: str
    payout: Decimal
    net_profit: Decimal


class BlackjackStateResponse(BaseModel):
    """Current blackjack round."""

    round_id: int
    phase: str
    player_hand: list[CardResponse]
    player_value: int
    dealer_hand: list[CardResponse]
    dealer_value: int | None
    bet_amount: Decimal
    can_hit: bool
    can_stand: bool
    result: BlackjackResultResponse | None = None
    balance: Decimal


def card_response(card: Card) -> CardResponse:
    """Convert a Card to CardResponse."""
    return CardResponse(rank=str(card.rank), suit=card.suit.slug, token=card.token)


def baccarat_response(result: RoundResult, balance: Decimal) -> BaccaratRoundResponse:
    """Convert a settled baccarat round to a response."""
    return BaccaratRoundResponse(
        round_id=result.round_id,
        player_hand=[card_response(c) for c in result.player_hand],
        banker_hand=[card_response(c) for c in result.banker_hand],
        player_value=result.player_value,
        banker_value=result.banker_value,
        winner=result.winner.value,
        is_natural=result.is_natural,
        bet_type=result.bet_type.value,
        bet_amount=result.bet_amount,
        net_profit=result.net_profit,
        commission_paid=result.commission_paid,
        payout_multiplier=result.payout_multiplier,
        pushed=result.pushed,
        balance=balance,
    )


def spin_response(result: SpinResult, balance: Decimal) -> SpinResponse:
    """Convert a settled spin to a response."""
    return SpinResponse(
        round_id=result.round_id,
        winning_number=result.winning_number,
        label=result.label,
        color=result.color.value,
        bets=[
            BetResultResponse(bet_id=r.bet_id, stake=r.stake, won=r.won, payout=r.payout)
            for r in result.bet_results
        ],
        total_staked=result.total_staked,
        total_payout=result.total_payout,
        net_profit=result.net_profit,
        balance=balance,
    )


def bet_config_response(bet: BetConfig) -> BetConfigResponse:
    """Convert a registry entry to a response."""
    return BetConfigResponse(
        bet_id=bet.bet_id,
        category=bet.category.value,
        numbers=sorted(bet.numbers),
        payout=bet.payout,
        label=bet.label,
    )


def blackjack_state_response(round_: BlackjackRound, balance: Decimal) -> BlackjackStateResponse:
    """Convert a blackjack round to a response, hiding the hole card."""
    result: BlackjackResult | None = round_.result
    return BlackjackStateResponse(
        round_id=round_.round_id,
        phase=round_.phase.name,
        player_hand=[card_response(c) for c in round_.player_hand.cards],
        player_value=round_.player_hand.value,
        dealer_hand=[card_response(c) for c in round_.dealer_visible_cards],
        dealer_value=round_.dealer_hand.value if round_.hole_card_revealed else None,
        bet_amount=round_.bet_amount,
        can_hit=round_.can_hit,
        can_stand=round_.can_stand,
        result=(
            BlackjackResultResponse(
                outcome=result.outcome.value,
                payout=result.payout,
                net_profit=result.net_profit,
            )
            if result is not None
            else None
        ),
        balance=balance,
    )


def history_entry_response(entry: RoundResult | SpinResult | BlackjackResult) -> HistoryEntryResponse:
    """Summarize a history entry."""
    if isinstance(entry, RoundResult):
        return HistoryEntryResponse(
            round_id=entry.round_id,
            game="baccarat",
            staked=entry.bet_amount,
            net_profit=entry.net_profit,
        )
    if isinstance(entry, SpinResult):
        return HistoryEntryResponse(
            round_id=entry.round_id,
            game="roulette",
            staked=entry.total_staked,
            net_profit=entry.net_profit,
        )
    return HistoryEntryResponse(
        round_id=entry.round_id,
        game="blackjack",
        staked=entry.bet_amount,
        net_profit=entry.net_profit,
    )
