"""Roulette API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import check_table_limits, require_session
from api.ledger import get_ledger
from api.schemas import (
    BetConfigResponse,
    BetRegistryResponse,
    SpinRequest,
    SpinResponse,
    bet_config_response,
    spin_response,
)
from api.session import PlayerSession
from config import config
from settlement.errors import SettlementError
from settlement.money import to_money
from settlement.roulette import Bet, Variant, get_bet_config, get_registry, validate_bets

router = APIRouter()


def _table_variant() -> Variant:
    return Variant(config.table.roulette_variant)


@router.post("/spin")
async def spin(
    request: SpinRequest,
    session: Annotated[PlayerSession, Depends(require_session)],
) -> SpinResponse:
    """Stake every bet, spin once and pay out the winners."""
    bets = [
        Bet(
            bet_type=b.bet_type,
            amount=check_table_limits(b.amount),
            selection=tuple(b.selection),
        )
        for b in request.bets
    ]
    validate_bets(bets, session.table.rules.variant)

    total = to_money(sum(b.amount for b in bets))
    ledger = get_ledger()
    ledger.debit(session.session_id, total)
    try:
        result = session.table.spin_roulette(bets)
    except SettlementError:
        ledger.credit(session.session_id, total)
        raise

    balance = ledger.credit(session.session_id, result.total_payout)
    return spin_response(result, balance)


@router.get("/bets")
async def list_bets() -> BetRegistryResponse:
    """List every bet on the configured wheel's layout."""
    registry = get_registry(_table_variant())
    return BetRegistryResponse(
        variant=registry.variant.value,
        count=len(registry),
        bets=[bet_config_response(bet) for bet in registry.values()],
    )


@router.get("/bets/{bet_id}")
async def get_bet(bet_id: str) -> BetConfigResponse:
    """Look up one bet by id."""
    bet = get_bet_config(bet_id, _table_variant())
    if bet is None:
        raise HTTPException(status_code=404, detail=f"Unknown bet: {bet_id}")
    return bet_config_response(bet)
