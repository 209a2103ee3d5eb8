"""Baccarat API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import check_table_limits, require_session
from api.ledger import get_ledger
from api.schemas import BaccaratBetRequest, BaccaratRoundResponse, baccarat_response
from api.session import PlayerSession
from settlement.baccarat import BetSide
from settlement.errors import SettlementError

router = APIRouter()


@router.post("/play")
async def play(
    request: BaccaratBetRequest,
    session: Annotated[PlayerSession, Depends(require_session)],
) -> BaccaratRoundResponse:
    """Stake a bet, deal one round and pay it out."""
    amount = check_table_limits(request.amount)
    side = BetSide.parse(request.bet_type)
    ledger = get_ledger()

    ledger.debit(session.session_id, amount)
    try:
        result = session.table.play_baccarat(amount, side)
    except SettlementError:
        ledger.credit(session.session_id, amount)
        raise

    balance = ledger.credit(session.session_id, amount + result.net_profit)
    return baccarat_response(result, balance)
