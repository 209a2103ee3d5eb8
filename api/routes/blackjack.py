"""Blackjack API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import balance_of, check_table_limits, require_session
from api.ledger import get_ledger
from api.schemas import (
    ActionRequest,
    BlackjackBetRequest,
    BlackjackStateResponse,
    blackjack_state_response,
)
from api.session import PlayerSession
from settlement.errors import SettlementError
from settlement.game.blackjack import BlackjackRound

router = APIRouter()


def _pay_if_settled(session: PlayerSession, round_: BlackjackRound) -> None:
    if round_.result is not None:
        get_ledger().credit(session.session_id, round_.result.payout)


@router.post("/start")
async def start(
    request: BlackjackBetRequest,
    session: Annotated[PlayerSession, Depends(require_session)],
) -> BlackjackStateResponse:
    """Stake a bet and deal the opening cards."""
    amount = check_table_limits(request.amount)
    ledger = get_ledger()

    ledger.debit(session.session_id, amount)
    try:
        round_ = session.table.start_blackjack(amount)
    except SettlementError:
        ledger.credit(session.session_id, amount)
        raise

    # A natural settles on the deal
    _pay_if_settled(session, round_)
    return blackjack_state_response(round_, balance_of(session))


@router.post("/action")
async def action(
    request: ActionRequest,
    session: Annotated[PlayerSession, Depends(require_session)],
) -> BlackjackStateResponse:
    """Hit or stand on the active hand."""
    if request.action == "hit":
        round_ = session.table.blackjack_hit()
    else:
        round_ = session.table.blackjack_stand()

    _pay_if_settled(session, round_)
    return blackjack_state_response(round_, balance_of(session))


@router.get("/state")
async def get_state(
    session: Annotated[PlayerSession, Depends(require_session)],
) -> BlackjackStateResponse:
    """Get the current or last blackjack round."""
    round_ = session.table.blackjack
    if round_ is None:
        raise HTTPException(status_code=404, detail="No blackjack round played yet")
    return blackjack_state_response(round_, balance_of(session))
