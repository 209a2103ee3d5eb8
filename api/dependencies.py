"""Request helpers shared by the game routers."""

from decimal import Decimal
from typing import Annotated

from fastapi import Header, HTTPException

from api.ledger import get_ledger
from api.session import PlayerSession, get_session
from config import config
from settlement.money import validate_amount


async def require_session(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> PlayerSession:
    """Resolve the X-Session-ID header to a live session or 404."""
    session = await get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found or expired")
    return session


def check_table_limits(amount: Decimal) -> Decimal:
    """Enforce the configured minimum and maximum bet, then round to cents."""
    limits = config.table
    if amount < limits.min_bet or amount > limits.max_bet:
        raise HTTPException(
            status_code=400,
            detail=f"Bet must be between {limits.min_bet} and {limits.max_bet}",
        )
    return validate_amount(amount)


def balance_of(session: PlayerSession) -> Decimal:
    """Current ledger balance for a session."""
    return get_ledger().balance(session.session_id)
