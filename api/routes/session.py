"""Session API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import balance_of, require_session
from api.schemas import HistoryResponse, SessionResponse, history_entry_response
from api.session import PlayerSession, create_session, delete_session

router = APIRouter()


@router.post("/new")
async def new_session() -> SessionResponse:
    """Open a session with a fresh table and starting balance."""
    session = await create_session()
    return SessionResponse(
        session_id=session.session_id,
        balance=balance_of(session),
        rounds_played=0,
    )


@router.get("")
async def get_session_info(
    session: Annotated[PlayerSession, Depends(require_session)],
) -> SessionResponse:
    """Get the session balance and round count."""
    return SessionResponse(
        session_id=session.session_id,
        balance=balance_of(session),
        rounds_played=session.table.rounds_played,
    )


@router.get("/history")
async def get_history(
    session: Annotated[PlayerSession, Depends(require_session)],
) -> HistoryResponse:
    """List settled rounds, oldest first."""
    return HistoryResponse(
        rounds=[history_entry_response(entry) for entry in session.table.history]
    )


@router.delete("")
async def end_session(
    session: Annotated[PlayerSession, Depends(require_session)],
) -> dict[str, str]:
    """Close the session and its ledger account."""
    await delete_session(session.session_id)
    return {"status": "closed"}
