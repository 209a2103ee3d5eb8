"""FastAPI application entry point."""

import asyncio
import contextlib
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from api.ledger import InsufficientFunds
from api.logging_utils import setup_logging
from api.session import run_session_cleanup
from api.routes import baccarat, blackjack, roulette, session
from config import config
from settlement.errors import InvalidAction, SettlementError

setup_logging(config.log_level)
logger = logging.getLogger(__name__)

# Initialize rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    enabled=config.rate_limit.enabled,
    default_limits=[f"{config.rate_limit.requests_per_minute}/minute"],
)


def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded errors."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


def _settlement_error_handler(request: Request, exc: SettlementError) -> JSONResponse:
    """Map engine errors to client errors."""
    status_code = 409 if isinstance(exc, InvalidAction) else 400
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def _insufficient_funds_handler(request: Request, exc: InsufficientFunds) -> JSONResponse:
    """Reject stakes larger than the balance."""
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Sweep expired sessions in the background while the app runs."""
    task = asyncio.create_task(run_session_cleanup(config.session_cleanup_interval))
    try:
        yield
    finally:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task


app = FastAPI(
    title="Casino Settlement Engine",
    description="Fair dealing and settlement for baccarat, roulette and blackjack",
    version="0.1.0",
    debug=config.debug,
    lifespan=lifespan,
)

# Add rate limiter to app state and exception handlers
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(SettlementError, _settlement_error_handler)
app.add_exception_handler(InsufficientFunds, _insufficient_funds_handler)

# CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors.allowed_origins,
    allow_credentials=config.cors.allow_credentials,
    allow_methods=config.cors.allow_methods,
    allow_headers=config.cors.allow_headers,
)


@app.get("/api/health")
@limiter.limit(f"{config.rate_limit.requests_per_minute}/minute")
async def health_check(request: Request) -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


# Include routers
app.include_router(session.router, prefix="/api/session", tags=["session"])
app.include_router(baccarat.router, prefix="/api/baccarat", tags=["baccarat"])
app.include_router(roulette.router, prefix="/api/roulette", tags=["roulette"])
app.include_router(blackjack.router, prefix="/api/blackjack", tags=["blackjack"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host=config.host, port=config.port)
