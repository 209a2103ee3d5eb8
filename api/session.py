"""Player sessions: signed ids mapped to a live table and a ledger account."""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from uuid import uuid4

from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from api.ledger import get_ledger
from config import TableConfig, config
from settlement.game.table import TableRules, TableSession
from settlement.rng import make_rng
from settlement.roulette.wheel import Variant

logger = logging.getLogger(__name__)


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._secret_key = secret_key or config.security.secret_key
        self._serializer = URLSafeTimedSerializer(self._secret_key)

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify and extract session_id from a signed token.

        Args:
            token: The signed token to verify
            max_age: Maximum age in seconds (defaults to session_ttl)

        Returns:
            The session ID if valid, None otherwise
        """
        max_age = max_age or config.session_ttl
        try:
            return self._serializer.loads(token, max_age=max_age)
        except (BadSignature, SignatureExpired):
            return None


# Global signer instance
_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


@dataclass
class PlayerSession:
    """One player's table plus bookkeeping."""

    session_id: str
    table: TableSession
    created_at: datetime = field(default_factory=datetime.now)
    last_activity: datetime = field(default_factory=datetime.now)

    def touch(self) -> None:
        """Mark the session as used."""
        self.last_activity = datetime.now()


def table_rules_from_config(table_config: TableConfig) -> TableRules:
    """Translate configured table settings into dealing rules."""
    return TableRules(
        baccarat_decks=table_config.baccarat_decks,
        blackjack_decks=table_config.blackjack_decks,
        baccarat_reshuffle_threshold=table_config.baccarat_reshuffle_threshold,
        blackjack_reshuffle_threshold=table_config.blackjack_reshuffle_threshold,
        fresh_shoe_per_round=table_config.fresh_shoe_per_round,
        variant=Variant(table_config.roulette_variant),
        blackjack_payout=table_config.blackjack_payout,
    )


class SessionStore(ABC):
    """Abstract session store."""

    @abstractmethod
    async def get(self, session_id: str) -> PlayerSession | None:
        """Get a session."""
        ...

    @abstractmethod
    async def set(self, session: PlayerSession, ttl: int | None = None) -> None:
        """Store a session."""
        ...

    @abstractmethod
    async def delete(self, session_id: str) -> None:
        """Delete session."""
        ...

    @abstractmethod
    async def exists(self, session_id: str) -> bool:
        """Check if session exists."""
        ...

    @abstractmethod
    async def cleanup_expired(self) -> int:
        """Remove expired sessions and return how many were dropped."""
        ...

    def create_session_id(self, signed: bool = True) -> str:
        """
        Create a new session ID.

        Args:
            signed: If True, return a signed session token

        Returns:
            A new session ID (signed or unsigned based on parameter)
        """
        session_id = str(uuid4())
        if signed:
            signer = get_session_signer()
            return signer.sign(session_id)
        return session_id


class InMemorySessionStore(SessionStore):
    """
    In-memory session store.

    Tables hold live shoes and a live blackjack round, so sessions stay in
    process memory rather than being serialized.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, tuple[PlayerSession, datetime]] = {}

    async def get(self, session_id: str) -> PlayerSession | None:
        """Get a session, dropping it if expired."""
        if session_id not in self._sessions:
            return None

        session, expiry = self._sessions[session_id]
        if expiry < datetime.now():
            await self.delete(session_id)
            return None

        return session

    async def set(self, session: PlayerSession, ttl: int | None = None) -> None:
        """Store a session and refresh its expiry."""
        ttl = ttl or config.session_ttl
        expiry = datetime.now() + timedelta(seconds=ttl)
        self._sessions[session.session_id] = (session, expiry)

    async def delete(self, session_id: str) -> None:
        """Delete session and close its ledger account."""
        if self._sessions.pop(session_id, None) is not None:
            get_ledger().close_account(session_id)

    async def exists(self, session_id: str) -> bool:
        """Check if session exists."""
        return await self.get(session_id) is not None

    async def cleanup_expired(self) -> int:
        """Remove expired sessions."""
        now = datetime.now()
        expired = [
            sid for sid, (_, expiry) in self._sessions.items() if expiry < now
        ]
        for sid in expired:
            await self.delete(sid)
        if expired:
            logger.info("Removed %d expired sessions", len(expired))
        return len(expired)


# Global session store instance
_session_store: SessionStore | None = None


async def get_session_store() -> SessionStore:
    """Get or create the session store."""
    global _session_store
    if _session_store is None:
        _session_store = InMemorySessionStore()
    return _session_store


async def create_session(
    table_config: TableConfig | None = None,
    starting_balance: Decimal | None = None,
) -> PlayerSession:
    """
    Create a session with a fresh table and a funded ledger account.

    Args:
        table_config: Table settings (global config if not provided)
        starting_balance: Opening balance (configured default if not provided)
    """
    table_config = table_config or config.table
    store = await get_session_store()
    session_id = store.create_session_id()

    table = TableSession(
        rules=table_rules_from_config(table_config),
        rng=make_rng(table_config.rng_seed),
    )
    session = PlayerSession(session_id=session_id, table=table)
    await store.set(session)

    balance = table_config.starting_balance if starting_balance is None else starting_balance
    get_ledger().open_account(session_id, balance)
    logger.info("Opened session with balance %s", balance)
    return session


async def get_session(session_id: str) -> PlayerSession | None:
    """
    Look up a session by its signed token.

    Returns None unless the token verifies and names a live session.
    """
    if extract_session_id(session_id) is None:
        return None
    store = await get_session_store()
    session = await store.get(session_id)
    if session is not None:
        session.touch()
        await store.set(session)
    return session


async def delete_session(session_id: str) -> None:
    """Delete a session."""
    store = await get_session_store()
    await store.delete(session_id)


async def run_session_cleanup(interval: float) -> None:
    """Sweep expired sessions every ``interval`` seconds until cancelled."""
    while True:
        await asyncio.sleep(interval)
        store = await get_session_store()
        await store.cleanup_expired()


def extract_session_id(token: str) -> str | None:
    """
    Extract the raw session ID from a signed token.

    Args:
        token: The signed session token

    Returns:
        The raw session ID if valid, None otherwise
    """
    signer = get_session_signer()
    return signer.unsign(token)
