"""Configuration management with environment variable support."""

import os
import secrets
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


def _parse_rng_seed() -> int | None:
    """Parse RNG_SEED; unset or empty means OS entropy."""
    seed = os.getenv("RNG_SEED", "").strip()
    return int(seed) if seed else None


def _parse_variant() -> Literal["european", "american"]:
    """Parse ROULETTE_VARIANT environment variable."""
    variant = os.getenv("ROULETTE_VARIANT", "european").strip().lower()
    if variant not in ("european", "american"):
        raise ValueError(f"ROULETTE_VARIANT must be 'european' or 'american', got {variant!r}")
    return variant  # type: ignore[return-value]


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration."""

    enabled: bool = field(
        default_factory=lambda: os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    )
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "60"))
    )


@dataclass(frozen=True)
class SecurityConfig:
    """Security configuration."""

    secret_key: str = field(
        default_factory=lambda: os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    )


@dataclass(frozen=True)
class TableConfig:
    """Default table configuration."""

    baccarat_decks: int = field(
        default_factory=lambda: int(os.getenv("BACCARAT_DECKS", "6"))
    )
    blackjack_decks: int = field(
        default_factory=lambda: int(os.getenv("BLACKJACK_DECKS", "1"))
    )
    baccarat_reshuffle_threshold: int = 6  # Worst-case cards in one baccarat round
    blackjack_reshuffle_threshold: int = 15
    fresh_shoe_per_round: bool = field(
        default_factory=lambda: os.getenv("FRESH_SHOE_PER_ROUND", "true").lower() == "true"
    )
    roulette_variant: Literal["european", "american"] = field(default_factory=_parse_variant)
    rng_seed: int | None = field(default_factory=_parse_rng_seed)
    min_bet: Decimal = Decimal("1")
    max_bet: Decimal = Decimal("1000")
    blackjack_payout: Decimal = Decimal("1.5")
    starting_balance: Decimal = field(
        default_factory=lambda: Decimal(os.getenv("STARTING_BALANCE", "1000"))
    )

    def __post_init__(self) -> None:
        """Validate table limits."""
        if self.baccarat_decks < 1 or self.blackjack_decks < 1:
            raise ValueError("Deck counts must be at least 1")
        if self.min_bet <= 0 or self.max_bet < self.min_bet:
            raise ValueError("Bet limits must satisfy 0 < min_bet <= max_bet")


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    session_ttl: int = 3600  # Session timeout in seconds
    session_cleanup_interval: int = field(
        default_factory=lambda: int(os.getenv("SESSION_CLEANUP_INTERVAL", "300"))
    )

    table: TableConfig = field(default_factory=TableConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


# Global configuration instance
config = AppConfig()
