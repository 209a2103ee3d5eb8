"""Tests for configuration classes."""

import os
from decimal import Decimal
from unittest.mock import patch

import pytest


class TestCORSConfig:
    """Tests for CORSConfig class."""

    def test_cors_default_origins(self):
        """Test that default CORS origins are set correctly."""
        with patch.dict(os.environ, {}, clear=True):
            from config import CORSConfig

            config = CORSConfig()

            assert config.allowed_origins == ["http://localhost:8000"]

    def test_cors_parses_env_var(self):
        """Test that CORS origins are parsed and stripped."""
        env_origins = "  http://example.com  ,http://localhost:3000,,"
        with patch.dict(os.environ, {"CORS_ORIGINS": env_origins}):
            from config import _parse_cors_origins

            origins = _parse_cors_origins()

            assert origins == ["http://example.com", "http://localhost:3000"]


class TestRateLimitConfig:
    """Tests for RateLimitConfig class."""

    def test_rate_limit_defaults(self):
        """Test default rate limit values."""
        with patch.dict(os.environ, {}, clear=True):
            from config import RateLimitConfig

            config = RateLimitConfig()

            assert config.enabled is True
            assert config.requests_per_minute == 60

    def test_rate_limit_from_env(self):
        """Test rate limit configuration from environment."""
        with patch.dict(
            os.environ,
            {"RATE_LIMIT_ENABLED": "false", "RATE_LIMIT_RPM": "120"},
        ):
            from config import RateLimitConfig

            config = RateLimitConfig()

            assert config.enabled is False
            assert config.requests_per_minute == 120


class TestSecurityConfig:
    """Tests for SecurityConfig class."""

    def test_secret_key_auto_generates(self):
        """Test that secret key is auto-generated when not in env."""
        with patch.dict(os.environ, {}, clear=True):
            from config import SecurityConfig

            config = SecurityConfig()

            assert len(config.secret_key) > 0

    def test_secret_key_from_env(self):
        """Test that secret key is read from environment."""
        with patch.dict(os.environ, {"SECRET_KEY": "my-super-secret-key-12345"}):
            from config import SecurityConfig

            config = SecurityConfig()

            assert config.secret_key == "my-super-secret-key-12345"


class TestTableConfig:
    """Tests for TableConfig class."""

    def test_table_config_defaults(self):
        """Test default table configuration values."""
        with patch.dict(os.environ, {}, clear=True):
            from config import TableConfig

            config = TableConfig()

            assert config.baccarat_decks == 6
            assert config.blackjack_decks == 1
            assert config.baccarat_reshuffle_threshold == 6
            assert config.fresh_shoe_per_round is True
            assert config.roulette_variant == "european"
            assert config.rng_seed is None
            assert config.blackjack_payout == Decimal("1.5")
            assert config.starting_balance == Decimal("1000")

    def test_table_config_from_env(self):
        """Test table configuration from environment."""
        with patch.dict(
            os.environ,
            {
                "BACCARAT_DECKS": "8",
                "BLACKJACK_DECKS": "2",
                "FRESH_SHOE_PER_ROUND": "false",
                "ROULETTE_VARIANT": "American",
                "RNG_SEED": "42",
                "STARTING_BALANCE": "250.50",
            },
        ):
            from config import TableConfig

            config = TableConfig()

            assert config.baccarat_decks == 8
            assert config.blackjack_decks == 2
            assert config.fresh_shoe_per_round is False
            assert config.roulette_variant == "american"
            assert config.rng_seed == 42
            assert config.starting_balance == Decimal("250.50")

    def test_unknown_variant_rejected(self):
        """Only european and american wheels exist."""
        with patch.dict(os.environ, {"ROULETTE_VARIANT": "french"}):
            from config import TableConfig

            with pytest.raises(ValueError):
                TableConfig()

    def test_invalid_limits_rejected(self):
        """Deck counts and bet limits are validated."""
        from config import TableConfig

        with pytest.raises(ValueError):
            TableConfig(baccarat_decks=0)
        with pytest.raises(ValueError):
            TableConfig(min_bet=Decimal("10"), max_bet=Decimal("5"))

    def test_table_config_frozen(self):
        """Test that TableConfig is frozen (immutable)."""
        from config import TableConfig

        config = TableConfig()

        with pytest.raises(Exception):  # dataclasses.FrozenInstanceError
            config.baccarat_decks = 8


class TestAppConfig:
    """Tests for AppConfig class."""

    def test_app_config_defaults(self):
        """Test default AppConfig values."""
        with patch.dict(os.environ, {}, clear=True):
            from config import AppConfig

            config = AppConfig()

            assert config.debug is False
            assert config.host == "0.0.0.0"
            assert config.port == 8000
            assert config.log_level == "INFO"
            assert config.session_ttl == 3600
            assert config.session_cleanup_interval == 300

    def test_app_config_from_env(self):
        """Test debug mode and log level from environment."""
        with patch.dict(
            os.environ,
            {"DEBUG": "true", "LOG_LEVEL": "debug", "SESSION_CLEANUP_INTERVAL": "60"},
        ):
            from config import AppConfig

            config = AppConfig()

            assert config.debug is True
            assert config.log_level == "DEBUG"
            assert config.session_cleanup_interval == 60

    def test_app_config_has_nested_configs(self):
        """Test that AppConfig has nested configuration objects."""
        from config import AppConfig

        config = AppConfig()

        assert hasattr(config, "table")
        assert hasattr(config, "cors")
        assert hasattr(config, "rate_limit")
        assert hasattr(config, "security")
