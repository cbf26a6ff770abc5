"""Configuration management with environment variable support."""

import logging
import os
import secrets
import sys
from dataclasses import dataclass, field

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


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
class GameConfig:
    """Default table configuration."""

    num_decks: int = field(
        default_factory=lambda: int(os.getenv("BLACKJACK_NUM_DECKS", "6"))
    )
    reshuffle_threshold: int = 52
    min_bet: int = field(
        default_factory=lambda: int(os.getenv("BLACKJACK_MIN_BET", "15"))
    )
    initial_bankroll: int = field(
        default_factory=lambda: int(os.getenv("BLACKJACK_BANKROLL", "1000"))
    )
    blackjack_payout: float = 1.5
    dealer_hits_soft_17: bool = True
    double_after_split: bool = True
    max_hands: int = 4


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    session_ttl: int = 3600  # Session timeout in seconds

    game: GameConfig = field(default_factory=GameConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


def setup_logging(level: str | int = "INFO", logger_name: str | None = None) -> logging.Logger:
    """
    Configure the root (or named) logger.

    Idempotent: calling it again only updates the level.
    """
    logger = logging.getLogger(logger_name or "")
    logger.setLevel(level)

    already_configured = any(getattr(h, "_blackjack_handler", False) for h in logger.handlers)
    if not already_configured:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler._blackjack_handler = True  # type: ignore[attr-defined]
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)

    return logger


# Global configuration instance
config = AppConfig()
