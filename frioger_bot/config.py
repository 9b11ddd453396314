"""
Centralized configuration with environment variable overrides.

Business identity, the specialist contact, storage location and reply
pacing are all configurable here. Nothing is hardcoded in the
conversation engine.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from frioger_bot.logging_context import UserIdFilter

load_dotenv()

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("sqlite", "memory")


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class BusinessConfig:
    """Business identity shown to the customer."""

    name: str = os.getenv("BUSINESS_NAME", "Grupo Frioger")
    tagline: str = os.getenv(
        "BUSINESS_TAGLINE", "Excelência em Climatização e Refrigeração."
    )
    catalog_title: str = os.getenv("CATALOG_TITLE", "Catálogo Oficial 2026")


@dataclass(frozen=True)
class ChannelConfig:
    """Messaging channel endpoints and the artifacts sent over it."""

    specialist_id: str = os.getenv("SPECIALIST_ID", "5511930167985@c.us")
    contact_link_base: str = os.getenv("CONTACT_LINK_BASE", "https://wa.me/")
    catalog_pdf_path: str = os.getenv(
        "CATALOG_PDF_PATH", "./assets/Catálogo Oficial Grupo Frioger 2026 - Completo.pdf"
    )
    catalog_json_path: str = os.getenv("CATALOG_JSON_PATH", "./catalog.json")


@dataclass(frozen=True)
class StorageConfig:
    """Durable store for sessions, tickets and ratings."""

    backend: str = os.getenv("STORAGE_BACKEND", "sqlite")
    db_path: str = os.getenv("SESSIONS_DB_PATH", "./sessions.db")


@dataclass(frozen=True)
class PacingConfig:
    """Artificial delays that make replies feel typed rather than instant."""

    welcome_delay_sec: float = _safe_float("WELCOME_DELAY_SEC", "1.5")
    reply_delay_sec: float = _safe_float("REPLY_DELAY_SEC", "1.0")
    catalog_delay_sec: float = _safe_float("CATALOG_DELAY_SEC", "2.0")
    triage_delay_sec: float = _safe_float("TRIAGE_DELAY_SEC", "1.5")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    business: BusinessConfig = field(default_factory=BusinessConfig)
    channel: ChannelConfig = field(default_factory=ChannelConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    pacing: PacingConfig = field(default_factory=PacingConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    bot_name: str = os.getenv("BOT_NAME", "frioger-bot")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if not config.channel.specialist_id.strip():
        raise ValueError("SPECIALIST_ID must not be empty")
    if config.storage.backend not in STORAGE_BACKENDS:
        raise ValueError(
            f"STORAGE_BACKEND must be one of {STORAGE_BACKENDS}, got {config.storage.backend!r}"
        )
    if config.storage.backend == "sqlite" and not config.storage.db_path.strip():
        raise ValueError("SESSIONS_DB_PATH must not be empty for the sqlite backend")

    for delay_name, delay_value in [
        ("WELCOME_DELAY_SEC", config.pacing.welcome_delay_sec),
        ("REPLY_DELAY_SEC", config.pacing.reply_delay_sec),
        ("CATALOG_DELAY_SEC", config.pacing.catalog_delay_sec),
        ("TRIAGE_DELAY_SEC", config.pacing.triage_delay_sec),
    ]:
        if delay_value < 0:
            raise ValueError(f"{delay_name} must be >= 0, got {delay_value}")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s <%(user_id)s>: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Every record reaching the root handlers needs user_id for the format above.
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, UserIdFilter) for f in handler.filters):
            handler.addFilter(UserIdFilter())
    logger.info("Configuration loaded for %s (store: %s)", config.business.name, config.storage.backend)
    return config


# Singleton instance
settings = load_config()
