"""Configuration management for vault size history."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    return os.getenv(key, default)


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(
            "%s=%r is not a valid integer, using %s", key, value, default
        )
        return default


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key)
    if value is None:
        return default
    lowered = value.lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    logger.warning("%s=%r is not a valid boolean, using %s", key, value, default)
    return default


# Data directory (XDG-style, defaults to ~/.vaultsize)
VAULTSIZE_DATA_DIR = Path(
    get_env("VAULTSIZE_DATA_DIR", os.path.expanduser("~/.vaultsize"))
    or os.path.expanduser("~/.vaultsize")
).expanduser()

# Vault whose files are counted
VAULT_DIR = Path(get_env("VAULTSIZE_VAULT_DIR", ".") or ".").expanduser()

# Persistence
HISTORY_FILE = Path(
    get_env("VAULTSIZE_HISTORY_FILE", str(VAULTSIZE_DATA_DIR / "history.json"))
    or VAULTSIZE_DATA_DIR / "history.json"
).expanduser()
DATABASE_PATH = Path(
    get_env("VAULTSIZE_DATABASE_PATH", str(VAULTSIZE_DATA_DIR / "vaultsize.db"))
    or VAULTSIZE_DATA_DIR / "vaultsize.db"
).expanduser()
HISTORY_BACKEND = (get_env("VAULTSIZE_HISTORY_BACKEND", "json") or "json").lower()

# Aggregation
UPDATE_INTERVAL_SECONDS = get_env_int("VAULTSIZE_UPDATE_INTERVAL", 60)
PERSIST_BOOTSTRAP = get_env_bool("VAULTSIZE_PERSIST_BOOTSTRAP", False)

# API Server settings
VAULTSIZE_HOST = get_env("VAULTSIZE_HOST", "127.0.0.1")
VAULTSIZE_PORT = get_env_int("VAULTSIZE_PORT", 8421)
API_SCHEDULER_ENABLED = get_env_bool("VAULTSIZE_API_SCHEDULER", True)

# Logging
LOG_LEVEL = get_env("LOG_LEVEL", "INFO") or "INFO"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure and return logger."""
    resolved = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=resolved,
    )
    # basicConfig is a no-op once handlers exist; the level still applies
    logging.getLogger().setLevel(resolved)
    return logging.getLogger(__name__)


def validate_environment(
    backend: str | None = None,
    interval_seconds: float | None = None,
) -> tuple[bool, str]:
    """
    Validate configuration needed to run an aggregation cycle.

    Args:
        backend: Backend chosen on the command line (defaults to config)
        interval_seconds: Interval chosen on the command line (defaults
            to config)

    Returns:
        (is_valid, message) - If not valid, message explains what's wrong.
    """
    backend = (backend or HISTORY_BACKEND).lower()
    if backend not in ("json", "sqlite"):
        return (
            False,
            f"VAULTSIZE_HISTORY_BACKEND must be 'json' or 'sqlite', got: {backend}",
        )

    interval = (
        UPDATE_INTERVAL_SECONDS if interval_seconds is None else interval_seconds
    )
    if interval <= 0:
        return (
            False,
            f"VAULTSIZE_UPDATE_INTERVAL must be positive, got: {interval}",
        )

    return True, ""
