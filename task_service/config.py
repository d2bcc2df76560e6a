"""Configuration helpers for the task record service."""
from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

STORE_PATH_ENV = "TASKS_STORE_PATH"
DEFAULT_STORE_PATH = Path(__file__).resolve().parent.parent / "task.json"


class ConfigError(RuntimeError):
    """Raised when configuration values are invalid."""


@dataclass(slots=True)
class Settings:
    """Runtime configuration for the API and CLI."""

    store_path: Path
    environment: str = "local"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000


def get_store_path() -> Path:
    """Return the task document path, honouring ``TASKS_STORE_PATH``.

    Resolved on every call so the store always follows the current
    environment.
    """
    override = os.getenv(STORE_PATH_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return DEFAULT_STORE_PATH


def load_settings(*, dotenv: bool = True) -> Settings:
    """Load settings from environment variables.

    Args:
        dotenv: Read a local ``.env`` first (never overrides real env vars).

    Returns:
        Settings resolved from the environment.

    Raises:
        ConfigError: if the port or log level is not usable.
    """

    if dotenv:
        load_dotenv(find_dotenv(usecwd=True), override=False)

    raw_port = os.getenv("TASKS_PORT", "8000").strip()
    try:
        port = int(raw_port)
    except ValueError as exc:
        raise ConfigError(f"TASKS_PORT must be an integer, got {raw_port!r}.") from exc
    if not 0 < port < 65536:
        raise ConfigError(f"TASKS_PORT out of range: {port}.")

    log_level = os.getenv("TASKS_LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"Unknown TASKS_LOG_LEVEL {log_level!r}.")

    return Settings(
        store_path=get_store_path(),
        environment=os.getenv("TASKS_ENV", "local").strip() or "local",
        log_level=log_level,
        host=os.getenv("TASKS_HOST", "127.0.0.1").strip() or "127.0.0.1",
        port=port,
    )
