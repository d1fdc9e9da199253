"""Process-wide logging setup for the AetherFit API."""
from __future__ import annotations

from logging.config import dictConfig
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from aetherfit.config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_FILENAME = "aetherfit.log"
# Vendor clients log every HTTP request at INFO.
QUIET_LOGGERS = ("anthropic", "httpx", "httpcore")

_configured = False


def build_logging_config(log_dir: Path, level: str, max_bytes: int, backup_count: int) -> dict[str, Any]:
    """dictConfig payload: console plus a size-rotated file under ``log_dir``."""

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"standard": {"format": LOG_FORMAT}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": level,
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": str(log_dir / LOG_FILENAME),
                "maxBytes": max_bytes,
                "backupCount": backup_count,
                "encoding": "utf-8",
                "formatter": "standard",
                "level": level,
            },
        },
        "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
        "root": {"level": level, "handlers": ["console", "file"]},
    }


def configure_logging() -> None:
    """Apply the logging configuration once per process."""

    global _configured
    if _configured:
        return

    try:
        settings = get_settings()
        log_dir, level = settings.log_dir, settings.log_level
        max_bytes, backup_count = settings.log_max_bytes, settings.log_backup_count
    except ValidationError:
        # Still log (to the defaults) when the environment is misconfigured.
        log_dir, level = Path("logs"), "INFO"
        max_bytes, backup_count = 5_000_000, 3
    log_dir.mkdir(parents=True, exist_ok=True)

    dictConfig(build_logging_config(log_dir, level, max_bytes, backup_count))
    _configured = True
