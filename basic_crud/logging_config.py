"""
Logging setup shared by the API process and the seed script.
"""
import logging
from logging.config import dictConfig

from basic_crud.config import settings


def _resolve_log_level(level_name: str) -> int:
    """Return a logging level constant from a case-insensitive string."""
    numeric_level = logging.getLevelName(level_name.upper())
    if isinstance(numeric_level, int):
        return numeric_level
    raise ValueError(f"Unsupported log level: {level_name}")


def configure_logging(level: str | None = None) -> None:
    level_value = _resolve_log_level(level or settings.LOG_LEVEL)
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {"format": settings.LOG_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": level_value,
                    "formatter": "standard",
                },
            },
            "loggers": {
                "basic_crud": {
                    "handlers": ["console"],
                    "level": level_value,
                    "propagate": False,
                },
            },
        }
    )
