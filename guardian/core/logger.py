"""Logging setup shared by the API and the CLI helpers."""
import logging
import logging.config

from guardian.core.config import settings

_configured = False


def setup_logging() -> None:
    global _configured
    if _configured:
        return

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "loggers": {
            "guardian": {"level": settings.LOG_LEVEL.upper(), "handlers": ["console"], "propagate": True},
            "twilio": {"level": "WARNING"},
        },
    })
    _configured = True
