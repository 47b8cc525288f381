# app/core/logger.py
import logging
import logging.config

from app.core.config import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s %(module)s:%(lineno)d - %(message)s"


def build_log_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": LOG_FORMAT,
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            }
        },
        "loggers": {
            "uvicorn": {"handlers": ["console"], "level": level},
            "uvicorn.error": {"handlers": ["console"], "level": level},
            "uvicorn.access": {"handlers": ["console"], "level": level},
            "app": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
    }


def setup_logging():
    logging.config.dictConfig(build_log_config(get_settings().LOG_LEVEL.upper()))
