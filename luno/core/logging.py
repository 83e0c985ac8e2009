"""Logging setup: dictConfig with request id and secret scrubbing."""
from __future__ import annotations

import contextvars
import logging
import logging.config

from luno.core.config import Settings, get_settings

# Correlation / request id, set per request by RequestIDMiddleware
request_id_ctx: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="-")


class RequestIDFilter(logging.Filter):
    """Attach the current request id to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get("-")
        return True


SENSITIVE_KEYS = {
    "password", "password_hash", "token", "authorization", "secret", "secret_key",
    "api_key", "apikey", "openai_api_key", "cookie", "cookies",
}
SCRUB_FIELDS = {"body", "payload", "params", "data", "headers", "query"}


def scrub_for_log(obj, depth=0):
    if depth > 3:
        return "<deep>"
    if isinstance(obj, dict):
        return {
            k: "***" if str(k).lower() in SENSITIVE_KEYS else scrub_for_log(v, depth + 1)
            for k, v in obj.items()
        }
    if isinstance(obj, (list, tuple)):
        return [scrub_for_log(x, depth + 1) for x in list(obj)[:50]]
    return obj


class ScrubFilter(logging.Filter):
    """Mask secrets passed through `extra={...}` or dict args."""

    def filter(self, record: logging.LogRecord) -> bool:
        for f in SCRUB_FIELDS:
            if hasattr(record, f):
                setattr(record, f, scrub_for_log(getattr(record, f)))
        if isinstance(record.args, dict):
            record.args = scrub_for_log(record.args)
        return True


VERBOSE_FMT = "[%(asctime)s] [%(levelname)s] [%(name)s] [req=%(request_id)s] %(message)s"
DATE_FMT = "%Y-%m-%d %H:%M:%S"


def build_logging_config(settings: Settings) -> dict:
    level = settings.log_level.upper()
    handlers: dict = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "verbose",
            "filters": ["request_id", "scrub"],
        },
    }
    if settings.log_to_file:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        handlers["app_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level,
            "formatter": "verbose",
            "filters": ["request_id", "scrub"],
            "filename": str(settings.log_dir / "app.log"),
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "encoding": "utf-8",
        }
        handlers["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "verbose",
            "filters": ["request_id", "scrub"],
            "filename": str(settings.log_dir / "error.log"),
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "encoding": "utf-8",
        }

    names = list(handlers)
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "request_id": {"()": RequestIDFilter},
            "scrub": {"()": ScrubFilter},
        },
        "formatters": {
            "verbose": {"format": VERBOSE_FMT, "datefmt": DATE_FMT},
        },
        "handlers": handlers,
        "loggers": {
            "luno": {"handlers": names, "level": level, "propagate": False},
            # SQL statements only when SQL_ECHO=1
            "sqlalchemy.engine": {
                "handlers": names if settings.sql_echo else [],
                "level": "INFO" if settings.sql_echo else "WARNING",
                "propagate": False,
            },
        },
    }


def configure_logging(settings: Settings | None = None) -> None:
    logging.config.dictConfig(build_logging_config(settings or get_settings()))
