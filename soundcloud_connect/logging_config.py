"""
Logging configuration.

Sends structured JSON logs to stdout. The level comes from LOG_LEVEL
(default INFO). OAuth credentials passed as structured fields are masked.
"""

import json
import logging
import os
from datetime import UTC, datetime

SERVICE_NAME = "soundcloud-connect"

REDACTED = "***"

# Structured fields that carry OAuth credentials
SENSITIVE_FIELDS = frozenset(
    {"client_secret", "access_token", "refresh_token", "oauth_token", "code"}
)


def redact(fields: dict) -> dict:
    """Return a copy of ``fields`` with credential values masked."""
    return {
        key: REDACTED if key in SENSITIVE_FIELDS and value else value
        for key, value in fields.items()
    }


class JsonFormatter(logging.Formatter):
    """
    JSON log formatter for the SoundCloud service.

    Structured fields can be attached to a record with
    ``extra={"extra_fields": {...}}``. Values of SENSITIVE_FIELDS never
    reach the output.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_object = {
            "timestamp": datetime.now(UTC).isoformat(),
            "severity": record.levelname,
            "service": SERVICE_NAME,
            "name": record.name,
            "message": record.getMessage(),
        }

        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            log_object.update(redact(extra_fields))

        if record.exc_info:
            log_object["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_object, default=str)


def resolve_level(name: str | None) -> int:
    """Map a level name to its number, falling back to INFO for unknown names."""
    level = logging.getLevelName((name or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_global_logging() -> None:
    """
    Configure global logging.

    Installs a single stdout handler with JsonFormatter on the root logger,
    replacing any handlers configured earlier. An unknown LOG_LEVEL is
    logged as a warning and INFO is used instead.
    """
    level_name = os.getenv("LOG_LEVEL", "INFO")
    level = resolve_level(level_name)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # Remove other handlers to avoid duplicate logs
    for h in list(root_logger.handlers):
        if h is not handler:
            root_logger.removeHandler(h)

    if not isinstance(logging.getLevelName(level_name.strip().upper()), int):
        logging.getLogger(__name__).warning(
            f"Unknown LOG_LEVEL {level_name!r}, using INFO"
        )
