"""Household API logging: one stdout handler, JSON or readable, with bearer tokens masked."""

import json
import logging
import re
import sys
from typing import Literal

LogFormat = Literal["structured", "dev"]

DEV_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

REDACTED = "[REDACTED]"

# "Bearer <credential>" as it appears in an Authorization header
_BEARER_PATTERN = re.compile(r"Bearer\s+[A-Za-z0-9\-._~+/]+=*")
# Any compact JWS: base64url header beginning '{"', then payload and signature
_JWT_PATTERN = re.compile(r"eyJ[A-Za-z0-9_-]*\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]*")

# Library loggers held at WARNING so request logs stay readable
_NOISY_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def redact_tokens(text: str) -> str:
    """Mask bearer credentials and JWTs in a string."""
    text = _BEARER_PATTERN.sub(f"Bearer {REDACTED}", text)
    return _JWT_PATTERN.sub(REDACTED, text)


class TokenRedactionFilter(logging.Filter):
    """Rewrites each record's message so no access token reaches a log sink.

    The message is rendered with its args first, so a token passed as a
    %-style argument is masked as well.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_tokens(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line, built with json.dumps so messages are escaped."""

    def __init__(self):
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = redact_tokens(self.formatException(record.exc_info))
        return json.dumps(entry, default=str)


def build_handler(format_type: LogFormat = "dev") -> logging.Handler:
    """Stdout handler for the given format with token redaction attached."""
    handler = logging.StreamHandler(sys.stdout)
    if format_type == "structured":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(DEV_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler.addFilter(TokenRedactionFilter())
    return handler


def setup_logging(level: str = "INFO", format_type: LogFormat = "dev") -> None:
    """
    Configure application logging.

    Replaces the root handlers with a single stdout handler.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: 'structured' for JSON lines, 'dev' for readable text
    """
    level = level.upper()
    root = logging.getLogger()
    root.handlers = [build_handler(format_type)]
    root.setLevel(getattr(logging, level))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    # SQL echo only when debugging
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.DEBUG if level == "DEBUG" else logging.WARNING
    )

    get_logger("logging").info(f"Logging configured: level={level}, format={format_type}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``household`` namespace."""
    return logging.getLogger(f"household.{name}")
