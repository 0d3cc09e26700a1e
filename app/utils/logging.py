import logging
import json
import sys
from datetime import datetime
from typing import Any, Dict, Optional
import traceback

APP_LOGGER_NAME = "app"

# Attributes copied from a record's ``extra`` into the JSON line when present
CONTEXT_FIELDS = ("event", "client_ip", "duration_ms", "status_code", "path", "method")

_logging_initialized = False


class StructuredFormatter(logging.Formatter):
    """One JSON object per line; ``extra_data`` is nested under ``data``."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        for name in CONTEXT_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "traceback": "".join(traceback.format_exception(*record.exc_info))
            }

        if hasattr(record, "extra_data"):
            entry["data"] = record.extra_data

        return json.dumps(entry, default=str)


def _status_level(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLogger:
    """HTTP access and failure logging for the API middleware."""

    def __init__(self, logger_name: str = "app.request"):
        self.logger = logging.getLogger(logger_name)

    def log_request(
        self,
        method: str,
        path: str,
        status_code: int,
        duration_ms: float,
        client_ip: Optional[str] = None
    ):
        context = {"method": method, "path": path, "status_code": status_code, "duration_ms": duration_ms}
        if client_ip:
            context["client_ip"] = client_ip

        self.logger.log(
            _status_level(status_code),
            f"{method} {path} - {status_code} ({duration_ms:.2f}ms)",
            extra=context
        )

    def log_error(
        self,
        message: str,
        exception: Optional[Exception] = None,
        path: Optional[str] = None,
        client_ip: Optional[str] = None
    ):
        context = {key: value for key, value in (("path", path), ("client_ip", client_ip)) if value}
        self.logger.error(message, exc_info=exception, extra=context)


def log_event(logger: logging.Logger, level: int, event: str, message: str, **data: Any) -> None:
    """Emit a log record tagged with an event name and structured payload."""
    logger.log(level, message, extra={"event": event, "extra_data": data})


def setup_logging(level: str = "INFO", json_format: bool = False) -> logging.Logger:
    """
    Attach a stdout handler to the ``app`` logger tree.

    Safe to call more than once; only the first call configures anything.
    """
    global _logging_initialized

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    if _logging_initialized:
        return app_logger
    _logging_initialized = True

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    app_logger.setLevel(numeric_level)

    if not app_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(numeric_level)
        formatter: logging.Formatter = (
            StructuredFormatter() if json_format
            else logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        handler.setFormatter(formatter)
        app_logger.addHandler(handler)

    # Quiet per-request chatter from the server and the Sportradar client
    for noisy in ("uvicorn.access", "httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return app_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


request_logger = RequestLogger()
