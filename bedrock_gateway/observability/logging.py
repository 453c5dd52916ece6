"""
Structured logging for the gateway.

Components log through a GatewayLogger so every line carries the same
``[provider=... model=... request_id=...]`` prefix regardless of the layer
that emitted it. Callers pass identifiers and counters only; credentials and
request bodies never go through these helpers.
"""

import logging
import os
import time
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from ..config.constants import ENV_LOG_LEVEL

ROOT_LOGGER_NAME = "bedrock_gateway"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a stream handler to the package logger.

    The level comes from ``level`` or ``BEDROCK_LOG_LEVEL`` (default WARNING).
    Calling it again only updates the level.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    name = (level or os.getenv(ENV_LOG_LEVEL) or "WARNING").upper()
    root.setLevel(getattr(logging, name, logging.WARNING))
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    return root


class GatewayLogger:
    """Structured logger for one gateway component."""

    def __init__(self, component: str, provider: str = "bedrock"):
        """
        Args:
            component: Dotted component name (e.g., "streaming", "client")
            provider: Backend name added to every line
        """
        self.provider = provider
        self.logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{component}")

    def _format_message(self, message: str, fields: Dict[str, Any]) -> str:
        parts = [f"provider={self.provider}"]
        parts.extend(f"{key}={value}" for key, value in fields.items() if value is not None)
        return f"[{' '.join(parts)}] {message}"

    def _log(self, level: int, message: str, **fields) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(level, self._format_message(message, fields))

    def debug(self, message: str, model: Optional[str] = None,
              request_id: Optional[str] = None, **fields):
        self._log(logging.DEBUG, message, model=model, request_id=request_id, **fields)

    def info(self, message: str, model: Optional[str] = None,
             request_id: Optional[str] = None, **fields):
        self._log(logging.INFO, message, model=model, request_id=request_id, **fields)

    def warning(self, message: str, model: Optional[str] = None,
                request_id: Optional[str] = None, **fields):
        self._log(logging.WARNING, message, model=model, request_id=request_id, **fields)

    def error(self, message: str, model: Optional[str] = None,
              request_id: Optional[str] = None, error: Optional[BaseException] = None, **fields):
        """Log an error; ``error`` contributes its type and message as fields."""
        if error is not None:
            fields["error_type"] = type(error).__name__
            fields["error_msg"] = str(error)
        self._log(logging.ERROR, message, model=model, request_id=request_id, **fields)

    @contextmanager
    def track_request(self, method: str, model: str,
                      request_id: Optional[str] = None) -> Iterator[Dict[str, Any]]:
        """
        Time one gateway call and log its start, completion or failure.

        Args:
            method: Operation name (e.g., "stream")
            model: Model identifier
            request_id: Correlation id, generated when omitted

        Yields:
            Dict with request_id, model, method and start_time
        """
        request_id = request_id or str(uuid.uuid4())[:8]
        started = time.time()
        metadata = {
            "request_id": request_id,
            "model": model,
            "method": method,
            "start_time": started,
        }

        self.debug(f"Starting {method} request", model=model, request_id=request_id)
        try:
            yield metadata
        except Exception as e:
            self.error(
                f"Failed {method} request",
                model=model,
                request_id=request_id,
                duration_ms=int((time.time() - started) * 1000),
                error=e,
            )
            raise
        self.info(
            f"Completed {method} request",
            model=model,
            request_id=request_id,
            duration_ms=int((time.time() - started) * 1000),
        )

    def log_streaming_metrics(self, chunks: int, total_chars: int, duration: float,
                              model: str, request_id: Optional[str], outcome: Optional[str] = None):
        """Log delta count, size and throughput for one finished stream."""
        rate = int(total_chars / duration) if duration > 0 else 0
        self.info(
            "Streaming metrics",
            model=model,
            request_id=request_id,
            chunks=chunks,
            total_chars=total_chars,
            duration_ms=int(duration * 1000),
            chars_per_second=rate,
            outcome=outcome,
        )
