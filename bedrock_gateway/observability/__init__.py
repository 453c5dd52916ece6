"""Logging helpers for the gateway."""

from .logging import GatewayLogger, configure_logging

__all__ = ["GatewayLogger", "configure_logging"]
