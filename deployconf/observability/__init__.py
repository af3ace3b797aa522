"""Observability: structured logging with secret redaction.

Provides standardized logging primitives using structlog.
"""

from deployconf.observability.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
