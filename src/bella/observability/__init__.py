"""Observability for Bella."""

from bella.observability.logging import ContextLogger, setup_logging

__all__ = ["ContextLogger", "setup_logging"]
