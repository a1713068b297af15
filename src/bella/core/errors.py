"""Core errors.

These are programming or configuration faults. User-facing validation
problems are expressed as ``ErrorKind`` values, never raised.
"""

from typing import Any


class BellaError(Exception):
    """Base class for all Bella errors.

    Keyword arguments are kept as context and rendered into the message.
    """

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(self._format())

    def _format(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} ({details})"


class ConfigError(BellaError):
    """Raised when configuration is invalid."""


class CatalogError(BellaError):
    """Raised when a task or step is missing from the step catalog."""


class ValidatorNotFoundError(BellaError):
    """Raised when a step references an unregistered validator."""
