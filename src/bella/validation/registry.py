"""Thread-safe registry for step input validators."""

import logging
from collections.abc import Callable
from threading import Lock
from typing import Any

from bella.core.errors import ValidatorNotFoundError

logger = logging.getLogger(__name__)

StepValidator = Callable[[str, dict[str, Any]], bool]

_validators: dict[str, StepValidator] = {}
_validators_lock = Lock()


class ValidatorRegistry:
    """
    Thread-safe registry of named step validators.

    A validator receives the raw turn text and the data collected so far
    and returns whether the input is acceptable for the step.
    """

    @classmethod
    def register(cls, name: str) -> Callable[[StepValidator], StepValidator]:
        """
        Register a validator function.

        Usage:
            @ValidatorRegistry.register("plan_choice")
            def validate_plan_choice(text: str, data: dict) -> bool:
                return match_choice(text, PLAN_CHOICES) is not None

        Args:
            name: Name steps use to reference the validator

        Returns:
            Decorator function
        """

        def decorator(func: StepValidator) -> StepValidator:
            with _validators_lock:
                if name in _validators:
                    logger.warning(
                        f"Validator '{name}' already registered, overwriting",
                        extra={"validator_name": name},
                    )
                _validators[name] = func
                logger.debug(f"Registered validator '{name}'", extra={"validator_name": name})
            return func

        return decorator

    @classmethod
    def get(cls, name: str) -> StepValidator:
        """
        Get validator by name.

        Raises:
            ValidatorNotFoundError: If validator is not registered
        """
        with _validators_lock:
            if name not in _validators:
                raise ValidatorNotFoundError(
                    f"Validator '{name}' not registered",
                    available=sorted(_validators),
                )
            return _validators[name]

    @classmethod
    def validate(cls, name: str, text: str, data: dict[str, Any] | None = None) -> bool:
        """Validate a turn with the named validator."""
        return cls.get(name)(text, data or {})

    @classmethod
    def list_validators(cls) -> list[str]:
        with _validators_lock:
            return list(_validators.keys())

    @classmethod
    def is_registered(cls, name: str) -> bool:
        with _validators_lock:
            return name in _validators

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove a validator (mainly for tests registering temporary ones)."""
        with _validators_lock:
            _validators.pop(name, None)
