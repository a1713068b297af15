"""Core types, enums and errors for Bella."""

from bella.core.constants import (
    DialoguePhase,
    ErrorKind,
    IntentKind,
    RequiredInput,
    TaskType,
    UIHint,
)
from bella.core.errors import BellaError, CatalogError, ConfigError, ValidatorNotFoundError
from bella.core.state import create_idle_state, create_task_state
from bella.core.types import DialogueState, Intent, InterpreterContext, Response, StepError

__all__ = [
    "BellaError",
    "CatalogError",
    "ConfigError",
    "DialoguePhase",
    "DialogueState",
    "ErrorKind",
    "Intent",
    "IntentKind",
    "InterpreterContext",
    "RequiredInput",
    "Response",
    "StepError",
    "TaskType",
    "UIHint",
    "ValidatorNotFoundError",
    "create_idle_state",
    "create_task_state",
]
