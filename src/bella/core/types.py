"""Core type definitions for the dialogue controller."""

from typing import Any

from pydantic import BaseModel, Field

from bella.core.constants import (
    DialoguePhase,
    ErrorKind,
    IntentKind,
    RequiredInput,
    TaskType,
    UIHint,
)


class StepError(BaseModel):
    """Most recent failed validation, tied to the step that produced it."""

    kind: ErrorKind
    step: str


class DialogueState(BaseModel):
    """Mutable record owned by exactly one controller.

    Invariants:
    - ``active_task is None`` if and only if ``active_step is None``.
    - ``collected_data`` only holds fields of visited steps.
    - ``step_history`` is empty at the first step or when idle.
    """

    phase: DialoguePhase = DialoguePhase.IDLE
    active_task: TaskType | None = None
    active_step: str | None = None
    required_input: RequiredInput = RequiredInput.NONE
    collected_data: dict[str, Any] = Field(default_factory=dict)
    last_prompt: str | None = None
    step_history: list[str] = Field(default_factory=list)
    last_step_error: StepError | None = None

    @property
    def has_active_task(self) -> bool:
        return self.active_task is not None and self.active_step is not None


class InterpreterContext(BaseModel):
    """Expected-input context handed to the input interpreter."""

    required_input: RequiredInput = RequiredInput.NONE
    active_task: TaskType | None = None


class Intent(BaseModel):
    """Classified user intent."""

    kind: IntentKind
    task: TaskType | None = Field(default=None, description="Target task for START_TASK")

    @classmethod
    def start(cls, task: TaskType) -> "Intent":
        return cls(kind=IntentKind.START_TASK, task=task)


class Response(BaseModel):
    """Structured result of a single turn."""

    text: str
    ui_hint: UIHint
    requires_confirmation: bool = False
    confirmation_phrase: str | None = None
    quick_replies: list[str] = Field(default_factory=list)
    error_message: str | None = None
