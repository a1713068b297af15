"""Data-driven task/step catalog.

A task is a set of steps keyed by id, entered at ``first_step`` and walked
by each step's next-step resolver. Prompts are generated from the data
collected so far and, when the previous attempt at the step failed, from
the error kind, so clarifications are step-aware.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from bella.core.constants import ErrorKind, RequiredInput, TaskType
from bella.core.errors import CatalogError
from bella.validation.registry import ValidatorRegistry

if TYPE_CHECKING:
    from bella.validation.policies import NumberPolicy

logger = logging.getLogger(__name__)

PromptGenerator = Callable[[dict[str, Any], ErrorKind | None], str]
NextStepResolver = Callable[[dict[str, Any]], str | None]


@dataclass(frozen=True)
class StepDefinition:
    """One question/prompt unit of a task.

    Attributes:
        id: Step identifier, unique within its task
        field: Key under which the accepted answer is stored
        required_input: Expected shape of the answer
        prompt: Prompt generator ``(data, error) -> text``
        validator: Name of a registered text validator
        normalizer: Maps the accepted answer to its stored form
        policy: Numeric acceptance policy for NUMBER steps
        next_step: Resolver for the following step; None means terminal
        options: Quick replies offered with the prompt
        abort_on_decline: A "no" on this YES_NO step aborts the task
    """

    id: str
    required_input: RequiredInput
    prompt: PromptGenerator
    field: str | None = None
    validator: str | None = None
    normalizer: Callable[[Any], Any] | None = None
    policy: "NumberPolicy | None" = None
    next_step: NextStepResolver | None = None
    options: tuple[str, ...] = ()
    abort_on_decline: bool = False

    def get_prompt(self, data: dict[str, Any], error: ErrorKind | None = None) -> str:
        return self.prompt(data, error)

    def get_next_step(self, data: dict[str, Any]) -> str | None:
        if self.next_step is None:
            return None
        return self.next_step(data)

    def validate_input(self, text: str, data: dict[str, Any]) -> bool:
        """Run the step's custom validator; steps without one accept anything."""
        if self.validator is None:
            return True
        return ValidatorRegistry.validate(self.validator, text, data)


def goto(step_id: str) -> NextStepResolver:
    """Resolver for an unconditional transition."""
    return lambda data: step_id


@dataclass(frozen=True)
class ChangeTarget:
    """Change-request keywords pointing at the step they re-open.

    ``excluded`` words veto the match, e.g. "plan" targets plan selection
    but "plan default" is an investment answer.
    """

    step: str
    keywords: tuple[str, ...]
    excluded: tuple[str, ...] = ()


@dataclass(frozen=True)
class TaskDefinition:
    """A complete guided transaction.

    ``advice_refusal`` is said instead of processing a turn that asks for
    personal advice; tasks without one treat such turns as answers.
    """

    task: TaskType
    first_step: str
    steps: dict[str, StepDefinition]
    display_name: str
    artifact: str
    change_targets: tuple[ChangeTarget, ...] = field(default_factory=tuple)
    advice_refusal: str | None = None


class StepCatalog:
    """In-memory catalog of task definitions."""

    def __init__(self, tasks: Iterable[TaskDefinition] = ()) -> None:
        self._tasks: dict[TaskType, TaskDefinition] = {}
        for task in tasks:
            self.register(task)

    def register(self, definition: TaskDefinition) -> None:
        """Add a task, checking that its static references resolve.

        Raises:
            CatalogError: If the first step, a change target or a validator is unknown
        """
        if definition.first_step not in definition.steps:
            raise CatalogError(
                "First step not defined",
                task=definition.task.value,
                step=definition.first_step,
            )
        for step_id, step in definition.steps.items():
            if step_id != step.id:
                raise CatalogError(
                    "Step keyed under a different id", task=definition.task.value, step=step_id
                )
            if step.validator and not ValidatorRegistry.is_registered(step.validator):
                raise CatalogError(
                    "Step references an unregistered validator",
                    task=definition.task.value,
                    step=step_id,
                    validator=step.validator,
                )
        for target in definition.change_targets:
            if target.step not in definition.steps:
                raise CatalogError(
                    "Change target not defined", task=definition.task.value, step=target.step
                )

        if definition.task in self._tasks:
            logger.warning(f"Task '{definition.task.value}' already registered, overwriting")
        self._tasks[definition.task] = definition
        logger.debug(
            f"Registered task '{definition.task.value}' with {len(definition.steps)} steps"
        )

    @property
    def tasks(self) -> list[TaskType]:
        return list(self._tasks)

    def get_task(self, task: TaskType) -> TaskDefinition:
        """Get a task definition.

        Raises:
            CatalogError: If the task is not registered
        """
        definition = self._tasks.get(task)
        if definition is None:
            raise CatalogError("Unknown task", task=getattr(task, "value", task))
        return definition

    def get_steps(self, task: TaskType) -> dict[str, StepDefinition]:
        return self.get_task(task).steps

    def get_first_step(self, task: TaskType) -> str | None:
        definition = self._tasks.get(task)
        return definition.first_step if definition else None

    def get_step(self, task: TaskType, step_id: str) -> StepDefinition:
        """Get one step of a task.

        Raises:
            CatalogError: If the task or the step is unknown
        """
        step = self.get_task(task).steps.get(step_id)
        if step is None:
            raise CatalogError("Unknown step", task=task.value, step=step_id)
        return step
