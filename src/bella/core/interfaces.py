"""Core interfaces (Protocols) for the controller's collaborators."""

from typing import TYPE_CHECKING, Protocol

from bella.core.constants import TaskType
from bella.core.types import Intent, InterpreterContext, Response

if TYPE_CHECKING:
    from bella.flow.catalog import StepDefinition, TaskDefinition


class IInputInterpreter(Protocol):
    """Interface for input interpretation.

    Must be deterministic for a given text/context pair.
    """

    def classify(self, text: str, context: InterpreterContext) -> Intent:
        """Classify free text into a coarse intent.

        Args:
            text: User utterance, already speech-to-text normalized
            context: Required input kind and active task

        Returns:
            Classified intent
        """
        ...

    def extract_number(self, text: str) -> float | None: ...

    def extract_yes_no(self, text: str) -> bool | None: ...


class IStepCatalog(Protocol):
    """Interface for the data-driven task/step catalog."""

    def get_steps(self, task: TaskType) -> dict[str, "StepDefinition"]:
        """Get all step definitions of a task keyed by step id.

        Raises:
            CatalogError: If the task is unknown
        """
        ...

    def get_first_step(self, task: TaskType) -> str | None: ...

    def get_step(self, task: TaskType, step_id: str) -> "StepDefinition":
        """Get one step definition.

        Raises:
            CatalogError: If the task or step is unknown
        """
        ...

    def get_task(self, task: TaskType) -> "TaskDefinition": ...


class IResponseShaper(Protocol):
    """Interface for optional response post-processing (phrasing only)."""

    def shape(self, response: Response) -> Response: ...
