"""State factory functions."""

from bella.core.constants import DialoguePhase, TaskType
from bella.core.types import DialogueState


def create_idle_state() -> DialogueState:
    """Create the Idle default state."""
    return DialogueState()


def create_task_state(task: TaskType, first_step: str) -> DialogueState:
    """Create a fresh state for a newly started task.

    Nothing carries over from a previous attempt.
    """
    return DialogueState(
        phase=DialoguePhase.TASK_IN_PROGRESS,
        active_task=task,
        active_step=first_step,
    )


def snapshot(state: DialogueState) -> DialogueState:
    """Deep copy of a state, safe to hand out or restore."""
    return state.model_copy(deep=True)
