"""Mid-flow change requests ("actually, change the amount").

Detection and target resolution are plain substring/keyword tables so the
same utterance always re-opens the same step.
"""

import logging
from collections.abc import Iterable

from bella.du.extraction import contains_any
from bella.flow.catalog import TaskDefinition

logger = logging.getLogger(__name__)


def is_change_request(text: str, change_words: Iterable[str]) -> bool:
    """Whether the utterance uses change vocabulary anywhere."""
    lowered = text.lower()
    return any(word in lowered for word in change_words)


def resolve_change_target(
    text: str,
    task: TaskDefinition,
    visited: list[str],
) -> str | None:
    """Map a change request to the step it should re-open.

    Args:
        text: User utterance
        task: Active task definition with its change keyword table
        visited: Steps already reached in this task (history plus current)

    Returns:
        Target step id, or None when no keyword matches a visited step
    """
    for target in task.change_targets:
        if not contains_any(text, target.keywords):
            continue
        if target.excluded and contains_any(text, target.excluded):
            continue
        if target.step not in visited:
            logger.debug(f"Change target {target.step} not visited yet, ignoring")
            continue
        logger.info(f"Change request re-opens {target.step}")
        return target.step
    return None


def fields_from(task: TaskDefinition, order: list[str], target: str) -> list[str]:
    """Field keys of ``target`` and every step visited after it."""
    start = order.index(target)
    keys = []
    for step_id in order[start:]:
        field = task.steps[step_id].field
        if field:
            keys.append(field)
    return keys
