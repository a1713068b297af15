"""Exact-phrase confirmation gate for irreversible submissions."""

import logging

from bella.config.models import ConfirmationConfig
from bella.core.constants import TaskType
from bella.du.extraction import NO_WORDS, tokenize

logger = logging.getLogger(__name__)


class ConfirmationGate:
    """Accepts a submission only when the user says an allow-listed phrase.

    A turn matches when, lowercased and stripped, it equals or contains one
    of the task's phrases and carries no negation ("no, don't confirm loan").
    Generic assent ("yes", "confirm", "submit") never matches on its own.
    """

    def __init__(self, config: ConfirmationConfig) -> None:
        self.config = config

    def phrases(self, task: TaskType) -> list[str]:
        return self.config.phrases.get(task, [])

    def required_phrase(self, task: TaskType) -> str | None:
        """Phrase shown to the user (the first allow-listed one)."""
        phrases = self.phrases(task)
        return phrases[0] if phrases else None

    def accepts(self, task: TaskType, text: str) -> bool:
        normalized = text.lower().strip()
        if NO_WORDS.intersection(tokenize(normalized)):
            logger.info(f"Confirmation rejected for {task.value}: negated")
            return False
        for phrase in self.phrases(task):
            candidate = phrase.lower()
            if normalized == candidate or candidate in normalized:
                logger.info(f"Confirmation accepted for {task.value}")
                return True
        logger.info(f"Confirmation rejected for {task.value}")
        return False
