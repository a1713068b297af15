"""Keyword-table input interpreter.

Deterministic classification with explicit word tables, so the same
text/context pair always yields the same intent.
"""

import logging

from bella.config.models import VocabularyConfig
from bella.core.constants import IntentKind, RequiredInput, TaskType
from bella.core.types import Intent, InterpreterContext
from bella.du.extraction import (
    contains_any,
    extract_number,
    extract_yes_no,
    tokenize,
)

logger = logging.getLogger(__name__)

# First match wins, so "how does vesting affect withdrawals" starts vesting
TASK_KEYWORDS: dict[TaskType, tuple[str, ...]] = {
    TaskType.LOAN: ("loan", "loans", "borrow"),
    TaskType.ENROLLMENT: ("enroll", "enrol", "enrollment", "sign up"),
    TaskType.VESTING: ("vesting", "vested", "vest"),
    TaskType.WITHDRAWAL: ("withdraw", "withdrawal", "withdrawals", "cash out"),
}

# Informational tasks start even from a question ("how much can I withdraw?")
QUESTION_STARTABLE_TASKS = frozenset({TaskType.WITHDRAWAL, TaskType.VESTING})

QUESTION_WORDS = frozenset(
    {
        "what",
        "what's",
        "how",
        "why",
        "when",
        "who",
        "where",
        "which",
        "is",
        "are",
        "does",
        "explain",
    }
)
ACTION_WORDS = (
    "apply",
    "start",
    "take",
    "get",
    "want",
    "need",
    "like",
    "begin",
    "open",
    "request",
    "help me",
)
TOPIC_WORDS = (
    "contribution",
    "contributions",
    "contribute",
    "investment",
    "investments",
    "portfolio",
    "beneficiary",
    "beneficiaries",
    "question",
)
CONFIRM_WORDS = ("confirm", "submit")
BACK_WORDS = ("back",)
_POLITE_SUFFIXES = frozenset({"please", "now"})


def is_bare_command(tokens: list[str], words: tuple[str, ...] | list[str]) -> bool:
    """Whether the turn is just one command word, optionally followed by "please"."""
    if len(tokens) == 2 and tokens[1] in _POLITE_SUFFIXES:
        tokens = tokens[:1]
    return len(tokens) == 1 and tokens[0] in words


class KeywordInterpreter:
    """Default input interpreter backed by keyword tables."""

    def __init__(self, vocabulary: VocabularyConfig | None = None) -> None:
        self.vocabulary = vocabulary or VocabularyConfig()

    def classify(self, text: str, context: InterpreterContext) -> Intent:
        """Classify a turn into a coarse intent.

        Global commands win over everything else; then the expected input
        kind decides between CONFIRM and ANSWER_INPUT; only without an
        active task are task starts and general questions considered.
        """
        intent = self._classify(text, context)
        logger.debug(
            f"Classified '{text}' as {intent.kind.value}",
            extra={"required_input": context.required_input.value, "task": intent.task},
        )
        return intent

    def _classify(self, text: str, context: InterpreterContext) -> Intent:
        vocab = self.vocabulary
        tokens = tokenize(text)

        if contains_any(text, vocab.cancel_phrases) or is_bare_command(tokens, vocab.cancel_words):
            return Intent(kind=IntentKind.CANCEL)
        if contains_any(text, vocab.back_phrases) or is_bare_command(tokens, BACK_WORDS):
            return Intent(kind=IntentKind.GO_BACK)
        if contains_any(text, vocab.repeat_phrases):
            return Intent(kind=IntentKind.REPEAT)

        if context.required_input == RequiredInput.CONFIRMATION:
            if extract_yes_no(text) is True or contains_any(text, CONFIRM_WORDS):
                return Intent(kind=IntentKind.CONFIRM)
            return Intent(kind=IntentKind.UNKNOWN)

        if context.active_task is not None:
            return Intent(kind=IntentKind.ANSWER_INPUT)

        question_led = bool(tokens) and (tokens[0] in QUESTION_WORDS or text.rstrip().endswith("?"))
        wants_action = contains_any(text, ACTION_WORDS)
        for task, keywords in TASK_KEYWORDS.items():
            if not contains_any(text, keywords):
                continue
            if wants_action or not question_led or task in QUESTION_STARTABLE_TASKS:
                return Intent.start(task)

        if question_led or contains_any(text, TOPIC_WORDS):
            return Intent(kind=IntentKind.GENERAL_QUESTION)
        return Intent(kind=IntentKind.UNKNOWN)

    def extract_number(self, text: str) -> float | None:
        return extract_number(text)

    def extract_yes_no(self, text: str) -> bool | None:
        return extract_yes_no(text)
