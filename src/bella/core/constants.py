"""Core constants and enums."""

from enum import Enum


class DialoguePhase(str, Enum):
    """Coarse lifecycle marker of a conversation, independent of the step."""

    IDLE = "idle"
    TASK_IN_PROGRESS = "task_in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class RequiredInput(str, Enum):
    """Expected shape of the next user turn."""

    NONE = "none"
    NUMBER = "number"
    YES_NO = "yes_no"
    TEXT = "text"
    CONFIRMATION = "confirmation"


class UIHint(str, Enum):
    """Rendering hint attached to every response."""

    SPEAKING = "speaking"
    AWAITING_INPUT = "awaiting_input"
    CONFIRMATION_REQUIRED = "confirmation_required"
    COMPLETED = "completed"
    ERROR = "error"
    IDLE = "idle"


class ErrorKind(str, Enum):
    """Conversational error taxonomy.

    Every kind except UNKNOWN_STEP_OR_TASK is recovered locally by
    re-prompting the current step.
    """

    EMPTY = "empty"
    UNINTELLIGIBLE = "unintelligible"
    AMBIGUOUS = "ambiguous"
    INVALID = "invalid"
    OUT_OF_RANGE = "out_of_range"
    ZERO_OR_NEGATIVE = "zero_or_negative"
    OVER_MAX = "over_max"
    OVER_BALANCE = "over_balance"
    WRONG_UNIT = "wrong_unit"
    INVALID_CONFIRMATION_PHRASE = "invalid_confirmation_phrase"
    UNKNOWN_STEP_OR_TASK = "unknown_step_or_task"


class IntentKind(str, Enum):
    """Coarse intent tags produced by the input interpreter."""

    START_TASK = "start_task"
    ANSWER_INPUT = "answer_input"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    GO_BACK = "go_back"
    REPEAT = "repeat"
    GENERAL_QUESTION = "general_question"
    UNKNOWN = "unknown"


class TaskType(str, Enum):
    """Guided transactions the assistant can run."""

    LOAN = "loan"
    ENROLLMENT = "enrollment"
    WITHDRAWAL = "withdrawal"
    VESTING = "vesting"


# Intents handled the same way whether or not a task is active
GLOBAL_INTENTS = frozenset({IntentKind.CANCEL, IntentKind.GO_BACK, IntentKind.REPEAT})

IDLE_MENU = ["Enrollment", "Loan", "General question"]
TASK_HELP_REPLIES = ["Repeat", "Go back", "Cancel"]
COMPLETION_REPLIES = ["Exit voice mode", "Start new task"]
