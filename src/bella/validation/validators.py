"""Built-in text validators and their normalizers.

Each fixed choice set is an ordered table of (identifier, phrases); the
first identifier with a matching phrase wins, so more specific entries
("roth ira") come before general ones ("roth").
"""

from typing import Any

from bella.du.extraction import contains_any, extract_number, extract_yes_no
from bella.validation.registry import ValidatorRegistry

ChoiceTable = tuple[tuple[str, tuple[str, ...]], ...]

PLAN_CHOICES: ChoiceTable = (
    ("roth_ira", ("roth ira",)),
    ("roth_401k", ("roth 401k", "roth", "pay tax now", "after tax")),
    ("traditional_401k", ("traditional 401k", "traditional", "pre tax", "pretax", "pay tax later")),
)

INVESTMENT_APPROACHES: ChoiceTable = (
    ("plan_default", ("plan default", "default", "target date")),
    ("manual_allocation", ("manual", "myself", "my own", "choose my own")),
    ("advisor_managed", ("advisor", "adviser", "managed", "professional")),
)

RISK_LEVELS: ChoiceTable = (
    ("conservative", ("conservative", "low risk", "safe")),
    ("moderate", ("moderate", "balanced", "medium")),
    ("growth", ("growth",)),
    ("aggressive", ("aggressive", "high risk")),
)


def match_choice(text: str, choices: ChoiceTable) -> str | None:
    """Return the identifier of the first choice whose phrases occur in text."""
    for identifier, phrases in choices:
        if contains_any(text, phrases):
            return identifier
    return None


def normalize_plan(text: str) -> str:
    return match_choice(text, PLAN_CHOICES) or text


def normalize_investment_approach(text: str) -> str:
    return match_choice(text, INVESTMENT_APPROACHES) or text


def normalize_risk_level(text: str) -> str:
    return match_choice(text, RISK_LEVELS) or text


@ValidatorRegistry.register("plan_choice")
def validate_plan_choice(text: str, data: dict[str, Any]) -> bool:
    """Accept only turns naming one of the offered plans."""
    return match_choice(text, PLAN_CHOICES) is not None


@ValidatorRegistry.register("investment_approach")
def validate_investment_approach(text: str, data: dict[str, Any]) -> bool:
    return match_choice(text, INVESTMENT_APPROACHES) is not None


@ValidatorRegistry.register("risk_level")
def validate_risk_level(text: str, data: dict[str, Any]) -> bool:
    return match_choice(text, RISK_LEVELS) is not None


AGE_THRESHOLD = 59.5
PLAUSIBLE_AGES = (18, 100)
OLDER_WORDS = ("older", "over", "above")
YOUNGER_WORDS = ("under", "younger", "below")

# Checked before EMPLOYED_PHRASES: "not employed" contains "employed"
NOT_EMPLOYED_PHRASES = (
    "retired",
    "left",
    "separated",
    "no longer",
    "not employed",
    "unemployed",
    "not working",
    "laid off",
    "quit",
)
EMPLOYED_PHRASES = ("still work", "work there", "still employed", "employed", "working")


def age_answer(text: str) -> bool | None:
    """Whether the participant is 59½ or older.

    A stated age ("62", "I'm 45") is compared with the threshold; otherwise
    comparison words ("older", "under") and plain yes/no decide.
    """
    age = extract_number(text)
    if age is not None and PLAUSIBLE_AGES[0] <= age <= PLAUSIBLE_AGES[1]:
        return age >= AGE_THRESHOLD
    if contains_any(text, YOUNGER_WORDS):
        return False
    if contains_any(text, OLDER_WORDS):
        return True
    return extract_yes_no(text)


def employment_answer(text: str) -> bool | None:
    """Whether the participant still works for the plan sponsor."""
    if contains_any(text, NOT_EMPLOYED_PHRASES):
        return False
    if contains_any(text, EMPLOYED_PHRASES):
        return True
    return extract_yes_no(text)


@ValidatorRegistry.register("age_check")
def validate_age_check(text: str, data: dict[str, Any]) -> bool:
    return age_answer(text) is not None


@ValidatorRegistry.register("employment_status")
def validate_employment_status(text: str, data: dict[str, Any]) -> bool:
    return employment_answer(text) is not None
