"""Withdrawal information task.

Informational only: two questions, then an eligibility summary that ends
the task without a confirmation gate. Nothing is submitted and no amounts
or advice are given.
"""

from typing import Any

from bella.config.models import BellaSettings
from bella.core.constants import ErrorKind, RequiredInput, TaskType
from bella.flow.catalog import ChangeTarget, StepDefinition, TaskDefinition, goto
from bella.validation.validators import age_answer, employment_answer

AGE_CHECK = "AGE_CHECK"
EMPLOYMENT_CHECK = "EMPLOYMENT_CHECK"
ELIGIBILITY_SUMMARY = "ELIGIBILITY_SUMMARY"

ADVICE_REFUSAL = (
    "I can't provide financial advice. I'm only explaining general withdrawal rules. "
    "For guidance on your situation, please talk to a licensed professional or your "
    "plan administrator."
)

_CLOSING = (
    " Keep in mind that withdrawals before 59½ may be subject to taxes and an "
    "early-withdrawal penalty, while withdrawals after 59½ typically avoid the penalty "
    "(taxes still apply). Your plan administrator can provide details about your situation."
)


def _age_prompt(data: dict[str, Any], error: ErrorKind | None) -> str:
    if error is not None:
        return (
            "I need to know if you're 59½ or older. "
            "You can say your age (like '62' or '60') or yes or no."
        )
    return "Are you 59½ or older? You can say your age (like '62' or '60') or yes or no."


def _employment_prompt(data: dict[str, Any], error: ErrorKind | None) -> str:
    ask = "Are you currently employed by the company that holds this 401(k)?"
    if error is not None:
        return f"Please say yes or no, or tell me if you've left or retired. {ask}"
    return ask


def eligibility_summary(data: dict[str, Any], error: ErrorKind | None = None) -> str:
    """Plain-English summary of which withdrawal rules likely apply."""
    older = bool(data.get("is_59_or_older"))
    employed = bool(data.get("is_employed"))

    if older and employed:
        summary = (
            "Because you're over 59½ and still employed, your plan may allow "
            "in-service withdrawals."
        )
    elif older:
        summary = (
            "Because you're over 59½ and no longer employed, you generally have more "
            "flexibility with withdrawals."
        )
    elif employed:
        summary = (
            "Because you're under 59½ and still employed, plan rules often limit "
            "withdrawals to specific situations like hardship."
        )
    else:
        summary = (
            "Because you're under 59½ and no longer employed, different withdrawal "
            "options may apply depending on your plan."
        )
    summary += (
        " The exact amount depends on your vested balance and plan rules, and your "
        "plan administrator can tell you what you're eligible to withdraw."
    )
    return summary + _CLOSING


def build_withdrawal_task(settings: BellaSettings) -> TaskDefinition:
    steps = {
        AGE_CHECK: StepDefinition(
            id=AGE_CHECK,
            field="is_59_or_older",
            required_input=RequiredInput.TEXT,
            prompt=_age_prompt,
            validator="age_check",
            normalizer=age_answer,
            next_step=goto(EMPLOYMENT_CHECK),
            options=("Yes", "No"),
        ),
        EMPLOYMENT_CHECK: StepDefinition(
            id=EMPLOYMENT_CHECK,
            field="is_employed",
            required_input=RequiredInput.TEXT,
            prompt=_employment_prompt,
            validator="employment_status",
            normalizer=employment_answer,
            next_step=goto(ELIGIBILITY_SUMMARY),
            options=("Yes", "No"),
        ),
        ELIGIBILITY_SUMMARY: StepDefinition(
            id=ELIGIBILITY_SUMMARY,
            required_input=RequiredInput.NONE,
            prompt=eligibility_summary,
        ),
    }
    return TaskDefinition(
        task=TaskType.WITHDRAWAL,
        first_step=AGE_CHECK,
        steps=steps,
        display_name="Withdrawal information",
        artifact="withdrawal information",
        change_targets=(
            ChangeTarget(step=AGE_CHECK, keywords=("age", "old", "older")),
            ChangeTarget(step=EMPLOYMENT_CHECK, keywords=("employed", "employment", "job")),
        ),
        advice_refusal=ADVICE_REFUSAL,
    )
