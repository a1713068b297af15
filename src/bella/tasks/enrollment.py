"""Retirement plan enrollment task.

PLAN_SELECTION -> CONTRIBUTION -> INVESTMENTS -> [RISK_LEVEL] -> CONFIRM_SUBMIT

Only a manual allocation asks for a risk level; plan-default and
advisor-managed investments go straight to confirmation.
"""

from typing import Any

from bella.config.models import BellaSettings
from bella.core.constants import ErrorKind, RequiredInput, TaskType
from bella.flow.catalog import ChangeTarget, StepDefinition, TaskDefinition, goto
from bella.tasks.formatting import percent, quote
from bella.validation.policies import PercentagePolicy
from bella.validation.validators import (
    normalize_investment_approach,
    normalize_plan,
    normalize_risk_level,
)

PLAN_SELECTION = "PLAN_SELECTION"
CONTRIBUTION = "CONTRIBUTION"
INVESTMENTS = "INVESTMENTS"
RISK_LEVEL = "RISK_LEVEL"
CONFIRM_SUBMIT = "CONFIRM_SUBMIT"

PLAN_LABELS = {
    "traditional_401k": "Traditional 401(k)",
    "roth_401k": "Roth 401(k)",
    "roth_ira": "Roth IRA",
}
APPROACH_LABELS = {
    "plan_default": "the plan's default investments",
    "manual_allocation": "your own allocation",
    "advisor_managed": "advisor-managed investments",
}


def _after_investments(data: dict[str, Any]) -> str:
    if data.get("investment_approach") == "manual_allocation":
        return RISK_LEVEL
    return CONFIRM_SUBMIT


def build_enrollment_task(settings: BellaSettings) -> TaskDefinition:
    """Build the enrollment task from the configured bounds and allow-list."""
    bounds = settings.contribution
    vocabulary = settings.vocabulary
    percentage_policy = PercentagePolicy(
        bounds, [*vocabulary.hedging_words, *vocabulary.contribution_hedging_words]
    )
    allow_list = settings.confirmation.phrases.get(TaskType.ENROLLMENT, [])
    phrase = allow_list[0] if allow_list else ""
    percent_range = f"from {percent(bounds.min_percent)} to {percent(bounds.max_percent)}"

    def plan_prompt(data: dict[str, Any], error: ErrorKind | None) -> str:
        ask = (
            "Which plan would you like to enroll in: "
            "Traditional 401(k), Roth 401(k), or Roth IRA?"
        )
        if error is not None:
            return f"I didn't recognize that plan. {ask}"
        return ask

    def contribution_prompt(data: dict[str, Any], error: ErrorKind | None) -> str:
        ask = (
            f"What percentage of each paycheck would you like to contribute? "
            f"Choose a number {percent_range}."
        )
        if error == ErrorKind.AMBIGUOUS:
            return (
                f"I can't choose or estimate a percentage for you, "
                f"so I need an exact number. {ask}"
            )
        if error == ErrorKind.OUT_OF_RANGE:
            return f"Contributions must be {percent_range}. {ask}"
        if error == ErrorKind.INVALID:
            return f"I couldn't find a percentage in that. {ask}"
        return ask

    def investments_prompt(data: dict[str, Any], error: ErrorKind | None) -> str:
        ask = (
            "How would you like your money invested? You can use the plan default, "
            "choose a manual allocation, or have it advisor managed."
        )
        if error is not None:
            return f"I didn't catch which option you want. {ask}"
        return ask

    def risk_prompt(data: dict[str, Any], error: ErrorKind | None) -> str:
        ask = "What risk level suits you: conservative, moderate, growth, or aggressive?"
        if error is not None:
            return f"Please pick one of the four risk levels. {ask}"
        return ask

    def confirm_prompt(data: dict[str, Any], error: ErrorKind | None) -> str:
        if error == ErrorKind.INVALID_CONFIRMATION_PHRASE:
            return (
                f"To protect your account I need the exact phrase. "
                f"Please say {quote(phrase)} to submit, or say cancel to stop."
            )
        plan = PLAN_LABELS.get(data.get("selected_plan", ""), data.get("selected_plan"))
        approach = APPROACH_LABELS.get(
            data.get("investment_approach", ""), data.get("investment_approach")
        )
        summary = (
            f"You're enrolling in the {plan}, contributing "
            f"{percent(data['contribution_percentage'])} of each paycheck, with {approach}"
        )
        if "risk_level" in data:
            summary += f" at a {data['risk_level']} risk level"
        return f"{summary}. To submit your enrollment, say {quote(phrase)}."

    steps = {
        PLAN_SELECTION: StepDefinition(
            id=PLAN_SELECTION,
            field="selected_plan",
            required_input=RequiredInput.TEXT,
            prompt=plan_prompt,
            validator="plan_choice",
            normalizer=normalize_plan,
            next_step=goto(CONTRIBUTION),
            options=tuple(PLAN_LABELS.values()),
        ),
        CONTRIBUTION: StepDefinition(
            id=CONTRIBUTION,
            field="contribution_percentage",
            required_input=RequiredInput.NUMBER,
            prompt=contribution_prompt,
            policy=percentage_policy,
            next_step=goto(INVESTMENTS),
        ),
        INVESTMENTS: StepDefinition(
            id=INVESTMENTS,
            field="investment_approach",
            required_input=RequiredInput.TEXT,
            prompt=investments_prompt,
            validator="investment_approach",
            normalizer=normalize_investment_approach,
            next_step=_after_investments,
            options=("Plan default", "Manual allocation", "Advisor managed"),
        ),
        RISK_LEVEL: StepDefinition(
            id=RISK_LEVEL,
            field="risk_level",
            required_input=RequiredInput.TEXT,
            prompt=risk_prompt,
            validator="risk_level",
            normalizer=normalize_risk_level,
            next_step=goto(CONFIRM_SUBMIT),
            options=("Conservative", "Moderate", "Growth", "Aggressive"),
        ),
        CONFIRM_SUBMIT: StepDefinition(
            id=CONFIRM_SUBMIT,
            required_input=RequiredInput.CONFIRMATION,
            prompt=confirm_prompt,
        ),
    }
    return TaskDefinition(
        task=TaskType.ENROLLMENT,
        first_step=PLAN_SELECTION,
        steps=steps,
        display_name="Plan enrollment",
        artifact="enrollment",
        change_targets=(
            ChangeTarget(step=PLAN_SELECTION, keywords=("plan",), excluded=("default",)),
            ChangeTarget(step=CONTRIBUTION, keywords=("contribution", "percentage", "percent")),
            ChangeTarget(step=INVESTMENTS, keywords=("investment", "investments", "allocation")),
            ChangeTarget(step=RISK_LEVEL, keywords=("risk",)),
        ),
    )
