"""Vesting information task.

A single informational step: what a vested balance is, the plan's
schedule and vested percentage when configured, and how vesting affects
leaving the company. No dollar amounts are quoted.
"""

from typing import Any

from bella.config.models import BellaSettings, VestingConfig
from bella.core.constants import ErrorKind, RequiredInput, TaskType
from bella.flow.catalog import StepDefinition, TaskDefinition
from bella.tasks.formatting import percent

VESTING_SUMMARY = "VESTING_SUMMARY"

SCHEDULE_LABELS = {"cliff": "cliff vesting", "graded": "graded vesting"}


def vesting_summary(config: VestingConfig) -> str:
    """Explain vesting, with the plan's schedule callout when known."""
    parts = [
        "Your vested balance is the portion of your retirement account you fully own.",
        "Your own contributions are always yours.",
        "Employer contributions may vest over time, depending on your plan.",
    ]
    if config.schedule_type:
        parts.append(f"Your plan uses {SCHEDULE_LABELS[config.schedule_type]}.")
    if config.current_vesting_pct is not None:
        parts.append(
            f"You're currently {percent(config.current_vesting_pct)} vested "
            f"in employer contributions."
        )
    parts.append(
        "Vesting affects how much of the employer portion you keep if you leave the "
        "company: unvested employer money may be forfeited if you aren't fully vested."
    )
    parts.append("Your plan administrator can share your full vesting schedule.")
    return " ".join(parts)


def build_vesting_task(settings: BellaSettings) -> TaskDefinition:
    summary = vesting_summary(settings.vesting)

    def summary_prompt(data: dict[str, Any], error: ErrorKind | None) -> str:
        return summary

    steps = {
        VESTING_SUMMARY: StepDefinition(
            id=VESTING_SUMMARY,
            required_input=RequiredInput.NONE,
            prompt=summary_prompt,
        ),
    }
    return TaskDefinition(
        task=TaskType.VESTING,
        first_step=VESTING_SUMMARY,
        steps=steps,
        display_name="Vesting information",
        artifact="vesting information",
    )
