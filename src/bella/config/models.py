"""Settings models.

Every value has a default, so ``BellaSettings()`` is a complete configuration.
"""

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from bella.core.constants import TaskType


class LoanPolicyConfig(BaseModel):
    """401(k) loan limits applied to the loan steps."""

    max_absolute: float = Field(default=50_000, gt=0, description="Absolute loan cap")
    available_balance: float = Field(default=100_000, ge=0, description="Vested balance")
    max_fraction_of_balance: float = Field(
        default=0.5, gt=0, le=1, description="Share of the balance that may be borrowed"
    )
    min_term_years: int = Field(default=1, ge=1)
    max_term_years: int = Field(default=5, ge=1)
    annual_rate: float = Field(default=0.085, ge=0, description="Annual interest rate")

    @model_validator(mode="after")
    def _check_term_bounds(self) -> "LoanPolicyConfig":
        if self.min_term_years > self.max_term_years:
            raise ValueError("min_term_years must not exceed max_term_years")
        return self


class ContributionPolicyConfig(BaseModel):
    """Bounds for the enrollment contribution percentage."""

    min_percent: float = Field(default=1, ge=0)
    max_percent: float = Field(default=100, le=100)


class VocabularyConfig(BaseModel):
    """Keyword tables used by the interpreter and the controller heuristics."""

    hedging_words: list[str] = Field(
        default_factory=lambda: [
            "around",
            "about",
            "approximately",
            "maybe",
            "perhaps",
            "roughly",
            "somewhere",
        ]
    )
    contribution_hedging_words: list[str] = Field(
        default_factory=lambda: ["suggest", "recommend", "advise"],
        description="Extra hedging words rejected by the contribution step",
    )
    change_words: list[str] = Field(
        default_factory=lambda: ["change", "modify", "update", "different", "instead", "actually"]
    )
    month_words: list[str] = Field(default_factory=lambda: ["month", "months", "mo", "mos"])
    cancel_phrases: list[str] = Field(
        default_factory=lambda: ["cancel", "never mind", "nevermind", "abort"],
        description="Matched anywhere in the utterance",
    )
    cancel_words: list[str] = Field(
        default_factory=lambda: ["stop", "quit", "exit"],
        description='Cancel only as the whole utterance ("I quit last year" is an answer)',
    )
    back_phrases: list[str] = Field(
        default_factory=lambda: [
            "go back",
            "step back",
            "previous step",
            "previous question",
            "undo",
        ],
        description='Matched anywhere; a bare "back" is also accepted as the whole utterance',
    )
    repeat_phrases: list[str] = Field(
        default_factory=lambda: ["repeat", "say that again", "say again", "come again", "pardon"]
    )


def _default_allow_lists() -> dict[TaskType, list[str]]:
    return {
        TaskType.LOAN: [
            "yes, submit loan",
            "confirm loan application",
            "yes submit loan",
            "confirm loan",
        ],
        TaskType.ENROLLMENT: [
            "yes, submit enrollment",
            "confirm enrollment",
            "yes submit enrollment",
            "submit enrollment",
        ],
    }


class ConfirmationConfig(BaseModel):
    """Exact-phrase allow-lists gating irreversible submissions.

    The first phrase of each list is the one shown to the user.
    """

    phrases: dict[TaskType, list[str]] = Field(default_factory=_default_allow_lists)

    @model_validator(mode="after")
    def _check_non_empty(self) -> "ConfirmationConfig":
        for task, phrases in self.phrases.items():
            if not phrases or any(not p.strip() for p in phrases):
                raise ValueError(f"Confirmation phrases for '{task.value}' must be non-empty")
        return self


class VestingConfig(BaseModel):
    """Optional plan vesting details quoted by the vesting explanation."""

    schedule_type: Literal["cliff", "graded"] | None = None
    current_vesting_pct: float | None = Field(
        default=None, ge=0, le=100, description="Vested share of employer contributions"
    )


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")


class BellaSettings(BaseModel):
    """Global settings."""

    loan: LoanPolicyConfig = Field(default_factory=LoanPolicyConfig)
    contribution: ContributionPolicyConfig = Field(default_factory=ContributionPolicyConfig)
    vocabulary: VocabularyConfig = Field(default_factory=VocabularyConfig)
    confirmation: ConfirmationConfig = Field(default_factory=ConfirmationConfig)
    vesting: VestingConfig = Field(default_factory=VestingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
