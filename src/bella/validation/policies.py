"""Numeric acceptance policies for NUMBER steps.

A policy inspects an already-extracted number (and the raw text, for unit
or hedging words) and returns the error kind to report, or None to accept.
Rejections never touch other collected fields.
"""

from collections.abc import Iterable
from typing import Protocol

from bella.config.models import ContributionPolicyConfig, LoanPolicyConfig
from bella.core.constants import ErrorKind
from bella.du.extraction import contains_any


class NumberPolicy(Protocol):
    def check(self, value: float, text: str) -> ErrorKind | None: ...


class LoanAmountPolicy:
    """Loan amount limits.

    Checked in order: non-positive, absolute cap, share of available balance.
    The cap itself is accepted.
    """

    def __init__(self, config: LoanPolicyConfig) -> None:
        self.config = config

    @property
    def balance_limit(self) -> float:
        return self.config.available_balance * self.config.max_fraction_of_balance

    @property
    def max_loan(self) -> float:
        """Largest amount that passes every check."""
        return min(self.config.max_absolute, self.balance_limit)

    def check(self, value: float, text: str) -> ErrorKind | None:
        if value <= 0:
            return ErrorKind.ZERO_OR_NEGATIVE
        if value > self.config.max_absolute:
            return ErrorKind.OVER_MAX
        if value > self.balance_limit:
            return ErrorKind.OVER_BALANCE
        return None


class LoanTermPolicy:
    """Repayment term in whole years within the configured range."""

    def __init__(self, config: LoanPolicyConfig, month_words: Iterable[str]) -> None:
        self.config = config
        self.month_words = tuple(month_words)

    def check(self, value: float, text: str) -> ErrorKind | None:
        if contains_any(text, self.month_words):
            return ErrorKind.WRONG_UNIT
        if value != int(value):
            return ErrorKind.OUT_OF_RANGE
        if not self.config.min_term_years <= value <= self.config.max_term_years:
            return ErrorKind.OUT_OF_RANGE
        return None


class PercentagePolicy:
    """Contribution percentage; hedged answers are never accepted."""

    def __init__(self, config: ContributionPolicyConfig, hedging_words: Iterable[str]) -> None:
        self.config = config
        self.hedging_words = tuple(hedging_words)

    def check(self, value: float, text: str) -> ErrorKind | None:
        if contains_any(text, self.hedging_words):
            return ErrorKind.AMBIGUOUS
        if not self.config.min_percent <= value <= self.config.max_percent:
            return ErrorKind.OUT_OF_RANGE
        return None
