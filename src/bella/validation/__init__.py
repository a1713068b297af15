"""Validation module for Bella."""

# Import validators to auto-register them
from bella.validation import validators  # noqa: F401
from bella.validation.policies import (
    LoanAmountPolicy,
    LoanTermPolicy,
    NumberPolicy,
    PercentagePolicy,
)
from bella.validation.registry import ValidatorRegistry

__all__ = [
    "LoanAmountPolicy",
    "LoanTermPolicy",
    "NumberPolicy",
    "PercentagePolicy",
    "ValidatorRegistry",
]
