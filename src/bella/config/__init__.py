"""Configuration module for Bella."""

from bella.config.loader import ConfigLoader
from bella.config.models import (
    BellaSettings,
    ConfirmationConfig,
    ContributionPolicyConfig,
    LoanPolicyConfig,
    VestingConfig,
    VocabularyConfig,
)

__all__ = [
    "BellaSettings",
    "ConfigLoader",
    "ConfirmationConfig",
    "ContributionPolicyConfig",
    "LoanPolicyConfig",
    "VestingConfig",
    "VocabularyConfig",
]
