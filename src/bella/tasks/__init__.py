"""Built-in tasks: loan application, plan enrollment, withdrawal and vesting info."""

from bella.config.models import BellaSettings
from bella.flow.catalog import StepCatalog
from bella.tasks.enrollment import build_enrollment_task
from bella.tasks.loan import build_loan_task
from bella.tasks.vesting import build_vesting_task
from bella.tasks.withdrawal import build_withdrawal_task


def build_default_catalog(settings: BellaSettings | None = None) -> StepCatalog:
    """Build a catalog with every built-in task.

    Args:
        settings: Limits, vocabularies and allow-lists; defaults when omitted

    Returns:
        Catalog ready to hand to a DialogueController
    """
    settings = settings or BellaSettings()
    return StepCatalog(
        [
            build_loan_task(settings),
            build_enrollment_task(settings),
            build_withdrawal_task(settings),
            build_vesting_task(settings),
        ]
    )


__all__ = [
    "build_default_catalog",
    "build_enrollment_task",
    "build_loan_task",
    "build_vesting_task",
    "build_withdrawal_task",
]
