"""Task and step catalog."""

from bella.flow.catalog import (
    ChangeTarget,
    StepCatalog,
    StepDefinition,
    TaskDefinition,
    goto,
)

__all__ = ["ChangeTarget", "StepCatalog", "StepDefinition", "TaskDefinition", "goto"]
