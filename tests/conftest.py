"""Shared fixtures for Bella tests.

Every controller uses the built-in catalog and default settings unless a
test builds its own, so expected prompts and limits are deterministic.
"""

import logging

import pytest

from bella.config.models import BellaSettings
from bella.dm.controller import DialogueController
from bella.flow.catalog import StepCatalog
from bella.tasks import build_default_catalog


@pytest.fixture
def settings() -> BellaSettings:
    return BellaSettings()


@pytest.fixture
def catalog(settings: BellaSettings) -> StepCatalog:
    return build_default_catalog(settings)


@pytest.fixture
def controller(settings: BellaSettings, catalog: StepCatalog) -> DialogueController:
    return DialogueController(catalog=catalog, settings=settings, conversation_id="test")


@pytest.fixture
def loan_controller(controller: DialogueController) -> DialogueController:
    """Controller sitting at the loan amount step."""
    controller.handle_user_input("I want to apply for a loan")
    return controller


@pytest.fixture
def loan_at_confirmation(loan_controller: DialogueController) -> DialogueController:
    """Controller with amount, term and repayment answered."""
    loan_controller.handle_user_input("5000")
    loan_controller.handle_user_input("5")
    loan_controller.handle_user_input("yes")
    return loan_controller


@pytest.fixture
def enrollment_controller(controller: DialogueController) -> DialogueController:
    """Controller sitting at the plan selection step."""
    controller.handle_user_input("I want to enroll")
    return controller


@pytest.fixture
def restore_bella_logger():
    """Undo setup_logging changes to the package logger."""
    bella_logger = logging.getLogger("bella")
    handlers = list(bella_logger.handlers)
    level = bella_logger.level
    propagate = bella_logger.propagate
    yield bella_logger
    for handler in bella_logger.handlers:
        if handler not in handlers:
            handler.close()
    bella_logger.handlers = handlers
    bella_logger.setLevel(level)
    bella_logger.propagate = propagate
