"""Bella - task-oriented dialogue controller for retirement plan transactions.

Bella walks a participant through guided transactions (401(k) loans, plan
enrollment, withdrawal information) one utterance at a time, validating
each answer and gating submissions behind an exact confirmation phrase.

Quick start:
    from bella import DialogueController

    controller = DialogueController()
    controller.handle_user_input("I want to apply for a loan")
    controller.handle_user_input("5000")
"""

from bella.__version__ import __version__
from bella.config import BellaSettings, ConfigLoader
from bella.core import DialoguePhase, DialogueState, Response, UIHint
from bella.dm import DialogueController
from bella.tasks import build_default_catalog

__all__ = [
    "BellaSettings",
    "ConfigLoader",
    "DialogueController",
    "DialoguePhase",
    "DialogueState",
    "Response",
    "UIHint",
    "__version__",
    "build_default_catalog",
]
