"""Conversation pattern helpers used by the dialogue controller."""

from bella.dm.patterns.advice import is_advice_request
from bella.dm.patterns.confirmation import ConfirmationGate
from bella.dm.patterns.correction import fields_from, is_change_request, resolve_change_target
from bella.dm.patterns.general import answer_general_question

__all__ = [
    "ConfirmationGate",
    "answer_general_question",
    "fields_from",
    "is_advice_request",
    "is_change_request",
    "resolve_change_target",
]
