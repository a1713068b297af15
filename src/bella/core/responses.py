"""Response factory functions.

One factory per UI hint so call sites never assemble hint/flag
combinations by hand.
"""

from bella.core.constants import COMPLETION_REPLIES, RequiredInput, UIHint
from bella.core.types import Response


def prompt(
    text: str,
    required_input: RequiredInput,
    *,
    quick_replies: list[str] | None = None,
) -> Response:
    """Ask the current step's question (or just speak when no input is expected)."""
    hint = UIHint.SPEAKING if required_input == RequiredInput.NONE else UIHint.AWAITING_INPUT
    return Response(text=text, ui_hint=hint, quick_replies=quick_replies or [])


def speaking(text: str, *, quick_replies: list[str] | None = None) -> Response:
    """Informational response that does not wait on a specific input."""
    return Response(text=text, ui_hint=UIHint.SPEAKING, quick_replies=quick_replies or [])


def awaiting(text: str, *, quick_replies: list[str] | None = None) -> Response:
    """Re-ask or clarification; the conversation waits for input."""
    return Response(text=text, ui_hint=UIHint.AWAITING_INPUT, quick_replies=quick_replies or [])


def confirmation_required(text: str, phrase: str) -> Response:
    """Terminal-pending response carrying the exact phrase to repeat."""
    return Response(
        text=text,
        ui_hint=UIHint.CONFIRMATION_REQUIRED,
        requires_confirmation=True,
        confirmation_phrase=phrase,
        quick_replies=[phrase[:1].upper() + phrase[1:], "Cancel"],
    )


def completed(text: str) -> Response:
    return Response(text=text, ui_hint=UIHint.COMPLETED, quick_replies=list(COMPLETION_REPLIES))


def idle(text: str, *, quick_replies: list[str] | None = None) -> Response:
    return Response(text=text, ui_hint=UIHint.IDLE, quick_replies=quick_replies or [])


def error(message: str) -> Response:
    """Generic error response; ``error_message`` mirrors the text."""
    return Response(text=message, ui_hint=UIHint.ERROR, error_message=message)
