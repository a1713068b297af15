"""Task-oriented dialogue controller.

One controller owns one DialogueState and reduces each user turn into
exactly one Response. Turns are synchronous: a call to
``handle_user_input`` finishes all step processing before it returns, and
callers must not run two turns against the same controller concurrently.
"""

from collections.abc import Callable
from typing import Any
from uuid import uuid4

from bella.config.models import BellaSettings
from bella.core import responses
from bella.core.constants import (
    IDLE_MENU,
    TASK_HELP_REPLIES,
    DialoguePhase,
    ErrorKind,
    IntentKind,
    RequiredInput,
    TaskType,
)
from bella.core.errors import CatalogError
from bella.core.interfaces import IInputInterpreter, IResponseShaper, IStepCatalog
from bella.core.state import create_idle_state, create_task_state, snapshot
from bella.core.types import DialogueState, InterpreterContext, Response, StepError
from bella.dm.patterns import (
    ConfirmationGate,
    answer_general_question,
    fields_from,
    is_advice_request,
    is_change_request,
    resolve_change_target,
)
from bella.du.extraction import is_hedged
from bella.du.interpreter import KeywordInterpreter
from bella.flow.catalog import StepDefinition
from bella.observability.logging import ContextLogger
from bella.tasks import build_default_catalog

NO_TASK_TEXT = (
    "I can help you with enrollment, loans, or general questions. What would you like to do?"
)
CANCELLED_TEXT = "Cancelled. How can I help you?"
NOTHING_TO_REPEAT = "Nothing to repeat."
INTERNAL_ERROR_TEXT = "Something went wrong on my side. Please try again."
FIRST_STEP_REPLIES = ["Yes, continue", "Cancel"]


class DialogueController:
    """Deterministic state machine for guided financial transactions.

    Global commands (cancel, go back, repeat) win over task logic. Inside a
    task, change requests re-open earlier steps, answers are parsed by the
    step's required input kind and checked by its validator or numeric
    policy, and terminal confirmation steps only accept an allow-listed
    phrase.

    Args:
        catalog: Task/step catalog; the built-in tasks when omitted
        interpreter: Intent classifier and value extractor
        settings: Policies, vocabularies and confirmation allow-lists
        shaper: Optional phrasing post-processor
        conversation_id: Identifier attached to every log record
    """

    def __init__(
        self,
        catalog: IStepCatalog | None = None,
        interpreter: IInputInterpreter | None = None,
        settings: BellaSettings | None = None,
        shaper: IResponseShaper | None = None,
        conversation_id: str | None = None,
    ) -> None:
        self.settings = settings or BellaSettings()
        self.catalog = catalog or build_default_catalog(self.settings)
        self.interpreter = interpreter or KeywordInterpreter(self.settings.vocabulary)
        self.shaper = shaper
        self.gate = ConfirmationGate(self.settings.confirmation)
        self.conversation_id = conversation_id or uuid4().hex[:12]
        self.logger = ContextLogger(__name__).with_context(conversation_id=self.conversation_id)
        self._state = create_idle_state()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def handle_user_input(self, text: str) -> Response:
        """Process one user turn.

        Never raises for user input: every branch yields a Response. A
        catalog inconsistency is reported as a generic error and the state
        is restored to what it was before the turn.
        """
        guard = self._guard_input(text)
        if guard is not None:
            self.logger.debug("Turn rejected by input guard")
            return self._shape(guard)
        return self._run_turn(lambda: self._dispatch(text))

    def cancel(self) -> Response:
        """Explicit cancel action, equivalent to a classified Cancel intent."""
        return self._run_turn(self._cancel)

    def go_back(self) -> Response:
        """Explicit back action, equivalent to a classified GoBack intent."""
        return self._run_turn(self._go_back)

    def get_state(self) -> DialogueState:
        """Read-only snapshot of the current state."""
        return snapshot(self._state)

    def reset(self) -> None:
        self.logger.info("Controller reset")
        self._state = create_idle_state()

    # ------------------------------------------------------------------
    # Turn plumbing
    # ------------------------------------------------------------------

    def _run_turn(self, handler: Callable[[], Response]) -> Response:
        before = snapshot(self._state)
        try:
            response = handler()
        except CatalogError as e:
            self.logger.error(
                f"Catalog lookup failed, state restored: {e}",
                extra={"error_kind": ErrorKind.UNKNOWN_STEP_OR_TASK.value},
            )
            self._state = before
            response = responses.error(INTERNAL_ERROR_TEXT)
        self.logger.info(
            f"Turn done: phase={self._state.phase.value} "
            f"task={self._state.active_task and self._state.active_task.value} "
            f"step={self._state.active_step} hint={response.ui_hint.value}"
        )
        return self._shape(response)

    def _guard_input(self, text: str) -> Response | None:
        stripped = text.strip()
        active = self._state.has_active_task
        if not stripped:
            if active:
                return responses.awaiting(
                    "I didn't catch that. You can answer, or say repeat, go back, or cancel.",
                    quick_replies=TASK_HELP_REPLIES,
                )
            return responses.awaiting("I didn't catch that. What would you like to do?")

        # A lone digit is a complete answer to a numeric question
        lone_digit = stripped.isdigit() and self._state.required_input == RequiredInput.NUMBER
        if (len(stripped) < 2 and not lone_digit) or not any(ch.isalnum() for ch in stripped):
            if active:
                return responses.awaiting(
                    "I didn't understand that. Please provide a clear answer, "
                    "or say 'go back' or 'cancel' if you need help.",
                    quick_replies=["Go back", "Cancel"],
                )
            return responses.awaiting("I didn't understand that. Could you please repeat?")
        return None

    def _shape(self, response: Response) -> Response:
        """Apply the optional shaper without letting it change gating."""
        if self.shaper is None:
            return response
        try:
            shaped = self.shaper.shape(response.model_copy(deep=True))
        except Exception as e:
            self.logger.error(f"Response shaper failed, using unshaped text: {e}", exc_info=True)
            return response

        shaped = shaped.model_copy(
            update={
                "ui_hint": response.ui_hint,
                "requires_confirmation": response.requires_confirmation,
                "confirmation_phrase": response.confirmation_phrase,
            }
        )
        phrase = response.confirmation_phrase
        if phrase and phrase.lower() not in shaped.text.lower():
            self.logger.warning("Shaper dropped the confirmation phrase, using unshaped text")
            shaped = shaped.model_copy(update={"text": response.text})
        return shaped

    def _dispatch(self, text: str) -> Response:
        state = self._state
        context = InterpreterContext(
            required_input=state.required_input,
            active_task=state.active_task,
        )
        intent = self.interpreter.classify(text, context)
        self.logger.debug(f"Classified intent: {intent.kind.value}")

        if intent.kind == IntentKind.CANCEL:
            return self._cancel()
        if intent.kind == IntentKind.GO_BACK:
            return self._go_back()
        if intent.kind == IntentKind.REPEAT:
            return self._repeat()

        if not state.has_active_task:
            if intent.kind == IntentKind.START_TASK and intent.task is not None:
                return self._start_task(intent.task)
            if intent.kind == IntentKind.GENERAL_QUESTION:
                return answer_general_question(text)
            return responses.awaiting(NO_TASK_TEXT, quick_replies=IDLE_MENU)

        refusal = self.catalog.get_task(state.active_task).advice_refusal
        if refusal and is_advice_request(text):
            return self._refuse_advice(refusal)

        if is_change_request(text, self.settings.vocabulary.change_words):
            return self._handle_change_request(text)

        if state.required_input == RequiredInput.CONFIRMATION:
            # Answers and confirms alike must pass the exact-phrase gate
            if intent.kind in (IntentKind.CONFIRM, IntentKind.ANSWER_INPUT):
                return self._handle_confirmation(text)
            return self._clarification()

        if intent.kind == IntentKind.ANSWER_INPUT:
            return self._handle_answer(text)
        return self._clarification()

    # ------------------------------------------------------------------
    # Step processing
    # ------------------------------------------------------------------

    def _current_step(self) -> StepDefinition:
        state = self._state
        if state.active_task is None or state.active_step is None:
            raise CatalogError("No active task or step")
        return self.catalog.get_step(state.active_task, state.active_step)

    def _error_for(self, step: StepDefinition) -> ErrorKind | None:
        error = self._state.last_step_error
        if error is not None and error.step == step.id:
            return error.kind
        return None

    def _quick_replies(self, step: StepDefinition) -> list[str]:
        if step.required_input == RequiredInput.YES_NO:
            return ["Yes", "No"]
        if step.required_input == RequiredInput.CONFIRMATION and self._state.active_task:
            phrase = self.gate.required_phrase(self._state.active_task)
            if phrase:
                return [phrase[:1].upper() + phrase[1:], "Cancel"]
        return list(step.options)

    def _start_task(self, task: TaskType) -> Response:
        first_step = self.catalog.get_first_step(task)
        if first_step is None:
            raise CatalogError("Task has no first step", task=task.value)
        # Fresh state: nothing carries over from an earlier attempt
        self._state = create_task_state(task, first_step)
        self.logger.info(f"Started task {task.value} at {first_step}")
        return self._process_current_step()

    def _process_current_step(self) -> Response:
        state = self._state
        step = self._current_step()
        text = step.get_prompt(state.collected_data, self._error_for(step))
        state.last_prompt = text
        state.required_input = step.required_input

        next_step = step.get_next_step(state.collected_data)
        if next_step is None and step.required_input == RequiredInput.CONFIRMATION:
            phrase = self.gate.required_phrase(state.active_task)
            if phrase is None:
                raise CatalogError(
                    "Confirmation step without allow-listed phrases",
                    task=state.active_task.value,
                    step=step.id,
                )
            return responses.confirmation_required(text, phrase)
        if next_step is None and step.required_input == RequiredInput.NONE:
            return self._complete_task(text)
        return responses.prompt(text, step.required_input, quick_replies=self._quick_replies(step))

    def _handle_answer(self, text: str) -> Response:
        state = self._state
        step = self._current_step()
        kind = step.required_input

        if kind == RequiredInput.NUMBER:
            number = self.interpreter.extract_number(text)
            if number is None:
                hedged = is_hedged(text, self.settings.vocabulary.hedging_words)
                return self._reject(step, ErrorKind.AMBIGUOUS if hedged else ErrorKind.INVALID)
            if step.policy is not None:
                error = step.policy.check(number, text)
                if error is not None:
                    return self._reject(step, error)
            value = number
        elif kind == RequiredInput.YES_NO:
            answer = self.interpreter.extract_yes_no(text)
            if answer is None:
                return self._reject(step, ErrorKind.INVALID)
            if not answer and step.abort_on_decline:
                return self._abort_task()
            value = answer
        elif kind == RequiredInput.NONE:
            value = None
        else:
            if not step.validate_input(text, state.collected_data):
                return self._reject(step, ErrorKind.INVALID)
            value = text.strip()

        if step.normalizer is not None and value is not None:
            value = step.normalizer(value)
        return self._accept(step, value)

    def _accept(self, step: StepDefinition, value: Any) -> Response:
        state = self._state
        state.last_step_error = None
        if step.field:
            state.collected_data[step.field] = value
        state.step_history.append(step.id)
        self.logger.info(f"Accepted {step.id}")

        next_step = step.get_next_step(state.collected_data)
        if next_step is None:
            task = self.catalog.get_task(state.active_task)
            return self._complete_task(f"Your {task.artifact} is complete.")
        state.active_step = next_step
        return self._process_current_step()

    def _reject(self, step: StepDefinition, kind: ErrorKind) -> Response:
        self._state.last_step_error = StepError(kind=kind, step=step.id)
        self.logger.info(f"Rejected input for {step.id}: {kind.value}")
        return self._clarification()

    def _clarification(self) -> Response:
        """Step-aware re-ask; error-specific wording comes from the step's prompt."""
        state = self._state
        if not state.has_active_task:
            return responses.awaiting(
                "I didn't understand that. Could you please repeat or rephrase?"
            )
        step = self._current_step()
        error = self._error_for(step)
        text = step.get_prompt(state.collected_data, error)
        if error is None:
            text = f"I didn't understand that. {text}"
        return responses.awaiting(text, quick_replies=self._quick_replies(step))

    def _refuse_advice(self, refusal: str) -> Response:
        """Decline to advise, then re-ask the current step without changing state."""
        step = self._current_step()
        self.logger.info(f"Refused advice request at {step.id}")
        text = step.get_prompt(self._state.collected_data, self._error_for(step))
        return responses.awaiting(f"{refusal} {text}", quick_replies=self._quick_replies(step))

    def _handle_confirmation(self, text: str) -> Response:
        state = self._state
        step = self._current_step()
        if not self.gate.accepts(state.active_task, text):
            return self._reject(step, ErrorKind.INVALID_CONFIRMATION_PHRASE)
        task = self.catalog.get_task(state.active_task)
        return self._complete_task(
            f"Your {task.artifact} has been submitted. You'll receive a confirmation email "
            f"shortly. Is there anything else I can help you with?"
        )

    def _complete_task(self, text: str) -> Response:
        """Finish the active task; collected data stays readable until the next task."""
        state = self._state
        self.logger.info(f"Completed task {state.active_task and state.active_task.value}")
        state.phase = DialoguePhase.COMPLETED
        state.active_task = None
        state.active_step = None
        state.step_history = []
        state.required_input = RequiredInput.NONE
        state.last_step_error = None
        state.last_prompt = text
        return responses.completed(text)

    def _abort_task(self) -> Response:
        task = self.catalog.get_task(self._state.active_task)
        self.logger.info(f"Task {task.task.value} declined by user")
        self._state = create_idle_state()
        self._state.phase = DialoguePhase.CANCELLED
        return responses.idle(
            f"{task.display_name} cancelled. Is there anything else I can help you with?",
            quick_replies=IDLE_MENU,
        )

    # ------------------------------------------------------------------
    # Navigation and global commands
    # ------------------------------------------------------------------

    def _handle_change_request(self, text: str) -> Response:
        state = self._state
        task = self.catalog.get_task(state.active_task)
        visited = [*state.step_history, state.active_step]
        target = resolve_change_target(text, task, visited)
        if target is None:
            self.logger.debug("Change request without a target, going back one step")
            return self._go_back()

        for key in fields_from(task, visited, target):
            state.collected_data.pop(key, None)
        if target in state.step_history:
            state.step_history = state.step_history[: state.step_history.index(target)]
        state.active_step = target
        state.last_step_error = None
        return self._process_current_step()

    def _go_back(self) -> Response:
        state = self._state
        if not state.has_active_task:
            return responses.idle(
                "There's nothing to go back to. How can I help you?", quick_replies=IDLE_MENU
            )

        task = self.catalog.get_task(state.active_task)
        state.last_step_error = None
        if state.step_history:
            visited = [*state.step_history, state.active_step]
            previous = state.step_history.pop()
            for key in fields_from(task, visited, previous):
                state.collected_data.pop(key, None)
            state.active_step = previous
            self.logger.info(f"Went back to {previous}")
            return self._process_current_step()

        # Already at the first step: re-ask it and check the user still wants to go on
        state.active_step = task.first_step
        step = self._current_step()
        text = step.get_prompt(state.collected_data, None)
        state.last_prompt = text
        state.required_input = step.required_input
        return responses.awaiting(
            f"Okay, going back. {text} Would you like to continue?",
            quick_replies=FIRST_STEP_REPLIES,
        )

    def _repeat(self) -> Response:
        state = self._state
        if not state.last_prompt:
            return responses.error(NOTHING_TO_REPEAT)
        replies = self._quick_replies(self._current_step()) if state.has_active_task else []
        return responses.speaking(state.last_prompt, quick_replies=replies)

    def _cancel(self) -> Response:
        self.logger.info("Cancelled")
        self._state = create_idle_state()
        return responses.idle(CANCELLED_TEXT, quick_replies=IDLE_MENU)
