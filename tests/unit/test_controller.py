"""Unit tests for DialogueController turn handling."""

import pytest

from bella.config.models import BellaSettings
from bella.core.constants import (
    IDLE_MENU,
    DialoguePhase,
    ErrorKind,
    RequiredInput,
    TaskType,
    UIHint,
)
from bella.core.types import DialogueState, Response
from bella.dm.controller import (
    CANCELLED_TEXT,
    INTERNAL_ERROR_TEXT,
    NO_TASK_TEXT,
    NOTHING_TO_REPEAT,
    DialogueController,
)
from bella.flow.catalog import StepCatalog, StepDefinition, TaskDefinition, goto


class TestInputGuard:
    """Empty and unintelligible turns never touch the state"""

    @pytest.mark.parametrize("text", ["", "   ", "?", "!!", "x"])
    def test_idle_guard_keeps_state(self, controller, text):
        # Arrange
        before = controller.get_state()

        # Act
        response = controller.handle_user_input(text)

        # Assert
        assert response.ui_hint == UIHint.AWAITING_INPUT
        assert controller.get_state() == before

    def test_empty_during_task_offers_help(self, loan_controller):
        """Test empty input mid-task lists the global commands"""
        # Arrange
        before = loan_controller.get_state()

        # Act
        response = loan_controller.handle_user_input("")

        # Assert
        assert response.quick_replies == ["Repeat", "Go back", "Cancel"]
        assert loan_controller.get_state() == before

    def test_unintelligible_during_task(self, loan_controller):
        # Arrange
        before = loan_controller.get_state()

        # Act
        response = loan_controller.handle_user_input("?!")

        # Assert
        assert "didn't understand" in response.text
        assert response.quick_replies == ["Go back", "Cancel"]
        assert loan_controller.get_state() == before

    def test_lone_digit_is_a_numeric_answer(self, loan_controller):
        """Test a single digit passes the guard when a number is expected"""
        # Arrange
        loan_controller.handle_user_input("5000")

        # Act
        loan_controller.handle_user_input("3")

        # Assert
        state = loan_controller.get_state()
        assert state.collected_data["loan_term"] == 3
        assert state.active_step == "REPAYMENT_REVIEW"


class TestIdle:
    def test_unknown_without_task(self, controller):
        """Test unrelated chatter offers the idle menu"""
        # Act
        response = controller.handle_user_input("hello there")

        # Assert
        assert response.text == NO_TASK_TEXT
        assert response.quick_replies == IDLE_MENU
        assert controller.get_state() == DialogueState()

    def test_general_question_with_topic(self, controller):
        # Act
        response = controller.handle_user_input("Tell me about contributions")

        # Assert
        assert response.ui_hint == UIHint.SPEAKING
        assert response.text.endswith("Would you like me to take you there?")
        assert response.quick_replies == ["Yes, take me there", "No, thanks"]

    def test_general_question_without_topic(self, controller):
        """Test a question with no known topic gets the topic menu"""
        # Act
        response = controller.handle_user_input("What can you do?")

        # Assert
        assert response.ui_hint == UIHint.IDLE
        assert "beneficiaries" in response.text
        assert controller.get_state().active_task is None

    def test_start_task_prompts_first_step(self, controller):
        # Act
        response = controller.handle_user_input("I want to apply for a loan")

        # Assert
        state = controller.get_state()
        assert response.ui_hint == UIHint.AWAITING_INPUT
        assert "How much would you like to borrow?" in response.text
        assert state.phase == DialoguePhase.TASK_IN_PROGRESS
        assert state.active_task == TaskType.LOAN
        assert state.active_step == "LOAN_AMOUNT"
        assert state.required_input == RequiredInput.NUMBER
        assert state.last_prompt == response.text


class TestCancel:
    def test_cancel_resets_state(self, loan_controller):
        """Test cancel mid-task returns to the default idle state"""
        # Arrange
        loan_controller.handle_user_input("5000")

        # Act
        response = loan_controller.handle_user_input("cancel")

        # Assert
        assert response.ui_hint == UIHint.IDLE
        assert response.text == CANCELLED_TEXT
        assert loan_controller.get_state() == DialogueState()

    def test_cancel_is_idempotent(self, loan_controller):
        # Act
        first = loan_controller.cancel()
        second = loan_controller.cancel()

        # Assert
        assert first == second
        assert loan_controller.get_state() == DialogueState()

    def test_cancel_at_confirmation(self, loan_at_confirmation):
        """Test cancel wins over the confirmation gate"""
        # Act
        response = loan_at_confirmation.handle_user_input("never mind")

        # Assert
        assert response.ui_hint == UIHint.IDLE
        assert loan_at_confirmation.get_state().active_task is None


class TestGoBack:
    def test_go_back_without_task(self, controller):
        # Act
        response = controller.go_back()

        # Assert
        assert response.ui_hint == UIHint.IDLE
        assert "nothing to go back to" in response.text

    def test_go_back_purges_later_fields(self, loan_controller):
        """Test going back re-opens the previous step and drops its answer"""
        # Arrange
        loan_controller.handle_user_input("5000")
        first_review = loan_controller.handle_user_input("5")

        # Act
        response = loan_controller.handle_user_input("go back")
        state = loan_controller.get_state()
        second_review = loan_controller.handle_user_input("5")

        # Assert
        assert state.active_step == "LOAN_TERM"
        assert state.collected_data == {"loan_amount": 5000}
        assert state.step_history == ["LOAN_AMOUNT"]
        assert "how many years" in response.text
        assert second_review.text == first_review.text
        assert loan_controller.get_state().active_step == "REPAYMENT_REVIEW"

    def test_go_back_at_first_step(self, loan_controller):
        """Test going back from the first step re-asks it"""
        # Act
        response = loan_controller.go_back()

        # Assert
        state = loan_controller.get_state()
        assert response.ui_hint == UIHint.AWAITING_INPUT
        assert response.text.startswith("Okay, going back.")
        assert response.text.endswith("Would you like to continue?")
        assert response.quick_replies == ["Yes, continue", "Cancel"]
        assert state.active_step == "LOAN_AMOUNT"
        assert state.active_task == TaskType.LOAN

    def test_go_back_clears_step_error(self, loan_controller):
        # Arrange
        loan_controller.handle_user_input("5000")
        loan_controller.handle_user_input("36 months")
        assert loan_controller.get_state().last_step_error is not None

        # Act
        loan_controller.handle_user_input("go back")

        # Assert
        assert loan_controller.get_state().last_step_error is None


class TestRepeat:
    def test_nothing_to_repeat(self, controller):
        # Act
        response = controller.handle_user_input("repeat")

        # Assert
        assert response.ui_hint == UIHint.ERROR
        assert response.error_message == NOTHING_TO_REPEAT

    def test_repeat_last_prompt(self, loan_controller):
        """Test repeat replays the last prompt without changing state"""
        # Arrange
        before = loan_controller.get_state()

        # Act
        response = loan_controller.handle_user_input("can you repeat that")

        # Assert
        assert response.ui_hint == UIHint.SPEAKING
        assert response.text == before.last_prompt
        assert loan_controller.get_state() == before


class TestNumericAnswers:
    @pytest.mark.parametrize(
        "text,kind",
        [
            ("0", ErrorKind.ZERO_OR_NEGATIVE),
            ("-500", ErrorKind.ZERO_OR_NEGATIVE),
            ("50001", ErrorKind.OVER_MAX),
            ("roughly a good chunk", ErrorKind.AMBIGUOUS),
            ("as much as possible", ErrorKind.INVALID),
        ],
    )
    def test_rejected_amounts(self, loan_controller, text, kind):
        """Test invalid amounts stay on the step with a typed error"""
        # Act
        response = loan_controller.handle_user_input(text)

        # Assert
        state = loan_controller.get_state()
        assert response.ui_hint == UIHint.AWAITING_INPUT
        assert state.active_step == "LOAN_AMOUNT"
        assert state.last_step_error.kind == kind
        assert "loan_amount" not in state.collected_data

    def test_amount_at_cap_is_accepted(self, loan_controller):
        # Act
        loan_controller.handle_user_input("$50,000")

        # Assert
        state = loan_controller.get_state()
        assert state.collected_data["loan_amount"] == 50_000
        assert state.active_step == "LOAN_TERM"
        assert state.last_step_error is None

    def test_over_balance(self):
        """Test the share-of-balance limit applies below the absolute cap"""
        # Arrange
        settings = BellaSettings.model_validate({"loan": {"available_balance": 20_000}})
        controller = DialogueController(settings=settings)
        controller.handle_user_input("I want a loan")

        # Act
        response = controller.handle_user_input("15000")

        # Assert
        assert controller.get_state().last_step_error.kind == ErrorKind.OVER_BALANCE
        assert "$20,000" in response.text

    @pytest.mark.parametrize(
        "text,kind",
        [("36 months", ErrorKind.WRONG_UNIT), ("6", ErrorKind.OUT_OF_RANGE)],
    )
    def test_rejected_terms(self, loan_controller, text, kind):
        # Arrange
        loan_controller.handle_user_input("5000")

        # Act
        response = loan_controller.handle_user_input(text)

        # Assert
        assert loan_controller.get_state().last_step_error.kind == kind
        assert loan_controller.get_state().active_step == "LOAN_TERM"
        assert "years" in response.text

    def test_error_is_cleared_on_acceptance(self, loan_controller):
        # Arrange
        loan_controller.handle_user_input("0")

        # Act
        loan_controller.handle_user_input("2000")

        # Assert
        assert loan_controller.get_state().last_step_error is None


class TestConfirmation:
    def test_confirmation_prompt_carries_phrase(self, loan_controller):
        """Test the terminal step requires the exact phrase"""
        # Arrange
        loan_controller.handle_user_input("5000")
        loan_controller.handle_user_input("5")

        # Act
        response = loan_controller.handle_user_input("yes")

        # Assert
        assert response.ui_hint == UIHint.CONFIRMATION_REQUIRED
        assert response.requires_confirmation
        assert response.confirmation_phrase == "yes, submit loan"
        assert "'yes, submit loan'" in response.text
        assert loan_controller.get_state().required_input == RequiredInput.CONFIRMATION

    @pytest.mark.parametrize("text", ["yes", "confirm", "submit", "sure, go ahead", "ok"])
    def test_generic_assent_is_rejected(self, loan_at_confirmation, text):
        """Test generic assent never submits"""
        # Act
        response = loan_at_confirmation.handle_user_input(text)

        # Assert
        state = loan_at_confirmation.get_state()
        assert response.ui_hint == UIHint.AWAITING_INPUT
        assert state.active_step == "CONFIRM_SUBMIT"
        assert state.phase == DialoguePhase.TASK_IN_PROGRESS
        assert "'yes, submit loan'" in response.text

    @pytest.mark.parametrize(
        "text", ["yes, submit loan", "Confirm loan application", "  YES SUBMIT LOAN  "]
    )
    def test_allow_listed_phrase_submits(self, loan_at_confirmation, text):
        # Act
        response = loan_at_confirmation.handle_user_input(text)

        # Assert
        state = loan_at_confirmation.get_state()
        assert response.ui_hint == UIHint.COMPLETED
        assert "has been submitted" in response.text
        assert state.phase == DialoguePhase.COMPLETED
        assert state.active_task is None

    def test_wrong_phrase_marks_error(self, loan_at_confirmation):
        # Act
        loan_at_confirmation.handle_user_input("yes")

        # Assert
        error = loan_at_confirmation.get_state().last_step_error
        assert error.kind == ErrorKind.INVALID_CONFIRMATION_PHRASE
        assert error.step == "CONFIRM_SUBMIT"

    @pytest.mark.parametrize("text", ["no, don't confirm loan", "do not confirm loan application"])
    def test_negated_phrase_is_rejected(self, loan_at_confirmation, text):
        """Test an allow-listed phrase inside a refusal never submits"""
        # Act
        response = loan_at_confirmation.handle_user_input(text)

        # Assert
        state = loan_at_confirmation.get_state()
        assert response.ui_hint == UIHint.AWAITING_INPUT
        assert state.phase == DialoguePhase.TASK_IN_PROGRESS
        assert state.last_step_error.kind == ErrorKind.INVALID_CONFIRMATION_PHRASE


class TestChangeRequests:
    def test_change_amount_at_confirmation(self, loan_at_confirmation):
        """Test a change request re-opens the named step and drops later answers"""
        # Act
        response = loan_at_confirmation.handle_user_input("actually, change the amount")

        # Assert
        state = loan_at_confirmation.get_state()
        assert state.active_step == "LOAN_AMOUNT"
        assert state.collected_data == {}
        assert state.step_history == []
        assert "How much would you like to borrow?" in response.text

    def test_change_term_keeps_amount(self, loan_at_confirmation):
        # Act
        loan_at_confirmation.handle_user_input("I'd like to change the term")

        # Assert
        state = loan_at_confirmation.get_state()
        assert state.active_step == "LOAN_TERM"
        assert state.collected_data == {"loan_amount": 5000}
        assert state.step_history == ["LOAN_AMOUNT"]

    def test_change_without_target_goes_back(self, loan_controller):
        """Test an untargeted change request behaves like go back"""
        # Arrange
        loan_controller.handle_user_input("5000")

        # Act
        loan_controller.handle_user_input("I want to change something")

        # Assert
        assert loan_controller.get_state().active_step == "LOAN_AMOUNT"

    def test_unvisited_target_is_ignored(self, enrollment_controller):
        """Test a change request cannot jump forward to an unvisited step"""
        # Arrange
        enrollment_controller.handle_user_input("Roth 401k")

        # Act
        enrollment_controller.handle_user_input("change my risk level")

        # Assert
        assert enrollment_controller.get_state().active_step == "PLAN_SELECTION"


class TestRobustness:
    def test_catalog_error_restores_state(self):
        """Test a dangling next step yields a generic error and no state change"""
        # Arrange
        broken = TaskDefinition(
            task=TaskType.LOAN,
            first_step="ASK",
            steps={
                "ASK": StepDefinition(
                    id="ASK",
                    field="answer",
                    required_input=RequiredInput.TEXT,
                    prompt=lambda data, error: "Say something.",
                    next_step=goto("MISSING"),
                )
            },
            display_name="Broken",
            artifact="broken",
        )
        controller = DialogueController(catalog=StepCatalog([broken]))
        controller.handle_user_input("I want a loan")
        before = controller.get_state()

        # Act
        response = controller.handle_user_input("hello world")

        # Assert
        assert response.ui_hint == UIHint.ERROR
        assert response.text == INTERNAL_ERROR_TEXT
        assert controller.get_state() == before

    def test_get_state_is_a_snapshot(self, loan_controller):
        # Act
        state = loan_controller.get_state()
        state.collected_data["loan_amount"] = 1

        # Assert
        assert "loan_amount" not in loan_controller.get_state().collected_data

    def test_reset(self, loan_controller):
        loan_controller.reset()

        assert loan_controller.get_state() == DialogueState()


class UpperShaper:
    def shape(self, response: Response) -> Response:
        return response.model_copy(
            update={"text": response.text.upper(), "ui_hint": UIHint.SPEAKING}
        )


class DroppingShaper:
    def shape(self, response: Response) -> Response:
        return response.model_copy(update={"text": "Please confirm.", "confirmation_phrase": None})


class FailingShaper:
    def shape(self, response: Response) -> Response:
        raise RuntimeError("shaper down")


class TestShaper:
    def test_shaper_rewrites_text_but_not_hint(self, settings):
        """Test shapers change phrasing only"""
        # Arrange
        controller = DialogueController(settings=settings, shaper=UpperShaper())

        # Act
        response = controller.handle_user_input("I want a loan")

        # Assert
        assert response.text.startswith("HOW MUCH")
        assert response.ui_hint == UIHint.AWAITING_INPUT

    def test_shaper_cannot_drop_confirmation_phrase(self, settings):
        # Arrange
        controller = DialogueController(settings=settings, shaper=DroppingShaper())
        for text in ("I want a loan", "5000", "5"):
            controller.handle_user_input(text)

        # Act
        response = controller.handle_user_input("yes")

        # Assert
        assert response.confirmation_phrase == "yes, submit loan"
        assert response.requires_confirmation
        assert "'yes, submit loan'" in response.text

    def test_failing_shaper_falls_back(self, settings):
        # Arrange
        controller = DialogueController(settings=settings, shaper=FailingShaper())

        # Act
        response = controller.handle_user_input("I want a loan")

        # Assert
        assert "How much would you like to borrow?" in response.text


class TestWithdrawalAnswers:
    """Withdrawal questions accept ages and employment wording"""

    @pytest.fixture
    def withdrawal_controller(self, controller):
        controller.handle_user_input("How much can I withdraw?")
        return controller

    @pytest.mark.parametrize("text,expected", [("62", True), ("I'm 45", False)])
    def test_stated_age(self, withdrawal_controller, text, expected):
        # Act
        response = withdrawal_controller.handle_user_input(text)

        # Assert
        state = withdrawal_controller.get_state()
        assert state.collected_data == {"is_59_or_older": expected}
        assert state.active_step == "EMPLOYMENT_CHECK"
        assert "currently employed" in response.text

    def test_unrelated_age_answer_re_asks(self, withdrawal_controller):
        # Act
        response = withdrawal_controller.handle_user_input("what do you mean")

        # Assert
        assert withdrawal_controller.get_state().active_step == "AGE_CHECK"
        assert "You can say your age" in response.text

    def test_retired_answer_completes(self, withdrawal_controller):
        """Test 'I retired' answers the employment question"""
        # Arrange
        withdrawal_controller.handle_user_input("62")

        # Act
        response = withdrawal_controller.handle_user_input("I retired")

        # Assert
        assert response.ui_hint == UIHint.COMPLETED
        assert withdrawal_controller.get_state().collected_data == {
            "is_59_or_older": True,
            "is_employed": False,
        }

    def test_quit_inside_answer_keeps_task(self, withdrawal_controller):
        """Test 'quit' inside an answer is not a cancel command"""
        # Arrange
        withdrawal_controller.handle_user_input("yes")

        # Act
        response = withdrawal_controller.handle_user_input("I retired, I quit last year")

        # Assert
        assert response.ui_hint == UIHint.COMPLETED
        assert response.text.startswith("Because you're over 59½ and no longer employed")

    def test_bare_quit_still_cancels(self, withdrawal_controller):
        # Act
        response = withdrawal_controller.handle_user_input("quit")

        # Assert
        assert response.text == CANCELLED_TEXT
        assert withdrawal_controller.get_state() == DialogueState()

    def test_advice_request_is_refused(self, withdrawal_controller):
        """Test advice requests get the refusal and the same question again"""
        # Arrange
        before = withdrawal_controller.get_state()

        # Act
        response = withdrawal_controller.handle_user_input("Should I withdraw or take a loan?")

        # Assert
        assert response.ui_hint == UIHint.AWAITING_INPUT
        assert response.text.startswith("I can't provide financial advice.")
        assert response.text.endswith(before.last_prompt)
        assert withdrawal_controller.get_state() == before
