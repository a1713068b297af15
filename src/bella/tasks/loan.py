"""401(k) loan application task.

LOAN_AMOUNT -> LOAN_TERM -> REPAYMENT_REVIEW -> CONFIRM_SUBMIT
"""

from typing import Any

from bella.config.models import BellaSettings
from bella.core.constants import ErrorKind, RequiredInput, TaskType
from bella.flow.catalog import ChangeTarget, StepDefinition, TaskDefinition, goto
from bella.tasks.formatting import money, quote
from bella.tasks.loan_calculator import loan_terms
from bella.validation.policies import LoanAmountPolicy, LoanTermPolicy

LOAN_AMOUNT = "LOAN_AMOUNT"
LOAN_TERM = "LOAN_TERM"
REPAYMENT_REVIEW = "REPAYMENT_REVIEW"
CONFIRM_SUBMIT = "CONFIRM_SUBMIT"


def build_loan_task(settings: BellaSettings) -> TaskDefinition:
    """Build the loan task from the configured limits and allow-list."""
    loan = settings.loan
    amount_policy = LoanAmountPolicy(loan)
    term_policy = LoanTermPolicy(loan, settings.vocabulary.month_words)
    allow_list = settings.confirmation.phrases.get(TaskType.LOAN, [])
    phrase = allow_list[0] if allow_list else ""
    term_range = f"between {loan.min_term_years} and {loan.max_term_years} years"

    def amount_prompt(data: dict[str, Any], error: ErrorKind | None) -> str:
        ask = (
            f"How much would you like to borrow? "
            f"You can request up to {money(amount_policy.max_loan)}."
        )
        if error == ErrorKind.ZERO_OR_NEGATIVE:
            return f"The loan amount has to be more than zero. {ask}"
        if error == ErrorKind.OVER_MAX:
            return f"That's above the plan maximum of {money(loan.max_absolute)}. {ask}"
        if error == ErrorKind.OVER_BALANCE:
            return (
                f"You can borrow at most {loan.max_fraction_of_balance:.0%} of your available "
                f"balance of {money(loan.available_balance)}. {ask}"
            )
        if error == ErrorKind.AMBIGUOUS:
            return f"I need an exact amount rather than an estimate. {ask}"
        if error == ErrorKind.INVALID:
            return f"I couldn't find a dollar amount in that. {ask}"
        return ask

    def term_prompt(data: dict[str, Any], error: ErrorKind | None) -> str:
        ask = f"Over how many years would you like to repay the loan? Choose {term_range}."
        if error == ErrorKind.WRONG_UNIT:
            return f"Loan terms are set in whole years, not months. {ask}"
        if error == ErrorKind.OUT_OF_RANGE:
            return f"The repayment term must be a whole number of years {term_range}. {ask}"
        if error in (ErrorKind.AMBIGUOUS, ErrorKind.INVALID):
            return f"Please tell me an exact number of years. {ask}"
        return ask

    def review_prompt(data: dict[str, Any], error: ErrorKind | None) -> str:
        terms = loan_terms(data["loan_amount"], int(data["loan_term"]), loan.annual_rate)
        summary = (
            f"Borrowing {money(terms.amount)} over {terms.term_years} "
            f"{'year' if terms.term_years == 1 else 'years'} at {loan.annual_rate:.1%} APR, "
            f"your monthly payment would be {money(terms.monthly_payment, cents=True)}, "
            f"for a total repayment of {money(terms.total_repayment, cents=True)}. "
            f"Would you like to continue?"
        )
        if error is not None:
            return f"Please answer yes or no. {summary}"
        return summary

    def confirm_prompt(data: dict[str, Any], error: ErrorKind | None) -> str:
        if error == ErrorKind.INVALID_CONFIRMATION_PHRASE:
            return (
                f"To protect your account I need the exact phrase. "
                f"Please say {quote(phrase)} to submit, or say cancel to stop."
            )
        return (
            f"You're requesting {money(data['loan_amount'])} over {int(data['loan_term'])} years. "
            f"To submit your loan application, say {quote(phrase)}."
        )

    steps = {
        LOAN_AMOUNT: StepDefinition(
            id=LOAN_AMOUNT,
            field="loan_amount",
            required_input=RequiredInput.NUMBER,
            prompt=amount_prompt,
            policy=amount_policy,
            next_step=goto(LOAN_TERM),
        ),
        LOAN_TERM: StepDefinition(
            id=LOAN_TERM,
            field="loan_term",
            required_input=RequiredInput.NUMBER,
            prompt=term_prompt,
            policy=term_policy,
            normalizer=int,
            next_step=goto(REPAYMENT_REVIEW),
        ),
        REPAYMENT_REVIEW: StepDefinition(
            id=REPAYMENT_REVIEW,
            field="accept_repayment",
            required_input=RequiredInput.YES_NO,
            prompt=review_prompt,
            next_step=goto(CONFIRM_SUBMIT),
            abort_on_decline=True,
        ),
        CONFIRM_SUBMIT: StepDefinition(
            id=CONFIRM_SUBMIT,
            required_input=RequiredInput.CONFIRMATION,
            prompt=confirm_prompt,
        ),
    }
    return TaskDefinition(
        task=TaskType.LOAN,
        first_step=LOAN_AMOUNT,
        steps=steps,
        display_name="Loan application",
        artifact="loan application",
        change_targets=(
            ChangeTarget(step=LOAN_AMOUNT, keywords=("amount", "borrow", "how much")),
            ChangeTarget(step=LOAN_TERM, keywords=("term", "years", "year")),
        ),
    )
