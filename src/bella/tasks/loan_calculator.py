"""401(k) loan arithmetic.

Loans are repaid monthly; interest is paid back into the participant's
own account. Borrowing limits live in ``LoanAmountPolicy``.
"""

from pydantic import BaseModel

DEFAULT_ANNUAL_RATE = 0.085
PAYMENTS_PER_YEAR = 12


class LoanTerms(BaseModel):
    """Repayment schedule summary for one loan request."""

    amount: float
    term_years: int
    annual_rate: float
    monthly_payment: float
    total_repayment: float
    total_interest: float
    number_of_payments: int


def round2(value: float) -> float:
    """Round to cents."""
    return round(value * 100) / 100


def monthly_payment(principal: float, annual_rate: float, term_years: float) -> float:
    """Monthly payment under standard amortization.

    Args:
        principal: Loan amount in dollars
        annual_rate: Annual rate as a decimal (0.085 for 8.5%)
        term_years: Repayment term in years

    Returns:
        Payment rounded to cents; 0 for a non-positive principal
    """
    if principal <= 0:
        return 0
    n = term_years * PAYMENTS_PER_YEAR
    r = annual_rate / PAYMENTS_PER_YEAR
    if r == 0:
        return round2(principal / n)
    factor = (1 + r) ** n
    return round2(principal * r * factor / (factor - 1))


def loan_terms(
    amount: float, term_years: int, annual_rate: float = DEFAULT_ANNUAL_RATE
) -> LoanTerms:
    """Compute payment, total repayment and total interest for a loan."""
    payment = monthly_payment(amount, annual_rate, term_years)
    number_of_payments = int(term_years * PAYMENTS_PER_YEAR)
    total_repayment = round2(payment * number_of_payments)
    return LoanTerms(
        amount=amount,
        term_years=term_years,
        annual_rate=annual_rate,
        monthly_payment=payment,
        total_repayment=total_repayment,
        total_interest=round2(total_repayment - amount),
        number_of_payments=number_of_payments,
    )
