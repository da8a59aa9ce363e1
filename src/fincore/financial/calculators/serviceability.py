"""Investment-property serviceability.

Answers "how much property could this client add on top of a funded
retirement?" by turning the retirement surplus into a repayment budget and
the budget into a loan size.

Sizing is a fixed two-pass approximation: pass one sizes the loan from the
cash surplus alone; pass two adds 75% of the rent that property would earn
and re-sizes once. Historical outputs depend on exactly two passes.

``calculate_loan_serviceability`` is the lender-style check for a single
proposed loan: commitments against net income, a 10% buffer and a +3%
interest-rate stress test.

Rates on this module's parameters are decimals (``0.06`` means 6% p.a.).
Parameters left as ``None`` come from the ``serviceability`` config section.
"""

import math

from loguru import logger

from ...core.config import get_config
from ...core.config_schema import ServiceabilityConfig
from ...core.exceptions import InvalidInputError
from ...core.utils.rounding import round_currency, round_rate
from ..models import LoanAssessment, LoanServiceability, RetirementMetrics, ServiceabilityResult
from .cashflow import MonthlySurplus
from .loan import calculate_loan_payment, calculate_max_borrowing_capacity
from .tax_tables import RETIREMENT_INCOME_RETENTION

# Share of estimated rent counted towards serviceability
RENTAL_INCOME_SHADING = 0.75

# Lender tests for a proposed loan
MAX_SERVICEABILITY_RATIO = 35.0
BUFFER_RATIO = 0.10
STRESS_TEST_MARGIN = 0.03

DEFICIT_REASON = "Retirement deficit must be addressed before considering investment properties"
NO_INCOME_REASON = "Please enter your income and expenses to calculate investment property potential."
NO_SURPLUS_REASON = "No surplus available after ensuring 70% of current income in retirement"

NO_NET_INCOME_REASON = "Insufficient net income to calculate serviceability"
HIGH_RATIO_REASON = "Serviceability ratio too high (>35%)"
NO_BUFFER_REASON = "Insufficient buffer remaining"
STRESS_TEST_REASON = "Failed stress test at higher interest rate"
NEGATIVE_CASHFLOW_REASON = "Negative cash flow after loan"


def _lending_settings() -> ServiceabilityConfig:
    return get_config().validated().serviceability


def _not_viable(loan_to_value_ratio: float, reason: str, surplus_income: float = 0.0) -> ServiceabilityResult:
    return ServiceabilityResult(
        max_property_value=0.0,
        max_monthly_payment=0.0,
        surplus_income=surplus_income,
        loan_to_value_ratio=loan_to_value_ratio,
        monthly_rental_income=0.0,
        total_monthly_expenses=0.0,
        is_viable=False,
        reason=reason,
    )


def calculate_investment_surplus(monthly_income: float, monthly_expenses: float) -> RetirementMetrics:
    """Build retirement metrics from a plain monthly income/expense pair.

    Used when no full projection exists; the monthly surplus stands in for
    projected passive income. Negative inputs are treated as zero.
    """
    income = max(0.0, monthly_income)
    expenses = max(0.0, monthly_expenses)
    surplus = income - expenses
    return RetirementMetrics(
        projected_passive_income_monthly=surplus,
        current_monthly_income=income,
        monthly_deficit_or_surplus=surplus,
        is_deficit=surplus < 0,
    )


def calculate_retirement_investment_surplus(
    projected_passive_income: float,
    current_monthly_income: float,
    retention_ratio: float = RETIREMENT_INCOME_RETENTION,
) -> float:
    """Monthly passive income left after protecting ``retention_ratio`` of current income."""
    return max(0.0, projected_passive_income - current_monthly_income * retention_ratio)


def calculate_property_serviceability(
    retirement_metrics: RetirementMetrics,
    interest_rate: float | None = None,
    loan_term_years: float | None = None,
    max_lvr: float | None = None,
    rental_yield: float | None = None,
    property_expense_ratio: float | None = None,
) -> ServiceabilityResult:
    """Calculate the largest investment property a retirement surplus supports.

    Args:
        retirement_metrics: Monthly retirement position (see ``ProjectionResult.to_retirement_metrics``)
        interest_rate: Annual interest rate as decimal
        loan_term_years: Loan term in years
        max_lvr: Maximum loan-to-value ratio
        rental_yield: Gross annual rental yield as decimal
        property_expense_ratio: Annual holding costs as share of property value

    Returns:
        ServiceabilityResult; ``is_viable=False`` with a reason when no borrowing is possible
    """
    settings = _lending_settings()
    interest_rate = settings.interest_rate if interest_rate is None else interest_rate
    loan_term_years = settings.loan_term_years if loan_term_years is None else loan_term_years
    max_lvr = settings.max_lvr if max_lvr is None else max_lvr
    rental_yield = settings.rental_yield if rental_yield is None else rental_yield
    if property_expense_ratio is None:
        property_expense_ratio = settings.property_expense_ratio

    if loan_term_years <= 0:
        raise InvalidInputError(f"Loan term must be positive, got {loan_term_years}")
    if not 0 < max_lvr <= 1:
        raise InvalidInputError(f"LVR must be in (0, 1], got {max_lvr}")
    if interest_rate < 0 or rental_yield < 0 or property_expense_ratio < 0:
        raise InvalidInputError("Interest rate, rental yield and expense ratio cannot be negative")

    if retirement_metrics.current_monthly_income <= 0:
        return _not_viable(max_lvr, NO_INCOME_REASON)

    if retirement_metrics.is_deficit:
        return _not_viable(max_lvr, DEFICIT_REASON)

    available_surplus = calculate_retirement_investment_surplus(
        retirement_metrics.projected_passive_income_monthly,
        retirement_metrics.current_monthly_income,
    )
    if available_surplus <= 0:
        return _not_viable(max_lvr, NO_SURPLUS_REASON)

    rate_pct = interest_rate * 100

    # Pass 1: cash surplus only
    first_borrowing = calculate_max_borrowing_capacity(available_surplus, rate_pct, loan_term_years)
    first_property_value = first_borrowing / max_lvr
    monthly_rental_income = first_property_value * rental_yield / 12
    monthly_expenses = first_property_value * property_expense_ratio / 12

    # Pass 2: surplus plus shaded rent from the pass-1 property
    max_monthly_payment = available_surplus + monthly_rental_income * RENTAL_INCOME_SHADING
    final_borrowing = calculate_max_borrowing_capacity(max_monthly_payment, rate_pct, loan_term_years)
    max_property_value = final_borrowing / max_lvr

    logger.debug(
        f"Serviceability: surplus ${available_surplus:,.2f}/mo, "
        f"pass 1 ${first_property_value:,.0f}, pass 2 ${max_property_value:,.0f}"
    )

    return ServiceabilityResult(
        max_property_value=round_currency(max_property_value),
        max_monthly_payment=round_currency(max_monthly_payment),
        surplus_income=round_currency(available_surplus),
        loan_to_value_ratio=max_lvr,
        monthly_rental_income=round_currency(monthly_rental_income),
        total_monthly_expenses=round_currency(monthly_expenses),
        is_viable=True,
    )


def calculate_loan_serviceability(
    cashflow: MonthlySurplus,
    loan_amount: float = 0.0,
    interest_rate: float | None = None,
    term_years: float | None = None,
) -> LoanServiceability:
    """Assess whether current cash flow can carry a proposed loan.

    Net income is total monthly income less income tax. The loan is approved
    only when commitments stay within 35% of net income, a 10% buffer of net
    income remains, the repayment still fits at ``interest_rate + 3%`` and the
    monthly surplus stays non-negative after the new repayment.

    Args:
        cashflow: Current month from ``calculate_monthly_surplus``
        loan_amount: Proposed principal
        interest_rate: Annual interest rate as decimal
        term_years: Loan term in years

    Returns:
        LoanServiceability with an APPROVED/DECLINED assessment and every failed test in ``reasons``
    """
    settings = _lending_settings()
    interest_rate = settings.interest_rate if interest_rate is None else interest_rate
    term_years = settings.loan_term_years if term_years is None else term_years

    net_income = cashflow.income.total - cashflow.expenses.tax
    existing_repayments = cashflow.expenses.loan_repayments
    repayment = calculate_loan_payment(loan_amount, interest_rate * 100, term_years)
    commitments = existing_repayments + repayment
    surplus_after_loan = cashflow.surplus - repayment

    ratio = commitments / net_income * 100 if net_income > 0 else math.inf
    required_buffer = net_income * BUFFER_RATIO
    actual_buffer = net_income - commitments
    has_buffer = actual_buffer >= required_buffer

    stress_repayment = calculate_loan_payment(loan_amount, (interest_rate + STRESS_TEST_MARGIN) * 100, term_years)
    passes_stress_test = net_income - existing_repayments - stress_repayment > required_buffer

    reasons = []
    if math.isinf(ratio):
        reasons.append(NO_NET_INCOME_REASON)
    if ratio > MAX_SERVICEABILITY_RATIO:
        reasons.append(HIGH_RATIO_REASON)
    if not has_buffer:
        reasons.append(NO_BUFFER_REASON)
    if not passes_stress_test:
        reasons.append(STRESS_TEST_REASON)
    if surplus_after_loan < 0:
        reasons.append(NEGATIVE_CASHFLOW_REASON)

    can_afford = not reasons
    logger.debug(
        f"Loan serviceability: ${loan_amount:,.0f} at {interest_rate:.2%}, "
        f"ratio {ratio:.1f}%, {'approved' if can_afford else 'declined'}"
    )

    return LoanServiceability(
        loan_amount=loan_amount,
        monthly_repayment=round_currency(repayment),
        total_monthly_commitments=round_currency(commitments),
        monthly_net_income=round_currency(net_income),
        net_surplus_after_loan=round_currency(surplus_after_loan),
        serviceability_ratio=ratio if math.isinf(ratio) else round_rate(ratio),
        required_buffer=round_currency(required_buffer),
        actual_buffer=round_currency(actual_buffer),
        has_buffer=has_buffer,
        stress_test_repayment=round_currency(stress_repayment),
        passes_stress_test=passes_stress_test,
        can_afford=can_afford,
        assessment=LoanAssessment.APPROVED if can_afford else LoanAssessment.DECLINED,
        reasons=tuple(reasons),
    )
