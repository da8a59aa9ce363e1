"""
Australian income tax calculator.

Implements:
- Progressive bracket lookup over the 2024-25 resident scale
- Flat 2% Medicare levy
- Marginal and effective (average) rate queries
- HELP/HECS compulsory repayment
- Full return-style calculation with deductions, negative gearing and
  franking credits

All functions are pure; the bracket table is a read-only module constant.
"""

from collections.abc import Sequence

from loguru import logger

from ...core.exceptions import InvalidInputError
from ...core.utils.rounding import round_currency, round_rate
from ..models import TaxBracket, TaxCalculationResult, TaxInput
from .tax_tables import (
    ATO_TAX_BRACKETS_2024_25,
    FRANKING_CREDIT_RATE,
    HECS_REPAYMENT_THRESHOLDS_2024_25,
    MEDICARE_LEVY_RATE,
)


def _require_non_negative_income(taxable_income: float) -> None:
    if taxable_income < 0:
        raise InvalidInputError(f"Taxable income cannot be negative, got {taxable_income}")


def get_tax_bracket(
    taxable_income: float,
    brackets: Sequence[TaxBracket] = ATO_TAX_BRACKETS_2024_25,
) -> TaxBracket:
    """Return the bracket containing ``taxable_income``.

    An income exactly on a boundary belongs to the lower bracket.
    """
    _require_non_negative_income(taxable_income)
    for bracket in brackets:
        if bracket.contains(taxable_income):
            return bracket
    # Only reachable with a malformed custom table
    raise InvalidInputError(f"No tax bracket covers income {taxable_income}")


def calculate_income_tax(
    taxable_income: float,
    brackets: Sequence[TaxBracket] = ATO_TAX_BRACKETS_2024_25,
) -> float:
    """Calculate income tax payable on a taxable income.

    Args:
        taxable_income: Annual taxable income in AUD (must be >= 0).
        brackets: Bracket table; defaults to the 2024-25 resident scale.

    Returns:
        Tax payable, rounded to cents.
    """
    _require_non_negative_income(taxable_income)
    income = round_currency(taxable_income)
    bracket = get_tax_bracket(income, brackets)
    return round_currency(bracket.base_tax + (income - bracket.min) * bracket.rate)


def calculate_medicare_levy(taxable_income: float) -> float:
    """Flat 2% Medicare levy; 0 for a nil or negative income."""
    if taxable_income <= 0:
        return 0.0
    return round_currency(round_currency(taxable_income) * MEDICARE_LEVY_RATE)


def get_marginal_tax_rate(
    taxable_income: float,
    brackets: Sequence[TaxBracket] = ATO_TAX_BRACKETS_2024_25,
) -> float:
    """Rate applied to the next dollar earned, as a decimal (levy excluded)."""
    return get_tax_bracket(round_currency(taxable_income), brackets).rate


def get_effective_tax_rate(taxable_income: float) -> float:
    """Total tax (income tax + levy) divided by taxable income."""
    _require_non_negative_income(taxable_income)
    if taxable_income == 0:
        return 0.0
    total_tax = calculate_income_tax(taxable_income) + calculate_medicare_levy(taxable_income)
    return total_tax / round_currency(taxable_income)


def calculate_total_tax(taxable_income: float) -> TaxCalculationResult:
    """Income tax plus Medicare levy for a taxable income.

    Money fields are rounded to cents and rates to 4 dp. The breakdown
    satisfies ``net_income + total_tax == taxable_income``.
    """
    income_tax = calculate_income_tax(taxable_income)
    medicare_levy = calculate_medicare_levy(taxable_income)
    income = round_currency(taxable_income)
    total_tax = round_currency(income_tax + medicare_levy)

    return TaxCalculationResult(
        taxable_income=income,
        income_tax=income_tax,
        medicare_levy=medicare_levy,
        total_tax=total_tax,
        net_income=round_currency(income - total_tax),
        marginal_tax_rate=round_rate(get_marginal_tax_rate(income)),
        average_tax_rate=round_rate(total_tax / income) if income > 0 else 0.0,
    )


def calculate_tax_on_additional_income(current_income: float, additional_income: float) -> float:
    """Extra income tax triggered by ``additional_income`` on top of ``current_income``."""
    current_tax = calculate_income_tax(current_income)
    new_tax = calculate_income_tax(current_income + additional_income)
    return round_currency(new_tax - current_tax)


def calculate_hecs_repayment(gross_income: float, hecs_balance: float = 0.0) -> float:
    """Compulsory HELP repayment for the year, never more than the debt."""
    if hecs_balance <= 0 or gross_income <= 0:
        return 0.0

    for lower, _upper, rate in reversed(HECS_REPAYMENT_THRESHOLDS_2024_25):
        if gross_income >= lower:
            return round_currency(min(gross_income * rate, hecs_balance))
    return 0.0


def calculate_tax(tax_input: TaxInput) -> TaxCalculationResult:
    """Return-style tax calculation.

    Taxable income = gross − deductions − negative gearing loss + franked
    dividends grossed up by their franking credit, floored at zero. The
    franking credit then offsets income tax (not below zero); Medicare levy
    and HELP repayment are added on top.
    """
    for deduction in tax_input.deductions:
        if deduction.amount < 0:
            raise InvalidInputError(f"Deduction {deduction.category!r} cannot be negative")

    total_deductions = sum(d.amount for d in tax_input.deductions)
    franked_credits = tax_input.franked_dividends * FRANKING_CREDIT_RATE

    taxable_income = (
        tax_input.gross_income
        - total_deductions
        - tax_input.negative_gearing_loss
        + tax_input.franked_dividends
        + franked_credits
    )
    taxable_income = max(0.0, taxable_income)

    income_tax = calculate_income_tax(taxable_income)
    medicare_levy = 0.0 if tax_input.medicare_exempt else calculate_medicare_levy(taxable_income)
    hecs_repayment = calculate_hecs_repayment(tax_input.gross_income, tax_input.hecs_balance)

    adjusted_income_tax = round_currency(max(0.0, income_tax - franked_credits))
    total_tax = round_currency(adjusted_income_tax + medicare_levy + hecs_repayment)
    cash_income = tax_input.gross_income + tax_input.franked_dividends

    logger.debug(
        f"Tax: taxable ${taxable_income:,.2f}, income tax ${adjusted_income_tax:,.2f}, "
        f"levy ${medicare_levy:,.2f}, HELP ${hecs_repayment:,.2f}"
    )

    return TaxCalculationResult(
        taxable_income=round_currency(taxable_income),
        income_tax=adjusted_income_tax,
        medicare_levy=medicare_levy,
        total_tax=total_tax,
        net_income=round_currency(cash_income - total_tax),
        marginal_tax_rate=round_rate(get_marginal_tax_rate(taxable_income)),
        average_tax_rate=round_rate(total_tax / cash_income) if cash_income > 0 else 0.0,
        franked_credits=round_currency(franked_credits),
        total_deductions=round_currency(total_deductions + tax_input.negative_gearing_loss),
        hecs_repayment=hecs_repayment,
    )
