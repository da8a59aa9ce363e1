"""Current monthly cash flow.

Canonical definition used by the dashboard:
    Monthly Surplus = Total Monthly Income - Total Monthly Expenses
where expenses include living costs, income tax, HELP repayments, property
holding costs and loan repayments (normalised to monthly).
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass

from ..models import FinancialInputs, Liability, TaxInput
from .loan import to_monthly
from .tax import calculate_tax


@dataclass(frozen=True)
class MonthlyIncome:
    employment: float
    rental: float
    investment: float
    other: float

    @property
    def total(self) -> float:
        return self.employment + self.rental + self.investment + self.other


@dataclass(frozen=True)
class MonthlyExpenses:
    living: float
    tax: float
    hecs: float
    property_expenses: float
    loan_repayments: float

    @property
    def total(self) -> float:
        return self.living + self.tax + self.hecs + self.property_expenses + self.loan_repayments


@dataclass(frozen=True)
class MonthlySurplus:
    income: MonthlyIncome
    expenses: MonthlyExpenses

    @property
    def surplus(self) -> float:
        return self.income.total - self.expenses.total

    @property
    def savings_rate(self) -> float:
        """Surplus as a percentage of income (0 when there is no income)."""
        if self.income.total <= 0:
            return 0.0
        return self.surplus / self.income.total * 100


def calculate_monthly_surplus(inputs: FinancialInputs, hecs_balance: float = 0.0) -> MonthlySurplus:
    """Break the client's current month into income, expenses and surplus."""
    property_rent = sum(p.annual_rent for p in inputs.investment_properties)
    investment_annual = inputs.dividends + inputs.franked_dividends + inputs.capital_gains

    tax_result = calculate_tax(
        TaxInput(
            gross_income=inputs.annual_income
            + inputs.rental_income
            + property_rent
            + inputs.dividends
            + inputs.capital_gains
            + inputs.other_income,
            franked_dividends=inputs.franked_dividends,
            hecs_balance=hecs_balance,
        )
    )
    # HELP is part of total_tax; report it on its own line
    income_tax_annual = max(0.0, tax_result.total_tax - tax_result.hecs_repayment)

    return MonthlySurplus(
        income=MonthlyIncome(
            employment=inputs.annual_income / 12,
            rental=(inputs.rental_income + property_rent) / 12,
            investment=investment_annual / 12,
            other=inputs.other_income / 12,
        ),
        expenses=MonthlyExpenses(
            living=inputs.monthly_expenses,
            tax=income_tax_annual / 12,
            hecs=tax_result.hecs_repayment / 12,
            property_expenses=sum(p.annual_expenses for p in inputs.investment_properties) / 12,
            loan_repayments=sum(to_monthly(lb.repayment_amount, lb.frequency) for lb in inputs.liabilities),
        ),
    )


def calculate_debt_payments_at_retirement(liabilities: Iterable[Liability], years_to_retirement: int) -> float:
    """Monthly repayments on loans that will still be running at retirement."""
    if years_to_retirement <= 0:
        return 0.0

    total = 0.0
    for liability in liabilities:
        if liability.balance_owing <= 0 or liability.repayment_amount <= 0:
            continue
        if liability.term_remaining > years_to_retirement:
            total += to_monthly(liability.repayment_amount, liability.frequency)
    return total


@dataclass(frozen=True)
class SavingsDepletion:
    """How long liquid savings last against a monthly shortfall.

    ``years_until_depleted`` is ``inf`` when there is no shortfall or nothing to draw on.
    """

    years_until_depleted: float
    monthly_drawdown: float
    total_savings: float


def calculate_savings_depletion(balances: Iterable[float], monthly_deficit: float) -> SavingsDepletion:
    """Years until ``balances`` run out if ``monthly_deficit`` is drawn from them each month."""
    total = sum(balances)
    if monthly_deficit <= 0 or total <= 0:
        return SavingsDepletion(years_until_depleted=math.inf, monthly_drawdown=0.0, total_savings=total)
    return SavingsDepletion(
        years_until_depleted=total / (monthly_deficit * 12),
        monthly_drawdown=monthly_deficit,
        total_savings=total,
    )
