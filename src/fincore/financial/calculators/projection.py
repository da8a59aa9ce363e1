"""
Retirement projection engine.

Linear, year-by-year forward simulation from the client's current age to
retirement. Each year, in order:

1. grow every asset class at its assumption rate and pay employer super
2. grow income streams (salary-like, rental, investment) and expenses
3. step each loan one year along its amortization schedule
4. net cash flow = income - tax - expenses - loan repayments
5. allocate a positive cash flow between savings and shares; a negative one
   draws savings down (never below zero)

The final year determines net worth, passive income and the monthly
surplus/deficit at retirement. Balances carry full float precision through
the loop; only the reported figures are rounded to cents.
"""

from dataclasses import dataclass, field

from loguru import logger

from ...core.utils.rounding import round_currency
from ..models import (
    AssetType,
    FinancialInputs,
    ProjectionResult,
    ProjectionStatus,
    YearSnapshot,
)
from .loan import AmortizingLoan
from .tax import calculate_total_tax
from .tax_tables import MAX_ANNUAL_SUPER_GUARANTEE, SUPER_GUARANTEE_RATE


def super_guarantee(salary: float) -> float:
    """Employer super contribution on a year's salary, capped."""
    return min(salary * SUPER_GUARANTEE_RATE, MAX_ANNUAL_SUPER_GUARANTEE)


def annual_tax(taxable_income: float) -> float:
    """Income tax plus levy on a taxable income (losses floor at zero)."""
    return calculate_total_tax(max(0.0, taxable_income)).total_tax


@dataclass
class _ProjectionState:
    """Mutable per-run state. Created fresh for every projection."""

    balances: dict[AssetType, float]
    liabilities: list[AmortizingLoan]
    home_loan_flags: list[bool]
    property_values: list[float]
    property_loans: list[AmortizingLoan]
    property_rents: list[float]
    property_expenses: list[float]
    salary: float
    other_income: float
    rental_income: float
    investment_income: float
    living_expenses: float
    snapshots: list[YearSnapshot] = field(default_factory=list)

    @classmethod
    def from_inputs(cls, inputs: FinancialInputs) -> "_ProjectionState":
        properties = inputs.investment_properties
        return cls(
            balances={asset_type: inputs.assets_of_type(asset_type) for asset_type in AssetType},
            liabilities=[
                AmortizingLoan(lb.balance_owing, lb.interest_rate, lb.term_remaining, lb.frequency)
                for lb in inputs.liabilities
            ],
            home_loan_flags=[lb.is_home_loan for lb in inputs.liabilities],
            property_values=[p.current_value for p in properties],
            property_loans=[AmortizingLoan(p.loan_amount, p.interest_rate, p.loan_term) for p in properties],
            property_rents=[p.annual_rent for p in properties],
            property_expenses=[p.annual_expenses for p in properties],
            salary=inputs.annual_income,
            other_income=inputs.other_income,
            rental_income=inputs.rental_income,
            investment_income=inputs.dividends + inputs.franked_dividends + inputs.capital_gains,
            living_expenses=inputs.monthly_expenses * 12,
        )

    @property
    def income(self) -> float:
        return (
            self.salary + self.other_income + self.rental_income + self.investment_income + sum(self.property_rents)
        )

    @property
    def expenses(self) -> float:
        return self.living_expenses + sum(self.property_expenses)

    @property
    def liability_balance(self) -> float:
        return sum(loan.balance for loan in self.liabilities) + sum(loan.balance for loan in self.property_loans)

    @property
    def net_worth(self) -> float:
        return sum(self.balances.values()) + sum(self.property_values) - self.liability_balance

    @property
    def owner_occupied_equity(self) -> float:
        home_loans = sum(loan.balance for loan, is_home in zip(self.liabilities, self.home_loan_flags) if is_home)
        return self.balances[AssetType.PROPERTY] - home_loans

    def record(self, year: int, age: int, tax: float, loan_repayments: float, net_cash_flow: float) -> None:
        self.snapshots.append(
            YearSnapshot(
                year=year,
                age=age,
                super_balance=self.balances[AssetType.SUPER],
                property_balance=self.balances[AssetType.PROPERTY],
                shares_balance=self.balances[AssetType.SHARES],
                savings_balance=self.balances[AssetType.SAVINGS],
                other_balance=self.balances[AssetType.OTHER],
                investment_property_value=sum(self.property_values),
                liability_balance=self.liability_balance,
                income=self.income,
                tax=tax,
                expenses=self.expenses,
                loan_repayments=loan_repayments,
                net_cash_flow=net_cash_flow,
                net_worth=self.net_worth,
            )
        )


def _opening_snapshot(state: _ProjectionState, age: int) -> None:
    """Year 0: current position with this year's scheduled flows, no growth."""
    repayments = 0.0
    for loan in state.liabilities + state.property_loans:
        if loan.balance <= 0:
            continue
        if loan.periods_left <= 0:
            repayments += loan.balance
        else:
            repayments += loan.payment * min(loan.frequency.periods_per_year, loan.periods_left)

    property_interest = sum(loan.balance * loan.annual_rate for loan in state.property_loans)
    tax = annual_tax(state.income - sum(state.property_expenses) - property_interest)
    net_cash_flow = state.income - tax - state.expenses - repayments
    state.record(year=0, age=age, tax=tax, loan_repayments=repayments, net_cash_flow=net_cash_flow)


def _advance_year(state: _ProjectionState, inputs: FinancialInputs, year: int) -> None:
    assumptions = inputs.assumptions
    inflation = assumptions.inflation_rate / 100
    salary_growth = assumptions.salary_growth_rate / 100
    rent_growth = assumptions.rent_growth_rate / 100
    property_growth = assumptions.property_growth_rate / 100
    savings_share = min(1.0, max(0.0, assumptions.savings_rate / 100))

    # 1. Asset growth
    for asset_type in AssetType:
        state.balances[asset_type] *= 1 + assumptions.rate_for(asset_type)
    state.property_values = [value * (1 + property_growth) for value in state.property_values]

    # 2. Income and expense growth
    state.salary *= 1 + salary_growth
    state.other_income *= 1 + salary_growth
    state.rental_income *= 1 + rent_growth
    state.property_rents = [rent * (1 + rent_growth) for rent in state.property_rents]
    state.investment_income *= 1 + inflation
    state.living_expenses *= 1 + inflation
    state.property_expenses = [cost * (1 + inflation) for cost in state.property_expenses]

    state.balances[AssetType.SUPER] += super_guarantee(state.salary)

    # 3. Loan repayments
    loan_repayments = 0.0
    for loan in state.liabilities:
        repaid, _ = loan.step_year()
        loan_repayments += repaid

    property_interest = 0.0
    for loan in state.property_loans:
        repaid, interest = loan.step_year()
        loan_repayments += repaid
        property_interest += interest

    # 4. Net cash flow
    tax = annual_tax(state.income - sum(state.property_expenses) - property_interest)
    net_cash_flow = state.income - tax - state.expenses - loan_repayments

    # 5. Allocation
    if net_cash_flow > 0:
        state.balances[AssetType.SAVINGS] += net_cash_flow * savings_share
        state.balances[AssetType.SHARES] += net_cash_flow * (1 - savings_share)
    else:
        state.balances[AssetType.SAVINGS] = max(0.0, state.balances[AssetType.SAVINGS] + net_cash_flow)

    state.record(
        year=year,
        age=inputs.current_age + year,
        tax=tax,
        loan_repayments=loan_repayments,
        net_cash_flow=net_cash_flow,
    )


def calculate_financial_projections(inputs: FinancialInputs) -> ProjectionResult:
    """Project a client's position forward to retirement.

    Args:
        inputs: Validated client snapshot.

    Returns:
        ProjectionResult with the retirement figures and one snapshot per year
        (year 0 is the current position).
    """
    years_to_retirement = max(0, inputs.retirement_age - inputs.current_age)
    state = _ProjectionState.from_inputs(inputs)

    _opening_snapshot(state, inputs.current_age)
    current_net_worth = state.net_worth

    for year in range(1, years_to_retirement + 1):
        _advance_year(state, inputs, year)

    net_worth = state.net_worth
    investable_net_worth = max(0.0, net_worth - state.owner_occupied_equity)
    passive_income = investable_net_worth * inputs.assumptions.withdrawal_rate / 100
    future_monthly_expenses = state.living_expenses / 12

    monthly_surplus_deficit = round_currency(passive_income / 12 - future_monthly_expenses)
    status = ProjectionStatus.SURPLUS if monthly_surplus_deficit > 0 else ProjectionStatus.DEFICIT

    logger.debug(
        f"Projection {inputs.current_age}->{inputs.retirement_age}: net worth ${net_worth:,.0f}, "
        f"passive ${passive_income:,.0f}/yr, {status.value} ${monthly_surplus_deficit:,.2f}/mo"
    )

    return ProjectionResult(
        combined_networth_at_retirement=round_currency(net_worth),
        projected_annual_passive_income=round_currency(passive_income),
        monthly_surplus_deficit=monthly_surplus_deficit,
        years_to_retirement=years_to_retirement,
        status=status,
        year_by_year=tuple(state.snapshots),
        current_net_worth=round_currency(current_net_worth),
        current_monthly_income=round_currency(_current_monthly_income(inputs)),
        future_monthly_expenses=round_currency(future_monthly_expenses),
    )


def _current_monthly_income(inputs: FinancialInputs) -> float:
    property_rent = sum(p.annual_rent for p in inputs.investment_properties)
    return (inputs.total_annual_income + property_rent) / 12
