"""Financial calculators: tax, loans, serviceability, projections, strategies."""

from .cashflow import (
    MonthlySurplus,
    SavingsDepletion,
    calculate_debt_payments_at_retirement,
    calculate_monthly_surplus,
    calculate_savings_depletion,
)
from .loan import (
    AmortizingLoan,
    calculate_loan_payment,
    calculate_max_borrowing_capacity,
    calculate_remaining_balance,
    generate_amortization_schedule,
)
from .projection import calculate_financial_projections
from .property import (
    NegativeGearingResult,
    PropertyExpenses,
    calculate_negative_gearing,
    calculate_property_cashflow,
    calculate_rental_yield,
)
from .serviceability import (
    calculate_investment_surplus,
    calculate_loan_serviceability,
    calculate_property_serviceability,
    calculate_retirement_investment_surplus,
)
from .strategies import (
    StrategyThresholds,
    calculate_total_tax_savings,
    generate_optimization_strategies,
    profile_from_mapping,
)
from .tax import (
    calculate_hecs_repayment,
    calculate_income_tax,
    calculate_medicare_levy,
    calculate_tax,
    calculate_tax_on_additional_income,
    calculate_total_tax,
    get_effective_tax_rate,
    get_marginal_tax_rate,
    get_tax_bracket,
)
from .tax_tables import ATO_TAX_BRACKETS_2024_25

__all__ = [
    "ATO_TAX_BRACKETS_2024_25",
    "AmortizingLoan",
    "MonthlySurplus",
    "NegativeGearingResult",
    "PropertyExpenses",
    "SavingsDepletion",
    "StrategyThresholds",
    "calculate_debt_payments_at_retirement",
    "calculate_financial_projections",
    "calculate_hecs_repayment",
    "calculate_income_tax",
    "calculate_investment_surplus",
    "calculate_loan_payment",
    "calculate_loan_serviceability",
    "calculate_max_borrowing_capacity",
    "calculate_medicare_levy",
    "calculate_monthly_surplus",
    "calculate_negative_gearing",
    "calculate_property_cashflow",
    "calculate_property_serviceability",
    "calculate_remaining_balance",
    "calculate_rental_yield",
    "calculate_retirement_investment_surplus",
    "calculate_savings_depletion",
    "calculate_tax",
    "calculate_tax_on_additional_income",
    "calculate_total_tax",
    "calculate_total_tax_savings",
    "generate_amortization_schedule",
    "generate_optimization_strategies",
    "get_effective_tax_rate",
    "get_marginal_tax_rate",
    "get_tax_bracket",
    "profile_from_mapping",
]
