"""
Tax optimisation strategies.

A fixed, ordered set of independent rules. Each rule looks only at the
client's TaxProfile, the computed TaxCalculationResult and the thresholds,
and either emits one OptimizationStrategy or nothing. Rules never see each
other's output, so each one can be tested in isolation.

Output is ranked by estimated saving, highest first; ties keep rule order.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from loguru import logger

from ...core.config import Config, get_config
from ...core.utils.rounding import round_currency
from ..models import (
    Difficulty,
    OptimizationStrategy,
    StrategyCategory,
    TaxCalculationResult,
    TaxProfile,
)
from .tax_tables import (
    CONCESSIONAL_CONTRIBUTIONS_CAP,
    CONCESSIONAL_CONTRIBUTIONS_TAX,
    MLS_INCOME_THRESHOLD,
    MLS_MAX_SAVING,
    MLS_RATE,
)


@dataclass(frozen=True)
class StrategyThresholds:
    """Trigger points and modelling assumptions for the strategy rules."""

    charity_donation_target: float = 2_000
    concessional_cap: float = CONCESSIONAL_CONTRIBUTIONS_CAP
    concessional_tax_rate: float = CONCESSIONAL_CONTRIBUTIONS_TAX
    super_income_threshold: float = 50_000
    super_max_income_share: float = 0.15
    new_property_income_threshold: float = 80_000
    new_property_value: float = 750_000
    new_property_rental_yield: float = 0.04
    new_property_interest_rate: float = 0.065
    new_property_lvr: float = 0.8
    new_property_expense_ratio: float = 0.02
    mls_income_threshold: float = MLS_INCOME_THRESHOLD
    mls_rate: float = MLS_RATE
    mls_max_saving: float = MLS_MAX_SAVING
    health_insurance_premium: float = 2_000
    health_insurance_rebate: float = 0.25
    work_expense_target: float = 3_000
    cgt_saving_factor: float = 0.25

    @classmethod
    def from_config(cls, config: Config | None = None) -> "StrategyThresholds":
        """Thresholds from the ``strategies`` config section (global config when omitted)."""
        settings = (config or get_config()).validated().strategies
        return cls(**settings.model_dump())


Rule = Callable[[TaxProfile, TaxCalculationResult, StrategyThresholds], OptimizationStrategy | None]


def _pct(rate: float) -> str:
    return f"{rate * 100:.1f}%"


def charitable_donations(
    profile: TaxProfile, result: TaxCalculationResult, thresholds: StrategyThresholds
) -> OptimizationStrategy | None:
    if profile.charity_donations >= thresholds.charity_donation_target:
        return None
    suggested = thresholds.charity_donation_target - profile.charity_donations
    return OptimizationStrategy(
        strategy="Charitable Donations",
        description=(
            f"Increase charitable donations by ${suggested:,.0f} to maximise tax deductions. "
            f"This is fully tax deductible at your marginal rate of {_pct(result.marginal_tax_rate)}."
        ),
        potential_saving=round_currency(suggested * result.marginal_tax_rate),
        difficulty=Difficulty.EASY,
        category=StrategyCategory.DEDUCTIONS,
    )


def concessional_super(
    profile: TaxProfile, result: TaxCalculationResult, thresholds: StrategyThresholds
) -> OptimizationStrategy | None:
    headroom = thresholds.concessional_cap - profile.super_contributions
    if headroom <= 0 or profile.annual_income <= thresholds.super_income_threshold:
        return None
    contribution = min(headroom, profile.annual_income * thresholds.super_max_income_share)
    rate_gap = max(0.0, result.marginal_tax_rate - thresholds.concessional_tax_rate)
    return OptimizationStrategy(
        strategy="Superannuation Contribution",
        description=(
            f"Make additional pre-tax super contributions of ${contribution:,.0f} to save on tax. "
            f"This will be taxed at {_pct(thresholds.concessional_tax_rate)} instead of your "
            f"marginal rate of {_pct(result.marginal_tax_rate)}."
        ),
        potential_saving=round_currency(contribution * rate_gap),
        difficulty=Difficulty.MEDIUM,
        category=StrategyCategory.SUPER,
    )


def existing_negative_gearing(
    profile: TaxProfile, result: TaxCalculationResult, thresholds: StrategyThresholds
) -> OptimizationStrategy | None:
    rental_loss = max(0.0, profile.rental_expenses - profile.rental_income)
    if rental_loss <= 0:
        return None
    return OptimizationStrategy(
        strategy="Rental Property Tax Optimisation",
        description=(
            f"Your rental property is negatively geared with a loss of ${rental_loss:,.0f}. "
            f"The loss reduces your taxable income, saving tax at your marginal rate of "
            f"{_pct(result.marginal_tax_rate)}."
        ),
        potential_saving=round_currency(rental_loss * result.marginal_tax_rate),
        difficulty=Difficulty.MEDIUM,
        category=StrategyCategory.INVESTMENTS,
    )


def new_property_investment(
    profile: TaxProfile, result: TaxCalculationResult, thresholds: StrategyThresholds
) -> OptimizationStrategy | None:
    if profile.rental_income != 0 or profile.annual_income <= thresholds.new_property_income_threshold:
        return None
    value = thresholds.new_property_value
    rent = value * thresholds.new_property_rental_yield
    interest = value * thresholds.new_property_lvr * thresholds.new_property_interest_rate
    holding_costs = value * thresholds.new_property_expense_ratio
    deductible = interest + holding_costs
    geared_loss = max(0.0, deductible - rent)
    return OptimizationStrategy(
        strategy="New Property Investment",
        description=(
            f"Consider an investment property worth ${value:,.0f}. With rental income of "
            f"${rent:,.0f}/year and deductible expenses of ${deductible:,.0f}/year, you could "
            f"reduce your taxable income through negative gearing."
        ),
        potential_saving=round_currency(geared_loss * result.marginal_tax_rate),
        difficulty=Difficulty.HARD,
        category=StrategyCategory.INVESTMENTS,
    )


def private_health_insurance(
    profile: TaxProfile, result: TaxCalculationResult, thresholds: StrategyThresholds
) -> OptimizationStrategy | None:
    if profile.health_insurance or profile.annual_income <= thresholds.mls_income_threshold:
        return None
    mls_saving = min(profile.annual_income * thresholds.mls_rate, thresholds.mls_max_saving)
    premium = thresholds.health_insurance_premium
    rebate = premium * thresholds.health_insurance_rebate
    net_cost = premium - rebate - mls_saving
    return OptimizationStrategy(
        strategy="Private Health Insurance",
        description=(
            f"Take out private health insurance to avoid the Medicare Levy Surcharge of ${mls_saving:,.0f}. "
            f"With a typical premium of ${premium:,.0f} and rebate of ${rebate:,.0f}, your net cost "
            f"after tax savings would be ${net_cost:,.0f}."
        ),
        potential_saving=round_currency(mls_saving),
        difficulty=Difficulty.EASY,
        category=StrategyCategory.DEDUCTIONS,
    )


def work_related_expenses(
    profile: TaxProfile, result: TaxCalculationResult, thresholds: StrategyThresholds
) -> OptimizationStrategy | None:
    headroom = max(0.0, thresholds.work_expense_target - profile.work_related_expenses)
    if headroom <= 0:
        return None
    return OptimizationStrategy(
        strategy="Work-Related Expenses",
        description=(
            f"Claim additional work-related expenses of ${headroom:,.0f} including home office, "
            f"professional development and tools. This could save you {_pct(result.marginal_tax_rate)} "
            f"in tax on these expenses."
        ),
        potential_saving=round_currency(headroom * result.marginal_tax_rate),
        difficulty=Difficulty.EASY,
        category=StrategyCategory.DEDUCTIONS,
    )


def capital_gains_timing(
    profile: TaxProfile, result: TaxCalculationResult, thresholds: StrategyThresholds
) -> OptimizationStrategy | None:
    if profile.capital_gains <= 0:
        return None
    return OptimizationStrategy(
        strategy="Capital Gains Tax Planning",
        description="Time asset sales to minimise tax impact and utilise the CGT discount.",
        potential_saving=round_currency(profile.capital_gains * thresholds.cgt_saving_factor * result.marginal_tax_rate),
        difficulty=Difficulty.MEDIUM,
        category=StrategyCategory.TIMING,
    )


# Evaluation order; also the tie-break order of the ranking
RULES: tuple[Rule, ...] = (
    charitable_donations,
    concessional_super,
    existing_negative_gearing,
    new_property_investment,
    private_health_insurance,
    work_related_expenses,
    capital_gains_timing,
)


def generate_optimization_strategies(
    profile: TaxProfile,
    current_result: TaxCalculationResult,
    thresholds: StrategyThresholds | None = None,
) -> list[OptimizationStrategy]:
    """Evaluate every rule and rank the applicable strategies by saving."""
    thresholds = thresholds or StrategyThresholds.from_config()
    strategies = []
    for rule in RULES:
        strategy = rule(profile, current_result, thresholds)
        if strategy is not None:
            strategies.append(strategy)

    ranked = sorted(strategies, key=lambda s: s.potential_saving, reverse=True)
    logger.debug(f"Generated {len(ranked)} strategies, total saving ${calculate_total_tax_savings(ranked):,.2f}")
    return ranked


def calculate_total_tax_savings(strategies: list[OptimizationStrategy]) -> float:
    """Sum of estimated savings across strategies."""
    return round_currency(sum(s.potential_saving for s in strategies))


def profile_from_mapping(data: Mapping[str, Any]) -> TaxProfile:
    """Build a TaxProfile from a loosely-keyed form payload.

    Income is read from ``annualIncome``, ``employmentIncome`` or
    ``grossIncome`` (first present wins); snake_case keys are accepted too.
    """

    def pick(*keys: str, default: Any = 0.0) -> Any:
        for key in keys:
            if data.get(key) is not None:
                return data[key]
        return default

    return TaxProfile(
        annual_income=float(
            pick("annualIncome", "annual_income", "employmentIncome", "employment_income", "grossIncome", "gross_income")
        ),
        rental_income=float(pick("rentalIncome", "rental_income")),
        rental_expenses=float(pick("rentalExpenses", "rental_expenses")),
        charity_donations=float(pick("charityDonations", "charity_donations")),
        work_related_expenses=float(pick("workRelatedExpenses", "work_related_expenses")),
        capital_gains=float(pick("capitalGains", "capital_gains")),
        health_insurance=bool(pick("healthInsurance", "health_insurance", default=False)),
        super_contributions=float(pick("superContributions", "super_contributions")),
        franked_dividends=float(pick("frankedDividends", "franked_dividends")),
    )
