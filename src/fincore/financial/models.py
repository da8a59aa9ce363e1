"""Core financial data models.

Plain, immutable representations of a client's position and of every result
the engine derives from it. Any caller (REST handler, PDF job, notebook) can
build these directly or go through ``fincore.financial.schemas`` to validate a
raw client record first.

Percentages on inputs follow the advisor-facing convention (``4.5`` means 4.5%
per annum); rates on results are decimals (``0.3`` means 30%).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from ..core.config import Config, get_config
from ..core.exceptions import InvalidInputError

# ── Enumerations ─────────────────────────────────────────────────────


class AssetType(StrEnum):
    """Asset classes; each grows at its own assumption rate."""

    SUPER = "Super"
    PROPERTY = "Property"
    SHARES = "Shares"
    SAVINGS = "Savings"
    OTHER = "Other"


class Frequency(StrEnum):
    """Repayment frequency of a liability."""

    WEEKLY = "W"
    FORTNIGHTLY = "F"
    MONTHLY = "M"

    @property
    def periods_per_year(self) -> int:
        return _PERIODS_PER_YEAR[self]


_PERIODS_PER_YEAR = {
    Frequency.WEEKLY: 52,
    Frequency.FORTNIGHTLY: 26,
    Frequency.MONTHLY: 12,
}


class LoanAssessment(StrEnum):
    APPROVED = "APPROVED"
    DECLINED = "DECLINED"


class ProjectionStatus(StrEnum):
    SURPLUS = "surplus"
    DEFICIT = "deficit"


class Difficulty(StrEnum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class StrategyCategory(StrEnum):
    DEDUCTIONS = "Deductions"
    SUPER = "Super"
    INVESTMENTS = "Investments"
    TIMING = "Timing"
    OTHER = "Other"


def _require_non_negative(owner: str, **values: float) -> None:
    for name, value in values.items():
        if value < 0:
            raise InvalidInputError(f"{owner}: {name} cannot be negative, got {value}")


# ── Client position ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Asset:
    """A single asset held by the client."""

    name: str
    value: float
    type: AssetType

    def __post_init__(self):
        object.__setattr__(self, "type", AssetType(self.type))
        _require_non_negative(f"Asset {self.name!r}", value=self.value)


_HOME_LOAN_MARKERS = ("home", "owner", "mortgage")


@dataclass(frozen=True)
class Liability:
    """A loan or debt the client is repaying.

    Attributes:
        lender: Institution name.
        loan_type: e.g. "Home loan", "Car loan".
        liability_type: e.g. "Mortgage", "Personal".
        balance_owing: Current balance.
        repayment_amount: Contractual repayment per ``frequency`` period.
        frequency: Weekly, fortnightly or monthly.
        interest_rate: Annual percentage (e.g. 6.1 for 6.1%).
        loan_term: Original term in years.
        term_remaining: Years left on the loan.
    """

    lender: str
    loan_type: str
    liability_type: str
    balance_owing: float
    repayment_amount: float
    frequency: Frequency
    interest_rate: float
    loan_term: float
    term_remaining: float

    def __post_init__(self):
        object.__setattr__(self, "frequency", Frequency(self.frequency))
        _require_non_negative(
            f"Liability {self.lender!r}",
            balance_owing=self.balance_owing,
            repayment_amount=self.repayment_amount,
            interest_rate=self.interest_rate,
            loan_term=self.loan_term,
            term_remaining=self.term_remaining,
        )
        if self.term_remaining > self.loan_term:
            raise InvalidInputError(
                f"Liability {self.lender!r}: term_remaining ({self.term_remaining}) "
                f"exceeds loan_term ({self.loan_term})"
            )

    @property
    def is_home_loan(self) -> bool:
        """True when the loan is secured on the owner-occupied home."""
        label = f"{self.loan_type} {self.liability_type}".lower()
        return "investment" not in label and any(marker in label for marker in _HOME_LOAN_MARKERS)


@dataclass(frozen=True)
class InvestmentProperty:
    """Rental property with its own loan."""

    address: str
    purchase_price: float
    current_value: float
    loan_amount: float
    interest_rate: float  # Annual percentage
    loan_term: float  # Years
    weekly_rent: float
    annual_expenses: float

    def __post_init__(self):
        _require_non_negative(
            f"InvestmentProperty {self.address!r}",
            purchase_price=self.purchase_price,
            current_value=self.current_value,
            loan_amount=self.loan_amount,
            interest_rate=self.interest_rate,
            loan_term=self.loan_term,
            weekly_rent=self.weekly_rent,
            annual_expenses=self.annual_expenses,
        )

    @property
    def annual_rent(self) -> float:
        return self.weekly_rent * 52

    @property
    def equity(self) -> float:
        return self.current_value - self.loan_amount


@dataclass(frozen=True)
class GrowthAssumptions:
    """Per-annum growth assumptions, as percentages."""

    inflation_rate: float = 2.5
    salary_growth_rate: float = 3.0
    super_return: float = 6.2
    share_return: float = 7.0
    property_growth_rate: float = 4.0
    rent_growth_rate: float = 3.0
    withdrawal_rate: float = 4.0
    savings_rate: float = 10.0

    @classmethod
    def from_config(cls, config: Config | None = None) -> GrowthAssumptions:
        """Assumptions from the ``assumptions`` config section (global config when omitted)."""
        settings = (config or get_config()).validated().assumptions
        return cls(**settings.model_dump())

    def rate_for(self, asset_type: AssetType) -> float:
        """Decimal growth rate applied to an asset class."""
        match AssetType(asset_type):
            case AssetType.SUPER:
                pct = self.super_return
            case AssetType.PROPERTY:
                pct = self.property_growth_rate
            case AssetType.SHARES:
                pct = self.share_return
            case AssetType.SAVINGS:
                pct = self.savings_rate
            case _:
                pct = self.inflation_rate
        return pct / 100


@dataclass(frozen=True)
class FinancialInputs:
    """Immutable snapshot of everything one projection needs.

    Validated on construction: monetary fields must be non-negative and
    ``retirement_age`` must be greater than ``current_age``.
    """

    annual_income: float = 0.0
    rental_income: float = 0.0
    dividends: float = 0.0
    franked_dividends: float = 0.0
    capital_gains: float = 0.0
    other_income: float = 0.0
    monthly_expenses: float = 0.0
    current_age: int = 30
    retirement_age: int = 65
    assets: tuple[Asset, ...] = ()
    liabilities: tuple[Liability, ...] = ()
    investment_properties: tuple[InvestmentProperty, ...] = ()
    assumptions: GrowthAssumptions = field(default_factory=GrowthAssumptions)

    def __post_init__(self):
        for name in ("assets", "liabilities", "investment_properties"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

        _require_non_negative(
            "FinancialInputs",
            annual_income=self.annual_income,
            rental_income=self.rental_income,
            dividends=self.dividends,
            franked_dividends=self.franked_dividends,
            capital_gains=self.capital_gains,
            other_income=self.other_income,
            monthly_expenses=self.monthly_expenses,
            current_age=self.current_age,
        )
        if self.retirement_age <= self.current_age:
            raise InvalidInputError(
                f"retirement_age ({self.retirement_age}) must be greater than current_age ({self.current_age})"
            )

    @property
    def total_annual_income(self) -> float:
        """Gross income from all declared sources."""
        return (
            self.annual_income
            + self.rental_income
            + self.dividends
            + self.franked_dividends
            + self.capital_gains
            + self.other_income
        )

    def assets_of_type(self, asset_type: AssetType) -> float:
        return sum(a.value for a in self.assets if a.type == asset_type)


# ── Tax ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TaxBracket:
    """One band of the progressive income-tax scale.

    Upper bound inclusive; lower bound exclusive except for the bracket
    starting at zero. ``max=None`` marks the open-ended top bracket.
    """

    min: float
    max: float | None
    rate: float
    base_tax: float
    description: str = ""

    def contains(self, income: float) -> bool:
        above_min = income > self.min or (self.min == 0 and income >= 0)
        return above_min and (self.max is None or income <= self.max)


@dataclass(frozen=True)
class Deduction:
    category: str
    amount: float
    description: str = ""


@dataclass(frozen=True)
class TaxInput:
    """Full tax-return style input for ``calculate_tax``."""

    gross_income: float
    deductions: tuple[Deduction, ...] = ()
    negative_gearing_loss: float = 0.0
    franked_dividends: float = 0.0
    hecs_balance: float = 0.0
    medicare_exempt: bool = False

    def __post_init__(self):
        object.__setattr__(self, "deductions", tuple(self.deductions))
        _require_non_negative(
            "TaxInput",
            gross_income=self.gross_income,
            negative_gearing_loss=self.negative_gearing_loss,
            franked_dividends=self.franked_dividends,
            hecs_balance=self.hecs_balance,
        )


@dataclass(frozen=True)
class TaxCalculationResult:
    """Tax breakdown. Money rounded to cents, rates (decimals) to 4 dp."""

    taxable_income: float
    income_tax: float
    medicare_levy: float
    total_tax: float
    net_income: float
    marginal_tax_rate: float
    average_tax_rate: float
    franked_credits: float = 0.0
    total_deductions: float = 0.0
    hecs_repayment: float = 0.0


# ── Loans ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class AmortizationEntry:
    period: int
    payment: float
    principal: float
    interest: float
    remaining_balance: float


# ── Projection ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class YearSnapshot:
    """Balances and cash flows at the end of one projection year.

    Year 0 is the opening position (no growth applied yet).
    """

    year: int
    age: int
    super_balance: float
    property_balance: float
    shares_balance: float
    savings_balance: float
    other_balance: float
    investment_property_value: float
    liability_balance: float
    income: float
    tax: float
    expenses: float
    loan_repayments: float
    net_cash_flow: float
    net_worth: float

    @property
    def total_assets(self) -> float:
        return (
            self.super_balance
            + self.property_balance
            + self.shares_balance
            + self.savings_balance
            + self.other_balance
            + self.investment_property_value
        )


@dataclass(frozen=True)
class RetirementMetrics:
    """Monthly retirement position used to size further borrowing."""

    projected_passive_income_monthly: float
    current_monthly_income: float
    monthly_deficit_or_surplus: float
    is_deficit: bool


@dataclass(frozen=True)
class ProjectionResult:
    """Outcome of one retirement projection."""

    combined_networth_at_retirement: float
    projected_annual_passive_income: float
    monthly_surplus_deficit: float
    years_to_retirement: int
    status: ProjectionStatus
    year_by_year: tuple[YearSnapshot, ...]
    current_net_worth: float = 0.0
    current_monthly_income: float = 0.0
    future_monthly_expenses: float = 0.0

    @property
    def is_deficit(self) -> bool:
        return self.status == ProjectionStatus.DEFICIT

    @property
    def projected_monthly_passive_income(self) -> float:
        return self.projected_annual_passive_income / 12

    def to_retirement_metrics(self) -> RetirementMetrics:
        return RetirementMetrics(
            projected_passive_income_monthly=self.projected_monthly_passive_income,
            current_monthly_income=self.current_monthly_income,
            monthly_deficit_or_surplus=self.monthly_surplus_deficit,
            is_deficit=self.is_deficit,
        )


# ── Serviceability ───────────────────────────────────────────────────


@dataclass(frozen=True)
class ServiceabilityResult:
    max_property_value: float
    max_monthly_payment: float
    surplus_income: float
    loan_to_value_ratio: float
    monthly_rental_income: float
    total_monthly_expenses: float
    is_viable: bool
    reason: str | None = None


@dataclass(frozen=True)
class LoanServiceability:
    """Affordability of one proposed loan against current monthly cash flow.

    ``serviceability_ratio`` is commitments as a percentage of net income and
    is ``inf`` when there is no net income.
    """

    loan_amount: float
    monthly_repayment: float
    total_monthly_commitments: float
    monthly_net_income: float
    net_surplus_after_loan: float
    serviceability_ratio: float
    required_buffer: float
    actual_buffer: float
    has_buffer: bool
    stress_test_repayment: float
    passes_stress_test: bool
    can_afford: bool
    assessment: LoanAssessment
    reasons: tuple[str, ...] = ()


# ── Strategies ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class TaxProfile:
    """Inputs the strategy rules look at, beyond the computed tax result."""

    annual_income: float = 0.0
    rental_income: float = 0.0
    rental_expenses: float = 0.0
    charity_donations: float = 0.0
    work_related_expenses: float = 0.0
    capital_gains: float = 0.0
    health_insurance: bool = False
    super_contributions: float = 0.0
    franked_dividends: float = 0.0


@dataclass(frozen=True)
class OptimizationStrategy:
    strategy: str
    description: str
    potential_saving: float
    difficulty: Difficulty
    category: StrategyCategory
