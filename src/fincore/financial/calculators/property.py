"""Investment-property arithmetic: yield, holding cash flow and negative gearing.

Amounts are annual unless the name says monthly. Rates and fees are decimals
except where a result is labelled as a percentage.
"""

from dataclasses import astuple, dataclass

from loguru import logger

from ...core.exceptions import InvalidInputError
from ...core.utils.rounding import round_currency

DEFAULT_MAINTENANCE_RESERVE = 0.01
DEFAULT_MANAGEMENT_FEE = 0.07


@dataclass(frozen=True)
class PropertyExpenses:
    """Annual deductible costs of holding a rental property."""

    mortgage_interest: float = 0.0
    repairs: float = 0.0
    management_fees: float = 0.0
    insurance: float = 0.0
    council_rates: float = 0.0
    other_expenses: float = 0.0
    depreciation: float = 0.0

    def __post_init__(self):
        if any(amount < 0 for amount in astuple(self)):
            raise InvalidInputError("Property expenses cannot be negative")

    @property
    def total(self) -> float:
        return sum(astuple(self))


@dataclass(frozen=True)
class NegativeGearingResult:
    total_rental_income: float
    total_expenses: float
    net_loss: float
    tax_benefit: float


def calculate_negative_gearing(
    annual_rental_income: float,
    expenses: PropertyExpenses,
    marginal_tax_rate: float,
) -> NegativeGearingResult:
    """Tax benefit of a rental loss offset against other income.

    A property that makes a profit has no net loss and no benefit.

    Args:
        annual_rental_income: Gross rent received for the year
        expenses: Deductible holding costs
        marginal_tax_rate: Client's marginal rate as decimal (e.g. 0.37)
    """
    if annual_rental_income < 0:
        raise InvalidInputError(f"Rental income cannot be negative, got {annual_rental_income}")
    if not 0 <= marginal_tax_rate <= 1:
        raise InvalidInputError(f"Marginal tax rate must be in [0, 1], got {marginal_tax_rate}")

    total_expenses = expenses.total
    net_loss = max(0.0, total_expenses - annual_rental_income)
    tax_benefit = net_loss * marginal_tax_rate
    logger.debug(f"Negative gearing: loss ${net_loss:,.2f}, benefit ${tax_benefit:,.2f}")

    return NegativeGearingResult(
        total_rental_income=round_currency(annual_rental_income),
        total_expenses=round_currency(total_expenses),
        net_loss=round_currency(net_loss),
        tax_benefit=round_currency(tax_benefit),
    )


def calculate_rental_yield(annual_rent: float, property_value: float) -> float:
    """Gross rental yield as a percentage; 0 when the property has no value."""
    if property_value <= 0:
        return 0.0
    return annual_rent / property_value * 100


def calculate_property_cashflow(
    monthly_rent: float,
    monthly_loan_payment: float,
    monthly_expenses: float = 0.0,
    maintenance_reserve: float = DEFAULT_MAINTENANCE_RESERVE,
    management_fee: float = DEFAULT_MANAGEMENT_FEE,
    property_value: float = 0.0,
) -> float:
    """Monthly cash flow of holding a rental property (negative when it costs money).

    Args:
        monthly_rent: Rent received per month
        monthly_loan_payment: Loan repayment per month
        monthly_expenses: Other holding costs per month
        maintenance_reserve: Annual maintenance set aside, as a share of property value
        management_fee: Agent's fee as a share of rent
        property_value: Current value, used for the maintenance reserve
    """
    maintenance = property_value * maintenance_reserve / 12
    fees = monthly_rent * management_fee
    return monthly_rent - monthly_loan_payment - monthly_expenses - maintenance - fees
