"""Client summary for dashboards and exports.

Two entry points:
- ``convert_client_to_inputs`` turns a stored client record into validated
  ``FinancialInputs`` (including legacy flat fields from older records).
- ``compute_summary_from_client`` produces the headline retirement figures,
  preferring a previously stored projection over recomputing.
"""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, replace
from typing import Any

from loguru import logger

from .calculators.projection import calculate_financial_projections
from .models import FinancialInputs, GrowthAssumptions
from .schemas import validate_assumptions, validate_financial_inputs

DEFAULT_CURRENT_AGE = 30
DEFAULT_RETIREMENT_AGE = 65

# Older records carry balances as flat fields instead of an asset list
_LEGACY_ASSET_FIELDS = (
    ("Super", "Super", ("currentSuper", "superFundValue")),
    ("Shares", "Shares", ("currentShares", "sharesTotalValue")),
    ("Cash", "Savings", ("savingsValue", "currentSavings")),
    ("Home", "Property", ("homeValue",)),
)

_SCALAR_FIELDS = {
    "rental_income": ("rentalIncome", "rental_income"),
    "dividends": ("dividends",),
    "franked_dividends": ("frankedDividends", "franked_dividends"),
    "capital_gains": ("capitalGains", "capital_gains"),
    "other_income": ("otherIncome", "other_income"),
    "monthly_expenses": ("monthlyExpenses", "monthly_expenses"),
}


def _first(record: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return default


def _legacy_assets(client: Mapping[str, Any]) -> list[dict[str, Any]]:
    assets = []
    for name, asset_type, keys in _LEGACY_ASSET_FIELDS:
        value = _first(client, *keys, default=0)
        if value:
            assets.append({"name": name, "value": float(value), "type": asset_type})
    return assets


def convert_client_to_inputs(
    client: Mapping[str, Any] | None,
    assumptions: Mapping[str, Any] | GrowthAssumptions | None = None,
) -> FinancialInputs | None:
    """Normalise a stored client record into ``FinancialInputs``.

    Args:
        client: Client record (camelCase or snake_case keys). ``None`` yields ``None``.
        assumptions: Shared growth assumptions; missing values use the defaults.

    Returns:
        Validated inputs, or None when there is no client.

    Raises:
        InvalidInputError: The record fails boundary validation.
    """
    if client is None:
        return None

    payload: dict[str, Any] = {
        "annual_income": _first(client, "annualIncome", "annual_income", "grossSalary", default=0),
        "current_age": _first(client, "currentAge", "current_age", default=DEFAULT_CURRENT_AGE),
        "retirement_age": _first(client, "retirementAge", "retirement_age", default=DEFAULT_RETIREMENT_AGE),
        "liabilities": _first(client, "liabilities", default=[]),
        "investment_properties": _first(client, "investmentProperties", "investment_properties", default=[]),
    }
    for field_name, keys in _SCALAR_FIELDS.items():
        payload[field_name] = _first(client, *keys, default=0)

    assets = client.get("assets")
    payload["assets"] = assets if isinstance(assets, list) else _legacy_assets(client)

    inputs = validate_financial_inputs(payload).unwrap()
    return replace(inputs, assumptions=validate_assumptions(assumptions))


@dataclass(frozen=True)
class SummaryView:
    """Headline retirement figures for one client."""

    client_name: str
    projected_retirement_lump_sum: float
    projected_retirement_monthly_cash_flow: float
    retirement_deficit_surplus: float
    is_retirement_deficit: bool
    years_to_retirement: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def client_display_name(client: Mapping[str, Any] | None) -> str:
    if not client:
        return "Client"
    name = f"{client.get('firstName') or ''} {client.get('lastName') or ''}".strip()
    return name or "Client"


def _from_stored(client_name: str, stored: Mapping[str, Any]) -> SummaryView:
    return SummaryView(
        client_name=client_name,
        projected_retirement_lump_sum=stored.get("projectedLumpSum") or 0,
        projected_retirement_monthly_cash_flow=stored.get("monthlyPassiveIncome") or 0,
        retirement_deficit_surplus=stored.get("monthlyDeficitSurplus") or 0,
        is_retirement_deficit=bool(stored.get("isDeficit")),
        years_to_retirement=stored.get("yearsToRetirement") or 0,
    )


def compute_summary_from_client(
    client: Mapping[str, Any] | None,
    assumptions: Mapping[str, Any] | GrowthAssumptions | None = None,
    stored_projection: Mapping[str, Any] | None = None,
) -> SummaryView:
    """Headline figures for a client, cache-or-compute.

    A stored projection is trusted and returned as-is; nothing is recomputed.
    Without one, the projection runs live from the client record.
    """
    client_name = client_display_name(client)

    if stored_projection is not None:
        logger.debug(f"Summary for {client_name}: using stored projection")
        return _from_stored(client_name, stored_projection)

    inputs = convert_client_to_inputs(client, assumptions)
    if inputs is None:
        return SummaryView(
            client_name=client_name,
            projected_retirement_lump_sum=0.0,
            projected_retirement_monthly_cash_flow=0.0,
            retirement_deficit_surplus=0.0,
            is_retirement_deficit=False,
            years_to_retirement=DEFAULT_RETIREMENT_AGE - DEFAULT_CURRENT_AGE,
        )

    result = calculate_financial_projections(inputs)
    return SummaryView(
        client_name=client_name,
        projected_retirement_lump_sum=result.combined_networth_at_retirement,
        projected_retirement_monthly_cash_flow=result.projected_monthly_passive_income,
        retirement_deficit_surplus=result.monthly_surplus_deficit,
        is_retirement_deficit=result.is_deficit,
        years_to_retirement=result.years_to_retirement,
    )
