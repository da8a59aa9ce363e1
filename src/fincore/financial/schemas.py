"""Input boundary for raw client records.

Client records reach the engine as loosely-typed mappings (camelCase from the
dashboard, snake_case from scripts). They are validated once here, with
pydantic, and come out as an immutable ``FinancialInputs`` or a list of
readable errors. Nothing past this boundary re-checks types.

Usage:
    result = validate_financial_inputs(payload)
    if result.ok:
        projection = calculate_financial_projections(result.value)
    else:
        show(result.errors)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..core.exceptions import InvalidInputError
from .models import (
    Asset,
    AssetType,
    FinancialInputs,
    Frequency,
    GrowthAssumptions,
    InvestmentProperty,
    Liability,
)

_ASSET_TYPE_ALIASES = {
    "super": AssetType.SUPER,
    "superannuation": AssetType.SUPER,
    "property": AssetType.PROPERTY,
    "shares": AssetType.SHARES,
    "savings": AssetType.SAVINGS,
    "cash": AssetType.SAVINGS,
}

_FREQUENCY_ALIASES = {
    "w": Frequency.WEEKLY,
    "weekly": Frequency.WEEKLY,
    "f": Frequency.FORTNIGHTLY,
    "fortnightly": Frequency.FORTNIGHTLY,
    "m": Frequency.MONTHLY,
    "monthly": Frequency.MONTHLY,
}


def _is_unset(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class _BoundaryModel(BaseModel):
    """camelCase aliases, snake_case names accepted, unknown keys ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_unset(cls, data: Any) -> Any:
        # null or a blank form field in a stored record means "not entered": use the default
        if isinstance(data, Mapping):
            return {k: v for k, v in data.items() if not _is_unset(v)}
        return data


class AssetSchema(_BoundaryModel):
    name: str = ""
    value: float = Field(default=0.0, ge=0, validation_alias=AliasChoices("value", "currentValue", "current_value"))
    type: AssetType = AssetType.OTHER

    @field_validator("type", mode="before")
    @classmethod
    def _map_type(cls, v: Any) -> AssetType:
        if isinstance(v, AssetType):
            return v
        return _ASSET_TYPE_ALIASES.get(str(v or "").strip().lower(), AssetType.OTHER)

    def to_model(self) -> Asset:
        return Asset(name=self.name, value=self.value, type=self.type)


class LiabilitySchema(_BoundaryModel):
    lender: str = ""
    loan_type: str = ""
    liability_type: str = ""
    balance_owing: float = Field(
        default=0.0, ge=0, validation_alias=AliasChoices("balanceOwing", "balance_owing", "balance")
    )
    repayment_amount: float = Field(default=0.0, ge=0)
    frequency: Frequency = Frequency.MONTHLY
    interest_rate: float = Field(default=0.0, ge=0)
    loan_term: float = Field(default=0.0, ge=0)
    term_remaining: float = Field(default=0.0, ge=0)

    @field_validator("frequency", mode="before")
    @classmethod
    def _map_frequency(cls, v: Any) -> Any:
        return _FREQUENCY_ALIASES.get(str(v).strip().lower(), v)

    @model_validator(mode="after")
    def _term_fits_loan(self) -> LiabilitySchema:
        # Records often omit the original term; the remaining term is then the best known bound
        if self.loan_term == 0:
            self.loan_term = self.term_remaining
        if self.term_remaining > self.loan_term:
            raise ValueError(f"term_remaining ({self.term_remaining}) exceeds loan_term ({self.loan_term})")
        return self

    def to_model(self) -> Liability:
        return Liability(
            lender=self.lender,
            loan_type=self.loan_type,
            liability_type=self.liability_type,
            balance_owing=self.balance_owing,
            repayment_amount=self.repayment_amount,
            frequency=self.frequency,
            interest_rate=self.interest_rate,
            loan_term=self.loan_term,
            term_remaining=self.term_remaining,
        )


class InvestmentPropertySchema(_BoundaryModel):
    address: str = ""
    purchase_price: float = Field(default=0.0, ge=0)
    current_value: float = Field(default=0.0, ge=0)
    loan_amount: float = Field(default=0.0, ge=0)
    interest_rate: float = Field(default=0.0, ge=0)
    loan_term: float = Field(default=0.0, ge=0)
    weekly_rent: float = Field(default=0.0, ge=0)
    annual_expenses: float = Field(default=0.0, ge=0)

    def to_model(self) -> InvestmentProperty:
        return InvestmentProperty(**self.model_dump())


class GrowthAssumptionsSchema(_BoundaryModel):
    """Growth assumptions as percentages per annum."""

    inflation_rate: float = 2.5
    salary_growth_rate: float = 3.0
    super_return: float = 6.2
    share_return: float = 7.0
    property_growth_rate: float = 4.0
    rent_growth_rate: float = 3.0
    withdrawal_rate: float = Field(default=4.0, ge=0)
    savings_rate: float = 10.0

    def over(self, base: GrowthAssumptions) -> GrowthAssumptions:
        """``base`` with only the values this record actually set replaced."""
        return replace(base, **self.model_dump(include=self.model_fields_set))


def _configured_assumptions(schema: GrowthAssumptionsSchema | None) -> GrowthAssumptions:
    base = GrowthAssumptions.from_config()
    return base if schema is None else schema.over(base)


class FinancialInputsSchema(_BoundaryModel):
    annual_income: float = Field(default=0.0, ge=0)
    rental_income: float = Field(default=0.0, ge=0)
    dividends: float = Field(default=0.0, ge=0)
    franked_dividends: float = Field(default=0.0, ge=0)
    capital_gains: float = Field(default=0.0, ge=0)
    other_income: float = Field(default=0.0, ge=0)
    monthly_expenses: float = Field(default=0.0, ge=0)
    current_age: int = Field(default=30, ge=0)
    retirement_age: int = 65
    assets: list[AssetSchema] = []
    liabilities: list[LiabilitySchema] = []
    investment_properties: list[InvestmentPropertySchema] = []
    assumptions: GrowthAssumptionsSchema | None = None

    @model_validator(mode="after")
    def _retires_after_today(self) -> FinancialInputsSchema:
        if self.retirement_age <= self.current_age:
            raise ValueError(
                f"retirement_age ({self.retirement_age}) must be greater than current_age ({self.current_age})"
            )
        return self

    def to_model(self) -> FinancialInputs:
        return FinancialInputs(
            annual_income=self.annual_income,
            rental_income=self.rental_income,
            dividends=self.dividends,
            franked_dividends=self.franked_dividends,
            capital_gains=self.capital_gains,
            other_income=self.other_income,
            monthly_expenses=self.monthly_expenses,
            current_age=self.current_age,
            retirement_age=self.retirement_age,
            assets=tuple(a.to_model() for a in self.assets),
            liabilities=tuple(lb.to_model() for lb in self.liabilities),
            investment_properties=tuple(p.to_model() for p in self.investment_properties),
            assumptions=_configured_assumptions(self.assumptions),
        )


@dataclass(frozen=True)
class ValidationResult:
    """Tagged outcome of boundary validation: a value or the reasons there is none."""

    value: FinancialInputs | None = None
    errors: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.errors

    def unwrap(self) -> FinancialInputs:
        """Return the validated inputs or raise ``InvalidInputError`` listing every problem."""
        if not self.ok:
            raise InvalidInputError("Invalid financial inputs: " + "; ".join(self.errors))
        return self.value


def _format_errors(exc: ValidationError) -> tuple[str, ...]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return tuple(messages)


def validate_financial_inputs(data: Mapping[str, Any] | FinancialInputs) -> ValidationResult:
    """Validate a raw client record into ``FinancialInputs``.

    Already-built ``FinancialInputs`` pass straight through.
    """
    if isinstance(data, FinancialInputs):
        return ValidationResult(value=data)
    try:
        schema = FinancialInputsSchema.model_validate(dict(data))
        return ValidationResult(value=schema.to_model())
    except ValidationError as e:
        return ValidationResult(errors=_format_errors(e))
    except InvalidInputError as e:
        return ValidationResult(errors=(str(e),))


def validate_assumptions(data: Mapping[str, Any] | GrowthAssumptions | None) -> GrowthAssumptions:
    """Normalise shared assumptions (mapping, dataclass or None) into ``GrowthAssumptions``.

    Missing keys fall back to the ``assumptions`` config section. Raises
    ``InvalidInputError`` on bad values.
    """
    if isinstance(data, GrowthAssumptions):
        return data
    if data is None:
        return GrowthAssumptions.from_config()
    try:
        return _configured_assumptions(GrowthAssumptionsSchema.model_validate(dict(data)))
    except ValidationError as e:
        raise InvalidInputError("Invalid assumptions: " + "; ".join(_format_errors(e))) from e
