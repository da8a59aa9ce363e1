"""Pydantic models for config validation.

Opt-in schema validation for ``Config.config_data``.  Call
``Config.validated()`` to obtain a typed, validated ``FincoreConfig``
instance.  Existing dict-based access continues to work unchanged.

Values arriving from environment variables are strings; pydantic coerces
them to the declared types.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AssumptionsConfig(BaseModel):
    """Default growth assumptions, percentages per annum."""

    inflation_rate: float = 2.5
    salary_growth_rate: float = 3.0
    super_return: float = 6.2
    share_return: float = 7.0
    property_growth_rate: float = 4.0
    rent_growth_rate: float = 3.0
    withdrawal_rate: float = Field(default=4.0, ge=0)
    savings_rate: float = 10.0


class ServiceabilityConfig(BaseModel):
    """Lending defaults for the serviceability calculator (rates as decimals)."""

    interest_rate: float = Field(default=0.06, ge=0)
    loan_term_years: float = Field(default=30, gt=0)
    max_lvr: float = Field(default=0.8, gt=0, le=1)
    rental_yield: float = Field(default=0.04, ge=0)
    property_expense_ratio: float = Field(default=0.02, ge=0)


class StrategyConfig(BaseModel):
    """Trigger points for the tax-strategy rules."""

    charity_donation_target: float = 2_000
    concessional_cap: float = 27_500
    concessional_tax_rate: float = 0.15
    super_income_threshold: float = 50_000
    super_max_income_share: float = 0.15
    new_property_income_threshold: float = 80_000
    new_property_value: float = 750_000
    new_property_rental_yield: float = 0.04
    new_property_interest_rate: float = 0.065
    new_property_lvr: float = Field(default=0.8, gt=0, le=1)
    new_property_expense_ratio: float = 0.02
    mls_income_threshold: float = 90_000
    mls_rate: float = 0.015
    mls_max_saving: float = 1_500
    health_insurance_premium: float = 2_000
    health_insurance_rebate: float = 0.25
    work_expense_target: float = 3_000
    cgt_saving_factor: float = 0.25


class LoggingConfig(BaseModel):
    """Sink settings passed to ``setup_logging``."""

    level: str = "WARNING"
    file: str | None = None
    rotation: str = "10 MB"
    retention: str = "7 days"

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {v!r}")
        return level


class FincoreConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so consumers can bolt on custom sections
    without touching this schema.
    """

    model_config = ConfigDict(extra="allow")

    assumptions: AssumptionsConfig = AssumptionsConfig()
    serviceability: ServiceabilityConfig = ServiceabilityConfig()
    strategies: StrategyConfig = StrategyConfig()
    logging: LoggingConfig = LoggingConfig()
