"""Financial planning engine: models, calculators, input boundary and summaries."""

from .models import (
    Asset,
    AssetType,
    FinancialInputs,
    Frequency,
    GrowthAssumptions,
    InvestmentProperty,
    Liability,
    LoanAssessment,
    LoanServiceability,
    OptimizationStrategy,
    ProjectionResult,
    ProjectionStatus,
    RetirementMetrics,
    ServiceabilityResult,
    TaxCalculationResult,
    TaxInput,
    TaxProfile,
    YearSnapshot,
)
from .schemas import ValidationResult, validate_financial_inputs
from .summary import SummaryView, compute_summary_from_client, convert_client_to_inputs

__all__ = [
    "Asset",
    "AssetType",
    "FinancialInputs",
    "Frequency",
    "GrowthAssumptions",
    "InvestmentProperty",
    "Liability",
    "LoanAssessment",
    "LoanServiceability",
    "OptimizationStrategy",
    "ProjectionResult",
    "ProjectionStatus",
    "RetirementMetrics",
    "ServiceabilityResult",
    "SummaryView",
    "TaxCalculationResult",
    "TaxInput",
    "TaxProfile",
    "ValidationResult",
    "YearSnapshot",
    "compute_summary_from_client",
    "convert_client_to_inputs",
    "validate_financial_inputs",
]
