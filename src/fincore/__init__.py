"""fincore: Australian financial-planning calculation engine."""

from loguru import logger

from .core.exceptions import ConfigurationError, FincoreError, InvalidInputError
from .financial import (
    FinancialInputs,
    GrowthAssumptions,
    SummaryView,
    ValidationResult,
    compute_summary_from_client,
    convert_client_to_inputs,
    validate_financial_inputs,
)
from .financial.calculators import (
    calculate_financial_projections,
    calculate_loan_serviceability,
    calculate_property_serviceability,
    calculate_total_tax,
    generate_optimization_strategies,
)

__version__ = "0.1.0"

# Silent unless the host application opts in via setup_logging()
logger.disable("fincore")

__all__ = [
    "ConfigurationError",
    "FinancialInputs",
    "FincoreError",
    "GrowthAssumptions",
    "InvalidInputError",
    "SummaryView",
    "ValidationResult",
    "calculate_financial_projections",
    "calculate_loan_serviceability",
    "calculate_property_serviceability",
    "calculate_total_tax",
    "compute_summary_from_client",
    "convert_client_to_inputs",
    "generate_optimization_strategies",
    "validate_financial_inputs",
]
