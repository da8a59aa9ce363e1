"""
Tax Tables for Financial Planning - 2024-25 Australian Income Year

Single source of truth for all statutory constants used across the engine.
This module has NO dependencies on calculator modules to prevent import cycles.

Sources:
- Resident individual rates: ATO "Tax rates - Australian residents" (Stage 3, 2024-25)
- Medicare levy: ATO, flat 2% (low-income phase-in not modelled)
- HELP repayment thresholds: ATO 2024-25 repayment income table
- Super guarantee / concessional cap: ATO key superannuation rates 2024-25

Last updated: July 2024
"""

from ..models import TaxBracket

# =============================================================================
# INCOME TAX BRACKETS 2024-25 (Resident individuals)
# =============================================================================
# base_tax is the cumulative tax payable at the bracket minimum.
# Contiguous: each bracket's min equals the previous bracket's max.

ATO_TAX_BRACKETS_2024_25: tuple[TaxBracket, ...] = (
    TaxBracket(min=0, max=18_200, rate=0.0, base_tax=0, description="Tax-free threshold"),
    TaxBracket(min=18_200, max=45_000, rate=0.16, base_tax=0, description="16% rate"),
    TaxBracket(min=45_000, max=135_000, rate=0.30, base_tax=4_288, description="30% rate"),
    TaxBracket(min=135_000, max=190_000, rate=0.37, base_tax=31_288, description="37% rate"),
    TaxBracket(min=190_000, max=None, rate=0.45, base_tax=51_638, description="45% rate"),
)

TAX_FREE_THRESHOLD = 18_200


# =============================================================================
# MEDICARE
# =============================================================================

MEDICARE_LEVY_RATE = 0.02

# Medicare Levy Surcharge: applies above this income without private cover
MLS_INCOME_THRESHOLD = 90_000
MLS_RATE = 0.015
MLS_MAX_SAVING = 1_500


# =============================================================================
# HELP / HECS REPAYMENT 2024-25
# =============================================================================
# Format: (lower_bound, upper_bound, rate applied to whole repayment income)

HECS_REPAYMENT_THRESHOLDS_2024_25: tuple[tuple[float, float | None, float], ...] = (
    (51_550, 59_518, 0.01),
    (59_519, 65_000, 0.02),
    (65_001, 71_999, 0.025),
    (72_000, 79_999, 0.03),
    (80_000, 89_999, 0.035),
    (90_000, 100_000, 0.04),
    (100_001, 109_999, 0.045),
    (110_000, 124_999, 0.05),
    (125_000, 139_999, 0.055),
    (140_000, None, 0.10),
)


# =============================================================================
# DIVIDEND IMPUTATION
# =============================================================================
# Franking credit attached to fully franked dividends, as a share of the dividend.

FRANKING_CREDIT_RATE = 0.30


# =============================================================================
# CAPITAL GAINS
# =============================================================================

CGT_DISCOUNT_RATE = 0.50  # 50% discount for assets held > 12 months


# =============================================================================
# SUPERANNUATION
# =============================================================================

SUPER_GUARANTEE_RATE = 0.12  # Legislated rate from 1 July 2025
MAX_ANNUAL_SUPER_GUARANTEE = 30_600
CONCESSIONAL_CONTRIBUTIONS_CAP = 27_500
CONCESSIONAL_CONTRIBUTIONS_TAX = 0.15


# =============================================================================
# RETIREMENT PLANNING RULES OF THUMB
# =============================================================================

# Retirement income floor as a share of current income
RETIREMENT_INCOME_RETENTION = 0.70
