"""Tests for fincore.financial.calculators.tax_tables."""

from fincore.financial.calculators.tax import calculate_income_tax
from fincore.financial.calculators.tax_tables import (
    ATO_TAX_BRACKETS_2024_25,
    HECS_REPAYMENT_THRESHOLDS_2024_25,
    TAX_FREE_THRESHOLD,
)


class TestBracketTable:
    def test_starts_at_zero(self):
        assert ATO_TAX_BRACKETS_2024_25[0].min == 0
        assert ATO_TAX_BRACKETS_2024_25[0].max == TAX_FREE_THRESHOLD

    def test_contiguous(self):
        for prev, nxt in zip(ATO_TAX_BRACKETS_2024_25, ATO_TAX_BRACKETS_2024_25[1:]):
            assert nxt.min == prev.max

    def test_single_open_ended_top_bracket(self):
        open_ended = [b for b in ATO_TAX_BRACKETS_2024_25 if b.max is None]
        assert open_ended == [ATO_TAX_BRACKETS_2024_25[-1]]

    def test_rates_ascending(self):
        rates = [b.rate for b in ATO_TAX_BRACKETS_2024_25]
        assert rates == sorted(rates)

    def test_base_tax_is_cumulative(self):
        """Each bracket's base tax equals the tax payable at its minimum."""
        for bracket in ATO_TAX_BRACKETS_2024_25:
            assert calculate_income_tax(bracket.min) == bracket.base_tax


class TestHecsTable:
    def test_ascending_rates(self):
        rates = [rate for _, _, rate in HECS_REPAYMENT_THRESHOLDS_2024_25]
        assert rates == sorted(rates)

    def test_top_band_open_ended(self):
        assert HECS_REPAYMENT_THRESHOLDS_2024_25[-1][1] is None
