"""Tests for fincore.financial.calculators.tax."""

import pytest

from fincore.core.exceptions import InvalidInputError
from fincore.financial.calculators.tax import (
    calculate_hecs_repayment,
    calculate_income_tax,
    calculate_medicare_levy,
    calculate_tax,
    calculate_tax_on_additional_income,
    calculate_total_tax,
    get_effective_tax_rate,
    get_marginal_tax_rate,
    get_tax_bracket,
)
from fincore.financial.models import Deduction, TaxInput


class TestIncomeTax:
    @pytest.mark.parametrize(
        "income,expected",
        [
            (0, 0),
            (18_200, 0),
            (18_201, 0.16),
            (45_000, 4_288),
            (100_000, 20_788),
            (135_000, 31_288),
            (190_000, 51_638),
            (200_000, 56_138),
        ],
    )
    def test_known_values(self, income, expected):
        assert calculate_income_tax(income) == pytest.approx(expected)

    def test_negative_income_rejected(self):
        with pytest.raises(InvalidInputError):
            calculate_income_tax(-1)

    def test_monotonic(self):
        taxes = [calculate_income_tax(income) for income in range(0, 300_001, 2_500)]
        assert taxes == sorted(taxes)


class TestMedicareLevy:
    def test_flat_two_percent(self):
        assert calculate_medicare_levy(45_000) == 900

    def test_zero_and_negative(self):
        assert calculate_medicare_levy(0) == 0
        assert calculate_medicare_levy(-100) == 0


class TestRates:
    def test_boundary_belongs_to_lower_bracket(self):
        assert get_tax_bracket(45_000).rate == 0.16
        assert get_marginal_tax_rate(45_000) == 0.16
        assert get_marginal_tax_rate(45_000.01) == 0.30

    def test_top_marginal_rate(self):
        assert get_marginal_tax_rate(1_000_000) == 0.45

    def test_effective_rate(self):
        assert get_effective_tax_rate(45_000) == pytest.approx(5_188 / 45_000)

    def test_effective_rate_zero_income(self):
        assert get_effective_tax_rate(0) == 0


class TestTotalTax:
    @pytest.mark.smoke
    def test_middle_income(self):
        result = calculate_total_tax(45_000)
        assert result.income_tax == 4_288
        assert result.medicare_levy == 900
        assert result.total_tax == 5_188
        assert result.net_income == 39_812
        assert result.marginal_tax_rate == 0.16
        assert result.average_tax_rate == 0.1153

    def test_top_bracket(self):
        result = calculate_total_tax(200_000)
        assert result.income_tax == 56_138
        assert result.total_tax == 60_138
        assert result.marginal_tax_rate == 0.45

    def test_zero_income(self):
        result = calculate_total_tax(0)
        assert result.total_tax == 0
        assert result.net_income == 0
        assert result.average_tax_rate == 0

    @pytest.mark.parametrize("income", [0, 12_345.67, 45_000, 87_654.32, 250_000])
    def test_net_plus_tax_equals_income(self, income):
        result = calculate_total_tax(income)
        assert result.net_income + result.total_tax == pytest.approx(result.taxable_income, abs=1e-6)

    def test_negative_rejected(self):
        with pytest.raises(InvalidInputError):
            calculate_total_tax(-5)


class TestAdditionalIncome:
    def test_crossing_bracket(self):
        # 40k -> 3,488; 50k -> 5,788
        assert calculate_tax_on_additional_income(40_000, 10_000) == 2_300


class TestHecs:
    def test_no_balance(self):
        assert calculate_hecs_repayment(100_000, 0) == 0

    def test_below_threshold(self):
        assert calculate_hecs_repayment(50_000, 20_000) == 0

    def test_band_rate(self):
        assert calculate_hecs_repayment(60_000, 20_000) == 1_200

    def test_top_band(self):
        assert calculate_hecs_repayment(150_000, 50_000) == 15_000

    def test_capped_at_balance(self):
        assert calculate_hecs_repayment(60_000, 500) == 500


class TestCalculateTax:
    def test_deductions_and_negative_gearing(self):
        result = calculate_tax(
            TaxInput(
                gross_income=100_000,
                deductions=(Deduction("Work", 5_000, "Tools and travel"),),
                negative_gearing_loss=5_000,
            )
        )
        assert result.taxable_income == 90_000
        assert result.income_tax == 17_788
        assert result.medicare_levy == 1_800
        assert result.total_tax == 19_588
        assert result.net_income == 80_412
        assert result.total_deductions == 10_000

    def test_franking_credits_offset_tax(self):
        result = calculate_tax(TaxInput(gross_income=50_000, franked_dividends=7_000))
        assert result.franked_credits == 2_100
        assert result.taxable_income == 59_100
        assert result.income_tax == 6_418
        assert result.medicare_levy == 1_182
        assert result.total_tax == 7_600
        assert result.net_income == 49_400

    def test_medicare_exempt(self):
        result = calculate_tax(TaxInput(gross_income=80_000, medicare_exempt=True))
        assert result.medicare_levy == 0
        assert result.total_tax == result.income_tax

    def test_hecs_added_to_total(self):
        without = calculate_tax(TaxInput(gross_income=60_000))
        with_help = calculate_tax(TaxInput(gross_income=60_000, hecs_balance=20_000))
        assert with_help.hecs_repayment == 1_200
        assert with_help.total_tax == pytest.approx(without.total_tax + 1_200)

    def test_taxable_income_floors_at_zero(self):
        result = calculate_tax(TaxInput(gross_income=10_000, deductions=(Deduction("Other", 20_000),)))
        assert result.taxable_income == 0
        assert result.total_tax == 0

    def test_negative_deduction_rejected(self):
        with pytest.raises(InvalidInputError):
            calculate_tax(TaxInput(gross_income=10_000, deductions=(Deduction("Other", -1),)))
