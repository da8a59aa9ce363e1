"""Tests for fincore.financial.calculators.cashflow."""

import math

import pytest

from fincore.financial.calculators.cashflow import (
    calculate_debt_payments_at_retirement,
    calculate_monthly_surplus,
    calculate_savings_depletion,
)
from fincore.financial.models import FinancialInputs, Frequency, Liability


class TestMonthlySurplus:
    def test_typical_client(self, typical_inputs):
        cash = calculate_monthly_surplus(typical_inputs)

        assert cash.income.employment == pytest.approx(10_000)
        assert cash.income.investment == pytest.approx(2_000 / 12)
        assert cash.income.total == pytest.approx(122_000 / 12)

        # Tax on 122k: 27,388 income tax + 2,440 levy
        assert cash.expenses.tax == pytest.approx(29_828 / 12)
        assert cash.expenses.living == 4_500
        assert cash.expenses.loan_repayments == pytest.approx(2_600)
        assert cash.surplus == pytest.approx(cash.income.total - cash.expenses.total)

    def test_help_reported_separately(self, typical_inputs):
        without = calculate_monthly_surplus(typical_inputs)
        with_help = calculate_monthly_surplus(typical_inputs, hecs_balance=20_000)
        assert with_help.expenses.hecs == pytest.approx(6_100 / 12)
        assert with_help.expenses.tax == pytest.approx(without.expenses.tax)

    def test_rental_property(self, rental_property):
        cash = calculate_monthly_surplus(FinancialInputs(investment_properties=(rental_property,)))
        assert cash.income.rental == pytest.approx(550 * 52 / 12)
        assert cash.expenses.property_expenses == pytest.approx(500)

    def test_weekly_repayments_normalised(self):
        loan = Liability("CBA", "Car loan", "Personal", 20_000, 500, Frequency.WEEKLY, 9.0, 5, 3)
        cash = calculate_monthly_surplus(FinancialInputs(liabilities=(loan,)))
        assert cash.expenses.loan_repayments == pytest.approx(500 * 52 / 12)

    def test_savings_rate(self):
        cash = calculate_monthly_surplus(FinancialInputs(annual_income=60_000, monthly_expenses=2_000))
        assert cash.savings_rate == pytest.approx(cash.surplus / 5_000 * 100)

    def test_savings_rate_without_income(self):
        assert calculate_monthly_surplus(FinancialInputs(monthly_expenses=1_000)).savings_rate == 0


class TestDebtAtRetirement:
    def test_loan_finishing_before_retirement(self, home_loan):
        assert calculate_debt_payments_at_retirement([home_loan], 27) == 0

    def test_loan_still_running(self, home_loan):
        assert calculate_debt_payments_at_retirement([home_loan], 20) == pytest.approx(2_600)

    def test_already_retired(self, home_loan):
        assert calculate_debt_payments_at_retirement([home_loan], 0) == 0

    def test_paid_off_loans_ignored(self):
        cleared = Liability("NAB", "Home loan", "Mortgage", 0, 2_000, "M", 6.0, 30, 28)
        assert calculate_debt_payments_at_retirement([cleared], 10) == 0


class TestSavingsDepletion:
    def test_years_until_empty(self):
        result = calculate_savings_depletion([30_000, 6_000], 1_000)
        assert result.total_savings == 36_000
        assert result.years_until_depleted == pytest.approx(3.0)
        assert result.monthly_drawdown == 1_000

    @pytest.mark.parametrize("balances,deficit", [([50_000], 0), ([50_000], -200), ([], 500), ([0, 0], 500)])
    def test_never_depleted(self, balances, deficit):
        result = calculate_savings_depletion(balances, deficit)
        assert result.years_until_depleted == math.inf
        assert result.monthly_drawdown == 0
