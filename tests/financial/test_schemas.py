"""Tests for fincore.financial.schemas."""

import pytest

from fincore.core.exceptions import InvalidInputError
from fincore.financial.models import AssetType, FinancialInputs, Frequency, GrowthAssumptions
from fincore.financial.schemas import validate_assumptions, validate_financial_inputs


@pytest.fixture
def dashboard_payload():
    """A client record as the dashboard stores it (camelCase)."""
    return {
        "annualIncome": 95_000,
        "monthlyExpenses": 3_800,
        "frankedDividends": 1_200,
        "currentAge": 35,
        "retirementAge": 67,
        "assets": [
            {"name": "AustralianSuper", "currentValue": 85_000, "type": "super"},
            {"name": "Everyday", "value": 12_000, "type": "cash"},
            {"name": "Crypto", "value": 3_000, "type": "crypto"},
        ],
        "liabilities": [
            {
                "lender": "Macquarie",
                "loanType": "Car loan",
                "liabilityType": "Personal",
                "balance": 18_000,
                "repaymentAmount": 210,
                "frequency": "weekly",
                "interestRate": 8.5,
                "loanTerm": 5,
                "termRemaining": 3,
            }
        ],
        "investmentProperties": [
            {
                "address": "4/20 Beach Rd",
                "purchasePrice": 520_000,
                "currentValue": 560_000,
                "loanAmount": 400_000,
                "interestRate": 6.3,
                "loanTerm": 30,
                "weeklyRent": 480,
                "annualExpenses": 5_500,
            }
        ],
        "assumptions": {"inflationRate": 3.0},
        "firstName": "Ignored",
    }


class TestValid:
    @pytest.mark.smoke
    def test_camel_case_record(self, dashboard_payload):
        result = validate_financial_inputs(dashboard_payload)
        assert result.ok
        inputs = result.unwrap()

        assert isinstance(inputs, FinancialInputs)
        assert inputs.annual_income == 95_000
        assert inputs.franked_dividends == 1_200
        assert inputs.current_age == 35
        assert [a.type for a in inputs.assets] == [AssetType.SUPER, AssetType.SAVINGS, AssetType.OTHER]
        assert inputs.assets[0].value == 85_000

        loan = inputs.liabilities[0]
        assert loan.balance_owing == 18_000
        assert loan.frequency is Frequency.WEEKLY
        assert loan.term_remaining == 3

        assert inputs.investment_properties[0].weekly_rent == 480
        assert inputs.assumptions.inflation_rate == 3.0
        assert inputs.assumptions.super_return == 6.2

    def test_snake_case_record(self):
        result = validate_financial_inputs({"annual_income": 70_000, "monthly_expenses": 2_500, "current_age": 45})
        assert result.ok
        assert result.value.annual_income == 70_000
        assert result.value.retirement_age == 65

    def test_nulls_use_defaults(self):
        result = validate_financial_inputs({"annualIncome": None, "currentAge": None, "assets": None})
        assert result.ok
        assert result.value.annual_income == 0
        assert result.value.current_age == 30
        assert result.value.assets == ()

    def test_blank_strings_use_defaults(self):
        result = validate_financial_inputs(
            {
                "annualIncome": 80_000,
                "rentalIncome": "",
                "otherIncome": "  ",
                "currentAge": "",
                "liabilities": [{"frequency": ""}],
            }
        )
        assert result.ok
        assert result.value.rental_income == 0
        assert result.value.other_income == 0
        assert result.value.current_age == 30
        assert result.value.liabilities[0].frequency is Frequency.MONTHLY

    def test_missing_loan_term_uses_remaining(self):
        result = validate_financial_inputs({"liabilities": [{"balance": 5_000, "termRemaining": 4}]})
        loan = result.unwrap().liabilities[0]
        assert loan.loan_term == 4
        assert loan.frequency is Frequency.MONTHLY

    def test_inputs_pass_through(self):
        inputs = FinancialInputs(annual_income=1)
        assert validate_financial_inputs(inputs).value is inputs


class TestInvalid:
    def test_negative_income(self):
        result = validate_financial_inputs({"annualIncome": -10})
        assert not result.ok
        assert result.value is None
        assert any("annualIncome" in e for e in result.errors)

    def test_retirement_before_current_age(self):
        result = validate_financial_inputs({"currentAge": 60, "retirementAge": 55})
        assert not result.ok
        assert any("retirement_age" in e for e in result.errors)

    def test_term_remaining_exceeds_term(self):
        result = validate_financial_inputs({"liabilities": [{"loanTerm": 5, "termRemaining": 6}]})
        assert not result.ok

    def test_unknown_frequency(self):
        result = validate_financial_inputs({"liabilities": [{"frequency": "yearly", "termRemaining": 1}]})
        assert not result.ok

    def test_collects_every_error(self):
        result = validate_financial_inputs({"annualIncome": -1, "monthlyExpenses": "lots"})
        assert len(result.errors) == 2

    def test_unwrap_raises(self):
        with pytest.raises(InvalidInputError, match="Invalid financial inputs"):
            validate_financial_inputs({"dividends": -5}).unwrap()


class TestAssumptions:
    def test_none_gives_defaults(self):
        assert validate_assumptions(None) == GrowthAssumptions()

    def test_dataclass_passes_through(self):
        assumptions = GrowthAssumptions(share_return=8.0)
        assert validate_assumptions(assumptions) is assumptions

    def test_partial_mapping(self):
        assumptions = validate_assumptions({"withdrawalRate": 3.5, "rent_growth_rate": 2.0})
        assert assumptions.withdrawal_rate == 3.5
        assert assumptions.rent_growth_rate == 2.0
        assert assumptions.inflation_rate == 2.5

    def test_invalid_raises(self):
        with pytest.raises(InvalidInputError):
            validate_assumptions({"withdrawalRate": -1})

    def test_none_uses_configured_defaults(self, monkeypatch):
        monkeypatch.setenv("FINCORE_ASSUMPTIONS__INFLATION_RATE", "3.1")
        assert validate_assumptions(None) == GrowthAssumptions(inflation_rate=3.1)

    def test_partial_mapping_fills_from_config(self, monkeypatch):
        monkeypatch.setenv("FINCORE_ASSUMPTIONS__SUPER_RETURN", "7.5")
        assumptions = validate_assumptions({"inflationRate": 2.0})
        assert assumptions.inflation_rate == 2.0
        assert assumptions.super_return == 7.5

    def test_record_without_assumptions_uses_config(self, monkeypatch):
        monkeypatch.setenv("FINCORE_ASSUMPTIONS__WITHDRAWAL_RATE", "5")
        inputs = validate_financial_inputs({"annualIncome": 50_000}).unwrap()
        assert inputs.assumptions.withdrawal_rate == 5.0
