"""End-to-end checks through the top-level fincore API."""

import pytest

import fincore


@pytest.mark.smoke
def test_exports():
    for name in fincore.__all__:
        assert hasattr(fincore, name)


@pytest.mark.smoke
def test_client_record_to_strategies_and_serviceability():
    record = {
        "annualIncome": 160_000,
        "monthlyExpenses": 6_000,
        "currentAge": 38,
        "retirementAge": 65,
        "assets": [{"name": "Super", "value": 210_000, "type": "super"}],
    }
    inputs = fincore.validate_financial_inputs(record).unwrap()

    projection = fincore.calculate_financial_projections(inputs)
    serviceability = fincore.calculate_property_serviceability(projection.to_retirement_metrics())
    assert serviceability.loan_to_value_ratio == 0.8

    tax = fincore.calculate_total_tax(inputs.annual_income)
    assert tax.marginal_tax_rate == 0.37

    from fincore.financial.models import TaxProfile

    strategies = fincore.generate_optimization_strategies(TaxProfile(annual_income=160_000), tax)
    savings = [s.potential_saving for s in strategies]
    assert savings == sorted(savings, reverse=True)


def test_invalid_input_is_catchable_as_library_error():
    with pytest.raises(fincore.FincoreError):
        fincore.calculate_total_tax(-1)
