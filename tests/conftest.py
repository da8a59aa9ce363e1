"""Shared test fixtures for fincore."""

import os
import tempfile

import pytest

from fincore.core.config import reset_config
from fincore.financial.models import (
    Asset,
    AssetType,
    FinancialInputs,
    Frequency,
    InvestmentProperty,
    Liability,
)


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Every test sees built-in defaults unless it sets FINCORE_* itself."""
    for key in list(os.environ):
        if key.startswith("FINCORE_"):
            monkeypatch.delenv(key)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "assumptions": {"inflation_rate": 3.0, "withdrawal_rate": 5.0},
        "serviceability": {"max_lvr": 0.9},
        "logging": {"level": "debug"},
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def home_loan():
    return Liability(
        lender="Westpac",
        loan_type="Home loan",
        liability_type="Mortgage",
        balance_owing=400_000,
        repayment_amount=2_600,
        frequency=Frequency.MONTHLY,
        interest_rate=6.0,
        loan_term=30,
        term_remaining=25,
    )


@pytest.fixture
def rental_property():
    return InvestmentProperty(
        address="12 Smith St, Brunswick",
        purchase_price=600_000,
        current_value=700_000,
        loan_amount=480_000,
        interest_rate=6.5,
        loan_term=30,
        weekly_rent=550,
        annual_expenses=6_000,
    )


@pytest.fixture
def typical_inputs(home_loan):
    """Mid-career PAYG client with a mortgage, super and some shares."""
    return FinancialInputs(
        annual_income=120_000,
        dividends=2_000,
        monthly_expenses=4_500,
        current_age=40,
        retirement_age=67,
        assets=(
            Asset("Super", 180_000, AssetType.SUPER),
            Asset("Home", 850_000, AssetType.PROPERTY),
            Asset("ETFs", 40_000, AssetType.SHARES),
            Asset("Offset", 25_000, AssetType.SAVINGS),
        ),
        liabilities=(home_loan,),
    )
