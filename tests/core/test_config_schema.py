"""Tests for fincore.core.config_schema."""

from dataclasses import fields

import pytest
from pydantic import ValidationError

from fincore.core.config import Config
from fincore.core.config_schema import (
    AssumptionsConfig,
    FincoreConfig,
    LoggingConfig,
    ServiceabilityConfig,
    StrategyConfig,
)
from fincore.financial.calculators.strategies import StrategyThresholds
from fincore.financial.models import GrowthAssumptions


@pytest.mark.smoke
def test_defaults_validate():
    config = FincoreConfig()
    assert config.assumptions.inflation_rate == 2.5
    assert config.serviceability.loan_term_years == 30
    assert config.logging.level == "WARNING"


def test_extra_sections_allowed():
    config = FincoreConfig.model_validate({"reporting": {"currency": "AUD"}})
    assert config.model_extra["reporting"] == {"currency": "AUD"}


class TestAssumptionsConfig:
    def test_defaults_match_growth_assumptions(self):
        assert GrowthAssumptions.from_config(Config(env_prefix="")) == GrowthAssumptions()

    def test_override(self):
        config = Config(env_prefix="", defaults={"assumptions": {"share_return": "8.5"}})
        assumptions = GrowthAssumptions.from_config(config)
        assert assumptions.share_return == 8.5

    def test_negative_withdrawal_rejected(self):
        with pytest.raises(ValidationError):
            AssumptionsConfig(withdrawal_rate=-1)


class TestServiceabilityConfig:
    @pytest.mark.parametrize("lvr", [0, -0.1, 1.01])
    def test_lvr_bounds(self, lvr):
        with pytest.raises(ValidationError):
            ServiceabilityConfig(max_lvr=lvr)

    def test_full_lvr_allowed(self):
        assert ServiceabilityConfig(max_lvr=1.0).max_lvr == 1.0

    def test_term_must_be_positive(self):
        with pytest.raises(ValidationError):
            ServiceabilityConfig(loan_term_years=0)


class TestStrategyConfig:
    def test_defaults_match_thresholds(self):
        assert StrategyThresholds.from_config(Config(env_prefix="")) == StrategyThresholds()

    def test_override_flows_through(self):
        config = Config(env_prefix="", defaults={"strategies": {"work_expense_target": 4_000}})
        thresholds = StrategyThresholds.from_config(config)
        assert thresholds.work_expense_target == 4_000

    def test_fields_match_thresholds(self):
        assert set(StrategyConfig.model_fields) == {f.name for f in fields(StrategyThresholds)}

    def test_property_lvr_bounded(self):
        with pytest.raises(ValidationError):
            StrategyConfig(new_property_lvr=1.5)


class TestLoggingConfig:
    def test_level_normalised(self):
        assert LoggingConfig(level="info").level == "INFO"

    def test_unknown_level_rejected(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")
