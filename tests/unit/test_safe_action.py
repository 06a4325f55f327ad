"""
Тесты для Safe Action Guard — pre-flight проверка действий

Проверяет:
- PASS при projected HF >= min_health_factor
- REJECT с причиной при projected HF ниже минимума
- REJECT с отдельной причиной при projected HF ниже границы ликвидации
- REJECT при withdraw больше текущего залога
- supply / repay не блокируются через evaluate_action
- Валидацию конфигурации и входов
"""

import dataclasses
import math

import pytest

from src.core.domain.health_factor import HealthFactor, HealthFactorLevel
from src.core.domain.thresholds import HealthFactorThresholds
from src.core.domain.units import BasisPoints
from src.preflight import (
    LendingAction,
    SafeActionConfig,
    SafeActionGuard,
    SafeActionResult,
    validate_safe_action,
)

LT_80 = BasisPoints(8000)


@pytest.fixture
def guard():
    return SafeActionGuard()


# =============================================================================
# validate_safe_action
# =============================================================================


class TestValidateSafeAction:
    def test_safe_borrow(self):
        result = validate_safe_action(1000.0, 0.0, 0.0, 500.0, LT_80)

        assert result.valid is True
        assert result.reason is None
        assert result.projected_hf == HealthFactor.finite(1.6)

    def test_below_minimum(self):
        result = validate_safe_action(1000.0, 0.0, 0.0, 700.0, LT_80)

        assert result.valid is False
        assert result.reason == "Health factor would drop to 1.14 (minimum: 1.20)"
        assert float(result.projected_hf) == pytest.approx(800.0 / 700.0)

    def test_custom_minimum(self):
        result = validate_safe_action(1000.0, 0.0, 0.0, 550.0, LT_80, min_health_factor=1.5)

        assert result.valid is False
        assert result.reason == "Health factor would drop to 1.45 (minimum: 1.50)"

    def test_exactly_at_minimum_passes(self):
        # 800 / 640 = 1.25
        result = validate_safe_action(1000.0, 0.0, 0.0, 640.0, LT_80, min_health_factor=1.25)
        assert result.valid is True

    def test_liquidatable_tier(self):
        result = validate_safe_action(1000.0, 0.0, 0.0, 900.0, LT_80)

        assert result.valid is False
        assert result.reason.startswith(
            "Health factor would drop to 0.89, position would be liquidatable"
        )
        assert result.level == HealthFactorLevel.LIQUIDATION

    def test_no_debt_is_valid(self):
        result = validate_safe_action(1000.0, 0.0, -500.0, 0.0, LT_80)

        assert result.valid is True
        assert result.projected_hf.is_unbounded
        assert result.safety_delta == 0.0

    def test_withdraw_exceeds_collateral(self):
        result = validate_safe_action(1000.0, 100.0, -1500.0, 0.0, LT_80)

        assert result.valid is False
        assert result.reason == "Withdrawal of 1500.00 exceeds current collateral 1000.00"
        assert result.projected_hf == HealthFactor.finite(0.0)

    def test_result_frozen(self):
        result = validate_safe_action(1000.0, 0.0, 0.0, 500.0, LT_80)
        assert isinstance(result, SafeActionResult)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.valid = False

    def test_nan_input_rejected(self):
        with pytest.raises(ValueError):
            validate_safe_action(1000.0, 0.0, 0.0, math.nan, LT_80)


# =============================================================================
# SafeActionGuard.evaluate_action
# =============================================================================


class TestEvaluateAction:
    def test_withdraw_within_limit(self, guard):
        result = guard.evaluate_action(
            LendingAction.WITHDRAW, 1000.0, 2000.0, 600.0, BasisPoints(7500)
        )

        assert result.valid is True
        assert float(result.projected_hf) == 1.25
        assert result.level == HealthFactorLevel.WARNING
        assert result.safety_delta == pytest.approx(1.25 - 2.5)

    def test_withdraw_too_much(self, guard):
        result = guard.evaluate_action(
            LendingAction.WITHDRAW, 1100.0, 2000.0, 600.0, BasisPoints(7500)
        )

        assert result.valid is False
        assert "minimum: 1.20" in result.reason

    def test_borrow_string_action(self, guard):
        result = guard.evaluate_action("borrow", 500.0, 1000.0, 0.0, LT_80)

        assert result.valid is True
        assert result.current_hf.is_unbounded
        assert result.safety_delta == -math.inf

    def test_supply_on_underwater_position_allowed(self, guard):
        # HF 800 / 900 < 1.0; после supply всё ещё ниже 1.0
        result = guard.evaluate_action(LendingAction.SUPPLY, 100.0, 1000.0, 900.0, LT_80)

        assert result.valid is True
        assert result.reason is None
        assert result.safety_delta > 0
        assert result.level == HealthFactorLevel.LIQUIDATION

    def test_partial_repay_below_minimum_allowed(self, guard):
        result = guard.evaluate_action(LendingAction.REPAY, 50.0, 1000.0, 900.0, LT_80)

        assert result.valid is True
        assert result.projected_hf < 1.0

    def test_full_repay(self, guard):
        result = guard.evaluate_action(LendingAction.REPAY, 1000.0, 1000.0, 900.0, LT_80)

        assert result.valid is True
        assert result.projected_hf.is_unbounded
        assert result.level == HealthFactorLevel.SAFE
        assert result.safety_delta == math.inf

    def test_negative_amount_rejected(self, guard):
        with pytest.raises(ValueError):
            guard.evaluate_action(LendingAction.BORROW, -1.0, 1000.0, 0.0, LT_80)

    def test_unknown_action_rejected(self, guard):
        with pytest.raises(ValueError):
            guard.evaluate_action("stake", 1.0, 1000.0, 0.0, LT_80)


# =============================================================================
# Config
# =============================================================================


class TestSafeActionConfig:
    def test_defaults(self):
        config = SafeActionConfig()

        assert config.min_health_factor == 1.2
        assert config.thresholds.safe == 1.5

    @pytest.mark.parametrize("value", [0.0, -1.0, math.nan, math.inf])
    def test_invalid_min_health_factor(self, value):
        with pytest.raises(ValueError):
            SafeActionConfig(min_health_factor=value)

    def test_custom_thresholds_drive_tiers(self):
        config = SafeActionConfig(
            min_health_factor=1.5,
            thresholds=HealthFactorThresholds(safe=2.0, warning=1.5, danger=1.3, liquidation=1.2),
        )
        guard = SafeActionGuard(config)

        # 800 / 700 ≈ 1.14 < 1.2 → уровень ликвидации по кастомным границам
        result = guard.evaluate(1000.0, 0.0, 0.0, 700.0, LT_80)

        assert result.valid is False
        assert "position would be liquidatable (liquidation below 1.20)" in result.reason
        assert result.level == HealthFactorLevel.LIQUIDATION
