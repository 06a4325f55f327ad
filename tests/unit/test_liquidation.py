"""
Тесты для Liquidation

Проверяемые инварианты:
1. collateral × price × threshold = borrow в точке ликвидации
2. Нулевой залог или threshold → None (цена не определена)
3. Дистанция до ликвидации ∈ [0, 1] или inf
"""

import math

import pytest

from src.core.domain.units import BasisPoints, HundredthBasisPoints
from src.core.math.liquidation import (
    calculate_distance_to_liquidation,
    calculate_effective_liquidation_penalty,
    calculate_liquidation_bonus,
    calculate_liquidation_price,
    calculate_safety_buffer,
)


class TestLiquidationPrice:
    def test_basic(self):
        """10 единиц залога, долг 7000, threshold 80% → 875"""
        assert calculate_liquidation_price(10.0, 7000.0, BasisPoints(8000)) == 875.0

    def test_solves_liquidation_equation(self):
        collateral, borrow, threshold = 3.5, 4200.0, BasisPoints(8250)
        price = calculate_liquidation_price(collateral, borrow, threshold)

        assert collateral * price * threshold / 10_000 == pytest.approx(borrow)

    def test_zero_collateral_undefined(self):
        assert calculate_liquidation_price(0.0, 7000.0, BasisPoints(8000)) is None

    def test_zero_threshold_undefined(self):
        assert calculate_liquidation_price(10.0, 7000.0, BasisPoints(0)) is None

    def test_no_debt_zero_price(self):
        assert calculate_liquidation_price(10.0, 0.0, BasisPoints(8000)) == 0.0

    def test_invalid_inputs(self):
        with pytest.raises(ValueError):
            calculate_liquidation_price(-1.0, 7000.0, BasisPoints(8000))
        with pytest.raises(ValueError):
            calculate_liquidation_price(10.0, math.nan, BasisPoints(8000))


class TestLiquidationBonus:
    def test_bonus(self):
        assert calculate_liquidation_bonus(1000.0, BasisPoints(600)) == 60.0
        assert calculate_liquidation_bonus(0.0, BasisPoints(600)) == 0.0

    def test_bonus_is_bps_not_hundredth(self):
        assert calculate_liquidation_bonus(1000.0, BasisPoints(10)) == 1.0


class TestDistanceToLiquidation:
    def test_distance(self):
        assert calculate_distance_to_liquidation(1000.0, 875.0) == 0.125

    def test_already_below(self):
        assert calculate_distance_to_liquidation(800.0, 875.0) == 0.0

    def test_undefined_price(self):
        assert calculate_distance_to_liquidation(1000.0, None) == math.inf
        assert calculate_distance_to_liquidation(1000.0, 0.0) == math.inf

    def test_invalid_current_price(self):
        with pytest.raises(ValueError):
            calculate_distance_to_liquidation(0.0, 875.0)


class TestRiskParameters:
    def test_safety_buffer(self):
        assert calculate_safety_buffer(BasisPoints(7000), BasisPoints(7500)) == 0.05
        assert calculate_safety_buffer(BasisPoints(8000), BasisPoints(8000)) == 0.0

    def test_effective_penalty_mixes_scales(self):
        penalty = calculate_effective_liquidation_penalty(
            BasisPoints(500), HundredthBasisPoints(10_000)
        )
        assert penalty == pytest.approx(0.06)

    def test_effective_penalty_without_fee(self):
        penalty = calculate_effective_liquidation_penalty(BasisPoints(500), HundredthBasisPoints(0))
        assert penalty == 0.05
