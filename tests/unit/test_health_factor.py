"""
Тесты для HealthFactor — sum type Finite | Unbounded

Проверяемые инварианты:
1. Unbounded — отдельный вариант, float(unbounded) == inf
2. Сравнения с числами и между вариантами определены и не дают NaN
3. Вычитание: Unbounded − Unbounded = 0.0, ±inf если Unbounded ровно один
4. Конечный HF не может быть NaN/Inf/отрицательным
5. from_ratio: переполнение насыщается до MAX_FINITE_HEALTH_FACTOR
"""

import math

import pytest

from src.core.domain.health_factor import (
    MAX_FINITE_HEALTH_FACTOR,
    HealthFactor,
    HealthFactorLevel,
    as_health_factor,
)


class TestConstruction:
    """Создание вариантов."""

    def test_finite(self):
        hf = HealthFactor.finite(1.25)
        assert hf.value == 1.25
        assert not hf.is_unbounded
        assert float(hf) == 1.25

    def test_unbounded(self):
        hf = HealthFactor.unbounded()
        assert hf.is_unbounded
        assert hf.value is None
        assert float(hf) == math.inf

    def test_finite_zero_allowed(self):
        assert float(HealthFactor.finite(0.0)) == 0.0

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_finite_rejects_non_finite(self, value):
        with pytest.raises(ValueError):
            HealthFactor.finite(value)

    def test_finite_rejects_negative(self):
        with pytest.raises(ValueError, match="negative"):
            HealthFactor.finite(-0.1)

    def test_repr(self):
        assert repr(HealthFactor.finite(1.25)) == "HealthFactor.finite(1.25)"
        assert repr(HealthFactor.unbounded()) == "HealthFactor.unbounded()"

    def test_immutable(self):
        hf = HealthFactor.finite(1.0)
        with pytest.raises(AttributeError):
            hf.value = 2.0


class TestComparison:
    """Сравнения HealthFactor."""

    def test_unbounded_greater_than_any_finite(self):
        assert HealthFactor.unbounded() > HealthFactor.finite(1e300)
        assert HealthFactor.unbounded() > 1e300

    def test_compare_with_numbers(self):
        hf = HealthFactor.finite(1.25)
        assert hf < 1.5
        assert hf >= 1.2
        assert hf > 1
        assert 1.5 > hf

    def test_equality(self):
        assert HealthFactor.finite(1.0) == HealthFactor.finite(1.0)
        assert HealthFactor.finite(1.0) == 1.0
        assert HealthFactor.unbounded() == HealthFactor.unbounded()
        assert HealthFactor.unbounded() != HealthFactor.finite(1.0)

    def test_hash_consistent_with_eq(self):
        assert hash(HealthFactor.finite(2.0)) == hash(HealthFactor.finite(2.0))
        assert len({HealthFactor.unbounded(), HealthFactor.unbounded()}) == 1

    def test_sorting(self):
        values = [HealthFactor.unbounded(), HealthFactor.finite(2.0), HealthFactor.finite(0.9)]
        assert sorted(values) == [
            HealthFactor.finite(0.9),
            HealthFactor.finite(2.0),
            HealthFactor.unbounded(),
        ]

    def test_compare_with_nan_raises(self):
        with pytest.raises(ValueError, match="NaN"):
            HealthFactor.finite(1.0) < math.nan

    def test_compare_with_unsupported_type(self):
        with pytest.raises(TypeError):
            HealthFactor.finite(1.0) < "1.0"


class TestSubtraction:
    """Разница HF (safety delta)."""

    def test_both_unbounded(self):
        assert HealthFactor.unbounded() - HealthFactor.unbounded() == 0.0

    def test_unbounded_minus_finite(self):
        assert HealthFactor.unbounded() - HealthFactor.finite(1.5) == math.inf

    def test_finite_minus_unbounded(self):
        assert HealthFactor.finite(1.5) - HealthFactor.unbounded() == -math.inf

    def test_both_finite(self):
        assert HealthFactor.finite(2.0) - HealthFactor.finite(1.5) == 0.5

    def test_never_nan(self):
        for a in (HealthFactor.unbounded(), HealthFactor.finite(1.0)):
            for b in (HealthFactor.unbounded(), HealthFactor.finite(1.0)):
                assert not math.isnan(a - b)


class TestFromRatio:
    """HF из взвешенного залога и долга."""

    def test_exact_ratio(self):
        assert HealthFactor.from_ratio(750.0, 500.0) == HealthFactor.finite(1.5)

    def test_zero_debt_unbounded(self):
        assert HealthFactor.from_ratio(750.0, 0.0).is_unbounded
        assert HealthFactor.from_ratio(0.0, 0.0).is_unbounded

    def test_overflow_saturates_to_finite_max(self):
        hf = HealthFactor.from_ratio(8e299, 1e-10)

        assert not hf.is_unbounded
        assert hf.value == MAX_FINITE_HEALTH_FACTOR
        assert hf < HealthFactor.unbounded()

    def test_infinite_collateral_saturates(self):
        assert HealthFactor.from_ratio(math.inf, 1.0).value == MAX_FINITE_HEALTH_FACTOR

    def test_both_infinite_rejected(self):
        with pytest.raises(ValueError, match="both overflow"):
            HealthFactor.from_ratio(math.inf, math.inf)

    @pytest.mark.parametrize("collateral, debt", [(-1.0, 1.0), (1.0, -1.0), (math.nan, 1.0), (1.0, math.nan)])
    def test_invalid_inputs(self, collateral, debt):
        with pytest.raises(ValueError):
            HealthFactor.from_ratio(collateral, debt)


class TestAsHealthFactor:
    """Приведение float → HealthFactor."""

    def test_passthrough(self):
        hf = HealthFactor.finite(1.1)
        assert as_health_factor(hf) is hf

    def test_inf_is_unbounded(self):
        assert as_health_factor(math.inf).is_unbounded

    def test_float(self):
        assert as_health_factor(1.3) == HealthFactor.finite(1.3)
        assert as_health_factor(2) == HealthFactor.finite(2.0)

    @pytest.mark.parametrize("value", [math.nan, -1.0, -math.inf, "1.2", None, True])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            as_health_factor(value)


class TestHealthFactorLevel:
    def test_values(self):
        assert HealthFactorLevel.SAFE.value == "safe"
        assert HealthFactorLevel.WARNING.value == "warning"
        assert HealthFactorLevel.DANGER.value == "danger"
        assert HealthFactorLevel.LIQUIDATION.value == "liquidation"
