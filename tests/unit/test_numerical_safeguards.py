"""
Тесты для Numerical Safeguards

Проверяемые инварианты:
1. NaN/Inf отклоняются на входе (ValueError), а не пропагируют
2. Нулевой знаменатель → явный fallback
3. Малые ненулевые знаменатели не подменяются epsilon
4. clamp / is_close корректны на границах
"""

import math

import pytest

from src.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    clamp,
    ensure_finite,
    is_close,
    is_valid_float,
    safe_ratio,
    validate_in_range,
    validate_non_negative,
    validate_positive,
)


# =============================================================================
# ТЕСТЫ: Float Validation
# =============================================================================


class TestIsValidFloat:
    def test_valid_values(self):
        assert is_valid_float(0.0)
        assert is_valid_float(-1.5)
        assert is_valid_float(42)

    def test_invalid_values(self):
        assert not is_valid_float(math.nan)
        assert not is_valid_float(math.inf)
        assert not is_valid_float(-math.inf)
        assert not is_valid_float(True)
        assert not is_valid_float("1.0")
        assert not is_valid_float(None)

    def test_int_beyond_float_range(self):
        assert is_valid_float(10**300)
        assert not is_valid_float(10**400)
        assert not is_valid_float(-(10**400))


class TestEnsureFinite:
    def test_returns_float(self):
        result = ensure_finite(3, "x")
        assert result == 3.0
        assert isinstance(result, float)

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf, "1", None, 10**400])
    def test_rejects(self, value):
        with pytest.raises(ValueError, match="x must be a valid float"):
            ensure_finite(value, "x")


class TestValidators:
    def test_validate_positive(self):
        assert validate_positive(0.1, "x") == 0.1
        with pytest.raises(ValueError, match="positive"):
            validate_positive(0.0, "x")

    def test_validate_non_negative(self):
        assert validate_non_negative(0.0, "x") == 0.0
        with pytest.raises(ValueError, match="non-negative"):
            validate_non_negative(-1e-12, "x")

    def test_validate_in_range(self):
        assert validate_in_range(0.5, "u", 0.0, 1.0) == 0.5
        assert validate_in_range(1.0, "u", 0.0, 1.0) == 1.0
        with pytest.raises(ValueError, match="u must be <= 1.0"):
            validate_in_range(1.01, "u", 0.0, 1.0)
        with pytest.raises(ValueError, match="u must be >= 0.0"):
            validate_in_range(-0.01, "u", 0.0, 1.0)

    def test_validate_in_range_open_bounds(self):
        assert validate_in_range(-1e9, "x", max_value=0.0) == -1e9
        assert validate_in_range(1e9, "x", min_value=0.0) == 1e9


# =============================================================================
# ТЕСТЫ: Safe Ratio
# =============================================================================


class TestSafeRatio:
    def test_normal_division(self):
        assert safe_ratio(600.0, 2400.0) == 0.25

    def test_zero_denominator_fallback(self):
        assert safe_ratio(0.0, 0.0) == 0.0
        assert safe_ratio(5.0, 0.0, fallback=1.0) == 1.0
        assert safe_ratio(5.0, 0.0, fallback=math.inf) == math.inf

    def test_tiny_denominator_not_replaced(self):
        """Малый ненулевой знаменатель даёт точный ratio, а не epsilon-подмену"""
        assert safe_ratio(1e-9, 2e-9) == 0.5

    def test_nan_inputs_rejected(self):
        with pytest.raises(ValueError):
            safe_ratio(math.nan, 1.0)
        with pytest.raises(ValueError):
            safe_ratio(1.0, math.inf)


# =============================================================================
# ТЕСТЫ: Utilities
# =============================================================================


class TestIsClose:
    def test_constants(self):
        assert EPS_FLOAT_COMPARE_REL == 1e-9
        assert EPS_FLOAT_COMPARE_ABS == 1e-12

    def test_close_values(self):
        assert is_close(1.0, 1.0 + 1e-10)
        assert is_close(0.0, 1e-13)

    def test_distant_values(self):
        assert not is_close(1.0, 1.1)
        assert not is_close(0.0, 1e-6)


class TestClamp:
    def test_within_range(self):
        assert clamp(0.5, 0.0, 1.0) == 0.5

    def test_clamped(self):
        assert clamp(1.3, 0.0, 1.0) == 1.0
        assert clamp(-0.2, 0.0, 1.0) == 0.0

    def test_one_sided(self):
        assert clamp(-5.0, min_value=0.0) == 0.0
        assert clamp(5.0, max_value=1.0) == 1.0
        assert clamp(5.0) == 5.0
