"""
Тесты для Compounding — APR ↔ APY и начисление процентов

Проверяемые инварианты:
1. Domain restriction: периодическая ставка r > -1
2. CompoundingDomainViolation при r ≤ -1
3. apy_to_apr(apr_to_apy(apr, n), n) == apr с точностью 1e-9
4. Численная стабильность log1p/expm1 на малых ставках
5. Ожидаемый доход: сложный процент >= простой при apr > 0
"""

import math

import pytest

from src.core.math.compounding import (
    COMPOUND_FREQUENCY_DAILY,
    COMPOUND_FREQUENCY_MONTHLY,
    CompoundingDomainViolation,
    apr_to_apy,
    apy_to_apr,
    calculate_projected_earnings,
    safe_log_return,
)


# =============================================================================
# ТЕСТЫ: Safe Log Return
# =============================================================================


class TestSafeLogReturn:
    def test_matches_log1p(self):
        assert safe_log_return(0.05) == math.log1p(0.05)
        assert safe_log_return(0.0) == 0.0

    def test_small_rate_precision(self):
        """log1p сохраняет точность там, где log(1 + r) теряет её"""
        r = 1e-12
        assert safe_log_return(r) == pytest.approx(r, rel=1e-9)

    def test_domain_violation(self):
        with pytest.raises(CompoundingDomainViolation):
            safe_log_return(-1.0)
        with pytest.raises(CompoundingDomainViolation):
            safe_log_return(-1.5)

    def test_non_finite_rejected(self):
        with pytest.raises(ValueError):
            safe_log_return(math.nan)
        with pytest.raises(ValueError):
            safe_log_return(math.inf)


# =============================================================================
# ТЕСТЫ: APR ↔ APY
# =============================================================================


class TestAprToApy:
    def test_default_frequency(self):
        assert COMPOUND_FREQUENCY_DAILY == 365
        assert COMPOUND_FREQUENCY_MONTHLY == 12

    def test_zero(self):
        assert apr_to_apy(0.0) == 0.0
        assert apy_to_apr(0.0) == 0.0

    def test_monthly(self):
        """12% APR помесячно: (1.01)^12 − 1"""
        assert apr_to_apy(0.12, 12) == pytest.approx(1.01**12 - 1, rel=1e-12)

    def test_annual_compounding_identity(self):
        assert apr_to_apy(0.05, 1) == pytest.approx(0.05, rel=1e-12)

    def test_daily_close_to_continuous(self):
        assert apr_to_apy(0.05) == pytest.approx(math.expm1(0.05), abs=1e-5)

    def test_apy_above_apr_for_positive_rates(self):
        for apr in (0.001, 0.05, 0.2, 1.0):
            assert apr_to_apy(apr) > apr

    def test_domain_violation(self):
        with pytest.raises(CompoundingDomainViolation):
            apr_to_apy(-12.0, 12)
        with pytest.raises(CompoundingDomainViolation):
            apr_to_apy(-400.0)
        with pytest.raises(CompoundingDomainViolation):
            apy_to_apr(-1.0)

    def test_invalid_frequency(self):
        with pytest.raises(ValueError):
            apr_to_apy(0.05, 0)
        with pytest.raises(ValueError):
            apr_to_apy(0.05, -12)
        with pytest.raises(ValueError):
            apr_to_apy(0.05, 12.0)
        with pytest.raises(ValueError):
            apy_to_apr(0.05, True)

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            apr_to_apy(math.nan)
        with pytest.raises(ValueError):
            apy_to_apr(math.inf)


class TestRoundTrip:
    @pytest.mark.parametrize("n", [12, 365])
    @pytest.mark.parametrize("apr", [0.0, 1e-6, 0.01, 0.05, 0.2, 1.0, -0.5])
    def test_apr_apy_apr(self, apr, n):
        assert apy_to_apr(apr_to_apy(apr, n), n) == pytest.approx(apr, abs=1e-9)

    @pytest.mark.parametrize("n", [12, 365])
    @pytest.mark.parametrize("apy", [0.0, 0.03, 0.1, 0.5])
    def test_apy_apr_apy(self, apy, n):
        assert apr_to_apy(apy_to_apr(apy, n), n) == pytest.approx(apy, abs=1e-9)


# =============================================================================
# ТЕСТЫ: Projected Earnings
# =============================================================================


class TestProjectedEarnings:
    def test_simple_interest(self):
        earnings = calculate_projected_earnings(1000.0, 0.0365, 100, compounding=False)
        assert earnings == pytest.approx(10.0)

    def test_compound_full_year_matches_apy(self):
        earnings = calculate_projected_earnings(1000.0, 0.05, 365)
        assert earnings == pytest.approx(1000.0 * apr_to_apy(0.05), rel=1e-12)

    def test_compound_above_simple(self):
        compound = calculate_projected_earnings(1000.0, 0.08, 200)
        simple = calculate_projected_earnings(1000.0, 0.08, 200, compounding=False)
        assert compound > simple

    def test_zero_days(self):
        assert calculate_projected_earnings(1000.0, 0.05, 0) == 0.0

    def test_zero_principal(self):
        assert calculate_projected_earnings(0.0, 0.05, 30) == 0.0

    def test_invalid_inputs(self):
        with pytest.raises(ValueError):
            calculate_projected_earnings(-1.0, 0.05, 30)
        with pytest.raises(ValueError):
            calculate_projected_earnings(1000.0, 0.05, -1)
        with pytest.raises(ValueError):
            calculate_projected_earnings(1000.0, math.nan, 30)
