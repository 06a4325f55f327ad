"""
Compounding — APR ↔ APY и начисление процентов

Модуль обеспечивает численно стабильную конверсию простой годовой
ставки (APR) в сложную (APY) и обратно при дискретном начислении:
- Domain restriction для log(1+r): периодическая ставка r > -1
- Расчёт через log1p/expm1 — без потери точности на малых ставках
- Обработка выхода из domain через exception

ФОРМУЛЫ:
    APY = (1 + APR/n)^n − 1       = expm1(n × log1p(APR/n))
    APR = ((1 + APY)^(1/n) − 1)×n = n × expm1(log1p(APY) / n)

    earnings_compound = principal × ((1 + APR/365)^days − 1)
    earnings_simple   = principal × APR × days / 365

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Domain violation (периодическая ставка ≤ -1) → CompoundingDomainViolation
2. apy_to_apr(apr_to_apy(apr, n), n) восстанавливает apr (толерантность 1e-9)
3. NaN/Inf не распространяются: невалидный вход → ValueError
"""

import math
from typing import Final

from src.core.math.numerical_safeguards import ensure_finite, validate_non_negative

# =============================================================================
# ПАРАМЕТРЫ НАЧИСЛЕНИЯ
# =============================================================================

# Ежедневное начисление по умолчанию
COMPOUND_FREQUENCY_DAILY: Final[int] = 365

# Ежемесячное начисление
COMPOUND_FREQUENCY_MONTHLY: Final[int] = 12

DAYS_PER_YEAR: Final[int] = 365


# =============================================================================
# EXCEPTIONS
# =============================================================================


class CompoundingDomainViolation(Exception):
    """
    Нарушение domain для log(1+r): периодическая ставка r ≤ -1.

    Ставка −100% за период и ниже обнуляет капитал; сложный процент
    для неё не определён.
    """
    pass


# =============================================================================
# SAFE LOG RETURN
# =============================================================================


def safe_log_return(r: float) -> float:
    """
    Численно стабильное вычисление log(1 + r).

    Args:
        r: Ставка за период (безразмерная, 0.0002 для ~7.3% APR / 365)

    Returns:
        log1p(r)

    Raises:
        CompoundingDomainViolation: если r ≤ -1
        ValueError: если r содержит NaN/Inf
    """
    r = ensure_finite(r, "rate")

    if r <= -1.0:
        raise CompoundingDomainViolation(
            f"Compounding domain violation: periodic rate r={r:.12f} <= -1"
        )

    return math.log1p(r)


def _validate_frequency(compound_frequency: int) -> int:
    if isinstance(compound_frequency, bool) or not isinstance(compound_frequency, int):
        raise ValueError(f"compound_frequency must be an integer, got {compound_frequency!r}")
    if compound_frequency <= 0:
        raise ValueError(f"compound_frequency must be positive, got {compound_frequency}")
    return compound_frequency


# =============================================================================
# APR ↔ APY
# =============================================================================


def apr_to_apy(apr: float, compound_frequency: int = COMPOUND_FREQUENCY_DAILY) -> float:
    """
    Конверсия APR в APY при дискретном начислении n раз в год.

    Args:
        apr: Простая годовая ставка (доля, 0.05 = 5%)
        compound_frequency: Количество начислений в год (365 — ежедневно)

    Returns:
        APY (доля)

    Raises:
        CompoundingDomainViolation: если apr/n ≤ -1
        ValueError: если apr NaN/Inf или compound_frequency не положительное целое

    Examples:
        >>> apr_to_apy(0.0)
        0.0
        >>> abs(apr_to_apy(0.12, 12) - 0.12682503013196977) < 1e-12
        True
    """
    n = _validate_frequency(compound_frequency)
    apr = ensure_finite(apr, "apr")

    log_growth = n * safe_log_return(apr / n)
    return math.expm1(log_growth)


def apy_to_apr(apy: float, compound_frequency: int = COMPOUND_FREQUENCY_DAILY) -> float:
    """
    Обратная конверсия APY → APR.

    Args:
        apy: Сложная годовая доходность (доля)
        compound_frequency: Количество начислений в год

    Returns:
        APR (доля)

    Raises:
        CompoundingDomainViolation: если apy ≤ -1
        ValueError: если apy NaN/Inf или compound_frequency невалидный
    """
    n = _validate_frequency(compound_frequency)
    apy = ensure_finite(apy, "apy")

    return n * math.expm1(safe_log_return(apy) / n)


# =============================================================================
# PROJECTED EARNINGS
# =============================================================================


def calculate_projected_earnings(
    principal: float,
    apr: float,
    days_held: float,
    compounding: bool = True,
) -> float:
    """
    Ожидаемый доход (или стоимость займа) за период удержания.

    Args:
        principal: Сумма (USD)
        apr: Годовая ставка (доля)
        days_held: Срок в днях
        compounding: True — ежедневное начисление, False — простой процент

    Returns:
        Доход за период (USD), без principal
    """
    principal = validate_non_negative(principal, "principal")
    apr = ensure_finite(apr, "apr")
    days_held = validate_non_negative(days_held, "days_held")

    if not compounding:
        return principal * apr * days_held / DAYS_PER_YEAR

    log_growth = days_held * safe_log_return(apr / DAYS_PER_YEAR)
    return principal * math.expm1(log_growth)
