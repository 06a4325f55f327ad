"""
Units — Централизованный модуль конверсии единиц протокола

Две шкалы сосуществуют в конфигурации резервов:
- BasisPoints (bps): 1/10_000 — ставки, LTV, liquidation threshold,
  reserve ratio, liquidation bonus
- HundredthBasisPoints: 1/1_000_000 — комиссии borrow/withdraw/flash loan
  и liquidation fee

ЗАПРЕЩЕНО делить на 10_000 или 1_000_000 вне этого модуля.
Каждая шкала имеет собственный тип и собственный конвертер.
"""

from typing import Final, NewType

# =============================================================================
# ТИПЫ ЕДИНИЦ
# =============================================================================

BasisPoints = NewType("BasisPoints", int)

HundredthBasisPoints = NewType("HundredthBasisPoints", int)


# =============================================================================
# ЗНАМЕНАТЕЛИ ШКАЛ
# =============================================================================

# 10_000 bps = 100%
BPS_DENOMINATOR: Final[int] = 10_000

# 1_000_000 hundredth-bps = 100%
HUNDREDTH_BPS_DENOMINATOR: Final[int] = 1_000_000


# =============================================================================
# BASIS POINTS
# =============================================================================


def bps_to_fraction(bps: BasisPoints) -> float:
    """
    Конверсия basis points в долю.

    Args:
        bps: Basis points (например, 7500 = 75%)

    Returns:
        Доля (например, 7500 → 0.75)
    """
    return bps / BPS_DENOMINATOR


def rate_bps_to_fraction(rate_bps: float) -> float:
    """
    Конверсия дробного значения в bps (результат интерполяции кривой) в долю.

    Examples:
        >>> rate_bps_to_fraction(500.0)
        0.05
    """
    return rate_bps / BPS_DENOMINATOR


def fraction_to_bps(fraction: float) -> float:
    """
    Обратная конверсия: доля → basis points (без округления).

    Examples:
        >>> fraction_to_bps(0.8)
        8000.0
    """
    return fraction * BPS_DENOMINATOR


def apply_bps(amount: float, bps: BasisPoints) -> float:
    """
    amount × bps / 10_000.

    Умножение выполняется до деления: для целых входов результат
    точен (1000 × 7500 / 10_000 == 750.0).
    """
    return amount * bps / BPS_DENOMINATOR


# =============================================================================
# HUNDREDTH BASIS POINTS
# =============================================================================


def hundredth_bps_to_fraction(hundredth_bps: HundredthBasisPoints) -> float:
    """
    Конверсия hundredth basis points в долю.

    Args:
        hundredth_bps: Сотые доли bps (например, 10 = 0.001%)

    Returns:
        Доля (например, 10 → 0.00001)
    """
    return hundredth_bps / HUNDREDTH_BPS_DENOMINATOR


def apply_hundredth_bps(amount: float, hundredth_bps: HundredthBasisPoints) -> float:
    """
    amount × hundredth_bps / 1_000_000.

    Examples:
        >>> apply_hundredth_bps(1000.0, HundredthBasisPoints(10))
        0.01
    """
    return amount * hundredth_bps / HUNDREDTH_BPS_DENOMINATOR


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_bps(value: int, name: str, max_value: int = BPS_DENOMINATOR) -> BasisPoints:
    """
    Проверка, что значение — целые bps в [0, max_value].

    Raises:
        ValueError: Если значение не int, отрицательное или больше max_value
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer number of basis points, got {value!r}")

    if value < 0 or value > max_value:
        raise ValueError(f"{name} must be in [0, {max_value}] bps, got {value}")

    return BasisPoints(value)


def validate_hundredth_bps(value: int, name: str) -> HundredthBasisPoints:
    """
    Проверка, что значение — целые hundredth-bps в [0, 1_000_000].

    Raises:
        ValueError: Если значение не int или вне диапазона
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(
            f"{name} must be an integer number of hundredth basis points, got {value!r}"
        )

    if value < 0 or value > HUNDREDTH_BPS_DENOMINATOR:
        raise ValueError(
            f"{name} must be in [0, {HUNDREDTH_BPS_DENOMINATOR}] hundredth bps, got {value}"
        )

    return HundredthBasisPoints(value)
