"""
Interest Rates — Piecewise-Linear (Kinked) Interest Rate Model

ФОРМУЛЫ:
    U <= U_k:  borrow = min + (U / U_k) × (optimal − min)
    U >  U_k:  borrow = optimal + ((U − U_k) / (1 − U_k)) × (max − optimal)

    supply = borrow × U × (1 − reserve_ratio)

После kink наклон резко растёт: дорогой заём возвращает utilization
к целевому уровню.

Кривая вычисляется в пространстве bps (целые параметры конфигурации,
U × 10_000), в долю переводится только результат. Так ставка в точке
kink совпадает с optimal_borrow_rate бит-в-бит.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Непрерывность в U_k: обе ветви дают optimal_borrow_rate
2. Монотонность: borrow rate не убывает по U на [0, 1]
3. U_k == 0 → всегда ветка «после kink»; U_k == 1 → всегда «до kink»
"""

from typing import NamedTuple

from src.core.domain.amounts import Amount
from src.core.domain.reserve import InterestRateConfig
from src.core.domain.units import (
    BPS_DENOMINATOR,
    BasisPoints,
    apply_bps,
    fraction_to_bps,
    rate_bps_to_fraction,
    validate_bps,
)
from src.core.math.numerical_safeguards import (
    clamp,
    ensure_finite,
    validate_in_range,
    validate_non_negative,
)
from src.core.math.utilization import calculate_utilization

# =============================================================================
# ТИПЫ
# =============================================================================


class ReserveAPRs(NamedTuple):
    """Ставки резерва при текущей utilization (доли, 0.08 = 8%)."""

    supply_apr: float
    borrow_apr: float
    utilization: float


class RateCurvePoint(NamedTuple):
    """Точка кривой ставок для графика."""

    utilization: float
    borrow_apr: float
    supply_apr: float


# =============================================================================
# BORROW / SUPPLY APR
# =============================================================================


def calculate_borrow_apr(utilization: float, config: InterestRateConfig) -> float:
    """
    Borrow APR по kinked кривой.

    Args:
        utilization: Utilization ratio; значения вне [0, 1] (устаревшие
            данные) ограничиваются clamp
        config: Параметры кривой (bps)

    Returns:
        Borrow APR как доля (0.05 = 5%)

    Raises:
        ValueError: Если utilization NaN/Inf

    Examples:
        >>> cfg = InterestRateConfig(
        ...     min_borrow_rate=200, optimal_borrow_rate=800,
        ...     max_borrow_rate=3000, optimal_utilization=8000)
        >>> calculate_borrow_apr(0.8, cfg)
        0.08
        >>> calculate_borrow_apr(0.4, cfg)
        0.05
    """
    utilization = ensure_finite(utilization, "utilization")
    u_bps = fraction_to_bps(clamp(utilization, 0.0, 1.0))

    min_rate = config.min_borrow_rate
    optimal_rate = config.optimal_borrow_rate
    max_rate = config.max_borrow_rate
    kink = config.optimal_utilization

    # kink == 0: ветка «до kink» делила бы на ноль
    below_kink = kink > 0 and (u_bps <= kink or kink == BPS_DENOMINATOR)

    if below_kink:
        rate_bps = min_rate + (u_bps / kink) * (optimal_rate - min_rate)
    else:
        excess = (u_bps - kink) / (BPS_DENOMINATOR - kink)
        rate_bps = optimal_rate + excess * (max_rate - optimal_rate)

    return rate_bps_to_fraction(rate_bps)


def calculate_supply_apr(
    borrow_apr: float,
    utilization: float,
    reserve_ratio_bips: BasisPoints,
) -> float:
    """
    Supply APR: доля borrow-процентов, доходящая до депозиторов.

    supply = borrow × U × (1 − reserve_ratio)

    Args:
        borrow_apr: Текущий borrow APR (доля)
        utilization: Utilization ratio в [0, 1]
        reserve_ratio_bips: Доля протокола (bps), удерживаемая в резерв

    Returns:
        Supply APR как доля
    """
    borrow_apr = validate_non_negative(borrow_apr, "borrow_apr")
    utilization = validate_in_range(utilization, "utilization", 0.0, 1.0)
    reserve_ratio_bips = validate_bps(reserve_ratio_bips, "reserve_ratio_bips")

    depositor_share = BasisPoints(BPS_DENOMINATOR - reserve_ratio_bips)
    return apply_bps(borrow_apr * utilization, depositor_share)


def calculate_reserve_aprs(
    total_borrowed: Amount,
    total_cash_available: Amount,
    rate_config: InterestRateConfig,
    reserve_ratio_bips: BasisPoints,
) -> ReserveAPRs:
    """
    Единая точка входа: utilization → borrow APR → supply APR.

    Args:
        total_borrowed: Выданные займы (строка или число)
        total_cash_available: Свободная ликвидность (строка или число)
        rate_config: Параметры кривой
        reserve_ratio_bips: Reserve ratio (bps)

    Returns:
        ReserveAPRs(supply_apr, borrow_apr, utilization)
    """
    utilization = calculate_utilization(total_borrowed, total_cash_available)
    borrow_apr = calculate_borrow_apr(utilization, rate_config)
    supply_apr = calculate_supply_apr(borrow_apr, utilization, reserve_ratio_bips)

    return ReserveAPRs(
        supply_apr=supply_apr,
        borrow_apr=borrow_apr,
        utilization=utilization,
    )


# =============================================================================
# RATE CURVE
# =============================================================================


def generate_rate_curve(
    config: InterestRateConfig,
    reserve_ratio_bips: BasisPoints,
    points: int = 20,
) -> list[RateCurvePoint]:
    """
    Равномерная выборка кривой ставок на U ∈ [0, 1].

    Args:
        config: Параметры кривой
        reserve_ratio_bips: Reserve ratio (bps)
        points: Количество интервалов (результат содержит points + 1 точку)

    Returns:
        Список RateCurvePoint от U=0 до U=1
    """
    if isinstance(points, bool) or not isinstance(points, int) or points <= 0:
        raise ValueError(f"points must be a positive integer, got {points!r}")

    curve = []
    for i in range(points + 1):
        utilization = i / points
        borrow_apr = calculate_borrow_apr(utilization, config)
        supply_apr = calculate_supply_apr(borrow_apr, utilization, reserve_ratio_bips)
        curve.append(
            RateCurvePoint(
                utilization=utilization,
                borrow_apr=borrow_apr,
                supply_apr=supply_apr,
            )
        )

    return curve
