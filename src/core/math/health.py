"""
Health — Health Factor, уровни риска и лимиты borrow/withdraw

ФОРМУЛЫ:
    HF = Σ(collateral_i.value × collateral_i.liquidation_threshold) / adjusted_borrow
    adjusted_borrow = Σ(borrow_j.value / borrow_j.borrow_factor)
    HF = Unbounded при adjusted_borrow == 0 (нет долга → ликвидация невозможна)

    max_borrow          = collateral × LTV
    required_collateral = total_borrow × min_hf / liquidation_threshold
    max_withdraw        = max(0, total_collateral − required_collateral)

HF < 1.0 означает, что позиция доступна для ликвидации.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Unbounded сохраняется как отдельный вариант HealthFactor на всех путях
2. max_withdraw и available_to_borrow никогда не отрицательны
3. Для «круглых» входов HF вычисляется точно (взвешивание: умножение до деления)
4. Переполнение отношения насыщается до MAX_FINITE_HEALTH_FACTOR, а не ошибка
"""

from typing import Final, Iterable, NamedTuple, Union

from src.core.domain.health_factor import (
    HealthFactor,
    HealthFactorLevel,
    HealthFactorLike,
    as_health_factor,
)
from src.core.domain.position import BorrowPosition, CollateralPosition
from src.core.domain.thresholds import (
    DEFAULT_THRESHOLDS,
    LIQUIDATION_HEALTH_FACTOR,
    SAFE_HEALTH_FACTOR,
    WARNING_HEALTH_FACTOR,
    HealthFactorThresholds,
)
from src.core.domain.units import (
    BPS_DENOMINATOR,
    BasisPoints,
    apply_bps,
    bps_to_fraction,
    validate_bps,
)
from src.core.math.numerical_safeguards import (
    ensure_finite,
    safe_ratio,
    validate_non_negative,
    validate_positive,
)

# Целевой health factor по умолчанию для расчёта безопасного займа
BORROW_TARGET_HEALTH_FACTOR: Final[float] = 1.3

# Долг: сумма в USD либо позиции, риск-корректируемые borrow factor
BorrowSide = Union[float, Iterable[BorrowPosition]]


class HealthFactorSimulation(NamedTuple):
    """
    Результат симуляции действия над позицией.

    safety_delta = projected − current: 0.0 если оба Unbounded,
    +inf / -inf если Unbounded ровно один из них.
    """

    current_hf: HealthFactor
    projected_hf: HealthFactor
    safety_delta: float


# =============================================================================
# HEALTH FACTOR
# =============================================================================


def calculate_weighted_collateral(collateral_positions: Iterable[CollateralPosition]) -> float:
    """
    Σ(value × liquidation_threshold) по всем залоговым позициям (USD).
    """
    return sum(
        (apply_bps(position.value, position.liquidation_threshold) for position in collateral_positions),
        0.0,
    )


def calculate_adjusted_borrow_value(borrow_positions: Iterable[BorrowPosition]) -> float:
    """
    Σ(value / borrow_factor) по всем позициям долга (USD).

    Examples:
        >>> calculate_adjusted_borrow_value([BorrowPosition(value=500.0, borrow_factor=8000)])
        625.0
    """
    return sum(
        (position.value / bps_to_fraction(position.borrow_factor) for position in borrow_positions),
        0.0,
    )


def calculate_health_factor(
    collateral_positions: Iterable[CollateralPosition],
    total_borrow_value: BorrowSide,
) -> HealthFactor:
    """
    Health factor позиции пользователя.

    Args:
        collateral_positions: Залоговые позиции (USD + liquidation threshold в bps)
        total_borrow_value: Общий долг (USD) либо позиции долга; позиции
            риск-корректируются borrow factor (value / borrow_factor)

    Returns:
        HealthFactor.unbounded() при нулевом долге, иначе конечный HF

    Raises:
        ValueError: Если total_borrow_value отрицательный или NaN/Inf

    Examples:
        >>> positions = [CollateralPosition(value=1000.0, liquidation_threshold=7500)]
        >>> calculate_health_factor(positions, 600.0)
        HealthFactor.finite(1.25)
        >>> calculate_health_factor(positions, [BorrowPosition(value=500.0)])
        HealthFactor.finite(1.5)
    """
    if isinstance(total_borrow_value, (int, float)):
        borrow_value = validate_non_negative(total_borrow_value, "total_borrow_value")
    else:
        borrow_value = calculate_adjusted_borrow_value(total_borrow_value)

    return HealthFactor.from_ratio(calculate_weighted_collateral(collateral_positions), borrow_value)


def get_health_factor_level(
    health_factor: HealthFactorLike,
    thresholds: HealthFactorThresholds = DEFAULT_THRESHOLDS,
) -> HealthFactorLevel:
    """
    Классификация health factor по сконфигурированным границам.

    Наивысший уровень, нижнюю границу которого HF достигает;
    ниже danger — LIQUIDATION. Unbounded всегда SAFE.
    """
    hf = as_health_factor(health_factor)

    if hf >= thresholds.safe:
        return HealthFactorLevel.SAFE
    if hf >= thresholds.warning:
        return HealthFactorLevel.WARNING
    if hf >= thresholds.danger:
        return HealthFactorLevel.DANGER
    return HealthFactorLevel.LIQUIDATION


def is_liquidatable(health_factor: HealthFactorLike) -> bool:
    """HF < 1.0 — позиция доступна для ликвидации."""
    return as_health_factor(health_factor) < LIQUIDATION_HEALTH_FACTOR


def is_safe_health_factor(health_factor: HealthFactorLike) -> bool:
    return as_health_factor(health_factor) >= SAFE_HEALTH_FACTOR


# =============================================================================
# ЛИМИТЫ BORROW / WITHDRAW
# =============================================================================


def calculate_max_borrow(collateral_value: float, loan_to_value_bips: BasisPoints) -> float:
    """
    Максимальный заём под залог: collateral × LTV.

    Examples:
        >>> calculate_max_borrow(1000.0, BasisPoints(7000))
        700.0
    """
    collateral_value = validate_non_negative(collateral_value, "collateral_value")
    loan_to_value_bips = validate_bps(loan_to_value_bips, "loan_to_value_bips")

    return apply_bps(collateral_value, loan_to_value_bips)


def calculate_available_to_borrow(
    total_collateral_value: float,
    total_borrow_value: float,
    loan_to_value_bips: BasisPoints,
) -> float:
    """
    Оставшаяся borrowing power: max(0, collateral × LTV − borrowed).
    """
    total_borrow_value = validate_non_negative(total_borrow_value, "total_borrow_value")
    max_borrow = calculate_max_borrow(total_collateral_value, loan_to_value_bips)

    return max(0.0, max_borrow - total_borrow_value)


def calculate_current_ltv(total_collateral_value: float, total_borrow_value: float) -> float:
    """
    Текущий LTV = borrowed / collateral (0 при отсутствии залога).
    """
    total_collateral_value = validate_non_negative(total_collateral_value, "total_collateral_value")
    total_borrow_value = validate_non_negative(total_borrow_value, "total_borrow_value")

    return safe_ratio(total_borrow_value, total_collateral_value, fallback=0.0)


def calculate_max_withdraw(
    total_collateral_value: float,
    total_borrow_value: float,
    liquidation_threshold_bips: BasisPoints,
    min_health_factor: float = WARNING_HEALTH_FACTOR,
) -> float:
    """
    Максимальный вывод залога, сохраняющий HF >= min_health_factor.

    Args:
        total_collateral_value: Текущий залог (USD)
        total_borrow_value: Текущий долг (USD)
        liquidation_threshold_bips: Liquidation threshold (bps)
        min_health_factor: Минимально допустимый HF после вывода

    Returns:
        Сумма в USD, никогда не отрицательная. Без долга — весь залог.

    Examples:
        >>> calculate_max_withdraw(2000.0, 600.0, BasisPoints(7500), 1.2)
        1040.0
    """
    total_collateral_value = validate_non_negative(total_collateral_value, "total_collateral_value")
    total_borrow_value = validate_non_negative(total_borrow_value, "total_borrow_value")
    liquidation_threshold_bips = validate_bps(liquidation_threshold_bips, "liquidation_threshold_bips")
    min_health_factor = validate_positive(min_health_factor, "min_health_factor")

    if total_borrow_value == 0.0:
        return total_collateral_value

    # Нулевой threshold: залог не покрывает долг ни в каком объёме
    if liquidation_threshold_bips == 0:
        return 0.0

    required_collateral = (
        total_borrow_value * min_health_factor / bps_to_fraction(liquidation_threshold_bips)
    )

    return max(0.0, total_collateral_value - required_collateral)


def calculate_max_safe_borrow(
    collateral_positions: Iterable[CollateralPosition],
    total_borrow_value: float,
    target_health_factor: float = BORROW_TARGET_HEALTH_FACTOR,
    borrow_factor_bips: BasisPoints = BasisPoints(BPS_DENOMINATOR),
) -> float:
    """
    Дополнительный заём (USD), после которого HF остаётся >= target.

    max_adjusted_borrow = weighted_collateral / target_hf
    available           = max(0, max_adjusted_borrow − current_borrow) × borrow_factor

    Args:
        collateral_positions: Залоговые позиции
        total_borrow_value: Текущий долг (USD)
        target_health_factor: Целевой HF после займа
        borrow_factor_bips: Borrow factor занимаемого актива (bps, 10_000 = 100%)
    """
    total_borrow_value = validate_non_negative(total_borrow_value, "total_borrow_value")
    target_health_factor = validate_positive(target_health_factor, "target_health_factor")
    borrow_factor_bips = validate_bps(borrow_factor_bips, "borrow_factor_bips")

    max_adjusted_borrow = calculate_weighted_collateral(collateral_positions) / target_health_factor
    available_adjusted = max(0.0, max_adjusted_borrow - total_borrow_value)

    return apply_bps(available_adjusted, borrow_factor_bips)


# =============================================================================
# СИМУЛЯЦИЯ
# =============================================================================


def simulate_health_factor_change(
    current_collateral: float,
    current_borrow: float,
    collateral_change: float,
    borrow_change: float,
    liquidation_threshold_bips: BasisPoints,
) -> HealthFactorSimulation:
    """
    Health factor до и после гипотетического действия.

    Знаки дельт:
        collateral_change > 0 — deposit, < 0 — withdraw
        borrow_change > 0 — borrow, < 0 — repay

    Repay больше текущего долга обнуляет долг (projected Unbounded).

    Args:
        current_collateral: Текущий залог (USD)
        current_borrow: Текущий долг (USD)
        collateral_change: Изменение залога (USD, со знаком)
        borrow_change: Изменение долга (USD, со знаком)
        liquidation_threshold_bips: Liquidation threshold (bps)

    Returns:
        HealthFactorSimulation(current_hf, projected_hf, safety_delta)

    Raises:
        ValueError: NaN/Inf входы или withdraw больше текущего залога
    """
    current_collateral = validate_non_negative(current_collateral, "current_collateral")
    current_borrow = validate_non_negative(current_borrow, "current_borrow")
    collateral_change = ensure_finite(collateral_change, "collateral_change")
    borrow_change = ensure_finite(borrow_change, "borrow_change")
    liquidation_threshold_bips = validate_bps(liquidation_threshold_bips, "liquidation_threshold_bips")

    projected_collateral = current_collateral + collateral_change
    if projected_collateral < 0:
        raise ValueError(
            f"collateral_change {collateral_change} exceeds current collateral {current_collateral}"
        )
    projected_borrow = max(0.0, current_borrow + borrow_change)

    current_hf = _single_reserve_health_factor(
        current_collateral, current_borrow, liquidation_threshold_bips
    )
    projected_hf = _single_reserve_health_factor(
        projected_collateral, projected_borrow, liquidation_threshold_bips
    )

    return HealthFactorSimulation(
        current_hf=current_hf,
        projected_hf=projected_hf,
        safety_delta=projected_hf - current_hf,
    )


def _single_reserve_health_factor(
    collateral: float,
    borrow: float,
    liquidation_threshold_bips: BasisPoints,
) -> HealthFactor:
    return HealthFactor.from_ratio(apply_bps(collateral, liquidation_threshold_bips), borrow)
