"""
Portfolio — агрегированные риск-метрики по всем позициям пользователя

ФОРМУЛЫ:
    borrowing_power      = Σ(deposit.value × deposit.loan_to_value)
    liquidation_ltv      = weighted_collateral / total_collateral
    borrow_capacity      = max(0, borrowing_power − total_borrow)
    borrow_capacity_used = total_borrow / borrowing_power (0 без borrowing power)

Health factor считается по риск-скорректированному долгу
(value / borrow_factor), LTV и capacity — по номинальному.
"""

from typing import Iterable, NamedTuple

from src.core.domain.health_factor import HealthFactor, HealthFactorLevel
from src.core.domain.position import BorrowPosition, DepositPosition
from src.core.domain.thresholds import DEFAULT_THRESHOLDS, HealthFactorThresholds
from src.core.domain.units import apply_bps
from src.core.math.health import (
    calculate_adjusted_borrow_value,
    calculate_weighted_collateral,
    get_health_factor_level,
)
from src.core.math.numerical_safeguards import safe_ratio


class PortfolioRisk(NamedTuple):
    """Снимок риска портфеля: lending-позиции + их агрегаты (USD, доли)."""

    health_factor: HealthFactor
    level: HealthFactorLevel
    current_ltv: float
    liquidation_ltv: float
    borrowing_power: float
    borrow_capacity: float
    borrow_capacity_used: float
    total_collateral_value: float
    total_borrow_value: float
    weighted_collateral: float
    adjusted_borrow_value: float


def calculate_borrowing_power(deposits: Iterable[DepositPosition]) -> float:
    """
    Максимальный суммарный заём под залог: Σ(value × LTV).

    Examples:
        >>> calculate_borrowing_power([
        ...     DepositPosition(value=1000.0, loan_to_value=7000, liquidation_threshold=7500),
        ...     DepositPosition(value=500.0, loan_to_value=8000, liquidation_threshold=8500),
        ... ])
        1100.0
    """
    return sum((apply_bps(deposit.value, deposit.loan_to_value) for deposit in deposits), 0.0)


def calculate_portfolio_risk(
    deposits: Iterable[DepositPosition],
    borrows: Iterable[BorrowPosition],
    thresholds: HealthFactorThresholds = DEFAULT_THRESHOLDS,
) -> PortfolioRisk:
    """
    Полный набор риск-метрик портфеля.

    Args:
        deposits: Залоговые позиции (LTV + liquidation threshold)
        borrows: Позиции долга (borrow factor)
        thresholds: Границы уровней для классификации HF

    Returns:
        PortfolioRisk; пустой портфель — HF Unbounded, все доли 0

    Examples:
        >>> risk = calculate_portfolio_risk(
        ...     [DepositPosition(value=1000.0, loan_to_value=7000, liquidation_threshold=7500)],
        ...     [BorrowPosition(value=500.0)],
        ... )
        >>> risk.health_factor, risk.level
        (HealthFactor.finite(1.5), <HealthFactorLevel.SAFE: 'safe'>)
    """
    deposits = list(deposits)
    borrows = list(borrows)

    total_collateral_value = sum((deposit.value for deposit in deposits), 0.0)
    total_borrow_value = sum((borrow.value for borrow in borrows), 0.0)
    weighted_collateral = calculate_weighted_collateral(deposits)
    adjusted_borrow_value = calculate_adjusted_borrow_value(borrows)

    health_factor = HealthFactor.from_ratio(weighted_collateral, adjusted_borrow_value)
    borrowing_power = calculate_borrowing_power(deposits)

    return PortfolioRisk(
        health_factor=health_factor,
        level=get_health_factor_level(health_factor, thresholds),
        current_ltv=safe_ratio(total_borrow_value, total_collateral_value, fallback=0.0),
        liquidation_ltv=safe_ratio(weighted_collateral, total_collateral_value, fallback=0.0),
        borrowing_power=borrowing_power,
        borrow_capacity=max(0.0, borrowing_power - total_borrow_value),
        borrow_capacity_used=safe_ratio(total_borrow_value, borrowing_power, fallback=0.0),
        total_collateral_value=total_collateral_value,
        total_borrow_value=total_borrow_value,
        weighted_collateral=weighted_collateral,
        adjusted_borrow_value=adjusted_borrow_value,
    )
