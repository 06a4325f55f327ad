"""
Fees — комиссии резерва и blended APR портфеля

ЕДИНИЦЫ КОМИССИЙ:
    Комиссии borrow / withdraw / flash loan заданы в hundredth basis points
    (1/1_000_000), а не в bps (1/10_000):

        fee = amount × fee_hundredth_bips / 1_000_000

    calculate_borrow_fee(1000, 10) == 0.01 (а не 1.0, как при чтении в bps).

NET APR:
    net = (supplied × supply_apr − borrowed × borrow_apr) / (supplied + borrowed)
    net = 0 при supplied == borrowed == 0

Все ставки — доли (0.05 = 5%).
"""

from typing import Iterable

from src.core.domain.position import RatePosition
from src.core.domain.units import (
    HundredthBasisPoints,
    apply_hundredth_bps,
    validate_hundredth_bps,
)
from src.core.math.numerical_safeguards import (
    ensure_finite,
    safe_ratio,
    validate_non_negative,
)

# =============================================================================
# КОМИССИИ (HUNDREDTH BPS)
# =============================================================================


def _apply_fee(amount: float, fee_hundredth_bips: HundredthBasisPoints, name: str) -> float:
    amount = validate_non_negative(amount, "amount")
    fee_hundredth_bips = validate_hundredth_bps(fee_hundredth_bips, name)
    return apply_hundredth_bps(amount, fee_hundredth_bips)


def calculate_borrow_fee(amount: float, fee_hundredth_bips: HundredthBasisPoints) -> float:
    """
    Комиссия за заём.

    Args:
        amount: Сумма займа
        fee_hundredth_bips: Комиссия в hundredth bps (1/1_000_000)

    Returns:
        Комиссия в единицах amount

    Examples:
        >>> calculate_borrow_fee(1000.0, HundredthBasisPoints(10))
        0.01
    """
    return _apply_fee(amount, fee_hundredth_bips, "borrow_fee_hundredth_bips")


def calculate_withdraw_fee(amount: float, fee_hundredth_bips: HundredthBasisPoints) -> float:
    """Комиссия за вывод (hundredth bps)."""
    return _apply_fee(amount, fee_hundredth_bips, "withdraw_fee_hundredth_bips")


def calculate_flash_loan_fee(amount: float, fee_hundredth_bips: HundredthBasisPoints) -> float:
    """Комиссия за flash loan (hundredth bps)."""
    return _apply_fee(amount, fee_hundredth_bips, "flash_loan_fee_hundredth_bips")


def calculate_total_borrow_cost(
    borrow_apr: float,
    borrow_fee: float,
    flash_loan_fee: float = 0.0,
) -> float:
    """
    Полная стоимость займа как доля: APR плюс разовые комиссии.

    Комиссии передаются уже как доли (hundredth_bps_to_fraction).
    """
    borrow_apr = ensure_finite(borrow_apr, "borrow_apr")
    borrow_fee = validate_non_negative(borrow_fee, "borrow_fee")
    flash_loan_fee = validate_non_negative(flash_loan_fee, "flash_loan_fee")

    return borrow_apr + borrow_fee + flash_loan_fee


# =============================================================================
# NET / WEIGHTED APR
# =============================================================================


def calculate_net_apr(
    supplied_amount: float,
    supply_apr: float,
    borrowed_amount: float,
    borrow_apr: float,
) -> float:
    """
    Blended APR по одновременным supply и borrow позициям.

    Args:
        supplied_amount: Сумма supply (USD)
        supply_apr: Supply APR (доля)
        borrowed_amount: Сумма borrow (USD)
        borrow_apr: Borrow APR (доля)

    Returns:
        (supply_earnings − borrow_costs) / (supplied + borrowed);
        0.0 если обе суммы нулевые

    Examples:
        >>> calculate_net_apr(1000.0, 0.05, 0.0, 0.08)
        0.05
        >>> calculate_net_apr(0.0, 0.05, 0.0, 0.08)
        0.0
    """
    supplied_amount = validate_non_negative(supplied_amount, "supplied_amount")
    supply_apr = ensure_finite(supply_apr, "supply_apr")
    borrowed_amount = validate_non_negative(borrowed_amount, "borrowed_amount")
    borrow_apr = ensure_finite(borrow_apr, "borrow_apr")

    supply_earnings = supplied_amount * supply_apr
    borrow_costs = borrowed_amount * borrow_apr

    return safe_ratio(
        supply_earnings - borrow_costs,
        supplied_amount + borrowed_amount,
        fallback=0.0,
    )


def calculate_weighted_apr(positions: Iterable[RatePosition]) -> float:
    """
    Средневзвешенный APR: Σ(amount × apr) / Σ(amount).

    Пустой список или нулевые суммы → 0.0.
    """
    total_value = 0.0
    weighted_sum = 0.0
    for position in positions:
        total_value += position.amount_usd
        weighted_sum += position.amount_usd * position.apr

    return safe_ratio(weighted_sum, total_value, fallback=0.0)


def calculate_break_even_borrow_apr(
    supply_positions: Iterable[RatePosition],
    total_borrow_value: float,
) -> float:
    """
    Borrow APR, при котором стоимость займа равна доходу от supply.

    Args:
        supply_positions: Supply позиции со ставками
        total_borrow_value: Общий долг (USD)

    Returns:
        Σ(supply_amount × supply_apr) / total_borrow; 0.0 без долга
    """
    total_borrow_value = validate_non_negative(total_borrow_value, "total_borrow_value")
    supply_earnings = sum(
        (position.amount_usd * position.apr for position in supply_positions),
        0.0,
    )

    return safe_ratio(supply_earnings, total_borrow_value, fallback=0.0)
