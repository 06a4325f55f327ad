"""
Utilization — загрузка пула ликвидности

Формулы:
    U = total_borrowed / (total_cash_available + total_borrowed)
    total_supply = total_cash_available + total_borrowed

U = 0 при пустом пуле (cash = borrowed = 0), деления на ноль нет.

Входы принимаются как десятичные строки или числа в человеческих
единицах; конверсия выполняется один раз на входе (to_amount).
"""

import math
from typing import Final, NamedTuple

from src.core.domain.amounts import Amount, MalformedAmountError, to_amount
from src.core.math.numerical_safeguards import safe_ratio, validate_non_negative

# Доля лимита, выше которой пул считается «близким к лимиту»
NEAR_LIMIT_FRACTION: Final[float] = 0.9


class PoolLimitStatus(NamedTuple):
    """Использование deposit/borrow лимитов резерва (доли, 0 = лимита нет)."""

    supply_limit_usage: float
    borrow_limit_usage: float
    near_supply_limit: bool
    near_borrow_limit: bool


def calculate_utilization(total_borrowed: Amount, total_cash_available: Amount) -> float:
    """
    Utilization ratio пула.

    Args:
        total_borrowed: Сумма выданных займов
        total_cash_available: Свободная ликвидность

    Returns:
        U в [0, 1]; 0 ровно когда total_borrowed == 0

    Raises:
        MalformedAmountError: Непарсируемый, NaN/Inf или отрицательный вход

    Examples:
        >>> calculate_utilization("600", "2400")
        0.2
        >>> calculate_utilization(0, 0)
        0.0
    """
    borrowed = to_amount(total_borrowed, "total_borrowed")
    cash = to_amount(total_cash_available, "total_cash_available")

    return _utilization(borrowed, cash)


def calculate_total_supply(total_cash_available: Amount, total_borrowed: Amount) -> float:
    """
    Общий supply пула = свободная ликвидность + выданные займы.

    Raises:
        MalformedAmountError: Невалидный вход или сумма вне диапазона float
    """
    cash = to_amount(total_cash_available, "total_cash_available")
    borrowed = to_amount(total_borrowed, "total_borrowed")

    total_supply = cash + borrowed
    if math.isinf(total_supply):
        raise MalformedAmountError(
            f"total supply overflows float range: {total_cash_available!r} + {total_borrowed!r}"
        )
    return total_supply


def calculate_available_liquidity(total_cash_available: Amount) -> float:
    """Ликвидность, доступная для займов и вывода."""
    return to_amount(total_cash_available, "total_cash_available")


def check_pool_limits(
    total_cash_available: Amount,
    total_borrowed: Amount,
    deposit_limit: float,
    borrow_limit: float,
) -> PoolLimitStatus:
    """
    Насколько пул приблизился к deposit/borrow cap.

    Args:
        total_cash_available: Свободная ликвидность
        total_borrowed: Выданные займы
        deposit_limit: Лимит supply (0 = без лимита)
        borrow_limit: Лимит borrow (0 = без лимита)

    Returns:
        PoolLimitStatus; usage может превышать 1.0, если лимит снижен
        ниже текущего состояния пула
    """
    total_supply = calculate_total_supply(total_cash_available, total_borrowed)
    borrowed = to_amount(total_borrowed, "total_borrowed")
    deposit_limit = validate_non_negative(deposit_limit, "deposit_limit")
    borrow_limit = validate_non_negative(borrow_limit, "borrow_limit")

    supply_usage = safe_ratio(total_supply, deposit_limit, fallback=0.0)
    borrow_usage = safe_ratio(borrowed, borrow_limit, fallback=0.0)

    return PoolLimitStatus(
        supply_limit_usage=supply_usage,
        borrow_limit_usage=borrow_usage,
        near_supply_limit=supply_usage > NEAR_LIMIT_FRACTION,
        near_borrow_limit=borrow_usage > NEAR_LIMIT_FRACTION,
    )


def _utilization(borrowed: float, cash: float) -> float:
    # Входы уже проверены: конечные и неотрицательные
    if borrowed == 0.0:
        return 0.0
    total_supply = cash + borrowed
    if math.isinf(total_supply):
        # borrowed / (cash + borrowed) без переполнения знаменателя
        return 1.0 / (1.0 + cash / borrowed)
    return borrowed / total_supply
