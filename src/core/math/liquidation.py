"""
Liquidation — цена ликвидации, бонус ликвидатора, дистанция до ликвидации

ФОРМУЛЫ:
    В точке ликвидации: collateral_amount × price × threshold = borrow_amount
    liquidation_price   = borrow_amount / (collateral_amount × threshold)
    liquidation_bonus   = liquidated_amount × bonus_bips
    distance            = max(0, (current_price − liquidation_price) / current_price)

Нулевой залог: цена ликвидации не определена → None (не 0.0, который
неотличим от реальной нулевой цены).
"""

import math
from typing import Optional

from src.core.domain.units import (
    BPS_DENOMINATOR,
    BasisPoints,
    HundredthBasisPoints,
    apply_bps,
    bps_to_fraction,
    hundredth_bps_to_fraction,
    validate_bps,
    validate_hundredth_bps,
)
from src.core.math.numerical_safeguards import validate_non_negative, validate_positive


def calculate_liquidation_price(
    collateral_amount: float,
    borrow_amount: float,
    liquidation_threshold_bips: BasisPoints,
) -> Optional[float]:
    """
    Цена залогового актива, при которой позиция становится ликвидируемой.

    Args:
        collateral_amount: Количество залогового актива (в единицах актива)
        borrow_amount: Долг (в котируемой валюте)
        liquidation_threshold_bips: Liquidation threshold (bps)

    Returns:
        Цена ликвидации или None, если она не определена
        (нулевой залог или нулевой threshold)

    Examples:
        >>> calculate_liquidation_price(10.0, 7000.0, BasisPoints(8000))
        875.0
        >>> calculate_liquidation_price(0.0, 7000.0, BasisPoints(8000)) is None
        True
    """
    collateral_amount = validate_non_negative(collateral_amount, "collateral_amount")
    borrow_amount = validate_non_negative(borrow_amount, "borrow_amount")
    liquidation_threshold_bips = validate_bps(liquidation_threshold_bips, "liquidation_threshold_bips")

    if collateral_amount == 0.0 or liquidation_threshold_bips == 0:
        return None

    # borrow × 10_000 / (collateral × threshold_bps): точный результат для целых входов
    return borrow_amount * BPS_DENOMINATOR / (collateral_amount * liquidation_threshold_bips)


def calculate_liquidation_bonus(liquidated_amount: float, bonus_bips: BasisPoints) -> float:
    """
    Бонус ликвидатора (bps от ликвидируемой суммы).

    Examples:
        >>> calculate_liquidation_bonus(1000.0, BasisPoints(600))
        60.0
    """
    liquidated_amount = validate_non_negative(liquidated_amount, "liquidated_amount")
    bonus_bips = validate_bps(bonus_bips, "bonus_bips")

    return apply_bps(liquidated_amount, bonus_bips)


def calculate_distance_to_liquidation(
    current_price: float,
    liquidation_price: Optional[float],
) -> float:
    """
    Относительное падение цены до ликвидации (доля, 0.25 = 25%).

    Args:
        current_price: Текущая цена залогового актива
        liquidation_price: Результат calculate_liquidation_price

    Returns:
        math.inf если цена ликвидации не определена или равна нулю;
        0.0 если позиция уже ниже цены ликвидации
    """
    current_price = validate_positive(current_price, "current_price")

    if liquidation_price is None:
        return math.inf

    liquidation_price = validate_non_negative(liquidation_price, "liquidation_price")
    if liquidation_price == 0.0:
        return math.inf

    return max(0.0, (current_price - liquidation_price) / current_price)


def calculate_safety_buffer(
    loan_to_value_bips: BasisPoints,
    liquidation_threshold_bips: BasisPoints,
) -> float:
    """
    Запас между LTV и liquidation threshold (доля).

    Examples:
        >>> calculate_safety_buffer(BasisPoints(7000), BasisPoints(7500))
        0.05
    """
    loan_to_value_bips = validate_bps(loan_to_value_bips, "loan_to_value_bips")
    liquidation_threshold_bips = validate_bps(liquidation_threshold_bips, "liquidation_threshold_bips")

    return bps_to_fraction(BasisPoints(liquidation_threshold_bips - loan_to_value_bips))


def calculate_effective_liquidation_penalty(
    liquidation_bonus_bips: BasisPoints,
    liquidation_fee_hundredth_bips: HundredthBasisPoints,
) -> float:
    """
    Полная потеря заёмщика при ликвидации (доля): бонус ликвидатора
    плюс комиссия протокола. Шкалы разные: bps и hundredth-bps.
    """
    liquidation_bonus_bips = validate_bps(liquidation_bonus_bips, "liquidation_bonus_bips")
    liquidation_fee_hundredth_bips = validate_hundredth_bps(
        liquidation_fee_hundredth_bips, "liquidation_fee_hundredth_bips"
    )

    return bps_to_fraction(liquidation_bonus_bips) + hundredth_bps_to_fraction(
        liquidation_fee_hundredth_bips
    )
