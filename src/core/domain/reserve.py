"""
Reserve — Модели конфигурации резерва

Immutable Pydantic модели статических параметров резерва:
- InterestRateConfig: параметры kinked interest-rate кривой (bps)
- ReserveConfig: риск-параметры и комиссии резерва

Все поля в целых единицах шкалы (BasisPoints / HundredthBasisPoints),
конверсия в доли — только через src.core.domain.units.
"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .position import BorrowPosition, DepositPosition
from .units import (
    BPS_DENOMINATOR,
    HUNDREDTH_BPS_DENOMINATOR,
    BasisPoints,
    HundredthBasisPoints,
)


# =============================================================================
# INTEREST RATE CONFIG
# =============================================================================


class InterestRateConfig(BaseModel):
    """
    Параметры piecewise-linear кривой borrow rate.

    Инварианты:
    - 0 <= min_borrow_rate <= optimal_borrow_rate <= max_borrow_rate
    - optimal_utilization в [0, 10_000]

    Рабочая конфигурация имеет 0 < optimal_utilization < 10_000.
    Граничные значения 0 и 10_000 принимаются (устаревшие on-chain данные),
    calculate_borrow_apr обрабатывает их явно без деления на ноль.
    """

    min_borrow_rate: BasisPoints = Field(..., ge=0, description="Ставка при U=0 (bps)")
    optimal_borrow_rate: BasisPoints = Field(..., ge=0, description="Ставка в точке kink (bps)")
    max_borrow_rate: BasisPoints = Field(..., ge=0, description="Ставка при U=1 (bps)")
    optimal_utilization: BasisPoints = Field(
        ..., ge=0, le=BPS_DENOMINATOR, description="Точка kink (bps)"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_rate_ordering(self) -> "InterestRateConfig":
        if not (self.min_borrow_rate <= self.optimal_borrow_rate <= self.max_borrow_rate):
            raise ValueError(
                "interest rate config must satisfy "
                "min_borrow_rate <= optimal_borrow_rate <= max_borrow_rate, got "
                f"{self.min_borrow_rate}/{self.optimal_borrow_rate}/{self.max_borrow_rate}"
            )
        return self


# =============================================================================
# RESERVE CONFIG
# =============================================================================


class ReserveConfig(BaseModel):
    """
    Статические риск-параметры одного резерва.

    Инвариант: liquidation_threshold >= loan_to_value — резерв не может
    разрешать заём за пределом собственной точки ликвидации.
    """

    # Риск-параметры (bps)
    loan_to_value: BasisPoints = Field(..., ge=0, le=BPS_DENOMINATOR)
    liquidation_threshold: BasisPoints = Field(..., ge=0, le=BPS_DENOMINATOR)
    liquidation_bonus_bips: BasisPoints = Field(..., ge=0, le=BPS_DENOMINATOR)
    reserve_ratio: BasisPoints = Field(..., ge=0, le=BPS_DENOMINATOR)
    borrow_factor: BasisPoints = Field(BPS_DENOMINATOR, ge=0, le=BPS_DENOMINATOR)

    # Комиссии (hundredth bps)
    liquidation_fee_hundredth_bips: HundredthBasisPoints = Field(
        0, ge=0, le=HUNDREDTH_BPS_DENOMINATOR
    )
    borrow_fee_hundredth_bips: HundredthBasisPoints = Field(
        0, ge=0, le=HUNDREDTH_BPS_DENOMINATOR
    )
    withdraw_fee_hundredth_bips: HundredthBasisPoints = Field(
        0, ge=0, le=HUNDREDTH_BPS_DENOMINATOR
    )
    flash_loan_fee_hundredth_bips: HundredthBasisPoints = Field(
        0, ge=0, le=HUNDREDTH_BPS_DENOMINATOR
    )

    # Лимиты (человеческие единицы, 0 = без лимита)
    deposit_limit: float = Field(0.0, ge=0, allow_inf_nan=False)
    borrow_limit: float = Field(0.0, ge=0, allow_inf_nan=False)

    allow_collateral: bool = True
    allow_redeem: bool = True

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_threshold_above_ltv(self) -> "ReserveConfig":
        if self.liquidation_threshold < self.loan_to_value:
            raise ValueError(
                f"liquidation_threshold ({self.liquidation_threshold}) must be >= "
                f"loan_to_value ({self.loan_to_value})"
            )
        return self

    # =========================================================================
    # POSITIONS
    # =========================================================================

    def deposit_position(self, value: float, asset: Optional[str] = None) -> DepositPosition:
        """Залог в этом резерве с его LTV и liquidation threshold."""
        return DepositPosition(
            value=value,
            loan_to_value=self.loan_to_value,
            liquidation_threshold=self.liquidation_threshold,
            asset=asset,
        )

    def borrow_position(self, value: float, asset: Optional[str] = None) -> BorrowPosition:
        """
        Долг в этом резерве, риск-скорректированный borrow_factor резерва.

        Raises:
            pydantic.ValidationError: borrow_factor резерва равен 0 (заём запрещён)
        """
        return BorrowPosition(value=value, borrow_factor=self.borrow_factor, asset=asset)
