"""
Position — Входные позиции для риск-расчётов

Immutable Pydantic модели (frozen=True). Это не хранимые сущности:
они живут один вызов и собираются вызывающим кодом из on-chain данных.

Стороны позиции:
- CollateralPosition / DepositPosition — залог (взвешивается liquidation threshold)
- BorrowPosition — долг (риск-корректируется borrow factor: value / borrow_factor)
"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .units import BPS_DENOMINATOR, BasisPoints


class CollateralPosition(BaseModel):
    """
    Один актив, внесённый пользователем в качестве залога.

    value уже в USD; liquidation_threshold в bps (7500 = 75%).
    """

    value: float = Field(..., ge=0, allow_inf_nan=False, description="Стоимость залога (USD)")
    liquidation_threshold: BasisPoints = Field(
        ..., ge=0, le=BPS_DENOMINATOR, description="Liquidation threshold (bps)"
    )

    model_config = {"frozen": True}


class DepositPosition(CollateralPosition):
    """
    Залог с полным набором риск-параметров резерва.

    Добавляет LTV (borrowing power) и идентификатор актива
    (coin type / symbol), по которому определяется E-Mode категория.
    """

    loan_to_value: BasisPoints = Field(..., ge=0, le=BPS_DENOMINATOR, description="LTV (bps)")
    asset: Optional[str] = Field(None, min_length=1, description="Идентификатор актива")

    @model_validator(mode="after")
    def validate_threshold_above_ltv(self) -> "DepositPosition":
        if self.liquidation_threshold < self.loan_to_value:
            raise ValueError(
                f"liquidation_threshold ({self.liquidation_threshold}) "
                f"must be >= loan_to_value ({self.loan_to_value})"
            )
        return self


class BorrowPosition(BaseModel):
    """
    Один занятый актив.

    Риск-скорректированный долг = value / borrow_factor: borrow factor
    ниже 100% увеличивает вес волатильного долга в health factor.
    Нулевой borrow factor не допускается (долг с бесконечным весом).
    """

    value: float = Field(..., ge=0, allow_inf_nan=False, description="Стоимость долга (USD)")
    borrow_factor: BasisPoints = Field(
        BPS_DENOMINATOR, gt=0, le=BPS_DENOMINATOR, description="Borrow factor (bps)"
    )
    asset: Optional[str] = Field(None, min_length=1, description="Идентификатор актива")

    model_config = {"frozen": True}


class RatePosition(BaseModel):
    """
    Позиция supply или borrow с её текущей годовой ставкой.

    Используется для взвешенных APR по портфелю.
    """

    amount_usd: float = Field(..., ge=0, allow_inf_nan=False, description="Сумма (USD)")
    apr: float = Field(..., allow_inf_nan=False, description="APR (доля, 0.05 = 5%)")

    model_config = {"frozen": True}
