"""
E-Mode — категория Efficiency Mode

Для коррелированных активов (стейблкоины, LST одной сети) протокол
разрешает повышенные LTV и liquidation threshold. Категория задаёт эти
параметры и список допустимых активов; пользователь в E-Mode может
держать залог и брать займы только в активах категории.
"""

from typing import FrozenSet, Optional

from pydantic import BaseModel, Field, model_validator

from .units import BPS_DENOMINATOR, BasisPoints


class EModeCategory(BaseModel):
    """
    Параметры одной E-Mode категории.

    Инвариант: liquidation_threshold >= loan_to_value.
    """

    category_id: int = Field(..., ge=0)
    label: str = Field(..., min_length=1)
    loan_to_value: BasisPoints = Field(..., ge=0, le=BPS_DENOMINATOR)
    liquidation_threshold: BasisPoints = Field(..., ge=0, le=BPS_DENOMINATOR)
    liquidation_bonus_bips: BasisPoints = Field(0, ge=0, le=BPS_DENOMINATOR)
    eligible_assets: FrozenSet[str] = Field(default_factory=frozenset)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_threshold_above_ltv(self) -> "EModeCategory":
        if self.liquidation_threshold < self.loan_to_value:
            raise ValueError(
                f"liquidation_threshold ({self.liquidation_threshold}) must be >= "
                f"loan_to_value ({self.loan_to_value})"
            )
        return self

    def is_eligible(self, asset: Optional[str]) -> bool:
        return asset is not None and asset in self.eligible_assets
