"""
HealthFactorThresholds — конфигурация уровней безопасности

Четыре неубывающие границы:
    liquidation <= danger <= warning <= safe

Классификация выбирает наивысший уровень, нижнюю границу которого
health factor достигает; ниже danger — LIQUIDATION.
"""

from typing import Final

from pydantic import BaseModel, Field, model_validator

# =============================================================================
# ПОРОГИ ПО УМОЛЧАНИЮ
# =============================================================================

# Health factor, начиная с которого позиция считается безопасной
SAFE_HEALTH_FACTOR: Final[float] = 1.5

# Минимальный health factor по умолчанию для withdraw и pre-flight проверок
WARNING_HEALTH_FACTOR: Final[float] = 1.2

# Ниже — позиция доступна для ликвидации
LIQUIDATION_HEALTH_FACTOR: Final[float] = 1.0


class HealthFactorThresholds(BaseModel):
    """Границы уровней health factor."""

    safe: float = Field(SAFE_HEALTH_FACTOR, gt=0, allow_inf_nan=False)
    warning: float = Field(WARNING_HEALTH_FACTOR, gt=0, allow_inf_nan=False)
    danger: float = Field(LIQUIDATION_HEALTH_FACTOR, gt=0, allow_inf_nan=False)
    liquidation: float = Field(LIQUIDATION_HEALTH_FACTOR, gt=0, allow_inf_nan=False)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_ascending(self) -> "HealthFactorThresholds":
        if not (self.liquidation <= self.danger <= self.warning <= self.safe):
            raise ValueError(
                "health factor thresholds must satisfy liquidation <= danger <= warning <= safe, "
                f"got {self.liquidation}/{self.danger}/{self.warning}/{self.safe}"
            )
        return self


DEFAULT_THRESHOLDS: Final[HealthFactorThresholds] = HealthFactorThresholds()
