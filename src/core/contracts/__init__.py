"""
Contract Validation Module

Модуль для валидации JSON конфигураций резервов, E-Mode категорий и
порогов риска. Схемы поставляются как package data (schema/*.json).
"""

from .validators import (
    ContractValidator,
    EModeCategoryValidator,
    HealthFactorThresholdsValidator,
    InterestRateConfigValidator,
    ReserveConfigValidator,
    SchemaLoader,
    load_emode_category,
    load_health_factor_thresholds,
    load_interest_rate_config,
    load_reserve_config,
    validate_emode_category,
    validate_health_factor_thresholds,
    validate_interest_rate_config,
    validate_reserve_config,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ReserveConfigValidator",
    "InterestRateConfigValidator",
    "HealthFactorThresholdsValidator",
    "EModeCategoryValidator",
    # Functions
    "validate_reserve_config",
    "validate_interest_rate_config",
    "validate_health_factor_thresholds",
    "validate_emode_category",
    "load_reserve_config",
    "load_interest_rate_config",
    "load_health_factor_thresholds",
    "load_emode_category",
]
