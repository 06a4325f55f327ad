"""
Domain models and value objects.

Contains unit types, the amount conversion boundary, the HealthFactor
sum type and the reserve / position / E-Mode / threshold configuration models.
"""

from src.core.domain.amounts import Amount, MalformedAmountError, to_amount
from src.core.domain.emode import EModeCategory
from src.core.domain.health_factor import (
    MAX_FINITE_HEALTH_FACTOR,
    HealthFactor,
    HealthFactorLevel,
    HealthFactorLike,
    as_health_factor,
)
from src.core.domain.position import (
    BorrowPosition,
    CollateralPosition,
    DepositPosition,
    RatePosition,
)
from src.core.domain.reserve import InterestRateConfig, ReserveConfig
from src.core.domain.thresholds import (
    DEFAULT_THRESHOLDS,
    LIQUIDATION_HEALTH_FACTOR,
    SAFE_HEALTH_FACTOR,
    WARNING_HEALTH_FACTOR,
    HealthFactorThresholds,
)
from src.core.domain.units import (
    BPS_DENOMINATOR,
    HUNDREDTH_BPS_DENOMINATOR,
    BasisPoints,
    HundredthBasisPoints,
    apply_bps,
    apply_hundredth_bps,
    bps_to_fraction,
    fraction_to_bps,
    hundredth_bps_to_fraction,
    rate_bps_to_fraction,
    validate_bps,
    validate_hundredth_bps,
)

__all__ = [
    # Units module
    "BPS_DENOMINATOR",
    "HUNDREDTH_BPS_DENOMINATOR",
    "BasisPoints",
    "HundredthBasisPoints",
    "apply_bps",
    "apply_hundredth_bps",
    "bps_to_fraction",
    "fraction_to_bps",
    "hundredth_bps_to_fraction",
    "rate_bps_to_fraction",
    "validate_bps",
    "validate_hundredth_bps",
    # Amounts
    "Amount",
    "MalformedAmountError",
    "to_amount",
    # Health factor
    "MAX_FINITE_HEALTH_FACTOR",
    "HealthFactor",
    "HealthFactorLevel",
    "HealthFactorLike",
    "as_health_factor",
    # Positions
    "BorrowPosition",
    "CollateralPosition",
    "DepositPosition",
    "RatePosition",
    # Reserve config
    "InterestRateConfig",
    "ReserveConfig",
    # E-Mode
    "EModeCategory",
    # Thresholds
    "DEFAULT_THRESHOLDS",
    "LIQUIDATION_HEALTH_FACTOR",
    "SAFE_HEALTH_FACTOR",
    "WARNING_HEALTH_FACTOR",
    "HealthFactorThresholds",
]
