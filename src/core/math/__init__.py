"""
Core math modules

Риск- и процентная математика lending резервов с гарантией численной
стабильности: NaN/Inf не возвращаются, вырожденные входы дают явные пределы.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    # Safe division
    safe_ratio,
    # Float validation
    ensure_finite,
    is_valid_float,
    validate_in_range,
    validate_non_negative,
    validate_positive,
    # Utilities
    clamp,
    is_close,
)

# Utilization
from src.core.math.utilization import (
    NEAR_LIMIT_FRACTION,
    PoolLimitStatus,
    calculate_available_liquidity,
    calculate_total_supply,
    calculate_utilization,
    check_pool_limits,
)

# Interest Rates
from src.core.math.interest_rates import (
    RateCurvePoint,
    ReserveAPRs,
    calculate_borrow_apr,
    calculate_reserve_aprs,
    calculate_supply_apr,
    generate_rate_curve,
)

# Health
from src.core.math.health import (
    BORROW_TARGET_HEALTH_FACTOR,
    BorrowSide,
    HealthFactorSimulation,
    calculate_adjusted_borrow_value,
    calculate_available_to_borrow,
    calculate_current_ltv,
    calculate_health_factor,
    calculate_max_borrow,
    calculate_max_safe_borrow,
    calculate_max_withdraw,
    calculate_weighted_collateral,
    get_health_factor_level,
    is_liquidatable,
    is_safe_health_factor,
    simulate_health_factor_change,
)

# Portfolio
from src.core.math.portfolio import (
    PortfolioRisk,
    calculate_borrowing_power,
    calculate_portfolio_risk,
)

# E-Mode
from src.core.math.emode import (
    EModeBenefit,
    EModeComparison,
    EModeEligibility,
    EModeRecommendation,
    EModeRiskLevel,
    EModeTransitionResult,
    apply_emode,
    calculate_emode_benefit,
    calculate_emode_borrowing_power,
    calculate_emode_health_factor,
    calculate_emode_liquidation_value,
    can_borrow_in_emode,
    can_enter_emode,
    compare_normal_vs_emode,
    get_available_emode_categories,
    simulate_emode_transition,
    validate_emode_transition,
)

# Liquidation
from src.core.math.liquidation import (
    calculate_distance_to_liquidation,
    calculate_effective_liquidation_penalty,
    calculate_liquidation_bonus,
    calculate_liquidation_price,
    calculate_safety_buffer,
)

# Compounding
from src.core.math.compounding import (
    COMPOUND_FREQUENCY_DAILY,
    COMPOUND_FREQUENCY_MONTHLY,
    CompoundingDomainViolation,
    apr_to_apy,
    apy_to_apr,
    calculate_projected_earnings,
    safe_log_return,
)

# Fees
from src.core.math.fees import (
    calculate_borrow_fee,
    calculate_break_even_borrow_apr,
    calculate_flash_loan_fee,
    calculate_net_apr,
    calculate_total_borrow_cost,
    calculate_weighted_apr,
    calculate_withdraw_fee,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    # Numerical Safeguards — Safe division
    "safe_ratio",
    # Numerical Safeguards — Float validation
    "ensure_finite",
    "is_valid_float",
    "validate_in_range",
    "validate_non_negative",
    "validate_positive",
    # Numerical Safeguards — Utilities
    "clamp",
    "is_close",
    # Utilization
    "NEAR_LIMIT_FRACTION",
    "PoolLimitStatus",
    "calculate_available_liquidity",
    "calculate_total_supply",
    "calculate_utilization",
    "check_pool_limits",
    # Interest Rates
    "RateCurvePoint",
    "ReserveAPRs",
    "calculate_borrow_apr",
    "calculate_reserve_aprs",
    "calculate_supply_apr",
    "generate_rate_curve",
    # Health
    "BORROW_TARGET_HEALTH_FACTOR",
    "BorrowSide",
    "HealthFactorSimulation",
    "calculate_adjusted_borrow_value",
    "calculate_available_to_borrow",
    "calculate_current_ltv",
    "calculate_health_factor",
    "calculate_max_borrow",
    "calculate_max_safe_borrow",
    "calculate_max_withdraw",
    "calculate_weighted_collateral",
    "get_health_factor_level",
    "is_liquidatable",
    "is_safe_health_factor",
    "simulate_health_factor_change",
    # Portfolio
    "PortfolioRisk",
    "calculate_borrowing_power",
    "calculate_portfolio_risk",
    # E-Mode
    "EModeBenefit",
    "EModeComparison",
    "EModeEligibility",
    "EModeRecommendation",
    "EModeRiskLevel",
    "EModeTransitionResult",
    "apply_emode",
    "calculate_emode_benefit",
    "calculate_emode_borrowing_power",
    "calculate_emode_health_factor",
    "calculate_emode_liquidation_value",
    "can_borrow_in_emode",
    "can_enter_emode",
    "compare_normal_vs_emode",
    "get_available_emode_categories",
    "simulate_emode_transition",
    "validate_emode_transition",
    # Liquidation
    "calculate_distance_to_liquidation",
    "calculate_effective_liquidation_penalty",
    "calculate_liquidation_bonus",
    "calculate_liquidation_price",
    "calculate_safety_buffer",
    # Compounding — Constants
    "COMPOUND_FREQUENCY_DAILY",
    "COMPOUND_FREQUENCY_MONTHLY",
    # Compounding — Exceptions
    "CompoundingDomainViolation",
    # Compounding — Functions
    "apr_to_apy",
    "apy_to_apr",
    "calculate_projected_earnings",
    "safe_log_return",
    # Fees
    "calculate_borrow_fee",
    "calculate_break_even_borrow_apr",
    "calculate_flash_loan_fee",
    "calculate_net_apr",
    "calculate_total_borrow_cost",
    "calculate_weighted_apr",
    "calculate_withdraw_fee",
]
