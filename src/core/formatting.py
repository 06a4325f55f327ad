"""
Formatting — строковое представление риск-метрик для отображения

Ставки на входе — доли (0.0525 → "5.25%").
"""

from typing import Final

from src.core.domain.health_factor import HealthFactorLike, as_health_factor
from src.core.math.numerical_safeguards import ensure_finite

# Выше этого значения health factor отображается как ">999"
HEALTH_FACTOR_DISPLAY_CAP: Final[float] = 999.0

UNBOUNDED_SYMBOL: Final[str] = "∞"


def format_health_factor(health_factor: HealthFactorLike) -> str:
    """
    Examples:
        >>> format_health_factor(1.2549)
        '1.25'
        >>> format_health_factor(float("inf"))
        '∞'
        >>> format_health_factor(1500.0)
        '>999'
    """
    hf = as_health_factor(health_factor)

    if hf.is_unbounded:
        return UNBOUNDED_SYMBOL
    if hf.value > HEALTH_FACTOR_DISPLAY_CAP:
        return f">{HEALTH_FACTOR_DISPLAY_CAP:.0f}"
    return f"{hf.value:.2f}"


def format_apr(apr: float, decimals: int = 2) -> str:
    """
    APR как процент.

    Examples:
        >>> format_apr(0.0525)
        '5.25%'
        >>> format_apr(0.08, decimals=1)
        '8.0%'
    """
    apr = ensure_finite(apr, "apr")
    return f"{apr * 100:.{decimals}f}%"


def format_apr_with_sign(apr: float, decimals: int = 2) -> str:
    """
    APR со знаком (для net APR): "+3.10%", "-1.25%".
    """
    apr = ensure_finite(apr, "apr")
    sign = "+" if apr >= 0 else ""
    return f"{sign}{apr * 100:.{decimals}f}%"
