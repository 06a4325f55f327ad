"""
Numerical Safeguards — Safe Math Primitives

Модуль обеспечивает численную устойчивость риск-расчётов:
- Валидация float входов (NaN/Inf отклоняются, а не пропагируют)
- Деление с явным результатом для нулевого знаменателя
- Сравнения float с учётом машинной точности
- Clamp для защиты от устаревших (out-of-range) данных

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN никогда не возвращается: невалидный вход → ValueError
2. Нулевой знаменатель → заранее определённый предел, не Inf/NaN
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Относительная толерантность для is_close
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Абсолютная толерантность для is_close
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12


# =============================================================================
# ВАЛИДАЦИЯ FLOAT
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли значение конечным числом (не NaN, не Inf, не bool).

    int вне диапазона float (10**400) конечным float не является.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def ensure_finite(value: float, name: str) -> float:
    """
    Проверка конечности значения.

    Raises:
        ValueError: Если value NaN/Inf или не число

    Returns:
        value как float
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value!r}")
    return float(value)


def validate_positive(value: float, name: str) -> float:
    """
    Валидация, что значение конечно и строго положительно.

    Raises:
        ValueError: Если value <= 0 или NaN/Inf
    """
    value = ensure_finite(value, name)

    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")

    return value


def validate_non_negative(value: float, name: str) -> float:
    """
    Валидация, что значение конечно и неотрицательно.

    Raises:
        ValueError: Если value < 0 или NaN/Inf
    """
    value = ensure_finite(value, name)

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")

    return value


def validate_in_range(
    value: float,
    name: str,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Валидация, что значение конечно и в заданном диапазоне.

    Raises:
        ValueError: Если value вне диапазона или NaN/Inf
    """
    value = ensure_finite(value, name)

    if min_value is not None and value < min_value:
        raise ValueError(f"{name} must be >= {min_value}, got {value}")

    if max_value is not None and value > max_value:
        raise ValueError(f"{name} must be <= {max_value}, got {value}")

    return value


# =============================================================================
# БЕЗОПАСНОЕ ДЕЛЕНИЕ
# =============================================================================


def safe_ratio(numerator: float, denominator: float, fallback: float = 0.0) -> float:
    """
    Деление с явным пределом для нулевого знаменателя.

    В отличие от epsilon-защиты, малые ненулевые знаменатели не
    подменяются: для пула с 1e-9 ликвидности ratio остаётся точным.

    Args:
        numerator: Числитель (конечный)
        denominator: Знаменатель (конечный)
        fallback: Результат при denominator == 0

    Returns:
        numerator / denominator или fallback

    Raises:
        ValueError: Если аргументы NaN/Inf

    Examples:
        >>> safe_ratio(600.0, 2400.0)
        0.25
        >>> safe_ratio(0.0, 0.0)
        0.0
    """
    numerator = ensure_finite(numerator, "numerator")
    denominator = ensure_finite(denominator, "denominator")

    if denominator == 0.0:
        return fallback

    return numerator / denominator


# =============================================================================
# СРАВНЕНИЯ И УТИЛИТЫ
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Examples:
        >>> is_close(1.0, 1.0 + 1e-10)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Ограничение значения в заданном диапазоне.

    Examples:
        >>> clamp(1.3, 0.0, 1.0)
        1.0
        >>> clamp(-0.2, 0.0, 1.0)
        0.0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result
