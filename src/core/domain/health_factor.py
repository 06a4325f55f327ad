"""
HealthFactor — значение health factor как sum type

HealthFactor = Finite(value) | Unbounded

Unbounded означает «нет долга — ликвидация невозможна». Это отдельный
вариант, а не большое конечное число: сравнения и вычитания с ним
определены явно и никогда не дают NaN.
"""

import math
import sys
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Final, Optional, Union

# Наибольший представимый конечный health factor
MAX_FINITE_HEALTH_FACTOR: Final[float] = sys.float_info.max


class HealthFactorLevel(str, Enum):
    """Уровень безопасности позиции."""

    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"
    LIQUIDATION = "liquidation"


@total_ordering
@dataclass(frozen=True)
class HealthFactor:
    """
    Health factor позиции.

    value=None — вариант Unbounded (нет долга). Конструировать через
    HealthFactor.finite() / HealthFactor.unbounded().

    Сравнение допускается с другим HealthFactor и с числами:
        HealthFactor.unbounded() > 1e300  → True
        HealthFactor.finite(1.25) < 1.5   → True
    """

    value: Optional[float] = None

    def __post_init__(self) -> None:
        if self.value is not None:
            if not math.isfinite(self.value):
                raise ValueError(
                    f"Finite health factor must be a finite float, got {self.value}. "
                    f"Use HealthFactor.unbounded() for the no-debt state."
                )
            if self.value < 0:
                raise ValueError(f"Health factor cannot be negative, got {self.value}")

    @classmethod
    def finite(cls, value: float) -> "HealthFactor":
        return cls(value=float(value))

    @classmethod
    def unbounded(cls) -> "HealthFactor":
        return cls(value=None)

    @classmethod
    def from_ratio(cls, weighted_collateral: float, borrow_value: float) -> "HealthFactor":
        """
        HF = weighted_collateral / borrow_value.

        Нулевой долг → Unbounded. Отношение, переполняющее float при
        ненулевом долге (огромный залог против пыли долга), насыщается до
        MAX_FINITE_HEALTH_FACTOR: долг есть, поэтому вариант остаётся Finite.

        Raises:
            ValueError: Отрицательные входы, NaN, или оба входа бесконечны
        """
        if math.isnan(weighted_collateral) or math.isnan(borrow_value):
            raise ValueError("Health factor inputs cannot be NaN")
        if weighted_collateral < 0 or borrow_value < 0:
            raise ValueError(
                f"Health factor inputs must be non-negative, got "
                f"{weighted_collateral} / {borrow_value}"
            )
        if borrow_value == 0.0:
            return cls.unbounded()
        if math.isinf(weighted_collateral) and math.isinf(borrow_value):
            raise ValueError("Health factor is undefined: collateral and debt both overflow")

        return cls(value=min(weighted_collateral / borrow_value, MAX_FINITE_HEALTH_FACTOR))

    @property
    def is_unbounded(self) -> bool:
        return self.value is None

    def __float__(self) -> float:
        return math.inf if self.value is None else self.value

    def __eq__(self, other: object) -> bool:
        other_value = _comparable(other)
        if other_value is None:
            return NotImplemented
        return float(self) == other_value

    def __lt__(self, other: object) -> bool:
        other_value = _comparable(other)
        if other_value is None:
            return NotImplemented
        return float(self) < other_value

    def __hash__(self) -> int:
        return hash(float(self))

    def __sub__(self, other: "HealthFactor") -> float:
        """
        Разница двух health factor (используется для safety delta).

        Unbounded − Unbounded = 0.0 (состояние не изменилось),
        Unbounded − Finite = +inf, Finite − Unbounded = -inf.
        """
        if not isinstance(other, HealthFactor):
            return NotImplemented
        if self.is_unbounded and other.is_unbounded:
            return 0.0
        return float(self) - float(other)

    def __repr__(self) -> str:
        if self.is_unbounded:
            return "HealthFactor.unbounded()"
        return f"HealthFactor.finite({self.value!r})"


def _comparable(other: object) -> Optional[float]:
    if isinstance(other, HealthFactor):
        return float(other)
    if isinstance(other, bool):
        return None
    if isinstance(other, (int, float)):
        if math.isnan(other):
            raise ValueError("Cannot compare health factor with NaN")
        return float(other)
    return None


HealthFactorLike = Union[HealthFactor, float]


def as_health_factor(value: HealthFactorLike) -> HealthFactor:
    """
    Приведение float к HealthFactor (math.inf → Unbounded).

    Raises:
        ValueError: Для NaN, -inf и отрицательных значений
    """
    if isinstance(value, HealthFactor):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Health factor must be a number, got {value!r}")
    if math.isnan(value):
        raise ValueError("Health factor cannot be NaN")
    if value == math.inf:
        return HealthFactor.unbounded()
    return HealthFactor.finite(value)
