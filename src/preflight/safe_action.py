"""Safe Action Guard — pre-flight проверка действия над позицией

Запускается до построения транзакции borrow / withdraw / repay / supply.

Проверяет:
- Withdraw не превышает текущий залог
- Projected health factor после действия >= min_health_factor
- Projected health factor выше границы ликвидации

Действия, снижающие риск (supply, repay), health factor не уменьшают
и через evaluate_action проходят всегда.

Порядок проверок evaluate:
1. Withdraw больше залога → reject
2. Projected HF < liquidation threshold → reject (позиция станет ликвидируемой)
3. Projected HF < min_health_factor → reject
4. PASS
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional

from src.core.domain.health_factor import HealthFactor, HealthFactorLevel
from src.core.domain.thresholds import (
    DEFAULT_THRESHOLDS,
    WARNING_HEALTH_FACTOR,
    HealthFactorThresholds,
)
from src.core.domain.units import BasisPoints
from src.core.math.health import get_health_factor_level, simulate_health_factor_change
from src.core.math.numerical_safeguards import ensure_finite, validate_non_negative

# =============================================================================
# CONSTANTS
# =============================================================================

REASON_WITHDRAW_EXCEEDS_COLLATERAL: Final[str] = (
    "Withdrawal of {amount:.2f} exceeds current collateral {collateral:.2f}"
)
REASON_LIQUIDATABLE: Final[str] = (
    "Health factor would drop to {projected:.2f}, position would be liquidatable "
    "(liquidation below {liquidation:.2f})"
)
REASON_BELOW_MINIMUM: Final[str] = (
    "Health factor would drop to {projected:.2f} (minimum: {minimum:.2f})"
)


class LendingAction(str, Enum):
    """Действие пользователя над lending позицией."""

    SUPPLY = "supply"
    WITHDRAW = "withdraw"
    BORROW = "borrow"
    REPAY = "repay"


# =============================================================================
# CONFIG / RESULT
# =============================================================================


@dataclass(frozen=True)
class SafeActionConfig:
    """Конфигурация guard.

    min_health_factor — минимальный HF после действия;
    thresholds — границы уровней для классификации projected HF.
    """

    min_health_factor: float = WARNING_HEALTH_FACTOR
    thresholds: HealthFactorThresholds = DEFAULT_THRESHOLDS

    def __post_init__(self) -> None:
        ensure_finite(self.min_health_factor, "min_health_factor")
        if self.min_health_factor <= 0:
            raise ValueError(
                f"min_health_factor must be positive, got {self.min_health_factor}"
            )


@dataclass(frozen=True)
class SafeActionResult:
    """Результат pre-flight проверки."""

    valid: bool
    reason: Optional[str]

    projected_hf: HealthFactor

    # Детали симуляции
    current_hf: HealthFactor
    safety_delta: float
    level: HealthFactorLevel


# =============================================================================
# GUARD
# =============================================================================


class SafeActionGuard:
    """Pre-flight guard: блокирует действия, опускающие HF ниже минимума."""

    def __init__(self, config: SafeActionConfig | None = None):
        self.config = config or SafeActionConfig()

    def evaluate(
        self,
        current_collateral: float,
        current_borrow: float,
        collateral_change: float,
        borrow_change: float,
        liquidation_threshold_bips: BasisPoints,
    ) -> SafeActionResult:
        """Проверка произвольной пары дельт (collateral, borrow).

        Args:
            current_collateral: Текущий залог (USD)
            current_borrow: Текущий долг (USD)
            collateral_change: Изменение залога (USD, < 0 — withdraw)
            borrow_change: Изменение долга (USD, < 0 — repay)
            liquidation_threshold_bips: Liquidation threshold (bps)

        Returns:
            SafeActionResult

        Raises:
            ValueError: NaN/Inf или отрицательные текущие значения
        """
        current_collateral = validate_non_negative(current_collateral, "current_collateral")
        collateral_change = ensure_finite(collateral_change, "collateral_change")

        withdraw_exceeds = current_collateral + collateral_change < 0
        if withdraw_exceeds:
            # Симулируем вывод всего залога, чтобы вернуть осмысленный projected HF
            simulated_change = -current_collateral
        else:
            simulated_change = collateral_change

        simulation = simulate_health_factor_change(
            current_collateral,
            current_borrow,
            simulated_change,
            borrow_change,
            liquidation_threshold_bips,
        )
        projected = simulation.projected_hf
        thresholds = self.config.thresholds

        if withdraw_exceeds:
            reason = REASON_WITHDRAW_EXCEEDS_COLLATERAL.format(
                amount=-collateral_change,
                collateral=current_collateral,
            )
        elif projected < thresholds.liquidation:
            reason = REASON_LIQUIDATABLE.format(
                projected=float(projected),
                liquidation=thresholds.liquidation,
            )
        elif projected < self.config.min_health_factor:
            reason = REASON_BELOW_MINIMUM.format(
                projected=float(projected),
                minimum=self.config.min_health_factor,
            )
        else:
            reason = None

        return SafeActionResult(
            valid=reason is None,
            reason=reason,
            projected_hf=projected,
            current_hf=simulation.current_hf,
            safety_delta=simulation.safety_delta,
            level=get_health_factor_level(projected, thresholds),
        )

    def evaluate_action(
        self,
        action: LendingAction,
        amount_usd: float,
        current_collateral: float,
        current_borrow: float,
        liquidation_threshold_bips: BasisPoints,
    ) -> SafeActionResult:
        """Проверка одного действия пользователя.

        supply и repay не уменьшают HF: результат всегда valid, даже если
        позиция остаётся ниже минимума (снижение риска не блокируется).

        Raises:
            ValueError: amount_usd отрицательный или NaN/Inf, неизвестное действие
        """
        action = LendingAction(action)
        amount_usd = validate_non_negative(amount_usd, "amount_usd")

        collateral_change = 0.0
        borrow_change = 0.0
        if action is LendingAction.SUPPLY:
            collateral_change = amount_usd
        elif action is LendingAction.WITHDRAW:
            collateral_change = -amount_usd
        elif action is LendingAction.BORROW:
            borrow_change = amount_usd
        else:
            borrow_change = -amount_usd

        result = self.evaluate(
            current_collateral,
            current_borrow,
            collateral_change,
            borrow_change,
            liquidation_threshold_bips,
        )

        if action in (LendingAction.SUPPLY, LendingAction.REPAY) and not result.valid:
            return SafeActionResult(
                valid=True,
                reason=None,
                projected_hf=result.projected_hf,
                current_hf=result.current_hf,
                safety_delta=result.safety_delta,
                level=result.level,
            )

        return result


def validate_safe_action(
    current_collateral: float,
    current_borrow: float,
    collateral_change: float,
    borrow_change: float,
    liquidation_threshold_bips: BasisPoints,
    min_health_factor: float = WARNING_HEALTH_FACTOR,
) -> SafeActionResult:
    """
    Pre-flight проверка: projected HF >= min_health_factor.

    Examples:
        >>> result = validate_safe_action(1000.0, 0.0, 0.0, 700.0, BasisPoints(8000))
        >>> result.valid, result.reason
        (False, 'Health factor would drop to 1.14 (minimum: 1.20)')
    """
    guard = SafeActionGuard(SafeActionConfig(min_health_factor=min_health_factor))
    return guard.evaluate(
        current_collateral,
        current_borrow,
        collateral_change,
        borrow_change,
        liquidation_threshold_bips,
    )
