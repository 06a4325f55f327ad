"""
E-Mode — риск-математика Efficiency Mode

В E-Mode залог из активов категории взвешивается её повышенными
LTV / liquidation threshold. Вход в режим требует, чтобы весь залог и
весь долг были в активах категории; выход пересчитывает HF по обычным
параметрам резервов.

ФОРМУЛЫ:
    emode_borrowing_power   = Σ(eligible.value × category.loan_to_value)
    emode_liquidation_value = Σ(eligible.value × category.liquidation_threshold)
    improvement_fraction    = (emode_power − normal_power) / normal_power

Переход (вход или выход) отклоняется, если HF после перехода ниже
min_safe_health_factor; заметное падение HF (ниже 80% текущего)
допускается с предупреждением.
"""

from enum import Enum
from typing import Final, Iterable, List, NamedTuple, Optional, Tuple

from src.core.domain.emode import EModeCategory
from src.core.domain.health_factor import HealthFactor, HealthFactorLike, as_health_factor
from src.core.domain.position import BorrowPosition, DepositPosition
from src.core.domain.thresholds import SAFE_HEALTH_FACTOR
from src.core.domain.units import apply_bps
from src.core.math.health import calculate_health_factor
from src.core.math.numerical_safeguards import safe_ratio, validate_positive
from src.core.math.portfolio import calculate_borrowing_power

# Штраф ликвидации, ниже которого категория считается менее рискованной (5%)
NEUTRAL_LIQUIDATION_BONUS_BIPS: Final[int] = 500

# Пороги прироста borrowing power для рекомендации
HIGHLY_RECOMMENDED_IMPROVEMENT: Final[float] = 0.20
RECOMMENDED_IMPROVEMENT: Final[float] = 0.10

# Падение HF ниже этой доли текущего — переход с предупреждением
HEALTH_FACTOR_DROP_CAUTION_RATIO: Final[float] = 0.8

REASON_INELIGIBLE_COLLATERAL = "Some assets are not eligible for {label} E-Mode"
REASON_INELIGIBLE_BORROW = "Some borrowed assets cannot be borrowed in {label} E-Mode"
REASON_BELOW_MINIMUM = (
    "Health factor would drop to {projected:.2f}. Minimum safe level is {minimum:.2f}"
)
WARNING_SIGNIFICANT_DROP = "Health factor will decrease significantly. Proceed with caution."


class EModeRiskLevel(str, Enum):
    """Риск категории относительно обычного режима (по штрафу ликвидации)."""

    LOWER = "lower"
    SAME = "same"
    HIGHER = "higher"


class EModeRecommendation(str, Enum):
    HIGHLY_RECOMMENDED = "highly_recommended"
    RECOMMENDED = "recommended"
    OPTIONAL = "optional"


class EModeEligibility(NamedTuple):
    can_enter: bool
    reason: Optional[str]
    ineligible_assets: Tuple[Optional[str], ...]


class EModeComparison(NamedTuple):
    """Borrowing power в обычном режиме и в E-Mode (USD)."""

    normal_borrowing_power: float
    emode_borrowing_power: float
    improvement: float
    improvement_fraction: float


class EModeBenefit(NamedTuple):
    """
    Сводка выгоды от E-Mode.

    ltv_increase_bips / threshold_increase_bips — разница с простым
    средним обычных параметров по залоговым позициям.
    """

    label: str
    ltv_increase_bips: float
    threshold_increase_bips: float
    additional_borrowing_power: float
    risk_level: EModeRiskLevel
    recommendation: EModeRecommendation


class EModeTransitionResult(NamedTuple):
    valid: bool
    warning: Optional[str]
    current_hf: HealthFactor
    projected_hf: HealthFactor


# =============================================================================
# ELIGIBILITY
# =============================================================================


def can_enter_emode(deposit_assets: Iterable[Optional[str]], category: EModeCategory) -> EModeEligibility:
    """
    Вход в E-Mode разрешён, только если все активы залога входят в категорию.

    Позиция без идентификатора актива (None) считается неподходящей.
    Пустой список залога вход не блокирует.
    """
    ineligible = tuple(asset for asset in deposit_assets if not category.is_eligible(asset))

    if ineligible:
        return EModeEligibility(
            can_enter=False,
            reason=REASON_INELIGIBLE_COLLATERAL.format(label=category.label),
            ineligible_assets=ineligible,
        )
    return EModeEligibility(can_enter=True, reason=None, ineligible_assets=())


def get_available_emode_categories(
    deposit_assets: Iterable[Optional[str]],
    categories: Iterable[EModeCategory],
) -> List[EModeCategory]:
    """Категории, в которые пользователь может войти с текущим залогом."""
    deposit_assets = list(deposit_assets)
    return [category for category in categories if can_enter_emode(deposit_assets, category).can_enter]


def can_borrow_in_emode(asset: Optional[str], category: EModeCategory) -> bool:
    """В E-Mode занимать можно только активы категории."""
    return category.is_eligible(asset)


# =============================================================================
# BORROWING POWER / LIQUIDATION VALUE
# =============================================================================


def calculate_emode_borrowing_power(
    deposits: Iterable[DepositPosition],
    category: EModeCategory,
) -> float:
    """
    Borrowing power залога категории под LTV категории (USD).

    Активы вне категории в E-Mode borrowing power не дают.

    Examples:
        >>> category = EModeCategory(
        ...     category_id=1, label="Stablecoins", loan_to_value=9000,
        ...     liquidation_threshold=9300, eligible_assets={"USDC"},
        ... )
        >>> usdc = DepositPosition(value=1000.0, loan_to_value=7500, liquidation_threshold=8000, asset="USDC")
        >>> calculate_emode_borrowing_power([usdc], category)
        900.0
    """
    return sum(
        (
            apply_bps(deposit.value, category.loan_to_value)
            for deposit in deposits
            if category.is_eligible(deposit.asset)
        ),
        0.0,
    )


def calculate_emode_liquidation_value(
    deposits: Iterable[DepositPosition],
    category: EModeCategory,
) -> float:
    """Залог категории, взвешенный её liquidation threshold (USD)."""
    return sum(
        (
            apply_bps(deposit.value, category.liquidation_threshold)
            for deposit in deposits
            if category.is_eligible(deposit.asset)
        ),
        0.0,
    )


def apply_emode(deposits: Iterable[DepositPosition], category: EModeCategory) -> List[DepositPosition]:
    """
    Залог с параметрами E-Mode: позиции категории получают LTV и threshold
    категории, остальные сохраняют обычные параметры резерва.
    """
    return [
        deposit.model_copy(
            update={
                "loan_to_value": category.loan_to_value,
                "liquidation_threshold": category.liquidation_threshold,
            }
        )
        if category.is_eligible(deposit.asset)
        else deposit
        for deposit in deposits
    ]


def calculate_emode_health_factor(
    deposits: Iterable[DepositPosition],
    borrows: Iterable[BorrowPosition],
    category: EModeCategory,
) -> HealthFactor:
    """Health factor позиции в E-Mode (долг риск-корректирован borrow factor)."""
    return calculate_health_factor(apply_emode(deposits, category), borrows)


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


def compare_normal_vs_emode(
    deposits: Iterable[DepositPosition],
    category: EModeCategory,
) -> EModeComparison:
    """
    Borrowing power в обычном режиме против E-Mode.

    improvement_fraction — доля (0.2 = +20%), 0 без обычной borrowing power.
    """
    deposits = list(deposits)

    normal = calculate_borrowing_power(deposits)
    emode = calculate_emode_borrowing_power(deposits, category)
    improvement = emode - normal

    return EModeComparison(
        normal_borrowing_power=normal,
        emode_borrowing_power=emode,
        improvement=improvement,
        improvement_fraction=safe_ratio(improvement, normal, fallback=0.0),
    )


def calculate_emode_benefit(
    deposits: Iterable[DepositPosition],
    category: EModeCategory,
) -> EModeBenefit:
    """
    Сводка выгоды от входа в E-Mode.

    Raises:
        ValueError: Пустой список залога (средние параметры не определены)
    """
    deposits = list(deposits)
    if not deposits:
        raise ValueError("E-Mode benefit requires at least one deposit")

    comparison = compare_normal_vs_emode(deposits, category)

    average_ltv = sum(deposit.loan_to_value for deposit in deposits) / len(deposits)
    average_threshold = sum(deposit.liquidation_threshold for deposit in deposits) / len(deposits)

    if category.liquidation_bonus_bips < NEUTRAL_LIQUIDATION_BONUS_BIPS:
        risk_level = EModeRiskLevel.LOWER
    elif category.liquidation_bonus_bips > NEUTRAL_LIQUIDATION_BONUS_BIPS:
        risk_level = EModeRiskLevel.HIGHER
    else:
        risk_level = EModeRiskLevel.SAME

    if comparison.improvement_fraction > HIGHLY_RECOMMENDED_IMPROVEMENT:
        recommendation = EModeRecommendation.HIGHLY_RECOMMENDED
    elif comparison.improvement_fraction > RECOMMENDED_IMPROVEMENT:
        recommendation = EModeRecommendation.RECOMMENDED
    else:
        recommendation = EModeRecommendation.OPTIONAL

    return EModeBenefit(
        label=category.label,
        ltv_increase_bips=category.loan_to_value - average_ltv,
        threshold_increase_bips=category.liquidation_threshold - average_threshold,
        additional_borrowing_power=comparison.improvement,
        risk_level=risk_level,
        recommendation=recommendation,
    )


# =============================================================================
# ПЕРЕХОД
# =============================================================================


def validate_emode_transition(
    current_health_factor: HealthFactorLike,
    target_health_factor: HealthFactorLike,
    min_safe_health_factor: float = SAFE_HEALTH_FACTOR,
) -> EModeTransitionResult:
    """
    Проверка HF при переключении режима.

    Args:
        current_health_factor: HF в текущем режиме
        target_health_factor: HF после переключения
        min_safe_health_factor: Минимально допустимый HF после переключения

    Returns:
        EModeTransitionResult: invalid при target < минимума; valid с
        предупреждением при target < 80% текущего

    Examples:
        >>> validate_emode_transition(2.0, 1.3).warning
        'Health factor would drop to 1.30. Minimum safe level is 1.50'
    """
    current_hf = as_health_factor(current_health_factor)
    target_hf = as_health_factor(target_health_factor)
    min_safe_health_factor = validate_positive(min_safe_health_factor, "min_safe_health_factor")

    if target_hf < min_safe_health_factor:
        return EModeTransitionResult(
            valid=False,
            warning=REASON_BELOW_MINIMUM.format(
                projected=float(target_hf), minimum=min_safe_health_factor
            ),
            current_hf=current_hf,
            projected_hf=target_hf,
        )

    if target_hf < float(current_hf) * HEALTH_FACTOR_DROP_CAUTION_RATIO:
        return EModeTransitionResult(
            valid=True, warning=WARNING_SIGNIFICANT_DROP, current_hf=current_hf, projected_hf=target_hf
        )

    return EModeTransitionResult(valid=True, warning=None, current_hf=current_hf, projected_hf=target_hf)


def simulate_emode_transition(
    deposits: Iterable[DepositPosition],
    borrows: Iterable[BorrowPosition],
    category: EModeCategory,
    enable: bool,
    min_safe_health_factor: float = SAFE_HEALTH_FACTOR,
) -> EModeTransitionResult:
    """
    Вход в E-Mode (enable=True) или выход из него для текущей позиции.

    Вход: залог и долг должны быть в активах категории, HF в E-Mode
    не ниже минимума. Выход: HF по обычным параметрам резервов не ниже
    минимума; иначе выход отклоняется (позиция держится только за счёт
    повышенного threshold категории).
    """
    deposits = list(deposits)
    borrows = list(borrows)

    normal_hf = calculate_health_factor(deposits, borrows)
    emode_hf = calculate_emode_health_factor(deposits, borrows, category)

    if not enable:
        return validate_emode_transition(emode_hf, normal_hf, min_safe_health_factor)

    eligibility = can_enter_emode((deposit.asset for deposit in deposits), category)
    if not eligibility.can_enter:
        return EModeTransitionResult(
            valid=False, warning=eligibility.reason, current_hf=normal_hf, projected_hf=emode_hf
        )

    if not all(can_borrow_in_emode(borrow.asset, category) for borrow in borrows):
        return EModeTransitionResult(
            valid=False,
            warning=REASON_INELIGIBLE_BORROW.format(label=category.label),
            current_hf=normal_hf,
            projected_hf=emode_hf,
        )

    return validate_emode_transition(normal_hf, emode_hf, min_safe_health_factor)
