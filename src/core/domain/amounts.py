"""
Amounts — граница конверсии денежных сумм

Данные резервов приходят из JSON (RPC, indexer) как десятичные строки
или числа. Здесь они один раз превращаются в проверенный float;
математические функции внутри пакета работают только с float.

Суммы уже должны быть в человеческих единицах (не raw base units):
масштабирование по decimals — ответственность вызывающего кода.
"""

import math
from decimal import Decimal
from typing import Union

Amount = Union[str, int, float, Decimal]


class MalformedAmountError(ValueError):
    """Сумма не парсится, NaN/Inf или отрицательна там, где это запрещено."""


def to_amount(value: Amount, name: str, allow_negative: bool = False) -> float:
    """
    Конверсия строки/числа в конечный float.

    Args:
        value: Десятичная строка ("1250.5") или число
        name: Имя параметра (для сообщения об ошибке)
        allow_negative: Разрешить отрицательные значения (дельты симуляции)

    Returns:
        Конечный float

    Raises:
        MalformedAmountError: Пустая/непарсируемая строка, неподдерживаемый тип,
            NaN/Inf, отрицательное значение при allow_negative=False

    Examples:
        >>> to_amount("1250.5", "total_borrowed")
        1250.5
        >>> to_amount(3, "total_cash_available")
        3.0
    """
    # bool — подкласс int, но суммой не является
    if isinstance(value, bool):
        raise MalformedAmountError(f"{name} must be a number or decimal string, got {value!r}")

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise MalformedAmountError(f"{name} is an empty string")
        try:
            number = float(text)
        except ValueError as e:
            raise MalformedAmountError(f"{name} is not a decimal number: {value!r}") from e
    elif isinstance(value, (int, float, Decimal)):
        try:
            number = float(value)
        except OverflowError as e:
            raise MalformedAmountError(f"{name} is out of float range: {value!r}") from e
    else:
        raise MalformedAmountError(
            f"{name} must be a number or decimal string, got {type(value).__name__}"
        )

    if not math.isfinite(number):
        raise MalformedAmountError(f"{name} must be finite (not NaN/Inf), got {value!r}")

    if number < 0 and not allow_negative:
        raise MalformedAmountError(f"{name} must be non-negative, got {value!r}")

    return number
