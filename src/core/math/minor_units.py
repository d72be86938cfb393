"""
Minor Units — целочисленная денежная арифметика

Все суммы в ledger хранятся и считаются в minor units (центы, копейки)
как int. Float никогда не используется: zero-sum инвариант сессии должен
выполняться точно, а не с epsilon-допуском.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. bool и float не принимаются как суммы (bool — подкласс int в Python)
2. Конверсия major → minor units точная; дробный остаток → ValueError, не округление
3. Все операции детерминированы и воспроизводимы
"""

from decimal import Decimal, InvalidOperation
from typing import Final, Union

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Количество знаков дробной части у валюты по умолчанию (USD, EUR)
DEFAULT_CURRENCY_EXPONENT: Final[int] = 2

# Символ валюты для отображения по умолчанию
DEFAULT_CURRENCY_SYMBOL: Final[str] = "$"


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_minor_units(value: object) -> bool:
    """
    Проверка, что значение — допустимая сумма в minor units.

    Returns:
        True для int (но не bool), False иначе
    """
    return isinstance(value, int) and not isinstance(value, bool)


def validate_minor_units(value: object, name: str, allow_negative: bool = False) -> int:
    """
    Валидация суммы в minor units.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        allow_negative: Разрешить отрицательные значения (для net-позиций)

    Returns:
        value без изменений

    Raises:
        ValueError: Если value не int или отрицательное (при allow_negative=False)
    """
    if not is_minor_units(value):
        raise ValueError(
            f"{name} must be an integer amount of minor units, got {type(value).__name__} {value!r}"
        )

    if not allow_negative and value < 0:  # type: ignore[operator]
        raise ValueError(f"{name} must be non-negative, got {value}")

    return value  # type: ignore[return-value]


# =============================================================================
# КОНВЕРСИЯ
# =============================================================================


def to_minor_units(
    value: Union[int, str, Decimal],
    exponent: int = DEFAULT_CURRENCY_EXPONENT,
) -> int:
    """
    Конверсия major units → minor units без округления.

    Args:
        value: Сумма в major units ("12.50", Decimal("12.5"), 12)
        exponent: Количество знаков дробной части валюты

    Returns:
        Сумма в minor units (int)

    Raises:
        ValueError: float на входе, не-число, или лишние дробные знаки

    Examples:
        >>> to_minor_units("12.50")
        1250
        >>> to_minor_units(3)
        300
        >>> to_minor_units("0.005")  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        ValueError: ...
    """
    if exponent < 0:
        raise ValueError(f"exponent must be non-negative, got {exponent}")

    if isinstance(value, (bool, float)):
        raise ValueError(
            f"Monetary value must be int, str or Decimal, got {type(value).__name__} {value!r}"
        )

    try:
        amount = Decimal(value) if not isinstance(value, Decimal) else value
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Not a monetary value: {value!r}") from e

    if not amount.is_finite():
        raise ValueError(f"Monetary value must be finite, got {value!r}")

    scaled = amount.scaleb(exponent)
    if scaled != scaled.to_integral_value():
        raise ValueError(
            f"{value!r} has more than {exponent} fractional digits and cannot be "
            f"represented exactly in minor units"
        )

    return int(scaled)


def minor_units_to_display(
    amount: int,
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
    exponent: int = DEFAULT_CURRENCY_EXPONENT,
) -> str:
    """
    Форматирование minor units для отображения: 6500 -> '$65.00', -1200 -> '-$12.00'.
    """
    validate_minor_units(amount, "amount", allow_negative=True)

    sign = "-" if amount < 0 else ""
    abs_amount = -amount if amount < 0 else amount

    if exponent == 0:
        return f"{sign}{symbol}{abs_amount:,}"

    unit = 10 ** exponent
    return f"{sign}{symbol}{abs_amount // unit:,}.{abs_amount % unit:0{exponent}d}"
