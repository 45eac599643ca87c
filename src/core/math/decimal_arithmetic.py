"""
Decimal Arithmetic — Точная арифметика над decimal значениями

Модуль обеспечивает арифметику без потерь двоичного float:
- Единое приведение входов (int, float, Decimal, str) к Decimal
- Деление с явным scale и политикой округления
- Точное умножение и null-safe суммирование
- Нормализация scale (quantize) с выбором RoundingPolicy
- Округление до целого и до шага 0.5 (шкалы рейтингов)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. float конвертируется через кратчайшее десятичное представление (repr):
   0.1 → Decimal("0.1"), а НЕ 0.1000000000000000055511151231257827021181583404541015625
2. Частное округляется ровно один раз (без double rounding)
3. Результат не зависит от decimal.getcontext() вызывающего кода
4. None → NullArgumentError проверяется ДО domain-проверок (InvalidArgumentError)

ВАЖНО: деление 1/3 не имеет конечного десятичного представления,
поэтому scale и политика округления задаются заранее, а не после деления.
"""

import decimal
from decimal import Decimal
from typing import Final, Union

from src.core.contracts.preconditions import (
    InvalidArgumentError,
    RoundingNecessaryError,
    require,
    require_not_none,
)
from src.core.domain.rounding import DEFAULT_ROUNDING, RoundingPolicy

# Допустимые входные типы чисел
NumberLike = Union[int, float, Decimal, str]

# Политика округления: элемент RoundingPolicy или константа decimal ("ROUND_HALF_UP")
RoundingLike = Union[RoundingPolicy, str]

# Защитные цифры при делении (для корректного повторного округления)
_DIVISION_GUARD_DIGITS: Final[int] = 2

# Диапазон Java int для hex-конверсий
_INT32_MIN: Final[int] = -(2**31)
_INT32_MAX: Final[int] = 2**31 - 1
_INT32_MASK: Final[int] = 0xFFFFFFFF


# =============================================================================
# КОНТЕКСТЫ
# =============================================================================


def exact_context() -> decimal.Context:
    """
    Контекст без ограничения точности.

    Сложение, умножение и quantize в нём всегда точны.
    Новый объект на каждый вызов: флаги контекста не разделяются между потоками.
    """
    return decimal.Context(
        prec=decimal.MAX_PREC,
        Emax=decimal.MAX_EMAX,
        Emin=decimal.MIN_EMIN,
    )


def _division_context(dividend: Decimal, divisor: Decimal, scale: int) -> decimal.Context:
    """
    Контекст деления с точностью, достаточной для одного финального округления.

    adjusted(q) <= adjusted(dividend) - adjusted(divisor), поэтому цифр от старшей
    до 10^-scale не больше adjusted(q) + scale + 1. Плюс защитные цифры.

    ROUND_05UP сохраняет признак неточности в последней цифре:
    повторное округление до scale даёт тот же результат, что и точное частное.
    """
    precision = dividend.adjusted() - divisor.adjusted() + scale + 1 + _DIVISION_GUARD_DIGITS
    return decimal.Context(
        prec=max(precision, 1 + _DIVISION_GUARD_DIGITS),
        rounding=decimal.ROUND_05UP,
        Emax=decimal.MAX_EMAX,
        Emin=decimal.MIN_EMIN,
    )


# =============================================================================
# ПРИВЕДЕНИЕ ТИПОВ
# =============================================================================


def to_decimal(value: NumberLike, name: str = "value") -> Decimal:
    """
    Приведение числа к Decimal.

    Единственная точка конверсии входов: все операции модуля вызывают её
    на границе функции.

    Args:
        value: int, float, Decimal или строка с числом
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Конечное Decimal значение

    Raises:
        NullArgumentError: Если value is None
        InvalidArgumentError: Если value — bool, NaN/Inf или нечисловая строка
        TypeError: Если тип не поддерживается

    Examples:
        >>> to_decimal(0.1)
        Decimal('0.1')
        >>> to_decimal("  -0.0000 ")
        Decimal('-0.0000')
        >>> to_decimal(5)
        Decimal('5')
    """
    require_not_none(value, name)

    if isinstance(value, bool):
        raise InvalidArgumentError(f"{name} must be a number, got bool {value!r}")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        # repr даёт кратчайшую строку, однозначно восстанавливающую float
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except decimal.InvalidOperation as e:
            raise InvalidArgumentError(f"{name} is not a number: {value!r}") from e
    else:
        raise TypeError(f"{name} must be int, float, Decimal or str, got {type(value).__name__}")

    require(result.is_finite(), f"{name} must be finite (not NaN/Inf), got {value!r}")
    return result


def to_rounding_policy(rounding: RoundingLike) -> RoundingPolicy:
    """
    Приведение политики округления к RoundingPolicy.

    Raises:
        NullArgumentError: Если rounding is None
        InvalidArgumentError: Если политика неизвестна
    """
    require_not_none(rounding, "rounding")
    try:
        return RoundingPolicy(rounding)
    except ValueError as e:
        raise InvalidArgumentError(f"unknown rounding policy: {rounding!r}") from e


# =============================================================================
# SCALE И ОКРУГЛЕНИЕ
# =============================================================================


def set_scale(value: NumberLike, scale: int, rounding: RoundingLike = DEFAULT_ROUNDING) -> Decimal:
    """
    Установка количества дробных цифр с заданной политикой округления.

    Args:
        value: Число
        scale: Количество цифр после запятой (отрицательное — округление до десятков, сотен...)
        rounding: Политика округления (default: HALF_AWAY_FROM_ZERO)

    Returns:
        Decimal с exponent == -scale. Отрицательный ноль нормализуется в 0.

    Raises:
        NullArgumentError: Если value, scale или rounding is None
        RoundingNecessaryError: Если политика UNNECESSARY и нужно округление

    Examples:
        >>> set_scale(88.028, 2)
        Decimal('88.03')
        >>> set_scale("-2.5", 0)
        Decimal('-3')
        >>> set_scale("1.25", 1, RoundingPolicy.HALF_EVEN)
        Decimal('1.2')
    """
    require_not_none(value, "value")
    require_not_none(scale, "scale")
    require_not_none(rounding, "rounding")

    number = to_decimal(value)
    policy = to_rounding_policy(rounding)

    quantum = Decimal((0, (1,), -scale))
    result = number.quantize(quantum, rounding=policy.decimal_rounding, context=exact_context())

    if policy is RoundingPolicy.UNNECESSARY and result != number:
        raise RoundingNecessaryError(f"rounding necessary to set scale {scale} on {number}")

    if result.is_zero() and result.is_signed():
        result = result.copy_abs()

    return result


def round_to_integer(value: NumberLike, rounding: RoundingLike = DEFAULT_ROUNDING) -> Decimal:
    """
    Округление до целого.

    ВАЖНО: HALF_AWAY_FROM_ZERO отправляет -2.5 в -3 (а не в -2, как floor(x + 0.5)).

    Raises:
        NullArgumentError: Если value или rounding is None

    Examples:
        >>> round_to_integer(0.5)
        Decimal('1')
        >>> round_to_integer(-0.5)
        Decimal('-1')
        >>> round_to_integer(-88.5999)
        Decimal('-89')
    """
    require_not_none(value, "value")
    require_not_none(rounding, "rounding")
    return set_scale(value, 0, rounding)


def round_to_nearest_half_step(value: NumberLike) -> str:
    """
    Округление до ближайшего шага 0.5 (0.0, 0.5, 1.0, 1.5, ...).

    Используется для шкал оценок/рейтингов: round(value * 2) / 2.
    Ничья value * 2 (ровно .5) округляется в сторону +inf: 1.25 → 1.5, -1.25 → -1.0.

    Returns:
        Строка с ровно одной дробной цифрой, всегда оканчивается на ".0" или ".5"

    Raises:
        NullArgumentError: Если value is None

    Examples:
        >>> round_to_nearest_half_step(4.3)
        '4.5'
        >>> round_to_nearest_half_step(4.2)
        '4.0'
    """
    number = to_decimal(value)
    context = exact_context()

    doubled = context.multiply(number, 2)
    shifted = context.add(doubled, Decimal("0.5"))
    steps = int(shifted.to_integral_value(rounding=decimal.ROUND_FLOOR, context=context))

    # steps / 2 == (steps * 5) / 10: одна дробная цифра, 0 или 5
    return str(Decimal(f"{steps * 5}E-1"))


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


def divide(
    dividend: NumberLike,
    divisor: NumberLike,
    scale: int,
    rounding: RoundingLike = DEFAULT_ROUNDING,
) -> Decimal:
    """
    Деление dividend / divisor с округлением до scale цифр.

    Args:
        dividend: Делимое
        divisor: Делитель (не ноль)
        scale: Количество цифр после запятой в результате
        rounding: Политика округления (default: HALF_AWAY_FROM_ZERO)

    Returns:
        Частное, округлённое один раз до scale цифр

    Raises:
        NullArgumentError: Если любой аргумент is None
        InvalidArgumentError: Если divisor == 0 (включая "0.00" и -0)
        RoundingNecessaryError: Если политика UNNECESSARY и частное не помещается в scale

    Examples:
        >>> divide(10, 3, 2)
        Decimal('3.33')
        >>> divide(5, 3, 2)
        Decimal('1.67')
        >>> divide(-5, 2, 0)
        Decimal('-3')
    """
    require_not_none(dividend, "dividend")
    require_not_none(divisor, "divisor")
    require_not_none(scale, "scale")
    require_not_none(rounding, "rounding")

    numerator = to_decimal(dividend, "dividend")
    denominator = to_decimal(divisor, "divisor")
    policy = to_rounding_policy(rounding)

    require(not denominator.is_zero(), "divisor can't be zero!")

    if numerator.is_zero():
        return set_scale(numerator, scale, policy)

    context = _division_context(numerator, denominator, scale)
    quotient = context.divide(numerator, denominator)
    return set_scale(quotient, scale, policy)


def divide_to_integer(
    dividend: NumberLike,
    divisor: NumberLike,
    rounding: RoundingLike = DEFAULT_ROUNDING,
) -> Decimal:
    """
    Деление с округлением до целого (scale = 0).

    Examples:
        >>> divide_to_integer(6, 4)
        Decimal('2')
    """
    return divide(dividend, divisor, 0, rounding)


def multiply(a: NumberLike, b: NumberLike, scale: int | None = None) -> Decimal:
    """
    Произведение a * b.

    Без scale — точное произведение: scale(result) = scale(a) + scale(b).
    Со scale — округление HALF_AWAY_FROM_ZERO до scale цифр.

    Raises:
        NullArgumentError: Если a или b is None

    Examples:
        >>> multiply("1.5", "2.25")
        Decimal('3.375')
        >>> multiply(6.25, 1.17, 5)
        Decimal('7.31250')
    """
    require_not_none(a, "a")
    require_not_none(b, "b")

    product = exact_context().multiply(to_decimal(a, "a"), to_decimal(b, "b"))

    if scale is None:
        return product
    return set_scale(product, scale)


def sum_values(*values: NumberLike | None) -> Decimal | None:
    """
    Null-safe сумма.

    None элементы пропускаются, если есть хотя бы одно число.
    Если чисел нет совсем (пустой вызов или только None) — результат None:
    "нет данных → нет результата", а не ноль.

    Examples:
        >>> sum_values(6, 5)
        Decimal('11')
        >>> sum_values(None, 5)
        Decimal('5')
        >>> sum_values(None, None) is None
        True
    """
    numbers = [to_decimal(v) for v in values if v is not None]
    if not numbers:
        return None

    context = exact_context()
    total = numbers[0]
    for number in numbers[1:]:
        total = context.add(total, number)
    return total


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


def is_equal_to_specific_number(value: NumberLike, target: NumberLike) -> bool:
    """
    Числовое равенство независимо от записи, scale и знака нуля.

    Raises:
        NullArgumentError: Если value или target is None

    Examples:
        >>> is_equal_to_specific_number("-0.0000", "0")
        True
        >>> is_equal_to_specific_number(-0.0001, "-0")
        False
        >>> is_equal_to_specific_number("1.000000", 1)
        True
    """
    require_not_none(value, "value")
    require_not_none(target, "target")
    return to_decimal(value, "value") == to_decimal(target, "target")


# =============================================================================
# HEX
# =============================================================================


def int_to_hex_string(value: int) -> str:
    """
    32-битное целое → hex строка (two's complement для отрицательных).

    Examples:
        >>> int_to_hex_string(255)
        'ff'
        >>> int_to_hex_string(-1)
        'ffffffff'
    """
    require_not_none(value, "value")
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"value must be int, got {type(value).__name__}")
    require(
        _INT32_MIN <= value <= _INT32_MAX,
        f"value must fit in 32-bit signed int, got {value}",
    )
    return format(value & _INT32_MASK, "x")


def hex_string_to_int(text: str) -> int:
    """
    Hex строка со знаком → 32-битное целое.

    Two's complement не разворачивается: "ffffffff" вне диапазона int32,
    поэтому для отрицательных чисел int_to_hex_string и hex_string_to_int
    не взаимно обратны.

    Examples:
        >>> hex_string_to_int("ff")
        255
        >>> hex_string_to_int("-1A")
        -26
    """
    require_not_none(text, "text")
    try:
        value = int(text.strip(), 16)
    except ValueError as e:
        raise InvalidArgumentError(f"not a hex number: {text!r}") from e
    require(
        _INT32_MIN <= value <= _INT32_MAX,
        f"hex value must fit in 32-bit signed int, got {text!r}",
    )
    return value
