"""
Number Format — Текстовое представление decimal значений по шаблону

Модуль отвечает только за подготовку значения:
- Приведение входа к Decimal (to_decimal)
- Учёт процентного/промилле масштаба шаблона
- Однократное округление до максимального числа дробных цифр шаблона

Сам вывод (группировка, дополнение нулями, префиксы/суффиксы, символ "%")
делегирован Babel: ему передаётся уже округлённое значение, так что
округление Babel (ROUND_HALF_EVEN из decimal контекста) не срабатывает.

Examples:
    >>> format_number(0.24, PATTERN_PERCENT_NO_POINT)
    '24%'
    >>> format_number(8, "C00000000")
    'C00000008'
    >>> format_percentage_progress(2, 3, PATTERN_PERCENT_ONE_POINT)
    '66.7%'
"""

from decimal import Decimal, localcontext
from typing import Final

import structlog
from babel import Locale
from babel.numbers import NumberFormatError, format_decimal, parse_decimal
from pydantic import ValidationError

from src.core.config import get_settings
from src.core.contracts.preconditions import InvalidArgumentError, require, require_not_none
from src.core.domain.format_pattern import FormatPattern
from src.core.domain.rounding import DEFAULT_ROUNDING, RoundingPolicy
from src.core.math.decimal_arithmetic import (
    NumberLike,
    RoundingLike,
    divide,
    exact_context,
    set_scale,
    to_decimal,
)

logger = structlog.get_logger(__name__)

# Внутренний scale отношения current / total до применения шаблона
PROGRESS_SCALE: Final[int] = 8


def _to_pattern(pattern: FormatPattern | str) -> FormatPattern:
    try:
        return FormatPattern.of(pattern)
    except ValidationError as e:
        raise InvalidArgumentError(f"invalid number pattern: {pattern!r}") from e


def _percent_symbol(locale: str) -> str:
    return Locale.parse(locale).number_symbols["latn"]["percentSign"]


def _render_affix(affix: str, locale: str) -> str:
    """Аффикс в том виде, в каком его выводит Babel"""
    if "%" in affix:
        return affix.replace("%", _percent_symbol(locale))
    return affix


def _strip_affixes(text: str, prefix: str, suffix: str) -> str | None:
    if not text.startswith(prefix) or not text.endswith(suffix):
        return None
    body = text[len(prefix):len(text) - len(suffix)]
    return body or None


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


def format_number(
    value: NumberLike,
    pattern: FormatPattern | str,
    rounding: RoundingLike = DEFAULT_ROUNDING,
    locale: str | None = None,
) -> str:
    """
    Форматирование числа по шаблону.

    Args:
        value: Число
        pattern: LDML шаблон ("#0.00", "#0%", "C00000000", "#,##0.00")
        rounding: Политика округления до дробной точности шаблона
                  (default: HALF_AWAY_FROM_ZERO)
        locale: Babel locale (default: NumberSettings.LOCALE)

    Returns:
        Отформатированная строка

    Raises:
        NullArgumentError: Если value, pattern или rounding is None
        InvalidArgumentError: Если шаблон невалиден

    Examples:
        >>> format_number(88.028, "#0.00")
        '88.03'
        >>> format_number(111112.5, "#0")
        '111113'
        >>> format_number(88.020, "#######.########")
        '88.02'
    """
    require_not_none(value, "value")
    require_not_none(pattern, "pattern")
    require_not_none(rounding, "rounding")

    number = to_decimal(value)
    number_pattern = _to_pattern(pattern)

    if number_pattern.is_fixed_point:
        context = exact_context()
        exponent = number_pattern.scale_exponent
        scaled = number.scaleb(exponent, context=context)
        rounded = set_scale(scaled, number_pattern.max_fraction_digits, rounding)
        number = rounded.scaleb(-exponent, context=context)

    # Babel масштабирует и квантует в текущем decimal контексте (28 цифр)
    with localcontext(exact_context()):
        return format_decimal(
            number,
            format=number_pattern.pattern,
            locale=locale or get_settings().LOCALE,
        )


def parse_number(
    text: str,
    pattern: FormatPattern | str,
    locale: str | None = None,
) -> Decimal:
    """
    Разбор строки, отформатированной по шаблону (обратно к format_number).

    Литеральные префикс/суффикс шаблона снимаются, процентный масштаб
    откатывается: parse_number("24%", "#0%") == Decimal("0.24").

    Round-trip: parse_number(format_number(v, p), p) равно округлённому v,
    а не исходному.

    Raises:
        NullArgumentError: Если text или pattern is None
        InvalidArgumentError: Если текст не соответствует шаблону
    """
    require_not_none(text, "text")
    require_not_none(pattern, "pattern")

    number_pattern = _to_pattern(pattern)
    locale = locale or get_settings().LOCALE
    stripped = text.strip()

    pos_prefix, pos_suffix = (_render_affix(a, locale) for a in number_pattern.positive_affixes)
    neg_prefix, neg_suffix = (_render_affix(a, locale) for a in number_pattern.negative_affixes)

    negative = False
    body = None
    if (neg_prefix, neg_suffix) != (pos_prefix, pos_suffix):
        body = _strip_affixes(stripped, neg_prefix, neg_suffix)
        negative = body is not None
    if body is None:
        body = _strip_affixes(stripped, pos_prefix, pos_suffix)
    require(body is not None, f"{text!r} does not match pattern {number_pattern.pattern!r}")

    try:
        with localcontext(exact_context()):
            number = parse_decimal(body, locale=locale)
    except NumberFormatError as e:
        raise InvalidArgumentError(f"{text!r} is not a number for pattern {number_pattern.pattern!r}") from e

    if negative:
        number = number.copy_negate()
    return number.scaleb(-number_pattern.scale_exponent, context=exact_context())


# =============================================================================
# ПРОГРЕСС
# =============================================================================


def format_percentage_progress(
    current: NumberLike,
    total: NumberLike,
    pattern: FormatPattern | str | None = None,
    locale: str | None = None,
) -> str:
    """
    Прогресс current / total в виде процентной строки.

    Отношение считается с внутренним scale 8 (HALF_AWAY_FROM_ZERO),
    затем форматируется шаблоном.

    Args:
        current: Текущее количество (> 0)
        total: Общее количество (> 0, >= current)
        pattern: Шаблон (default: NumberSettings.PROGRESS_PATTERN, "#0%")
        locale: Babel locale (default: NumberSettings.LOCALE)

    Returns:
        "67%", "66.7%", "100%"...

    Raises:
        NullArgumentError: Если current или total is None
        InvalidArgumentError: Если current <= 0, total <= 0 или current > total

    Examples:
        >>> format_percentage_progress(2, 3)
        '67%'
        >>> format_percentage_progress(5, 5, "#0.00%")
        '100.00%'
    """
    require_not_none(current, "current")
    require_not_none(total, "total")

    numerator = to_decimal(current, "current")
    denominator = to_decimal(total, "total")

    require(numerator > 0, "current can not <=0")
    require(denominator > 0, "total can not <=0")
    require(numerator <= denominator, "current can not > total")

    ratio = divide(numerator, denominator, PROGRESS_SCALE, RoundingPolicy.HALF_AWAY_FROM_ZERO)
    logger.debug("Progress ratio computed", current=str(numerator), total=str(denominator), ratio=str(ratio))

    return format_number(
        ratio,
        pattern if pattern is not None else get_settings().PROGRESS_PATTERN,
        locale=locale,
    )
