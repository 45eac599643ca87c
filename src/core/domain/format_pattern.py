"""
FormatPattern — Шаблон текстового представления числа

Immutable Pydantic модель поверх LDML number pattern (диалект java.text.DecimalFormat):
- "0" — обязательная цифра, "#" — необязательная цифра
- "." — разделитель дробной части, "," — группировка разрядов
- "%" / "‰" — умножение на 100 / 1000 и суффикс
- всё до/после числовой части — литеральный префикс/суффикс ("C00000000")

Разбор шаблона делегирован Babel (babel.numbers.parse_pattern).
"""

from functools import lru_cache
from typing import Final

from babel.numbers import NumberPattern as BabelNumberPattern
from babel.numbers import parse_pattern
from pydantic import BaseModel, Field, field_validator

# =============================================================================
# ПРЕДОПРЕДЕЛЁННЫЕ ШАБЛОНЫ
# =============================================================================

# Без дробной части: 1.8 → "2", -0.8 → "-1"
PATTERN_NO_SCALE: Final[str] = "#0"

# Два знака после запятой: 88.028 → "88.03"
PATTERN_TWO_DECIMAL_POINTS: Final[str] = "#0.00"

# Два знака с группировкой: 1234567.891 → "1,234,567.89"
PATTERN_GROUPED_TWO_DECIMAL_POINTS: Final[str] = "#,##0.00"

# Процент без дробной части: 0.24 → "24%"
PATTERN_PERCENT_NO_POINT: Final[str] = "#0%"

# Процент с одним знаком: 2/3 → "66.7%"
PATTERN_PERCENT_ONE_POINT: Final[str] = "#0.0%"

# Процент с двумя знаками: 0.24 → "24.00%"
PATTERN_PERCENT_TWO_POINT: Final[str] = "#0.00%"

# Символы числовой части шаблона
_DIGIT_PLACEHOLDERS: Final[str] = "0#@"


@lru_cache(maxsize=256)
def _parse(pattern: str) -> BabelNumberPattern:
    return parse_pattern(pattern)


class FormatPattern(BaseModel):
    """
    Шаблон форматирования числа.

    Examples:
        >>> FormatPattern(pattern="#0.0%").max_fraction_digits
        1
        >>> FormatPattern(pattern="#0.0%").scale_exponent
        2
    """

    pattern: str = Field(..., min_length=1, description="LDML number pattern")

    model_config = {"frozen": True}

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Шаблон должен содержать числовую часть и разбираться Babel"""
        if not any(ch in v for ch in _DIGIT_PLACEHOLDERS):
            raise ValueError(f"pattern has no digit placeholders: {v!r}")
        try:
            _parse(v)
        except ValueError as e:
            raise ValueError(f"invalid number pattern {v!r}: {e}") from e
        return v

    @classmethod
    def of(cls, pattern: "FormatPattern | str") -> "FormatPattern":
        """Приведение строки или готового шаблона к FormatPattern"""
        if isinstance(pattern, FormatPattern):
            return pattern
        return cls(pattern=pattern)

    @property
    def parsed(self) -> BabelNumberPattern:
        """Разобранный Babel шаблон"""
        return _parse(self.pattern)

    @property
    def min_fraction_digits(self) -> int:
        return self.parsed.frac_prec[0]

    @property
    def max_fraction_digits(self) -> int:
        return self.parsed.frac_prec[1]

    @property
    def positive_affixes(self) -> tuple[str, str]:
        """(prefix, suffix) для неотрицательных чисел"""
        return self.parsed.prefix[0], self.parsed.suffix[0]

    @property
    def negative_affixes(self) -> tuple[str, str]:
        """(prefix, suffix) для отрицательных чисел"""
        return self.parsed.prefix[1], self.parsed.suffix[1]

    @property
    def scale_exponent(self) -> int:
        """
        Степень десяти, на которую умножается значение перед выводом.

        Returns:
            2 для "%", 3 для "‰", иначе 0
        """
        affixes = "".join(self.positive_affixes + self.negative_affixes)
        if "%" in affixes:
            return 2
        if "‰" in affixes:
            return 3
        return 0

    @property
    def is_percent(self) -> bool:
        return self.scale_exponent == 2

    @property
    def is_fixed_point(self) -> bool:
        """
        Шаблон без significant digits ("@") и экспоненты ("E").

        Только для таких шаблонов дробная точность задаётся frac_prec.
        """
        return "@" not in self.pattern and self.parsed.exp_prec is None

    def __str__(self) -> str:
        return self.pattern
