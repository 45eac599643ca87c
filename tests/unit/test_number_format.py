"""
Тесты для модуля Number Format

Проверяет:
1. Форматирование по шаблону (дробные цифры, проценты, префиксы, группировка)
2. Однократное округление с выбранной политикой до передачи в Babel
3. Разбор строки обратно в Decimal и round-trip
4. Прогресс current / total и порядок проверок аргументов
"""

import decimal
from decimal import Decimal

import pytest

from src.core.config import reset_settings_cache
from src.core.contracts.preconditions import InvalidArgumentError, NullArgumentError
from src.core.domain.format_pattern import (
    PATTERN_GROUPED_TWO_DECIMAL_POINTS,
    PATTERN_NO_SCALE,
    PATTERN_PERCENT_NO_POINT,
    PATTERN_PERCENT_ONE_POINT,
    PATTERN_PERCENT_TWO_POINT,
    PATTERN_TWO_DECIMAL_POINTS,
    FormatPattern,
)
from src.core.domain.rounding import RoundingPolicy
from src.core.math.decimal_arithmetic import divide
from src.core.math.number_format import (
    PROGRESS_SCALE,
    format_number,
    format_percentage_progress,
    parse_number,
)

# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def clean_settings(monkeypatch):
    """Настройки без переменных окружения, кэш сбрасывается до и после теста"""
    monkeypatch.delenv("NUMUTIL_LOCALE", raising=False)
    monkeypatch.delenv("NUMUTIL_PROGRESS_PATTERN", raising=False)
    reset_settings_cache()
    yield monkeypatch
    reset_settings_cache()


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


@pytest.mark.usefixtures("clean_settings")
class TestFormatNumber:
    """Тесты для format_number"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (88.02, "88.02"),
            (88.020, "88.02"),
            (88.02002, "88.02002"),
            (88, "88"),
            (88.02000005, "88.02000005"),
            (88.02500000, "88.025"),
            (88.0200005, "88.0200005"),
            (88.002, "88.002"),
        ],
    )
    def test_optional_fraction_digits(self, value, expected: str) -> None:
        """"#" в дробной части: лишние нули не выводятся"""
        assert format_number(value, "#######.########") == expected

    def test_literal_prefix_with_zero_padding(self) -> None:
        assert format_number(8, "C00000000") == "C00000008"

    @pytest.mark.parametrize(
        "value,pattern,expected",
        [
            (0, PATTERN_PERCENT_NO_POINT, "0%"),
            (0.24, PATTERN_PERCENT_NO_POINT, "24%"),
            (0.24, PATTERN_PERCENT_TWO_POINT, "24.00%"),
            (1 / 400, PATTERN_PERCENT_TWO_POINT, "0.25%"),
            (Decimal("0.66666667"), PATTERN_PERCENT_ONE_POINT, "66.7%"),
            (Decimal("0.005"), PATTERN_PERCENT_NO_POINT, "1%"),
        ],
    )
    def test_percent(self, value, pattern: str, expected: str) -> None:
        """"%" умножает на 100 и добавляет суффикс"""
        assert format_number(value, pattern) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0.8, "1"),
            (-0.8, "-1"),
            (1.8, "2"),
            (-1.8, "-2"),
            (111111.5, "111112"),
            (111112.5, "111113"),
            (88888888, "88888888"),
        ],
    )
    def test_no_scale_half_away_from_zero(self, value, expected: str) -> None:
        """Ничья округляется от нуля, а не по-банковски"""
        assert format_number(value, PATTERN_NO_SCALE) == expected

    def test_two_decimal_points(self) -> None:
        assert format_number(88.02, PATTERN_TWO_DECIMAL_POINTS) == "88.02"
        assert format_number(88.028, PATTERN_TWO_DECIMAL_POINTS) == "88.03"
        assert format_number(5, PATTERN_TWO_DECIMAL_POINTS) == "5.00"

    def test_grouping(self) -> None:
        assert format_number(1234567.891, PATTERN_GROUPED_TWO_DECIMAL_POINTS) == "1,234,567.89"

    def test_explicit_rounding_policy(self) -> None:
        assert format_number(2.5, PATTERN_NO_SCALE, RoundingPolicy.HALF_EVEN) == "2"
        assert format_number(1.21, "#0.0", RoundingPolicy.CEILING) == "1.3"

    def test_directional_rounding_on_negative(self) -> None:
        """CEILING для -1.29 → -1.2 (а не -1.3, как дало бы округление модуля)"""
        assert format_number(-1.29, "#0.0", RoundingPolicy.CEILING) == "-1.2"
        assert format_number(-1.21, "#0.0", RoundingPolicy.FLOOR) == "-1.3"

    def test_no_negative_zero(self) -> None:
        assert format_number(-0.001, PATTERN_TWO_DECIMAL_POINTS) == "0.00"

    def test_locale(self) -> None:
        assert format_number(1234.5, PATTERN_GROUPED_TWO_DECIMAL_POINTS, locale="de_DE") == "1.234,50"

    def test_more_digits_than_default_context(self) -> None:
        """Значения длиннее 28 значащих цифр выводятся без потери точности"""
        assert format_number(divide(10**30, 3, 2), PATTERN_TWO_DECIMAL_POINTS) == "333333333333333333333333333333.33"
        assert format_number(Decimal("1234567890123456789012345678.9"), PATTERN_PERCENT_NO_POINT) == (
            "123456789012345678901234567890%"
        )

    def test_independent_of_caller_context(self) -> None:
        with decimal.localcontext() as ctx:
            ctx.prec = 3
            ctx.rounding = decimal.ROUND_FLOOR
            assert format_number(Decimal("12345.678"), PATTERN_TWO_DECIMAL_POINTS) == "12345.68"

    def test_accepts_format_pattern_model(self) -> None:
        pattern = FormatPattern(pattern=PATTERN_PERCENT_ONE_POINT)
        assert format_number(0.5, pattern) == "50.0%"

    def test_invalid_pattern(self) -> None:
        with pytest.raises(InvalidArgumentError, match="invalid number pattern"):
            format_number(1, "abc")

    def test_null_arguments(self) -> None:
        with pytest.raises(NullArgumentError, match="value"):
            format_number(None, PATTERN_NO_SCALE)
        with pytest.raises(NullArgumentError, match="pattern"):
            format_number(1, None)
        with pytest.raises(NullArgumentError, match="rounding"):
            format_number(1, PATTERN_NO_SCALE, None)


# =============================================================================
# РАЗБОР
# =============================================================================


@pytest.mark.usefixtures("clean_settings")
class TestParseNumber:
    """Тесты для parse_number"""

    def test_percent(self) -> None:
        assert parse_number("24%", PATTERN_PERCENT_NO_POINT) == Decimal("0.24")
        assert parse_number("66.7%", PATTERN_PERCENT_ONE_POINT) == Decimal("0.667")

    def test_prefix(self) -> None:
        assert parse_number("C00000008", "C00000000") == Decimal(8)

    def test_grouping(self) -> None:
        assert parse_number("1,234,567.89", PATTERN_GROUPED_TWO_DECIMAL_POINTS) == Decimal("1234567.89")

    def test_negative(self) -> None:
        assert parse_number("-1.5", "#0.0") == Decimal("-1.5")
        assert parse_number("-25%", PATTERN_PERCENT_NO_POINT) == Decimal("-0.25")

    def test_locale(self) -> None:
        assert parse_number("1.234,50", PATTERN_GROUPED_TWO_DECIMAL_POINTS, locale="de_DE") == Decimal("1234.50")

    def test_locale_percent(self) -> None:
        """Символ процента берётся из locale"""
        text = format_number(Decimal("0.667"), PATTERN_PERCENT_ONE_POINT, locale="de_DE")
        assert text == "66,7%"
        assert parse_number(text, PATTERN_PERCENT_ONE_POINT, locale="de_DE") == Decimal("0.667")

    def test_more_digits_than_default_context(self) -> None:
        quotient = divide(10**30, 3, 2)
        text = format_number(quotient, PATTERN_TWO_DECIMAL_POINTS)
        assert parse_number(text, PATTERN_TWO_DECIMAL_POINTS) == quotient

        negative = Decimal("-1234567890123456789012345678.9")
        text = format_number(negative, PATTERN_PERCENT_NO_POINT)
        assert text == "-123456789012345678901234567890%"
        assert parse_number(text, PATTERN_PERCENT_NO_POINT) == negative

    def test_missing_suffix(self) -> None:
        with pytest.raises(InvalidArgumentError, match="does not match pattern"):
            parse_number("24", PATTERN_PERCENT_NO_POINT)

    def test_missing_prefix(self) -> None:
        with pytest.raises(InvalidArgumentError, match="does not match pattern"):
            parse_number("X5", "C0")

    def test_not_a_number(self) -> None:
        with pytest.raises(InvalidArgumentError, match="is not a number"):
            parse_number("abc", PATTERN_NO_SCALE)

    def test_null_arguments(self) -> None:
        with pytest.raises(NullArgumentError, match="text"):
            parse_number(None, PATTERN_NO_SCALE)
        with pytest.raises(NullArgumentError, match="pattern"):
            parse_number("1", None)

    @pytest.mark.parametrize(
        "value,pattern,rounded",
        [
            (Decimal("0.66666667"), PATTERN_PERCENT_ONE_POINT, Decimal("0.667")),
            (0.24, PATTERN_PERCENT_TWO_POINT, Decimal("0.24")),
            (88.028, PATTERN_TWO_DECIMAL_POINTS, Decimal("88.03")),
            (-1.8, PATTERN_NO_SCALE, Decimal("-2")),
            (1234567.891, PATTERN_GROUPED_TWO_DECIMAL_POINTS, Decimal("1234567.89")),
            (8, "C00000000", Decimal("8")),
        ],
    )
    def test_round_trip_gives_rounded_value(self, value, pattern: str, rounded: Decimal) -> None:
        """format → parse возвращает округлённое значение, а не исходное"""
        assert parse_number(format_number(value, pattern), pattern) == rounded


# =============================================================================
# ПРОГРЕСС
# =============================================================================


@pytest.mark.usefixtures("clean_settings")
class TestFormatPercentageProgress:
    """Тесты для format_percentage_progress"""

    def test_progress_scale(self) -> None:
        assert PROGRESS_SCALE == 8

    @pytest.mark.parametrize(
        "current,total,pattern,expected",
        [
            (5, 5, PATTERN_PERCENT_NO_POINT, "100%"),
            (5, 5, PATTERN_PERCENT_TWO_POINT, "100.00%"),
            (5, 5, PATTERN_PERCENT_ONE_POINT, "100.0%"),
            (5, 10, PATTERN_PERCENT_NO_POINT, "50%"),
            (5, 10, PATTERN_PERCENT_TWO_POINT, "50.00%"),
            (5, 10, PATTERN_PERCENT_ONE_POINT, "50.0%"),
            (3, 10, PATTERN_PERCENT_ONE_POINT, "30.0%"),
            (1, 3, PATTERN_PERCENT_ONE_POINT, "33.3%"),
            (2, 3, PATTERN_PERCENT_ONE_POINT, "66.7%"),
            (2, 3, PATTERN_PERCENT_NO_POINT, "67%"),
            (1, 3, PATTERN_PERCENT_TWO_POINT, "33.33%"),
        ],
    )
    def test_progress(self, current, total, pattern: str, expected: str) -> None:
        assert format_percentage_progress(current, total, pattern) == expected

    def test_default_pattern(self) -> None:
        assert format_percentage_progress(2, 3) == "67%"

    def test_default_pattern_from_environment(self, clean_settings) -> None:
        clean_settings.setenv("NUMUTIL_PROGRESS_PATTERN", PATTERN_PERCENT_ONE_POINT)
        reset_settings_cache()
        assert format_percentage_progress(2, 3) == "66.7%"

    def test_fractional_operands(self) -> None:
        assert format_percentage_progress(0.5, 2) == "25%"
        assert format_percentage_progress("1.5", "4.5", PATTERN_PERCENT_ONE_POINT) == "33.3%"

    def test_null_current(self) -> None:
        with pytest.raises(NullArgumentError, match="current"):
            format_percentage_progress(None, 5, PATTERN_PERCENT_NO_POINT)

    def test_null_total(self) -> None:
        with pytest.raises(NullArgumentError, match="total"):
            format_percentage_progress(5, None, PATTERN_PERCENT_NO_POINT)

    def test_null_checked_before_domain(self) -> None:
        """None раньше проверки знака"""
        with pytest.raises(NullArgumentError):
            format_percentage_progress(None, -5)
        with pytest.raises(NullArgumentError):
            format_percentage_progress(-5, None)

    @pytest.mark.parametrize(
        "current,total,message",
        [
            (-5, 5, "current can not <=0"),
            (0, 5, "current can not <=0"),
            (5, -5, "total can not <=0"),
            (5, 0, "total can not <=0"),
            (5, 4, "current can not > total"),
            (Decimal("5.01"), 5, "current can not > total"),
        ],
    )
    def test_invalid_operands(self, current, total, message: str) -> None:
        with pytest.raises(InvalidArgumentError, match=message):
            format_percentage_progress(current, total, PATTERN_PERCENT_NO_POINT)
