"""
Preconditions — Проверка аргументов и таксономия ошибок

Двухуровневая таксономия ошибок для всех арифметических операций:
- NullArgumentError: обязательный аргумент отсутствует (None)
- InvalidArgumentError: аргумент есть, но нарушает domain-условие
  (деление на ноль, неположительный прогресс, current > total)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Проверка на None всегда выполняется ДО domain-проверок
2. Ошибки пробрасываются сразу, без retry и без fallback значений
3. Модуль ничего не логирует: обработка ошибок — ответственность вызывающего кода
"""

from typing import Any, TypeVar

T = TypeVar("T")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class NullArgumentError(TypeError):
    """
    Обязательный аргумент равен None.

    Наследуется от TypeError: None не является допустимым числом.
    """


class InvalidArgumentError(ValueError):
    """
    Аргумент присутствует, но нарушает domain-условие операции.
    """


class RoundingNecessaryError(InvalidArgumentError):
    """
    Политика UNNECESSARY запрещает округление, но значение нельзя
    представить с требуемым scale без потери цифр.
    """


# =============================================================================
# GUARDS
# =============================================================================


def require_not_none(value: T | None, name: str) -> T:
    """
    Проверка, что обязательный аргумент передан.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        NullArgumentError: Если value is None

    Examples:
        >>> require_not_none(5, "total")
        5
        >>> require_not_none(None, "total")
        Traceback (most recent call last):
        ...
        NullArgumentError: total can't be null!
    """
    if value is None:
        raise NullArgumentError(f"{name} can't be null!")
    return value


def require(condition: Any, message: str) -> None:
    """
    Проверка domain-условия.

    Args:
        condition: Условие (приводится к bool)
        message: Сообщение об ошибке

    Raises:
        InvalidArgumentError: Если условие ложно
    """
    if not condition:
        raise InvalidArgumentError(message)
