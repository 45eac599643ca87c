"""
Contract Validation Module

Проверка предусловий аргументов и типизированные ошибки библиотеки.
"""

from .preconditions import (
    InvalidArgumentError,
    NullArgumentError,
    RoundingNecessaryError,
    require,
    require_not_none,
)

__all__ = [
    # Exceptions
    "NullArgumentError",
    "InvalidArgumentError",
    "RoundingNecessaryError",
    # Functions
    "require_not_none",
    "require",
]
