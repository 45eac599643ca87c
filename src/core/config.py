"""
Config — Настройки форматирования чисел

Значения по умолчанию читаются из переменных окружения (префикс NUMUTIL_).
Переменные окружения имеют приоритет над значениями по умолчанию.

Examples:
    >>> get_settings().LOCALE
    'en_US'
"""

from functools import lru_cache

import structlog
from babel import Locale, UnknownLocaleError
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.domain.format_pattern import PATTERN_PERCENT_NO_POINT, FormatPattern

logger = structlog.get_logger(__name__)


class NumberSettings(BaseSettings):
    """
    Настройки форматирования по умолчанию.

    Обе настройки — только значения по умолчанию: явно переданные
    locale / pattern в функциях форматирования имеют приоритет.
    """

    # Babel locale: разделители и символ процента
    LOCALE: str = "en_US"

    # Шаблон format_percentage_progress, если шаблон не передан
    PROGRESS_PATTERN: str = PATTERN_PERCENT_NO_POINT

    model_config = SettingsConfigDict(
        env_prefix="NUMUTIL_",
        case_sensitive=True,
        frozen=True,
    )

    @field_validator("LOCALE")
    @classmethod
    def validate_locale(cls, v: str) -> str:
        """Locale должен быть известен Babel"""
        try:
            Locale.parse(v)
        except (ValueError, UnknownLocaleError) as e:
            raise ValueError(f"unsupported locale {v!r}: {e}") from e
        return v

    @field_validator("PROGRESS_PATTERN")
    @classmethod
    def validate_progress_pattern(cls, v: str) -> str:
        try:
            return FormatPattern.of(v).pattern
        except ValidationError as e:
            raise ValueError(f"invalid progress pattern {v!r}") from e


@lru_cache(maxsize=1)
def get_settings() -> NumberSettings:
    """
    Кэшированный экземпляр настроек.

    Returns:
        NumberSettings, прочитанные из окружения
    """
    settings = NumberSettings()
    logger.debug(
        "Number settings loaded",
        locale=settings.LOCALE,
        progress_pattern=settings.PROGRESS_PATTERN,
    )
    return settings


def reset_settings_cache() -> None:
    """Сброс кэша: следующий get_settings() перечитает окружение"""
    get_settings.cache_clear()
