"""
RoundingPolicy — Политики округления decimal значений

Восемь стратегий сокращения количества дробных цифр:

| Политика            | decimal          | 2.5 | -2.5 | 1.21 (scale 1) |
|---------------------|------------------|-----|------|----------------|
| AWAY_FROM_ZERO      | ROUND_UP         | 3   | -3   | 1.3            |
| TOWARD_ZERO         | ROUND_DOWN       | 2   | -2   | 1.2            |
| CEILING             | ROUND_CEILING    | 3   | -2   | 1.3            |
| FLOOR               | ROUND_FLOOR      | 2   | -3   | 1.2            |
| HALF_AWAY_FROM_ZERO | ROUND_HALF_UP    | 3   | -3   | 1.2            |
| HALF_TOWARD_ZERO    | ROUND_HALF_DOWN  | 2   | -2   | 1.2            |
| HALF_EVEN           | ROUND_HALF_EVEN  | 2   | -2   | 1.2            |
| UNNECESSARY         | —                | ошибка, если нужно округление  |

ВАЖНО: HALF_AWAY_FROM_ZERO — "школьное" округление, -2.5 → -3.
Наивное round(x + 0.5) даёт -2.5 → -2 (tie к +inf), это НЕ то же самое.

HALF_EVEN (банковское округление): 1.15 → 1.2, 1.25 → 1.2.
"""

import decimal
from enum import Enum
from typing import Final


class RoundingPolicy(str, Enum):
    """
    Политика округления.

    Значение элемента — имя соответствующей константы модуля decimal,
    поэтому RoundingPolicy(decimal.ROUND_HALF_UP) тоже работает.
    """

    AWAY_FROM_ZERO = decimal.ROUND_UP
    TOWARD_ZERO = decimal.ROUND_DOWN
    CEILING = decimal.ROUND_CEILING
    FLOOR = decimal.ROUND_FLOOR
    HALF_AWAY_FROM_ZERO = decimal.ROUND_HALF_UP
    HALF_TOWARD_ZERO = decimal.ROUND_HALF_DOWN
    HALF_EVEN = decimal.ROUND_HALF_EVEN
    UNNECESSARY = "ROUND_UNNECESSARY"

    @property
    def decimal_rounding(self) -> str:
        """
        Константа decimal для quantize.

        UNNECESSARY отображается на ROUND_DOWN: результат затем сверяется
        с исходным значением (см. set_scale).
        """
        if self is RoundingPolicy.UNNECESSARY:
            return decimal.ROUND_DOWN
        return self.value


# Политика по умолчанию для всех операций
DEFAULT_ROUNDING: Final[RoundingPolicy] = RoundingPolicy.HALF_AWAY_FROM_ZERO
