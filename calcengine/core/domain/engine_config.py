"""
EngineConfig — настройки вычислительного движка

Immutable Pydantic модель. Один экземпляр — снапшот настроек для одного
вычисления: evaluator и TVM solver только читают его. Обновление настроек
создаёт новый экземпляр через валидирующий контракт configure.

Поля принимают как snake_case имена, так и camelCase имена опций
(angleMode, taylorTerms, errorThreshold, initialGuessInterest,
initialGuessPeriods, historyEnabled).
"""

from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


# =============================================================================
# DEFAULTS
# =============================================================================

# Количество членов ряда Тейлора для sin/cos
TAYLOR_TERMS_DEFAULT: Final[int] = 10

# Порог snap-to-zero и критерий остановки Newton-Raphson
# 1e-12 выше разрешения double вблизи 1.0, иначе cos(π/2) ≈ 1e-15 не
# распознаётся как ноль и шаг Newton-Raphson может не опуститься ниже порога
ERROR_THRESHOLD_DEFAULT: Final[float] = 1e-12

# Начальное приближение для поиска ставки за период
INITIAL_GUESS_INTEREST_DEFAULT: Final[float] = 0.05

# Начальное приближение для поиска числа периодов
INITIAL_GUESS_PERIODS_DEFAULT: Final[float] = 10.0


# =============================================================================
# ENUMS
# =============================================================================


class AngleMode(str, Enum):
    """Единицы углов для тригонометрических функций"""

    RADIANS = "radians"
    DEGREES = "degrees"


# =============================================================================
# ENGINE CONFIG MODEL
# =============================================================================


class EngineConfig(BaseModel):
    """
    Снапшот настроек движка.

    Инварианты:
    - taylor_terms >= 1
    - error_threshold > 0 (конечный)
    - initial_guess_interest > 0, initial_guess_periods > 0 (конечные)
    """

    angle_mode: AngleMode = Field(
        AngleMode.RADIANS, description="Радианы или градусы для sin/cos/tan"
    )
    taylor_terms: int = Field(
        TAYLOR_TERMS_DEFAULT, ge=1, description="Число членов ряда Тейлора"
    )
    error_threshold: float = Field(
        ERROR_THRESHOLD_DEFAULT,
        gt=0,
        allow_inf_nan=False,
        description="Порог snap-to-zero и сходимости Newton-Raphson",
    )
    initial_guess_interest: float = Field(
        INITIAL_GUESS_INTEREST_DEFAULT,
        gt=0,
        allow_inf_nan=False,
        description="Начальное приближение ставки за период",
    )
    initial_guess_periods: float = Field(
        INITIAL_GUESS_PERIODS_DEFAULT,
        gt=0,
        allow_inf_nan=False,
        description="Начальное приближение числа периодов",
    )
    history_enabled: bool = Field(False, description="Запись истории вычислений")

    model_config = {
        "frozen": True,
        "extra": "forbid",
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @field_validator("angle_mode", mode="before")
    @classmethod
    def normalize_angle_mode(cls, v: Any) -> Any:
        """Допускаем "Radians"/"DEGREES" и т.п. из presentation-слоя"""
        if isinstance(v, str) and not isinstance(v, AngleMode):
            return v.strip().lower()
        return v

    @property
    def is_radians(self) -> bool:
        return self.angle_mode == AngleMode.RADIANS

    @classmethod
    def option_names(cls) -> dict[str, str]:
        """Отображение имени опции (snake_case и camelCase) → имя поля."""
        names: dict[str, str] = {}
        for field_name, field_info in cls.model_fields.items():
            names[field_name] = field_name
            if field_info.alias:
                names[field_info.alias] = field_name
        return names
