"""
Numerical Safeguards — численные примитивы движка

Модуль содержит общие численные утилиты, на которых построены
тригонометрия и TVM solver:
- Факториал для целых показателей рядов Тейлора
- Редукция угла в диапазон [-π, π]
- Snap-to-zero: единая политика error threshold для всего движка
- Степень с проверкой области определения (checked_power)
- Проверка конечности float

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Редукция угла всегда завершается за ограниченное число шагов
2. Значения с |x| < threshold становятся ровно 0.0
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

from calcengine.core.errors import DomainError, EngineArithmeticError

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# π с полной double точностью (используется токенизатором для константы pi)
PI: Final[float] = math.pi

# Полный оборот в радианах
TWO_PI: Final[float] = 2.0 * math.pi

# Множитель перевода градусов в радианы
DEG_TO_RAD: Final[float] = math.pi / 180.0


# =============================================================================
# ФАКТОРИАЛ
# =============================================================================


def factorial(num: int) -> float:
    """
    Факториал как float для знаменателей ряда Тейлора.

    Args:
        num: Целый показатель (для num <= 1 результат 1.0)

    Returns:
        num! в виде float

    Examples:
        >>> factorial(0)
        1.0
        >>> factorial(5)
        120.0
        >>> factorial(-3)
        1.0
    """
    if num <= 1:
        return 1.0

    result = 1.0
    for index in range(2, num + 1):
        result *= index
    return result


# =============================================================================
# РЕДУКЦИЯ УГЛА
# =============================================================================


def reduce_angle(angle: float) -> float:
    """
    Приведение угла (радианы) в диапазон [-π, π].

    Угол сдвигается на 2π, пока не попадёт в диапазон. Для больших углов
    сначала применяется fmod, иначе вычитание 2π перестаёт менять значение
    и цикл не завершается.

    Args:
        angle: Угол в радианах (конечный)

    Returns:
        Эквивалентный угол в [-π, π]

    Raises:
        ValueError: если angle NaN/Inf

    Examples:
        >>> reduce_angle(0.0)
        0.0
        >>> abs(reduce_angle(5.0) - (5.0 - 2 * math.pi)) < 1e-12
        True
        >>> abs(reduce_angle(-3 * math.pi / 2) - math.pi / 2) < 1e-12
        True
    """
    if not is_valid_float(angle):
        raise ValueError(f"angle must be a valid float (not NaN/Inf), got {angle}")

    reduced = angle
    if abs(reduced) > 2.0 * TWO_PI:
        reduced = math.fmod(reduced, TWO_PI)

    while reduced > PI or reduced < -PI:
        if reduced > PI:
            reduced -= TWO_PI
        else:
            reduced += TWO_PI

    return reduced


def degrees_to_radians(angle: float) -> float:
    """Перевод градусов в радианы."""
    return angle * DEG_TO_RAD


# =============================================================================
# SNAP-TO-ZERO
# =============================================================================


def snap_to_zero(value: float, threshold: float) -> float:
    """
    Замена значений, близких к нулю, на точный 0.0.

    Единая политика error threshold: применяется к результату выражения,
    к sin/cos и ко всем TVM формулам.

    Args:
        value: Исходное значение
        threshold: Порог (> 0); |value| < threshold → 0.0

    Returns:
        0.0 если |value| < threshold, иначе value

    Examples:
        >>> snap_to_zero(1e-15, 1e-12)
        0.0
        >>> snap_to_zero(-1e-15, 1e-12)
        0.0
        >>> snap_to_zero(0.5, 1e-12)
        0.5
    """
    if abs(value) < threshold:
        return 0.0
    return value


def is_near_zero(value: float, threshold: float) -> bool:
    """Проверка |value| < threshold (тот же критерий, что и snap_to_zero)."""
    return abs(value) < threshold


# =============================================================================
# СТЕПЕНЬ
# =============================================================================


def checked_power(base: float, exponent: float) -> float:
    """
    math.pow с переводом ошибок в ошибки движка.

    Семантика math.pow (C pow): отрицательные и дробные показатели
    допустимы, но отрицательное основание с дробным показателем и ноль
    в отрицательной степени не определены.

    Args:
        base: Основание
        exponent: Показатель

    Returns:
        base ** exponent (всегда float, никогда complex)

    Raises:
        DomainError: степень не определена
        EngineArithmeticError: переполнение

    Examples:
        >>> checked_power(2.0, -1.0)
        0.5
        >>> checked_power(-8.0, 3.0)
        -512.0
    """
    try:
        return math.pow(base, exponent)
    except ValueError as exc:
        raise DomainError(f"Power undefined for {base} ^ {exponent}") from exc
    except OverflowError as exc:
        raise EngineArithmeticError(f"Power overflow for {base} ^ {exponent}") from exc


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное
    """
    return math.isfinite(value)
