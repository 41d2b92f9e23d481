"""
Trigonometry — sin/cos/tan через усечённый ряд Тейлора

Модуль вычисляет тригонометрические функции без math.sin/math.cos:
- Перевод градусов в радианы (AngleMode.DEGREES)
- Редукция угла в [-π, π]
- Сумма N членов ряда Тейлора (N = taylor_terms)
- Snap-to-zero результатов с |x| < error_threshold

ФОРМУЛЫ:
    sin θ ≈ Σ_{k=0}^{N-1} (-1)^k θ^(2k+1) / (2k+1)!
    cos θ ≈ Σ_{k=0}^{N-1} (-1)^k θ^(2k) / (2k)!
    tan θ = sin θ / cos θ,  |cos θ| < threshold → DomainError
"""

from calcengine.core.domain.engine_config import (
    ERROR_THRESHOLD_DEFAULT,
    TAYLOR_TERMS_DEFAULT,
    AngleMode,
)
from calcengine.core.errors import DomainError
from calcengine.core.math.numerical_safeguards import (
    degrees_to_radians,
    factorial,
    is_near_zero,
    is_valid_float,
    reduce_angle,
    snap_to_zero,
)


def _prepare_angle(angle: float, angle_mode: AngleMode) -> float:
    """Перевод в радианы и редукция в [-π, π]."""
    if not is_valid_float(angle):
        raise DomainError(f"Trigonometric argument must be finite, got {angle}")

    radians = angle if angle_mode == AngleMode.RADIANS else degrees_to_radians(angle)
    return reduce_angle(radians)


def _taylor_sum(theta: float, terms: int, offset: int) -> float:
    """
    Сумма ряда Σ (-1)^k θ^(2k+offset) / (2k+offset)!.

    offset=1 → sin, offset=0 → cos.

    Член e = член (e-2) · (-θ² / ((e-1)·e)); θ^e и e! отдельно не
    вычисляются, при любом terms члены конечны.
    """
    term = theta**offset / factorial(offset)
    result = term
    theta_squared = theta * theta

    for index in range(1, terms):
        exponent = 2 * index + offset
        term *= -theta_squared / ((exponent - 1) * exponent)
        # Члены после underflow нулевые
        if term == 0.0:
            break
        result += term
    return result


def taylor_sin(
    angle: float,
    terms: int = TAYLOR_TERMS_DEFAULT,
    threshold: float = ERROR_THRESHOLD_DEFAULT,
    angle_mode: AngleMode = AngleMode.RADIANS,
) -> float:
    """
    Синус через ряд Тейлора.

    Args:
        angle: Угол (единицы задаёт angle_mode)
        terms: Число членов ряда (>= 1)
        threshold: Порог snap-to-zero
        angle_mode: RADIANS или DEGREES

    Returns:
        sin(angle), значения с |x| < threshold → 0.0

    Raises:
        DomainError: если angle NaN/Inf

    Examples:
        >>> taylor_sin(0.0)
        0.0
        >>> abs(taylor_sin(30.0, angle_mode=AngleMode.DEGREES) - 0.5) < 1e-12
        True
    """
    theta = _prepare_angle(angle, angle_mode)
    return snap_to_zero(_taylor_sum(theta, terms, offset=1), threshold)


def taylor_cos(
    angle: float,
    terms: int = TAYLOR_TERMS_DEFAULT,
    threshold: float = ERROR_THRESHOLD_DEFAULT,
    angle_mode: AngleMode = AngleMode.RADIANS,
) -> float:
    """
    Косинус через ряд Тейлора.

    Args:
        angle: Угол (единицы задаёт angle_mode)
        terms: Число членов ряда (>= 1)
        threshold: Порог snap-to-zero
        angle_mode: RADIANS или DEGREES

    Returns:
        cos(angle), значения с |x| < threshold → 0.0

    Raises:
        DomainError: если angle NaN/Inf

    Examples:
        >>> taylor_cos(0.0)
        1.0
    """
    theta = _prepare_angle(angle, angle_mode)
    return snap_to_zero(_taylor_sum(theta, terms, offset=0), threshold)


def taylor_tan(
    angle: float,
    terms: int = TAYLOR_TERMS_DEFAULT,
    threshold: float = ERROR_THRESHOLD_DEFAULT,
    angle_mode: AngleMode = AngleMode.RADIANS,
) -> float:
    """
    Тангенс как sin/cos.

    При |cos| < threshold тангенс не определён: вместо огромного конечного
    значения выбрасывается DomainError.

    Raises:
        DomainError: если cos(angle) ≈ 0 или angle NaN/Inf
    """
    cos_value = taylor_cos(angle, terms, threshold, angle_mode)
    if is_near_zero(cos_value, threshold):
        raise DomainError(f"Tangent undefined at this angle: {angle}")

    return taylor_sin(angle, terms, threshold, angle_mode) / cos_value
