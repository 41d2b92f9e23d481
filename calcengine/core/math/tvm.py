"""
TVM — Time Value of Money solver

Модуль решает стандартное уравнение аннуитета относительно одной из
переменных:
- pv  — present value
- fv  — future value
- pmt — платёж за период
- i   — ставка за период (0.05 = 5%)
- n   — число периодов

Знаковая конвенция: денежные потоки "к нам" и "от нас" имеют разные знаки,
поэтому FV(pv=-1000, pmt=0, i=0.1, n=1) = 1100.

ФОРМУЛЫ:
    FV  = -pv·(1+i)^n - pmt·((1+i)^n - 1)/i          (i == 0: -(pv + pmt·n))
    PV  = -fv/(1+i)^n - pmt·(1 - (1+i)^-n)/i         (i == 0: -(fv + pmt·n))
    PMT = (-pv·i - fv·i/(1+i)^n) / (1 - (1+i)^-n)    (i > 0, n > 0)

    i и n не выражаются в замкнутой форме: Newton-Raphson по невязке
    residual = -pv·(1+i)^n - pmt·((1+i)^n - 1)/i - fv

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все пять функций применяют snap-to-zero с общим error threshold
2. Newton-Raphson ограничен MAX_ITERATIONS, превышение → ConvergenceError
3. Выход итерации из домена (1+i <= 0, переполнение, нулевая производная)
   → ConvergenceError, а не NaN или complex
"""

import math
from typing import Callable, Final

import structlog

from calcengine.core.domain.engine_config import (
    ERROR_THRESHOLD_DEFAULT,
    INITIAL_GUESS_INTEREST_DEFAULT,
    INITIAL_GUESS_PERIODS_DEFAULT,
)
from calcengine.core.errors import (
    ConvergenceError,
    DomainError,
    EngineArithmeticError,
)
from calcengine.core.math.numerical_safeguards import (
    checked_power,
    is_valid_float,
    snap_to_zero,
)

logger = structlog.get_logger(__name__)

# Жёсткий лимит итераций Newton-Raphson
MAX_ITERATIONS: Final[int] = 1000


# =============================================================================
# HELPERS
# =============================================================================


def _validate_inputs(**values: float) -> None:
    for name, value in values.items():
        if not is_valid_float(value):
            raise DomainError(f"{name} must be a finite number, got {value}")


def _validate_rate_floor(i: float) -> None:
    # (1+i) участвует в знаменателе и под дробной степенью
    if i <= -1:
        raise DomainError(f"Interest rate must be greater than -1, got {i}")


# =============================================================================
# NEWTON-RAPHSON
# =============================================================================


def newton_raphson(
    func: Callable[[float], float],
    derivative: Callable[[float], float],
    initial_guess: float,
    threshold: float = ERROR_THRESHOLD_DEFAULT,
    max_iterations: int = MAX_ITERATIONS,
    label: str = "root",
) -> float:
    """
    Поиск корня func методом Newton-Raphson.

    Итерация останавливается, когда |шаг| < threshold.

    Args:
        func: Функция невязки
        derivative: Производная func
        initial_guess: Начальное приближение
        threshold: Порог сходимости по величине шага
        max_iterations: Лимит итераций
        label: Имя искомой величины (для сообщений об ошибках)

    Returns:
        Найденный корень

    Raises:
        ConvergenceError: лимит итераций исчерпан, нулевая производная или
            итерация покинула область определения

    Examples:
        >>> abs(newton_raphson(lambda x: x * x - 2, lambda x: 2 * x, 1.0) - 2 ** 0.5) < 1e-12
        True
    """
    guess = initial_guess

    for iteration in range(1, max_iterations + 1):
        try:
            value = func(guess)
            slope = derivative(guess)
        except (EngineArithmeticError, ZeroDivisionError) as exc:
            raise ConvergenceError(
                f"{label} calculation left the numeric domain at guess={guess}: {exc}"
            ) from exc

        if not is_valid_float(value) or not is_valid_float(slope):
            raise ConvergenceError(
                f"{label} calculation produced a non-finite value at guess={guess}"
            )
        if slope == 0:
            raise ConvergenceError(
                f"{label} calculation failed: zero derivative at guess={guess}"
            )

        new_guess = guess - value / slope
        step = new_guess - guess
        guess = new_guess

        if abs(step) < threshold:
            logger.debug(
                "newton_raphson_converged",
                label=label,
                iterations=iteration,
                root=guess,
            )
            return guess

    raise ConvergenceError(
        f"{label} calculation did not converge after {max_iterations} iterations"
    )


# =============================================================================
# CLOSED FORMS
# =============================================================================


def calculate_fv(
    pv: float,
    pmt: float,
    i: float,
    n: float,
    threshold: float = ERROR_THRESHOLD_DEFAULT,
) -> float:
    """
    Future value.

    Args:
        pv: Present value
        pmt: Платёж за период
        i: Ставка за период
        n: Число периодов
        threshold: Порог snap-to-zero

    Returns:
        FV; при i == 0 вырождается в -(pv + pmt·n)

    Raises:
        DomainError: нечисловые входы или i <= -1

    Examples:
        >>> calculate_fv(100, 10, 0, 5)
        -150.0
        >>> round(calculate_fv(-1000, 0, 0.1, 1), 9)
        1100.0
    """
    _validate_inputs(pv=pv, pmt=pmt, i=i, n=n)

    if i == 0:
        return snap_to_zero(-(pv + pmt * n), threshold)

    _validate_rate_floor(i)
    growth = checked_power(1 + i, n)
    result = -pv * growth - pmt * ((growth - 1) / i)
    return snap_to_zero(result, threshold)


def calculate_pv(
    fv: float,
    pmt: float,
    i: float,
    n: float,
    threshold: float = ERROR_THRESHOLD_DEFAULT,
) -> float:
    """
    Present value. Алгебраически обратна calculate_fv при тех же pmt, i, n.

    Returns:
        PV; при i == 0 вырождается в -(fv + pmt·n)

    Raises:
        DomainError: нечисловые входы или i <= -1

    Examples:
        >>> calculate_pv(-150, 10, 0, 5)
        100.0
    """
    _validate_inputs(fv=fv, pmt=pmt, i=i, n=n)

    if i == 0:
        return snap_to_zero(-(fv + pmt * n), threshold)

    _validate_rate_floor(i)
    growth = checked_power(1 + i, n)
    if growth == 0:
        raise EngineArithmeticError(f"Growth factor underflow for i={i}, n={n}")
    result = -(fv / growth) - pmt * ((1 - checked_power(1 + i, -n)) / i)
    return snap_to_zero(result, threshold)


def calculate_pmt(
    pv: float,
    fv: float,
    i: float,
    n: float,
    threshold: float = ERROR_THRESHOLD_DEFAULT,
) -> float:
    """
    Платёж за период.

    Raises:
        DomainError: если i <= 0 или n <= 0 (замкнутой формы нет)

    Examples:
        >>> round(calculate_pmt(1000, 0, 0.05, 10), 6)
        -129.504575
    """
    _validate_inputs(pv=pv, fv=fv, i=i, n=n)

    if i <= 0 or n <= 0:
        raise DomainError("Interest rate and number of periods must be greater than zero.")

    discount = checked_power(1 + i, -n)
    if discount == 1:
        raise EngineArithmeticError(f"Annuity factor vanishes for i={i}, n={n}")
    result = (-pv * i - (fv * i) / checked_power(1 + i, n)) / (1 - discount)
    return snap_to_zero(result, threshold)


# =============================================================================
# ITERATIVE SOLVERS
# =============================================================================


def calculate_interest(
    pv: float,
    fv: float,
    pmt: float,
    n: float,
    initial_guess: float = INITIAL_GUESS_INTEREST_DEFAULT,
    threshold: float = ERROR_THRESHOLD_DEFAULT,
    max_iterations: int = MAX_ITERATIONS,
) -> float:
    """
    Ставка за период через Newton-Raphson.

    Args:
        pv: Present value
        fv: Future value
        pmt: Платёж за период
        n: Число периодов (> 0)
        initial_guess: Начальное приближение ставки
        threshold: Порог сходимости и snap-to-zero
        max_iterations: Лимит итераций

    Returns:
        Ставка за период (0.10 = 10%)

    Raises:
        DomainError: если n <= 0
        ConvergenceError: итерация не сошлась

    Examples:
        >>> abs(calculate_interest(-1000, 1100, 0, 1) - 0.10) < 1e-12
        True
    """
    _validate_inputs(pv=pv, fv=fv, pmt=pmt, n=n, initial_guess=initial_guess)

    if n <= 0:
        raise DomainError("Number of periods must be greater than zero.")

    def residual(rate: float) -> float:
        growth = checked_power(1 + rate, n)
        return -pv * growth - pmt * ((growth - 1) / rate) - fv

    def residual_prime(rate: float) -> float:
        growth_prev = checked_power(1 + rate, n - 1)
        growth = checked_power(1 + rate, n)
        return -pv * n * growth_prev - pmt * (
            (rate * n * growth_prev - (growth - 1)) / (rate * rate)
        )

    rate = newton_raphson(
        residual,
        residual_prime,
        initial_guess,
        threshold=threshold,
        max_iterations=max_iterations,
        label="Interest rate",
    )
    return snap_to_zero(rate, threshold)


def calculate_number_of_periods(
    pv: float,
    fv: float,
    pmt: float,
    i: float,
    initial_guess: float = INITIAL_GUESS_PERIODS_DEFAULT,
    threshold: float = ERROR_THRESHOLD_DEFAULT,
    max_iterations: int = MAX_ITERATIONS,
) -> float:
    """
    Число периодов через Newton-Raphson.

    Производная использует log(1+i); условие i > 0 заодно исключает
    i <= -1, где логарифм не определён.

    Raises:
        DomainError: если i <= 0
        ConvergenceError: итерация не сошлась

    Examples:
        >>> abs(calculate_number_of_periods(-1000, 1100, 0, 0.1) - 1.0) < 1e-9
        True
    """
    _validate_inputs(pv=pv, fv=fv, pmt=pmt, i=i, initial_guess=initial_guess)

    if i <= 0:
        raise DomainError("Interest rate must be greater than zero.")

    log_growth = math.log(1 + i)

    def residual(periods: float) -> float:
        growth = checked_power(1 + i, periods)
        return -pv * growth - pmt * ((growth - 1) / i) - fv

    def residual_prime(periods: float) -> float:
        growth = checked_power(1 + i, periods)
        return -pv * log_growth * growth - pmt * growth * log_growth / i

    periods = newton_raphson(
        residual,
        residual_prime,
        initial_guess,
        threshold=threshold,
        max_iterations=max_iterations,
        label="Number of periods",
    )
    return snap_to_zero(periods, threshold)
