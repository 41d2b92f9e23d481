"""STAGE 3: Postfix Evaluation — постфиксные токены → float

Стек операндов:
- NUMBER → push float(text)
- u- → pop одного операнда, push -x
- + - * / ^ → pop num2, затем num1, push num1 OP num2
- sin/cos/tan → pop одного операнда, push f(x) (ряд Тейлора по EngineConfig)

В конце на стеке ровно одно значение, иначе EvalError.
Деление на ноль → DivisionByZeroError; ^ по семантике math.pow.
Литерал или результат бинарной операции вне диапазона float (inf, nan)
→ EngineArithmeticError.
"""

from dataclasses import dataclass
from typing import Callable, Final, Optional

from calcengine.core.domain.engine_config import EngineConfig
from calcengine.core.domain.token import UNARY_MINUS, Token, TokenKind
from calcengine.core.errors import (
    DivisionByZeroError,
    EngineArithmeticError,
    EngineError,
    EvalError,
)
from calcengine.core.math.numerical_safeguards import checked_power, is_valid_float
from calcengine.core.math.trigonometry import taylor_cos, taylor_sin, taylor_tan


def _divide(num1: float, num2: float) -> float:
    if num2 == 0:
        raise DivisionByZeroError("Division by zero")
    return num1 / num2


def _finite(value: float) -> float:
    if not is_valid_float(value):
        raise EngineArithmeticError(f"Arithmetic overflow: result is {value}")
    return value


BINARY_OPERATIONS: Final[dict[str, Callable[[float, float], float]]] = {
    "+": lambda num1, num2: num1 + num2,
    "-": lambda num1, num2: num1 - num2,
    "*": lambda num1, num2: num1 * num2,
    "/": _divide,
    "^": checked_power,
}

FUNCTIONS: Final[dict[str, Callable[..., float]]] = {
    "sin": taylor_sin,
    "cos": taylor_cos,
    "tan": taylor_tan,
}


@dataclass(frozen=True)
class Stage03Result:
    """Результат STAGE 3."""

    value: Optional[float]
    error: Optional[EngineError]

    # Детали
    details: str

    @property
    def ok(self) -> bool:
        return self.error is None


class Stage03PostfixEval:
    """STAGE 3: Postfix Evaluation.

    Конфигурация передаётся в evaluate и только читается.
    """

    def evaluate(self, postfix: tuple[Token, ...], config: EngineConfig) -> Stage03Result:
        """Вычисление постфиксной записи.

        Args:
            postfix: постфиксные токены (результат STAGE 2)
            config: снапшот настроек (angle mode, taylor terms, threshold)

        Returns:
            Stage03Result со значением или ошибкой
            (EvalError, DivisionByZeroError, DomainError, EngineArithmeticError)
        """
        try:
            value = self._run(postfix, config)
        except EngineError as exc:
            return Stage03Result(value=None, error=exc, details=str(exc))

        return Stage03Result(value=value, error=None, details="evaluated")

    def _run(self, postfix: tuple[Token, ...], config: EngineConfig) -> float:
        stack: list[float] = []

        for token in postfix:
            if token.kind == TokenKind.NUMBER:
                try:
                    value = float(token.text)
                except ValueError as exc:
                    raise EvalError(f"Invalid number literal: {token.text}") from exc
                stack.append(_finite(value))

            elif token.kind == TokenKind.OPERATOR:
                if token.text == UNARY_MINUS:
                    if not stack:
                        raise EvalError("Invalid expression: not enough operands")
                    stack.append(-stack.pop())
                    continue

                operation = BINARY_OPERATIONS.get(token.text)
                if operation is None:
                    raise EvalError(f"Unknown operator: {token.text}")
                if len(stack) < 2:
                    raise EvalError("Invalid expression: not enough operands")
                num2 = stack.pop()
                num1 = stack.pop()
                stack.append(_finite(operation(num1, num2)))

            elif token.kind == TokenKind.FUNCTION:
                function = FUNCTIONS.get(token.text)
                if function is None:
                    raise EvalError(f"Unknown function: {token.text}")
                if not stack:
                    raise EvalError("Invalid expression: not enough operands")
                stack.append(
                    function(
                        stack.pop(),
                        config.taylor_terms,
                        config.error_threshold,
                        config.angle_mode,
                    )
                )

            else:
                raise EvalError(f"Unexpected token in postfix expression: {token.text}")

        if not stack:
            raise EvalError("Invalid expression: too few operands")
        if len(stack) > 1:
            raise EvalError("Invalid expression: too many operands")
        return stack[0]


def evaluate_postfix(postfix: tuple[Token, ...], config: EngineConfig) -> float:
    """
    Вычисление без обёртки в Stage03Result.

    Raises:
        EngineError: EvalError, DivisionByZeroError, DomainError, EngineArithmeticError
    """
    result = Stage03PostfixEval().evaluate(postfix, config)
    if result.error is not None:
        raise result.error
    return result.value
