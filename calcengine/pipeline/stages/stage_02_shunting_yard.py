"""STAGE 2: Shunting-Yard — инфиксные токены → постфиксная запись (RPN)

Приоритеты:
- + -  → 1
- * /  → 2
- ^    → 3
- u-   → 4
- sin/cos/tan → 5 (префиксные операторы с наивысшим приоритетом)

Ассоциативность: все операторы левые, кроме ^ и u- (правые).

Несбалансированные скобки детектируются, а не отбрасываются:
- ')' без '(' → "missing '('"
- '(' без ')' в конце → "missing ')'"
"""

from dataclasses import dataclass
from typing import Final, Optional

from calcengine.core.domain.token import UNARY_MINUS, Token, TokenKind
from calcengine.core.errors import ExpressionSyntaxError

PRECEDENCE: Final[dict[str, int]] = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    "^": 3,
    UNARY_MINUS: 4,
}

FUNCTION_PRECEDENCE: Final[int] = 5

RIGHT_ASSOCIATIVE: Final[frozenset[str]] = frozenset({"^", UNARY_MINUS})


def get_precedence(token: Token) -> int:
    """Приоритет оператора или функции на стеке (0 для скобок)."""
    if token.kind == TokenKind.FUNCTION:
        return FUNCTION_PRECEDENCE
    if token.kind == TokenKind.OPERATOR:
        return PRECEDENCE.get(token.text, 0)
    return 0


def is_left_associative(symbol: str) -> bool:
    return symbol not in RIGHT_ASSOCIATIVE


@dataclass(frozen=True)
class Stage02Result:
    """Результат STAGE 2."""

    postfix: tuple[Token, ...]
    error: Optional[ExpressionSyntaxError]

    # Детали
    details: str

    @property
    def ok(self) -> bool:
        return self.error is None


class Stage02ShuntingYard:
    """STAGE 2: Shunting-Yard.

    Порядок обработки токена:
    1. NUMBER → output
    2. FUNCTION, LEFT_PAREN → стек операторов
    3. u- → push без выталкивания (префиксный оператор)
    4. OPERATOR → выталкивание по приоритету/ассоциативности, затем push
    5. RIGHT_PAREN → выталкивание до '(' включительно
    6. Конец ввода → выталкивание остатка стека
    """

    def evaluate(self, tokens: tuple[Token, ...]) -> Stage02Result:
        """Конвертация в постфиксную запись.

        Args:
            tokens: инфиксные токены (результат STAGE 1)

        Returns:
            Stage02Result с постфиксными токенами или ExpressionSyntaxError
        """
        try:
            postfix = self._convert(tokens)
        except ExpressionSyntaxError as exc:
            return Stage02Result(postfix=(), error=exc, details=str(exc))

        return Stage02Result(
            postfix=postfix,
            error=None,
            details=f"{len(postfix)} postfix tokens",
        )

    def _convert(self, tokens: tuple[Token, ...]) -> tuple[Token, ...]:
        output: list[Token] = []
        operator_stack: list[Token] = []

        for token in tokens:
            if token.kind == TokenKind.NUMBER:
                output.append(token)

            elif token.kind in (TokenKind.FUNCTION, TokenKind.LEFT_PAREN):
                operator_stack.append(token)

            elif token.kind == TokenKind.OPERATOR and token.text == UNARY_MINUS:
                # Префиксный оператор: левого операнда нет, стек не выталкивается
                operator_stack.append(token)

            elif token.kind == TokenKind.OPERATOR:
                precedence = get_precedence(token)
                left_associative = is_left_associative(token.text)

                while operator_stack and operator_stack[-1].kind != TokenKind.LEFT_PAREN:
                    top_precedence = get_precedence(operator_stack[-1])
                    if top_precedence > precedence or (
                        top_precedence == precedence and left_associative
                    ):
                        output.append(operator_stack.pop())
                    else:
                        break
                operator_stack.append(token)

            elif token.kind == TokenKind.RIGHT_PAREN:
                while operator_stack and operator_stack[-1].kind != TokenKind.LEFT_PAREN:
                    output.append(operator_stack.pop())
                if not operator_stack:
                    raise ExpressionSyntaxError("Mismatched parenthesis, missing: '('")
                operator_stack.pop()

        while operator_stack:
            top = operator_stack.pop()
            if top.kind == TokenKind.LEFT_PAREN:
                raise ExpressionSyntaxError("Mismatched parenthesis, missing: ')'")
            output.append(top)

        return tuple(output)


def to_postfix(tokens: tuple[Token, ...]) -> tuple[Token, ...]:
    """
    Конвертация без обёртки в Stage02Result.

    Raises:
        ExpressionSyntaxError: несбалансированные скобки
    """
    result = Stage02ShuntingYard().evaluate(tokens)
    if result.error is not None:
        raise result.error
    return result.postfix
