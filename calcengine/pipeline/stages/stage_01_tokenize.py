"""STAGE 1: Tokenize — строка выражения → последовательность токенов

- Пробельные символы пропускаются
- Максимальная серия цифр и '.' → NUMBER (вторая '.' → LexError)
- Максимальная серия букв → pi (NUMBER) или sin/cos/tan (FUNCTION)
- ^ * / + - → OPERATOR; '-' в состоянии EXPECT_OPERAND → унарный минус
- ( ) → LEFT_PAREN / RIGHT_PAREN
- Любой другой символ → LexError

Состояние сканера — двухсостоянный автомат ScanState:
- числа, константы и ')' → EXPECT_OPERATOR
- операторы, функции и '(' → EXPECT_OPERAND
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional

from calcengine.core.domain.token import (
    FUNCTION_NAMES,
    UNARY_MINUS,
    Token,
    TokenKind,
)
from calcengine.core.errors import LexError
from calcengine.core.math.numerical_safeguards import PI

# π с полной double точностью в виде литерала
PI_LITERAL: Final[str] = repr(PI)

_DIGITS: Final[frozenset[str]] = frozenset("0123456789")
_DECIMAL_POINT: Final[str] = "."
_OPERATOR_CHARS: Final[frozenset[str]] = frozenset("^*/+-")


class ScanState(str, Enum):
    """Ожидание сканера: операнд или оператор."""

    EXPECT_OPERAND = "EXPECT_OPERAND"
    EXPECT_OPERATOR = "EXPECT_OPERATOR"


def next_scan_state(kind: TokenKind) -> ScanState:
    """Переход автомата после выпуска токена вида kind."""
    if kind in (TokenKind.NUMBER, TokenKind.RIGHT_PAREN):
        return ScanState.EXPECT_OPERATOR
    return ScanState.EXPECT_OPERAND


@dataclass(frozen=True)
class Stage01Result:
    """Результат STAGE 1."""

    tokens: tuple[Token, ...]
    error: Optional[LexError]

    # Детали
    details: str

    @property
    def ok(self) -> bool:
        return self.error is None


class Stage01Tokenize:
    """STAGE 1: Tokenize.

    Stateless: состояние сканера живёт только внутри одного вызова evaluate.
    """

    def evaluate(self, expression: str) -> Stage01Result:
        """Токенизация выражения.

        Args:
            expression: исходная строка

        Returns:
            Stage01Result с токенами или LexError
        """
        try:
            tokens = self._scan(expression)
        except LexError as exc:
            return Stage01Result(tokens=(), error=exc, details=str(exc))

        return Stage01Result(
            tokens=tokens,
            error=None,
            details=f"{len(tokens)} tokens",
        )

    def _scan(self, expression: str) -> tuple[Token, ...]:
        tokens: list[Token] = []
        state = ScanState.EXPECT_OPERAND
        index = 0
        length = len(expression)

        while index < length:
            character = expression[index]

            if character.isspace():
                index += 1
                continue

            start = index

            # 1. Числа
            if character in _DIGITS or character == _DECIMAL_POINT:
                while index < length and (
                    expression[index] in _DIGITS or expression[index] == _DECIMAL_POINT
                ):
                    index += 1
                literal = expression[start:index]

                if literal.count(_DECIMAL_POINT) > 1:
                    raise LexError(
                        f"Invalid number format: multiple decimal points in {literal}",
                        position=start,
                    )
                if literal == _DECIMAL_POINT:
                    raise LexError(f"Invalid number format: {literal}", position=start)

                token = Token(kind=TokenKind.NUMBER, text=literal)

            # 2. Слова: pi или имя функции
            elif character.isalpha():
                while index < length and expression[index].isalpha():
                    index += 1
                word = expression[start:index]

                if word.lower() == "pi":
                    token = Token(kind=TokenKind.NUMBER, text=PI_LITERAL)
                elif word in FUNCTION_NAMES:
                    token = Token(kind=TokenKind.FUNCTION, text=word)
                else:
                    raise LexError(f"Unrecognized function: {word}", position=start)

            # 3. Операторы
            elif character in _OPERATOR_CHARS:
                index += 1
                if character == "-" and state == ScanState.EXPECT_OPERAND:
                    token = Token(kind=TokenKind.OPERATOR, text=UNARY_MINUS)
                else:
                    token = Token(kind=TokenKind.OPERATOR, text=character)

            # 4. Скобки
            elif character == "(":
                index += 1
                token = Token(kind=TokenKind.LEFT_PAREN, text="(")
            elif character == ")":
                index += 1
                token = Token(kind=TokenKind.RIGHT_PAREN, text=")")

            else:
                raise LexError(f"Unrecognized character: {character}", position=start)

            tokens.append(token)
            state = next_scan_state(token.kind)

        return tuple(tokens)


def tokenize(expression: str) -> tuple[Token, ...]:
    """
    Токенизация без обёртки в Stage01Result.

    Raises:
        LexError: некорректный символ, число или слово
    """
    result = Stage01Tokenize().evaluate(expression)
    if result.error is not None:
        raise result.error
    return result.tokens
