"""
Token — лексема арифметического выражения

Immutable Pydantic модель. Токены создаются один раз токенизатором,
переупорядочиваются конвертером и потребляются evaluator'ом; после создания
не изменяются.
"""

from enum import Enum
from typing import Final

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class TokenKind(str, Enum):
    """Вид токена"""

    NUMBER = "NUMBER"
    OPERATOR = "OPERATOR"
    FUNCTION = "FUNCTION"
    LEFT_PAREN = "LEFT_PAREN"
    RIGHT_PAREN = "RIGHT_PAREN"


# =============================================================================
# СИМВОЛЫ
# =============================================================================

# Синтетический символ унарного минуса (отличается от бинарного "-")
UNARY_MINUS: Final[str] = "u-"

# Бинарные операторы
BINARY_OPERATORS: Final[frozenset[str]] = frozenset({"+", "-", "*", "/", "^"})

# Поддерживаемые функции
FUNCTION_NAMES: Final[frozenset[str]] = frozenset({"sin", "cos", "tan"})


# =============================================================================
# TOKEN MODEL
# =============================================================================


class Token(BaseModel):
    """
    Лексема: вид и текст.

    text — литерал числа, символ оператора (включая UNARY_MINUS),
    имя функции или скобка.
    """

    kind: TokenKind = Field(..., description="Вид токена")
    text: str = Field(..., min_length=1, description="Литерал или символ")

    model_config = {"frozen": True}

    @property
    def is_unary_minus(self) -> bool:
        return self.kind == TokenKind.OPERATOR and self.text == UNARY_MINUS

    def __str__(self) -> str:
        return self.text


def token_texts(tokens) -> list[str]:
    """Тексты токенов в порядке следования (для истории и логов)."""
    return [token.text for token in tokens]
