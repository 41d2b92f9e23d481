"""
calcengine — arithmetic expression engine and Time-Value-of-Money solver.

    >>> from calcengine import CalculatorEngine
    >>> CalculatorEngine().evaluate("2 ^ 3 ^ 2")
    512.0
"""

from calcengine.core.domain import AngleMode, EngineConfig, HistoryRecord, Token, TokenKind
from calcengine.core.errors import (
    ConfigError,
    ConvergenceError,
    DivisionByZeroError,
    DomainError,
    EngineArithmeticError,
    EngineError,
    EvalError,
    ExpressionSyntaxError,
    HistoryError,
    LexError,
)
from calcengine.engine import CalculatorEngine, EvaluationResult
from calcengine.history import HistorySink, InMemoryHistorySink, JsonLinesHistorySink

__all__ = [
    # Engine
    "CalculatorEngine",
    "EvaluationResult",
    # Domain
    "AngleMode",
    "EngineConfig",
    "HistoryRecord",
    "Token",
    "TokenKind",
    # History
    "HistorySink",
    "InMemoryHistorySink",
    "JsonLinesHistorySink",
    # Errors
    "EngineError",
    "LexError",
    "ExpressionSyntaxError",
    "EvalError",
    "EngineArithmeticError",
    "DivisionByZeroError",
    "DomainError",
    "ConvergenceError",
    "ConfigError",
    "HistoryError",
]
