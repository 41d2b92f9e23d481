"""
Domain models and value objects.

Contains the engine's immutable values: Token, EngineConfig, HistoryRecord.
"""

from calcengine.core.domain.engine_config import (
    ERROR_THRESHOLD_DEFAULT,
    INITIAL_GUESS_INTEREST_DEFAULT,
    INITIAL_GUESS_PERIODS_DEFAULT,
    TAYLOR_TERMS_DEFAULT,
    AngleMode,
    EngineConfig,
)
from calcengine.core.domain.history_record import HistoryRecord
from calcengine.core.domain.token import (
    BINARY_OPERATORS,
    FUNCTION_NAMES,
    UNARY_MINUS,
    Token,
    TokenKind,
    token_texts,
)

__all__ = [
    # Engine config
    "ERROR_THRESHOLD_DEFAULT",
    "INITIAL_GUESS_INTEREST_DEFAULT",
    "INITIAL_GUESS_PERIODS_DEFAULT",
    "TAYLOR_TERMS_DEFAULT",
    "AngleMode",
    "EngineConfig",
    # History
    "HistoryRecord",
    # Token model
    "BINARY_OPERATORS",
    "FUNCTION_NAMES",
    "UNARY_MINUS",
    "Token",
    "TokenKind",
    "token_texts",
]
