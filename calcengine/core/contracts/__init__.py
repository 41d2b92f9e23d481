"""
Contract Validation Module

Модуль для валидации JSON контрактов движка (история вычислений).
"""

from .validators import (
    ContractValidator,
    HistoryRecordValidator,
    SchemaLoader,
    history_record_violations,
    validate_history_record,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "HistoryRecordValidator",
    # Functions
    "validate_history_record",
    "history_record_violations",
]
