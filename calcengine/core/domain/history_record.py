"""
HistoryRecord — запись истории вычисления

Immutable Pydantic модель, совместимая с JSON Schema
(calcengine/core/contracts/schema/history_record.json).
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class HistoryRecord(BaseModel):
    """
    Снапшот одного успешного вычисления: исходное выражение, токены,
    постфиксная запись и результат.
    """

    expression: str = Field(..., description="Исходное выражение")
    tokens: tuple[str, ...] = Field(..., description="Тексты токенов в инфиксном порядке")
    postfix: tuple[str, ...] = Field(..., description="Тексты токенов в постфиксном порядке")
    result: float = Field(..., description="Результат (после snap-to-zero)")
    recorded_at: datetime = Field(default_factory=_utc_now, description="Время записи (UTC)")

    model_config = {"frozen": True}

    def to_contract(self) -> dict:
        """Представление для JSON Schema валидации и записи в JSON lines."""
        return self.model_dump(mode="json")
