"""
History sinks — append-only журнал вычислений

Движок не работает с файловой системой напрямую: при включённой истории
он передаёт HistoryRecord в sink с единственной операцией append.

Реализации:
- InMemoryHistorySink: список в памяти (тесты, встраивание)
- JsonLinesHistorySink: файл JSON lines, только дозапись, каждая запись
  валидируется против history_record.json
"""

import json
from pathlib import Path
from typing import Protocol, runtime_checkable

import structlog

from calcengine.core.contracts import history_record_violations
from calcengine.core.domain.history_record import HistoryRecord
from calcengine.core.errors import HistoryError

logger = structlog.get_logger(__name__)

DEFAULT_HISTORY_FILE = "calculation_history.jsonl"


@runtime_checkable
class HistorySink(Protocol):
    """Приёмник записей истории."""

    def append(self, record: HistoryRecord) -> None: ...


class InMemoryHistorySink:
    """Sink, накапливающий записи в памяти."""

    def __init__(self):
        self._records: list[HistoryRecord] = []

    def append(self, record: HistoryRecord) -> None:
        self._records.append(record)

    @property
    def records(self) -> tuple[HistoryRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)


class JsonLinesHistorySink:
    """
    Sink, дописывающий записи в файл JSON lines.

    Файл открывается в режиме "a" на каждую запись: существующие строки
    никогда не перезаписываются.
    """

    def __init__(self, path: str | Path = DEFAULT_HISTORY_FILE):
        self.path = Path(path)

    def append(self, record: HistoryRecord) -> None:
        """
        Дозапись одной записи.

        Raises:
            HistoryError: запись не соответствует контракту или файл не
                удалось открыть/записать
        """
        payload = record.to_contract()
        violations = history_record_violations(payload)
        if violations:
            raise HistoryError("History record violates contract: " + "; ".join(violations))

        try:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(json.dumps(payload, ensure_ascii=False) + "\n")
        except OSError as exc:
            raise HistoryError(f"Failed to write history file {self.path}: {exc}") from exc

        logger.debug("history_appended", path=str(self.path), expression=record.expression)

    def read_records(self) -> list[HistoryRecord]:
        """Чтение всех записей (для инспекции и тестов)."""
        if not self.path.exists():
            return []

        with open(self.path, "r", encoding="utf-8") as f:
            return [
                HistoryRecord.model_validate(json.loads(line))
                for line in f
                if line.strip()
            ]
