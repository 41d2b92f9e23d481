"""
Контракт записи истории вычислений

Каждое успешное вычисление выражения дописывается в историю одной JSON-строкой
(см. JsonLinesHistorySink). Перед записью payload из HistoryRecord.to_contract()
проверяется по schema/history_record.json (Draft 2020-12):

- expression: исходная строка выражения
- tokens: тексты токенов STAGE 1, каждый непустой
- postfix: тексты токенов RPN после STAGE 2, каждый непустой
- result: конечное число
- recorded_at: ISO 8601 метка времени

Лишние поля запрещены (additionalProperties: false), так что запись,
прошедшая проверку, читается обратно через HistoryRecord без потерь.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator


HISTORY_RECORD_SCHEMA = "history_record"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Чтение схем контрактов из каталога schema/ пакета.

    Каждая схема проходит meta-validation один раз и кэшируется по имени.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени файла без расширения ('history_record').

        Raises:
            FileNotFoundError: файла <schema_name>.json нет в каталоге
            ValueError: файл не является корректной Draft 2020-12 схемой
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e.message}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Draft 2020-12 валидатор для одной схемы из schema/."""

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        self.schema_name = schema_name
        self.schema = (loader or _SCHEMA_LOADER).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: первое найденное нарушение схемы
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[jsonschema.ValidationError]:
        return self.validator.iter_errors(data)


class HistoryRecordValidator(ContractValidator):
    """
    Проверка payload записи истории перед дозаписью в JSON lines файл.

    describe_violations() собирает все нарушения сразу, чтобы HistoryError
    называл каждое поле записи, которое не прошло контракт.
    """

    def __init__(self, loader: SchemaLoader | None = None):
        super().__init__(HISTORY_RECORD_SCHEMA, loader)

    def describe_violations(self, payload: Dict[str, Any]) -> list[str]:
        """
        Нарушения в виде "<путь>: <сообщение>", упорядоченные по пути.

        Путь строится из absolute_path ошибки ("tokens/0"); нарушения
        уровня записи (нет обязательного поля, лишнее поле) идут с путём "record".
        """
        violations = []
        for error in self.iter_errors(payload):
            path = "/".join(str(part) for part in error.absolute_path) or "record"
            violations.append(f"{path}: {error.message}")
        return sorted(violations)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


_HISTORY_VALIDATOR: HistoryRecordValidator | None = None


def _history_validator() -> HistoryRecordValidator:
    global _HISTORY_VALIDATOR
    if _HISTORY_VALIDATOR is None:
        _HISTORY_VALIDATOR = HistoryRecordValidator()
    return _HISTORY_VALIDATOR


def validate_history_record(data: Dict[str, Any]) -> None:
    """
    Проверка payload записи истории (результат HistoryRecord.to_contract()).

    Raises:
        ValidationError: payload нарушает контракт history_record
    """
    _history_validator().validate(data)


def history_record_violations(data: Dict[str, Any]) -> list[str]:
    """Все нарушения контракта history_record; пустой список для корректной записи."""
    return _history_validator().describe_violations(data)
