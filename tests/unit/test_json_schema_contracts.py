"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидатора истории:
- Валидность самой схемы
- Валидация правильных данных
- Детекция нарушений required полей
- Детекция нарушений типов и constraints
- Интеграция с Pydantic моделью HistoryRecord
"""

import json

import pytest
from jsonschema import ValidationError

from calcengine.core.contracts import (
    HistoryRecordValidator,
    SchemaLoader,
    history_record_violations,
    validate_history_record,
)
from calcengine.core.domain import HistoryRecord


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_history_record():
    """Валидный history_record для тестирования."""
    return {
        "expression": "3 + 4 * 2",
        "tokens": ["3", "+", "4", "*", "2"],
        "postfix": ["3", "4", "2", "*", "+"],
        "result": 11.0,
        "recorded_at": "2024-01-15T10:30:00Z",
    }


# =============================================================================
# TESTS - SCHEMA LOADING
# =============================================================================


def test_schema_loader_loads_history_schema():
    """Проверка загрузки схемы истории."""
    loader = SchemaLoader()

    schema = loader.load_schema("history_record")

    assert schema["title"] == "history_record"
    assert schema["additionalProperties"] is False


def test_schema_loader_caches_schemas():
    """Проверка кэширования схем."""
    loader = SchemaLoader()

    schema1 = loader.load_schema("history_record")
    schema2 = loader.load_schema("history_record")

    # Должен вернуть тот же объект (кэш)
    assert schema1 is schema2


def test_schema_loader_raises_on_missing_schema():
    """Проверка ошибки при отсутствующей схеме."""
    loader = SchemaLoader()

    with pytest.raises(FileNotFoundError):
        loader.load_schema("non_existent_schema")


def test_schema_loader_raises_on_missing_directory(tmp_path):
    """Проверка ошибки при отсутствующем каталоге схем."""
    with pytest.raises(RuntimeError, match="Schema directory not found"):
        SchemaLoader(tmp_path / "missing")


def test_schema_loader_rejects_invalid_schema(tmp_path):
    """Meta-validation: невалидная JSON Schema отклоняется."""
    (tmp_path / "broken.json").write_text(json.dumps({"type": 42}), encoding="utf-8")
    loader = SchemaLoader(tmp_path)

    with pytest.raises(ValueError, match="Invalid JSON Schema in broken.json"):
        loader.load_schema("broken")


# =============================================================================
# TESTS - HISTORY RECORD VALIDATION
# =============================================================================


def test_history_record_validator_accepts_valid_data(valid_history_record):
    """Валидация правильного history_record."""
    validator = HistoryRecordValidator()
    validator.validate(valid_history_record)  # Не должно выбросить исключение
    assert validator.is_valid(valid_history_record)


def test_history_record_validate_function(valid_history_record):
    """Проверка функции validate_history_record."""
    validate_history_record(valid_history_record)  # Не должно выбросить исключение


def test_history_record_rejects_missing_required_field(valid_history_record):
    """Валидация отклоняет данные без обязательных полей."""
    data = valid_history_record.copy()
    del data["postfix"]

    with pytest.raises(ValidationError) as exc_info:
        validate_history_record(data)
    assert "'postfix' is a required property" in str(exc_info.value)


def test_history_record_rejects_wrong_type(valid_history_record):
    """Валидация отклоняет неправильный тип результата."""
    data = valid_history_record.copy()
    data["result"] = "eleven"

    with pytest.raises(ValidationError) as exc_info:
        validate_history_record(data)
    assert "is not of type 'number'" in str(exc_info.value)


def test_history_record_rejects_additional_properties(valid_history_record):
    """Валидация отклоняет неизвестные поля."""
    data = valid_history_record.copy()
    data["angle_mode"] = "radians"

    with pytest.raises(ValidationError):
        validate_history_record(data)


def test_history_record_rejects_empty_token(valid_history_record):
    """Пустой текст токена нарушает minLength."""
    data = valid_history_record.copy()
    data["tokens"] = ["3", "", "4"]

    assert not HistoryRecordValidator().is_valid(data)


def test_history_record_iter_errors(valid_history_record):
    """iter_errors перечисляет все нарушения."""
    data = valid_history_record.copy()
    del data["expression"]
    data["result"] = None

    errors = list(HistoryRecordValidator().iter_errors(data))
    assert len(errors) == 2


# =============================================================================
# TESTS - VIOLATION REPORTS
# =============================================================================


def test_history_record_violations_empty_for_valid_data(valid_history_record):
    """Корректная запись не даёт нарушений."""
    assert history_record_violations(valid_history_record) == []


def test_history_record_violations_name_fields(valid_history_record):
    """Каждое нарушение начинается с пути к полю записи."""
    data = valid_history_record.copy()
    del data["recorded_at"]
    data["postfix"] = ["3", ""]

    violations = history_record_violations(data)

    assert len(violations) == 2
    assert violations[0].startswith("postfix/1: ")
    assert violations[1] == "record: 'recorded_at' is a required property"


def test_history_record_validator_with_custom_loader(tmp_path):
    """HistoryRecordValidator читает схему через переданный loader."""
    schema = SchemaLoader().load_schema("history_record")
    (tmp_path / "history_record.json").write_text(json.dumps(schema), encoding="utf-8")

    validator = HistoryRecordValidator(SchemaLoader(tmp_path))

    assert validator.schema == schema


# =============================================================================
# TESTS - PYDANTIC INTEGRATION
# =============================================================================


def test_history_record_model_matches_contract():
    """HistoryRecord.to_contract() соответствует схеме."""
    record = HistoryRecord(
        expression="-3 + 5",
        tokens=("u-", "3", "+", "5"),
        postfix=("3", "u-", "5", "+"),
        result=2.0,
    )

    payload = record.to_contract()

    validate_history_record(payload)
    assert payload["tokens"] == ["u-", "3", "+", "5"]
    assert isinstance(payload["recorded_at"], str)


def test_history_record_model_roundtrip(valid_history_record):
    """Данные контракта загружаются обратно в HistoryRecord."""
    record = HistoryRecord.model_validate(valid_history_record)

    assert record.tokens == ("3", "+", "4", "*", "2")
    assert record.recorded_at.year == 2024
