"""
Тесты для EngineSettings (pydantic-settings) и configure_logging

Проверяет:
1. Значения по умолчанию
2. Переменные окружения с префиксом CALCENGINE_
3. Построение EngineConfig
4. Кэширование get_settings
"""

import logging

import pytest
from pydantic import ValidationError

from calcengine.config import EngineSettings, get_settings
from calcengine.core.domain import AngleMode, EngineConfig
from calcengine.history import DEFAULT_HISTORY_FILE
from calcengine.logging_config import (
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)


class TestEngineSettings:
    """Тесты для EngineSettings"""

    def test_defaults(self, monkeypatch) -> None:
        """Без окружения настройки совпадают с EngineConfig()"""
        for name in ("TAYLOR_TERMS", "ANGLE_MODE", "HISTORY_ENABLED", "LOG_LEVEL"):
            monkeypatch.delenv(f"CALCENGINE_{name}", raising=False)

        settings = EngineSettings(_env_file=None)

        assert settings.to_engine_config() == EngineConfig()
        assert settings.history_path == DEFAULT_HISTORY_FILE
        assert settings.log_level == "INFO"
        assert settings.log_json is False

    def test_env_overrides(self, monkeypatch) -> None:
        """CALCENGINE_* переменные окружения"""
        monkeypatch.setenv("CALCENGINE_TAYLOR_TERMS", "14")
        monkeypatch.setenv("CALCENGINE_ANGLE_MODE", "degrees")
        monkeypatch.setenv("CALCENGINE_HISTORY_ENABLED", "true")
        monkeypatch.setenv("CALCENGINE_HISTORY_PATH", "/tmp/calc.jsonl")

        settings = EngineSettings(_env_file=None)
        config = settings.to_engine_config()

        assert config.taylor_terms == 14
        assert config.angle_mode == AngleMode.DEGREES
        assert config.history_enabled is True
        assert settings.history_path == "/tmp/calc.jsonl"

    def test_invalid_domain_value(self, monkeypatch) -> None:
        """Значение вне домена отклоняется при построении EngineConfig"""
        monkeypatch.setenv("CALCENGINE_TAYLOR_TERMS", "0")

        settings = EngineSettings(_env_file=None)

        with pytest.raises(ValidationError):
            settings.to_engine_config()

    def test_get_settings_cached(self, monkeypatch) -> None:
        """get_settings возвращает один экземпляр до cache_clear"""
        monkeypatch.setenv("CALCENGINE_TAYLOR_TERMS", "6")

        first = get_settings()
        second = get_settings()

        assert first is second
        assert first.taylor_terms == 6

        monkeypatch.setenv("CALCENGINE_TAYLOR_TERMS", "9")
        get_settings.cache_clear()
        assert get_settings().taylor_terms == 9


class TestLoggingConfig:
    """Тесты для configure_logging"""

    def test_configure_sets_root_level(self) -> None:
        """Уровень root logger'а задаётся строкой"""
        configure_logging(log_level="DEBUG")
        try:
            assert logging.getLogger().level == logging.DEBUG
        finally:
            configure_logging(log_level="WARNING")

    def test_unknown_level_falls_back_to_info(self) -> None:
        """Неизвестный уровень → INFO"""
        configure_logging(log_level="CHATTY")
        try:
            assert logging.getLogger().level == logging.INFO
        finally:
            configure_logging(log_level="WARNING")

    def test_json_output(self, capsys) -> None:
        """JSON режим: событие как JSON строка в stderr"""
        configure_logging(log_level="INFO", json_output=True)
        try:
            get_logger("calcengine.test").info("config_updated", taylor_terms="8")
            captured = capsys.readouterr()
            assert '"event": "config_updated"' in captured.err
            assert '"taylor_terms": "8"' in captured.err
        finally:
            configure_logging(log_level="WARNING")

    def test_configure_from_settings(self) -> None:
        """Уровень логирования из EngineSettings"""
        configure_logging_from_settings(EngineSettings(_env_file=None, log_level="ERROR"))
        try:
            assert logging.getLogger().level == logging.ERROR
        finally:
            configure_logging(log_level="WARNING")
