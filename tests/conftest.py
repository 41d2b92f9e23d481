"""
Pytest configuration and shared fixtures.
"""

import pytest

from calcengine.config import get_settings
from calcengine.core.domain import EngineConfig
from calcengine.engine import CalculatorEngine
from calcengine.history import InMemoryHistorySink
from calcengine.logging_config import configure_logging

# Debug события движка не засоряют вывод тестов
configure_logging(log_level="WARNING")


@pytest.fixture
def config():
    """Настройки по умолчанию."""
    return EngineConfig()


@pytest.fixture
def history_sink():
    """Sink истории в памяти."""
    return InMemoryHistorySink()


@pytest.fixture
def engine(history_sink):
    """Движок с настройками по умолчанию и sink'ом в памяти."""
    return CalculatorEngine(history_sink=history_sink)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """EngineSettings кэшируются; каждый тест читает окружение заново."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
