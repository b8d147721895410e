import io
import logging

import pytest

from blocstore import ConfigurationError, StoreConfig, configure_logging
from blocstore.config import CounterSettings


def test_defaults():
    config = StoreConfig()
    assert config.log_level == "WARNING"
    assert config.counter.min_value == -50
    assert config.counter.max_value == 100
    assert config.auth.min_password_length == 8
    assert config.slow_handler_ms is None


def test_from_env_reads_prefixed_variables():
    config = StoreConfig.from_env(
        {
            "BLOCSTORE_LOG_LEVEL": "debug",
            "BLOCSTORE_LOG_TRANSITIONS": "true",
            "BLOCSTORE_SLOW_HANDLER_MS": "250",
            "BLOCSTORE_COUNTER_MIN": "-10",
            "BLOCSTORE_COUNTER_MAX": "10",
            "BLOCSTORE_PASSWORD_MIN_LENGTH": "12",
            "UNRELATED": "ignored",
        }
    )
    assert config.log_level == "DEBUG"
    assert config.log_transitions is True
    assert config.slow_handler_ms == 250
    assert config.counter == CounterSettings(min_value=-10, max_value=10)
    assert config.auth.min_password_length == 12


def test_from_env_with_empty_environment():
    assert StoreConfig.from_env({}) == StoreConfig()


def test_from_env_rejects_invalid_values():
    with pytest.raises(ConfigurationError) as excinfo:
        StoreConfig.from_env({"BLOCSTORE_COUNTER_MAX": "lots"})
    assert excinfo.value.component == "StoreConfig"


def test_counter_bounds_must_be_ordered():
    with pytest.raises(ValueError):
        CounterSettings(min_value=10, max_value=0)


def test_divisor_cannot_be_zero():
    with pytest.raises(ValueError):
        CounterSettings(divisor=0)


def test_counter_clamp():
    settings = CounterSettings()
    assert settings.clamp(1000) == 100
    assert settings.clamp(-1000) == -50
    assert settings.clamp(5) == 5


def test_configure_logging_installs_one_handler():
    stream = io.StringIO()
    logger = configure_logging("debug", stream=stream)
    configure_logging(logging.INFO, stream=stream)
    handlers = [h for h in logger.handlers if getattr(h, "_blocstore_console", False)]
    assert len(handlers) == 1
    assert logger.level == logging.INFO
    logging.getLogger("blocstore.test").info("hello")
    assert "hello" in stream.getvalue()
    logger.removeHandler(handlers[0])
    logger.setLevel(logging.NOTSET)
