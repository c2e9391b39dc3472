import logging

import pytest

from scenewire.config import WiringConfig, load_config
from scenewire.logging import ROOT_LOGGER_NAME, configure_logging


def test_defaults_without_environment():
    assert load_config({}) == WiringConfig(
        atomic_injection=True, include_private=True, log_level="WARNING"
    )


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("yes", True), (" ON ", True), ("0", False), ("false", False), ("maybe", True)],
)
def test_atomic_injection_flag(raw, expected):
    assert load_config({"SCENEWIRE_ATOMIC_INJECTION": raw}).atomic_injection is expected


def test_include_private_flag():
    assert load_config({"SCENEWIRE_INCLUDE_PRIVATE": "no"}).include_private is False


def test_log_level_prefers_scenewire_variable():
    assert load_config({"LOG_LEVEL": "info"}).log_level == "INFO"
    assert load_config({"LOG_LEVEL": "info", "SCENEWIRE_LOG_LEVEL": "debug"}).log_level == "DEBUG"


def test_reads_process_environment_by_default(monkeypatch):
    monkeypatch.setenv("SCENEWIRE_INCLUDE_PRIVATE", "false")

    assert load_config().include_private is False


@pytest.fixture
def scenewire_logger():
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_configure_logging_sets_level_and_single_handler(scenewire_logger):
    configure_logging("debug")
    configure_logging("info")

    stream_handlers = [
        h for h in scenewire_logger.handlers if type(h) is logging.StreamHandler
    ]
    assert len(stream_handlers) == 1
    assert scenewire_logger.level == logging.INFO


def test_configure_logging_unknown_level_falls_back(scenewire_logger):
    configure_logging("loud")

    assert scenewire_logger.level == logging.WARNING


def test_configure_logging_defaults_to_configured_level(scenewire_logger, monkeypatch):
    monkeypatch.setenv("SCENEWIRE_LOG_LEVEL", "debug")

    configure_logging()

    assert scenewire_logger.level == logging.DEBUG
