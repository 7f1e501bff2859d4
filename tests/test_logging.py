"""
Tests for the logging helpers.
"""

import logging

from beacon_registration.utils.logging import set_package_log_level, setup_logger


def test_setup_logger_is_idempotent():
    first = setup_logger("beacon_registration.tests.idempotent")
    second = setup_logger("beacon_registration.tests.idempotent", level=logging.DEBUG)
    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.INFO


def test_log_file_directories_are_created(tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    logger = setup_logger("beacon_registration.tests.file", log_file=str(log_file))
    logger.info("hello")
    for handler in logger.handlers:
        handler.flush()
    assert "hello" in log_file.read_text(encoding="utf-8")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_set_package_log_level_only_touches_package_loggers():
    ours = setup_logger("beacon_registration.tests.level")
    other = setup_logger("somebody_else.level")
    try:
        set_package_log_level(logging.WARNING)
        assert ours.level == logging.WARNING
        assert all(h.level == logging.WARNING for h in ours.handlers)
        assert other.level == logging.INFO
    finally:
        set_package_log_level(logging.INFO)
