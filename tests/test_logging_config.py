"""Tests for logging configuration."""

import logging

from rich.logging import RichHandler

from easy_checkout.logging_config import get_logger, setup_logging


def test_default_level_is_warning() -> None:
    setup_logging()
    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("git").level == logging.WARNING


def test_verbose_and_debug_levels() -> None:
    setup_logging(verbose=True)
    assert logging.getLogger().level == logging.INFO

    setup_logging(debug=True)
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("git").level == logging.DEBUG


def test_handlers_are_replaced() -> None:
    """Test that repeated setup does not stack handlers."""
    setup_logging()
    setup_logging()
    handlers = [handler for handler in logging.getLogger().handlers if isinstance(handler, RichHandler)]
    assert len(handlers) == 1


def test_get_logger_uses_module_name() -> None:
    assert get_logger("easy_checkout.branches").name == "easy_checkout.branches"
