"""Tests for the shared CLI and logging helpers."""

import logging

import click
from click.testing import CliRunner
from rich.logging import RichHandler

from shared.cli import handle_errors
from shared.logger import get_logger, setup_logger


class TestHandleErrors:
    """Test the handle_errors decorator."""

    def test_unexpected_error_exits_with_message(self):
        @click.command()
        @handle_errors
        def broken():
            raise RuntimeError("kaboom")

        result = CliRunner().invoke(broken, [])

        assert result.exit_code == 1
        assert "kaboom" in result.output

    def test_keyboard_interrupt(self):
        @click.command()
        @handle_errors
        def interrupted():
            raise KeyboardInterrupt

        result = CliRunner().invoke(interrupted, [])

        assert result.exit_code == 130

    def test_click_errors_pass_through(self):
        @click.command()
        @handle_errors
        def usage():
            raise click.UsageError("bad usage")

        result = CliRunner().invoke(usage, [])

        assert result.exit_code == 2
        assert "bad usage" in result.output


class TestLogger:
    """Test setup_logger."""

    def test_single_handler(self):
        logger = setup_logger("tests.shared.single", level="DEBUG")
        setup_logger("tests.shared.single", level="INFO")

        handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1
        assert logger.level == logging.INFO

    def test_get_logger_is_child(self):
        setup_logger("tests.shared.parent")
        child = get_logger("tests.shared.parent.child")

        assert child.getEffectiveLevel() == logging.INFO
