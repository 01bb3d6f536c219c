"""
Тесты для structlog configuration

Проверяет:
1. Уровни логгера exact (verbose / non-verbose)
2. JSON-вывод событий переполнения и невалидной степени с полями из extra
3. Идемпотентность configure_logging и неизменность root logger
"""

import json
import logging
from collections.abc import Generator

import pytest

from src.exact.logging import LOGGER_NAME, configure_logging
from src.exact.math.dyadic import Dyadic
from src.exact.math.fixed_width import FixedWidthOverflow
from src.exact.math.root_two import InvalidExponent, RootTwo


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None, None, None]:
    """Восстановление состояния логгера exact после каждого теста."""
    exact = logging.getLogger(LOGGER_NAME)
    original_handlers = exact.handlers[:]
    original_level = exact.level
    original_propagate = exact.propagate
    yield
    exact.handlers = original_handlers
    exact.setLevel(original_level)
    exact.propagate = original_propagate


def _last_json_line(capfd: pytest.CaptureFixture[str]) -> dict:
    return json.loads(capfd.readouterr().err.strip().splitlines()[-1])


class TestConfigureLogging:
    """Тесты configure_logging"""

    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger(LOGGER_NAME).level == logging.WARNING

    def test_root_logger_untouched(self) -> None:
        root = logging.getLogger()
        handlers_before = root.handlers[:]
        level_before = root.level
        configure_logging(verbose=True, log_json=True)
        assert root.handlers == handlers_before
        assert root.level == level_before

    def test_human_mode_output(self) -> None:
        """Smoke test: консольный рендерер не падает"""
        configure_logging(verbose=True, log_json=False)
        logging.getLogger("exact.test").warning("hello world", extra={"key": "val"})

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("exact.test").warning("json test", extra={"answer": 42})
        parsed = _last_json_line(capfd)
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "exact.test"
        assert "timestamp" in parsed

    def test_idempotent_calls(self) -> None:
        """Повторные вызовы не накапливают handlers"""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger(LOGGER_NAME).handlers) == 1


class TestArithmeticEvents:
    """Структурированные DEBUG-события перед исключениями арифметики"""

    def test_overflow_event_fields(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)

        with pytest.raises(FixedWidthOverflow):
            Dyadic(2**40, 0) * Dyadic(2**40, 0)

        parsed = _last_json_line(capfd)
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "exact.fixed_width"
        assert parsed["event"] == "fixed_width.overflow"
        assert parsed["quantity"] == "numerator"
        assert parsed["value"] == 2**80
        assert parsed["width"] == "i64"

    def test_shift_overflow_event_fields(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)

        with pytest.raises(FixedWidthOverflow):
            Dyadic(3, 0) + Dyadic(1, 70)

        parsed = _last_json_line(capfd)
        assert parsed["event"] == "fixed_width.overflow"
        assert parsed["value"] == "3*2**70"

    def test_invalid_exponent_event_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)

        with pytest.raises(InvalidExponent):
            RootTwo(1, 1) ** -2

        parsed = _last_json_line(capfd)
        assert parsed["logger"] == "exact.root_two"
        assert parsed["event"] == "root_two.invalid_exponent"
        assert parsed["exponent"] == -2
        assert parsed["base"] == "RootTwo(a=1, b=1)"

    def test_overflow_silent_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)

        with pytest.raises(FixedWidthOverflow):
            Dyadic(2**62, 0) + Dyadic(2**62, 0)

        assert capfd.readouterr().err == ""
