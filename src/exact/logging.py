"""
structlog configuration для exact-root-two

Модули exact.* пишут через stdlib-логгеры (logging.getLogger("exact.*"))
с полями в extra. configure_logging подключает к логгеру exact один
stderr-handler с structlog.stdlib.ProcessorFormatter:
- Human (default): консольный рендерер structlog
- JSON (log_json=True): структурированные JSON-строки

Root logger не затрагивается: библиотека не перенастраивает логирование
приложения.
"""

import logging
import sys

import structlog

LOGGER_NAME = "exact"


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """
    Подключение structlog-форматирования к логгеру exact.

    Повторный вызов заменяет handler, а не добавляет новый.

    Args:
        verbose: DEBUG для логгера exact; иначе только WARNING+
        log_json: JSON-рендерер вместо консольного
    """
    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    exact_logger = logging.getLogger(LOGGER_NAME)
    exact_logger.handlers.clear()
    exact_logger.addHandler(handler)
    exact_logger.propagate = False
    exact_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
