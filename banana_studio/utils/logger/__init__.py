"""Система семантического логирования с эмодзи и фильтрацией секретов.

Функции:
    get_logger(name: str) -> StudioLogger
        Логгер для модуля (ленивая инициализация с дефолтами).

    setup_logging(config: LoggingConfig | None = None) -> None
        Инициализировать хендлеры.

    dump_debug_info / check_config
        Диагностика для баг-репортов и `banana doctor`.

Environment Variables:
    BANANA_LOG_LEVEL, BANANA_LOG_FILE, BANANA_LOG_JSON, BANANA_LOG_REDACT.

Example:
    >>> from banana_studio.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.bind(task_id="task-1").info("Task submitted")
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import LoggingConfig
from .filters import SensitiveDataFilter, mask_key
from .formatters import FileFormatter, JSONFormatter
from .levels import TRACE, install_trace_level, resolve_level
from .logger import StudioLogger
from .diagnostics import dump_debug_info, check_config, get_handlers_info

install_trace_level()

_logging_configured: bool = False
_current_config: LoggingConfig | None = None

ROOT_LOGGER_NAME: str = "banana_studio"


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Инициализирует систему логирования.

    Настраивает RichHandler для консоли, опциональный файловый хендлер
    (построчный или JSON) и SensitiveDataFilter.

    Args:
        config: Конфигурация. Если None — дефолты и BANANA_LOG_* из env.

    Note:
        Повторный вызов заменяет ранее установленные хендлеры.
    """
    global _logging_configured, _current_config

    config = config or LoggingConfig()
    _current_config = config

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(TRACE)

    sensitive_filter = SensitiveDataFilter() if config.redact_secrets else None

    # stderr: stdout занят результатами CLI (в т.ч. --json)
    # markup=False: префиксы [task-id] не должны разбираться как стили rich
    console_handler = RichHandler(
        console=Console(stderr=True),
        level=resolve_level(config.level),
        show_time=True,
        show_level=False,
        show_path=config.show_path,
        rich_tracebacks=True,
        markup=False,
    )
    if sensitive_filter:
        console_handler.addFilter(sensitive_filter)
    root_logger.addHandler(console_handler)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(resolve_level(config.file_level))
        if config.json_format:
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(FileFormatter())
        if sensitive_filter:
            file_handler.addFilter(sensitive_filter)
        root_logger.addHandler(file_handler)

    root_logger.propagate = False
    _logging_configured = True


def get_logger(name: str) -> StudioLogger:
    """Логгер для модуля (обычно ``get_logger(__name__)``)."""
    if not _logging_configured:
        setup_logging()
    return StudioLogger(name)


def get_current_config() -> LoggingConfig:
    """Активная LoggingConfig или дефолтная."""
    return _current_config or LoggingConfig()


__all__ = [
    "TRACE",
    "get_logger",
    "setup_logging",
    "get_current_config",
    "dump_debug_info",
    "check_config",
    "get_handlers_info",
    "mask_key",
    "StudioLogger",
    "LoggingConfig",
    "FileFormatter",
    "JSONFormatter",
    "SensitiveDataFilter",
]
