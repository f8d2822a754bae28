"""Диагностические утилиты для системы логирования.

Функции:
    dump_debug_info()
        Текстовый отчёт о системе для баг-репортов.
    check_config()
        Проверка конфигурации логирования.
    get_handlers_info()
        Информация об активных хендлерах.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from datetime import datetime
from importlib import metadata
from pathlib import Path
from typing import Any

from .config import LoggingConfig
from .filters import SensitiveDataFilter

# Дистрибутивы, версии которых попадают в отчёт
TRACKED_PACKAGES: tuple[str, ...] = (
    "httpx",
    "pydantic",
    "pydantic-settings",
    "rich",
    "typer",
    "Pillow",
)


def get_package_versions() -> dict[str, str]:
    """Версии banana_studio и основных зависимостей."""
    from banana_studio import __version__

    versions: dict[str, str] = {"banana-studio": __version__}
    for package in TRACKED_PACKAGES:
        try:
            versions[package] = metadata.version(package)
        except metadata.PackageNotFoundError:
            versions[package] = "not installed"
    return versions


def get_handlers_info() -> list[dict[str, Any]]:
    """Описание хендлеров корневого логгера banana_studio."""
    root_logger = logging.getLogger("banana_studio")
    handlers_info: list[dict[str, Any]] = []

    for handler in root_logger.handlers:
        handler_info: dict[str, Any] = {
            "type": type(handler).__name__,
            "level": logging.getLevelName(handler.level),
        }
        if isinstance(handler, logging.FileHandler):
            handler_info["file"] = handler.baseFilename
        if handler.formatter:
            handler_info["formatter"] = type(handler.formatter).__name__
        filters = [type(f).__name__ for f in handler.filters]
        if filters:
            handler_info["filters"] = filters
        handlers_info.append(handler_info)

    return handlers_info


def get_environment_vars() -> dict[str, str]:
    """Переменные BANANA_*; значения секретов скрыты."""
    env_vars: dict[str, str] = {}
    for key, value in os.environ.items():
        if key.startswith("BANANA_"):
            if any(secret in key.upper() for secret in ("KEY", "SECRET", "TOKEN")):
                env_vars[key] = "***SET***"
            else:
                env_vars[key] = value
    return env_vars


def dump_debug_info(config: LoggingConfig | None = None) -> str:
    """Собирает отчёт: система, версии пакетов, конфиг логов, env, хендлеры.

    Args:
        config: Конфигурация логирования (если None — текущая).

    Returns:
        Многострочный текстовый отчёт.
    """
    if config is None:
        from . import get_current_config

        config = get_current_config()

    lines: list[str] = ["=" * 40, "Banana Studio Debug Info", "=" * 40]
    lines.append(f"Generated: {datetime.now().isoformat()}")
    lines.append("")

    lines.append("[System]")
    lines.append(f"Python: {sys.version.split()[0]}")
    lines.append(f"Platform: {platform.platform()}")
    lines.append("")

    lines.append("[Packages]")
    for package, version in sorted(get_package_versions().items()):
        lines.append(f"{package}: {version}")
    lines.append("")

    lines.append("[Logging Config]")
    lines.append(f"level: {config.level}")
    lines.append(f"file_level: {config.file_level}")
    lines.append(f"log_file: {config.log_file or 'None (console only)'}")
    lines.append(f"json_format: {config.json_format}")
    lines.append(f"redact_secrets: {config.redact_secrets}")
    lines.append("")

    lines.append("[Environment Variables]")
    env_vars = get_environment_vars()
    if env_vars:
        for key, value in sorted(env_vars.items()):
            lines.append(f"{key}: {value}")
    else:
        lines.append("No BANANA_* variables set")
    lines.append("")

    lines.append("[Active Handlers]")
    handlers = get_handlers_info()
    if handlers:
        for i, h in enumerate(handlers, 1):
            handler_str = f"{i}. {h['type']} (level={h['level']})"
            if "file" in h:
                handler_str += f" → {h['file']}"
            lines.append(handler_str)
            if "filters" in h:
                lines.append(f"   Filters: {', '.join(h['filters'])}")
    else:
        lines.append("No handlers configured")

    lines.append("=" * 40)
    return "\n".join(lines)


def check_config(config: LoggingConfig | None = None) -> list[str]:
    """Проверяет доступность файла логов и работу фильтра секретов.

    Returns:
        Список предупреждений (пустой, если всё в порядке).
    """
    if config is None:
        from . import get_current_config

        config = get_current_config()

    warnings: list[str] = []

    if config.log_file:
        log_path = Path(config.log_file)
        if not log_path.parent.exists():
            warnings.append(f"Log directory does not exist: {log_path.parent}")
        elif log_path.exists() and not os.access(log_path, os.W_OK):
            warnings.append(f"Log file is not writable: {log_path}")
        elif not log_path.exists() and not os.access(log_path.parent, os.W_OK):
            warnings.append(
                f"Cannot create log file, directory not writable: {log_path.parent}"
            )

    if config.redact_secrets:
        test_token = "Bearer abcdefghijklmnopqrstuvwxyz012345"
        if test_token in SensitiveDataFilter()._redact_string(test_token):
            warnings.append("SensitiveDataFilter is not redacting bearer tokens")

    return warnings
