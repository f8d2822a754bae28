"""Конфигурация системы логирования.

Классы:
    LoggingConfig
        Pydantic-модель настроек логирования с поддержкой env variables.

Environment Variables:
    BANANA_LOG_LEVEL: Уровень консольного вывода (DEBUG/INFO/WARNING/ERROR).
    BANANA_LOG_FILE: Путь к файлу логов.
    BANANA_LOG_JSON: JSON-формат для файла (true/false).
    BANANA_LOG_REDACT: Маскировать ключи и токены (true/false).
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseSettings):
    """Конфигурация системы логирования.

    Приоритет: явный параметр → environment variable → default.

    Attributes:
        level: Минимальный уровень для консоли.
        file_level: Минимальный уровень для файла.
        log_file: Путь к файлу логов (None = только консоль).
        json_format: JSON-формат строк в файле.
        show_path: Показывать путь к модулю в консоли.
        redact_secrets: Маскировать токены, JWT и карточные ключи.

    Example:
        >>> config = LoggingConfig(level="DEBUG", log_file="/tmp/banana.log")
    """

    level: LogLevel = Field(
        default="INFO",
        description="Минимальный уровень для консольного вывода",
    )

    file_level: LogLevel = Field(
        default="DEBUG",
        description="Минимальный уровень для файлового вывода",
    )

    log_file: Path | None = Field(
        default=None,
        alias="file",
        description="Путь к файлу логов (None = только консоль)",
    )

    json_format: bool = Field(
        default=False,
        alias="json",
        description="Использовать JSON-формат для файла",
    )

    show_path: bool = Field(
        default=False,
        description="Показывать путь к модулю в выводе",
    )

    redact_secrets: bool = Field(
        default=True,
        alias="redact",
        description="Маскировать токены и ключи доступа в логах",
    )

    model_config = SettingsConfigDict(
        env_prefix="BANANA_LOG_",
        env_file=None,
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )
