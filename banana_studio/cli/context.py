"""CLI Context — контейнер зависимостей для команд.

Компоненты создаются лениво, чтобы --help работал мгновенно.

Classes:
    CLIContext: Настройки глобальных опций и фабрика StudioApp.
"""

from dataclasses import dataclass, field
from typing import Optional

from rich.console import Console

from banana_studio.cli.console import console as default_console
from banana_studio.config import StudioConfig, get_config
from banana_studio.core import StudioApp
from banana_studio.interfaces import BaseKeyService


@dataclass
class CLIContext:
    """Контейнер зависимостей для CLI команд.

    Attributes:
        log_level: Override уровня логирования из CLI.
        json_output: Режим JSON вывода (для скриптов).
        verbose: Подробный вывод.
        console: Rich Console для вывода.

    Example:
        >>> ctx = CLIContext(log_level="DEBUG")
        >>> async with ctx.create_app() as app:
        ...     await app.controller.validate_and_use_key(key)
    """

    log_level: Optional[str] = None
    json_output: bool = False
    verbose: bool = False
    console: Console = field(default_factory=lambda: default_console)

    _config: Optional[StudioConfig] = field(default=None, init=False, repr=False)
    _logging_configured: bool = field(default=False, init=False, repr=False)

    def get_config(self) -> StudioConfig:
        """Загрузить конфигурацию (с учётом CLI overrides)."""
        if self._config is None:
            overrides = {}
            if self.log_level:
                overrides["log_level"] = self.log_level.upper()

            self._config = get_config(**overrides)
        return self._config

    def create_app(self, key_service: Optional[BaseKeyService] = None) -> StudioApp:
        """Новый StudioApp из конфига; логирование настраивается один раз.

        Args:
            key_service: Подменить сервис ключей (например, офлайн-режим).
        """
        config = self.get_config()
        self._ensure_logging(config)
        return StudioApp(config, key_service=key_service)

    def _ensure_logging(self, config: StudioConfig) -> None:
        if self._logging_configured:
            return

        from banana_studio.utils.logger import LoggingConfig, setup_logging

        # Verbose mode повышает уровень до INFO
        level = config.log_level
        if self.verbose and level in ("WARNING", "ERROR", "CRITICAL"):
            level = "INFO"

        setup_logging(LoggingConfig(level=level, log_file=config.log_file))
        self._logging_configured = True


__all__ = ["CLIContext"]
