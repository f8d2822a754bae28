"""Семантический логгер с поддержкой контекста.

Классы:
    StudioLogger
        Адаптер над logging.Logger: контекст через bind(), эмодзи модулей,
        дампы промптов на уровне TRACE.
"""

from __future__ import annotations

import logging
import traceback
from typing import Any

from .levels import TRACE
from .formatters import CONTEXT_ID_KEYS, get_module_emoji, LEVEL_EMOJI

# Длина превью промпта в TRACE-дампе
PROMPT_PREVIEW_CHARS: int = 500


class StudioLogger:
    """Адаптер для структурированного логирования с контекстом.

    Attributes:
        name: Имя логгера.

    Example:
        >>> logger = StudioLogger("banana_studio.core.studio")
        >>> log = logger.bind(task_id="task-123")
        >>> log.info("Task submitted")  # -> 🍌 [task-123] Task submitted
    """

    def __init__(self, name: str, context: dict[str, Any] | None = None) -> None:
        self.name = name
        self._logger = logging.getLogger(name)
        self._context: dict[str, Any] = context or {}

    def bind(self, **context: Any) -> StudioLogger:
        """Новый логгер с объединённым контекстом.

        Example:
            >>> log = get_logger(__name__).bind(request_id="req-7")
            >>> log.bind(mode="fusion").info("Prompt built")  # -> [req-7/fusion] ...
        """
        return StudioLogger(self.name, {**self._context, **context})

    def _log(self, level: int, msg: str, **context: Any) -> None:
        extra = {**self._context, **context}

        # RichHandler не использует наш форматтер, поэтому префикс — в сообщении
        context_ids = [str(extra[key]) for key in CONTEXT_ID_KEYS if extra.get(key)]
        context_prefix = f"[{'/'.join(context_ids)}] " if context_ids else ""

        emoji = LEVEL_EMOJI.get(level, "") or get_module_emoji(self.name)

        self._logger.log(level, f"{emoji} {context_prefix}{msg}", extra=extra)

    def trace(self, msg: str, **context: Any) -> None:
        self._log(TRACE, msg, **context)

    def debug(self, msg: str, **context: Any) -> None:
        self._log(logging.DEBUG, msg, **context)

    def info(self, msg: str, **context: Any) -> None:
        self._log(logging.INFO, msg, **context)

    def warning(self, msg: str, **context: Any) -> None:
        self._log(logging.WARNING, msg, **context)

    def error(self, msg: str, **context: Any) -> None:
        self._log(logging.ERROR, msg, **context)

    def critical(self, msg: str, **context: Any) -> None:
        self._log(logging.CRITICAL, msg, **context)

    def trace_prompt(
        self,
        prompt: str,
        *,
        mode: str | None = None,
        image_count: int | None = None,
        **metadata: Any,
    ) -> None:
        """Дамп собранного промпта на уровне TRACE.

        Args:
            prompt: Итоговый промпт для API генерации.
            mode: Режим редактирования.
            image_count: Сколько изображений уходит в запрос.
            **metadata: Дополнительные поля.
        """
        if len(prompt) > PROMPT_PREVIEW_CHARS:
            preview = prompt[:PROMPT_PREVIEW_CHARS] + "..."
        else:
            preview = prompt

        context: dict[str, Any] = {
            "prompt_preview": preview,
            "prompt_chars": len(prompt),
            **metadata,
        }
        if mode:
            context["mode"] = mode
        if image_count is not None:
            context["image_count"] = image_count

        self.trace("Prompt assembled", **context)

    def error_with_context(
        self,
        exc: BaseException,
        msg: str | None = None,
        *,
        include_traceback: bool = True,
        **context: Any,
    ) -> None:
        """Логирует исключение с типом, текстом и (опционально) traceback.

        Args:
            exc: Исключение.
            msg: Сообщение (по умолчанию str(exc)).
            include_traceback: Добавить traceback в контекст.
            **context: Дополнительный контекст.
        """
        error_context: dict[str, Any] = {
            "exception_type": type(exc).__name__,
            "exception_msg": str(exc),
            **context,
        }

        if include_traceback:
            error_context["traceback"] = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )

        self.error(msg or str(exc), **error_context)

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    @property
    def level(self) -> int:
        """Эффективный уровень логгера."""
        return self._logger.getEffectiveLevel()
