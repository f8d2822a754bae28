"""Форматтеры логирования с семантическими эмодзи.

Классы:
    FileFormatter
        Подробный построчный форматтер для файла.
    JSONFormatter
        Структурированный JSON для агрегаторов логов.
"""

import json
import logging
from datetime import datetime
from typing import Any

from .levels import TRACE

# Компонент имени логгера → эмодзи
EMOJI_MAP: dict[str, str] = {
    # Сессия ключа
    "session_store": "🗝️",
    "session_controller": "🗝️",
    "keys": "🗝️",
    "key_state": "🗝️",
    "gate": "🚦",
    # Генерация
    "studio": "🍌",
    "app": "🍌",
    "generation": "🎨",
    "generation_service": "🎨",
    "duomi": "🎨",
    "prompts": "✍️",
    "wireframe": "✍️",
    "multi_view": "✍️",
    "scene": "✍️",
    "fusion": "✍️",
    # Инфраструктура
    "storage": "💾",
    "supabase": "💾",
    "images": "🖼️",
    "http": "🌐",
    "memory": "🧪",
    # Служебное
    "diagnostics": "🩺",
    "config": "⚙️",
    "cli": "🖥️",
    "commands": "🖥️",
}

LEVEL_EMOJI: dict[int, str] = {
    logging.CRITICAL: "💀",
    logging.ERROR: "❌",
    logging.WARNING: "⚠️",
    logging.INFO: "",  # для INFO берём эмодзи модуля
    logging.DEBUG: "🔧",
    TRACE: "🔬",
}

FALLBACK_EMOJI: str = "📌"

# Ключи контекста, выводимые в префиксе сообщения
CONTEXT_ID_KEYS: tuple[str, ...] = (
    "request_id",
    "task_id",
    "key_id",
    "mode",
)

_STANDARD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }
)


def get_module_emoji(logger_name: str) -> str:
    """Эмодзи по самому специфичному совпавшему компоненту имени логгера."""
    for part in reversed(logger_name.lower().split(".")):
        if part in EMOJI_MAP:
            return EMOJI_MAP[part]
    return FALLBACK_EMOJI


def format_context_prefix(record: logging.LogRecord) -> str:
    """Префикс вида ``[req-1/task-42] `` или пустая строка."""
    context_ids = [
        str(getattr(record, key)) for key in CONTEXT_ID_KEYS if getattr(record, key, None)
    ]
    if context_ids:
        return f"[{'/'.join(context_ids)}] "
    return ""


def format_extra_context(record: logging.LogRecord) -> dict[str, Any]:
    """Дополнительные поля записи без стандартных атрибутов LogRecord."""
    context_fields = set(CONTEXT_ID_KEYS)
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_FIELDS
        and key not in context_fields
        and not key.startswith("_")
    }


class FileFormatter(logging.Formatter):
    """Форматтер для файлового вывода.

    Формат: 2026-10-17 14:20:02 | SESSION_CONTROLLER | INFO | 🗝️ Message | balance=90
    """

    def __init__(self, json_context: bool = False) -> None:
        super().__init__()
        self.json_context = json_context

    def format(self, record: logging.LogRecord) -> str:
        time_str = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        module = record.name.split(".")[-1].upper()
        message = record.getMessage()

        parts = [time_str, module, record.levelname, message]

        extra = format_extra_context(record)
        if extra:
            if self.json_context:
                parts.append(json.dumps(extra, ensure_ascii=False, default=str))
            else:
                parts.append(" ".join(f"{k}={v}" for k, v in extra.items()))

        result = " | ".join(parts)

        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)

        return result


class JSONFormatter(logging.Formatter):
    """JSON-форматтер (одна запись — одна строка).

    Формат:
        {"timestamp": ..., "level": "INFO", "logger": "banana_studio.core.studio",
         "message": ..., "context": {"task_id": ...}, "extra": {...}}
    """

    def __init__(self, include_location: bool = True) -> None:
        super().__init__()
        self.include_location = include_location

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = {
            key: getattr(record, key)
            for key in CONTEXT_ID_KEYS
            if getattr(record, key, None) is not None
        }
        if context:
            data["context"] = context

        extra = format_extra_context(record)
        if extra:
            data["extra"] = extra

        if self.include_location:
            data["location"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(data, ensure_ascii=False, default=str)
