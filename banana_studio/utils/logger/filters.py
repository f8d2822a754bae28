"""Фильтры логирования для безопасности.

Классы:
    SensitiveDataFilter
        Маскирует токены сервисов и ключи доступа в записях лога.

Функции:
    mask_key(key)
        Короткое безопасное представление ключа доступа для логов и UI.
"""

import logging
import re
from typing import Pattern

SENSITIVE_PATTERNS: list[Pattern[str]] = [
    re.compile(r"eyJ[0-9A-Za-z_-]{10,}\.[0-9A-Za-z_-]{10,}\.[0-9A-Za-z_-]{10,}"),  # JWT
    re.compile(r"sbp_[0-9a-f]{20,}"),  # Supabase access token
    re.compile(r"sk-[0-9a-zA-Z]{20,}"),  # OpenAI-style key
    re.compile(r"(?i)bearer\s+[a-zA-Z0-9._-]{20,}"),
    re.compile(r"(?i)(\"?key_string\"?\s*[:=]\s*\"?)[^\s\",}]+"),
]

REDACTED: str = "***REDACTED***"


def mask_key(key: str | None) -> str:
    """Маскирует ключ доступа, оставляя по 4 символа с краёв.

    Args:
        key: Ключ доступа.

    Returns:
        Строка вида ``ABCD***WXYZ``, ``****`` для коротких ключей
        или ``<none>``.
    """
    if not key:
        return "<none>"
    if len(key) <= 8:
        return "****"
    return f"{key[:4]}***{key[-4:]}"


class SensitiveDataFilter(logging.Filter):
    """Заменяет секреты на ***REDACTED*** в record.msg и record.args.

    Для ``key_string=...`` маскируется только значение, имя поля остаётся.
    """

    def __init__(
        self,
        patterns: list[Pattern[str]] | None = None,
        redacted: str = REDACTED,
        name: str = "",
    ) -> None:
        super().__init__(name)
        self.patterns = patterns or SENSITIVE_PATTERNS
        self.redacted = redacted

    def _redact_string(self, text: str) -> str:
        result = text
        for pattern in self.patterns:
            if pattern.groups:
                result = pattern.sub(lambda m: m.group(1) + self.redacted, result)
            else:
                result = pattern.sub(self.redacted, result)
        return result

    def _redact_value(self, value: object) -> object:
        if isinstance(value, str):
            return self._redact_string(value)
        elif isinstance(value, dict):
            return {k: self._redact_value(v) for k, v in value.items()}
        elif isinstance(value, (list, tuple)):
            return type(value)(self._redact_value(item) for item in value)
        return value

    def filter(self, record: logging.LogRecord) -> bool:
        """Модифицирует запись; всегда возвращает True."""
        if isinstance(record.msg, str):
            record.msg = self._redact_string(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._redact_value(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._redact_value(arg) for arg in record.args)

        return True
