"""Уровни логирования студии.

TRACE (5) нужен для дампов промптов и сырых ответов сервисов ключей
и генерации; стандартных уровней для этого не хватает.

Функции:
    install_trace_level()
        Регистрирует имя уровня TRACE в модуле logging.
    resolve_level(name)
        Числовой уровень по имени из LoggingConfig / --log-level.
"""

import logging

TRACE: int = 5

_NAMED_LEVELS: dict[str, int] = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def install_trace_level() -> None:
    """Регистрирует имя TRACE; повторные вызовы ничего не меняют."""
    if logging.getLevelName(TRACE) != "TRACE":
        logging.addLevelName(TRACE, "TRACE")


def resolve_level(name: str | None, default: int = TRACE) -> int:
    """Числовой уровень по имени без учёта регистра.

    Неизвестное или пустое имя даёт ``default``: хендлер тогда пропускает
    всё, а не молча глушит логи.

    Example:
        >>> resolve_level("debug")
        10
        >>> resolve_level("LOUD")
        5
    """
    if not name:
        return default
    return _NAMED_LEVELS.get(name.strip().upper(), default)
