"""Разбор значений настроек режима с фиксированными запасными значениями."""

from typing import Any, Mapping, Optional


def pick(settings: Mapping[str, Any], name: str, table: Mapping[str, Any], default: str) -> str:
    """Значение опции ``name``, если оно есть в ``table``, иначе ``default``.

    Example:
        >>> pick({"detail": "ultra"}, "detail", {"low": 1, "medium": 2}, "medium")
        'medium'
    """
    value = settings.get(name)
    if isinstance(value, str) and value in table:
        return value
    return default


def number(settings: Mapping[str, Any], name: str, default: float) -> float:
    """Числовая опция; отсутствующее или нечисловое значение даёт ``default``.

    Ноль — допустимое значение (угол 0°, интенсивность 0%).
    """
    value: Optional[Any] = settings.get(name)
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def format_number(value: float) -> str:
    """45.0 -> '45', 22.5 -> '22.5'."""
    return str(int(value)) if float(value).is_integer() else str(value)
