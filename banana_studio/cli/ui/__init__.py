"""UI слой CLI — Rich виджеты и рендереры.

Модули:
    renderers — Баланс, итоги генерации, ошибки
    spinners — Прогресс-индикаторы
"""

from banana_studio.cli.ui.renderers import (
    balance_to_dict,
    outcome_to_dict,
    render_balance,
    render_outcome,
    render_error,
    render_success,
)
from banana_studio.cli.ui.spinners import progress_spinner

__all__ = [
    "balance_to_dict",
    "outcome_to_dict",
    "render_balance",
    "render_outcome",
    "render_error",
    "render_success",
    "progress_spinner",
]
