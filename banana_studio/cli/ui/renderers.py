"""Рендереры для CLI вывода.

Функции для баланса ключа, итогов генерации и сообщений об ошибках.
"""

from typing import Optional

from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table

from banana_studio.cli.console import console
from banana_studio.domain import BalanceInfo, BalanceLevel, GenerationOutcome, OutcomeStatus

LEVEL_STYLES: dict[BalanceLevel, tuple[str, str]] = {
    BalanceLevel.OK: ("green", "Баланс в норме"),
    BalanceLevel.LOW: ("yellow", "Кредитов осталось мало"),
    BalanceLevel.CRITICAL: ("red", "Кредиты почти закончились"),
    BalanceLevel.NONE: ("dim", "Ключ не введён"),
}


def balance_to_dict(info: BalanceInfo) -> dict:
    return {
        "balance": info.balance,
        "credit": info.credit,
        "used": info.used,
        "balanceRatio": round(info.balance_ratio, 4),
        "usedRatio": round(info.used_ratio, 4),
        "canGenerate": info.can_generate,
        "level": info.level.value,
    }


def render_balance(info: BalanceInfo, key_label: Optional[str] = None) -> None:
    """Панель баланса: остаток, потрачено и шкала расхода.

    Args:
        info: Баланс из GenerationGate.balance_info().
        key_label: Маскированный ключ для заголовка.
    """
    color, caption = LEVEL_STYLES[info.level]

    table = Table.grid(padding=(0, 2))
    table.add_column(style="cyan")
    table.add_column()
    table.add_row("Остаток", f"[{color}]{info.balance}[/{color}] / {info.credit}")
    table.add_row("Потрачено", f"{info.used} ({info.used_ratio:.0%})")
    table.add_row(
        "Расход",
        ProgressBar(total=1.0, completed=info.used_ratio, width=30, complete_style=color),
    )
    table.add_row("Генерация", "доступна" if info.can_generate else "[red]недоступна[/red]")

    title = "🔑 Ключ доступа"
    if key_label:
        title += f" {key_label}"

    console.print(
        Panel(
            table,
            title=title,
            subtitle=f"[{color}]{caption}[/{color}]",
            border_style=color,
        )
    )


def render_outcome(outcome: GenerationOutcome) -> None:
    """Итог генерации."""
    if outcome.status is OutcomeStatus.COMPLETED:
        render_success(f"Изображение готово: {outcome.image_url}")
    elif outcome.status is OutcomeStatus.SUBMITTED and outcome.task:
        render_success(
            f"Задача {outcome.task.task_id} поставлена. Опрос: {outcome.task.polling_url}"
        )
    elif outcome.status is OutcomeStatus.BLOCKED:
        console.print(
            Panel(
                f"[yellow]{outcome.reason}[/yellow]",
                title="🔒 Генерация недоступна",
                border_style="yellow",
            )
        )
    else:
        render_error(outcome.reason or "Неизвестная ошибка", title="Генерация не удалась")

    if outcome.warning:
        console.print(f"[yellow]⚠️  {outcome.warning}[/yellow]")


def outcome_to_dict(outcome: GenerationOutcome) -> dict:
    return {
        "status": outcome.status.value,
        "imageUrl": outcome.image_url,
        "reason": outcome.reason,
        "warning": outcome.warning,
        "requiresKey": outcome.requires_key,
        "task": outcome.task.to_dict() if outcome.task else None,
    }


def render_error(message: str, title: str = "Ошибка") -> None:
    console.print(Panel(f"[red]{message}[/red]", title=f"❌ {title}", border_style="red"))


def render_success(message: str) -> None:
    console.print(f"[green]✅ {message}[/green]")
