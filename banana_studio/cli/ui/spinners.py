"""Прогресс-индикаторы для CLI."""

from contextlib import contextmanager
from typing import Iterator

from rich.progress import Progress, SpinnerColumn, TextColumn

from banana_studio.cli.console import console


@contextmanager
def progress_spinner(message: str = "Обработка...") -> Iterator[None]:
    """Контекстный менеджер для спиннера.

    Example:
        with progress_spinner("Генерация..."):
            asyncio.run(work())
    """
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(description=f"[cyan]{message}[/cyan]", total=None)
        yield
