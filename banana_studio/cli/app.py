"""Typer приложение — главный CLI.

Определяет глобальные опции и монтирует команды.

Attributes:
    app: Главное Typer приложение.
"""

from typing import Optional

import typer

from banana_studio.cli.context import CLIContext

app = typer.Typer(
    name="banana",
    help="🍌 Banana Studio CLI — генерация изображений товаров по ключу доступа.",
    add_completion=True,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Хранение контекста между callback и командами
_cli_context: Optional[CLIContext] = None


def get_cli_context() -> CLIContext:
    """Текущий CLI контекст (дефолтный, если команда вызвана напрямую)."""
    if _cli_context is None:
        return CLIContext()
    return _cli_context


def version_callback(value: bool) -> None:
    """Показать версию и выйти."""
    if value:
        from banana_studio import __version__

        typer.echo(f"Banana Studio CLI v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Показать версию и выйти.",
        callback=version_callback,
        is_eager=True,
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Уровень логирования: TRACE, DEBUG, INFO, WARNING, ERROR.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Вывод в формате JSON (для скриптов).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Подробный вывод (эквивалент --log-level INFO).",
    ),
) -> None:
    """🍌 Banana Studio CLI — генерация изображений товаров по ключу доступа."""
    global _cli_context

    _cli_context = CLIContext(
        log_level=log_level,
        json_output=json_output,
        verbose=verbose,
    )
    ctx.obj = _cli_context


# === Монтирование команд ===

from banana_studio.cli.commands import (  # noqa: E402
    config_cmd,
    doctor_cmd,
    generate_cmd,
    init_cmd,
    key_cmd,
    prompt_cmd,
)

app.add_typer(init_cmd.app, name="init")
app.add_typer(config_cmd.app, name="config")
app.add_typer(doctor_cmd.app, name="doctor")
app.add_typer(key_cmd.app, name="key")
app.command(name="prompt")(prompt_cmd.prompt)
app.command(name="generate")(generate_cmd.generate)


__all__ = ["app", "get_cli_context"]
