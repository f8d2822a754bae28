"""Команда init — инициализация проекта.

Создаёт banana.toml в текущей директории.

Usage:
    banana init [OPTIONS]
"""

import os
from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, Prompt

from banana_studio.cli.console import console
from banana_studio.config import CONFIG_FILE_NAME, StudioConfig

app = typer.Typer(
    help="⚙️ Инициализация проекта Banana Studio.",
    invoke_without_command=True,
)

ASPECT_RATIOS = ["1:1", "3:4", "4:3", "9:16", "16:9"]

# Переменные окружения с секретами, которые init только проверяет
SECRET_ENV_VARS = (
    ("DOMINO_API_KEY", "ключ API генерации"),
    ("SUPABASE_SERVICE_ROLE_KEY", "сервисный ключ хранилища"),
    ("KEY_SERVICE_TOKEN", "токен сервиса ключей"),
)


@app.callback(invoke_without_command=True)
def init(
    ctx: typer.Context,
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Перезаписать существующий конфиг.",
    ),
    non_interactive: bool = typer.Option(
        False,
        "--non-interactive",
        "-y",
        help="Использовать значения по умолчанию без вопросов.",
    ),
    output_path: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Путь для сохранения конфига (по умолчанию: ./banana.toml).",
    ),
) -> None:
    """Создать banana.toml в текущей директории."""
    config_path = output_path or Path.cwd() / CONFIG_FILE_NAME

    if config_path.exists() and not force:
        console.print(f"[yellow]⚠️  Файл {config_path} уже существует.[/yellow]")
        if non_interactive:
            console.print("Используйте --force для перезаписи.")
            raise typer.Exit(1)

        if not Confirm.ask("Перезаписать?", default=False):
            raise typer.Exit(0)

    console.print("\n[bold]⚙️  Инициализация Banana Studio...[/bold]\n")

    defaults = StudioConfig.model_construct()

    if non_interactive:
        log_level = defaults.log_level
        aspect_ratio = defaults.aspect_ratio
        request_timeout = defaults.request_timeout
    else:
        log_level = Prompt.ask(
            "📊 Уровень логирования",
            default=defaults.log_level,
            choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"],
        )
        aspect_ratio = Prompt.ask(
            "🖼️  Соотношение сторон результата",
            default=defaults.aspect_ratio,
            choices=ASPECT_RATIOS,
        )
        request_timeout = FloatPrompt.ask(
            "⏱️  Таймаут запроса к сервису ключей, секунды",
            default=defaults.request_timeout,
        )

    for env_name, title in SECRET_ENV_VARS:
        if os.environ.get(env_name):
            console.print(f"[green]✅ {env_name} найден в окружении[/green]")
        else:
            console.print(
                f"[yellow]⚠️  {env_name} ({title}) не найден. "
                "Установите его в окружении или .env.[/yellow]"
            )

    toml_content = _generate_toml(
        defaults,
        log_level=log_level,
        aspect_ratio=aspect_ratio,
        request_timeout=request_timeout,
    )

    config_path.write_text(toml_content, encoding="utf-8")

    console.print(f"\n[green]✅ Создан: {config_path}[/green]\n")

    console.print(
        Panel(
            f"""[bold]📁 Файлы проекта:[/bold]

   ./{CONFIG_FILE_NAME}     # Конфигурация (без секретов)
   ./.env            # Ключи: DOMINO_API_KEY, SUPABASE_SERVICE_ROLE_KEY

[bold]💡 Следующие шаги:[/bold]

   1. Добавьте ключи в .env
   2. Проверьте настройки: banana config check
   3. Проверьте ключ доступа: banana key check YOUR-KEY""",
            title="[bold yellow]🍌 Banana Studio[/bold yellow]",
            border_style="yellow",
        )
    )


def _generate_toml(
    defaults: StudioConfig,
    log_level: str,
    aspect_ratio: str,
    request_timeout: float,
) -> str:
    """Генерирует содержимое banana.toml.

    Args:
        defaults: Конфиг со значениями по умолчанию (URL сервисов).
        log_level: Уровень логирования.
        aspect_ratio: Соотношение сторон результата.
        request_timeout: Таймаут запроса к сервису ключей.

    Returns:
        Строка с содержимым TOML файла.
    """
    return f'''# Banana Studio Configuration
# Generated by: banana init

[key_service]
url = "{defaults.key_service_url}"
request_timeout = {request_timeout:g}
low_balance_threshold = {defaults.low_balance_threshold}
# Токен читается из KEY_SERVICE_TOKEN / KEY_SERVICE_APIKEY

[generation]
# Ключ читается из переменной окружения DOMINO_API_KEY
api_url = "{defaults.generation_api_url}"
aspect_ratio = "{aspect_ratio}"
polling_url_template = "{defaults.polling_url_template}"
poll_interval = {defaults.poll_interval:g}
poll_max_attempts = {defaults.poll_max_attempts}

[storage]
# Ключ читается из SUPABASE_SERVICE_ROLE_KEY
url = "{defaults.storage_url}"
bucket = "{defaults.storage_bucket}"

[logging]
level = "{log_level}"
# file = "banana.log"  # Раскомментируйте для записи в файл
'''


__all__ = ["app"]
