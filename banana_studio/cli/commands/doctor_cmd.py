"""Команда doctor — диагностика окружения.

Выполняет комплексную проверку:
- Python версия
- Зависимости
- Конфигурация и ключи API
- Логирование

Usage:
    banana doctor [OPTIONS]
"""

import json
import platform
import sys

import typer

from banana_studio.cli.app import get_cli_context
from banana_studio.cli.console import console
from banana_studio.cli.commands.config_cmd import status_icon
from banana_studio.config import find_config_file

app = typer.Typer(
    help="🩺 Диагностика окружения Banana Studio.",
    invoke_without_command=True,
)

# Модуль импорта -> имя пакета для pip
REQUIRED_MODULES: dict[str, str] = {
    "typer": "typer",
    "rich": "rich",
    "pydantic": "pydantic",
    "pydantic_settings": "pydantic-settings",
    "httpx": "httpx",
    "PIL": "Pillow",
}

Check = tuple[str, str, str]


def _environment_checks() -> list[Check]:
    checks: list[Check] = []

    py_version = platform.python_version()
    if sys.version_info[:2] >= (3, 11):
        checks.append(("Python", "ok", py_version))
    else:
        checks.append(("Python", "error", f"{py_version} (requires 3.11+)"))

    from banana_studio import __version__

    checks.append(("banana-studio", "ok", __version__))

    missing = []
    for module_name, package in REQUIRED_MODULES.items():
        try:
            __import__(module_name)
        except ImportError:
            missing.append(package)

    if missing:
        checks.append(("Dependencies", "error", f"missing: {', '.join(missing)}"))
    else:
        checks.append(("Dependencies", "ok", "all installed"))

    return checks


def _config_checks(verbose: bool) -> list[Check]:
    cli_ctx = get_cli_context()
    checks: list[Check] = []

    toml_path = find_config_file()
    checks.append(
        ("Config file", "ok" if toml_path else "info", str(toml_path or "defaults + environment"))
    )

    try:
        config = cli_ctx.get_config()
    except ValueError as e:
        checks.append(("Config", "error", str(e)))
        return checks

    checks.append(("Key service", "info", config.key_service_url))
    if config.key_service_token:
        checks.append(("KEY_SERVICE_TOKEN", "ok", "configured"))
    else:
        checks.append(("KEY_SERVICE_TOKEN", "warning", "not configured"))

    checks.append(
        (
            "DOMINO_API_KEY",
            "ok" if config.generation_api_key else "error",
            "configured" if config.generation_api_key else "not configured",
        )
    )
    checks.append(
        (
            "SUPABASE_SERVICE_ROLE_KEY",
            "ok" if config.storage_service_key else "error",
            "configured" if config.storage_service_key else "not configured",
        )
    )

    if verbose:
        checks.append(("Generation API", "info", config.generation_api_url))
        checks.append(("Storage", "info", f"{config.storage_url} / {config.storage_bucket}"))

    return checks


def _logging_checks() -> list[Check]:
    from banana_studio.utils.logger import check_config

    warnings = check_config()
    if not warnings:
        return [("Logging", "ok", "configured")]
    return [("Logging", "warning", w) for w in warnings]


@app.callback(invoke_without_command=True)
def doctor(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Подробный вывод.",
    ),
    debug_info: bool = typer.Option(
        False,
        "--debug-info",
        help="Вывести отчёт для баг-репорта.",
    ),
) -> None:
    """Выполнить диагностику окружения."""
    cli_ctx = get_cli_context()

    if debug_info:
        from banana_studio.utils.logger import dump_debug_info

        console.print(dump_debug_info(), markup=False, highlight=False)
        return

    sections = [
        ("Environment", _environment_checks()),
        ("Configuration", _config_checks(verbose)),
        ("Logging", _logging_checks()),
    ]
    all_checks = [check for _, checks in sections for check in checks]

    if cli_ctx.json_output:
        _output_json(all_checks)
    else:
        _output_rich(sections, all_checks)

    if any(status == "error" for _, status, _ in all_checks):
        raise typer.Exit(1)


def _output_json(checks: list[Check]) -> None:
    """Вывод в JSON формате."""
    passed = sum(1 for _, status, _ in checks if status == "ok")
    warnings = sum(1 for _, status, _ in checks if status == "warning")
    errors = sum(1 for _, status, _ in checks if status == "error")

    data = {
        "status": "healthy" if errors == 0 else "unhealthy",
        "passed": passed,
        "warnings": warnings,
        "errors": errors,
        "checks": {
            name: {"status": status, "value": value} for name, status, value in checks
        },
    }
    console.print_json(json.dumps(data))


def _output_rich(sections: list[tuple[str, list[Check]]], all_checks: list[Check]) -> None:
    """Вывод в Rich формате."""
    console.print("\n[bold]🩺 Диагностика Banana Studio...[/bold]\n")

    for section_name, checks in sections:
        console.print(f"[bold]{section_name}:[/bold]")
        for name, status, value in checks:
            console.print(f"  {status_icon(status)} {name}: {value}")
        console.print()

    warnings = sum(1 for _, status, _ in all_checks if status == "warning")
    errors = sum(1 for _, status, _ in all_checks if status == "error")

    console.print("━" * 60)

    if errors == 0:
        status_emoji = "🩺"
        status_text = "[green]Healthy[/green]"
    else:
        status_emoji = "🚨"
        status_text = "[red]Unhealthy[/red]"

    if warnings > 0:
        status_text += f" ({warnings} warning{'s' if warnings > 1 else ''})"

    console.print(f"\n{status_emoji} Diagnosis: {status_text}")

    if errors > 0 or warnings > 0:
        console.print("\n[bold]💡 Рекомендации:[/bold]")
        for name, status, _ in all_checks:
            if name == "DOMINO_API_KEY" and status == "error":
                console.print("   • Добавьте DOMINO_API_KEY в окружение или .env")
            if name == "SUPABASE_SERVICE_ROLE_KEY" and status == "error":
                console.print("   • Добавьте SUPABASE_SERVICE_ROLE_KEY в окружение или .env")
            if name == "KEY_SERVICE_TOKEN" and status == "warning":
                console.print("   • Без KEY_SERVICE_TOKEN сервис ключей может отклонять запросы")
            if name == "Dependencies" and status == "error":
                console.print("   • Переустановите пакет: pip install -e .")


__all__ = ["app"]
