"""Команда config — управление конфигурацией.

Подкоманды:
    show: Показать текущую конфигурацию.
    check: Валидировать настройки.

Usage:
    banana config show
    banana config check
"""

import json
from typing import Optional

import typer
from rich.table import Table

from banana_studio.cli.app import get_cli_context
from banana_studio.cli.console import console
from banana_studio.config import StudioConfig, find_config_file
from banana_studio.utils.logger import mask_key

app = typer.Typer(
    help="🔧 Просмотр и проверка конфигурации.",
)


def _display_secret(value: Optional[str], reveal: bool) -> str:
    if not value:
        return "[dim]not set[/dim]"
    return value if reveal else mask_key(value)


def _config_rows(config: StudioConfig, reveal: bool) -> list[tuple[str, str]]:
    return [
        ("key_service.url", config.key_service_url),
        ("key_service.token", _display_secret(config.key_service_token, reveal)),
        ("key_service.apikey", _display_secret(config.key_service_apikey, reveal)),
        ("key_service.request_timeout", f"{config.request_timeout:g} s"),
        ("key_service.low_balance_threshold", str(config.low_balance_threshold)),
        ("generation.api_url", config.generation_api_url),
        ("generation.api_key", _display_secret(config.generation_api_key, reveal)),
        ("generation.aspect_ratio", config.aspect_ratio),
        ("generation.polling_url_template", config.polling_url_template),
        ("generation.poll_interval", f"{config.poll_interval:g} s"),
        ("generation.poll_max_attempts", str(config.poll_max_attempts)),
        ("storage.url", config.storage_url),
        ("storage.bucket", config.storage_bucket),
        ("storage.service_key", _display_secret(config.storage_service_key, reveal)),
        ("logging.level", config.log_level),
        ("logging.file", str(config.log_file) if config.log_file else "[dim]not set[/dim]"),
    ]


@app.command("show")
def show(
    reveal_secrets: bool = typer.Option(
        False,
        "--reveal",
        "-r",
        help="Показать ключи без маскировки.",
    ),
) -> None:
    """Показать текущую конфигурацию."""
    cli_ctx = get_cli_context()

    try:
        config = cli_ctx.get_config()
    except ValueError as e:
        console.print(f"[red]❌ Ошибка загрузки конфигурации: {e}[/red]")
        raise typer.Exit(1)

    toml_path = find_config_file()

    if cli_ctx.json_output:
        data = {
            "source": str(toml_path) if toml_path else None,
            "config": config.to_toml_dict(),
            "secrets": {
                "key_service_token": config.key_service_token is not None,
                "key_service_apikey": config.key_service_apikey is not None,
                "generation_api_key": config.generation_api_key is not None,
                "storage_service_key": config.storage_service_key is not None,
            },
        }
        console.print_json(json.dumps(data))
        return

    source = f"{toml_path}" if toml_path else "[dim]defaults + environment[/dim]"
    console.print("\n[bold]⚙️  Текущая конфигурация[/bold]")
    console.print(f"[dim]Источник: {source}[/dim]\n")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Настройка", style="cyan")
    table.add_column("Значение", overflow="fold")
    for name, value in _config_rows(config, reveal_secrets):
        table.add_row(name, value)

    console.print(table)


@app.command("check")
def check() -> None:
    """Валидировать конфигурацию."""
    cli_ctx = get_cli_context()

    results: list[tuple[str, str, str]] = []

    toml_path = find_config_file()
    if toml_path:
        results.append(("Config file", "ok", str(toml_path)))
    else:
        results.append(("Config file", "info", "using defaults + environment"))

    try:
        config = cli_ctx.get_config()
        results.append(("Config parsing", "ok", "valid"))
    except ValueError as e:
        results.append(("Config parsing", "error", str(e)))
        _print_results(results, cli_ctx.json_output)
        raise typer.Exit(1)

    if config.key_service_token and config.key_service_apikey:
        results.append(("Key service credentials", "ok", "configured"))
    else:
        results.append(
            ("Key service credentials", "warning", "KEY_SERVICE_TOKEN / KEY_SERVICE_APIKEY not set")
        )

    for name, value in (
        ("DOMINO_API_KEY", config.generation_api_key),
        ("SUPABASE_SERVICE_ROLE_KEY", config.storage_service_key),
    ):
        if value:
            results.append((name, "ok", "configured"))
        else:
            results.append((name, "error", "not set (generation disabled)"))

    _print_results(results, cli_ctx.json_output)

    if any(status == "error" for _, status, _ in results):
        raise typer.Exit(1)


def _print_results(results: list[tuple[str, str, str]], json_output: bool) -> None:
    """Выводит результаты проверок."""
    passed = sum(1 for _, status, _ in results if status in ("ok", "info"))
    warnings = sum(1 for _, status, _ in results if status == "warning")
    failed = sum(1 for _, status, _ in results if status == "error")

    if json_output:
        data = {
            "status": "healthy" if failed == 0 else "unhealthy",
            "passed": passed,
            "warnings": warnings,
            "failed": failed,
            "checks": {
                name: {"status": status, "message": msg} for name, status, msg in results
            },
        }
        console.print_json(json.dumps(data))
        return

    console.print("\n[bold]🔍 Проверка конфигурации...[/bold]\n")
    for name, status, msg in results:
        console.print(f"{status_icon(status)} {name}: {msg}")

    console.print()

    status_text = "[green]Healthy[/green]" if failed == 0 else "[red]Unhealthy[/red]"
    summary = f"Summary: {passed} passed"
    if warnings > 0:
        summary += f", {warnings} warnings"
    if failed > 0:
        summary += f", {failed} errors"

    console.print(f"🩺 Status: {status_text}")
    console.print(f"   {summary}")


def status_icon(status: str) -> str:
    if status == "ok":
        return "[green]✅[/green]"
    if status == "warning":
        return "[yellow]⚠️[/yellow]"
    if status == "error":
        return "[red]❌[/red]"
    return "[blue]ℹ️[/blue]"


__all__ = ["app", "status_icon"]
