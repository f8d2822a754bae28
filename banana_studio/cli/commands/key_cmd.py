"""Команда key — проверка ключа доступа и баланса.

Подкоманды:
    check: Проверить (при необходимости активировать) ключ и показать баланс.

Usage:
    banana key check ABCD-1234-EFGH
    banana key check DEMO-KEY-0001 --offline
"""

import asyncio
import json
from typing import Optional

import typer

from banana_studio.cli.app import get_cli_context
from banana_studio.cli.console import console
from banana_studio.cli.ui import balance_to_dict, progress_spinner, render_balance, render_error
from banana_studio.domain import BalanceInfo
from banana_studio.infrastructure import InMemoryKeyService
from banana_studio.utils.logger import mask_key

app = typer.Typer(
    help="🔑 Проверка ключа доступа и баланса.",
)

OFFLINE_DEMO_CREDIT = 100


async def _check(key: str, offline: bool, credit: int) -> tuple[bool, Optional[str], BalanceInfo]:
    cli_ctx = get_cli_context()

    key_service = None
    if offline:
        key_service = InMemoryKeyService()
        key_service.register(key.strip(), credit)

    async with cli_ctx.create_app(key_service=key_service) as studio_app:
        ok = await studio_app.controller.validate_and_use_key(key)
        error = studio_app.store.get_state().error
        return ok, error, studio_app.gate.balance_info()


@app.command("check")
def check(
    key: str = typer.Argument(..., help="Ключ доступа."),
    offline: bool = typer.Option(
        False,
        "--offline",
        help="Не обращаться к сервису ключей: ключ проверяется в памяти.",
    ),
    credit: int = typer.Option(
        OFFLINE_DEMO_CREDIT,
        "--credit",
        help="Номинал ключа в офлайн-режиме.",
    ),
) -> None:
    """Проверить ключ и показать баланс."""
    cli_ctx = get_cli_context()

    with progress_spinner("Проверка ключа..."):
        ok, error, info = asyncio.run(_check(key, offline, credit))

    if cli_ctx.json_output:
        console.print_json(
            json.dumps(
                {
                    "key": mask_key(key.strip()),
                    "valid": ok,
                    "error": error,
                    "balance": balance_to_dict(info),
                }
            )
        )
    elif ok:
        render_balance(info, key_label=mask_key(key.strip()))
    else:
        render_error(error or "Ключ не принят", title="Ключ не принят")

    if not ok:
        raise typer.Exit(1)


__all__ = ["app"]
