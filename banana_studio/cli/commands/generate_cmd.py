"""Команда generate — генерация изображения со списанием кредитов.

Сценарий: проверка ключа -> гейт -> загрузка и постановка задачи ->
ожидание результата -> списание кредитов.

Usage:
    banana generate product.jpg --mode wireframe --key ABCD-1234-EFGH
    banana generate product.jpg -m scene -k KEY --scene room.jpg -s source=upload
    banana generate product.jpg -m fusion -k KEY --reference chair.png --no-wait
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from banana_studio.cli.app import get_cli_context
from banana_studio.cli.commands.prompt_cmd import parse_settings
from banana_studio.cli.console import console
from banana_studio.cli.ui import (
    balance_to_dict,
    outcome_to_dict,
    progress_spinner,
    render_balance,
    render_error,
    render_outcome,
)
from banana_studio.domain import (
    BalanceInfo,
    EditMode,
    GenerationError,
    GenerationOutcome,
    GenerationRequest,
)
from banana_studio.infrastructure.media import file_to_data_url
from banana_studio.utils.logger import mask_key


def _load_image(path: Optional[Path]) -> Optional[str]:
    if path is None:
        return None
    return file_to_data_url(path)


async def _run(
    key: str, request: GenerationRequest, wait: bool
) -> tuple[Optional[GenerationOutcome], Optional[str], BalanceInfo]:
    """Проверить ключ и выполнить генерацию.

    Returns:
        (итог или None, если ключ не принят; ошибка ключа; баланс).
    """
    cli_ctx = get_cli_context()

    async with cli_ctx.create_app() as studio_app:
        if not await studio_app.controller.validate_and_use_key(key):
            return None, studio_app.store.get_state().error, studio_app.gate.balance_info()

        outcome = await studio_app.studio.generate(request, wait=wait)
        return outcome, None, studio_app.gate.balance_info()


def generate(
    image: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Фото продукта.",
    ),
    mode: EditMode = typer.Option(..., "--mode", "-m", help="Режим редактирования."),
    key: str = typer.Option(..., "--key", "-k", help="Ключ доступа.", envvar="BANANA_ACCESS_KEY"),
    setting: Optional[list[str]] = typer.Option(
        None,
        "--setting",
        "-s",
        help="Настройка режима key=value (можно повторять).",
    ),
    scene: Optional[Path] = typer.Option(
        None, "--scene", exists=True, dir_okay=False, help="Изображение сцены (режим scene)."
    ),
    reference: Optional[Path] = typer.Option(
        None, "--reference", exists=True, dir_okay=False, help="Референс (режим fusion)."
    ),
    no_wait: bool = typer.Option(
        False,
        "--no-wait",
        help="Не ждать результата: вывести задачу для опроса.",
    ),
) -> None:
    """🎨 Сгенерировать изображение и списать кредиты."""
    cli_ctx = get_cli_context()
    settings = parse_settings(setting)

    try:
        request = GenerationRequest(
            image_data=_load_image(image),
            mode=mode,
            settings=settings,
            scene_image_data=_load_image(scene),
            reference_image_data=_load_image(reference),
        )
        with progress_spinner("Генерация изображения..."):
            outcome, key_error, info = asyncio.run(_run(key, request, wait=not no_wait))
    except (GenerationError, ValueError) as e:
        render_error(str(e))
        raise typer.Exit(1)

    if outcome is None:
        if cli_ctx.json_output:
            console.print_json(
                json.dumps({"status": "key_rejected", "error": key_error})
            )
        else:
            render_error(key_error or "Ключ не принят", title="Ключ не принят")
        raise typer.Exit(1)

    if cli_ctx.json_output:
        data = outcome_to_dict(outcome)
        data["balance"] = balance_to_dict(info)
        console.print_json(json.dumps(data))
    else:
        render_outcome(outcome)
        if info.credit:
            render_balance(info, key_label=mask_key(key.strip()))

    if not outcome.ok:
        raise typer.Exit(1)


__all__ = ["generate"]
