"""Команда prompt — собрать и показать промпт режима.

Usage:
    banana prompt wireframe -s detail=high
    banana prompt scene -s source=upload -s blendIntensity=80 --scene-image
    banana --json prompt fusion -s designStyle=luxury
"""

import json
from typing import Any, Optional

import typer

from banana_studio.cli.app import get_cli_context
from banana_studio.cli.console import console
from banana_studio.cli.ui import render_error
from banana_studio.domain import EditMode, PromptAssemblyError
from banana_studio.prompts import assemble_prompt


def _coerce(value: str) -> Any:
    """'90' -> 90, '22.5' -> 22.5, остальное строкой."""
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            continue
    return value


def parse_settings(pairs: Optional[list[str]]) -> dict[str, Any]:
    """Разбирает ``-s key=value`` в словарь настроек режима.

    Raises:
        typer.BadParameter: Нет знака ``=`` или пустой ключ.
    """
    settings: dict[str, Any] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise typer.BadParameter(f"Ожидается key=value, получено: {pair!r}")
        settings[key] = _coerce(value.strip())
    return settings


def prompt(
    mode: EditMode = typer.Argument(..., help="Режим: wireframe, multi-view, scene, fusion."),
    setting: Optional[list[str]] = typer.Option(
        None,
        "--setting",
        "-s",
        help="Настройка режима key=value (можно повторять).",
    ),
    scene_image: bool = typer.Option(
        False,
        "--scene-image",
        help="Считать, что изображение сцены загружено (режим scene, source=upload).",
    ),
) -> None:
    """📝 Собрать промпт для режима и настроек."""
    cli_ctx = get_cli_context()
    settings = parse_settings(setting)

    try:
        text = assemble_prompt(mode, settings, has_scene_image=scene_image)
    except PromptAssemblyError as e:
        if cli_ctx.json_output:
            console.print_json(json.dumps({"mode": mode.value, "error": e.to_dict()}))
        else:
            render_error(f"Промпт не собран для режима {mode.value}: {e}")
        raise typer.Exit(1)

    if cli_ctx.json_output:
        console.print_json(
            json.dumps({"mode": mode.value, "settings": settings, "prompt": text})
        )
        return

    console.print(text, markup=False, highlight=False, soft_wrap=True)


__all__ = ["prompt", "parse_settings"]
