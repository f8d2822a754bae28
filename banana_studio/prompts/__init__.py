"""Каталог промптов для режимов редактирования.

Функции:
    build_prompt(mode, settings, has_scene_image=False) -> str
        Собирает текст промпта для режима. Чистая функция: для каждой опции
        есть запасное значение, неизвестные значения заменяются им.
    assemble_prompt(...)
        То же, но пустой результат превращается в PromptAssemblyError.
"""

from typing import Any, Callable, Mapping, Optional, Union

from banana_studio.domain import EditMode, PromptAssemblyError
from banana_studio.prompts.fusion import build_fusion_prompt
from banana_studio.prompts.multi_view import build_multi_view_prompt
from banana_studio.prompts.scene import build_scene_prompt
from banana_studio.prompts.wireframe import build_wireframe_prompt


def _resolve_mode(mode: Union[EditMode, str]) -> Optional[EditMode]:
    if isinstance(mode, EditMode):
        return mode
    try:
        return EditMode(mode)
    except ValueError:
        return None


_BUILDERS: dict[EditMode, Callable[[dict[str, Any]], str]] = {
    EditMode.WIREFRAME: build_wireframe_prompt,
    EditMode.MULTI_VIEW: build_multi_view_prompt,
    EditMode.FUSION: build_fusion_prompt,
}


def build_prompt(
    mode: Union[EditMode, str],
    settings: Optional[Mapping[str, Any]] = None,
    has_scene_image: bool = False,
) -> str:
    """Текст промпта; для неизвестного режима или неполных настроек — ''."""
    resolved = _resolve_mode(mode)
    if resolved is None:
        return ""

    values = dict(settings or {})
    if resolved is EditMode.SCENE:
        return build_scene_prompt(values, has_scene_image=has_scene_image)
    return _BUILDERS[resolved](values)


def assemble_prompt(
    mode: Union[EditMode, str],
    settings: Optional[Mapping[str, Any]] = None,
    has_scene_image: bool = False,
) -> str:
    """Как build_prompt, но пустой промпт считается ошибкой конфигурации.

    Raises:
        PromptAssemblyError: Промпт не собран.
    """
    prompt = build_prompt(mode, settings, has_scene_image=has_scene_image)
    if not prompt:
        raise PromptAssemblyError(f"Prompt assembly produced nothing for mode {mode!r}")
    return prompt


__all__ = ["build_prompt", "assemble_prompt"]
