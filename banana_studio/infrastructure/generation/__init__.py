"""Адаптеры API генерации изображений."""

from banana_studio.infrastructure.generation.duomi import (
    DuomiImageGenerator,
    extract_image_url,
)

__all__ = ["DuomiImageGenerator", "extract_image_url"]
