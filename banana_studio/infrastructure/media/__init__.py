"""Работа с изображениями (data URL, проверка, подготовка к загрузке)."""

from banana_studio.infrastructure.media.images import (
    FORMAT_MIME_MAP,
    decode_data_url,
    inspect_image,
    prepare_image,
    file_to_data_url,
)

__all__ = [
    "FORMAT_MIME_MAP",
    "decode_data_url",
    "inspect_image",
    "prepare_image",
    "file_to_data_url",
]
