"""Утилиты для изображений в виде data URL.

Функции:
    decode_data_url(data_url: str) -> tuple[bytes, Optional[str]]
        Достаёт байты из ``data:<mime>;base64,<payload>``.
    inspect_image(data: bytes) -> str
        Проверяет байты через Pillow и возвращает MIME-тип.
    prepare_image(path, max_dimension, quality) -> bytes
        Готовит файл к загрузке: ресайз и JPEG.
    file_to_data_url(path, ...) -> str
        Файл изображения -> data URL.
"""

import base64
import binascii
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

from banana_studio.domain import GenerationError
from banana_studio.utils.logger import get_logger

logger = get_logger(__name__)

# Форматы Pillow -> MIME
FORMAT_MIME_MAP: dict[str, str] = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
    "WEBP": "image/webp",
    "BMP": "image/bmp",
    "TIFF": "image/tiff",
}

DEFAULT_MAX_DIMENSION = 2048


def decode_data_url(data_url: str) -> tuple[bytes, Optional[str]]:
    """Разбирает data URL.

    Args:
        data_url: ``data:image/png;base64,iVBOR...``.

    Returns:
        (байты, MIME из заголовка или None).

    Raises:
        GenerationError: Нет части после запятой или она не base64.
    """
    header, sep, payload = data_url.partition(",")
    if not sep or not payload:
        raise GenerationError(
            "Image data format error: missing base64 payload",
            code="INVALID_IMAGE_DATA",
        )

    mime: Optional[str] = None
    if header.startswith("data:"):
        mime = header[len("data:"):].split(";", 1)[0] or None

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise GenerationError(
            f"Image data format error: {e}",
            code="INVALID_IMAGE_DATA",
        ) from e

    return data, mime


def inspect_image(data: bytes) -> str:
    """Проверяет, что байты — изображение, и определяет его MIME-тип.

    Raises:
        GenerationError: Pillow не распознал изображение.
    """
    try:
        with Image.open(BytesIO(data)) as image:
            image_format = image.format or ""
            image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise GenerationError(
            f"Uploaded data is not a valid image: {e}",
            code="INVALID_IMAGE_DATA",
        ) from e

    mime = FORMAT_MIME_MAP.get(image_format.upper(), "application/octet-stream")
    logger.trace("Image inspected", format=image_format, mime=mime, size_bytes=len(data))
    return mime


def prepare_image(
    path: Union[str, Path],
    max_dimension: int = DEFAULT_MAX_DIMENSION,
    quality: int = 90,
) -> bytes:
    """Открывает файл, уменьшает большую сторону до ``max_dimension`` и кодирует в JPEG."""
    with Image.open(path) as source:
        image = source.copy()

    original_size = image.size

    # Прозрачность заливаем белым, JPEG её не умеет
    if image.mode in ("RGBA", "LA", "P"):
        image = image.convert("RGBA")
        background = Image.new("RGB", image.size, (255, 255, 255))
        background.paste(image, mask=image.split()[3])
        image = background
    elif image.mode != "RGB":
        image = image.convert("RGB")

    if max(image.size) > max_dimension:
        image.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)

    buffer = BytesIO()
    image.save(buffer, format="JPEG", quality=quality)
    result = buffer.getvalue()

    logger.debug(
        "Image prepared",
        path=str(path),
        original_size=f"{original_size[0]}x{original_size[1]}",
        result_size=f"{image.size[0]}x{image.size[1]}",
        result_bytes=len(result),
    )
    return result


def file_to_data_url(
    path: Union[str, Path],
    max_dimension: int = DEFAULT_MAX_DIMENSION,
) -> str:
    """Файл изображения -> ``data:image/jpeg;base64,...``."""
    try:
        data = prepare_image(path, max_dimension=max_dimension)
    except (UnidentifiedImageError, OSError) as e:
        raise GenerationError(
            f"Cannot read image {path}: {e}",
            code="INVALID_IMAGE_DATA",
        ) from e
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:image/jpeg;base64,{encoded}"
