"""Интерфейсы (контракты) внешних сервисов.

Классы:
    BaseKeyService
        Сервис ключей доступа (проверка, активация, списание).
    BaseObjectStorage
        Объектное хранилище для исходных изображений.
    BaseImageGenerator
        API генерации изображений.
"""

from banana_studio.interfaces.key_service import BaseKeyService
from banana_studio.interfaces.storage import BaseObjectStorage
from banana_studio.interfaces.image_generator import BaseImageGenerator

__all__ = [
    "BaseKeyService",
    "BaseObjectStorage",
    "BaseImageGenerator",
]
