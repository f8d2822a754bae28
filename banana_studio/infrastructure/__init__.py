"""Реализации инфраструктурных компонентов.

Модули:
    keys
        Сервис ключей доступа (HTTP и в памяти).
    storage
        Объектное хранилище для исходных изображений.
    generation
        API генерации изображений.
    media
        Разбор и подготовка изображений.
"""

from banana_studio.infrastructure.keys import HttpKeyService, InMemoryKeyService
from banana_studio.infrastructure.storage import SupabaseStorage
from banana_studio.infrastructure.generation import DuomiImageGenerator

__all__ = [
    # Keys
    "HttpKeyService",
    "InMemoryKeyService",
    # Storage
    "SupabaseStorage",
    # Generation
    "DuomiImageGenerator",
]
