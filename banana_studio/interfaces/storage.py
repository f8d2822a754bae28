"""Интерфейс объектного хранилища.

Классы:
    BaseObjectStorage
        ABC для загрузки изображений и получения публичных ссылок.
"""

from abc import ABC, abstractmethod


class BaseObjectStorage(ABC):
    """Хранилище, из которого API генерации забирает исходные изображения."""

    @abstractmethod
    async def upload(self, data: bytes, file_name: str, content_type: str) -> str:
        """Загрузить объект и вернуть его публичный URL.

        Raises:
            GenerationError: Хранилище отклонило загрузку.
        """
        raise NotImplementedError
