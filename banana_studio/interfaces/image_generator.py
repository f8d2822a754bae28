"""Интерфейс API генерации изображений.

Классы:
    BaseImageGenerator
        ABC: поставить задачу и дождаться результата.
"""

from abc import ABC, abstractmethod

from banana_studio.domain import GenerationTask


class BaseImageGenerator(ABC):
    """Внешний API генерации изображений с асинхронными задачами."""

    @abstractmethod
    async def submit(
        self,
        prompt: str,
        image_urls: list[str],
        aspect_ratio: str = "1:1",
    ) -> GenerationTask:
        """Поставить задачу генерации.

        Args:
            prompt: Итоговый промпт.
            image_urls: Публичные ссылки на исходные изображения
                (первая — продукт).
            aspect_ratio: Соотношение сторон результата.

        Returns:
            Задача в статусе PROCESSING.

        Raises:
            GenerationError: API отклонил запрос или вернул неожиданный ответ.
        """
        raise NotImplementedError

    @abstractmethod
    async def poll(self, task: GenerationTask) -> GenerationTask:
        """Дождаться завершения задачи.

        Returns:
            Задача в статусе COMPLETED с ``image_url``.

        Raises:
            GenerationError: Задача провалилась или не завершилась вовремя.
        """
        raise NotImplementedError
