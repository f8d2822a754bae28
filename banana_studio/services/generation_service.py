"""Сервис генерации изображений.

Классы:
    GenerationService
        Проверка входа, загрузка изображений в хранилище, сборка промпта
        и постановка задачи в API генерации.
"""

import time
from typing import Callable, Optional

from banana_studio.domain import (
    EditMode,
    GenerationError,
    GenerationRequest,
    GenerationTask,
)
from banana_studio.infrastructure.media import decode_data_url, inspect_image
from banana_studio.interfaces import BaseImageGenerator, BaseObjectStorage
from banana_studio.prompts import assemble_prompt
from banana_studio.utils.logger import get_logger

logger = get_logger(__name__)


class GenerationService:
    """Серверная часть генерации.

    Порядок работы:
        1. Проверка входа (фото продукта; референс для fusion).
        2. Загрузка фото продукта и, по режиму, сцены или референса.
        3. Сборка промпта.
        4. Выбор ``image_urls``: fusion -> [продукт, референс],
           scene с загруженной сценой -> [продукт, сцена], иначе [продукт].
        5. Постановка задачи; результат опрашивает клиент.

    Все ошибки — GenerationError с кодом и сообщением для пользователя.

    Example:
        >>> service = GenerationService(storage, generator)
        >>> task = await service.generate(request)
        >>> task.to_dict()["frontEndPolling"]
        True
    """

    def __init__(
        self,
        storage: BaseObjectStorage,
        generator: BaseImageGenerator,
        aspect_ratio: str = "1:1",
        clock: Callable[[], float] = time.time,
    ):
        """Инициализация сервиса.

        Args:
            storage: Хранилище для исходных изображений.
            generator: API генерации.
            aspect_ratio: Соотношение сторон результата.
            clock: Источник времени для имён файлов (секунды).
        """
        self.storage = storage
        self.generator = generator
        self.aspect_ratio = aspect_ratio
        self._clock = clock

    async def generate(self, request: GenerationRequest) -> GenerationTask:
        """Поставить задачу генерации.

        Raises:
            GenerationError: Неполный запрос, ошибка загрузки, промпт
                не собран или API отклонил задачу.
        """
        self._validate(request)
        mode = request.mode
        log = logger.bind(mode=mode.value if mode else None)
        log.info("Generation requested")

        product_url = await self._upload(request.image_data, "input")

        scene_url: Optional[str] = None
        if mode is EditMode.SCENE and request.scene_image_data:
            scene_url = await self._upload(request.scene_image_data, "scene")

        reference_url: Optional[str] = None
        if mode is EditMode.FUSION and request.reference_image_data:
            reference_url = await self._upload(request.reference_image_data, "reference")

        prompt = assemble_prompt(
            mode,  # type: ignore[arg-type]
            request.settings,
            has_scene_image=bool(request.scene_image_data),
        )
        image_urls = self.select_image_urls(mode, product_url, scene_url, reference_url)
        log.trace_prompt(prompt, mode=mode.value if mode else None, image_count=len(image_urls))

        task = await self.generator.submit(prompt, image_urls, aspect_ratio=self.aspect_ratio)
        log.info("Generation task submitted", task_id=task.task_id)
        return task

    async def wait_for_result(self, task: GenerationTask) -> GenerationTask:
        """Дождаться готового изображения (опрос на стороне клиента)."""
        return await self.generator.poll(task)

    @staticmethod
    def select_image_urls(
        mode: Optional[EditMode],
        product_url: str,
        scene_url: Optional[str] = None,
        reference_url: Optional[str] = None,
    ) -> list[str]:
        if mode is EditMode.FUSION and reference_url:
            return [product_url, reference_url]
        if mode is EditMode.SCENE and scene_url:
            return [product_url, scene_url]
        return [product_url]

    @staticmethod
    def _validate(request: GenerationRequest) -> None:
        if not request.image_data:
            raise GenerationError(
                "Product image data is missing, upload a product image first",
                code="MISSING_PRODUCT_IMAGE",
            )
        if request.mode is None:
            raise GenerationError("Edit mode is not selected", code="MISSING_MODE")
        if request.mode is EditMode.FUSION and not request.reference_image_data:
            raise GenerationError(
                "AI Fusion Design mode requires reference image upload",
                code="MISSING_REFERENCE_IMAGE",
            )

    async def _upload(self, data_url: Optional[str], prefix: str) -> str:
        if not data_url:
            raise GenerationError(f"{prefix} image data is missing", code="INVALID_IMAGE_DATA")

        data, _ = decode_data_url(data_url)
        content_type = inspect_image(data)
        file_name = f"{prefix}-{int(self._clock() * 1000)}.jpg"
        return await self.storage.upload(data, file_name, content_type)
