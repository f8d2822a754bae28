"""Корень приложения: сборка компонентов и управление их временем жизни.

Классы:
    StudioApp
        Async context manager; создаёт HTTP-клиент, сервис ключей, Store,
        контроллер, гейт и (по требованию) сервис генерации.
"""

from typing import Optional

import httpx

from banana_studio.config import StudioConfig, get_config
from banana_studio.core.gate import GenerationGate
from banana_studio.core.session_controller import KeySessionController
from banana_studio.core.session_store import KeySessionStore
from banana_studio.core.studio import Studio
from banana_studio.infrastructure import (
    DuomiImageGenerator,
    HttpKeyService,
    SupabaseStorage,
)
from banana_studio.interfaces import BaseImageGenerator, BaseKeyService, BaseObjectStorage
from banana_studio.services import GenerationService
from banana_studio.utils.logger import get_logger

logger = get_logger(__name__)

HTTP_TIMEOUT = 60.0


class StudioApp:
    """Владелец одной пользовательской сессии.

    Глобальных объектов нет: всё, что живёт дольше одного вызова,
    создаётся в ``startup()`` и освобождается в ``shutdown()``.

    Attributes:
        config: Конфигурация.
        store: Состояние ключа (после startup).
        controller: Контроллер сессии (после startup).
        gate: Гейт генерации (после startup).

    Example:
        >>> async with StudioApp() as app:
        ...     await app.controller.validate_and_use_key("ABCD-1234")
        ...     outcome = await app.studio.generate(request)
    """

    def __init__(
        self,
        config: Optional[StudioConfig] = None,
        key_service: Optional[BaseKeyService] = None,
        storage: Optional[BaseObjectStorage] = None,
        generator: Optional[BaseImageGenerator] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Инициализация без побочных эффектов.

        Args:
            config: Конфигурация (по умолчанию get_config()).
            key_service: Готовый сервис ключей (например, InMemoryKeyService).
            storage: Готовое хранилище.
            generator: Готовый API генерации.
            http_client: Общий HTTP-клиент; без него создаётся собственный.
        """
        self.config = config or get_config()
        self._key_service = key_service
        self._storage = storage
        self._generator = generator
        self._client = http_client
        self._owns_client = http_client is None

        self.store: Optional[KeySessionStore] = None
        self.controller: Optional[KeySessionController] = None
        self.gate: Optional[GenerationGate] = None
        self._studio: Optional[Studio] = None
        self._started = False

    async def __aenter__(self) -> "StudioApp":
        await self.startup()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()

    @property
    def is_running(self) -> bool:
        return self._started

    @property
    def http_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=HTTP_TIMEOUT)
        return self._client

    @property
    def key_service(self) -> BaseKeyService:
        if self._key_service is None:
            self._key_service = HttpKeyService(
                self.config.key_service_url,
                token=self.config.key_service_token,
                apikey=self.config.key_service_apikey,
                client=self.http_client,
            )
        return self._key_service

    async def startup(self) -> None:
        """Собрать Store, контроллер и гейт."""
        if self._started:
            return

        self.store = KeySessionStore()
        self.controller = KeySessionController(
            self.store,
            self.key_service,
            request_timeout=self.config.request_timeout,
        )
        self.gate = GenerationGate(
            self.store,
            low_balance_threshold=self.config.low_balance_threshold,
        )
        self._started = True
        logger.debug("Studio app started", key_service=type(self.key_service).__name__)

    @property
    def studio(self) -> Studio:
        """Оркестратор генерации; собирается при первом обращении.

        Raises:
            RuntimeError: Приложение не запущено.
            ValueError: Не настроены ключи генерации или хранилища.
        """
        if not self._started or self.controller is None or self.gate is None:
            raise RuntimeError("StudioApp is not started")

        if self._studio is None:
            generation = GenerationService(
                self._build_storage(),
                self._build_generator(),
                aspect_ratio=self.config.aspect_ratio,
            )
            self._studio = Studio(self.controller, self.gate, generation)
        return self._studio

    async def shutdown(self) -> None:
        """Закрыть соединения и сбросить сессию (подписчики удаляются)."""
        if not self._started:
            return

        if self.store is not None:
            self.store.reset()
        if self._key_service is not None:
            await self._key_service.aclose()
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

        self._studio = None
        self._started = False
        logger.debug("Studio app stopped")

    def _build_storage(self) -> BaseObjectStorage:
        if self._storage is None:
            _, storage_key = self.config.require_generation_credentials()
            self._storage = SupabaseStorage(
                self.config.storage_url,
                self.config.storage_bucket,
                storage_key,
                client=self.http_client,
            )
        return self._storage

    def _build_generator(self) -> BaseImageGenerator:
        if self._generator is None:
            api_key, _ = self.config.require_generation_credentials()
            self._generator = DuomiImageGenerator(
                self.config.generation_api_url,
                api_key,
                self.config.polling_url_template,
                client=self.http_client,
                poll_interval=self.config.poll_interval,
                poll_max_attempts=self.config.poll_max_attempts,
            )
        return self._generator
