"""Загрузка изображений в Supabase Storage.

Классы:
    SupabaseStorage
        Реализация BaseObjectStorage через Storage REST API.
"""

from typing import Optional

import httpx

from banana_studio.domain import GenerationError
from banana_studio.interfaces import BaseObjectStorage
from banana_studio.utils.logger import get_logger

logger = get_logger(__name__)


class SupabaseStorage(BaseObjectStorage):
    """Публичный бакет Supabase.

    Загрузка: ``POST {url}/storage/v1/object/{bucket}/{name}``.
    Публичная ссылка: ``{url}/storage/v1/object/public/{bucket}/{name}``.
    """

    def __init__(
        self,
        url: str,
        bucket: str,
        service_key: str,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = url.rstrip("/")
        self.bucket = bucket
        self._service_key = service_key
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=60.0)

    def object_url(self, file_name: str) -> str:
        return f"{self.url}/storage/v1/object/{self.bucket}/{file_name}"

    def public_url(self, file_name: str) -> str:
        return f"{self.url}/storage/v1/object/public/{self.bucket}/{file_name}"

    async def upload(self, data: bytes, file_name: str, content_type: str) -> str:
        """Загрузить объект.

        Raises:
            GenerationError: Сеть недоступна или хранилище ответило не 2xx.
        """
        headers = {
            "Authorization": f"Bearer {self._service_key}",
            "Content-Type": content_type,
        }

        try:
            response = await self._client.post(
                self.object_url(file_name), content=data, headers=headers
            )
        except httpx.HTTPError as e:
            raise GenerationError(
                f"Upload of {file_name} failed: {e}", code="UPLOAD_FAILED"
            ) from e

        if not response.is_success:
            logger.warning(
                "Storage rejected upload",
                file_name=file_name,
                status=response.status_code,
                body=response.text[:200],
            )
            raise GenerationError(
                f"Upload of {file_name} failed: HTTP {response.status_code}",
                code="UPLOAD_FAILED",
            )

        public_url = self.public_url(file_name)
        logger.debug("Image uploaded", file_name=file_name, size_bytes=len(data))
        return public_url

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
