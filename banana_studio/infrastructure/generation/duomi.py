"""Клиент API генерации изображений Duomi (nano-banana edit).

Классы:
    DuomiImageGenerator
        Постановка задачи и опрос результата.
"""

import asyncio
from typing import Any, Optional

import httpx

from banana_studio.domain import GenerationError, GenerationTask, TaskStatus
from banana_studio.interfaces import BaseImageGenerator
from banana_studio.utils.logger import get_logger

logger = get_logger(__name__)

FAILED_STATES = {"failed", "failure", "fail", "error"}
RESULT_URL_KEYS = ("imageUrl", "image_url", "url")
RESULT_LIST_KEYS = ("images", "resultUrls", "image_urls")


def extract_image_url(data: dict[str, Any]) -> Optional[str]:
    """Ссылка на готовое изображение из ответа опроса.

    Поддерживаются плоские поля (``imageUrl``, ``image_url``, ``url``) и
    списки (``images``, ``resultUrls``) из строк или объектов с ``url``.
    """
    for key in RESULT_URL_KEYS:
        value = data.get(key)
        if isinstance(value, str) and value:
            return value

    for key in RESULT_LIST_KEYS:
        items = data.get(key)
        if not isinstance(items, list) or not items:
            continue
        first = items[0]
        if isinstance(first, str) and first:
            return first
        if isinstance(first, dict) and isinstance(first.get("url"), str):
            return first["url"]

    return None


class DuomiImageGenerator(BaseImageGenerator):
    """Адаптер API генерации.

    Задача ставится POST-запросом ``{prompt, image_urls, aspect_ratio}``;
    успешный ответ имеет ``code == 200`` и ``data.task_id``. Готовность
    опрашивается по ``polling_url_template``.

    Attributes:
        api_url: Эндпоинт постановки задачи.
        polling_url_template: Шаблон адреса опроса с ``{task_id}``.
        poll_interval: Пауза между опросами, секунды.
        poll_max_attempts: Максимум опросов.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        polling_url_template: str,
        client: Optional[httpx.AsyncClient] = None,
        poll_interval: float = 2.0,
        poll_max_attempts: int = 60,
    ):
        self.api_url = api_url
        self.polling_url_template = polling_url_template
        self.poll_interval = poll_interval
        self.poll_max_attempts = poll_max_attempts
        self._api_key = api_key
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=60.0)

    async def submit(
        self,
        prompt: str,
        image_urls: list[str],
        aspect_ratio: str = "1:1",
    ) -> GenerationTask:
        payload = {
            "prompt": prompt,
            "image_urls": image_urls,
            "aspect_ratio": aspect_ratio,
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

        logger.debug("Submitting generation task", image_count=len(image_urls))

        try:
            response = await self._client.post(self.api_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise GenerationError(f"Generation API call failed: {e}") from e

        if not response.is_success:
            logger.error(
                "Generation API error",
                status=response.status_code,
                body=response.text[:500],
            )
            raise GenerationError(f"Generation API call failed: {response.status_code}")

        try:
            result = response.json()
        except ValueError as e:
            raise GenerationError("Generation API returned malformed response") from e

        if not isinstance(result, dict):
            raise GenerationError("Generation API returned malformed response")

        if result.get("code") != 200:
            raise GenerationError(
                f"Generation API call failed: {result.get('msg') or 'unknown error'}"
            )

        data = result.get("data")
        task_id = data.get("task_id") if isinstance(data, dict) else None
        if not task_id:
            raise GenerationError("Generation API returned malformed response")

        task = GenerationTask(
            task_id=str(task_id),
            status=TaskStatus.PROCESSING,
            polling_url=self.polling_url_template.format(task_id=task_id),
        )
        logger.info("Generation task created", task_id=task.task_id)
        return task

    async def poll(self, task: GenerationTask) -> GenerationTask:
        """Опрашивать задачу, пока не появится ссылка на результат.

        Raises:
            GenerationError: Задача провалилась, опрос вернул ошибку
                или попытки кончились.
        """
        if not task.polling_url:
            raise GenerationError(f"Task {task.task_id} has no polling URL")

        log = logger.bind(task_id=task.task_id)

        for attempt in range(1, self.poll_max_attempts + 1):
            data = await self._fetch_status(task)
            state = str(data.get("status") or data.get("state") or "").lower()
            log.trace("Task status", attempt=attempt, state=state)

            if state in FAILED_STATES:
                log.warning("Generation task failed", state=state)
                raise GenerationError(f"Generation task {task.task_id} failed")

            image_url = extract_image_url(data)
            if image_url:
                log.info("Generation task completed", attempts=attempt)
                task.status = TaskStatus.COMPLETED
                task.image_url = image_url
                return task

            await asyncio.sleep(self.poll_interval)

        log.warning("Generation task timed out", attempts=self.poll_max_attempts)
        raise GenerationError(
            f"Generation task {task.task_id} did not finish in "
            f"{self.poll_max_attempts} attempts",
            code="GENERATION_TIMEOUT",
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _fetch_status(self, task: GenerationTask) -> dict[str, Any]:
        try:
            response = await self._client.get(task.polling_url)  # type: ignore[arg-type]
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            raise GenerationError(f"Polling task {task.task_id} failed: {e}") from e
        except ValueError as e:
            raise GenerationError(f"Polling task {task.task_id} returned non-JSON") from e

        if not isinstance(body, dict):
            raise GenerationError(f"Polling task {task.task_id} returned malformed response")
        data = body.get("data", body)
        return data if isinstance(data, dict) else {}
