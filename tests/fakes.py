"""Тестовые двойники внешних сервисов и хелперы для изображений."""

import base64
from io import BytesIO
from typing import Optional

from PIL import Image

from banana_studio.domain import GenerationError, GenerationTask, TaskStatus
from banana_studio.interfaces import BaseImageGenerator, BaseObjectStorage


def make_image_bytes(fmt: str = "PNG", size: tuple[int, int] = (8, 8), mode: str = "RGB") -> bytes:
    color = (200, 30, 30, 128) if mode == "RGBA" else (200, 30, 30)
    image = Image.new(mode, size, color)
    buffer = BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def to_data_url(data: bytes, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


class FakeStorage(BaseObjectStorage):
    """Хранилище в памяти: запоминает загрузки."""

    def __init__(self, fail: bool = False):
        self.uploads: list[tuple[str, str, int]] = []
        self.fail = fail

    async def upload(self, data: bytes, file_name: str, content_type: str) -> str:
        if self.fail:
            raise GenerationError(f"Upload of {file_name} failed: HTTP 500", code="UPLOAD_FAILED")
        self.uploads.append((file_name, content_type, len(data)))
        return f"https://storage.test/public/{file_name}"


class FakeGenerator(BaseImageGenerator):
    """API генерации: запоминает запросы, результат задаётся в тесте."""

    def __init__(
        self,
        image_url: Optional[str] = "https://cdn.test/result.png",
        submit_error: Optional[GenerationError] = None,
        poll_error: Optional[GenerationError] = None,
    ):
        self.image_url = image_url
        self.submit_error = submit_error
        self.poll_error = poll_error
        self.submitted: list[dict] = []
        self.polled: list[str] = []

    async def submit(
        self, prompt: str, image_urls: list[str], aspect_ratio: str = "1:1"
    ) -> GenerationTask:
        if self.submit_error:
            raise self.submit_error
        self.submitted.append(
            {"prompt": prompt, "image_urls": list(image_urls), "aspect_ratio": aspect_ratio}
        )
        task_id = f"task-{len(self.submitted)}"
        return GenerationTask(task_id=task_id, polling_url=f"https://poll.test/{task_id}")

    async def poll(self, task: GenerationTask) -> GenerationTask:
        self.polled.append(task.task_id)
        if self.poll_error:
            raise self.poll_error
        task.status = TaskStatus.COMPLETED
        task.image_url = self.image_url
        return task
