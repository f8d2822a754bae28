"""Тесты для SupabaseStorage."""

import asyncio

import httpx
import pytest

from banana_studio.domain import GenerationError
from banana_studio.infrastructure import SupabaseStorage

STORAGE_URL = "https://project.supabase.test"


def upload_with(handler, data=b"\x89PNG", file_name="input-1.jpg", content_type="image/png"):
    requests: list[httpx.Request] = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(recording_handler)) as client:
            storage = SupabaseStorage(STORAGE_URL + "/", "images", "service-key", client=client)
            return await storage.upload(data, file_name, content_type)

    return asyncio.run(scenario()), requests


class TestSupabaseStorage:
    """Тесты загрузки в бакет."""

    def test_upload_returns_public_url(self):
        url, requests = upload_with(lambda r: httpx.Response(200, json={"Key": "images/input-1.jpg"}))

        assert url == f"{STORAGE_URL}/storage/v1/object/public/images/input-1.jpg"
        request = requests[0]
        assert str(request.url) == f"{STORAGE_URL}/storage/v1/object/images/input-1.jpg"
        assert request.headers["Authorization"] == "Bearer service-key"
        assert request.headers["Content-Type"] == "image/png"
        assert request.content == b"\x89PNG"

    def test_rejected_upload(self):
        with pytest.raises(GenerationError, match="HTTP 403") as exc_info:
            upload_with(lambda r: httpx.Response(403, json={"error": "forbidden"}))

        assert exc_info.value.code == "UPLOAD_FAILED"

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(GenerationError) as exc_info:
            upload_with(handler)

        assert exc_info.value.code == "UPLOAD_FAILED"
        assert exc_info.value.user_message == GenerationError.DEFAULT_USER_MESSAGE
