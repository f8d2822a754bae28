"""Тесты для DuomiImageGenerator и разбора ответа опроса."""

import asyncio
import json

import httpx
import pytest

from banana_studio.domain import GenerationError, GenerationTask, TaskStatus
from banana_studio.infrastructure import DuomiImageGenerator
from banana_studio.infrastructure.generation.duomi import extract_image_url

API_URL = "https://gen.test/api/edit"
POLL_TEMPLATE = "https://poll.test/tasks/{task_id}"


def run_generator(handler, call, poll_max_attempts=3):
    requests: list[httpx.Request] = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(recording_handler)) as client:
            generator = DuomiImageGenerator(
                API_URL,
                "gen-key",
                POLL_TEMPLATE,
                client=client,
                poll_interval=0,
                poll_max_attempts=poll_max_attempts,
            )
            return await call(generator)

    return asyncio.run(scenario()), requests


def submit(generator):
    return generator.submit("make a wireframe", ["https://storage.test/a.jpg"], aspect_ratio="4:3")


def poll(generator):
    return generator.poll(GenerationTask(task_id="t-1", polling_url="https://poll.test/tasks/t-1"))


class TestSubmit:
    """Тесты постановки задачи."""

    def test_success(self):
        task, requests = run_generator(
            lambda r: httpx.Response(200, json={"code": 200, "data": {"task_id": "t-1"}}),
            submit,
        )

        assert task.task_id == "t-1"
        assert task.status is TaskStatus.PROCESSING
        assert task.polling_url == "https://poll.test/tasks/t-1"
        assert task.front_end_polling is True

        request = requests[0]
        assert str(request.url) == API_URL
        assert request.headers["Authorization"] == "Bearer gen-key"
        assert json.loads(request.content) == {
            "prompt": "make a wireframe",
            "image_urls": ["https://storage.test/a.jpg"],
            "aspect_ratio": "4:3",
        }

    def test_http_error(self):
        with pytest.raises(GenerationError, match="500"):
            run_generator(lambda r: httpx.Response(500, text="boom"), submit)

    def test_api_code_error(self):
        with pytest.raises(GenerationError, match="quota exceeded"):
            run_generator(
                lambda r: httpx.Response(200, json={"code": 429, "msg": "quota exceeded"}),
                submit,
            )

    @pytest.mark.parametrize(
        "body",
        [{"code": 200}, {"code": 200, "data": {}}, {"code": 200, "data": []}, ["not", "a", "dict"]],
    )
    def test_malformed_response(self, body):
        with pytest.raises(GenerationError, match="malformed"):
            run_generator(lambda r: httpx.Response(200, json=body), submit)

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(GenerationError, match="unreachable"):
            run_generator(handler, submit)


class TestPoll:
    """Тесты опроса задачи."""

    def test_completes_after_processing(self):
        responses = iter(
            [
                httpx.Response(200, json={"data": {"status": "processing"}}),
                httpx.Response(200, json={"data": {"status": "succeeded", "imageUrl": "https://cdn.test/r.png"}}),
            ]
        )

        task, requests = run_generator(lambda r: next(responses), poll)

        assert task.status is TaskStatus.COMPLETED
        assert task.image_url == "https://cdn.test/r.png"
        assert len(requests) == 2
        assert str(requests[0].url) == "https://poll.test/tasks/t-1"

    def test_failed_state(self):
        with pytest.raises(GenerationError, match="failed"):
            run_generator(lambda r: httpx.Response(200, json={"state": "FAILED"}), poll)

    def test_timeout(self):
        with pytest.raises(GenerationError) as exc_info:
            run_generator(
                lambda r: httpx.Response(200, json={"status": "processing"}),
                poll,
                poll_max_attempts=2,
            )

        assert exc_info.value.code == "GENERATION_TIMEOUT"

    def test_http_error(self):
        with pytest.raises(GenerationError, match="Polling task t-1 failed"):
            run_generator(lambda r: httpx.Response(404), poll)

    def test_non_json(self):
        with pytest.raises(GenerationError, match="non-JSON"):
            run_generator(lambda r: httpx.Response(200, text="pending"), poll)

    def test_missing_polling_url(self):
        with pytest.raises(GenerationError, match="no polling URL"):
            run_generator(
                lambda r: httpx.Response(200, json={}),
                lambda g: g.poll(GenerationTask(task_id="t-2")),
            )


class TestExtractImageUrl:
    """Тесты извлечения ссылки из ответа."""

    @pytest.mark.parametrize(
        "data, expected",
        [
            ({"imageUrl": "https://a"}, "https://a"),
            ({"image_url": "https://b"}, "https://b"),
            ({"url": "https://c"}, "https://c"),
            ({"images": ["https://d"]}, "https://d"),
            ({"resultUrls": [{"url": "https://e"}]}, "https://e"),
            ({"images": []}, None),
            ({"imageUrl": ""}, None),
            ({"status": "processing"}, None),
        ],
    )
    def test_formats(self, data, expected):
        assert extract_image_url(data) == expected
