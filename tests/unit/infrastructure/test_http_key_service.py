"""Тесты для HttpKeyService поверх httpx.MockTransport."""

import asyncio
import json

import httpx
import pytest

from banana_studio.domain import KeyErrorKind, KeyServiceUnavailable
from banana_studio.infrastructure import HttpKeyService

BASE_URL = "https://keys.test/functions/v1"


def run_with(handler, call, token="service-token", apikey="anon-key"):
    """Вызвать метод сервиса с подменённым транспортом.

    Returns:
        (результат, список запросов).
    """
    requests: list[httpx.Request] = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(recording_handler)) as client:
            service = HttpKeyService(BASE_URL + "/", token=token, apikey=apikey, client=client)
            return await call(service)

    return asyncio.run(scenario()), requests


def ok_balance(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        json={"success": True, "data": {"balance": 800, "credit": 800, "status": "active"}},
    )


class TestHttpKeyServiceRequests:
    """Тесты формата запросов."""

    def test_check_balance_request(self):
        result, requests = run_with(ok_balance, lambda s: s.check_balance("ABCD-1234"))

        assert result.success is True
        assert result.data.balance == 800
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == f"{BASE_URL}/balance"
        assert request.headers["Authorization"] == "Bearer service-token"
        assert request.headers["apikey"] == "anon-key"
        assert json.loads(request.content) == {"key_string": "ABCD-1234"}

    def test_activate_request(self):
        _, requests = run_with(ok_balance, lambda s: s.activate_key("ABCD-1234"))

        assert str(requests[0].url) == f"{BASE_URL}/activate-key"
        assert json.loads(requests[0].content) == {"key_string": "ABCD-1234"}

    def test_deduct_request(self):
        _, requests = run_with(ok_balance, lambda s: s.deduct_credits("ABCD-1234", 10))

        assert str(requests[0].url) == f"{BASE_URL}/balance"
        assert json.loads(requests[0].content) == {"key_string": "ABCD-1234", "deduct_amount": 10}

    def test_no_credentials_no_auth_headers(self):
        _, requests = run_with(
            ok_balance, lambda s: s.check_balance("ABCD-1234"), token=None, apikey=None
        )

        assert "Authorization" not in requests[0].headers
        assert "apikey" not in requests[0].headers


class TestHttpKeyServiceResponses:
    """Тесты разбора ответов."""

    def test_error_body_on_4xx(self):
        def handler(request):
            return httpx.Response(
                404,
                json={"success": False, "error": {"code": "KEY_NOT_FOUND", "message": "not found"}},
            )

        result, _ = run_with(handler, lambda s: s.check_balance("NOPE"))

        assert result.success is False
        assert result.error_code == "KEY_NOT_FOUND"

    def test_deduct_warning_parsed(self):
        def handler(request):
            return httpx.Response(
                200,
                json={
                    "success": True,
                    "data": {"remaining_balance": 5, "original_credit": 100},
                    "warning": {"code": "LOW_BALANCE_WARNING", "message": "Top up"},
                },
            )

        result, _ = run_with(handler, lambda s: s.deduct_credits("ABCD-1234", 10))

        assert result.data.balance_after_deduction() == 5
        assert result.data.face_value() == 100
        assert result.warning.message == "Top up"

    def test_non_json_5xx_is_http_error(self):
        def handler(request):
            return httpx.Response(502, text="<html>Bad gateway</html>")

        result, _ = run_with(handler, lambda s: s.check_balance("ABCD-1234"))

        assert result.success is False
        assert result.error_code == KeyErrorKind.HTTP_ERROR.value
        assert result.error.message == "HTTP 502"

    def test_json_5xx_without_error_block(self):
        def handler(request):
            return httpx.Response(500, json={"success": False})

        result, _ = run_with(handler, lambda s: s.check_balance("ABCD-1234"))

        assert result.error_code == KeyErrorKind.HTTP_ERROR.value

    def test_non_json_2xx_raises(self):
        def handler(request):
            return httpx.Response(200, text="OK")

        with pytest.raises(KeyServiceUnavailable, match="non-JSON"):
            run_with(handler, lambda s: s.check_balance("ABCD-1234"))

    def test_unexpected_shape_raises(self):
        def handler(request):
            return httpx.Response(200, json={"success": True, "data": {"balance": "lots"}})

        with pytest.raises(KeyServiceUnavailable, match="Unexpected"):
            run_with(handler, lambda s: s.check_balance("ABCD-1234"))

    def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(KeyServiceUnavailable, match="connection refused"):
            run_with(handler, lambda s: s.check_balance("ABCD-1234"))


class TestHttpKeyServiceClientOwnership:
    """Тесты владения клиентом."""

    def test_shared_client_not_closed(self):
        async def scenario():
            client = httpx.AsyncClient(transport=httpx.MockTransport(ok_balance))
            service = HttpKeyService(BASE_URL, client=client)
            await service.aclose()
            closed = client.is_closed
            await client.aclose()
            return closed

        assert asyncio.run(scenario()) is False

    def test_own_client_closed(self):
        async def scenario():
            service = HttpKeyService(BASE_URL)
            await service.aclose()
            return service._client.is_closed

        assert asyncio.run(scenario()) is True
