"""Тесты для StudioApp: сборка компонентов и время жизни сессии."""

import asyncio

import httpx
import pytest

from banana_studio.config import StudioConfig
from banana_studio.core import StudioApp
from banana_studio.domain import GenerationRequest, OutcomeStatus
from banana_studio.infrastructure import HttpKeyService, InMemoryKeyService
from tests.fakes import FakeGenerator, FakeStorage


def make_config(**overrides) -> StudioConfig:
    return StudioConfig(request_timeout=2.0, low_balance_threshold=60, **overrides)


class TestStudioAppLifecycle:
    """Тесты startup/shutdown."""

    def test_components_created_on_startup(self):
        app = StudioApp(make_config(), key_service=InMemoryKeyService())
        assert app.store is None
        assert app.is_running is False

        async def scenario():
            async with app:
                assert app.is_running is True
                assert app.controller.store is app.store
                assert app.gate.store is app.store
                assert app.controller.request_timeout == 2.0
                assert app.gate.low_balance_threshold == 60

        asyncio.run(scenario())
        assert app.is_running is False

    def test_shutdown_discards_session(self):
        key_service = InMemoryKeyService({"ACTIVE-KEY-0100": 100}, activated=True)
        app = StudioApp(make_config(), key_service=key_service)
        notifications = []

        async def scenario():
            async with app:
                app.store.subscribe(notifications.append)
                assert await app.controller.validate_and_use_key("ACTIVE-KEY-0100") is True
            return app.store

        store = asyncio.run(scenario())

        assert store.get_state().current_key is None
        assert store.listener_count == 0
        assert notifications

    def test_studio_requires_startup(self):
        app = StudioApp(make_config(), key_service=InMemoryKeyService())
        with pytest.raises(RuntimeError, match="not started"):
            _ = app.studio

    def test_studio_requires_credentials(self):
        """Без DOMINO_API_KEY/SUPABASE_SERVICE_ROLE_KEY генерация недоступна."""
        app = StudioApp(make_config(), key_service=InMemoryKeyService())

        async def scenario():
            async with app:
                _ = app.studio

        with pytest.raises(ValueError, match="DOMINO_API_KEY, SUPABASE_SERVICE_ROLE_KEY"):
            asyncio.run(scenario())

    def test_studio_builds_from_credentials(self):
        config = make_config(generation_api_key="gen-key", storage_service_key="storage-key")
        app = StudioApp(config, key_service=InMemoryKeyService())

        async def scenario():
            async with app:
                studio = app.studio
                assert app.studio is studio
                return studio

        studio = asyncio.run(scenario())
        assert studio.generation.aspect_ratio == "1:1"
        assert studio.generation.storage.bucket == "ai-generated-images"
        assert studio.generation.generator.poll_max_attempts == 60


class TestStudioAppWiring:
    """Тесты общего HTTP-клиента и полного сценария."""

    def test_default_key_service_uses_shared_client(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": True, "data": {"balance": 90, "credit": 100}})

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        app = StudioApp(make_config(key_service_token="tok"), http_client=client)

        async def scenario():
            async with app:
                assert isinstance(app.key_service, HttpKeyService)
                ok = await app.controller.validate_and_use_key("KEY-1234-5678")
                state = app.store.get_state()
            # чужой клиент не закрывается приложением
            assert client.is_closed is False
            await client.aclose()
            return ok, state

        ok, state = asyncio.run(scenario())
        assert ok is True
        assert state.balance == 90

    def test_full_generation_flow(self, product_data_url):
        key_service = InMemoryKeyService({"ACTIVE-KEY-0100": 100}, activated=True)
        storage = FakeStorage()
        generator = FakeGenerator()
        app = StudioApp(
            make_config(aspect_ratio="16:9"),
            key_service=key_service,
            storage=storage,
            generator=generator,
        )

        async def scenario():
            async with app:
                await app.controller.validate_and_use_key("ACTIVE-KEY-0100")
                outcome = await app.studio.generate(
                    GenerationRequest(
                        image_data=product_data_url,
                        mode="multi-view",
                        settings={"viewType": "three-view"},
                    )
                )
                return outcome, app.gate.balance_info()

        outcome, info = asyncio.run(scenario())

        assert outcome.status is OutcomeStatus.COMPLETED
        assert generator.submitted[0]["aspect_ratio"] == "16:9"
        assert len(storage.uploads) == 1
        assert info.balance == 90
        assert info.used == 10
