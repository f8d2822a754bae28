"""
Общие фикстуры pytest для Banana Studio.

Определяет:
- Сброс глобального конфига и изоляцию окружения
- Маленькие изображения (Pillow) в виде байтов и data URL
- Фейковые хранилище и API генерации
- Store/контроллер/гейт поверх InMemoryKeyService
"""

import pytest

from banana_studio.config import reset_config
from banana_studio.core import GenerationGate, KeySessionController, KeySessionStore
from banana_studio.infrastructure import InMemoryKeyService
from tests.fakes import FakeGenerator, FakeStorage, make_image_bytes, to_data_url

# Переменные окружения, которые могут протечь из машины разработчика
ISOLATED_ENV_VARS = (
    "DOMINO_API_KEY",
    "SUPABASE_SERVICE_ROLE_KEY",
    "KEY_SERVICE_TOKEN",
    "KEY_SERVICE_APIKEY",
    "BANANA_ACCESS_KEY",
    "BANANA_LOG_FILE",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Чистый конфиг: без banana.toml/.env из рабочей директории и без ключей из env."""
    for name in ISOLATED_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("BANANA_LOG_LEVEL", "ERROR")
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes("JPEG")


@pytest.fixture
def product_data_url(png_bytes) -> str:
    return to_data_url(png_bytes)


@pytest.fixture
def reference_data_url(jpeg_bytes) -> str:
    return to_data_url(jpeg_bytes, "image/jpeg")


@pytest.fixture
def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def key_service() -> InMemoryKeyService:
    """Сервис ключей: один активный ключ на 100 и один неактивированный на 800."""
    service = InMemoryKeyService()
    service.register("ACTIVE-KEY-0100", 100, activated=True)
    service.register("FRESH-KEY-0800", 800)
    return service


@pytest.fixture
def store() -> KeySessionStore:
    return KeySessionStore()


@pytest.fixture
def controller(store, key_service) -> KeySessionController:
    return KeySessionController(store, key_service, request_timeout=1.0)


@pytest.fixture
def gate(store) -> GenerationGate:
    return GenerationGate(store)
