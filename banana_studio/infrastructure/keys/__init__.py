"""Реализации сервиса ключей доступа."""

from banana_studio.infrastructure.keys.http_service import HttpKeyService
from banana_studio.infrastructure.keys.memory_service import InMemoryKeyService

__all__ = ["HttpKeyService", "InMemoryKeyService"]
