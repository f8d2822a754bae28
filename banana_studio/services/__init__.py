"""Сервисы верхнего уровня."""

from banana_studio.services.generation_service import GenerationService

__all__ = ["GenerationService"]
