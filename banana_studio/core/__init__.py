"""Ядро: состояние сессии ключа, контроллер, гейт и оркестратор генерации.

Классы:
    KeySessionStore
        Единственный источник состояния ключа с подписками.
    KeySessionController
        Проверка, активация, списание и сброс.
    GenerationGate
        Можно ли генерировать и что показать, если нельзя.
    Studio
        Сценарий генерации со списанием.
    StudioApp
        Корень приложения.
"""

from banana_studio.core.session_store import KeySessionStore, Listener, Unsubscribe
from banana_studio.core.session_controller import KeySessionController
from banana_studio.core.gate import GenerationGate
from banana_studio.core.studio import Studio
from banana_studio.core.app import StudioApp

__all__ = [
    "KeySessionStore",
    "Listener",
    "Unsubscribe",
    "KeySessionController",
    "GenerationGate",
    "Studio",
    "StudioApp",
]
