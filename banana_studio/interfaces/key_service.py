"""Интерфейс сервиса ключей доступа.

Классы:
    BaseKeyService
        ABC для проверки, активации ключа и списания кредитов.
"""

from abc import ABC, abstractmethod

from banana_studio.domain import KeyServiceResponse


class BaseKeyService(ABC):
    """Контракт удалённого сервиса ключей.

    Ошибки предметной области (ключ не найден, не активирован...) возвращаются
    в ``KeyServiceResponse.error``. Исключение означает, что ответа нет
    (сеть, таймаут, не-JSON) — реализации бросают ``KeyServiceUnavailable``.
    """

    @abstractmethod
    async def check_balance(self, key_string: str) -> KeyServiceResponse:
        """Запросить баланс ключа.

        Raises:
            KeyServiceUnavailable: Сервис не ответил.
        """
        raise NotImplementedError

    @abstractmethod
    async def activate_key(self, key_string: str) -> KeyServiceResponse:
        """Активировать ключ.

        Raises:
            KeyServiceUnavailable: Сервис не ответил.
        """
        raise NotImplementedError

    @abstractmethod
    async def deduct_credits(self, key_string: str, amount: int) -> KeyServiceResponse:
        """Списать ``amount`` кредитов.

        Raises:
            KeyServiceUnavailable: Сервис не ответил.
        """
        raise NotImplementedError

    async def aclose(self) -> None:
        """Освободить ресурсы (HTTP-клиент и т.п.)."""
        return None
