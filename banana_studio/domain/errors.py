"""Ошибки предметной области.

Классы:
    KeyErrorKind
        Распознаваемые коды ошибок сервиса ключей (+ UNKNOWN).
    KeyServiceUnavailable
        Сервис ключей недоступен (транспорт, таймаут, не-JSON ответ).
    GenerationError
        Ошибка на границе генерации изображения.
    PromptAssemblyError
        Промпт не собрался (пустая строка).

Функции:
    describe_key_error(error) -> str
        Пользовательское сообщение для ошибки сервиса ключей.
"""

from enum import Enum
from typing import Optional

from banana_studio.domain.key_api import ApiError


class KeyErrorKind(str, Enum):
    """Коды ошибок сервиса ключей."""

    UNAUTHORIZED = "UNAUTHORIZED"
    KEY_NOT_FOUND = "KEY_NOT_FOUND"
    KEY_NOT_ACTIVATED = "KEY_NOT_ACTIVATED"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    ALREADY_ACTIVATED = "ALREADY_ACTIVATED"
    HTTP_ERROR = "HTTP_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_code(cls, code: Optional[str]) -> "KeyErrorKind":
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN


# Пустая строка для UNKNOWN: сообщение берётся из ответа сервиса
KEY_ERROR_MESSAGES: dict[KeyErrorKind, str] = {
    KeyErrorKind.UNAUTHORIZED: "Key service authentication failed, check the configuration",
    KeyErrorKind.KEY_NOT_FOUND: "Access key not found, check your input",
    KeyErrorKind.KEY_NOT_ACTIVATED: "Access key is not activated, activating...",
    KeyErrorKind.INSUFFICIENT_BALANCE: "Insufficient balance, current balance: {balance}",
    KeyErrorKind.ALREADY_ACTIVATED: "Access key is already activated and ready to use",
    KeyErrorKind.HTTP_ERROR: "Request failed, please retry",
    KeyErrorKind.NETWORK_ERROR: "Network error, check your connection",
    KeyErrorKind.UNKNOWN: "",
}

GENERIC_ERROR_MESSAGE: str = "System error, please try again later"
NETWORK_FAILURE_MESSAGE: str = "Network error, please retry"
EMPTY_KEY_MESSAGE: str = "Please enter an access key"


def insufficient_balance_message(balance: Optional[int]) -> str:
    """Сообщение о нехватке баланса с точным значением."""
    return KEY_ERROR_MESSAGES[KeyErrorKind.INSUFFICIENT_BALANCE].format(balance=balance)


def describe_key_error(error: ApiError) -> str:
    """Переводит ошибку сервиса ключей в сообщение для пользователя.

    Args:
        error: Блок ``error`` из ответа.

    Returns:
        Сообщение из таблицы; для неизвестного кода — текст сервиса
        или общее сообщение.
    """
    kind = KeyErrorKind.from_code(error.code)
    if kind is KeyErrorKind.INSUFFICIENT_BALANCE:
        return insufficient_balance_message(error.current_balance)
    if kind is KeyErrorKind.UNKNOWN:
        return error.message or GENERIC_ERROR_MESSAGE
    return KEY_ERROR_MESSAGES[kind]


class KeyServiceUnavailable(Exception):
    """Запрос к сервису ключей не завершился ответом."""

    pass


class GenerationError(Exception):
    """Ошибка генерации изображения.

    Attributes:
        code: Машинный код ошибки.
        user_message: Сообщение для показа пользователю.
    """

    DEFAULT_CODE = "IMAGE_GENERATION_FAILED"
    DEFAULT_USER_MESSAGE = "Image generation failed, please try again"

    def __init__(
        self,
        message: str,
        code: str = DEFAULT_CODE,
        user_message: str = DEFAULT_USER_MESSAGE,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.user_message = user_message

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": str(self),
            "userMessage": self.user_message,
        }


class PromptAssemblyError(GenerationError):
    """Для режима и настроек не получилось собрать промпт."""

    pass
