"""Схемы ответов сервиса ключей доступа.

Классы:
    KeyData
        Блок ``data`` ответа (баланс, номинал, статус).
    ApiError
        Блок ``error`` ответа.
    ApiWarning
        Блок ``warning`` ответа (например, низкий баланс после списания).
    KeyServiceResponse
        Полный ответ на check/activate/deduct.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class KeyData(BaseModel):
    """Данные ключа из ответа сервиса.

    Поля списания (``remaining_balance``, ``balance_after``) приходят только
    в ответ на deduct; сервис может вернуть любое из них.
    """

    model_config = ConfigDict(extra="allow")

    key_string: Optional[str] = None
    balance: Optional[int] = None
    credit: Optional[int] = None
    original_credit: Optional[int] = None
    status: Optional[str] = None
    activated_at: Optional[str] = None
    remaining_balance: Optional[int] = None
    balance_before: Optional[int] = None
    deduct_amount: Optional[int] = None
    balance_after: Optional[int] = None

    def face_value(self) -> int:
        """Номинал: ``original_credit``, иначе ``credit``, иначе 0."""
        if self.original_credit is not None:
            return self.original_credit
        return self.credit or 0

    def balance_after_deduction(self) -> int:
        """Остаток после списания: первое из remaining_balance, balance_after, balance."""
        for value in (self.remaining_balance, self.balance_after, self.balance):
            if value is not None:
                return value
        return 0


class ApiError(BaseModel):
    model_config = ConfigDict(extra="allow")

    code: str = "UNKNOWN"
    message: Optional[str] = None
    details: Optional[str] = None
    current_balance: Optional[int] = None


class ApiWarning(BaseModel):
    model_config = ConfigDict(extra="allow")

    code: Optional[str] = None
    message: Optional[str] = None
    current_balance: Optional[int] = None


class KeyServiceResponse(BaseModel):
    """Ответ сервиса ключей.

    Example:
        >>> KeyServiceResponse.model_validate(
        ...     {"success": True, "data": {"balance": 800, "credit": 800}}
        ... ).data.balance
        800
    """

    model_config = ConfigDict(extra="allow")

    success: bool = False
    data: Optional[KeyData] = None
    error: Optional[ApiError] = None
    warning: Optional[ApiWarning] = None
    timestamp: Optional[str] = None

    @classmethod
    def failure(cls, code: str, message: str) -> "KeyServiceResponse":
        """Ответ-ошибка, собранный на стороне клиента."""
        return cls(success=False, error=ApiError(code=code, message=message))

    @property
    def error_code(self) -> Optional[str]:
        return self.error.code if self.error else None
