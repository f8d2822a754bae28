"""Сервис ключей в памяти процесса.

Классы:
    InMemoryKeyService
        Реестр ключей с активацией и списанием; для офлайн-режима CLI и тестов.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from banana_studio.domain import (
    MIN_GENERATION_COST,
    ApiError,
    ApiWarning,
    KeyData,
    KeyErrorKind,
    KeyServiceResponse,
)
from banana_studio.interfaces import BaseKeyService
from banana_studio.utils.logger import get_logger, mask_key

logger = get_logger(__name__)

LOW_BALANCE_WARNING_CODE = "LOW_BALANCE_WARNING"
LOW_BALANCE_WARNING_MESSAGE = "Balance below 10, please top up"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class _LedgerEntry:
    credit: int
    balance: int
    activated_at: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.activated_at is not None


class InMemoryKeyService(BaseKeyService):
    """Ключи и балансы хранятся в словаре.

    Отвечает в том же формате, что и удалённый сервис, включая
    предупреждение о низком балансе после списания.

    Example:
        >>> service = InMemoryKeyService()
        >>> service.register("DEMO-KEY-0001", credit=100)
        >>> (await service.activate_key("DEMO-KEY-0001")).data.balance
        100
    """

    def __init__(self, keys: Optional[dict[str, int]] = None, activated: bool = False):
        """Инициализация реестра.

        Args:
            keys: Ключ -> номинал.
            activated: Считать ключи из ``keys`` уже активированными.
        """
        self._ledger: dict[str, _LedgerEntry] = {}
        for key_string, credit in (keys or {}).items():
            self.register(key_string, credit, activated=activated)

    def register(self, key_string: str, credit: int, activated: bool = False) -> None:
        self._ledger[key_string] = _LedgerEntry(
            credit=credit,
            balance=credit,
            activated_at=_now() if activated else None,
        )

    def balance_of(self, key_string: str) -> Optional[int]:
        entry = self._ledger.get(key_string)
        return entry.balance if entry else None

    async def check_balance(self, key_string: str) -> KeyServiceResponse:
        entry = self._ledger.get(key_string)
        if entry is None:
            return self._not_found()
        if not entry.is_active:
            return KeyServiceResponse.failure(
                KeyErrorKind.KEY_NOT_ACTIVATED.value, "Key is not activated"
            )
        return KeyServiceResponse(success=True, data=self._data(key_string, entry), timestamp=_now())

    async def activate_key(self, key_string: str) -> KeyServiceResponse:
        entry = self._ledger.get(key_string)
        if entry is None:
            return self._not_found()
        if entry.is_active:
            return KeyServiceResponse.failure(
                KeyErrorKind.ALREADY_ACTIVATED.value, "Key is already activated"
            )

        entry.activated_at = _now()
        logger.info("Key activated", key_id=mask_key(key_string), balance=entry.balance)
        return KeyServiceResponse(success=True, data=self._data(key_string, entry), timestamp=_now())

    async def deduct_credits(self, key_string: str, amount: int) -> KeyServiceResponse:
        entry = self._ledger.get(key_string)
        if entry is None:
            return self._not_found()
        if not entry.is_active:
            return KeyServiceResponse.failure(
                KeyErrorKind.KEY_NOT_ACTIVATED.value, "Key is not activated"
            )
        if entry.balance < amount:
            return KeyServiceResponse(
                success=False,
                error=ApiError(
                    code=KeyErrorKind.INSUFFICIENT_BALANCE.value,
                    message="Insufficient balance",
                    current_balance=entry.balance,
                ),
                timestamp=_now(),
            )

        balance_before = entry.balance
        entry.balance -= amount

        data = self._data(key_string, entry)
        data.balance_before = balance_before
        data.deduct_amount = amount
        data.balance_after = entry.balance
        data.remaining_balance = entry.balance

        warning = None
        if entry.balance < MIN_GENERATION_COST:
            warning = ApiWarning(
                code=LOW_BALANCE_WARNING_CODE,
                message=LOW_BALANCE_WARNING_MESSAGE,
                current_balance=entry.balance,
            )

        logger.debug(
            "Credits deducted",
            key_id=mask_key(key_string),
            amount=amount,
            balance=entry.balance,
        )
        return KeyServiceResponse(success=True, data=data, warning=warning, timestamp=_now())

    @staticmethod
    def _data(key_string: str, entry: _LedgerEntry) -> KeyData:
        return KeyData(
            key_string=key_string,
            balance=entry.balance,
            credit=entry.credit,
            original_credit=entry.credit,
            status="active" if entry.is_active else "inactive",
            activated_at=entry.activated_at,
        )

    @staticmethod
    def _not_found() -> KeyServiceResponse:
        return KeyServiceResponse.failure(
            KeyErrorKind.KEY_NOT_FOUND.value, "Access key not found"
        )
