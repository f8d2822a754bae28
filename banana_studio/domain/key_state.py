"""Состояние сессии ключа доступа.

Классы:
    KeyState
        Неизменяемый снимок состояния текущего ключа.
    DeductionResult
        Итог списания кредитов.

Константы:
    MIN_GENERATION_COST: int
        Минимальный баланс для генерации и стоимость одной генерации (10).
"""

from dataclasses import dataclass, fields
from typing import Optional

MIN_GENERATION_COST: int = 10


@dataclass(frozen=True)
class KeyState:
    """Снимок состояния ключа доступа.

    ``is_valid`` не хранится: он всегда вычисляется из ``current_key``
    и ``balance``, поэтому не может разойтись с ними.

    Attributes:
        current_key: Ключ, прошедший проверку/активацию (None — нет ключа).
        balance: Остаток кредитов.
        credit: Номинал ключа (для отображения долей).
        is_loading: Идёт запрос к сервису ключей.
        error: Сообщение о последней ошибке.
    """

    current_key: Optional[str] = None
    balance: int = 0
    credit: int = 0
    is_loading: bool = False
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        """Ключ установлен и баланса хватает на генерацию."""
        return self.current_key is not None and self.balance >= MIN_GENERATION_COST

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Имена полей, которые можно менять через set_state()."""
        return frozenset(f.name for f in fields(cls))

    def as_dict(self) -> dict:
        """Словарь для JSON-вывода (включая вычисляемый is_valid)."""
        return {
            "current_key": self.current_key,
            "balance": self.balance,
            "credit": self.credit,
            "is_valid": self.is_valid,
            "is_loading": self.is_loading,
            "error": self.error,
        }


@dataclass(frozen=True)
class DeductionResult:
    """Итог списания кредитов.

    Attributes:
        success: Списание подтверждено сервисом.
        warning: Предупреждение сервиса (например, о низком балансе).
    """

    success: bool
    warning: Optional[str] = None
