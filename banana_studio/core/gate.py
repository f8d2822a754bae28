"""Гейт генерации и политика предупреждений о балансе.

Классы:
    GenerationGate
        Решает, можно ли отправить запрос на генерацию, и что показать,
        если нельзя.
"""

from banana_studio.core.session_store import KeySessionStore
from banana_studio.domain import BalanceInfo, BalanceLevel, MIN_GENERATION_COST

DEFAULT_RESTRICTION_REASON = "Please enter a valid access key to use AI image generation"
INSUFFICIENT_BALANCE_MARKER = "Insufficient balance"
LOW_BALANCE_THRESHOLD = 50


class GenerationGate:
    """Клиентская проверка перед генерацией.

    Проверка совещательная: настоящую проверку делает удалённое списание.
    Обход гейта в худшем случае приводит к отказу в списании и сбросу сессии.
    """

    def __init__(
        self,
        store: KeySessionStore,
        low_balance_threshold: int = LOW_BALANCE_THRESHOLD,
    ) -> None:
        self.store = store
        self.low_balance_threshold = low_balance_threshold

    def can_generate_image(self) -> bool:
        return self.store.has_valid_key()

    def restriction_reason(self) -> str:
        """Текст для блокирующего оверлея.

        Ошибку о нехватке баланса показываем как есть, иначе общий призыв
        ввести ключ.
        """
        error = self.store.get_state().error
        if error and INSUFFICIENT_BALANCE_MARKER in error:
            return error
        return DEFAULT_RESTRICTION_REASON

    def balance_level(self) -> BalanceLevel:
        state = self.store.get_state()
        # Сессия, потратившая баланс ниже цены генерации, остаётся CRITICAL
        if state.current_key is None:
            return BalanceLevel.NONE
        if state.balance <= MIN_GENERATION_COST:
            return BalanceLevel.CRITICAL
        if state.balance <= self.low_balance_threshold:
            return BalanceLevel.LOW
        return BalanceLevel.OK

    def balance_info(self) -> BalanceInfo:
        """Баланс для индикатора: потрачено/осталось и доли от номинала."""
        state = self.store.get_state()
        used = max(state.credit - state.balance, 0)
        if state.credit > 0:
            balance_ratio = min(max(state.balance / state.credit, 0.0), 1.0)
            used_ratio = min(used / state.credit, 1.0)
        else:
            balance_ratio = used_ratio = 0.0

        return BalanceInfo(
            balance=state.balance,
            credit=state.credit,
            used=used,
            balance_ratio=balance_ratio,
            used_ratio=used_ratio,
            can_generate=self.can_generate_image(),
            level=self.balance_level(),
        )
