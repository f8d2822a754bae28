"""Хранилище состояния сессии ключа.

Классы:
    KeySessionStore
        Держит единственный KeyState сессии и синхронно уведомляет подписчиков.
"""

from dataclasses import replace
from typing import Any, Callable

from banana_studio.domain import KeyState, MIN_GENERATION_COST
from banana_studio.utils.logger import get_logger, mask_key

logger = get_logger(__name__)

Listener = Callable[[KeyState], None]
Unsubscribe = Callable[[], None]


class _Subscription:
    """Запись о подписке; сравнивается по идентичности."""

    __slots__ = ("listener",)

    def __init__(self, listener: Listener) -> None:
        self.listener = listener


class KeySessionStore:
    """Хранилище состояния ключа доступа.

    Состояние — frozen dataclass, поэтому ``get_state()`` отдаёт снимок,
    который нельзя изменить снаружи. Слияние в ``set_state()`` собирает новый
    снимок целиком и только потом подменяет ссылку: подписчик не может
    увидеть частично применённое обновление.

    Пример:
        >>> store = KeySessionStore()
        >>> unsubscribe = store.subscribe(lambda s: print(s.balance))
        >>> store.set_key_info("KEY-1234-5678", 90, 100)
        90
        >>> unsubscribe()
    """

    def __init__(self) -> None:
        self._state = KeyState()
        self._subscriptions: list[_Subscription] = []

    def get_state(self) -> KeyState:
        return self._state

    def set_state(self, **partial: Any) -> KeyState:
        """Слить ``partial`` в состояние и уведомить подписчиков.

        Исключение подписчика логируется и не мешает остальным подписчикам;
        запись к этому моменту уже применена.

        Args:
            **partial: Поля KeyState (``is_valid`` вычисляемый и не задаётся).

        Returns:
            Новый снимок состояния.

        Raises:
            ValueError: Неизвестное поле.
        """
        unknown = set(partial) - KeyState.field_names()
        if unknown:
            raise ValueError(f"Unknown KeyState fields: {', '.join(sorted(unknown))}")

        self._state = replace(self._state, **partial)
        logger.trace(
            "Key state updated",
            fields=sorted(partial),
            key_id=mask_key(self._state.current_key),
        )
        self._notify(self._state)
        return self._state

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Подписать ``listener`` на изменения.

        Returns:
            Функция отписки. Удаляет ровно эту подписку; повторный вызов
            ничего не делает.
        """
        subscription = _Subscription(listener)
        self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

        return unsubscribe

    def set_key_info(self, key: str, balance: int, credit: int) -> KeyState:
        """Зафиксировать проверенный ключ; ошибка и загрузка сбрасываются."""
        return self.set_state(
            current_key=key,
            balance=balance,
            credit=credit,
            is_loading=False,
            error=None,
        )

    def clear_key_info(self) -> KeyState:
        """Вернуть пустое состояние (без ключа, без ошибки)."""
        return self.set_state(
            current_key=None,
            balance=0,
            credit=0,
            is_loading=False,
            error=None,
        )

    def has_valid_key(self) -> bool:
        """Единственный источник ответа «можно ли генерировать»."""
        state = self._state
        return state.is_valid and state.balance >= MIN_GENERATION_COST

    def reset(self) -> None:
        """Сбросить состояние и отписать всех (завершение сессии)."""
        self._subscriptions.clear()
        self._state = KeyState()

    @property
    def listener_count(self) -> int:
        return len(self._subscriptions)

    def _notify(self, state: KeyState) -> None:
        # Копия списка: подписчик может отписаться во время уведомления
        for subscription in list(self._subscriptions):
            try:
                subscription.listener(state)
            except Exception as e:
                logger.error_with_context(
                    e,
                    "Key state listener failed",
                    listener=getattr(subscription.listener, "__qualname__", "?"),
                )
