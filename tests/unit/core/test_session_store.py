"""Тесты для KeySessionStore: снимки, слияние, подписки."""

import pytest

from banana_studio.core import KeySessionStore
from banana_studio.domain import KeyState


class TestStoreState:
    """Чтение и слияние состояния."""

    def test_initial_state_empty(self, store):
        assert store.get_state() == KeyState()
        assert store.has_valid_key() is False

    def test_set_state_merges(self, store):
        store.set_state(error="boom")
        store.set_state(is_loading=True)
        state = store.get_state()
        assert state.error == "boom"
        assert state.is_loading is True

    def test_set_state_unknown_field(self, store):
        with pytest.raises(ValueError, match="is_valid"):
            store.set_state(is_valid=True)

    def test_snapshot_not_affected_by_later_updates(self, store):
        """Ранее полученный снимок не меняется."""
        before = store.get_state()
        store.set_key_info("KEY-1234-5678", 90, 100)
        assert before.current_key is None
        assert store.get_state().current_key == "KEY-1234-5678"

    def test_set_key_info_exact_state(self, store):
        store.set_state(error="old error", is_loading=True)
        store.set_key_info("KEY-1234-5678", 90, 100)
        state = store.get_state()
        assert state == KeyState(
            current_key="KEY-1234-5678", balance=90, credit=100, is_loading=False, error=None
        )
        assert state.is_valid is True

    @pytest.mark.parametrize(
        "key, balance, credit",
        [("KEY-A", 800, 800), ("KEY-B", 5, 100), (None, 0, 0)],
    )
    def test_clear_key_info_from_any_state(self, store, key, balance, credit):
        store.set_state(current_key=key, balance=balance, credit=credit, error="x")
        store.clear_key_info()
        state = store.get_state()
        assert state.current_key is None
        assert state.balance == 0
        assert state.credit == 0
        assert state.is_valid is False
        assert state.error is None

    @pytest.mark.parametrize("balance", [0, 1, 9, 10, 11, 50, 1000])
    def test_has_valid_key_threshold(self, store, balance):
        """has_valid_key() ⇔ ключ есть и баланс >= 10."""
        store.set_key_info("KEY", balance, 1000)
        assert store.has_valid_key() is (balance >= 10)

    def test_has_valid_key_without_key(self, store):
        store.set_state(balance=500)
        assert store.has_valid_key() is False


class TestStoreSubscriptions:
    """Подписки и уведомления."""

    def test_listener_called_once_with_post_merge_state(self, store):
        received = []
        store.subscribe(received.append)

        store.set_state(balance=42)

        assert len(received) == 1
        assert received[0].balance == 42
        assert received[0] is store.get_state()

    def test_unsubscribe_stops_notifications(self, store):
        received = []
        unsubscribe = store.subscribe(received.append)
        unsubscribe()

        store.set_state(balance=1)
        assert received == []

    def test_unsubscribe_idempotent(self, store):
        unsubscribe = store.subscribe(lambda s: None)
        unsubscribe()
        unsubscribe()
        assert store.listener_count == 0

    def test_unsubscribe_removes_only_own_subscription(self, store):
        """Один listener, подписанный дважды: отписка удаляет одну подписку."""
        received = []
        first = store.subscribe(received.append)
        store.subscribe(received.append)

        first()
        store.set_state(balance=3)

        assert len(received) == 1

    def test_listener_may_unsubscribe_during_notify(self, store):
        calls = []

        def once(state):
            calls.append(state)
            unsubscribe()

        unsubscribe = store.subscribe(once)
        store.set_state(balance=1)
        store.set_state(balance=2)

        assert len(calls) == 1

    def test_failing_listener_does_not_stop_others(self, store):
        """Остальные подписчики уведомлены, запись применена, set_state не бросает."""
        received = []

        def broken(state):
            raise RuntimeError("listener failed")

        store.subscribe(broken)
        store.subscribe(received.append)

        new_state = store.set_key_info("KEY", 30, 100)

        assert received == [new_state]
        assert store.get_state().current_key == "KEY"
        assert store.listener_count == 2

    def test_listener_sees_consistent_state(self, store):
        """Подписчик видит все поля set_key_info сразу."""
        seen = []
        store.subscribe(lambda s: seen.append((s.current_key, s.balance, s.credit, s.error)))

        store.set_state(error="previous")
        store.set_key_info("KEY", 30, 100)

        assert seen[-1] == ("KEY", 30, 100, None)

    def test_reset_drops_listeners_and_state(self, store):
        received = []
        store.subscribe(received.append)
        store.set_key_info("KEY", 30, 100)

        store.reset()
        store.set_state(balance=1)

        assert store.listener_count == 0
        assert len(received) == 1
        assert store.get_state().current_key is None

    def test_store_instances_independent(self):
        first, second = KeySessionStore(), KeySessionStore()
        first.set_key_info("KEY", 30, 100)
        assert second.get_state().current_key is None
