"""Тесты для GenerationGate: пропуск генерации и индикатор баланса."""

import asyncio

import pytest

from banana_studio.core import GenerationGate, KeySessionController
from banana_studio.domain import BalanceLevel
from banana_studio.infrastructure import InMemoryKeyService


class TestGenerationGate:
    """Тесты гейта генерации."""

    def test_blocked_without_key(self, gate):
        assert gate.can_generate_image() is False

    def test_follows_store(self, store, gate):
        store.set_key_info("KEY", 10, 100)
        assert gate.can_generate_image() is True

        store.set_state(balance=9)
        assert gate.can_generate_image() is False

    def test_restriction_reason_default(self, store, gate):
        store.set_state(error="Access key not found, check your input")
        assert gate.restriction_reason() == (
            "Please enter a valid access key to use AI image generation"
        )

    def test_restriction_reason_insufficient_balance(self, store, gate):
        store.set_state(error="Insufficient balance, current balance: 5")
        assert gate.restriction_reason() == "Insufficient balance, current balance: 5"

    @pytest.mark.parametrize(
        "balance, level",
        [
            (10, BalanceLevel.CRITICAL),
            (11, BalanceLevel.LOW),
            (50, BalanceLevel.LOW),
            (51, BalanceLevel.OK),
            (800, BalanceLevel.OK),
        ],
    )
    def test_balance_level(self, store, gate, balance, level):
        store.set_key_info("KEY", balance, 1000)
        assert gate.balance_level() is level

    def test_balance_level_none_without_key(self, store, gate):
        store.set_state(balance=5, credit=100)
        assert gate.balance_level() is BalanceLevel.NONE

    @pytest.mark.parametrize("balance", [0, 5, 9])
    def test_balance_level_critical_below_cost(self, store, gate, balance):
        """Ключ есть, но баланса не хватает на генерацию: предупреждение остаётся."""
        store.set_key_info("KEY", balance, 100)
        assert gate.balance_level() is BalanceLevel.CRITICAL
        assert gate.can_generate_image() is False

    def test_critical_after_spending_down(self, store):
        key_service = InMemoryKeyService({"LAST-KEY-0015": 15}, activated=True)
        controller = KeySessionController(store, key_service)
        gate = GenerationGate(store)

        assert asyncio.run(controller.validate_and_use_key("LAST-KEY-0015")) is True
        assert asyncio.run(controller.deduct_credits()).success is True

        assert store.get_state().balance == 5
        assert gate.balance_level() is BalanceLevel.CRITICAL
        assert gate.balance_info().level is BalanceLevel.CRITICAL

    def test_custom_low_threshold(self, store):
        gate = GenerationGate(store, low_balance_threshold=200)
        store.set_key_info("KEY", 150, 1000)
        assert gate.balance_level() is BalanceLevel.LOW


class TestBalanceInfo:
    """Тесты balance_info()."""

    def test_ratios(self, store, gate):
        store.set_key_info("KEY", 600, 800)
        info = gate.balance_info()

        assert info.balance == 600
        assert info.credit == 800
        assert info.used == 200
        assert info.balance_ratio == pytest.approx(0.75)
        assert info.used_ratio == pytest.approx(0.25)
        assert info.can_generate is True
        assert info.level is BalanceLevel.OK

    def test_zero_credit(self, gate):
        info = gate.balance_info()
        assert info.balance_ratio == 0.0
        assert info.used_ratio == 0.0
        assert info.used == 0
        assert info.level is BalanceLevel.NONE

    def test_balance_above_credit_clamped(self, store, gate):
        """Сервису доверяем, но доли не выходят за 0..1."""
        store.set_key_info("KEY", 900, 800)
        info = gate.balance_info()

        assert info.used == 0
        assert info.balance_ratio == 1.0
        assert info.used_ratio == 0.0
