"""Тесты для InMemoryKeyService."""

import asyncio

from banana_studio.domain import KeyErrorKind
from banana_studio.infrastructure import InMemoryKeyService


class TestInMemoryKeyService:
    """Тесты реестра ключей."""

    def test_check_active_key(self, key_service):
        response = asyncio.run(key_service.check_balance("ACTIVE-KEY-0100"))

        assert response.success is True
        assert response.data.balance == 100
        assert response.data.face_value() == 100
        assert response.data.status == "active"

    def test_check_unknown_key(self, key_service):
        response = asyncio.run(key_service.check_balance("MISSING"))
        assert response.error_code == KeyErrorKind.KEY_NOT_FOUND.value

    def test_check_inactive_key(self, key_service):
        response = asyncio.run(key_service.check_balance("FRESH-KEY-0800"))
        assert response.error_code == KeyErrorKind.KEY_NOT_ACTIVATED.value

    def test_activate_once(self, key_service):
        first = asyncio.run(key_service.activate_key("FRESH-KEY-0800"))
        second = asyncio.run(key_service.activate_key("FRESH-KEY-0800"))

        assert first.success is True
        assert first.data.activated_at is not None
        assert second.error_code == KeyErrorKind.ALREADY_ACTIVATED.value

    def test_deduct(self, key_service):
        response = asyncio.run(key_service.deduct_credits("ACTIVE-KEY-0100", 10))

        assert response.success is True
        assert response.data.balance_before == 100
        assert response.data.balance_after == 90
        assert response.data.balance_after_deduction() == 90
        assert response.warning is None
        assert key_service.balance_of("ACTIVE-KEY-0100") == 90

    def test_deduct_insufficient(self):
        service = InMemoryKeyService({"KEY": 5}, activated=True)
        response = asyncio.run(service.deduct_credits("KEY", 10))

        assert response.success is False
        assert response.error_code == KeyErrorKind.INSUFFICIENT_BALANCE.value
        assert response.error.current_balance == 5
        assert service.balance_of("KEY") == 5

    def test_deduct_inactive(self, key_service):
        response = asyncio.run(key_service.deduct_credits("FRESH-KEY-0800", 10))
        assert response.error_code == KeyErrorKind.KEY_NOT_ACTIVATED.value

    def test_low_balance_warning(self):
        service = InMemoryKeyService({"KEY": 12}, activated=True)
        response = asyncio.run(service.deduct_credits("KEY", 10))

        assert response.success is True
        assert response.warning.code == "LOW_BALANCE_WARNING"
        assert response.warning.current_balance == 2

    def test_balance_of_unknown(self, key_service):
        assert key_service.balance_of("MISSING") is None
