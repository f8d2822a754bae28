"""Тесты для KeyState, схем ответа сервиса ключей и DTO генерации."""

import dataclasses

import pytest

from banana_studio.domain import (
    MIN_GENERATION_COST,
    EditMode,
    GenerationOutcome,
    GenerationRequest,
    GenerationTask,
    KeyData,
    KeyServiceResponse,
    KeyState,
    OutcomeStatus,
)


class TestKeyState:
    """Тесты для KeyState."""

    def test_empty_state(self):
        """Пустое состояние: ключа нет, генерация запрещена."""
        state = KeyState()
        assert state.current_key is None
        assert state.balance == 0
        assert state.credit == 0
        assert state.is_loading is False
        assert state.error is None
        assert state.is_valid is False

    @pytest.mark.parametrize(
        "key, balance, expected",
        [
            ("KEY", MIN_GENERATION_COST, True),
            ("KEY", 800, True),
            ("KEY", MIN_GENERATION_COST - 1, False),
            (None, 800, False),
        ],
    )
    def test_is_valid_derived(self, key, balance, expected):
        """is_valid вычисляется из current_key и balance."""
        assert KeyState(current_key=key, balance=balance).is_valid is expected

    def test_state_is_frozen(self):
        """Снимок нельзя изменить."""
        state = KeyState()
        with pytest.raises(dataclasses.FrozenInstanceError):
            state.balance = 100  # type: ignore[misc]

    def test_is_valid_not_a_field(self):
        """is_valid нельзя передать как поле."""
        assert "is_valid" not in KeyState.field_names()

    def test_as_dict_includes_is_valid(self):
        data = KeyState(current_key="KEY", balance=90, credit=100).as_dict()
        assert data["is_valid"] is True
        assert data["balance"] == 90
        assert data["credit"] == 100


class TestKeyServiceResponse:
    """Тесты схем ответа сервиса ключей."""

    def test_parse_success(self):
        response = KeyServiceResponse.model_validate(
            {
                "success": True,
                "data": {"key_string": "K", "balance": 800, "credit": 800, "status": "active"},
                "timestamp": "2026-01-01T00:00:00Z",
            }
        )
        assert response.success is True
        assert response.data.balance == 800
        assert response.error_code is None

    def test_parse_error(self):
        response = KeyServiceResponse.model_validate(
            {"success": False, "error": {"code": "KEY_NOT_FOUND", "message": "Access key not found"}}
        )
        assert response.success is False
        assert response.error_code == "KEY_NOT_FOUND"

    def test_extra_fields_allowed(self):
        """Неизвестные поля сервиса не ломают разбор."""
        response = KeyServiceResponse.model_validate(
            {"success": True, "data": {"balance": 5, "last_used_at": "x"}, "extra": 1}
        )
        assert response.data.balance == 5

    def test_failure_factory(self):
        response = KeyServiceResponse.failure("HTTP_ERROR", "HTTP 500")
        assert response.success is False
        assert response.error.code == "HTTP_ERROR"
        assert response.error.message == "HTTP 500"

    def test_face_value_prefers_original_credit(self):
        assert KeyData(credit=500, original_credit=800).face_value() == 800
        assert KeyData(credit=500).face_value() == 500
        assert KeyData().face_value() == 0

    def test_face_value_zero_original_credit(self):
        """original_credit == 0 — значение, а не отсутствие."""
        assert KeyData(credit=500, original_credit=0).face_value() == 0

    def test_balance_after_deduction_order(self):
        """remaining_balance > balance_after > balance."""
        assert KeyData(remaining_balance=70, balance_after=80, balance=90).balance_after_deduction() == 70
        assert KeyData(balance_after=80, balance=90).balance_after_deduction() == 80
        assert KeyData(balance=90).balance_after_deduction() == 90
        assert KeyData().balance_after_deduction() == 0


class TestGenerationDTO:
    """Тесты DTO генерации."""

    def test_request_mode_from_string(self):
        request = GenerationRequest(image_data="data:,x", mode="multi-view")
        assert request.mode is EditMode.MULTI_VIEW

    def test_request_unknown_mode(self):
        with pytest.raises(ValueError):
            GenerationRequest(image_data="data:,x", mode="sketch")

    def test_task_to_dict(self):
        task = GenerationTask(task_id="t-1", polling_url="https://poll/t-1")
        assert task.to_dict() == {
            "taskId": "t-1",
            "status": "processing",
            "frontEndPolling": True,
            "pollingUrl": "https://poll/t-1",
            "imageUrl": None,
        }

    @pytest.mark.parametrize(
        "status, ok",
        [
            (OutcomeStatus.COMPLETED, True),
            (OutcomeStatus.SUBMITTED, True),
            (OutcomeStatus.BLOCKED, False),
            (OutcomeStatus.FAILED, False),
            (OutcomeStatus.DEDUCTION_FAILED, False),
        ],
    )
    def test_outcome_ok(self, status, ok):
        assert GenerationOutcome(status=status).ok is ok
