"""Тесты для ошибок предметной области и таблицы сообщений."""

import pytest

from banana_studio.domain import (
    KEY_ERROR_MESSAGES,
    ApiError,
    GenerationError,
    KeyErrorKind,
    PromptAssemblyError,
    describe_key_error,
    insufficient_balance_message,
)


class TestDescribeKeyError:
    """Пользовательские сообщения для кодов сервиса ключей."""

    @pytest.mark.parametrize(
        "code, message",
        [
            ("UNAUTHORIZED", "Key service authentication failed, check the configuration"),
            ("KEY_NOT_FOUND", "Access key not found, check your input"),
            ("KEY_NOT_ACTIVATED", "Access key is not activated, activating..."),
            ("ALREADY_ACTIVATED", "Access key is already activated and ready to use"),
            ("HTTP_ERROR", "Request failed, please retry"),
            ("NETWORK_ERROR", "Network error, check your connection"),
        ],
    )
    def test_known_codes(self, code, message):
        assert describe_key_error(ApiError(code=code, message="server text")) == message

    def test_insufficient_balance_includes_amount(self):
        """В сообщение попадает точный баланс."""
        error = ApiError(code="INSUFFICIENT_BALANCE", current_balance=7)
        assert describe_key_error(error) == "Insufficient balance, current balance: 7"

    def test_unknown_code_uses_server_message(self):
        error = ApiError(code="RATE_LIMITED", message="Too many requests")
        assert describe_key_error(error) == "Too many requests"

    def test_unknown_code_without_message(self):
        assert describe_key_error(ApiError(code="WHATEVER")) == "System error, please try again later"

    def test_every_kind_has_message(self):
        """Таблица сообщений покрывает все коды."""
        assert set(KEY_ERROR_MESSAGES) == set(KeyErrorKind)

    def test_from_code(self):
        assert KeyErrorKind.from_code("KEY_NOT_FOUND") is KeyErrorKind.KEY_NOT_FOUND
        assert KeyErrorKind.from_code("nope") is KeyErrorKind.UNKNOWN
        assert KeyErrorKind.from_code(None) is KeyErrorKind.UNKNOWN

    def test_insufficient_balance_message(self):
        assert insufficient_balance_message(0) == "Insufficient balance, current balance: 0"


class TestGenerationError:
    """Тесты для GenerationError."""

    def test_defaults(self):
        error = GenerationError("boom")
        assert str(error) == "boom"
        assert error.code == "IMAGE_GENERATION_FAILED"
        assert error.user_message == "Image generation failed, please try again"

    def test_to_dict(self):
        error = GenerationError("bad data", code="INVALID_IMAGE_DATA", user_message="Try another image")
        assert error.to_dict() == {
            "code": "INVALID_IMAGE_DATA",
            "message": "bad data",
            "userMessage": "Try another image",
        }

    def test_prompt_assembly_error_is_generation_error(self):
        assert issubclass(PromptAssemblyError, GenerationError)
