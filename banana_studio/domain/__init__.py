"""Доменный слой: чистые объекты данных и ошибки.

Классы:
    KeyState, DeductionResult
        Состояние сессии ключа и итог списания.
    KeyServiceResponse, KeyData, ApiError, ApiWarning
        Схемы ответов сервиса ключей.
    KeyErrorKind, KeyServiceUnavailable, GenerationError, PromptAssemblyError
        Ошибки.
    EditMode, TaskStatus, GenerationRequest, GenerationTask,
    OutcomeStatus, GenerationOutcome, BalanceLevel, BalanceInfo
        DTO генерации.
"""

from banana_studio.domain.key_state import (
    MIN_GENERATION_COST,
    KeyState,
    DeductionResult,
)
from banana_studio.domain.key_api import (
    KeyServiceResponse,
    KeyData,
    ApiError,
    ApiWarning,
)
from banana_studio.domain.errors import (
    KeyErrorKind,
    KEY_ERROR_MESSAGES,
    describe_key_error,
    insufficient_balance_message,
    KeyServiceUnavailable,
    GenerationError,
    PromptAssemblyError,
)
from banana_studio.domain.generation import (
    EditMode,
    TaskStatus,
    GenerationRequest,
    GenerationTask,
    OutcomeStatus,
    GenerationOutcome,
    BalanceLevel,
    BalanceInfo,
)

__all__ = [
    "MIN_GENERATION_COST",
    "KeyState",
    "DeductionResult",
    "KeyServiceResponse",
    "KeyData",
    "ApiError",
    "ApiWarning",
    "KeyErrorKind",
    "KEY_ERROR_MESSAGES",
    "describe_key_error",
    "insufficient_balance_message",
    "KeyServiceUnavailable",
    "GenerationError",
    "PromptAssemblyError",
    "EditMode",
    "TaskStatus",
    "GenerationRequest",
    "GenerationTask",
    "OutcomeStatus",
    "GenerationOutcome",
    "BalanceLevel",
    "BalanceInfo",
]
