"""Banana Studio — генерация изображений товаров по кредитным ключам доступа.

Архитектура:
    Domain: Состояние ключа, ответы сервиса ключей, DTO генерации, ошибки.
    Interfaces: Контракты (BaseKeyService, BaseObjectStorage, BaseImageGenerator).
    Infrastructure: Реализации (HttpKeyService, SupabaseStorage, DuomiImageGenerator).
    Prompts: Каталог промптов по режимам редактирования.
    Services: GenerationService — загрузка, промпт, постановка задачи.
    Core: KeySessionStore, KeySessionController, GenerationGate, Studio, StudioApp.

Пример:
    >>> from banana_studio import StudioApp, GenerationRequest
    >>>
    >>> async with StudioApp() as app:
    ...     if await app.controller.validate_and_use_key("ABCD-1234-EFGH"):
    ...         outcome = await app.studio.generate(
    ...             GenerationRequest(image_data=data_url, mode="wireframe")
    ...         )
    ...         print(outcome.status, outcome.image_url)
"""

__version__ = "0.3.0"

# Domain Layer
from banana_studio.domain import (
    MIN_GENERATION_COST,
    KeyState,
    DeductionResult,
    KeyServiceResponse,
    KeyErrorKind,
    KeyServiceUnavailable,
    GenerationError,
    PromptAssemblyError,
    EditMode,
    GenerationRequest,
    GenerationTask,
    GenerationOutcome,
    OutcomeStatus,
    BalanceInfo,
    BalanceLevel,
)

# Interfaces
from banana_studio.interfaces import (
    BaseKeyService,
    BaseObjectStorage,
    BaseImageGenerator,
)

# Infrastructure
from banana_studio.infrastructure import (
    HttpKeyService,
    InMemoryKeyService,
    SupabaseStorage,
    DuomiImageGenerator,
)

# Prompts & Services
from banana_studio.prompts import build_prompt, assemble_prompt
from banana_studio.services import GenerationService

# Core
from banana_studio.core import (
    KeySessionStore,
    KeySessionController,
    GenerationGate,
    Studio,
    StudioApp,
)

# Config
from banana_studio.config import StudioConfig, get_config

__all__ = [
    "__version__",
    # Domain
    "MIN_GENERATION_COST",
    "KeyState",
    "DeductionResult",
    "KeyServiceResponse",
    "KeyErrorKind",
    "KeyServiceUnavailable",
    "GenerationError",
    "PromptAssemblyError",
    "EditMode",
    "GenerationRequest",
    "GenerationTask",
    "GenerationOutcome",
    "OutcomeStatus",
    "BalanceInfo",
    "BalanceLevel",
    # Interfaces
    "BaseKeyService",
    "BaseObjectStorage",
    "BaseImageGenerator",
    # Infrastructure
    "HttpKeyService",
    "InMemoryKeyService",
    "SupabaseStorage",
    "DuomiImageGenerator",
    # Prompts & Services
    "build_prompt",
    "assemble_prompt",
    "GenerationService",
    # Core
    "KeySessionStore",
    "KeySessionController",
    "GenerationGate",
    "Studio",
    "StudioApp",
    # Config
    "StudioConfig",
    "get_config",
]
