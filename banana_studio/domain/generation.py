"""DTO генерации изображений.

Классы:
    EditMode
        Режимы редактирования.
    TaskStatus
        Статусы задачи генерации у внешнего API.
    GenerationRequest
        Запрос на генерацию (изображения в виде data URL + настройки режима).
    GenerationTask
        Дескриптор асинхронной задачи для опроса.
    OutcomeStatus
        Итог пользовательского действия «сгенерировать».
    GenerationOutcome
        Результат Studio.generate().
    BalanceLevel
        Уровень предупреждения о балансе.
    BalanceInfo
        Баланс для отображения (доли, уровень, можно ли генерировать).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class EditMode(str, Enum):
    WIREFRAME = "wireframe"
    MULTI_VIEW = "multi-view"
    SCENE = "scene"
    FUSION = "fusion"


class TaskStatus(str, Enum):
    """Статусы задачи генерации.

    Attributes:
        PROCESSING: Задача принята и выполняется.
        COMPLETED: Изображение готово.
        FAILED: API сообщил об ошибке.
    """

    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class GenerationRequest:
    """Запрос на генерацию.

    Attributes:
        image_data: Фото продукта, data URL (``data:image/...;base64,...``).
        mode: Режим редактирования.
        settings: Настройки режима (ключи как в UI: ``viewType``, ``blendIntensity``...).
        scene_image_data: Изображение сцены (режим scene, источник upload).
        reference_image_data: Референс (режим fusion, обязателен).
    """

    image_data: Optional[str]
    mode: Optional[EditMode]
    settings: dict[str, Any] = field(default_factory=dict)
    scene_image_data: Optional[str] = None
    reference_image_data: Optional[str] = None

    def __post_init__(self):
        """Строку режима превращаем в EditMode."""
        if isinstance(self.mode, str) and not isinstance(self.mode, EditMode):
            self.mode = EditMode(self.mode)


@dataclass
class GenerationTask:
    """Задача генерации у внешнего API.

    Attributes:
        task_id: Идентификатор задачи.
        status: Текущий статус.
        polling_url: Адрес для опроса готовности.
        front_end_polling: Опрос выполняет клиент, а не сервер.
        image_url: Итоговое изображение (после COMPLETED).
    """

    task_id: str
    status: TaskStatus = TaskStatus.PROCESSING
    polling_url: Optional[str] = None
    front_end_polling: bool = True
    image_url: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "taskId": self.task_id,
            "status": self.status.value,
            "frontEndPolling": self.front_end_polling,
            "pollingUrl": self.polling_url,
            "imageUrl": self.image_url,
        }


class OutcomeStatus(str, Enum):
    COMPLETED = "completed"
    SUBMITTED = "submitted"
    BLOCKED = "blocked"
    FAILED = "failed"
    DEDUCTION_FAILED = "deduction_failed"


@dataclass
class GenerationOutcome:
    """Результат нажатия «сгенерировать».

    Attributes:
        status: Итог.
        task: Задача генерации (если дошли до API).
        image_url: Готовое изображение.
        reason: Почему заблокировано/не удалось (для показа пользователю).
        warning: Предупреждение о балансе после списания.
        requires_key: UI должен запросить ключ заново.
    """

    status: OutcomeStatus
    task: Optional[GenerationTask] = None
    image_url: Optional[str] = None
    reason: Optional[str] = None
    warning: Optional[str] = None
    requires_key: bool = False

    @property
    def ok(self) -> bool:
        return self.status in (OutcomeStatus.COMPLETED, OutcomeStatus.SUBMITTED)


class BalanceLevel(str, Enum):
    NONE = "none"
    OK = "ok"
    LOW = "low"
    CRITICAL = "critical"


@dataclass(frozen=True)
class BalanceInfo:
    """Баланс для индикатора.

    Attributes:
        balance: Остаток.
        credit: Номинал.
        used: Потрачено (credit - balance, не меньше 0).
        balance_ratio: Доля остатка, 0..1.
        used_ratio: Доля потраченного, 0..1.
        can_generate: Гейт пропускает генерацию.
        level: Уровень предупреждения.
    """

    balance: int
    credit: int
    used: int
    balance_ratio: float
    used_ratio: float
    can_generate: bool
    level: BalanceLevel
