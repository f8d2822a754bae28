"""Оркестратор генерации.

Классы:
    Studio
        Сценарий кнопки «сгенерировать»: проверки, гейт, генерация, списание.
"""

from banana_studio.core.gate import GenerationGate
from banana_studio.core.session_controller import KeySessionController
from banana_studio.domain import (
    MIN_GENERATION_COST,
    GenerationError,
    GenerationOutcome,
    GenerationRequest,
    OutcomeStatus,
)
from banana_studio.services import GenerationService
from banana_studio.utils.logger import get_logger

logger = get_logger(__name__)

MISSING_IMAGE_REASON = "Please upload an image first"
MISSING_MODE_REASON = "Please select an edit mode first"
DEDUCTION_FAILED_REASON = "Deduction failed, please enter your key again"


class Studio:
    """Связывает гейт, сервис генерации и контроллер сессии.

    Кредиты списываются только после успешной генерации. Если списание
    не удалось, результат не отдаётся, а сессия ключа уже сброшена
    контроллером.

    Attributes:
        controller: Контроллер сессии ключа.
        gate: Гейт генерации.
        generation: Сервис генерации.
        cost: Стоимость одной генерации в кредитах.
    """

    def __init__(
        self,
        controller: KeySessionController,
        gate: GenerationGate,
        generation: GenerationService,
        cost: int = MIN_GENERATION_COST,
    ):
        self.controller = controller
        self.gate = gate
        self.generation = generation
        self.cost = cost

    async def generate(self, request: GenerationRequest, wait: bool = True) -> GenerationOutcome:
        """Выполнить генерацию от начала до списания.

        Args:
            request: Запрос генерации.
            wait: Дождаться готового изображения. Без ожидания кредиты
                списываются после принятия задачи.

        Returns:
            GenerationOutcome. Исключения генерации превращаются в FAILED.
        """
        if not request.image_data:
            return GenerationOutcome(status=OutcomeStatus.FAILED, reason=MISSING_IMAGE_REASON)
        if request.mode is None:
            return GenerationOutcome(status=OutcomeStatus.FAILED, reason=MISSING_MODE_REASON)

        log = logger.bind(mode=request.mode.value)

        if not self.gate.can_generate_image():
            reason = self.gate.restriction_reason()
            log.info("Generation blocked", reason=reason)
            return GenerationOutcome(
                status=OutcomeStatus.BLOCKED, reason=reason, requires_key=True
            )

        try:
            task = await self.generation.generate(request)
            if wait:
                task = await self.generation.wait_for_result(task)
        except GenerationError as e:
            log.error_with_context(e, "Generation failed", include_traceback=False)
            return GenerationOutcome(status=OutcomeStatus.FAILED, reason=e.user_message)

        deduction = await self.controller.deduct_credits(self.cost)
        if not deduction.success:
            log.warning("Deduction failed after generation", task_id=task.task_id)
            return GenerationOutcome(
                status=OutcomeStatus.DEDUCTION_FAILED,
                task=task,
                reason=DEDUCTION_FAILED_REASON,
                requires_key=True,
            )

        if deduction.warning:
            log.warning("Balance warning", warning=deduction.warning)

        return GenerationOutcome(
            status=OutcomeStatus.COMPLETED if wait else OutcomeStatus.SUBMITTED,
            task=task,
            image_url=task.image_url,
            warning=deduction.warning,
        )
