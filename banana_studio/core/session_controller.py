"""Контроллер сессии ключа доступа.

Классы:
    KeySessionController
        Проверка/активация ключа, списание кредитов и сброс сессии
        поверх сервиса ключей с записью результатов в KeySessionStore.
"""

import asyncio
from typing import Awaitable, Optional

from banana_studio.core.session_store import KeySessionStore
from banana_studio.domain import (
    MIN_GENERATION_COST,
    DeductionResult,
    KeyErrorKind,
    KeyServiceResponse,
    describe_key_error,
    insufficient_balance_message,
)
from banana_studio.domain.errors import EMPTY_KEY_MESSAGE, NETWORK_FAILURE_MESSAGE
from banana_studio.interfaces import BaseKeyService
from banana_studio.utils.logger import StudioLogger, get_logger, mask_key

logger = get_logger(__name__)

ACTIVATION_FAILED_MESSAGE = "Activation failed, please retry"
QUERY_FAILED_MESSAGE = "Balance query failed, please retry"


class _StaleResponse(Exception):
    """Ответ пришёл после того, как началась более новая операция."""

    pass


class KeySessionController:
    """Оркестратор переходов сессии ключа.

    Все ошибки сервиса ключей перехватываются здесь и превращаются
    в ``KeyState.error``; наружу методы ничего не бросают.

    Каждая операция получает номер (эпоху). Ответ, пришедший после начала
    более новой операции, отбрасывается и Store не трогает.

    Attributes:
        store: Хранилище состояния.
        key_service: Сервис ключей.
        request_timeout: Таймаут одного запроса, секунды.

    Пример:
        >>> controller = KeySessionController(store, key_service)
        >>> if await controller.validate_and_use_key("ABCD-1234-EFGH"):
        ...     result = await controller.deduct_credits()
    """

    def __init__(
        self,
        store: KeySessionStore,
        key_service: BaseKeyService,
        request_timeout: Optional[float] = 30.0,
    ) -> None:
        self.store = store
        self.key_service = key_service
        self.request_timeout = request_timeout
        self._epoch = 0
        self._validation_epoch = 0

    async def validate_and_use_key(self, key_string: str) -> bool:
        """Проверить ключ (при необходимости активировать) и начать сессию.

        Args:
            key_string: Введённый пользователем ключ.

        Returns:
            True, если ключ принят и баланса хватает на генерацию.
        """
        if not key_string or not key_string.strip():
            self.store.set_state(error=EMPTY_KEY_MESSAGE)
            return False

        epoch = self._next_epoch()
        self._validation_epoch = epoch
        log = logger.bind(key_id=mask_key(key_string))
        self.store.set_state(is_loading=True, error=None)

        try:
            return await self._validate(key_string, epoch, log)
        finally:
            # Отмена задачи не должна оставить is_loading=True навсегда
            self._release_loading(epoch)

    async def _validate(self, key_string: str, epoch: int, log: StudioLogger) -> bool:
        response = await self._guarded_call(
            self.key_service.check_balance(key_string), epoch, log
        )
        if response is None:
            return False

        if response.success and response.data is not None:
            balance = response.data.balance or 0
            if balance >= MIN_GENERATION_COST:
                self.store.set_key_info(key_string, balance, response.data.face_value())
                log.info("Key accepted", balance=balance)
                return True
            log.warning("Key balance too low", balance=balance)
            return self._fail(insufficient_balance_message(balance))

        if response.error_code == KeyErrorKind.KEY_NOT_ACTIVATED.value:
            log.info("Key not activated, activating")
            activation = await self._guarded_call(
                self.key_service.activate_key(key_string), epoch, log
            )
            if activation is None:
                return False
            if activation.success and activation.data is not None:
                self.store.set_key_info(
                    key_string,
                    activation.data.balance or 0,
                    activation.data.face_value(),
                )
                log.info("Key activated", balance=activation.data.balance)
                return True
            log.warning("Key activation rejected", code=activation.error_code)
            if activation.error is not None:
                return self._fail(describe_key_error(activation.error))
            return self._fail(ACTIVATION_FAILED_MESSAGE)

        log.warning("Key rejected", code=response.error_code)
        if response.error is not None:
            return self._fail(describe_key_error(response.error))
        return self._fail(QUERY_FAILED_MESSAGE)

    async def _guarded_call(
        self, request: Awaitable[KeyServiceResponse], epoch: int, log: StudioLogger
    ) -> Optional[KeyServiceResponse]:
        """Запрос проверки/активации; None, если ответа нет и Store уже обновлён."""
        try:
            return await self._call(request, epoch)
        except _StaleResponse:
            log.debug("Discarded stale validation response")
            return None
        except Exception as e:
            if epoch != self._epoch:
                log.debug("Discarded stale validation failure", error_type=type(e).__name__)
                return None
            log.warning("Key service unreachable", error_type=type(e).__name__, error=str(e))
            self._fail(NETWORK_FAILURE_MESSAGE)
            return None

    async def deduct_credits(self, amount: int = MIN_GENERATION_COST) -> DeductionResult:
        """Списать кредиты за генерацию.

        При любой неудаче сессия сбрасывается: интерфейс не должен считать,
        что у него есть баланс, которого нет.

        Args:
            amount: Сколько списать.

        Returns:
            DeductionResult; ``warning`` — предупреждение сервиса, если было.
        """
        if not self.store.has_valid_key():
            return DeductionResult(success=False)

        current_key = self.store.get_state().current_key
        if current_key is None:
            return DeductionResult(success=False)

        epoch = self._next_epoch()
        log = logger.bind(key_id=mask_key(current_key))

        try:
            response = await self._call(
                self.key_service.deduct_credits(current_key, amount), epoch
            )
        except _StaleResponse:
            log.debug("Discarded stale deduction response")
            return DeductionResult(success=False)
        except Exception as e:
            if epoch != self._epoch:
                return DeductionResult(success=False)
            log.warning(
                "Deduction request failed, session cleared",
                error_type=type(e).__name__,
                error=str(e),
            )
            self.store.clear_key_info()
            return DeductionResult(success=False)

        if not response.success or response.data is None:
            log.warning("Deduction rejected, session cleared", code=response.error_code)
            self.store.clear_key_info()
            return DeductionResult(success=False)

        balance = response.data.balance_after_deduction()
        self.store.set_key_info(current_key, balance, response.data.face_value())

        warning = response.warning.message if response.warning else None
        log.info("Credits deducted", amount=amount, balance=balance, has_warning=bool(warning))
        return DeductionResult(success=True, warning=warning)

    def change_key(self) -> None:
        """Сбросить сессию; ответы начатых ранее запросов будут отброшены."""
        self._next_epoch()
        self.store.clear_key_info()
        logger.info("Key session cleared")

    def can_generate_image(self) -> bool:
        return self.store.has_valid_key()

    @property
    def is_loading(self) -> bool:
        return self.store.get_state().is_loading

    def _next_epoch(self) -> int:
        self._epoch += 1
        return self._epoch

    async def _call(
        self, request: Awaitable[KeyServiceResponse], epoch: int
    ) -> KeyServiceResponse:
        if self.request_timeout is None:
            response = await request
        else:
            response = await asyncio.wait_for(request, timeout=self.request_timeout)
        if epoch != self._epoch:
            raise _StaleResponse()
        return response

    def _release_loading(self, epoch: int) -> None:
        # Флаг загрузки снимаем, только если после нас не стартовала другая проверка
        if self._validation_epoch == epoch and self.store.get_state().is_loading:
            self.store.set_state(is_loading=False)

    def _fail(self, message: str) -> bool:
        self.store.set_state(error=message, is_loading=False)
        return False
