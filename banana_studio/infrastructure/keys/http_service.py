"""HTTP-клиент сервиса ключей доступа.

Классы:
    HttpKeyService
        Реализация BaseKeyService поверх httpx.AsyncClient.
"""

from typing import Any, Optional

import httpx
from pydantic import ValidationError

from banana_studio.domain import KeyErrorKind, KeyServiceResponse, KeyServiceUnavailable
from banana_studio.interfaces import BaseKeyService
from banana_studio.utils.logger import get_logger, mask_key

logger = get_logger(__name__)

BALANCE_ENDPOINT = "/balance"
ACTIVATE_ENDPOINT = "/activate-key"


class HttpKeyService(BaseKeyService):
    """Сервис ключей: JSON POST на ``/balance`` и ``/activate-key``.

    Запросы несут ``Authorization: Bearer <token>`` и ``apikey: <apikey>``.
    Списание — тот же ``/balance`` с полем ``deduct_amount``.

    Attributes:
        base_url: Базовый URL функций (без завершающего ``/``).

    Example:
        >>> service = HttpKeyService(base_url, token="...", apikey="...")
        >>> response = await service.check_balance("ABCD-1234")
        >>> await service.aclose()
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        apikey: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        """Инициализация клиента.

        Args:
            base_url: Базовый URL сервиса ключей.
            token: Bearer токен.
            apikey: Значение заголовка ``apikey``.
            client: Общий AsyncClient (не закрывается здесь). Без него
                создаётся собственный.
            timeout: Таймаут собственного клиента, секунды.
        """
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

        self._headers = {"Content-Type": "application/json"}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        if apikey:
            self._headers["apikey"] = apikey

        logger.debug(
            "HttpKeyService initialized",
            base_url=self.base_url,
            has_token=token is not None,
            has_apikey=apikey is not None,
        )

    async def check_balance(self, key_string: str) -> KeyServiceResponse:
        return await self._post(BALANCE_ENDPOINT, {"key_string": key_string})

    async def activate_key(self, key_string: str) -> KeyServiceResponse:
        return await self._post(ACTIVATE_ENDPOINT, {"key_string": key_string})

    async def deduct_credits(self, key_string: str, amount: int) -> KeyServiceResponse:
        return await self._post(
            BALANCE_ENDPOINT, {"key_string": key_string, "deduct_amount": amount}
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _post(self, endpoint: str, payload: dict[str, Any]) -> KeyServiceResponse:
        """Отправить запрос и разобрать ответ.

        Raises:
            KeyServiceUnavailable: Транспортная ошибка или ответ 2xx не в формате JSON.
        """
        url = f"{self.base_url}{endpoint}"
        log = logger.bind(key_id=mask_key(payload.get("key_string")))
        log.trace("Key service request", endpoint=endpoint)

        try:
            response = await self._client.post(url, json=payload, headers=self._headers)
        except httpx.HTTPError as e:
            log.warning("Key service transport error", endpoint=endpoint, error=str(e))
            raise KeyServiceUnavailable(f"Key service request failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            if response.is_success:
                raise KeyServiceUnavailable(
                    f"Key service returned non-JSON body (HTTP {response.status_code})"
                ) from e
            log.warning("Key service HTTP error", endpoint=endpoint, status=response.status_code)
            return KeyServiceResponse.failure(
                KeyErrorKind.HTTP_ERROR.value, f"HTTP {response.status_code}"
            )

        try:
            result = KeyServiceResponse.model_validate(body)
        except ValidationError as e:
            raise KeyServiceUnavailable(f"Unexpected key service response: {e}") from e

        if not response.is_success and not result.success and result.error is None:
            result = KeyServiceResponse.failure(
                KeyErrorKind.HTTP_ERROR.value, f"HTTP {response.status_code}"
            )

        log.debug(
            "Key service response",
            endpoint=endpoint,
            status=response.status_code,
            success=result.success,
            code=result.error_code,
        )
        return result
