"""Единая конфигурация Banana Studio.

Загружает настройки из (в порядке приоритета):
1. CLI аргументы (переданные как kwargs)
2. Environment variables (BANANA_*, DOMINO_API_KEY, SUPABASE_SERVICE_ROLE_KEY,
   KEY_SERVICE_TOKEN, KEY_SERVICE_APIKEY)
3. .env
4. banana.toml в текущей или родительских директориях
5. Default values

Классы:
    StudioConfig
        Pydantic Settings с поддержкой TOML и env variables.

Функции:
    get_config
        Получить конфигурацию с возможными override'ами.
    find_config_file
        Найти banana.toml в текущей или родительских директориях.

Example:
    >>> from banana_studio.config import get_config
    >>>
    >>> config = get_config()
    >>> print(config.key_service_url)
    >>>
    >>> config = get_config(log_level="DEBUG", request_timeout=10)
"""

import tomllib
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from banana_studio.utils.logger import get_logger

logger = get_logger(__name__)

CONFIG_FILE_NAME = "banana.toml"

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Секции TOML -> поля конфига
TOML_MAPPING: dict[tuple[str, str], str] = {
    ("key_service", "url"): "key_service_url",
    ("key_service", "request_timeout"): "request_timeout",
    ("key_service", "low_balance_threshold"): "low_balance_threshold",
    ("generation", "api_url"): "generation_api_url",
    ("generation", "aspect_ratio"): "aspect_ratio",
    ("generation", "polling_url_template"): "polling_url_template",
    ("generation", "poll_interval"): "poll_interval",
    ("generation", "poll_max_attempts"): "poll_max_attempts",
    ("storage", "url"): "storage_url",
    ("storage", "bucket"): "storage_bucket",
    ("logging", "level"): "log_level",
    ("logging", "file"): "log_file",
}

SECRET_FIELDS = frozenset(
    {"key_service_token", "key_service_apikey", "generation_api_key", "storage_service_key"}
)


def find_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Найти banana.toml в текущей или родительских директориях.

    Args:
        start_dir: Начальная директория поиска (по умолчанию cwd).

    Returns:
        Path к banana.toml или None если не найден.
    """
    current = start_dir or Path.cwd()

    # Ищем вверх по дереву директорий (максимум 10 уровней)
    for _ in range(10):
        config_path = current / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_toml(path: Path) -> dict[str, Any]:
    """Загружает banana.toml и выравнивает секции в плоский словарь.

    [generation]
    aspect_ratio = "1:1"

    превращается в ``{"aspect_ratio": ...}`` по TOML_MAPPING;
    плоские ключи с именами полей тоже поддерживаются. Секреты из TOML
    не читаются, их место в .env.
    """
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load TOML", path=str(path), error=str(e))
        return {}

    flat: dict[str, Any] = {}
    for (section, key), field_name in TOML_MAPPING.items():
        if isinstance(raw.get(section), dict) and key in raw[section]:
            flat[field_name] = raw[section][key]

    for key in StudioConfig.model_fields:
        if key in SECRET_FIELDS:
            continue
        if key in raw and not isinstance(raw[key], dict):
            flat[key] = raw[key]

    return flat


class TomlConfigSource(PydanticBaseSettingsSource):
    """Источник настроек из banana.toml (самый низкий приоритет после defaults)."""

    def __init__(self, settings_cls: type[BaseSettings], path: Optional[Path] = None):
        super().__init__(settings_cls)
        self.path = path or find_config_file()
        self._data = load_toml(self.path) if self.path else {}
        if self.path:
            logger.debug("Loaded config from TOML", path=str(self.path))

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class StudioConfig(BaseSettings):
    """Единая конфигурация Banana Studio.

    Attributes:
        key_service_url: Базовый URL сервиса ключей (эндпоинты /balance, /activate-key).
        key_service_token: Bearer токен сервиса ключей.
        key_service_apikey: Значение заголовка ``apikey``.
        request_timeout: Таймаут одного запроса к сервису ключей, секунды.
        low_balance_threshold: Порог «мало кредитов» для индикатора.
        generation_api_url: Эндпоинт генерации изображений.
        generation_api_key: Ключ API генерации.
        aspect_ratio: Соотношение сторон результата.
        storage_url: Базовый URL объектного хранилища.
        storage_bucket: Бакет для загружаемых изображений.
        storage_service_key: Сервисный ключ хранилища.
        polling_url_template: Шаблон адреса опроса задачи (``{task_id}``).
        poll_interval: Пауза между опросами, секунды.
        poll_max_attempts: Максимум опросов.
        log_level: Уровень логирования.
        log_file: Путь к файлу логов.

    Environment Variables:
        DOMINO_API_KEY: Ключ API генерации (без префикса BANANA_).
        SUPABASE_SERVICE_ROLE_KEY: Сервисный ключ хранилища.
        KEY_SERVICE_TOKEN, KEY_SERVICE_APIKEY: Учётные данные сервиса ключей.
        BANANA_REQUEST_TIMEOUT, BANANA_LOG_LEVEL...: Остальные поля с префиксом.
    """

    # === Key Service ===
    key_service_url: str = Field(
        default="https://gxjjaruksjnhdiixqtae.supabase.co/functions/v1",
        description="Базовый URL сервиса ключей",
    )

    key_service_token: Optional[str] = Field(
        default=None,
        description="Bearer токен сервиса ключей",
        validation_alias=AliasChoices(
            "key_service_token", "BANANA_KEY_SERVICE_TOKEN", "KEY_SERVICE_TOKEN"
        ),
    )

    key_service_apikey: Optional[str] = Field(
        default=None,
        description="Заголовок apikey сервиса ключей",
        validation_alias=AliasChoices(
            "key_service_apikey", "BANANA_KEY_SERVICE_APIKEY", "KEY_SERVICE_APIKEY"
        ),
    )

    request_timeout: float = Field(
        default=30.0,
        gt=0,
        le=600,
        description="Таймаут запроса к сервису ключей, секунды",
    )

    low_balance_threshold: int = Field(
        default=50,
        ge=10,
        description="Порог предупреждения о низком балансе",
    )

    # === Generation API ===
    generation_api_url: str = Field(
        default="https://duomiapi.com/api/gemini/nano-banana-edit",
        description="Эндпоинт генерации изображений",
    )

    generation_api_key: Optional[str] = Field(
        default=None,
        description="Ключ API генерации",
        validation_alias=AliasChoices(
            "generation_api_key", "BANANA_GENERATION_API_KEY", "DOMINO_API_KEY"
        ),
    )

    aspect_ratio: str = Field(
        default="1:1",
        pattern=r"^\d+:\d+$",
        description="Соотношение сторон результата",
    )

    polling_url_template: str = Field(
        default="https://upvhkmfgwialiqompeea.supabase.co/functions/v1/poll-task/{task_id}",
        description="Шаблон адреса опроса задачи",
    )

    poll_interval: float = Field(
        default=2.0,
        gt=0,
        le=60,
        description="Пауза между опросами, секунды",
    )

    poll_max_attempts: int = Field(
        default=60,
        ge=1,
        le=1000,
        description="Максимум опросов задачи",
    )

    # === Storage ===
    storage_url: str = Field(
        default="https://upvhkmfgwialiqompeea.supabase.co",
        description="Базовый URL объектного хранилища",
    )

    storage_bucket: str = Field(
        default="ai-generated-images",
        description="Бакет для изображений",
    )

    storage_service_key: Optional[str] = Field(
        default=None,
        description="Сервисный ключ хранилища",
        validation_alias=AliasChoices(
            "storage_service_key",
            "BANANA_STORAGE_SERVICE_KEY",
            "SUPABASE_SERVICE_ROLE_KEY",
        ),
    )

    # === Logging ===
    log_level: LogLevel = Field(
        default="INFO",
        description="Уровень логирования",
    )

    log_file: Optional[Path] = Field(
        default=None,
        description="Путь к файлу логов (None = только консоль)",
    )

    # === Validators ===
    @field_validator("log_file", mode="before")
    @classmethod
    def validate_log_file(cls, v: Any) -> Optional[Path]:
        """Преобразует строку в Path."""
        if v is None or v == "":
            return None
        return Path(v).expanduser()

    @field_validator(
        "key_service_token",
        "key_service_apikey",
        "generation_api_key",
        "storage_service_key",
        mode="before",
    )
    @classmethod
    def strip_whitespace(cls, v: Any) -> Optional[str]:
        """Убирает пробелы из ключей."""
        if v is None or v == "":
            return None
        return str(v).strip()

    @field_validator("key_service_url", "storage_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("polling_url_template", mode="after")
    @classmethod
    def validate_polling_template(cls, v: str) -> str:
        if "{task_id}" not in v:
            raise ValueError("polling_url_template must contain {task_id}")
        return v

    @model_validator(mode="after")
    def log_config_source(self) -> "StudioConfig":
        """Логирует итог загрузки (без секретов)."""
        logger.debug(
            "Config loaded",
            key_service_url=self.key_service_url,
            log_level=self.log_level,
            has_generation_key=self.generation_api_key is not None,
            has_storage_key=self.storage_service_key is not None,
            has_key_service_token=self.key_service_token is not None,
        )
        return self

    model_config = SettingsConfigDict(
        env_prefix="BANANA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSource(settings_cls),
            file_secret_settings,
        )

    # === Utility Methods ===

    def require_generation_credentials(self) -> tuple[str, str]:
        """Ключ API генерации и сервисный ключ хранилища.

        Returns:
            (generation_api_key, storage_service_key).

        Raises:
            ValueError: Если хотя бы один не настроен.
        """
        missing = []
        if not self.generation_api_key:
            missing.append("DOMINO_API_KEY")
        if not self.storage_service_key:
            missing.append("SUPABASE_SERVICE_ROLE_KEY")
        if missing:
            raise ValueError(
                f"API key configuration missing: {', '.join(missing)}. "
                "Set it via environment variable or .env"
            )
        return self.generation_api_key, self.storage_service_key  # type: ignore[return-value]

    def polling_url(self, task_id: str) -> str:
        return self.polling_url_template.format(task_id=task_id)

    def to_toml_dict(self) -> dict:
        """Преобразует конфигурацию в структуру для TOML.

        Note:
            Ключи и токены НЕ включаются (секреты хранятся в .env).
        """
        return {
            "key_service": {
                "url": self.key_service_url,
                "request_timeout": self.request_timeout,
                "low_balance_threshold": self.low_balance_threshold,
            },
            "generation": {
                "api_url": self.generation_api_url,
                "aspect_ratio": self.aspect_ratio,
                "polling_url_template": self.polling_url_template,
                "poll_interval": self.poll_interval,
                "poll_max_attempts": self.poll_max_attempts,
            },
            "storage": {
                "url": self.storage_url,
                "bucket": self.storage_bucket,
            },
            "logging": {
                "level": self.log_level,
                **({"file": str(self.log_file)} if self.log_file else {}),
            },
        }


# === Global Config Accessor ===

_config: Optional[StudioConfig] = None


def get_config(**overrides: Any) -> StudioConfig:
    """Получить конфигурацию с возможными override'ами.

    При первом вызове создаёт конфигурацию.
    Если переданы overrides, всегда создаёт новый экземпляр.

    Args:
        **overrides: CLI аргументы для переопределения.

    Returns:
        StudioConfig с учётом всех источников.
    """
    global _config

    if overrides or _config is None:
        _config = StudioConfig(**overrides)

    return _config


def reset_config() -> None:
    """Сбросить глобальный конфиг (для тестов)."""
    global _config
    _config = None


__all__ = [
    "StudioConfig",
    "get_config",
    "reset_config",
    "find_config_file",
    "load_toml",
    "LogLevel",
    "CONFIG_FILE_NAME",
]
