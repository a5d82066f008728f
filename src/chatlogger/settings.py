from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import (
    Field,
    SecretStr,
    ValidationError,
    field_serializer,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import TomlConfigSettingsSource

from .config import (
    DEFAULT_COMMAND_PREFIXES,
    DEFAULT_TIMEOUT_S,
    HOME_CONFIG_PATH,
    ConfigError,
    read_config,
)


class ChatLoggerSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="forbid", frozen=True)

    webhook_url: SecretStr | None = None
    command_prefixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_COMMAND_PREFIXES)
    )
    request_timeout_s: float = DEFAULT_TIMEOUT_S

    @field_validator("webhook_url", mode="before")
    @classmethod
    def _validate_webhook_url(cls, value: Any) -> Any:
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValueError("webhook_url must be a string")
        cleaned = value.strip()
        return cleaned or None

    @field_validator("command_prefixes", mode="before")
    @classmethod
    def _validate_prefixes(cls, value: Any) -> Any:
        if not isinstance(value, (list, tuple)):
            raise ValueError("command_prefixes must be a list of strings")
        prefixes: list[str] = []
        for item in value:
            if not isinstance(item, str):
                raise ValueError("command_prefixes must be a list of strings")
            cleaned = item.strip()
            if not cleaned:
                raise ValueError("command_prefixes entries must be non-empty")
            if cleaned not in prefixes:
                prefixes.append(cleaned)
        return prefixes

    @field_validator("request_timeout_s", mode="before")
    @classmethod
    def _validate_timeout(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("request_timeout_s must be a number")
        if value <= 0:
            raise ValueError("request_timeout_s must be positive")
        return float(value)

    @field_serializer("webhook_url")
    def _dump_webhook_url(self, value: SecretStr | None) -> str | None:
        return value.get_secret_value() if value else None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    @property
    def webhook(self) -> str:
        if self.webhook_url is None:
            return ""
        return self.webhook_url.get_secret_value()


def load_settings(path: str | Path | None = None) -> tuple[ChatLoggerSettings, Path]:
    cfg_path = _resolve_config_path(path)
    return _load_settings_from_path(cfg_path), cfg_path


def load_settings_if_exists(
    path: str | Path | None = None,
) -> tuple[ChatLoggerSettings, Path] | None:
    cfg_path = _resolve_config_path(path)
    if cfg_path.exists():
        if not cfg_path.is_file():
            raise ConfigError(
                f"Config path {cfg_path} exists but is not a file."
            ) from None
        return _load_settings_from_path(cfg_path), cfg_path
    return None


def validate_settings_data(
    data: dict[str, Any], *, config_path: Path
) -> ChatLoggerSettings:
    try:
        return ChatLoggerSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config in {config_path}: {exc}") from exc


def _resolve_config_path(path: str | Path | None) -> Path:
    return Path(path).expanduser() if path else HOME_CONFIG_PATH


def _load_settings_from_path(cfg_path: Path) -> ChatLoggerSettings:
    read_config(cfg_path)
    cfg = dict(ChatLoggerSettings.model_config)
    cfg["toml_file"] = cfg_path
    Bound = type(
        "ChatLoggerSettingsBound",
        (ChatLoggerSettings,),
        {"model_config": SettingsConfigDict(**cfg)},
    )
    try:
        return Bound()
    except ValidationError as exc:
        raise ConfigError(f"Invalid config in {cfg_path}: {exc}") from exc
    except Exception as exc:  # pragma: no cover - safety net
        raise ConfigError(f"Failed to load config {cfg_path}: {exc}") from exc
