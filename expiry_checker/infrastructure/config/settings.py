"""Application settings loaded from a YAML document."""

from __future__ import annotations

import logging
import os
from datetime import timedelta
from functools import cached_property
from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    PositiveFloat,
    PositiveInt,
    ValidationError,
    field_validator,
    model_validator,
)

from ...application.exceptions import ConfigurationError
from ...domain.value_objects import AlarmThresholds
from ..adapters.notifications.telegram import TelegramConfig
from ..adapters.sources.selectel import SelectelConfig

DEFAULT_CONFIG_PATH = "config.yml"

# Environment variables overriding top-level scalar settings.
ENV_OVERRIDES: dict[str, str] = {
    "APP_ALARM_DAYS": "alarm_days",
    "APP_SSL_ALARM_DAYS": "ssl_alarm_days",
    "APP_CHECK_INTERVAL_HOURS": "check_interval_hours",
    "APP_CHECK_DOMAINS": "check_domains",
    "APP_DRY_RUN": "dry_run",
}


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


class SelectelSettings(_Section):
    """Selectel account credentials."""

    account_id: str
    password: str
    project_name: str
    user: str


class SourcesSettings(_Section):
    """Domain source selection; exactly one key must be set."""

    filename: str | None = None
    selectel: SelectelSettings | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> SourcesSettings:
        configured = [name for name in ("filename", "selectel") if getattr(self, name)]
        if len(configured) != 1:
            msg = f"exactly one source must be configured (filename or selectel), got {configured or 'none'}"
            raise ValueError(msg)
        return self


class TelegramSettings(_Section):
    """Telegram bot settings."""

    bot_token: str
    chat_id: str | int
    retries: NonNegativeInt = 5


class NotifiersSettings(_Section):
    """Notifier selection; ``console: null`` enables the console notifier."""

    console: None = None
    telegram: TelegramSettings | None = None

    @property
    def console_enabled(self) -> bool:
        """Check if the console notifier was listed."""
        return "console" in self.model_fields_set


class LogSettings(BaseModel):
    """Logging settings; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    log_level: str = "info"
    use_color: bool = False

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        if value.upper() not in logging.getLevelNamesMapping():
            msg = f"unknown log level {value!r}"
            raise ValueError(msg)
        return value


class Settings(_Section):
    """Application settings container."""

    # Thresholds
    alarm_days: NonNegativeInt = 7
    ssl_alarm_days: NonNegativeInt = 7

    # Run configuration
    check_interval_hours: PositiveInt = 7
    dry_run: bool = False
    check_domains: bool = False
    max_concurrency: PositiveInt = 20
    tls_timeout_seconds: PositiveFloat = 5.0

    sources: SourcesSettings
    notifiers: NotifiersSettings = Field(default_factory=NotifiersSettings)
    log_config: LogSettings = Field(default_factory=LogSettings)

    @cached_property
    def thresholds(self) -> AlarmThresholds:
        """Get alarm thresholds."""
        return AlarmThresholds(
            alarm_days=self.alarm_days,
            ssl_alarm_days=self.ssl_alarm_days,
        )

    @cached_property
    def check_interval(self) -> timedelta:
        """Get the pause between scheduled cycles."""
        return timedelta(hours=self.check_interval_hours)

    @cached_property
    def selectel_config(self) -> SelectelConfig | None:
        """Get Selectel configuration, if that source is selected."""
        selectel = self.sources.selectel
        if selectel is None:
            return None
        return SelectelConfig(
            account_id=selectel.account_id,
            user=selectel.user,
            password=selectel.password,
            project_name=selectel.project_name,
        )

    @cached_property
    def telegram_config(self) -> TelegramConfig | None:
        """Get Telegram configuration, if that notifier is enabled."""
        telegram = self.notifiers.telegram
        if telegram is None:
            return None
        return TelegramConfig(
            bot_token=telegram.bot_token,
            chat_id=str(telegram.chat_id),
            retries=telegram.retries,
        )


def _format_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors into 'path: message' pairs."""
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "<root>"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def _read_document(path: Path) -> dict[str, Any]:
    """Read the YAML document, treating a missing file as empty."""
    if not path.exists():
        return {}

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        msg = f"Failed to read configuration file {path}: {e}"
        raise ConfigurationError(msg) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Configuration file {path} must contain a mapping"
        raise ConfigurationError(msg)
    return data


def load_settings(path: str | Path | None = None) -> Settings:
    """
    Load and validate settings.

    The document is read from ``path``, else from ``$CONFIG_PATH``, else
    from ``config.yml``. ``APP_*`` environment variables override the
    matching top-level keys.

    Raises:
        ConfigurationError: If the document is unreadable or invalid.
    """
    config_path = Path(path or os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH))
    data = _read_document(config_path)

    for env_key, setting in ENV_OVERRIDES.items():
        if env_key in os.environ:
            data[setting] = os.environ[env_key]

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid configuration in {config_path}: {_format_validation_error(e)}"
        raise ConfigurationError(msg) from e
