"""User-configurable notification settings loaded from YAML."""

from __future__ import annotations

import os
import re
from datetime import timedelta
from pathlib import Path
from typing import ClassVar, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from socialproof.constants import DEFAULT_MESSAGE_FORMAT
from socialproof.content.models import NotificationPayload

# Load environment variables from .env file(s)
load_dotenv()

Position = Literal[
    "top-left",
    "top-right",
    "top-center",
    "bottom-left",
    "bottom-right",
    "bottom-center",
]
Animation = Literal["slide", "fade", "bounce", "none"]
IconType = Literal["checkmark", "fire", "star"]
DataSource = Literal["local", "api"]


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class NotificationSettings(BaseModel):
    """Immutable snapshot of every notification tunable.

    Fields accept the public camelCase option names (``autoCloseTimeout``)
    as well as their snake_case attribute names. Durations are in
    milliseconds except ``min_time_between``, which is in hours. Once
    built the settings never change; construct a new controller to change
    behavior.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("socialproof.yaml"),
        Path("~/.config/socialproof/config.yaml").expanduser(),
        Path("/etc/socialproof/config.yaml"),
    ]

    # Placement and timing
    position: Position = "bottom-right"
    auto_close: bool = Field(True, alias="autoClose")
    auto_close_timeout: int = Field(
        8000, ge=0, alias="autoCloseTimeout", description="Visible time before auto-close (ms)"
    )
    initial_delay: int = Field(
        10000, ge=0, alias="initialDelay", description="Delay before the first show (ms)"
    )

    # Content sources
    data_source: DataSource = Field("local", alias="dataSource")
    api_url: str | None = Field(None, alias="apiUrl", description="Endpoint returning a payload")
    local_data: tuple[NotificationPayload, ...] = Field((), alias="localData")
    message_format: str = Field(DEFAULT_MESSAGE_FORMAT, alias="messageFormat")

    # Throttling
    save_to_storage: bool = Field(True, alias="saveToStorage")
    min_time_between: float = Field(
        9, ge=0, alias="minTimeBetween", description="Minimum hours between displays"
    )
    max_notifications: int = Field(1, ge=0, alias="maxNotifications")

    # Appearance
    theme: str = Field("default", min_length=1, description="default, bootstrap or tailwind")
    show_icon: bool = Field(True, alias="showIcon")
    icon_type: IconType = Field("checkmark", alias="iconType")
    animation: Animation = "slide"
    animation_duration: int = Field(300, ge=0, alias="animationDuration")
    close_button: bool = Field(True, alias="closeButton")
    pause_on_hover: bool = Field(False, alias="pauseOnHover")

    # ---- validators ----
    @model_validator(mode="after")
    def check_api_url(self) -> NotificationSettings:
        if self.api_url is not None and not self.api_url.strip():
            raise ValueError("apiUrl cannot be blank; omit it or set null")
        return self

    # ---- convenience properties ----
    @property
    def initial_delay_seconds(self) -> float:
        """Initial delay converted to seconds."""
        return self.initial_delay / 1000

    @property
    def auto_close_seconds(self) -> float:
        """Auto-close timeout converted to seconds."""
        return self.auto_close_timeout / 1000

    @property
    def animation_seconds(self) -> float:
        """Exit animation duration converted to seconds."""
        return self.animation_duration / 1000

    @property
    def min_interval(self) -> timedelta:
        """Minimum time between two displays."""
        return timedelta(hours=self.min_time_between)

    @property
    def uses_remote_source(self) -> bool:
        """Whether content should be fetched from ``api_url``."""
        return self.data_source == "api" and bool(self.api_url)

    def to_options(self) -> dict[str, object]:
        """Dump the settings using the public option names."""
        return self.model_dump(by_alias=True, mode="json")

    @classmethod
    def load(cls, path: Path | None = None) -> NotificationSettings:
        """Load settings from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated NotificationSettings object

        Raises:
            FileNotFoundError: If no config file is found
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        if path is None:
            env_path = os.environ.get("SOCIALPROOF_CONFIG")
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(f"Config file from SOCIALPROOF_CONFIG not found: {path}")
            else:
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    raise FileNotFoundError(
                        "No configuration file found. Create socialproof.yaml or set SOCIALPROOF_CONFIG."
                    )

        import yaml  # local import to avoid hard dep for callers

        try:
            raw = _interpolate_env(path.read_text())
            data = yaml.safe_load(raw) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err
