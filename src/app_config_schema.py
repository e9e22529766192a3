"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_CONFIG_FILE = "config.toml"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class TimerSettings:
    """Interval lengths and auto-chain behaviour from `[timer]`."""
    focus_minutes: int = 60
    short_break_minutes: int = 5
    long_break_minutes: int = 10
    long_break_interval: int = 3
    auto_start: bool = False
    auto_start_delay_seconds: float = 1.5


@dataclass(frozen=True)
class AudioSettings:
    """Ambient audio defaults and alarm output selection from `[audio]`."""
    enabled: bool = True
    volume: float = 0.4
    track_index: int = 0
    alarm_output: str = "ui"
    output_device: Optional[int] = None


@dataclass(frozen=True)
class StoreSettings:
    """Hosted row-store settings from `[store]`; keys live in the environment."""
    enabled: bool = False
    url: str = ""
    table: str = "focus_sessions"
    history_limit: int = 5
    timeout_seconds: float = 10.0


@dataclass(frozen=True)
class UIServerSettings:
    """Built-in UI server settings from `[ui_server]`."""
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    timer: TimerSettings = field(default_factory=TimerSettings)
    audio: AudioSettings = field(default_factory=AudioSettings)
    store: StoreSettings = field(default_factory=StoreSettings)
    ui_server: UIServerSettings = field(default_factory=UIServerSettings)
    source_file: str = ""


@dataclass(frozen=True)
class SecretConfig:
    """Environment-provided secrets kept out of `config.toml`."""
    store_api_key: Optional[str]
    access_token: Optional[str]
    owner_id: Optional[str]
