from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping

import tomllib

from app_config_parser import parse_app_config
from app_config_schema import (
    DEFAULT_CONFIG_FILE,
    AppConfig,
    AppConfigurationError,
    AudioSettings,
    SecretConfig,
    StoreSettings,
    TimerSettings,
    UIServerSettings,
)

__all__ = [
    "AppConfig",
    "AppConfigurationError",
    "AudioSettings",
    "SecretConfig",
    "StoreSettings",
    "TimerSettings",
    "UIServerSettings",
    "load_app_config",
    "load_secret_config",
    "resolve_config_path",
]


def resolve_config_path(config_path: str | None = None) -> Path:
    env_path = os.getenv("APP_CONFIG_FILE")
    raw = config_path or env_path or DEFAULT_CONFIG_FILE
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()
    if path.exists():
        return path

    # Frozen builds: look next to the executable when nothing was requested explicitly.
    if config_path is None and env_path is None and getattr(sys, "frozen", False):
        executable_dir_path = Path(sys.executable).resolve().parent / DEFAULT_CONFIG_FILE
        if executable_dir_path.exists():
            return executable_dir_path

    return path


def load_app_config(config_path: str | None = None) -> AppConfig:
    """Load `config.toml`; without an explicit path a missing file means defaults."""
    explicit = config_path is not None or os.getenv("APP_CONFIG_FILE") is not None
    path = resolve_config_path(config_path)
    if not path.exists():
        if explicit:
            raise AppConfigurationError(f"Config file not found: {path}")
        return AppConfig(source_file="")
    if not path.is_file():
        raise AppConfigurationError(f"Config path is not a file: {path}")

    try:
        with open(path, "rb") as fh:
            raw = tomllib.load(fh)
    except Exception as error:
        raise AppConfigurationError(f"Failed to parse config TOML: {error}") from error

    if not isinstance(raw, Mapping):
        raise AppConfigurationError("Root config TOML object must be a table.")

    return parse_app_config(raw, base_dir=path.parent, source_file=str(path))


def load_secret_config(
    *,
    environ: Mapping[str, str] | None = None,
) -> SecretConfig:
    env = environ if environ is not None else os.environ
    return SecretConfig(
        store_api_key=env.get("LIFEOS_STORE_API_KEY", "").strip() or None,
        access_token=env.get("LIFEOS_ACCESS_TOKEN", "").strip() or None,
        owner_id=env.get("LIFEOS_OWNER_ID", "").strip() or None,
    )
