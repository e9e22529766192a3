"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    AudioSettings,
    StoreSettings,
    TimerSettings,
    UIServerSettings,
)

_ALLOWED_ALARM_OUTPUTS = {"ui", "sounddevice", "none"}


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    return AppConfig(
        timer=_parse_timer_settings(_section(raw, "timer")),
        audio=_parse_audio_settings(_section(raw, "audio")),
        store=_parse_store_settings(_section(raw, "store")),
        ui_server=_parse_ui_server_settings(_section(raw, "ui_server"), base_dir=base_dir),
        source_file=source_file,
    )


def _parse_timer_settings(section: Mapping[str, Any]) -> TimerSettings:
    settings = TimerSettings(
        focus_minutes=_as_int(section.get("focus_minutes", 60), "timer.focus_minutes"),
        short_break_minutes=_as_int(
            section.get("short_break_minutes", 5),
            "timer.short_break_minutes",
        ),
        long_break_minutes=_as_int(
            section.get("long_break_minutes", 10),
            "timer.long_break_minutes",
        ),
        long_break_interval=_as_int(
            section.get("long_break_interval", 3),
            "timer.long_break_interval",
        ),
        auto_start=_as_bool(section.get("auto_start", False), "timer.auto_start"),
        auto_start_delay_seconds=_as_float(
            section.get("auto_start_delay_seconds", 1.5),
            "timer.auto_start_delay_seconds",
        ),
    )
    for field in ("focus_minutes", "short_break_minutes", "long_break_minutes"):
        if getattr(settings, field) <= 0:
            raise AppConfigurationError(f"timer.{field} must be greater than zero.")
    if settings.long_break_interval < 1:
        raise AppConfigurationError("timer.long_break_interval must be >= 1.")
    if settings.auto_start_delay_seconds < 0:
        raise AppConfigurationError("timer.auto_start_delay_seconds must be >= 0.")
    return settings


def _parse_audio_settings(section: Mapping[str, Any]) -> AudioSettings:
    volume = _as_float(section.get("volume", 0.4), "audio.volume")
    if not 0.0 <= volume <= 1.0:
        raise AppConfigurationError("audio.volume must be in [0.0, 1.0].")
    track_index = _as_int(section.get("track_index", 0), "audio.track_index")
    if track_index < 0:
        raise AppConfigurationError("audio.track_index must be >= 0.")
    return AudioSettings(
        enabled=_as_bool(section.get("enabled", True), "audio.enabled"),
        volume=volume,
        track_index=track_index,
        alarm_output=_as_choice(
            section.get("alarm_output", "ui"),
            "audio.alarm_output",
            _ALLOWED_ALARM_OUTPUTS,
        ),
        output_device=(
            _as_int(section.get("output_device"), "audio.output_device")
            if "output_device" in section
            else None
        ),
    )


def _parse_store_settings(section: Mapping[str, Any]) -> StoreSettings:
    _forbid_secret_fields(section, "store", ("api_key", "access_token"))
    settings = StoreSettings(
        enabled=_as_bool(section.get("enabled", False), "store.enabled"),
        url=_as_str(section.get("url", ""), "store.url"),
        table=_as_str(section.get("table", "focus_sessions"), "store.table") or "focus_sessions",
        history_limit=_as_int(section.get("history_limit", 5), "store.history_limit"),
        timeout_seconds=_as_float(section.get("timeout_seconds", 10.0), "store.timeout_seconds"),
    )
    if settings.enabled and not settings.url:
        raise AppConfigurationError("store.url is required when store.enabled is true.")
    if settings.history_limit < 1:
        raise AppConfigurationError("store.history_limit must be >= 1.")
    if settings.timeout_seconds <= 0:
        raise AppConfigurationError("store.timeout_seconds must be greater than zero.")
    return settings


def _parse_ui_server_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> UIServerSettings:
    index_file = _as_str(section.get("index_file", ""), "ui_server.index_file")
    return UIServerSettings(
        enabled=_as_bool(section.get("enabled", True), "ui_server.enabled"),
        host=_as_str(section.get("host", "127.0.0.1"), "ui_server.host"),
        port=_as_int(section.get("port", 8765), "ui_server.port"),
        index_file=_resolve_path(base_dir, index_file) if index_file else "",
    )


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a float.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a float.") from error
    raise AppConfigurationError(f"{field} must be a float.")


def _as_choice(value: Any, field: str, allowed: set[str]) -> str:
    name = _as_str(value, field).lower()
    if name not in allowed:
        choices = ", ".join(sorted(allowed))
        raise AppConfigurationError(f"{field} must be one of: {choices}.")
    return name


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)


def _forbid_secret_fields(
    section: Mapping[str, Any],
    section_name: str,
    fields: tuple[str, ...],
) -> None:
    present = [field for field in fields if field in section]
    if present:
        joined = ", ".join(f"{section_name}.{field}" for field in present)
        raise AppConfigurationError(
            f"Secret values must not be stored in config.toml: {joined}. "
            "Move them to environment variables."
        )
