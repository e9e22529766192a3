"""Static asset lookup for the focus UI directory."""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Optional

SERVABLE_SUFFIXES: frozenset[str] = frozenset(
    {".html", ".js", ".css", ".svg", ".png", ".ico", ".json", ".mp3", ".ogg", ".wav"}
)
_TEXT_TYPES = {"application/javascript", "application/json", "image/svg+xml"}


def resolve_static_file(ui_root: Path, request_path: str) -> Optional[Path]:
    """Map a request path to a servable file under `ui_root`, or None."""
    relative = (request_path or "").lstrip("/")
    if not relative:
        return None
    if any(part.startswith(".") for part in relative.split("/")):
        return None

    root = ui_root.resolve()
    candidate = (root / relative).resolve()
    if root not in candidate.parents:
        return None
    if candidate.suffix.lower() not in SERVABLE_SUFFIXES:
        return None
    if not candidate.is_file():
        return None
    return candidate


def guess_content_type(path: Path) -> str:
    mime_type, _ = mimetypes.guess_type(str(path))
    if not mime_type:
        return "application/octet-stream"
    if mime_type.startswith("text/") or mime_type in _TEXT_TYPES:
        return f"{mime_type}; charset=utf-8"
    return mime_type
