"""Listen address and page location for the focus UI server."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path


class ServerConfigurationError(Exception):
    """Raised when UI server configuration is invalid."""


WEBSOCKET_PATH = "/ws"
ROOT_PATH = "/"
INDEX_PATH = "/index.html"
HEALTHZ_PATH = "/healthz"

_BUNDLED_PAGE = ("web_ui", "focus", "index.html")


def default_index_file() -> Path:
    """Location of the bundled page, also inside a frozen build."""
    bundle_root = getattr(sys, "_MEIPASS", None)
    base_dir = Path(bundle_root) if bundle_root else Path(__file__).resolve().parents[2]
    return base_dir.joinpath(*_BUNDLED_PAGE)


def _check_index_file(index_file: str) -> None:
    if not index_file:
        raise ServerConfigurationError("ui_server.index_file cannot be empty")
    path = Path(index_file)
    if not path.is_file():
        problem = "is not a file" if path.exists() else "not found"
        raise ServerConfigurationError(f"UI index file {problem}: {path}")


@dataclass(frozen=True)
class UIServerConfig:
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""

    def __post_init__(self) -> None:
        if not self.host.strip():
            raise ServerConfigurationError("ui_server.host cannot be empty")
        if not 1 <= self.port <= 65535:
            raise ServerConfigurationError(f"ui_server.port must be in [1, 65535], got: {self.port}")
        # A disabled server never reads the page.
        if self.enabled:
            _check_index_file(self.index_file)

    @property
    def websocket_path(self) -> str:
        return WEBSOCKET_PATH

    @property
    def static_root(self) -> Path:
        return Path(self.index_file).parent

    @classmethod
    def from_settings(cls, settings) -> "UIServerConfig":
        index_file = (settings.index_file or "").strip() or str(default_index_file())
        return cls(
            enabled=bool(settings.enabled),
            host=settings.host,
            port=settings.port,
            index_file=index_file,
        )
