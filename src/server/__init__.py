"""UI server module for static web UI and websocket streaming."""

from .config import ServerConfigurationError, UIServerConfig
from .events import UICommand
from .service import UIServer

__all__ = [
    "ServerConfigurationError",
    "UICommand",
    "UIServerConfig",
    "UIServer",
]
