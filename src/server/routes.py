"""HTTP routing for the plain (non-websocket) requests the UI server answers."""

from __future__ import annotations

from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit

from websockets.datastructures import Headers
from websockets.http11 import Response

from .config import HEALTHZ_PATH, INDEX_PATH, ROOT_PATH, UIServerConfig
from .static_files import guess_content_type, resolve_static_file

_TEXT_PLAIN = "text/plain; charset=utf-8"
_TEXT_HTML = "text/html; charset=utf-8"


def build_response(status_code: int, reason: str, body: bytes, content_type: str) -> Response:
    headers = Headers()
    headers["Content-Type"] = content_type
    headers["Content-Length"] = str(len(body))
    headers["Cache-Control"] = "no-store"
    return Response(status_code, reason, headers, body)


class UIRoutes:
    """Serves the focus page, a health probe, and assets next to the page.

    Returns None for the websocket path so the handshake can proceed.
    """

    def __init__(self, config: UIServerConfig):
        self._websocket_path = config.websocket_path
        self._static_root = config.static_root
        self._index_html = Path(config.index_file).read_bytes()

    def respond(self, raw_path: str) -> Optional[Response]:
        path = urlsplit(raw_path).path
        if path == self._websocket_path:
            return None
        if path in (ROOT_PATH, INDEX_PATH):
            return build_response(200, "OK", self._index_html, _TEXT_HTML)
        if path == HEALTHZ_PATH:
            return build_response(200, "OK", b"ok\n", _TEXT_PLAIN)

        asset = resolve_static_file(self._static_root, path)
        if asset is None:
            return build_response(404, "Not Found", b"not found\n", _TEXT_PLAIN)
        return build_response(200, "OK", asset.read_bytes(), guess_content_type(asset))
