import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock

import requests

from sessions import RestSessionStore, SessionRecord, SessionStoreError


def _response(status_code: int = 200, payload=None, text: str = ""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def _http(response=None, error=None):
    http = MagicMock()
    http.headers = {}
    if error is not None:
        http.request.side_effect = error
    else:
        http.request.return_value = response
    return http


class RestSessionStoreTests(unittest.TestCase):
    def test_headers_use_access_token_when_given(self) -> None:
        http = _http(_response())
        RestSessionStore("https://db.example/", "anon-key", access_token="user-token", session=http)

        self.assertEqual("anon-key", http.headers["apikey"])
        self.assertEqual("Bearer user-token", http.headers["Authorization"])

    def test_insert_posts_row(self) -> None:
        http = _http(_response(201))
        store = RestSessionStore("https://db.example", "anon-key", session=http)
        record = SessionRecord(
            id="abc",
            owner_id="user-1",
            duration_minutes=25,
            label="Deep Work",
            completed_at=datetime(2026, 3, 2, 9, 30, tzinfo=timezone.utc),
        )

        store.insert(record)

        method, url = http.request.call_args.args
        kwargs = http.request.call_args.kwargs
        self.assertEqual("POST", method)
        self.assertEqual("https://db.example/rest/v1/focus_sessions", url)
        self.assertEqual(record.to_row(), kwargs["json"])
        self.assertEqual("return=minimal", kwargs["headers"]["Prefer"])
        self.assertEqual(10.0, kwargs["timeout"])

    def test_recent_orders_newest_first_and_limits(self) -> None:
        rows = [
            {
                "id": "1",
                "user_id": "user-1",
                "duration_minutes": 25,
                "task_name": "Write",
                "completed_at": "2026-03-02T09:30:00Z",
            }
        ]
        http = _http(_response(200, rows))
        store = RestSessionStore("https://db.example", "anon-key", session=http)

        records = store.recent(limit=5)

        params = http.request.call_args.kwargs["params"]
        self.assertEqual("completed_at.desc", params["order"])
        self.assertEqual("5", params["limit"])
        self.assertEqual("Write", records[0].label)
        self.assertEqual(timezone.utc, records[0].completed_at.tzinfo)

    def test_http_error_raises_store_error(self) -> None:
        http = _http(_response(500, text="boom"))
        store = RestSessionStore("https://db.example", "anon-key", session=http)

        with self.assertRaisesRegex(SessionStoreError, "HTTP 500"):
            store.recent(limit=5)

    def test_network_error_raises_store_error(self) -> None:
        http = _http(error=requests.ConnectionError("unreachable"))
        store = RestSessionStore("https://db.example", "anon-key", session=http)

        with self.assertRaises(SessionStoreError):
            store.recent(limit=5)

    def test_malformed_row_raises_store_error(self) -> None:
        http = _http(_response(200, [{"id": "1"}]))
        store = RestSessionStore("https://db.example", "anon-key", session=http)

        with self.assertRaises(SessionStoreError):
            store.recent(limit=5)

    def test_ping_reports_failure_without_raising(self) -> None:
        http = _http(_response(503))
        store = RestSessionStore("https://db.example", "anon-key", session=http)

        with self.assertLogs("sessions.store", level="WARNING"):
            self.assertFalse(store.ping())

    def test_ping_requests_single_id(self) -> None:
        http = _http(_response(200, []))
        store = RestSessionStore("https://db.example", "anon-key", session=http)

        self.assertTrue(store.ping())
        self.assertEqual({"select": "id", "limit": "1"}, http.request.call_args.kwargs["params"])

    def test_rejects_empty_url(self) -> None:
        with self.assertRaises(SessionStoreError):
            RestSessionStore(" ", "anon-key", session=_http())
