import concurrent.futures
import unittest
from datetime import datetime, timedelta, timezone

from sessions import (
    IdentityError,
    SessionRecord,
    SessionRecorder,
    SessionStoreError,
    StaticIdentityProvider,
)

_NOW = datetime(2026, 3, 2, 9, 30, tzinfo=timezone.utc)


class _MemoryStore:
    def __init__(self, *, fail_insert: bool = False, fail_recent: bool = False):
        self.rows: list[SessionRecord] = []
        self.fail_insert = fail_insert
        self.fail_recent = fail_recent
        self.recent_calls = 0

    def insert(self, record: SessionRecord) -> None:
        if self.fail_insert:
            raise SessionStoreError("offline")
        self.rows.append(record)

    def recent(self, *, limit: int) -> list[SessionRecord]:
        self.recent_calls += 1
        if self.fail_recent:
            raise SessionStoreError("offline")
        return list(self.rows)


class _BrokenIdentity:
    def current_owner_id(self):
        raise IdentityError("auth endpoint down")


def _record(minutes_ago: int, label: str) -> SessionRecord:
    return SessionRecord(
        id=f"id-{minutes_ago}",
        owner_id="user-1",
        duration_minutes=25,
        label=label,
        completed_at=_NOW - timedelta(minutes=minutes_ago),
    )


class SessionRecorderTests(unittest.TestCase):
    def test_records_completion_for_signed_in_owner(self) -> None:
        store = _MemoryStore()
        published: list[list[SessionRecord]] = []
        recorder = SessionRecorder(
            store,
            identity=StaticIdentityProvider("user-1"),
            on_history=published.append,
            now_fn=lambda: _NOW,
        )

        recorder.record_completion(25, "Write report")

        self.assertEqual(1, len(store.rows))
        row = store.rows[0].to_row()
        self.assertEqual("user-1", row["user_id"])
        self.assertEqual(25, row["duration_minutes"])
        self.assertEqual("Write report", row["task_name"])
        self.assertEqual(_NOW.isoformat(), row["completed_at"])
        self.assertEqual([store.rows], published)

    def test_guest_completion_is_silent_noop(self) -> None:
        store = _MemoryStore()
        recorder = SessionRecorder(store)

        recorder.record_completion(25, "Deep Work")

        self.assertEqual([], store.rows)
        self.assertEqual(0, store.recent_calls)

    def test_without_store_nothing_happens(self) -> None:
        recorder = SessionRecorder(None, identity=StaticIdentityProvider("user-1"))
        recorder.record_completion(25, "Deep Work")
        recorder.refresh()
        self.assertEqual([], recorder.recent)

    def test_store_failure_is_logged_not_raised(self) -> None:
        store = _MemoryStore(fail_insert=True)
        recorder = SessionRecorder(store, identity=StaticIdentityProvider("user-1"))

        with self.assertLogs("sessions", level="WARNING") as logs:
            recorder.record_completion(25, "Deep Work")

        self.assertIn("Failed to record focus session", logs.output[0])
        self.assertEqual(0, store.recent_calls)

    def test_identity_failure_skips_record(self) -> None:
        store = _MemoryStore()
        recorder = SessionRecorder(store, identity=_BrokenIdentity())

        with self.assertLogs("sessions", level="WARNING"):
            recorder.record_completion(25, "Deep Work")

        self.assertEqual([], store.rows)

    def test_refresh_keeps_newest_first_limited(self) -> None:
        store = _MemoryStore()
        store.rows = [_record(minutes, f"s{minutes}") for minutes in (50, 10, 30, 0, 40, 20, 60)]
        recorder = SessionRecorder(store, history_limit=5)

        recorder.refresh()

        self.assertEqual(
            ["s0", "s10", "s20", "s30", "s40"],
            [record.label for record in recorder.recent],
        )

    def test_refresh_failure_keeps_previous_history(self) -> None:
        store = _MemoryStore()
        store.rows = [_record(5, "kept")]
        recorder = SessionRecorder(store)
        recorder.refresh()
        store.fail_recent = True

        with self.assertLogs("sessions", level="WARNING"):
            recorder.refresh()

        self.assertEqual(["kept"], [record.label for record in recorder.recent])

    def test_clear_empties_view_and_publishes(self) -> None:
        store = _MemoryStore()
        store.rows = [_record(5, "old")]
        published: list[list[SessionRecord]] = []
        recorder = SessionRecorder(store, on_history=published.append)
        recorder.refresh()

        recorder.clear()

        self.assertEqual([], recorder.recent)
        self.assertEqual([], published[-1])
        self.assertEqual(1, len(store.rows))

    def test_listener_failure_is_logged(self) -> None:
        def listener(records):
            raise RuntimeError("ui gone")

        recorder = SessionRecorder(_MemoryStore(), on_history=listener)
        with self.assertLogs("sessions", level="ERROR"):
            recorder.clear()

    def test_executor_runs_store_calls_off_thread(self) -> None:
        store = _MemoryStore()
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
            recorder = SessionRecorder(
                store,
                identity=StaticIdentityProvider("user-1"),
                executor=executor,
            )
            recorder.record_completion(25, "Deep Work")
        self.assertEqual(1, len(store.rows))
        self.assertEqual(1, len(recorder.recent))

    def test_rejects_invalid_history_limit(self) -> None:
        with self.assertRaises(ValueError):
            SessionRecorder(None, history_limit=0)
