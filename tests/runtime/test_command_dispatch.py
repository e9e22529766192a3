import logging
import unittest

from audio import AudioCoordinator
from focus import FocusTimer, LoopScheduler, TimerConfiguration
from runtime.commands import RuntimeCommandDispatcher
from runtime.ui import RuntimeUIPublisher
from server import UICommand


class _UIServerStub:
    def __init__(self):
        self.events: list[tuple[str, dict[str, object]]] = []

    def publish(self, event_type: str, **payload):
        self.events.append((event_type, payload))

    def of_type(self, event_type: str) -> list[dict[str, object]]:
        return [payload for kind, payload in self.events if kind == event_type]


class _AmbientStub:
    def __init__(self):
        self.calls: list[str] = []

    def play(self, url: str, volume: float) -> None:
        self.calls.append("play")

    def pause(self) -> None:
        self.calls.append("pause")

    def set_volume(self, volume: float) -> None:
        self.calls.append("volume")


class _RecorderStub:
    def __init__(self):
        self.calls: list[str] = []

    def refresh(self) -> None:
        self.calls.append("refresh")

    def clear(self) -> None:
        self.calls.append("clear")


class CommandDispatchTests(unittest.TestCase):
    def setUp(self) -> None:
        self.server = _UIServerStub()
        self.timer = FocusTimer(LoopScheduler(), config=TimerConfiguration())
        self.ambient = _AmbientStub()
        self.recorder = _RecorderStub()
        self.dispatcher = RuntimeCommandDispatcher(
            logger=logging.getLogger("test"),
            timer=self.timer,
            ui=RuntimeUIPublisher(self.server),
            audio=AudioCoordinator(self.ambient),
            recorder=self.recorder,
        )

    def _dispatch(self, action: str, **arguments) -> None:
        self.dispatcher.dispatch(UICommand(action=action, arguments=arguments))

    def _last_focus(self) -> dict[str, object]:
        return self.server.of_type("focus")[-1]

    def test_start_publishes_accepted_focus_update_and_title(self) -> None:
        self._dispatch("start")

        focus = self._last_focus()
        self.assertEqual("start", focus["action"])
        self.assertTrue(focus["accepted"])
        self.assertTrue(focus["is_running"])
        self.assertEqual("60:00 | Focus", self.server.of_type("title")[-1]["title"])

    def test_rejected_action_carries_message(self) -> None:
        self._dispatch("pause")

        focus = self._last_focus()
        self.assertFalse(focus["accepted"])
        self.assertEqual("not_running", focus["reason"])
        self.assertEqual("The timer is not running.", focus["message"])

    def test_switch_mode_uses_mode_argument(self) -> None:
        self._dispatch("switch_mode", mode="shortBreak")
        self.assertEqual("shortBreak", self._last_focus()["mode"])
        self.assertEqual(300, self._last_focus()["seconds_remaining"])

    def test_switch_mode_without_mode_is_rejected(self) -> None:
        self._dispatch("switch_mode")
        self.assertEqual("unknown_mode", self._last_focus()["reason"])

    def test_set_label(self) -> None:
        self._dispatch("set_label", label="Refactor parser")
        self.assertEqual("Refactor parser", self.timer.snapshot().label)

    def test_update_config_applies_settings(self) -> None:
        self._dispatch("update_config", settings={"focus_minutes": 25, "long_break_interval": 4})

        self.assertEqual(25, self.timer.config.focus_minutes)
        self.assertEqual(1500, self._last_focus()["seconds_remaining"])
        self.assertEqual(4, self._last_focus()["long_break_interval"])

    def test_invalid_config_is_rejected_and_reported(self) -> None:
        self._dispatch("update_config", settings={"focus_minutes": 0})

        self.assertEqual(60, self.timer.config.focus_minutes)
        self.assertEqual(1, len(self.server.of_type("error")))
        focus = self._last_focus()
        self.assertFalse(focus["accepted"])
        self.assertEqual("invalid_config", focus["reason"])

    def test_audio_toggle_publishes_state(self) -> None:
        self._dispatch("toggle_audio")

        audio = self.server.of_type("audio")[-1]
        self.assertTrue(audio["is_playing"])
        self.assertEqual(6, len(audio["tracks"]))
        self.assertEqual(["play"], self.ambient.calls)

    def test_change_track_rejects_bad_index(self) -> None:
        self._dispatch("change_track", index="two")
        self._dispatch("change_track", index=99)

        self.assertEqual(2, len(self.server.of_type("error")))
        self.assertEqual([], self.ambient.calls)

    def test_set_volume_clamps(self) -> None:
        self._dispatch("set_volume", volume=3)
        self.assertEqual(1.0, self.server.of_type("audio")[-1]["volume"])

    def test_audio_rejected_reverts_to_paused(self) -> None:
        self._dispatch("toggle_audio")
        self._dispatch("audio_rejected")
        audio = self.server.of_type("audio")[-1]
        self.assertFalse(audio["is_playing"])
        self.assertTrue(audio["muted"])

    def test_session_commands_reach_recorder(self) -> None:
        self._dispatch("refresh_sessions")
        self._dispatch("clear_sessions")

        self.assertEqual(["refresh", "clear"], self.recorder.calls)
        self.assertEqual(0, self._last_focus()["cycles"])


if __name__ == "__main__":
    unittest.main()
