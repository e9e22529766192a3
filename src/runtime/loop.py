"""Runtime orchestration loop for scheduled ticks and UI commands."""

from __future__ import annotations

import concurrent.futures
import logging
import threading
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Callable, Optional

from app_config import AppConfig
from audio import AudioCoordinator
from focus import FocusTimer, LoopScheduler, TimerConfiguration
from focus.constants import ACTION_SYNC, REASON_STARTUP
from server import UICommand, UIServer
from sessions import RestSessionStore, SessionRecorder

from .commands import RuntimeCommandDispatcher
from .ticks import TickDependencies, TickProcessor
from .ui import RuntimeUIPublisher

_IDLE_POLL_SECONDS = 0.25


@dataclass(frozen=True)
class RuntimeHooks:
    """Injectable lifecycle hooks used by runtime startup and shutdown flow."""
    setup_signal_handlers: Callable[["RuntimeEngine"], None]


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    app_config: AppConfig
    ui: RuntimeUIPublisher
    ui_server: Optional[UIServer]
    audio: Optional[AudioCoordinator]
    recorder: SessionRecorder
    store: Optional[RestSessionStore]
    session_executor: Optional[concurrent.futures.ThreadPoolExecutor]
    hooks: RuntimeHooks


class RuntimeEngine:
    """Single-threaded loop that owns the timer and applies UI commands.

    The UI server thread only enqueues commands; every state change happens
    on the thread that calls `run`.
    """
    def __init__(
        self,
        bootstrap: RuntimeBootstrap,
        *,
        scheduler: Optional[LoopScheduler] = None,
    ):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._ui = bootstrap.ui
        self._scheduler = scheduler or LoopScheduler(logger=logging.getLogger("scheduler"))
        self._commands: Queue[UICommand] = Queue()
        self._stop_requested = threading.Event()

        timer_settings = bootstrap.app_config.timer
        self._timer = FocusTimer(
            self._scheduler,
            config=TimerConfiguration.from_settings(timer_settings),
            auto_start_delay_seconds=timer_settings.auto_start_delay_seconds,
            logger=logging.getLogger("focus"),
        )
        self._tick_processor = TickProcessor(
            TickDependencies(
                logger=self._logger,
                ui=self._ui,
                audio=bootstrap.audio,
                recorder=bootstrap.recorder,
            )
        )
        self._timer.set_effects(self._tick_processor.build_effects())
        self._dispatcher = RuntimeCommandDispatcher(
            logger=self._logger,
            timer=self._timer,
            ui=self._ui,
            audio=bootstrap.audio,
            recorder=bootstrap.recorder,
        )
        bootstrap.recorder.set_history_listener(self._ui.publish_sessions)

    @property
    def timer(self) -> FocusTimer:
        return self._timer

    def submit_command(self, command: UICommand) -> None:
        """Thread-safe entry point for commands from the UI server."""
        self._commands.put(command)

    def stop(self) -> None:
        self._stop_requested.set()

    def run(self) -> int:
        try:
            self._bootstrap.hooks.setup_signal_handlers(self)
            self._start_ui_server()
            self._publish_startup_sync()
            self._probe_store()
            self._bootstrap.recorder.refresh()

            self._logger.info("Focus timer ready.")
            while not self._stop_requested.is_set():
                self.run_once()
            self._logger.info("Stop requested, shutting down.")
            return 0
        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()

    def run_once(self) -> None:
        """Wait for the next command or due job, then process both."""
        timeout = self._scheduler.next_due_in()
        if timeout is None or timeout > _IDLE_POLL_SECONDS:
            timeout = _IDLE_POLL_SECONDS

        try:
            command = self._commands.get(timeout=timeout)
        except Empty:
            command = None

        while command is not None:
            self._dispatcher.dispatch(command)
            try:
                command = self._commands.get_nowait()
            except Empty:
                command = None

        self._scheduler.run_due()

    def _start_ui_server(self) -> None:
        ui_server = self._bootstrap.ui_server
        if ui_server is None:
            return
        ui_server.set_command_handler(self.submit_command)
        ui_server.start()

    def _publish_startup_sync(self) -> None:
        snapshot = self._timer.snapshot()
        self._ui.publish_focus_update(
            snapshot,
            action=ACTION_SYNC,
            accepted=True,
            reason=REASON_STARTUP,
        )
        self._ui.publish_title(snapshot)
        self._dispatcher.publish_audio_state()

    def _probe_store(self) -> None:
        store = self._bootstrap.store
        if store is None:
            self._logger.info("Session store disabled; focus sessions will not be recorded.")
            return
        if store.ping():
            self._logger.info("Session store reachable.")

    def _shutdown(self) -> None:
        self._timer.close()

        executor = self._bootstrap.session_executor
        if executor is not None:
            self._logger.info("Stopping session worker...")
            executor.shutdown(wait=True, cancel_futures=False)

        store = self._bootstrap.store
        if store is not None:
            store.close()

        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            self._logger.info("Stopping UI server...")
            try:
                ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
