import concurrent.futures
import logging
import signal
from typing import Optional

from app_config import (
    AppConfig,
    AppConfigurationError,
    SecretConfig,
    load_app_config,
    load_secret_config,
    resolve_config_path,
)
from audio import (
    AMBIENT_TRACKS,
    AudioCoordinator,
    AudioPlaybackError,
    SoundDeviceAlarmOutput,
    UIAlarmOutput,
    UIAmbientOutput,
)
from runtime import RuntimeBootstrap, RuntimeEngine, RuntimeHooks
from runtime.ui import RuntimeUIPublisher
from server import ServerConfigurationError, UIServer, UIServerConfig
from sessions import (
    GuestIdentityProvider,
    IdentityError,
    IdentityProviderLike,
    RestSessionStore,
    SessionRecorder,
    SessionStoreError,
    StaticIdentityProvider,
    SupabaseIdentityProvider,
)


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    return logging.getLogger("lifeos_focus")


def setup_signal_handlers(engine: RuntimeEngine) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""

    def signal_handler(signum: int, frame) -> None:
        del frame
        logging.getLogger("lifeos_focus").info(
            "%s received, stopping...",
            signal.Signals(signum).name,
        )
        engine.stop()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def build_session_store(
    app_config: AppConfig,
    secrets: SecretConfig,
    logger: logging.Logger,
) -> Optional[RestSessionStore]:
    settings = app_config.store
    if not settings.enabled:
        return None
    if not secrets.store_api_key:
        logger.warning("store.enabled is true but LIFEOS_STORE_API_KEY is not set.")
        return None
    try:
        return RestSessionStore(
            settings.url,
            secrets.store_api_key,
            access_token=secrets.access_token,
            table=settings.table,
            timeout_seconds=settings.timeout_seconds,
            logger=logging.getLogger("sessions.store"),
        )
    except SessionStoreError as error:
        logger.warning("Session store unavailable: %s", error)
        return None


def build_identity(
    app_config: AppConfig,
    secrets: SecretConfig,
    logger: logging.Logger,
) -> IdentityProviderLike:
    try:
        if secrets.owner_id:
            return StaticIdentityProvider(secrets.owner_id)
        if secrets.access_token and secrets.store_api_key and app_config.store.url:
            return SupabaseIdentityProvider(
                app_config.store.url,
                secrets.store_api_key,
                secrets.access_token,
                timeout_seconds=app_config.store.timeout_seconds,
                logger=logging.getLogger("sessions.identity"),
            )
    except IdentityError as error:
        logger.warning("Identity provider unavailable: %s", error)
    logger.info("No signed-in user; running as guest.")
    return GuestIdentityProvider()


def build_audio(
    app_config: AppConfig,
    ui: RuntimeUIPublisher,
    logger: logging.Logger,
) -> Optional[AudioCoordinator]:
    settings = app_config.audio
    if not settings.enabled:
        return None

    alarm = None
    if settings.alarm_output == "sounddevice":
        try:
            alarm = SoundDeviceAlarmOutput(
                output_device_index=settings.output_device,
                logger=logging.getLogger("audio.alarm"),
            )
        except AudioPlaybackError as error:
            logger.warning("Local alarm output unavailable, using the browser: %s", error)
            alarm = UIAlarmOutput(ui)
    elif settings.alarm_output == "ui":
        alarm = UIAlarmOutput(ui)

    track_index = settings.track_index
    if track_index >= len(AMBIENT_TRACKS):
        logger.warning("audio.track_index %d is out of range; using track 0", track_index)
        track_index = 0

    return AudioCoordinator(
        UIAmbientOutput(ui),
        alarm=alarm,
        track_index=track_index,
        volume=settings.volume,
        logger=logging.getLogger("audio"),
    )


def main() -> int:
    """Run the focus timer runtime."""
    logger = setup_logging(level=logging.INFO)

    try:
        config_path = resolve_config_path()
        app_config = load_app_config()
        secrets = load_secret_config()
        if app_config.source_file:
            logger.info("Loaded runtime config: %s", config_path)
        else:
            logger.info("No config file at %s; using defaults", config_path)
    except AppConfigurationError as error:
        logger.error("App configuration error: %s", error)
        return 1

    ui_server: Optional[UIServer] = None
    try:
        ui_config = UIServerConfig.from_settings(app_config.ui_server)
        if ui_config.enabled:
            ui_server = UIServer(config=ui_config, logger=logging.getLogger("ui_server"))
    except ServerConfigurationError as error:
        logger.error("UI server configuration error: %s", error)
        return 1
    ui = RuntimeUIPublisher(ui_server)

    store = build_session_store(app_config, secrets, logger)
    session_executor = concurrent.futures.ThreadPoolExecutor(
        max_workers=1,
        thread_name_prefix="sessions",
    )
    recorder = SessionRecorder(
        store,
        identity=build_identity(app_config, secrets, logger),
        executor=session_executor,
        history_limit=app_config.store.history_limit,
        logger=logging.getLogger("sessions"),
    )

    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logger,
            app_config=app_config,
            ui=ui,
            ui_server=ui_server,
            audio=build_audio(app_config, ui, logger),
            recorder=recorder,
            store=store,
            session_executor=session_executor,
            hooks=RuntimeHooks(setup_signal_handlers=setup_signal_handlers),
        )
    )
    return engine.run()


if __name__ == "__main__":
    raise SystemExit(main())
