from .config import TimerConfiguration, TimerConfigurationError
from .countdown import CountdownEngine, CountdownTick
from .scheduling import LoopScheduler, ScheduledJob, SchedulerLike
from .service import (
    FocusActionResult,
    FocusEffects,
    FocusMode,
    FocusPhase,
    FocusSnapshot,
    FocusTimer,
    FocusTransition,
)

__all__ = [
    "CountdownEngine",
    "CountdownTick",
    "FocusActionResult",
    "FocusEffects",
    "FocusMode",
    "FocusPhase",
    "FocusSnapshot",
    "FocusTimer",
    "FocusTransition",
    "LoopScheduler",
    "ScheduledJob",
    "SchedulerLike",
    "TimerConfiguration",
    "TimerConfigurationError",
]
