"""
engine/
-------
Playback, synchronization & recording layer.

    from engine import PlaybackController, SyncController, Recorder, compare
"""

from engine.scheduler import ScheduledTask, TickScheduler, AsyncioScheduler
from engine.playback  import (
    PlaybackController, PlaybackState, SPEED_PRESETS,
    MIN_SPEED_MS, MAX_SPEED_MS, DEFAULT_SPEED_MS,
)
from engine.sync      import SyncController
from engine.recorder  import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "ScheduledTask",
    "TickScheduler",
    "AsyncioScheduler",
    "PlaybackController",
    "PlaybackState",
    "SPEED_PRESETS",
    "MIN_SPEED_MS",
    "MAX_SPEED_MS",
    "DEFAULT_SPEED_MS",
    "SyncController",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
