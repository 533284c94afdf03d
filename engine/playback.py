"""
playback.py — Playback Controller
==================================
Walks an already-generated trace.  The controller never produces Steps; it
only moves an index over a finished list and schedules auto-advance.

State machine:
    IDLE(i)  →  play()   →  PLAYING        (no-op when i is the last index)
    PLAYING  →  pause()  →  IDLE(i)
    any      →  next() / prev() / seek()  →  IDLE(clamped index)
    any      →  reset()  →  IDLE(0)
    PLAYING  →  (auto-advance reaches last index)  →  IDLE(last)

While PLAYING exactly one delayed advance is pending on the scheduler.
Every transition cancels it first, so two advances can never race.

Externally controlled mode:
    Pass `index` (zero-arg callable) and `set_index` (one-arg callable) and
    the controller reads and writes the index through them instead of
    holding it.  The comparison view uses this to drive one shared index.
"""

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from algorithms.step import Step
from engine.scheduler import ScheduledTask, TickScheduler


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    IDLE    = "idle"
    PLAYING = "playing"


# ---------------------------------------------------------------------------
# Speed (milliseconds between auto-advance ticks)
# ---------------------------------------------------------------------------
MIN_SPEED_MS     = 200
MAX_SPEED_MS     = 3000
DEFAULT_SPEED_MS = 1500

SPEED_PRESETS: Dict[str, int] = {
    "slow":   2500,    # teaching mode
    "medium": DEFAULT_SPEED_MS,
    "fast":   700,
    "turbo":  MIN_SPEED_MS,
}


def clamp_speed(ms: float) -> int:
    return int(min(MAX_SPEED_MS, max(MIN_SPEED_MS, ms)))


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        steps     : The trace being played (never mutated).
        state     : Current PlaybackState.
        speed_ms  : Auto-advance interval.
        scheduler : Anything with call_later(delay_ms, cb) -> task.
        on_step   : Optional callback(Step) fired whenever the index changes.
    """

    def __init__(
        self,
        steps: Sequence[Step] = (),
        scheduler=None,
        speed_ms: float = DEFAULT_SPEED_MS,
        on_step: Optional[Callable[[Step], None]] = None,
        index: Optional[Callable[[], int]] = None,
        set_index: Optional[Callable[[int], None]] = None,
    ):
        if (index is None) != (set_index is None):
            raise ValueError("index and set_index must be supplied together")

        self.steps:     List[Step]    = list(steps)
        self.scheduler                = scheduler or TickScheduler()
        self.speed_ms:  int           = clamp_speed(speed_ms)
        self.state:     PlaybackState = PlaybackState.IDLE
        self.on_step:   Optional[Callable[[Step], None]] = on_step

        self._read_index  = index
        self._write_index = set_index
        self._own_index:  int = 0
        self._task:       Optional[ScheduledTask] = None

    # ------------------------------------------------------------------
    # Index plumbing
    # ------------------------------------------------------------------
    @property
    def index(self) -> int:
        if self._read_index is not None:
            return self._read_index()
        return self._own_index

    def _set(self, idx: int) -> None:
        idx = self._clamp(idx)
        if self._write_index is not None:
            self._write_index(idx)
        else:
            self._own_index = idx
        self._notify()

    def _clamp(self, idx: int) -> int:
        return max(0, min(idx, self.last_index))

    @property
    def last_index(self) -> int:
        return max(len(self.steps) - 1, 0)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, steps: Sequence[Step]) -> None:
        """Swap in a new trace, back to IDLE at index 0."""
        self._cancel()
        self.steps = list(steps)
        self.state = PlaybackState.IDLE
        self._set(0)
        logger.debug("Loaded trace with %d steps", len(self.steps))

    def reset(self) -> None:
        self._cancel()
        self.state = PlaybackState.IDLE
        self._set(0)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next(self) -> int:
        self._stop()
        self._set(self.index + 1)
        return self.index

    def prev(self) -> int:
        self._stop()
        self._set(self.index - 1)
        return self.index

    def seek(self, idx: int) -> int:
        self._stop()
        self._set(idx)
        return self.index

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.index >= self.last_index:
            return
        self._cancel()
        self.state = PlaybackState.PLAYING
        self._schedule()
        logger.debug("Playing from step %d at %d ms", self.index, self.speed_ms)

    def pause(self) -> None:
        self._stop()

    def toggle_play(self) -> None:
        if self.is_playing:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, ms: float) -> None:
        self.speed_ms = clamp_speed(ms)
        if self.is_playing:
            self._cancel()
            self._schedule()

    def set_speed_preset(self, preset: str) -> None:
        self.set_speed(SPEED_PRESETS.get(preset, DEFAULT_SPEED_MS))

    # ------------------------------------------------------------------
    # Tick  (poll from your event loop / HTTP handler)
    # ------------------------------------------------------------------
    def tick(self) -> int:
        """Run any due auto-advance.  Returns the current index."""
        self.scheduler.run_pending()
        return self.index

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        if not self.steps:
            return None
        return self.steps[self._clamp(self.index)]

    @property
    def is_playing(self) -> bool:
        return self.state == PlaybackState.PLAYING

    @property
    def has_pending_advance(self) -> bool:
        return self._task is not None and self._task.pending

    def to_dict(self) -> dict:
        step = self.current_step
        return {
            "state":       self.state.value,
            "is_playing":  self.is_playing,
            "index":       self.index,
            "total_steps": len(self.steps),
            "speed_ms":    self.speed_ms,
            "step":        step.to_dict() if step else None,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _schedule(self) -> None:
        self._task = self.scheduler.call_later(self.speed_ms, self._advance)

    def _cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def _stop(self) -> None:
        self._cancel()
        if self.is_playing:
            logger.debug("Paused at step %d", self.index)
        self.state = PlaybackState.IDLE

    def _advance(self) -> None:
        self._task = None
        if not self.is_playing:
            return
        self._set(self.index + 1)
        if self.index >= self.last_index:
            self.state = PlaybackState.IDLE
            logger.debug("Reached final step %d", self.index)
        else:
            self._schedule()

    def _notify(self) -> None:
        step = self.current_step
        if self.on_step and step is not None:
            self.on_step(step)
