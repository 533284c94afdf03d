"""
sync.py — Synchronization Layer
================================
Steps two independently generated traces with ONE shared index.

    sync = SyncController(bfs_steps, dfs_steps)
    sync.next()
    sync.left_step, sync.right_step

The shared index runs over [0, max(len_left, len_right) - 1].  Each side
renders min(shared, len_side - 1), so the shorter trace holds its final
Step while the longer one keeps going.  Play / pause / reset / speed act
once, on the shared index, through a PlaybackController running in
externally controlled mode.
"""

from typing import List, Optional, Sequence

from algorithms.step import Step
from engine.playback import DEFAULT_SPEED_MS, PlaybackController


class SyncController:
    def __init__(
        self,
        left_steps: Sequence[Step],
        right_steps: Sequence[Step],
        scheduler=None,
        speed_ms: float = DEFAULT_SPEED_MS,
    ):
        self.left_steps:  List[Step] = list(left_steps)
        self.right_steps: List[Step] = list(right_steps)
        self._shared: int = 0

        longer = self.left_steps if len(self.left_steps) >= len(self.right_steps) else self.right_steps
        self.playback = PlaybackController(
            longer,
            scheduler=scheduler,
            speed_ms=speed_ms,
            index=lambda: self._shared,
            set_index=self._write,
        )

    def _write(self, idx: int) -> None:
        self._shared = idx

    # ------------------------------------------------------------------
    # Shared controls
    # ------------------------------------------------------------------
    def play(self) -> None:
        self.playback.play()

    def pause(self) -> None:
        self.playback.pause()

    def toggle_play(self) -> None:
        self.playback.toggle_play()

    def next(self) -> int:
        return self.playback.next()

    def prev(self) -> int:
        return self.playback.prev()

    def seek(self, idx: int) -> int:
        return self.playback.seek(idx)

    def reset(self) -> None:
        self.playback.reset()

    def set_speed(self, ms: float) -> None:
        self.playback.set_speed(ms)

    def set_speed_preset(self, preset: str) -> None:
        self.playback.set_speed_preset(preset)

    def tick(self) -> int:
        return self.playback.tick()

    # ------------------------------------------------------------------
    # Per-side views
    # ------------------------------------------------------------------
    @property
    def index(self) -> int:
        return self._shared

    @property
    def max_index(self) -> int:
        return max(len(self.left_steps), len(self.right_steps)) - 1

    @property
    def is_playing(self) -> bool:
        return self.playback.is_playing

    @property
    def left_index(self) -> int:
        return _clamped(self._shared, self.left_steps)

    @property
    def right_index(self) -> int:
        return _clamped(self._shared, self.right_steps)

    @property
    def left_step(self) -> Optional[Step]:
        return self.left_steps[self.left_index] if self.left_steps else None

    @property
    def right_step(self) -> Optional[Step]:
        return self.right_steps[self.right_index] if self.right_steps else None

    def to_dict(self) -> dict:
        return {
            "state":       self.playback.state.value,
            "is_playing":  self.is_playing,
            "index":       self.index,
            "max_index":   self.max_index,
            "speed_ms":    self.playback.speed_ms,
            "left":  {
                "index":       self.left_index,
                "total_steps": len(self.left_steps),
                "step":        self.left_step.to_dict() if self.left_step else None,
            },
            "right": {
                "index":       self.right_index,
                "total_steps": len(self.right_steps),
                "step":        self.right_step.to_dict() if self.right_step else None,
            },
        }


def _clamped(shared: int, steps: Sequence[Step]) -> int:
    return max(0, min(shared, len(steps) - 1))
