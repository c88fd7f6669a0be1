"""Time-driven stepping through a materialized trace."""

from __future__ import annotations

from typing import Callable, Optional

import time

MIN_SPEED = 0.1
MAX_SPEED = 5.0
BASE_DELAY = 1.0


class Playback:
    """Cursor over a trace of total_steps steps.

    The cursor only moves through the explicit controls or through tick(),
    which a front end calls from its own loop. Every change of current_step
    is reported to on_step_change.
    """

    def __init__(
        self,
        total_steps: int,
        speed: float = 1.0,
        on_step_change: Optional[Callable[[int], None]] = None,
    ) -> None:
        self.total_steps = max(0, total_steps)
        self.current_step = 0
        self.is_playing = False
        self.speed = _clamp(speed, MIN_SPEED, MAX_SPEED)
        self.on_step_change = on_step_change
        self._last_advance: Optional[float] = None

    @property
    def delay(self) -> float:
        """Seconds between automatic advances."""
        return BASE_DELAY / self.speed

    @property
    def last_index(self) -> int:
        return max(0, self.total_steps - 1)

    @property
    def can_step_forward(self) -> bool:
        return self.current_step < self.total_steps - 1

    @property
    def can_step_backward(self) -> bool:
        return self.current_step > 0

    @property
    def progress(self) -> float:
        if self.total_steps == 0:
            return 0.0
        return (self.current_step + 1) / self.total_steps * 100

    def play(self, now: Optional[float] = None) -> None:
        if not self.can_step_forward:
            return
        self.is_playing = True
        self._last_advance = time.monotonic() if now is None else now

    def pause(self) -> None:
        self.is_playing = False
        self._last_advance = None

    def toggle(self, now: Optional[float] = None) -> None:
        if self.is_playing:
            self.pause()
        else:
            self.play(now)

    def step_forward(self) -> None:
        if self.can_step_forward:
            self._move_to(self.current_step + 1)

    def step_backward(self) -> None:
        if self.can_step_backward:
            self._move_to(self.current_step - 1)

    def reset(self) -> None:
        self.pause()
        self._move_to(0)

    def jump_to_step(self, index: int) -> None:
        self._move_to(int(_clamp(index, 0, self.last_index)))

    def set_speed(self, speed: float) -> None:
        self.speed = _clamp(speed, MIN_SPEED, MAX_SPEED)

    def tick(self, now: Optional[float] = None) -> bool:
        """Advance one step if playing and delay has elapsed. Returns True when the cursor moved."""
        if not self.is_playing:
            return False
        now = time.monotonic() if now is None else now
        if self._last_advance is None:
            self._last_advance = now
            return False
        if now - self._last_advance < self.delay:
            return False
        if not self.can_step_forward:
            self.pause()
            return False
        self._last_advance = now
        self._move_to(self.current_step + 1)
        if not self.can_step_forward:
            self.pause()
        return True

    def _move_to(self, index: int) -> None:
        if index == self.current_step:
            return
        self.current_step = index
        if self.on_step_change:
            self.on_step_change(index)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
