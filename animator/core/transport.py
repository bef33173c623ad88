"""Transport helpers hosts wire to their playback buttons.

SpeedCycler steps the engine through a fixed list of playback speeds.
FrameRepeater turns a press-and-hold on a frame-step button into repeated
single-frame steps: one initial delay, then a steady repeat rate until the
button is released.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from PySide6.QtCore import QObject, QTimer, Signal

from ..config import PlayerConfig

if TYPE_CHECKING:  # pragma: no cover
    from ..media.playback import TimelineEngine


class SpeedCycler:
    """Cycle playback speed through ``steps``, starting at 1x when present."""

    def __init__(self, engine: "TimelineEngine", steps: Optional[Sequence[float]] = None):
        self._engine = engine
        self._steps = tuple(steps) if steps else PlayerConfig().speed_steps
        self._index = self._steps.index(1.0) if 1.0 in self._steps else 0
        self.apply()

    @property
    def steps(self) -> tuple[float, ...]:
        return self._steps

    @property
    def current(self) -> float:
        return self._steps[self._index]

    def advance(self) -> float:
        self._index = (self._index + 1) % len(self._steps)
        return self.apply()

    def apply(self) -> float:
        self._engine.set_speed(self.current)
        return self._engine.speed

    def label(self) -> str:
        return f"{self.current:g}x"


class FrameRepeater(QObject):
    """Repeat ``engine.step_frame(direction)`` while a step button is held."""

    stepped = Signal(int)

    def __init__(
        self,
        engine: "TimelineEngine",
        parent: Optional[QObject] = None,
        *,
        config: Optional[PlayerConfig] = None,
    ):
        super().__init__(parent)
        config = config or PlayerConfig()
        self._engine = engine
        self._direction = 0
        self._delay = QTimer(self)
        self._delay.setSingleShot(True)
        self._delay.setInterval(config.repeat_delay_ms)
        self._delay.timeout.connect(self._begin_repeat)
        self._repeat = QTimer(self)
        self._repeat.setInterval(config.repeat_interval_ms)
        self._repeat.timeout.connect(self._step)

    def start(self, direction: int) -> None:
        """Button pressed: schedule repeated steps in ``direction`` (+1/-1)."""
        self.stop()
        self._direction = direction
        self._delay.start()

    def stop(self) -> None:
        """Button released."""
        self._delay.stop()
        self._repeat.stop()
        self._direction = 0

    def is_active(self) -> bool:
        return self._delay.isActive() or self._repeat.isActive()

    def _begin_repeat(self):
        if self._direction == 0:
            return
        self._step()
        self._repeat.start()

    def _step(self):
        if self._direction == 0:
            self._repeat.stop()
            return
        self._engine.step_frame(self._direction)
        self.stepped.emit(self._direction)


__all__ = ["SpeedCycler", "FrameRepeater"]
