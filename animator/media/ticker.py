"""Periodic tick sources.

The engine only needs "call me back roughly every N milliseconds". It talks to
a :class:`TickSource` through ``arm``/``disarm`` and never touches the timer
directly. The callback returns ``False`` to deregister itself.

:class:`QtTickSource` delivers ticks through a ``QTimer`` owned by the calling
thread, so ticks land on the same event loop as every other control call.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from PySide6.QtCore import QObject, QTimer, Qt

logger = logging.getLogger(__name__)

TickCallback = Callable[[], bool]


class TickSource(Protocol):
    def arm(self, interval_ms: float, callback: TickCallback) -> None: ...

    def disarm(self) -> None: ...

    def is_armed(self) -> bool: ...


class QtTickSource(QObject):
    """Single ``QTimer`` tick source.

    Re-arming while already armed restarts the one timer with the new
    interval and callback; there is never more than one live registration.
    """

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._timer = QTimer(self)
        try:
            self._timer.setTimerType(Qt.PreciseTimer)  # type: ignore[attr-defined]
        except Exception as e:
            logger.debug("precise timer unavailable: %s", e)
        self._timer.timeout.connect(self._fire)
        self._callback: Optional[TickCallback] = None

    def arm(self, interval_ms: float, callback: TickCallback) -> None:
        self._callback = callback
        interval = max(1, int(interval_ms))
        logger.debug("tick source armed at %d ms", interval)
        self._timer.start(interval)

    def disarm(self) -> None:
        self._timer.stop()
        self._callback = None

    def is_armed(self) -> bool:
        return self._timer.isActive()

    def interval(self) -> int:
        return self._timer.interval()

    def _fire(self):
        callback = self._callback
        if callback is None:
            self._timer.stop()
            return
        if not callback():
            self.disarm()


__all__ = ["TickSource", "TickCallback", "QtTickSource"]
