"""Timeline engine for vector animation playback.

Goals:
- Keep one authoritative playback position, a normalized ``progress`` in [0, 1].
- Project that position consistently onto seconds, frame index and the
  decoder's native frame coordinates (which may be a trimmed subrange).
- Advance, seek and loop under a wall-clock driven tick.

Design:
TimelineEngine owns the decoded animation handle and exposes:
    load(data)
    play() / pause() / stop()
    tick(now) -> bool
    set_progress(p), seek_seconds(t), seek_frame(i), step_frame(n)
    set_speed(s), is_looping
Signals:
    progressChanged(float)   # always followed by timeChanged and frameChanged
    timeChanged(float)
    frameChanged(int)
    redrawRequested()        # host should repaint via handle.render()
    stateChanged(str)        # 'playing'|'paused'|'stopped'|'finished'
    animationLoaded(float)   # timeline duration

Trimmed assets:
When the asset declares an in/out range, progress 0..1 maps onto exactly that
native frame window, not onto the decoder's full native duration. The
timeline duration is then ``(out - in) / fps`` and may be shorter than what
the decoder reports.

Threading: every call, ticks included, is expected on the thread that owns
the engine. The default tick source is a QTimer parented to the engine.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from PySide6.QtCore import QObject, QRectF, Signal

from ..config import PlayerConfig
from ..core.metadata import TimingMetadata, resolve_metadata
from ..utils.geometry import fit_rect
from .decoder import AnimationDecoder, AnimationHandle, DecodeError
from .ticker import QtTickSource, TickSource

logger = logging.getLogger(__name__)


@dataclass
class PlaybackSession:
    handle: AnimationHandle
    metadata: TimingMetadata
    fps: float
    native_duration: float
    duration: float
    progress: float = 0.0
    last_tick: float = 0.0


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _first_positive(*values: Optional[float]) -> float:
    for value in values:
        if value is not None and value > 0:
            return float(value)
    return 0.0


class TimelineEngine(QObject):
    progressChanged = Signal(float)
    timeChanged = Signal(float)
    frameChanged = Signal(int)
    redrawRequested = Signal()
    stateChanged = Signal(str)
    animationLoaded = Signal(float)

    def __init__(
        self,
        decoder: AnimationDecoder,
        parent: Optional[QObject] = None,
        *,
        tick_source: Optional[TickSource] = None,
        clock: Callable[[], float] = time.perf_counter,
        config: Optional[PlayerConfig] = None,
    ):
        super().__init__(parent)
        self._decoder = decoder
        self._config = config or PlayerConfig()
        self._clock = clock
        self._ticks: TickSource = tick_source or QtTickSource(self)
        self._session: Optional[PlaybackSession] = None
        self._playing = False
        self._looping = False
        self._speed = 1.0

    # Loading
    def load(self, data: bytes) -> None:
        """Decode ``data`` and start a fresh session at progress 0.

        The previous animation is released first, so a failed decode leaves
        the engine with no animation loaded. Decoder failures are re-raised
        as :class:`DecodeError`.
        """
        self.unload()
        metadata = resolve_metadata(data)
        try:
            handle = self._decoder.decode(data)
        except DecodeError:
            logger.debug("decode failed for %d byte asset", len(data))
            raise
        except Exception as e:
            raise DecodeError(f"failed to decode animation: {e}") from e

        try:
            fps = _first_positive(
                metadata.frame_rate,
                handle.capabilities.native_fps,
                self._config.fallback_fps,
            )
            native_duration = float(handle.duration)
        except Exception as e:
            handle.close()
            raise DecodeError(f"decoded animation is unusable: {e}") from e
        duration = metadata.duration or native_duration
        self._session = PlaybackSession(
            handle=handle,
            metadata=metadata,
            fps=fps,
            native_duration=native_duration,
            duration=duration,
        )
        logger.debug(
            "loaded animation: duration=%.3fs native=%.3fs fps=%.2f frames=%d trim=%s",
            duration,
            native_duration,
            fps,
            self.total_frames(),
            (metadata.in_point, metadata.out_point) if metadata.has_trim_range else None,
        )
        self.redrawRequested.emit()
        self.animationLoaded.emit(duration)

    def unload(self) -> None:
        """Release the current animation, if any, and stop ticking."""
        self._ticks.disarm()
        was_playing = self._playing
        self._playing = False
        session, self._session = self._session, None
        if session is not None:
            session.handle.close()
            if was_playing:
                self.stateChanged.emit("stopped")

    def close(self) -> None:
        self.unload()

    # Read-only state
    @property
    def has_animation(self) -> bool:
        return self._session is not None

    @property
    def animation(self) -> Optional[AnimationHandle]:
        return self._session.handle if self._session else None

    @property
    def metadata(self) -> TimingMetadata:
        return self._session.metadata if self._session else TimingMetadata()

    @property
    def progress(self) -> float:
        return self._session.progress if self._session else 0.0

    @property
    def duration(self) -> float:
        """Timeline duration in seconds; 0 with nothing loaded."""
        return self._session.duration if self._session else 0.0

    @property
    def native_duration(self) -> float:
        return self._session.native_duration if self._session else 0.0

    @property
    def fps(self) -> float:
        return self._session.fps if self._session else 0.0

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def is_looping(self) -> bool:
        return self._looping

    @is_looping.setter
    def is_looping(self, looping: bool):
        self._looping = bool(looping)

    @property
    def speed(self) -> float:
        return self._speed

    @speed.setter
    def speed(self, speed: float):
        self.set_speed(speed)

    def set_speed(self, speed: float) -> None:
        # Applied on the next tick; elapsed time already consumed is not rescaled.
        self._speed = self._config.clamp_speed(float(speed))

    def total_frames(self) -> int:
        session = self._session
        if session is None:
            return 0
        frames = session.metadata.total_frames
        if frames is not None:
            return max(1, int(round(frames)))
        return max(1, int(round(session.duration * session.fps)))

    def current_frame(self) -> int:
        return self._frame_for(self.progress)

    def current_time(self) -> float:
        return self.duration * self.progress

    def tick_interval_ms(self) -> float:
        return 1000.0 / max(self.fps, self._config.min_tick_rate)

    def destination_rect(self, width: float, height: float) -> QRectF:
        """Aspect-fit rect for rendering the animation onto a width x height surface."""
        handle = self.animation
        if handle is None:
            return QRectF()
        return fit_rect(width, height, handle.width, handle.height)

    # Position
    def set_progress(self, progress: float) -> None:
        """Move to ``progress`` (clamped) and notify progress, time and frame."""
        session = self._session
        if session is None:
            return
        session.progress = _clamp(float(progress), 0.0, 1.0)
        self._seek_to_progress(session)
        self.progressChanged.emit(session.progress)
        self.timeChanged.emit(self.current_time())
        self.frameChanged.emit(self.current_frame())

    def seek_seconds(self, seconds: float) -> None:
        duration = self.duration
        if duration <= 0:
            return
        self.set_progress(_clamp(seconds, 0.0, duration) / duration)

    def seek_frame(self, index: int) -> None:
        total = self.total_frames()
        if total <= 1:
            return
        index = int(_clamp(int(index), 0, total - 1))
        self.set_progress(index / (total - 1))

    def step_frame(self, frames: int = 1) -> None:
        """Step by ``frames`` (negative steps back), one frame being 1/total_frames."""
        total = self.total_frames()
        if total == 0:
            return
        self.set_progress(self.progress + frames / total)

    # Transport
    def play(self) -> None:
        session = self._session
        if session is None or self._playing or session.duration <= 0:
            return
        self._playing = True
        session.last_tick = self._clock()
        self._ticks.arm(self.tick_interval_ms(), self.tick)
        self.stateChanged.emit("playing")

    def pause(self) -> None:
        # The tick source is left armed; tick() declines to advance and deregisters.
        if not self._playing:
            return
        self._playing = False
        self.stateChanged.emit("paused")

    def stop(self) -> None:
        if self._session is None:
            return
        self._playing = False
        self.set_progress(0.0)
        self.stateChanged.emit("stopped")

    def tick(self, now: Optional[float] = None) -> bool:
        """Advance by the wall-clock time elapsed since the previous tick.

        Returns ``True`` while playback should keep ticking and ``False`` once
        it has paused or reached the end without looping.
        """
        session = self._session
        if session is None or not self._playing:
            return False
        if now is None:
            now = self._clock()
        elapsed = max(0.0, now - session.last_tick)
        session.last_tick = now
        if session.duration <= 0:
            return False

        delta = elapsed * self._speed / session.duration
        self.set_progress(session.progress + delta)
        if session.progress < 1.0:
            return True
        if self._looping:
            self.set_progress(0.0)
            return True
        self.set_progress(1.0)
        self._playing = False
        self.stateChanged.emit("finished")
        return False

    # Internal
    def _frame_for(self, progress: float) -> int:
        total = self.total_frames()
        if total <= 1:
            return 0
        return int(_clamp(round(progress * (total - 1)), 0, total - 1))

    def _seek_to_progress(self, session: PlaybackSession) -> None:
        handle = session.handle
        metadata = session.metadata
        try:
            if metadata.has_trim_range:
                target = metadata.in_point + session.progress * (
                    metadata.out_point - metadata.in_point
                )
                if handle.capabilities.frame_seek:
                    handle.seek_frame(target)
                else:
                    handle.seek(target / session.fps)
            else:
                handle.seek(session.progress * session.duration)
        except Exception as e:
            logger.warning("seek to progress %.4f failed: %s", session.progress, e)
            return
        self.redrawRequested.emit()


__all__ = ["TimelineEngine", "PlaybackSession"]
