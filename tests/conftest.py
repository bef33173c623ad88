import json

import pytest
from PySide6.QtCore import QCoreApplication

from animator.media.decoder import (
    AnimationDecoder,
    AnimationHandle,
    DecodeError,
    DecoderCapabilities,
)


@pytest.fixture(scope="session", autouse=True)
def app_instance():
    return QCoreApplication.instance() or QCoreApplication([])


def lottie_bytes(**root) -> bytes:
    doc = {"v": "5.7.4", "w": 200, "h": 100, "layers": []}
    doc.update(root)
    return json.dumps(doc).encode("utf-8")


class FakeAnimation(AnimationHandle):
    def __init__(
        self,
        duration=2.0,
        width=200,
        height=100,
        *,
        native_fps=None,
        frame_seek=False,
        fail_seek=False,
    ):
        self._duration = duration
        self._width = width
        self._height = height
        self.capabilities = DecoderCapabilities(
            native_fps=native_fps, frame_seek=frame_seek
        )
        self.fail_seek = fail_seek
        self.seeks = []  # ("time", seconds) | ("frame", frame)
        self.closed = False

    @property
    def duration(self):
        return self._duration

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    def seek(self, seconds):
        if self.fail_seek:
            raise RuntimeError("seek failed")
        self.seeks.append(("time", seconds))

    def seek_frame(self, frame):
        if self.fail_seek:
            raise RuntimeError("seek failed")
        self.seeks.append(("frame", frame))

    def render(self, surface, rect):
        surface.append(rect)

    def close(self):
        self.closed = True


class FakeDecoder(AnimationDecoder):
    """Hands out FakeAnimation handles; rejects buffers that are not JSON."""

    def __init__(self, **handle_kwargs):
        self.handle_kwargs = handle_kwargs
        self.handles = []

    def decode(self, data):
        try:
            json.loads(data)
        except ValueError as e:
            raise DecodeError(f"not an animation: {e}") from e
        handle = FakeAnimation(**self.handle_kwargs)
        self.handles.append(handle)
        return handle


class ManualTickSource:
    def __init__(self):
        self.callback = None
        self.interval_ms = None
        self.arm_count = 0

    def arm(self, interval_ms, callback):
        self.interval_ms = interval_ms
        self.callback = callback
        self.arm_count += 1

    def disarm(self):
        self.callback = None

    def is_armed(self):
        return self.callback is not None


class FakeClock:
    def __init__(self, start=100.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds
        return self.now


class Recorder:
    """Collects engine notifications in emission order."""

    def __init__(self, engine):
        self.events = []
        engine.progressChanged.connect(lambda p: self.events.append(("progress", p)))
        engine.timeChanged.connect(lambda t: self.events.append(("time", t)))
        engine.frameChanged.connect(lambda f: self.events.append(("frame", f)))
        engine.redrawRequested.connect(lambda: self.events.append(("redraw", None)))
        engine.stateChanged.connect(lambda s: self.events.append(("state", s)))

    def of(self, kind):
        return [value for k, value in self.events if k == kind]

    def clear(self):
        self.events.clear()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ticks():
    return ManualTickSource()


@pytest.fixture
def decoder():
    return FakeDecoder()


@pytest.fixture
def make_engine(clock, ticks):
    from animator.media.playback import TimelineEngine

    def _make(decoder=None, **kwargs):
        return TimelineEngine(
            decoder or FakeDecoder(), tick_source=ticks, clock=clock, **kwargs
        )

    return _make
