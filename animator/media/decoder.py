"""Decoder contract the timeline engine drives.

The engine never parses or draws animation content itself. A decoder turns an
asset buffer into an :class:`AnimationHandle` that knows its native duration
and size, can be positioned by time (and optionally by native frame number),
and can render the current position onto a host surface.

Optional decoder features are declared up front through
:class:`DecoderCapabilities` instead of being discovered at runtime.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


class DecodeError(RuntimeError):
    """Raised when an asset buffer cannot be decoded into an animation."""


@dataclass(frozen=True)
class DecoderCapabilities:
    native_fps: Optional[float] = None  # frame rate the decoder itself reports
    frame_seek: bool = False  # seek_frame() is implemented


class AnimationHandle(ABC):
    """A decoded animation owned by exactly one engine at a time."""

    capabilities = DecoderCapabilities()

    @property
    @abstractmethod
    def duration(self) -> float:
        """Native duration of the full (untrimmed) animation in seconds."""

    @property
    @abstractmethod
    def width(self) -> float: ...

    @property
    @abstractmethod
    def height(self) -> float: ...

    @property
    def size(self) -> tuple[float, float]:
        return (self.width, self.height)

    @abstractmethod
    def seek(self, seconds: float) -> None:
        """Position the animation at ``seconds`` on its native timeline."""

    def seek_frame(self, frame: float) -> None:
        """Position the animation at a native frame number.

        Only called when ``capabilities.frame_seek`` is true.
        """
        raise NotImplementedError

    @abstractmethod
    def render(self, surface: Any, rect: Any) -> None:
        """Draw the current position into ``rect`` on ``surface``."""

    def close(self) -> None:
        """Release decoder resources. Safe to call more than once."""


class AnimationDecoder(ABC):
    @abstractmethod
    def decode(self, data: bytes) -> AnimationHandle:
        """Decode ``data``; raise :class:`DecodeError` on malformed input."""


__all__ = [
    "AnimationDecoder",
    "AnimationHandle",
    "DecodeError",
    "DecoderCapabilities",
]
