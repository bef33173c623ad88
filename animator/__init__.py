"""Top-level package exports.

Public API surface (keep minimal):
 - TimelineEngine (playback position, transport, observer signals)
 - TimingMetadata, resolve_metadata (asset timing metadata)
 - AnimationDecoder, AnimationHandle, DecoderCapabilities, DecodeError (decoder contract)
 - PlayerConfig
"""

from .config import PlayerConfig  # noqa: F401
from .core.metadata import MetadataResolver, TimingMetadata, resolve_metadata  # noqa: F401
from .media.decoder import (  # noqa: F401
    AnimationDecoder,
    AnimationHandle,
    DecodeError,
    DecoderCapabilities,
)
from .media.playback import TimelineEngine  # noqa: F401

__all__ = [
    "AnimationDecoder",
    "AnimationHandle",
    "DecodeError",
    "DecoderCapabilities",
    "MetadataResolver",
    "PlayerConfig",
    "TimelineEngine",
    "TimingMetadata",
    "resolve_metadata",
]
