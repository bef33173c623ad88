"""Timing metadata extraction for vector animation assets.

Lottie documents declare their timing at the root of the JSON object:

    fr  frames per second
    ip  in point (first native frame of the played range)
    op  out point (native frame where the played range ends)

The resolver reads only those three scalars. Anything it cannot trust is
reported as ``None`` so callers can fall back to what the decoder reports
about the animation itself. Parsing never raises.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)

FRAME_RATE_KEY = "fr"
IN_POINT_KEY = "ip"
OUT_POINT_KEY = "op"


@dataclass(frozen=True)
class TimingMetadata:
    frame_rate: Optional[float] = None
    in_point: Optional[float] = None
    out_point: Optional[float] = None
    duration: Optional[float] = None  # seconds covered by [in_point, out_point)
    total_frames: Optional[float] = None  # out_point - in_point

    @property
    def has_trim_range(self) -> bool:
        return self.in_point is not None and self.out_point is not None


def _number(root: dict[str, Any], key: str) -> Optional[float]:
    value = root.get(key)
    # bool is an int subclass; JSON true/false is not a timing value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        value = float(value)
    except OverflowError:
        return None
    if not math.isfinite(value):
        return None
    return value


def resolve_metadata(data: bytes) -> TimingMetadata:
    """Read the declared frame rate and in/out range from an asset buffer.

    Derived ``duration`` and ``total_frames`` are filled only when the frame
    rate and both range points are present and usable. A buffer that is not
    a JSON object yields an empty ``TimingMetadata``.
    """
    try:
        root = json.loads(data)
    except (ValueError, TypeError, RecursionError) as e:
        logger.debug("asset metadata unreadable: %s", e)
        return TimingMetadata()
    if not isinstance(root, dict):
        logger.debug("asset metadata root is %s, not an object", type(root).__name__)
        return TimingMetadata()

    fr = _number(root, FRAME_RATE_KEY)
    if fr is not None and fr <= 0:
        fr = None
    ip = _number(root, IN_POINT_KEY)
    op = _number(root, OUT_POINT_KEY)
    if ip is None or op is None or op <= ip:
        ip = op = None

    if ip is not None and not math.isfinite(op - ip):
        ip = op = None

    if fr is None or ip is None:
        return TimingMetadata(frame_rate=fr, in_point=ip, out_point=op)
    span = op - ip
    return TimingMetadata(
        frame_rate=fr,
        in_point=ip,
        out_point=op,
        duration=span / fr,
        total_frames=span,
    )


class MetadataResolver:
    """Object wrapper around :func:`resolve_metadata` for injection."""

    def resolve(self, data: bytes) -> TimingMetadata:
        return resolve_metadata(data)


__all__ = ["TimingMetadata", "MetadataResolver", "resolve_metadata"]
