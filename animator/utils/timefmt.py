"""Time and frame label formatting for playback displays.

``format_time`` gives mm:ss.mmm for precise readouts, ``format_clock`` the
coarse mm:ss used by elapsed/total labels, and ``format_frame_counter`` the
"frame / total" counter text.
"""

from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP

__all__ = ["format_time", "format_clock", "format_frame_counter"]


def _displayable(seconds: float) -> float:
    if math.isnan(seconds) or math.isinf(seconds) or seconds < 0:
        return 0.0
    return seconds


def format_time(seconds: float) -> str:
    """Return mm:ss.mmm, rounding milliseconds half-up (1.2345 -> 00:01.235)."""
    seconds = _displayable(seconds)
    ms_total = int(
        (Decimal(str(seconds)) * Decimal(1000)).to_integral_value(
            rounding=ROUND_HALF_UP
        )
    )
    m, rem = divmod(ms_total, 60000)
    s, ms = divmod(rem, 1000)
    return f"{m:02d}:{s:02d}.{ms:03d}"


def format_clock(seconds: float) -> str:
    """Return mm:ss with whole seconds truncated; NaN, inf and negatives read 00:00."""
    whole = int(_displayable(seconds))
    m, s = divmod(whole, 60)
    return f"{m:02d}:{s:02d}"


def format_frame_counter(frame: int, total_frames: int) -> str:
    """Return a one-based "frame / total" counter for a zero-based frame index."""
    if total_frames <= 0:
        return "0 / 0"
    return f"{frame + 1} / {total_frames}"
