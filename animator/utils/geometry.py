"""Destination rectangle helpers for drawing an animation onto a surface."""

from __future__ import annotations

from PySide6.QtCore import QRectF

__all__ = ["fit_rect"]


def fit_rect(
    surface_width: float, surface_height: float, source_width: float, source_height: float
) -> QRectF:
    """Return the largest centred rect with the source aspect inside the surface.

    Degenerate sizes (zero or negative on either side) give an empty rect.
    """
    if min(surface_width, surface_height, source_width, source_height) <= 0:
        return QRectF()
    scale = min(surface_width / source_width, surface_height / source_height)
    w = source_width * scale
    h = source_height * scale
    left = (surface_width - w) / 2.0
    top = (surface_height - h) / 2.0
    return QRectF(left, top, w, h)
