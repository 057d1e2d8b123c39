#!/usr/bin/env python3
"""Turn a raw selection into a rectangle the encoder will accept.

Resolution runs four steps in a fixed order:

1. clamp_to_bounds - confine the selection to the owning monitor
2. snap_to_bottom  - close a small gap left above the monitor's bottom edge
3. enforce_even    - drop a pixel from odd dimensions (yuv420p needs even sizes)
4. validate        - reject anything with a non-positive dimension

Interactive selection near a screen edge is imprecise, so a gap of up to
SNAP_MARGIN_PX pixels under the selection is treated as unintended.
"""

from __future__ import annotations

from dataclasses import replace

from regionrec.types import SNAP_MARGIN_PX, InvalidRegionError, Monitor, Rect


def clamp_to_bounds(rect: Rect, bounds: Monitor) -> Rect:
    """Shrink or move ``rect`` inward so it lies within ``bounds``.

    Overflow on the left or top shrinks the rectangle from that side and
    moves its origin to the bound's edge. Overflow on the right or bottom
    shrinks the dimension. A rectangle is never enlarged.

    Examples:
        >>> clamp_to_bounds(Rect(-10, -10, 100, 100), Monitor(0, 0, 200, 200))
        Rect(x=0, y=0, w=90, h=90)
    """
    x, y, w, h = rect.x, rect.y, rect.w, rect.h

    if x < bounds.x:
        w -= bounds.x - x
        x = bounds.x
    if y < bounds.y:
        h -= bounds.y - y
        y = bounds.y
    if x + w > bounds.right:
        w = bounds.right - x
    if y + h > bounds.bottom:
        h = bounds.bottom - y

    return Rect(x=x, y=y, w=w, h=h)


def snap_to_bottom(rect: Rect, bounds: Monitor, margin_px: int = SNAP_MARGIN_PX) -> Rect:
    """Extend ``rect`` down to the bottom edge when the gap is within margin."""
    gap = bounds.bottom - (rect.y + rect.h)
    if 0 < gap <= margin_px:
        return replace(rect, h=bounds.bottom - rect.y)
    return rect


def enforce_even(rect: Rect) -> Rect:
    """Round odd width/height down to the next even number."""
    return replace(rect, w=rect.w - (rect.w % 2), h=rect.h - (rect.h % 2))


def resolve_region(
    selected: Rect, bounds: Monitor, edge_snap_margin_px: int = SNAP_MARGIN_PX
) -> Rect:
    """Resolve a raw selection into a positive, even capture rectangle.

    Args:
        selected: Rectangle as reported by the selection tool.
        bounds: Monitor (or full virtual screen) owning the selection.
        edge_snap_margin_px: Largest bottom gap that is closed automatically.

    Returns:
        Rect with ``w > 0``, ``h > 0`` and both dimensions even.

    Raises:
        InvalidRegionError: If the resolved rectangle has no area.
    """
    rect = clamp_to_bounds(selected, bounds)
    rect = snap_to_bottom(rect, bounds, edge_snap_margin_px)
    rect = enforce_even(rect)
    if rect.w <= 0 or rect.h <= 0:
        raise InvalidRegionError(rect.w, rect.h)
    return rect
