#!/usr/bin/env python3
"""Geometry text parsing and containment helpers.

Functions:
    parse_geometry: Parse "x,y,w,h" selection output into a Rect
    parse_monitor_geometry: Parse an xrandr "WxH+X+Y" token into a Monitor
    contains_center: Half-open test of a rectangle's center against a monitor
"""

from __future__ import annotations

import re
from typing import List, Optional

from regionrec.types import GeometryParseError, Monitor, Rect

# Width and height are unsigned; both offsets carry their own sign. The
# second offset's sign can only follow at least one digit of the first.
_MONITOR_TOKEN = re.compile(r"([0-9]+)x([0-9]+)([+-][0-9]+)([+-][0-9]+)")
_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_geometry(raw: str) -> Rect:
    """Parse selection output of the form ``"x,y,w,h"`` into a Rect.

    Each comma-separated field is stripped and parsed as a signed integer.
    Exactly four fields are required.

    Args:
        raw: Text printed by the selection tool.

    Returns:
        Rect with the four values mapped positionally to x, y, w, h.

    Raises:
        GeometryParseError: If a field is not an integer or the field count
            is not four.

    Examples:
        >>> parse_geometry("10,20,300,400")
        Rect(x=10, y=20, w=300, h=400)
        >>> parse_geometry(" -5 , 0, 64, 48 ")
        Rect(x=-5, y=0, w=64, h=48)
    """
    values: List[int] = []
    for part in raw.split(","):
        field = part.strip()
        if not _INTEGER.fullmatch(field):
            raise GeometryParseError(f"invalid selection geometry: {raw!r}")
        values.append(int(field))

    if len(values) != 4:
        raise GeometryParseError(
            f"expected 4 values in geometry, got {len(values)}"
        )

    return Rect(x=values[0], y=values[1], w=values[2], h=values[3])


def parse_monitor_geometry(token: str) -> Optional[Monitor]:
    """Parse an xrandr geometry token such as ``1920x1080+0+0``.

    Returns None when the token is not a complete ``WxH+X+Y`` value.

    >>> parse_monitor_geometry("2560x1440-1280+360")
    Monitor(x=-1280, y=360, w=2560, h=1440)
    """
    match = _MONITOR_TOKEN.fullmatch(token)
    if not match:
        return None
    width, height, x, y = (int(group) for group in match.groups())
    return Monitor(x=x, y=y, w=width, h=height)


def contains_center(monitor: Monitor, rect: Rect) -> bool:
    """Return True if ``rect``'s center lies inside ``monitor``.

    Left and top edges are inclusive, right and bottom edges exclusive, so
    monitors that share an edge never both own the same point.
    """
    cx, cy = rect.center
    return (
        monitor.x <= cx < monitor.right
        and monitor.y <= cy < monitor.bottom
    )
