#!/usr/bin/env python3
"""Interactive region selection with slop."""

from __future__ import annotations

import sys
from typing import Optional

from regionrec.geometry import parse_geometry
from regionrec.process import ProcessLauncher
from regionrec.types import LaunchError, Rect

SLOP_COMMAND = [
    "slop",
    "--highlight",
    "--color=1,0,0,0.65",
    "-b", "0",
    "-f", "%x,%y,%w,%h",
]


def select_region(launcher: ProcessLauncher, verbose: bool = False) -> Optional[Rect]:
    """Let the user draw a rectangle and return it.

    Returns:
        The selected Rect, or None if the user cancelled (slop exited
        non-zero or printed nothing).

    Raises:
        LaunchError: If slop is not installed.
        GeometryParseError: If slop printed something other than x,y,w,h.
    """
    if verbose:
        print("Click and drag to select recording region...", file=sys.stderr)

    try:
        result = launcher.run(SLOP_COMMAND)
    except OSError as e:
        raise LaunchError(f"failed to run slop: {e}") from e

    raw = result.stdout.strip()
    if not result.ok or not raw:
        if verbose:
            print("Selection cancelled", file=sys.stderr)
        return None

    rect = parse_geometry(raw)
    if verbose:
        print(f"Selected {rect}", file=sys.stderr)
    return rect
