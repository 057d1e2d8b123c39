#!/usr/bin/env python3
"""Monitor layout discovery.

MonitorLocator answers one question for the region resolver: which bounds
should a selection be clamped to? It asks xrandr for the connected outputs
and picks the one owning the selection's center; when that fails it falls
back to the whole virtual screen.
"""

from __future__ import annotations

import re
import sys
from typing import List, Optional, Tuple

from mss import mss
from mss.exception import ScreenShotError

from regionrec.geometry import contains_center, parse_monitor_geometry
from regionrec.process import ProcessLauncher
from regionrec.types import Monitor, MonitorQueryError, Rect

_DIMENSIONS = re.compile(r"dimensions:\s+([0-9]+)x([0-9]+)")


def parse_xrandr_line(line: str) -> Optional[Monitor]:
    """Extract a Monitor from one line of ``xrandr --query`` output.

    Only lines for connected outputs are considered. The first token that
    looks like geometry (contains both ``x`` and ``+``) is parsed; lines for
    connected-but-disabled outputs have no such token and yield None.
    """
    if " connected" not in line:
        return None
    for token in line.split():
        if "x" in token and "+" in token:
            return parse_monitor_geometry(token)
    return None


def parse_xrandr_output(output: str) -> List[Monitor]:
    monitors: List[Monitor] = []
    for line in output.splitlines():
        monitor = parse_xrandr_line(line)
        if monitor is not None:
            monitors.append(monitor)
    return monitors


def parse_xdpyinfo_dimensions(output: str) -> Optional[Tuple[int, int]]:
    """Return ``(width, height)`` from the ``dimensions:`` line of xdpyinfo."""
    match = _DIMENSIONS.search(output)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


class MonitorLocator:
    """Finds the bounds a selected region should be confined to.

    Args:
        launcher: Process seam used to run xrandr and xdpyinfo.
        verbose: Whether to print discovery details to stderr.
    """

    def __init__(self, launcher: ProcessLauncher, verbose: bool = False) -> None:
        self.launcher = launcher
        self.verbose = verbose

    def list_monitors(self) -> List[Monitor]:
        """Return every connected monitor reported by xrandr.

        Raises:
            MonitorQueryError: If xrandr cannot run, fails, or reports no
                usable geometry.
        """
        try:
            result = self.launcher.run(["xrandr", "--query"])
        except OSError as e:
            raise MonitorQueryError(f"failed to run xrandr: {e}") from e
        if not result.ok:
            raise MonitorQueryError("xrandr failed")

        monitors = parse_xrandr_output(result.stdout)
        if not monitors:
            raise MonitorQueryError("no monitors found from xrandr")
        return monitors

    def full_virtual_bounds(self) -> Monitor:
        """Return the whole X screen as an origin-anchored Monitor.

        xdpyinfo is asked first; if it is missing or prints no dimensions the
        virtual screen size reported by mss is used instead.

        Raises:
            MonitorQueryError: If neither source reports a size.
        """
        size = self._xdpyinfo_size()
        if size is None:
            size = self._mss_size()
        if size is None:
            raise MonitorQueryError("could not read display dimensions")
        width, height = size
        return Monitor(x=0, y=0, w=width, h=height)

    def monitor_for(self, rect: Rect) -> Optional[Monitor]:
        """Return the first monitor owning ``rect``'s center, if any.

        Discovery failures are not fatal here; they simply mean no monitor
        matched.
        """
        try:
            monitors = self.list_monitors()
        except MonitorQueryError as e:
            if self.verbose:
                print(f"Monitor query failed: {e}", file=sys.stderr)
            return None

        for monitor in monitors:
            if contains_center(monitor, rect):
                return monitor
        return None

    def bounds_for(self, rect: Rect) -> Monitor:
        """Return the owning monitor, or the full virtual screen as fallback."""
        monitor = self.monitor_for(rect)
        if monitor is not None:
            if self.verbose:
                print(f"Selection is on monitor {monitor}", file=sys.stderr)
            return monitor

        bounds = self.full_virtual_bounds()
        if self.verbose:
            print(f"No monitor matched, using full screen {bounds}", file=sys.stderr)
        return bounds

    def _xdpyinfo_size(self) -> Optional[Tuple[int, int]]:
        try:
            result = self.launcher.run(["xdpyinfo"])
        except OSError as e:
            if self.verbose:
                print(f"Could not run xdpyinfo: {e}", file=sys.stderr)
            return None
        if not result.ok:
            return None
        return parse_xdpyinfo_dimensions(result.stdout)

    def _mss_size(self) -> Optional[Tuple[int, int]]:
        try:
            with mss() as sct:
                screen = sct.monitors[0]
        except ScreenShotError as e:
            if self.verbose:
                print(f"mss could not query the screen: {e}", file=sys.stderr)
            return None
        return int(screen["width"]), int(screen["height"])
