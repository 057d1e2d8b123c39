#!/usr/bin/env python3
"""Package initialization and public API for regionrec.

regionrec toggles recording of a selected screen region: one invocation
starts ffmpeg on the region the user draws, the next one stops it. State
between invocations lives in a pid file.

Public API:
    # Geometry
    parse_geometry(raw) -> Rect
    resolve_region(selected, bounds, edge_snap_margin_px) -> Rect
    clamp_to_bounds(rect, bounds) -> Rect

    # Components
    MonitorLocator, SessionStore, CaptureLauncher, SessionController
    ProcessLauncher

    # Configuration
    CaptureConfig, load_config(path) -> CaptureConfig

Usage as CLI:
    ```bash
    regionrec            # toggle recording
    regionrec audio-settings
    python -m regionrec -v
    ```
"""

from __future__ import annotations

from regionrec.types import (
    __version__,
    LOGFILE,
    PIDFILE,
    SNAP_MARGIN_PX,
    Rect,
    Monitor,
    RegionRecError,
    GeometryParseError,
    MonitorQueryError,
    InvalidRegionError,
    LaunchError,
    EncoderExitedError,
    SessionIOError,
)

from regionrec.geometry import parse_geometry, contains_center
from regionrec.region import clamp_to_bounds, resolve_region
from regionrec.process import ProcessLauncher
from regionrec.monitors import MonitorLocator
from regionrec.session import SessionStore
from regionrec.config import CaptureConfig, load_config
from regionrec.launcher import CaptureLauncher, build_ffmpeg_args
from regionrec.controller import SessionController
from regionrec.cli import main

__all__ = [
    # Version and constants
    "__version__",
    "LOGFILE",
    "PIDFILE",
    "SNAP_MARGIN_PX",
    # Types and errors
    "Rect",
    "Monitor",
    "RegionRecError",
    "GeometryParseError",
    "MonitorQueryError",
    "InvalidRegionError",
    "LaunchError",
    "EncoderExitedError",
    "SessionIOError",
    # Geometry
    "parse_geometry",
    "contains_center",
    "clamp_to_bounds",
    "resolve_region",
    # Components
    "ProcessLauncher",
    "MonitorLocator",
    "SessionStore",
    "CaptureConfig",
    "load_config",
    "CaptureLauncher",
    "build_ffmpeg_args",
    "SessionController",
    # CLI
    "main",
]
