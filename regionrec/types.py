#!/usr/bin/env python3
"""Shared types, constants, and errors for the regionrec package.

This module contains the geometry types, fixed paths and timing constants,
and the exception hierarchy used throughout regionrec. Centralizing these
keeps every component agreeing on the same marker/log locations and the
same error taxonomy.

Types:
    Rect: Integer pixel rectangle in global display coordinates
    Monitor: Bounds of one display output

Constants:
    __version__: Package version string
    PIDFILE: Session marker path
    LOGFILE: Encoder log path
    SNAP_MARGIN_PX: Bottom-edge snap margin
    START_GRACE_SECONDS / STOP_GRACE_SECONDS: Grace windows
    SETTINGS_URL: Audio settings page opened by the ``audio-settings`` action

Errors:
    RegionRecError and its subclasses (see section below)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

# ============================================================================
# VERSION AND METADATA
# ============================================================================

__version__ = "1.0.0"

# ============================================================================
# FIXED LOCATIONS
# ============================================================================

PIDFILE: Path = Path("/tmp/record-region.pid")
LOGFILE: Path = Path("/tmp/record-region.log")
CONFIG_FILENAME: str = "config.json"
OUTPUT_SUBDIR: str = "Videos"

SETTINGS_URL: str = "http://127.0.0.1:42700/plugins/plugin-screen-recorder/"

# ============================================================================
# REGION AND TIMING
# ============================================================================

SNAP_MARGIN_PX: int = 50  # Close gaps to the bottom edge up to this size

START_GRACE_SECONDS: float = 0.5  # Encoder must survive this long after spawn
STOP_GRACE_SECONDS: float = 0.25  # Time given to ffmpeg to finalize after SIGINT

# ============================================================================
# ENCODER POLICY
# ============================================================================

VIDEO_CODEC: str = "libx264"
PIXEL_FORMAT: str = "yuv420p"
AUDIO_CODEC: str = "aac"
AUDIO_BITRATE: str = "192k"
DEFAULT_DISPLAY: str = ":0.0"

# ============================================================================
# GEOMETRY TYPES
# ============================================================================


@dataclass(frozen=True)
class Rect:
    """Pixel rectangle in global display coordinates.

    ``w`` and ``h`` may be zero or negative while a selection is being
    clamped; a rectangle handed to the encoder is always positive and even.
    """

    x: int
    y: int
    w: int
    h: int

    @property
    def center(self) -> Tuple[int, int]:
        return (self.x + self.w // 2, self.y + self.h // 2)

    def __str__(self) -> str:
        return f"{self.w}x{self.h}{self.x:+d}{self.y:+d}"


@dataclass(frozen=True)
class Monitor:
    """Bounds of one display output (or the whole virtual screen)."""

    x: int
    y: int
    w: int
    h: int

    @property
    def bottom(self) -> int:
        return self.y + self.h

    @property
    def right(self) -> int:
        return self.x + self.w

    def __str__(self) -> str:
        return f"{self.w}x{self.h}{self.x:+d}{self.y:+d}"


# ============================================================================
# ERRORS
# ============================================================================


class RegionRecError(Exception):
    """Base class for every handled regionrec failure."""


class GeometryParseError(RegionRecError, ValueError):
    """Selection output was not four comma-separated integers."""


class MonitorQueryError(RegionRecError):
    """Monitor layout or display dimensions could not be determined."""


class InvalidRegionError(RegionRecError):
    """Resolved region has a non-positive (or odd) dimension."""

    def __init__(self, width: int, height: int) -> None:
        super().__init__(f"invalid recording area {width}x{height}")
        self.width = width
        self.height = height


class LaunchError(RegionRecError):
    """An external program could not be started or died immediately."""


class EncoderExitedError(LaunchError):
    """ffmpeg started but exited within the startup grace window."""


class SessionIOError(RegionRecError):
    """Marker, log file, or output directory operation failed."""
