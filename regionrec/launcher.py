#!/usr/bin/env python3
"""Starting the ffmpeg capture process.

The ffmpeg command line is built deterministically from the resolved region
and the capture configuration (build_ffmpeg_args), so it can be checked
without spawning anything. CaptureLauncher then starts ffmpeg detached with
its output going to LOGFILE, waits a short grace window and confirms the
encoder is still running before handing its pid back to the caller.
"""

from __future__ import annotations

import os
import shlex
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from regionrec.config import CaptureConfig
from regionrec.process import ProcessLauncher
from regionrec.types import (
    AUDIO_BITRATE,
    AUDIO_CODEC,
    DEFAULT_DISPLAY,
    LOGFILE,
    OUTPUT_SUBDIR,
    PIXEL_FORMAT,
    START_GRACE_SECONDS,
    VIDEO_CODEC,
    EncoderExitedError,
    InvalidRegionError,
    LaunchError,
    Rect,
    SessionIOError,
)


def _pulse_input(device: str) -> List[str]:
    return ["-f", "pulse", "-i", device]


def build_ffmpeg_args(
    region: Rect,
    config: CaptureConfig,
    output_file: Path,
    display: Optional[str] = None,
) -> List[str]:
    """Build the ffmpeg argument list (without the program name).

    Audio inputs are chosen by membership in ``config.audio.inputs``:
    mic and system together are merged into one stream with ``amerge``;
    either alone becomes a single pulse input; with neither (or audio
    disabled) the output has no audio track. The system input records the
    monitor source of ``system_device``.

    Args:
        region: Positive, even capture rectangle.
        config: Capture configuration.
        output_file: Destination video file.
        display: X display to grab (defaults to $DISPLAY, then ``:0.0``).

    Returns:
        Argument list for ffmpeg.
    """
    display = display or os.environ.get("DISPLAY") or DEFAULT_DISPLAY
    audio = config.audio
    video = config.video

    args = [
        "-f", "x11grab",
        "-video_size", f"{region.w}x{region.h}",
        "-framerate", str(video.framerate),
        "-i", f"{display}+{region.x},{region.y}",
    ]

    mic = audio.mic_device
    system = f"{audio.system_device}.monitor"
    audio_codec = ["-c:a", AUDIO_CODEC, "-b:a", AUDIO_BITRATE]

    if audio.enabled and audio.has_mic and audio.has_system:
        args += _pulse_input(mic) + _pulse_input(system)
        args += [
            "-filter_complex", "[1:a][2:a]amerge=inputs=2[aout]",
            "-map", "0:v",
            "-map", "[aout]",
        ]
        args += audio_codec
    elif audio.enabled and audio.has_mic:
        args += _pulse_input(mic) + audio_codec
    elif audio.enabled and audio.has_system:
        args += _pulse_input(system) + audio_codec

    args += [
        "-c:v", VIDEO_CODEC,
        "-crf", str(video.crf),
        "-preset", video.preset,
        "-pix_fmt", PIXEL_FORMAT,
        str(output_file),
    ]
    return args


def output_file_path(
    video_format: str, home: Optional[Path] = None, now: Optional[datetime] = None
) -> Path:
    """Return ``~/Videos/recording-<timestamp>.<format>``, creating the directory.

    Raises:
        SessionIOError: If the home directory is unknown or the output
            directory cannot be created.
    """
    try:
        base = home if home is not None else Path.home()
    except RuntimeError as e:
        raise SessionIOError(f"cannot determine home directory: {e}") from e

    videos = base / OUTPUT_SUBDIR
    try:
        videos.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SessionIOError(f"failed to create output directory {videos}: {e}") from e

    stamp = (now or datetime.now()).strftime("%Y-%m-%d_%H-%M-%S")
    return videos / f"recording-{stamp}.{video_format}"


class CaptureLauncher:
    """Spawns ffmpeg for a resolved region and verifies it started.

    Args:
        launcher: Process seam used to spawn ffmpeg.
        log_path: File receiving ffmpeg's stdout and stderr (truncated).
        home: Home directory override for the output path.
        verbose: Whether to print the command line to stderr.
    """

    def __init__(
        self,
        launcher: ProcessLauncher,
        log_path: Path = LOGFILE,
        home: Optional[Path] = None,
        verbose: bool = False,
    ) -> None:
        self.launcher = launcher
        self.log_path = Path(log_path)
        self.home = home
        self.verbose = verbose

    def start(self, region: Rect, config: CaptureConfig) -> int:
        """Start capturing ``region`` and return the encoder's pid.

        The caller persists the pid; nothing is written here if ffmpeg dies
        within START_GRACE_SECONDS.

        Raises:
            InvalidRegionError: If ``region`` is not positive and even.
            LaunchError: If ffmpeg cannot be started.
            EncoderExitedError: If ffmpeg exits within the grace window.
            SessionIOError: If the log file or output directory fails.
        """
        if region.w <= 0 or region.h <= 0 or region.w % 2 or region.h % 2:
            raise InvalidRegionError(region.w, region.h)

        output_file = output_file_path(config.video.format, self.home)
        cmd = ["ffmpeg"] + build_ffmpeg_args(region, config, output_file)

        if self.verbose:
            print(f"Starting: {shlex.join(cmd)}", file=sys.stderr)

        try:
            log = open(self.log_path, "wb")
        except OSError as e:
            raise SessionIOError(
                f"failed to create recording log file {self.log_path}: {e}"
            ) from e

        with log:
            try:
                proc = self.launcher.spawn(cmd, output=log)
            except OSError as e:
                raise LaunchError(f"failed to start ffmpeg: {e}") from e

        time.sleep(START_GRACE_SECONDS)
        if proc.poll() is not None:
            raise EncoderExitedError(f"ffmpeg exited immediately (see {self.log_path})")

        if self.verbose:
            print(f"Recording {region} to {output_file} (pid {proc.pid})", file=sys.stderr)
        return proc.pid
