#!/usr/bin/env python3
"""Start/stop toggle for the single capture session.

Each invocation derives its state from the session marker alone:

    Idle       no marker, or a marker whose process is gone (discarded)
    Recording  marker pointing at a live process

Invoking while Recording interrupts the encoder and clears the marker.
Invoking while Idle asks the user for a region, resolves it against the
owning monitor and starts a new capture; the marker is written only once
the encoder has survived its startup grace window.
"""

from __future__ import annotations

import sys
import time
from typing import Callable

from regionrec.config import CaptureConfig
from regionrec.launcher import CaptureLauncher
from regionrec.monitors import MonitorLocator
from regionrec.notify import Notifier
from regionrec.process import ProcessLauncher
from regionrec.region import resolve_region
from regionrec.selection import select_region
from regionrec.session import SessionStore
from regionrec.types import (
    SNAP_MARGIN_PX,
    STOP_GRACE_SECONDS,
    EncoderExitedError,
    InvalidRegionError,
    RegionRecError,
    SessionIOError,
)

STARTED = "started"
STOPPED = "stopped"
CANCELLED = "cancelled"


class SessionController:
    """Orchestrates one invocation of the recording toggle.

    Args:
        launcher: Process seam shared by all collaborators.
        store: Session marker accessor.
        locator: Monitor discovery.
        capture: ffmpeg launcher.
        notifier: Desktop notification sender.
        load_config: Callable returning the capture configuration.
        verbose: Whether to print progress to stderr.
    """

    def __init__(
        self,
        launcher: ProcessLauncher,
        store: SessionStore,
        locator: MonitorLocator,
        capture: CaptureLauncher,
        notifier: Notifier,
        load_config: Callable[[], CaptureConfig] = CaptureConfig,
        verbose: bool = False,
    ) -> None:
        self.launcher = launcher
        self.store = store
        self.locator = locator
        self.capture = capture
        self.notifier = notifier
        self.load_config = load_config
        self.verbose = verbose

    def toggle(self) -> str:
        """Stop the running session, or start a new one.

        Returns:
            STOPPED, STARTED, or CANCELLED (user dismissed the selection).

        Raises:
            RegionRecError: On any fatal failure; the user has already been
                notified.
        """
        try:
            pid = self.store.active()
            if pid is not None:
                self.stop(pid)
                return STOPPED
            return self.start()
        except InvalidRegionError as e:
            self.notifier.show("Recording failed", f"Invalid area: {e.width}x{e.height}", 1200)
            raise
        except EncoderExitedError:
            self.notifier.show("Recording failed", f"Check {self.capture.log_path}", 1600)
            raise
        except RegionRecError as e:
            self.notifier.show("Recording failed", str(e), 1600)
            raise

    def stop(self, pid: int) -> None:
        """Interrupt the encoder, give it time to finalize, clear the marker."""
        try:
            delivered = self.launcher.interrupt(pid)
        except OSError as e:
            raise SessionIOError(f"failed to send SIGINT to ffmpeg ({pid}): {e}") from e

        if self.verbose:
            state = "interrupted" if delivered else "already gone"
            print(f"Stopping recording (pid {pid} {state})", file=sys.stderr)

        time.sleep(STOP_GRACE_SECONDS)
        self.store.clear()
        self.notifier.show("Recording stopped", "Saved to ~/Videos", 2000)

    def start(self) -> str:
        config = self.load_config()
        selected = select_region(self.launcher, self.verbose)
        if selected is None:
            return CANCELLED

        bounds = self.locator.bounds_for(selected)
        region = resolve_region(selected, bounds, SNAP_MARGIN_PX)
        if self.verbose:
            print(f"Resolved region {selected} -> {region}", file=sys.stderr)

        pid = self.capture.start(region, config)
        self._persist(pid)

        self.notifier.show("Recording started", "Press your hotkey to stop", 1200)
        return STARTED

    def _persist(self, pid: int) -> None:
        """Write the marker; stop the new encoder if that fails."""
        try:
            self.store.write(pid)
        except SessionIOError:
            try:
                self.launcher.interrupt(pid)
            except OSError as e:
                print(f"Warning: could not stop untracked ffmpeg {pid}: {e}", file=sys.stderr)
            raise
