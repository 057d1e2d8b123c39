#!/usr/bin/env python3
"""Desktop notifications and the settings page opener."""

from __future__ import annotations

import sys

from regionrec.process import ProcessLauncher
from regionrec.types import SETTINGS_URL, LaunchError


class Notifier:
    """Sends desktop notifications through notify-send.

    Notifications are best effort: a missing notify-send is reported in
    verbose mode and otherwise ignored.
    """

    def __init__(self, launcher: ProcessLauncher, verbose: bool = False) -> None:
        self.launcher = launcher
        self.verbose = verbose

    def show(self, title: str, message: str, timeout_ms: int) -> None:
        cmd = ["notify-send", "-u", "normal", "-t", str(timeout_ms), title, message]
        try:
            self.launcher.run(cmd)
        except OSError as e:
            if self.verbose:
                print(f"Warning: could not send notification: {e}", file=sys.stderr)


def open_settings(launcher: ProcessLauncher, url: str = SETTINGS_URL) -> None:
    """Open the audio settings page with the default URL handler.

    Raises:
        LaunchError: If xdg-open cannot be started.
    """
    try:
        launcher.spawn(["xdg-open", url])
    except OSError as e:
        raise LaunchError(f"failed to open settings URL: {e}") from e
