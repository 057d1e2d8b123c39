#!/usr/bin/env python3
"""Operating-system process primitives used by regionrec.

Every external program regionrec talks to (slop, xrandr, xdpyinfo, ffmpeg,
notify-send, xdg-open) goes through ProcessLauncher, so tests can swap in a
fake that returns scripted output without touching the real system.

Two modes are provided:
    run:   blocking call that waits for exit and captures stdout
    spawn: detached start that returns a handle with ``pid`` and ``poll()``

Liveness probing and interrupting of processes started by an earlier
invocation (known only by pid) live here as well.
"""

from __future__ import annotations

import os
import signal
import subprocess
from dataclasses import dataclass
from typing import IO, List, Optional


@dataclass
class CommandResult:
    """Outcome of a blocking command."""

    returncode: int
    stdout: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def pid_exists(pid: int) -> bool:
    """Return True if the OS still hosts a process with this pid.

    Signal 0 performs error checking only. A permission error means the
    process exists but belongs to someone else.
    """
    if pid <= 0:
        return False
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True


class ProcessLauncher:
    """Thin wrapper around subprocess and os.kill."""

    def run(self, cmd: List[str]) -> CommandResult:
        """Run a command to completion and capture its standard output.

        Bytes that are not valid UTF-8 are replaced rather than rejected.

        Raises:
            OSError: If the program cannot be executed (e.g. not installed).
        """
        result = subprocess.run(
            cmd,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            errors="replace",
            check=False,
        )
        return CommandResult(result.returncode, result.stdout)

    def spawn(
        self, cmd: List[str], output: Optional[IO[bytes]] = None
    ) -> "subprocess.Popen[bytes]":
        """Start a command in its own session without waiting for it.

        Standard input is closed. Standard output and error both go to
        ``output`` when given, otherwise they are discarded. The child gets a
        new session so it outlives this process and the hotkey daemon's
        process group.

        Raises:
            OSError: If the program cannot be executed.
        """
        sink = output if output is not None else subprocess.DEVNULL
        return subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=sink,
            stderr=subprocess.STDOUT if output is not None else subprocess.DEVNULL,
            start_new_session=True,
        )

    def is_alive(self, pid: int) -> bool:
        return pid_exists(pid)

    def interrupt(self, pid: int) -> bool:
        """Send SIGINT to ``pid``.

        Returns:
            True if the signal was delivered, False if the process was
            already gone.

        Raises:
            OSError: For failures other than a missing process.
        """
        try:
            os.kill(pid, signal.SIGINT)
        except ProcessLookupError:
            return False
        return True
