#!/usr/bin/env python3
"""Persisted marker for the one capture session that may be running.

Invocations of regionrec are short-lived and share no memory, so "a
recording is in progress" is represented on disk: a file holding the pid of
the running encoder. The marker only counts while that pid is alive; a
marker pointing at a dead process is stale and is discarded.

The marker is replaced atomically (write to a sibling file, then rename)
and is the only mutual exclusion between invocations.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, Optional

from regionrec.process import pid_exists
from regionrec.types import PIDFILE, SessionIOError


class SessionStore:
    """Reads, writes and clears the session marker file.

    Args:
        path: Marker location (defaults to PIDFILE).
        probe: Liveness check for a pid (defaults to a signal-0 probe).
        verbose: Whether to report stale marker cleanup on stderr.
    """

    def __init__(
        self,
        path: Path = PIDFILE,
        probe: Callable[[int], bool] = pid_exists,
        verbose: bool = False,
    ) -> None:
        self.path = Path(path)
        self.probe = probe
        self.verbose = verbose

    def read(self) -> Optional[int]:
        """Return the recorded pid, or None if absent or unparsable."""
        try:
            content = self.path.read_text()
        except (OSError, UnicodeDecodeError):
            return None

        content = content.strip()
        if not (content.isascii() and content.isdigit()):
            return None
        pid = int(content)
        return pid if pid > 0 else None

    def write(self, pid: int) -> None:
        """Record ``pid`` as the running session, replacing any marker.

        Raises:
            SessionIOError: If the marker cannot be written.
        """
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp.write_text(f"{pid}\n")
            os.replace(tmp, self.path)
        except OSError as e:
            raise SessionIOError(f"failed to write pid file {self.path}: {e}") from e

    def clear(self) -> None:
        """Remove the marker. A missing marker is not an error.

        Raises:
            SessionIOError: If an existing marker cannot be removed.
        """
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise SessionIOError(f"failed to remove pid file {self.path}: {e}") from e

    def is_alive(self, pid: int) -> bool:
        return self.probe(pid)

    def active(self) -> Optional[int]:
        """Return the pid of a live session, discarding a stale marker."""
        pid = self.read()
        if pid is None:
            return None
        if self.is_alive(pid):
            return pid

        if self.verbose:
            print(f"Removing stale pid file (process {pid} is gone)", file=sys.stderr)
        self.clear()
        return None
