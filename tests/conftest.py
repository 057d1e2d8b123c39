"""Shared pytest fixtures for regionrec tests."""

import sys
from pathlib import Path
from typing import Dict, List, Optional, Set

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from regionrec.process import CommandResult
from regionrec.session import SessionStore


XRANDR_TWO_MONITORS = """\
Screen 0: minimum 8 x 8, current 3840 x 1080, maximum 32767 x 32767
eDP-1 connected primary 1920x1080+0+0 (normal left inverted right x axis y axis) 344mm x 194mm
   1920x1080     60.00*+  59.96    48.00
   1680x1050     59.95
HDMI-1 disconnected (normal left inverted right x axis y axis)
DP-1 connected 1920x1080+1920+0 (normal left inverted right x axis y axis) 527mm x 296mm
   1920x1080     60.00*+
DP-2 connected (normal left inverted right x axis y axis)
"""

XDPYINFO_OUTPUT = """\
name of display:    :0
version number:    11.0
screen #0:
  dimensions:    3840x1080 pixels (1016x286 millimeters)
  resolution:    96x96 dots per inch
"""


class FakeProcess:
    """Stand-in for a spawned Popen whose liveness the test controls."""

    def __init__(self, pid: int, launcher: "FakeLauncher") -> None:
        self.pid = pid
        self._launcher = launcher

    def poll(self) -> Optional[int]:
        return None if self.pid in self._launcher.alive else 1


class FakeLauncher:
    """Scripted replacement for ProcessLauncher.

    ``run`` answers from ``outputs`` keyed by program name, ``spawn`` hands
    out increasing pids, and liveness is tracked in ``alive``.
    """

    def __init__(self) -> None:
        self.outputs: Dict[str, CommandResult] = {}
        self.missing: Set[str] = set()
        self.calls: List[List[str]] = []
        self.spawned: List[List[str]] = []
        self.interrupted: List[int] = []
        self.alive: Set[int] = set()
        self.next_pid = 4242
        self.spawn_survives = True

    def script(self, program: str, stdout: str = "", returncode: int = 0) -> None:
        self.outputs[program] = CommandResult(returncode, stdout)

    def run(self, cmd: List[str]) -> CommandResult:
        self.calls.append(cmd)
        if cmd[0] in self.missing:
            raise FileNotFoundError(2, "No such file or directory", cmd[0])
        return self.outputs.get(cmd[0], CommandResult(0, ""))

    def spawn(self, cmd: List[str], output=None) -> FakeProcess:
        if cmd[0] in self.missing:
            raise FileNotFoundError(2, "No such file or directory", cmd[0])
        self.spawned.append(cmd)
        pid = self.next_pid
        self.next_pid += 1
        if self.spawn_survives:
            self.alive.add(pid)
        return FakeProcess(pid, self)

    def is_alive(self, pid: int) -> bool:
        return pid in self.alive

    def interrupt(self, pid: int) -> bool:
        self.interrupted.append(pid)
        if pid in self.alive:
            self.alive.discard(pid)
            return True
        return False

    def notifications(self) -> List[List[str]]:
        return [cmd for cmd in self.calls if cmd[0] == "notify-send"]


@pytest.fixture
def fake_launcher() -> FakeLauncher:
    """Launcher with two side-by-side 1920x1080 monitors."""
    launcher = FakeLauncher()
    launcher.script("xrandr", XRANDR_TWO_MONITORS)
    launcher.script("xdpyinfo", XDPYINFO_OUTPUT)
    return launcher


@pytest.fixture
def store(tmp_path: Path, fake_launcher: FakeLauncher) -> SessionStore:
    """Session store in a temp directory using the fake liveness probe."""
    return SessionStore(tmp_path / "record-region.pid", probe=fake_launcher.is_alive)
