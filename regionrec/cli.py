#!/usr/bin/env python3
"""Command-line interface for regionrec.

One invocation toggles region recording: the first press asks for a region
and starts ffmpeg, the next press stops it. Bind ``regionrec`` to a hotkey.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from regionrec.config import load_config
from regionrec.controller import CANCELLED, STARTED, SessionController
from regionrec.launcher import CaptureLauncher
from regionrec.monitors import MonitorLocator
from regionrec.notify import Notifier, open_settings
from regionrec.process import ProcessLauncher
from regionrec.session import SessionStore
from regionrec.types import LOGFILE, PIDFILE, RegionRecError, __version__

ACTIONS = ("record", "audio-settings")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="regionrec",
        description="Toggle screen-region recording with ffmpeg",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Actions:
  record           Start recording a selected region, or stop the running
                   recording (default)
  audio-settings   Open the audio/video settings page

Files:
  {PIDFILE}    pid of the running recording
  {LOGFILE}    ffmpeg output of the last recording

Examples:
  # Bind this to a hotkey: first press selects and records, second stops
  regionrec

  # Show what is happening
  regionrec record -v
""",
    )
    parser.add_argument("action", nargs="?", default="record",
                        help="record (default) or audio-settings")
    parser.add_argument("--config", type=Path, metavar="PATH",
                        help="Configuration file (default: config.json beside the program)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show progress")
    parser.add_argument("-V", "--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def build_controller(
    launcher: ProcessLauncher, config_path: Optional[Path], verbose: bool
) -> SessionController:
    return SessionController(
        launcher=launcher,
        store=SessionStore(PIDFILE, probe=launcher.is_alive, verbose=verbose),
        locator=MonitorLocator(launcher, verbose=verbose),
        capture=CaptureLauncher(launcher, LOGFILE, verbose=verbose),
        notifier=Notifier(launcher, verbose=verbose),
        load_config=lambda: load_config(config_path, verbose=verbose),
        verbose=verbose,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.action not in ACTIONS:
        print(f"Error: Unknown action: {args.action}", file=sys.stderr)
        return 1

    launcher = ProcessLauncher()

    try:
        if args.action == "audio-settings":
            open_settings(launcher)
            return 0

        outcome = build_controller(launcher, args.config, args.verbose).toggle()
    except RegionRecError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        if outcome == STARTED:
            print("Recording started", file=sys.stderr)
        elif outcome == CANCELLED:
            print("Nothing to do", file=sys.stderr)
        else:
            print("Recording stopped", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
