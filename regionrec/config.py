#!/usr/bin/env python3
"""Capture configuration loading.

The settings page writes a small JSON file next to the installed program.
Any subset of fields may be present; each missing field takes its default
independently. A file that is missing, unreadable, not valid JSON, not an
object, or holds a value of the wrong type yields the all-defaults config
rather than an error.

Expected JSON structure::

    {
      "audio": {
        "enabled": true,
        "inputs": ["mic", "system"],
        "mic_device": "default",
        "system_device": "default"
      },
      "video": {"crf": 18, "preset": "veryfast", "framerate": 60, "format": "mkv"}
    }

Device keys are also accepted in camelCase (``micDevice``/``systemDevice``).
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from regionrec.types import CONFIG_FILENAME

def _default_inputs() -> List[str]:
    return ["mic"]


@dataclass(frozen=True)
class AudioConfig:
    enabled: bool = True
    inputs: List[str] = field(default_factory=_default_inputs)
    mic_device: str = "default"
    system_device: str = "default"

    @property
    def has_mic(self) -> bool:
        return "mic" in self.inputs

    @property
    def has_system(self) -> bool:
        return "system" in self.inputs


@dataclass(frozen=True)
class VideoConfig:
    crf: int = 18
    preset: str = "veryfast"
    framerate: int = 60
    format: str = "mkv"


@dataclass(frozen=True)
class CaptureConfig:
    """Audio and video settings for one capture session."""

    audio: AudioConfig = field(default_factory=AudioConfig)
    video: VideoConfig = field(default_factory=VideoConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CaptureConfig":
        """Build a config by merging ``data`` over the defaults.

        Raises:
            ValueError: If ``data`` or one of its fields has the wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError("configuration must be a JSON object")
        audio = _section(data, "audio")
        video = _section(data, "video")

        audio_defaults = AudioConfig()
        video_defaults = VideoConfig()

        inputs = audio.get("inputs", audio_defaults.inputs)
        if not isinstance(inputs, list) or not all(isinstance(i, str) for i in inputs):
            raise ValueError("audio.inputs must be a list of strings")

        crf = _typed(video, ("crf",), int, video_defaults.crf)
        framerate = _typed(video, ("framerate",), int, video_defaults.framerate)
        if crf < 0:
            raise ValueError("crf must not be negative")
        if framerate <= 0:
            raise ValueError("framerate must be positive")

        return cls(
            audio=AudioConfig(
                enabled=_typed(audio, ("enabled",), bool, audio_defaults.enabled),
                inputs=list(inputs),
                mic_device=_typed(
                    audio, ("mic_device", "micDevice"), str, audio_defaults.mic_device
                ),
                system_device=_typed(
                    audio,
                    ("system_device", "systemDevice"),
                    str,
                    audio_defaults.system_device,
                ),
            ),
            video=VideoConfig(
                crf=crf,
                preset=_typed(video, ("preset",), str, video_defaults.preset),
                framerate=framerate,
                format=_typed(video, ("format",), str, video_defaults.format),
            ),
        )


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ValueError(f"{name} must be a JSON object")
    return section


def _typed(section: Dict[str, Any], keys: tuple, kind: type, default: Any) -> Any:
    for key in keys:
        if key in section:
            value = section[key]
            # bool is a subclass of int; {"crf": true} is not a number.
            if not isinstance(value, kind) or (isinstance(value, bool) and kind is not bool):
                raise ValueError(f"{key} must be {kind.__name__}")
            return value
    return default


def default_config_path() -> Path:
    """Return ``config.json`` beside the installed program."""
    program = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
    base = program.resolve().parent if program is not None else Path.cwd()
    return base / CONFIG_FILENAME


def load_config(path: Optional[Path] = None, verbose: bool = False) -> CaptureConfig:
    """Load the capture configuration, falling back to defaults on any problem."""
    path = path if path is not None else default_config_path()
    try:
        content = Path(path).read_text()
    except (OSError, UnicodeDecodeError):
        if verbose:
            print(f"No readable config at {path}, using defaults", file=sys.stderr)
        return CaptureConfig()

    try:
        return CaptureConfig.from_dict(json.loads(content))
    except ValueError as e:
        # json.JSONDecodeError is a ValueError too.
        if verbose:
            print(f"Ignoring invalid config {path}: {e}", file=sys.stderr)
        return CaptureConfig()
