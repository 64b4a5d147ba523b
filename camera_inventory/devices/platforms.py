"""
Per-platform ffmpeg diagnostic grammars.

Each supported ffmpeg input format gets a Platform that knows how to
recognise its device list, how to provoke a capability listing for one of its
devices, and how to read that listing back. Adding an input format means
adding a Platform and registering it in ``default_platforms``.
"""

import logging
import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .models import (
    Device,
    DiscreteFrameRates,
    FrameRateRange,
    ModeObservation,
    PlatformFormat,
)
from .parsing import split_diagnostic_line

logger = logging.getLogger(__name__)

DEFAULT_PROBE_FRAME_RATE = 713


class ParserState(Enum):
    SEEKING_HEADER = "seeking_header"
    COLLECTING = "collecting"
    DONE = "done"


@dataclass
class ProbeRequest:
    """Arguments for one ffmpeg invocation."""
    target: str
    options: Dict[str, str] = field(default_factory=dict)


class Platform(ABC):
    """Diagnostic grammar and probing strategy for one ffmpeg input format."""

    format: PlatformFormat
    listing_target: str = ""

    def listing_request(self) -> ProbeRequest:
        """Request that makes ffmpeg print the video device list."""
        return ProbeRequest(target=self.listing_target, options={"list_devices": "true"})

    @abstractmethod
    def parse_device_list(self, lines: Iterable[str]) -> List[Tuple[int, str]]:
        """Return (device id, device name) pairs in the order they were listed."""

    @abstractmethod
    def probe_request(self, device: Device) -> ProbeRequest:
        """Request that makes ffmpeg print the modes of ``device``."""

    @abstractmethod
    def parse_capabilities(self, lines: Iterable[str]) -> Iterator[ModeObservation]:
        """Yield one observation per mode line of a probe's output."""


class AVFoundationPlatform(Platform):
    """
    macOS AVFoundation.

    Device list::

        [AVFoundation indev @ 0x7f8b1c004c00] AVFoundation video devices:
        [AVFoundation indev @ 0x7f8b1c004c00] [0] FaceTime HD Camera
        [AVFoundation indev @ 0x7f8b1c004c00] [1] Capture screen 0
        [AVFoundation indev @ 0x7f8b1c004c00] AVFoundation audio devices:

    avfoundation has no option to list modes, but opening a device at a frame
    rate it does not support makes it print the ones it does::

        [avfoundation @ 0x7f8b1c004c00] Selected framerate (713.000000) is not supported by the device.
        [avfoundation @ 0x7f8b1c004c00] Supported modes:
        [avfoundation @ 0x7f8b1c004c00]   1280x720@[1.000000 30.000000]fps
        [avfoundation @ 0x7f8b1c004c00]   640x480@[1.000000 30.000000]fps
        [avfoundation @ 0x7f8b1c004c00] Input/output error
    """

    format = PlatformFormat.AVFOUNDATION
    listing_target = ""

    VIDEO_HEADER = "AVFoundation"
    SCREEN_CAPTURE_PREFIX = "Capture screen"
    MODES_HEADER = "Supported"
    FPS_SUFFIX = "fps"
    MODE_PATTERN = re.compile(
        r"(?P<width>\d+)\s*x\s*(?P<height>\d+)\s*@\s*\[?\s*(?P<fps>\d+(?:\.\d*)?)",
        re.IGNORECASE,
    )

    def __init__(self, probe_frame_rate: int = DEFAULT_PROBE_FRAME_RATE):
        self.probe_frame_rate = probe_frame_rate

    def parse_device_list(self, lines: Iterable[str]) -> List[Tuple[int, str]]:
        devices = []
        state = ParserState.SEEKING_HEADER

        for line in lines:
            parsed = split_diagnostic_line(line)
            if parsed is None:
                continue

            if state is ParserState.SEEKING_HEADER:
                if parsed.leading == self.VIDEO_HEADER:
                    state = ParserState.COLLECTING
                continue

            # The first unbracketed line starts the audio section
            if not (parsed.leading.startswith("[") and parsed.leading.endswith("]")):
                state = ParserState.DONE
                break

            if parsed.trailing.startswith(self.SCREEN_CAPTURE_PREFIX):
                logger.debug("Skipping screen capture device %s", parsed.trailing)
                continue

            try:
                device_id = int(parsed.leading[1:-1])
            except ValueError:
                continue
            devices.append((device_id, parsed.trailing.strip()))

        return devices

    def probe_request(self, device: Device) -> ProbeRequest:
        return ProbeRequest(
            target=str(device.id),
            options={"framerate": str(self.probe_frame_rate)},
        )

    def parse_capabilities(self, lines: Iterable[str]) -> Iterator[ModeObservation]:
        state = ParserState.SEEKING_HEADER

        for line in lines:
            parsed = split_diagnostic_line(line)
            if parsed is None:
                continue

            if state is ParserState.SEEKING_HEADER:
                if parsed.leading == self.MODES_HEADER:
                    state = ParserState.COLLECTING
                continue

            mode = parsed.remainder.strip()
            if not mode.lower().endswith(self.FPS_SUFFIX):
                state = ParserState.DONE
                break

            observation = self._parse_mode(mode)
            if observation is not None:
                yield observation

    def _parse_mode(self, mode: str) -> Optional[ModeObservation]:
        match = self.MODE_PATTERN.match(mode)
        if match is None:
            return None
        try:
            width = int(match.group("width"))
            height = int(match.group("height"))
            fps = float(match.group("fps"))
        except ValueError:
            return None
        if width <= 0 or height <= 0:
            return None
        return ModeObservation(width, height, DiscreteFrameRates([fps]))


class DShowPlatform(Platform):
    """
    Windows DirectShow.

    Device list, the header is printed again for the audio section::

        [dshow @ 000001c8e2a1b2c0] DirectShow video devices (some may be both video and audio devices)
        [dshow @ 000001c8e2a1b2c0]  "Integrated Camera"
        [dshow @ 000001c8e2a1b2c0]     Alternative name "@device_pnp_usb#vid_04f2&pid_b6d9"
        [dshow @ 000001c8e2a1b2c0] DirectShow audio devices

    Capabilities come from ``-list_options true``::

        [dshow @ 000001c8e2a1b2c0] DirectShow video device options (from video devices)
        [dshow @ 000001c8e2a1b2c0]  Pin "Capture" (alternative pin name "0")
        [dshow @ 000001c8e2a1b2c0]   pixel_format=yuyv422  min s=640x480 fps=5 max s=640x480 fps=30
        [dshow @ 000001c8e2a1b2c0]   vcodec=mjpeg  min s=1280x720 fps=5 max s=1280x720 fps=30
    """

    format = PlatformFormat.DSHOW
    listing_target = "dummy"

    VIDEO_HEADER = "DirectShow"
    ALTERNATIVE_NAME_PREFIX = "Alternative"
    PIN_PREFIX = "Pin"
    MODES_TERMINATOR = "Could"

    # Word positions within the trailing text of a mode line
    SIZE_WORD = 4
    MIN_FPS_WORD = 5
    MAX_FPS_WORD = 8

    def parse_device_list(self, lines: Iterable[str]) -> List[Tuple[int, str]]:
        devices = []
        state = ParserState.SEEKING_HEADER
        next_id = 0

        for line in lines:
            parsed = split_diagnostic_line(line)
            if parsed is None:
                continue

            if state is ParserState.SEEKING_HEADER:
                if parsed.leading == self.VIDEO_HEADER:
                    state = ParserState.COLLECTING
                continue

            if parsed.leading == self.VIDEO_HEADER:
                state = ParserState.DONE
                break

            if parsed.trailing.strip().startswith(self.ALTERNATIVE_NAME_PREFIX):
                continue

            name = parsed.trailing.replace('"', "").strip()
            if not name:
                continue
            devices.append((next_id, name))
            next_id += 1

        return devices

    def probe_request(self, device: Device) -> ProbeRequest:
        return ProbeRequest(target=f"video={device.name}", options={"list_options": "true"})

    def parse_capabilities(self, lines: Iterable[str]) -> Iterator[ModeObservation]:
        state = ParserState.SEEKING_HEADER

        for line in lines:
            parsed = split_diagnostic_line(line)
            if parsed is None:
                continue

            if state is ParserState.SEEKING_HEADER:
                if parsed.trailing.startswith(self.PIN_PREFIX):
                    state = ParserState.COLLECTING
                continue

            if parsed.leading == self.MODES_TERMINATOR:
                state = ParserState.DONE
                break

            observation = self._parse_mode(parsed.trailing.split(" "))
            if observation is not None:
                yield observation

    def _parse_mode(self, words: List[str]) -> Optional[ModeObservation]:
        if len(words) <= self.MAX_FPS_WORD:
            return None
        try:
            size = _option_value(words[self.SIZE_WORD])
            width, height = (int(v) for v in size.split("x"))
            min_fps = float(_option_value(words[self.MIN_FPS_WORD]))
            max_fps = float(_option_value(words[self.MAX_FPS_WORD]))
        except ValueError:
            return None
        if width <= 0 or height <= 0:
            return None
        if not (math.isfinite(min_fps) and math.isfinite(max_fps)) or min_fps > max_fps:
            return None
        return ModeObservation(width, height, FrameRateRange(min_fps, max_fps))


def _option_value(word: str) -> str:
    """Value of a ``key=value`` word."""
    key, sep, value = word.partition("=")
    if not sep:
        raise ValueError(f"Not a key=value word: {word!r}")
    return value


def default_platforms(probe_frame_rate: int = DEFAULT_PROBE_FRAME_RATE) -> Dict[str, Platform]:
    """Platforms keyed by the ffmpeg input format name they handle."""
    platforms = [
        AVFoundationPlatform(probe_frame_rate=probe_frame_rate),
        DShowPlatform(),
    ]
    return {platform.format.value: platform for platform in platforms}
