"""
Device models for Camera Inventory.

These models represent video capture devices and the modes (resolution and
frame rate support) ffmpeg reports for them.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class PlatformFormat(str, Enum):
    """ffmpeg input formats with a known diagnostic grammar."""
    AVFOUNDATION = "avfoundation"
    DSHOW = "dshow"


@dataclass
class FrameRateRange:
    """Continuous frame rate support between two bounds."""
    min_fps: float
    max_fps: float

    @classmethod
    def empty(cls) -> "FrameRateRange":
        """Range that any first observation replaces entirely."""
        return cls(min_fps=math.inf, max_fps=-math.inf)

    def merge(self, observed: "FrameRateRange"):
        """Widen this range so it covers ``observed``."""
        self.max_fps = max(self.max_fps, observed.max_fps)
        self.min_fps = min(self.min_fps, observed.min_fps)

    def contains(self, fps: float) -> bool:
        return self.min_fps <= fps <= self.max_fps

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "range", "min_fps": self.min_fps, "max_fps": self.max_fps}

    def __str__(self) -> str:
        return f"{self.min_fps}-{self.max_fps}"


@dataclass
class DiscreteFrameRates:
    """Exact frame rates a device accepts, in the order they were reported."""
    values: List[float] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "DiscreteFrameRates":
        return cls()

    def merge(self, observed: "DiscreteFrameRates"):
        # Duplicates are kept
        self.values.extend(observed.values)

    def contains(self, fps: float) -> bool:
        return any(math.isclose(fps, value, rel_tol=1e-3) for value in self.values)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "discrete", "values": list(self.values)}

    def __str__(self) -> str:
        return "[" + ", ".join(str(v) for v in self.values) + "]"


RateInfo = Union[FrameRateRange, DiscreteFrameRates]


@dataclass
class ModeObservation:
    """One (resolution, frame rate) fact parsed from a capability probe."""
    width: int
    height: int
    rate: RateInfo


@dataclass
class Mode:
    """Video mode capability."""
    width: int
    height: int
    rate_info: RateInfo

    @property
    def is_discrete(self) -> bool:
        return isinstance(self.rate_info, DiscreteFrameRates)

    def supports_fps(self, fps: float) -> bool:
        return self.rate_info.contains(fps)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "frame_rates": self.rate_info.to_dict(),
        }

    def __str__(self) -> str:
        return f"{self.width}x{self.height}@{self.rate_info}fps"


@dataclass
class Device:
    """Video capture device (camera)."""
    id: int                 # e.g., 0
    format: PlatformFormat  # e.g., PlatformFormat.AVFOUNDATION
    name: str               # e.g., "FaceTime HD Camera"
    modes: List[Mode] = field(default_factory=list)

    def find_mode(self, width: int, height: int) -> Optional[Mode]:
        for mode in self.modes:
            if mode.width == width and mode.height == height:
                return mode
        return None

    def supports_mode(self, width: int, height: int, fps: Optional[float] = None) -> bool:
        """Check if device supports a specific resolution and, optionally, frame rate."""
        mode = self.find_mode(width, height)
        if mode is None:
            return False
        return fps is None or mode.supports_fps(fps)

    def get_best_mode(self) -> Optional[Mode]:
        """Get the highest resolution mode supported by the device."""
        if not self.modes:
            return None
        return max(self.modes, key=lambda m: m.width * m.height)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "device_id": self.id,
            "format": self.format.value,
            "name": self.name,
            "modes": [mode.to_dict() for mode in self.modes],
        }
