"""
Device discovery for Camera Inventory.

This package enumerates video capture devices through ffmpeg, probes their
supported modes, and parses the diagnostic text ffmpeg reports them in.
"""

from .manager import CameraInventory, DeviceNotFoundError, InventoryState
from .models import Device, DiscreteFrameRates, FrameRateRange, Mode, PlatformFormat
from .platforms import AVFoundationPlatform, DShowPlatform, Platform
from .source import BackendLaunchError, DiagnosticTextSource, InventoryError

__all__ = [
    "CameraInventory",
    "DeviceNotFoundError",
    "InventoryState",
    "Device",
    "DiscreteFrameRates",
    "FrameRateRange",
    "Mode",
    "PlatformFormat",
    "AVFoundationPlatform",
    "DShowPlatform",
    "Platform",
    "BackendLaunchError",
    "DiagnosticTextSource",
    "InventoryError",
]
