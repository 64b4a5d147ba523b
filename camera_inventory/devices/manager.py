"""
Camera inventory for Camera Inventory.

This module drives device discovery: it enumerates the video devices of each
ffmpeg input format with a known grammar, probes every device for its modes,
and keeps the result as a mapping from device id to Device.
"""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence

from .aggregator import aggregate_modes
from .models import Device, PlatformFormat
from .platforms import Platform, default_platforms
from .probe import CapabilityProbeDriver
from .source import BackendLaunchError, DiagnosticTextSource, InventoryError


class DeviceNotFoundError(InventoryError, KeyError):
    """No device with the requested id is in the inventory."""


class InventoryState(Enum):
    IDLE = "idle"
    ENUMERATING = "enumerating"
    PROBING = "probing"


class CameraInventory:
    """
    Discovers video capture devices and their supported modes.

    Every refresh discards the previous inventory and rebuilds it from fresh
    ffmpeg output. Devices are enumerated and probed one at a time. The
    inventory must not be read while a refresh is running.
    """

    def __init__(self, source: Optional[DiagnosticTextSource] = None,
                 platforms: Optional[Mapping[str, Platform]] = None,
                 formats: Optional[Sequence[str]] = None,
                 detect_formats: bool = True):
        """Initialize the CameraInventory.

        Args:
            source: Runs ffmpeg and captures its stderr
            platforms: Grammars keyed by ffmpeg input format name
            formats: Input formats to try, defaults to every known platform
            detect_formats: Ask ffmpeg which of ``formats`` it actually provides
        """
        self.logger = logging.getLogger(__name__)
        self.source = source or DiagnosticTextSource()
        self.platforms: Dict[str, Platform] = dict(platforms) if platforms is not None else default_platforms()
        self.formats: List[str] = list(formats) if formats is not None else list(self.platforms)
        self.detect_formats = detect_formats
        self.probe_driver = CapabilityProbeDriver(self.source)
        self.state = InventoryState.IDLE
        self._devices: Dict[int, Device] = {}

    @classmethod
    def from_config(cls, config) -> "CameraInventory":
        """Build an inventory from a CameraInventoryConfig."""
        source = DiagnosticTextSource(
            binary=config.ffmpeg.binary,
            global_args=config.ffmpeg.global_args,
            timeout_seconds=config.ffmpeg.timeout_seconds,
        )
        return cls(
            source=source,
            platforms=default_platforms(config.discovery.probe_frame_rate),
            formats=config.discovery.formats,
            detect_formats=config.discovery.detect_formats,
        )

    def refresh(self):
        """
        Rebuild the inventory.

        Launch failures are logged and leave the affected format or device
        without data; they never abort the refresh.
        """
        self._devices = {}
        self.logger.info("Starting camera discovery...")

        try:
            for format_name in self._active_formats():
                platform = self.platforms.get(format_name)
                if platform is None:
                    self.logger.debug("No grammar for input format %s, skipping", format_name)
                    continue

                self.state = InventoryState.ENUMERATING
                devices = self._enumerate(platform)

                self.state = InventoryState.PROBING
                for device in devices:
                    self._probe(platform, device)
        finally:
            self.state = InventoryState.IDLE

        self.logger.info("Camera discovery completed: %d video devices", len(self._devices))

    def _active_formats(self) -> List[str]:
        if not self.detect_formats:
            return list(self.formats)

        try:
            available = set(self.source.list_input_formats())
        except BackendLaunchError as e:
            self.logger.error("Failed to list ffmpeg input devices: %s", e)
            return []

        active = [name for name in self.formats if name in available]
        self.logger.debug("ffmpeg input formats: available=%s, active=%s", sorted(available), active)
        return active

    def _enumerate(self, platform: Platform) -> List[Device]:
        request = platform.listing_request()
        try:
            lines = self.source.collect(platform.format.value, request.target, request.options)
        except BackendLaunchError as e:
            self.logger.error("Failed to list %s devices: %s", platform.format.value, e)
            return []

        devices = []
        for device_id, name in platform.parse_device_list(lines):
            if device_id in self._devices:
                self.logger.warning("Device id %d (%s) replaces %s", device_id, name,
                                    self._devices[device_id].name)
            device = Device(id=device_id, format=platform.format, name=name)
            self._devices[device_id] = device
            devices.append(device)
            self.logger.info("Found %s camera: [%d] %s", platform.format.value, device_id, name)
        return devices

    def _probe(self, platform: Platform, device: Device):
        lines = self.probe_driver.probe(platform, device)
        aggregate_modes(device, platform.parse_capabilities(lines))
        self.logger.info("Camera [%d] %s - %d modes", device.id, device.name, len(device.modes))

    def get_inventory(self) -> Mapping[int, Device]:
        """Current snapshot, keyed by device id (read-only)."""
        return MappingProxyType(self._devices)

    def get_device(self, device_id: int) -> Device:
        """Get video device by ID."""
        try:
            return self._devices[device_id]
        except KeyError:
            raise DeviceNotFoundError(f"Video device not found: {device_id}") from None

    def get_devices_by_format(self, format: PlatformFormat) -> List[Device]:
        return [device for device in self._devices.values() if device.format is format]

    def get_available_sources(self) -> Dict:
        """
        Get the inventory as plain data.

        Returns:
            Dictionary containing a video_sources array
        """
        return {
            "video_sources": [device.to_dict() for device in self._devices.values()]
        }
