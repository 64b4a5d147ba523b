"""Capability probing for discovered devices."""

import logging
from typing import List

from .models import Device
from .platforms import Platform
from .source import BackendLaunchError, DiagnosticTextSource

logger = logging.getLogger(__name__)


class CapabilityProbeDriver:
    """Issues one capability probe per device and returns its diagnostic output."""

    def __init__(self, source: DiagnosticTextSource):
        self.source = source

    def probe(self, platform: Platform, device: Device) -> List[str]:
        """
        Probe ``device`` using ``platform``'s strategy.

        A probe that cannot be started is logged and yields no lines, which
        leaves the device without modes.
        """
        request = platform.probe_request(device)
        logger.debug("Probing device %d (%s) with target %r", device.id, device.name, request.target)
        try:
            return self.source.collect(device.format.value, request.target, request.options)
        except BackendLaunchError as e:
            logger.error("Failed to probe device %d (%s): %s", device.id, device.name, e)
            return []
