"""
Folds capability observations into a device's mode list.

Each resolution appears once in the list, in the order it was first seen.
Repeated observations of a resolution extend its frame rate information.
"""

import logging
from typing import Iterable

from .models import Device, Mode, ModeObservation

logger = logging.getLogger(__name__)


def aggregate_modes(device: Device, observations: Iterable[ModeObservation]) -> Device:
    """Merge ``observations`` into ``device.modes`` and return the device."""
    for observation in observations:
        mode = device.find_mode(observation.width, observation.height)
        if mode is None:
            mode = Mode(
                width=observation.width,
                height=observation.height,
                rate_info=type(observation.rate).empty(),
            )
            device.modes.append(mode)
        elif type(mode.rate_info) is not type(observation.rate):
            logger.debug("Ignoring %s observation for %dx%d on device %d",
                         type(observation.rate).__name__, observation.width,
                         observation.height, device.id)
            continue

        mode.rate_info.merge(observation.rate)

    return device
