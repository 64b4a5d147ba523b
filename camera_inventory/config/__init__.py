"""
Configuration for Camera Inventory.

This package loads the operational settings used to drive ffmpeg during
device discovery.
"""

from .internal_config import (
    CameraInventoryConfig,
    DiscoveryConfig,
    FFmpegConfig,
    LoggingConfig,
    DEFAULT_CONFIG_PATH,
)

__all__ = [
    "CameraInventoryConfig",
    "DiscoveryConfig",
    "FFmpegConfig",
    "LoggingConfig",
    "DEFAULT_CONFIG_PATH",
]
