"""
Camera Inventory

Discovers video capture devices and the resolutions and frame rates they
support by parsing ffmpeg's diagnostic output.
"""

__version__ = "0.1.0"

from .devices import CameraInventory, Device, Mode

__all__ = ["CameraInventory", "Device", "Mode", "__version__"]
