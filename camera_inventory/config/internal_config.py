"""
Internal configuration loader for Camera Inventory.

This handles the camera-inventory-config.yaml file which contains the ffmpeg
invocation settings, discovery behaviour and logging options.
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import List, Optional


DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "camera-inventory-config.yaml")


@dataclass
class FFmpegConfig:
    binary: str = "ffmpeg"
    global_args: List[str] = field(default_factory=lambda: ["-hide_banner"])
    timeout_seconds: Optional[float] = None


@dataclass
class DiscoveryConfig:
    formats: List[str] = field(default_factory=lambda: ["avfoundation", "dshow"])
    detect_formats: bool = True
    probe_frame_rate: int = 713


@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_to_file: bool = False
    log_path: str = "/tmp/camera_inventory_logs"


def _section(data, key: str) -> dict:
    """Mapping stored under ``key``; a missing or empty section is ``{}``."""
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping containing '{key}', got {type(data).__name__}")
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{key}' must be a mapping, got {type(section).__name__}")
    return section


@dataclass
class CameraInventoryConfig:
    """Complete internal configuration for Camera Inventory."""

    ffmpeg: FFmpegConfig
    discovery: DiscoveryConfig
    logging: LoggingConfig

    @classmethod
    def load_from_file(cls, config_path: str) -> "CameraInventoryConfig":
        """Load configuration from YAML file."""
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        inventory_config = _section(data, 'camera_inventory')

        return cls(
            ffmpeg=FFmpegConfig(**_section(inventory_config, 'ffmpeg')),
            discovery=DiscoveryConfig(**_section(inventory_config, 'discovery')),
            logging=LoggingConfig(**_section(inventory_config, 'logging'))
        )

    @classmethod
    def load_default(cls) -> "CameraInventoryConfig":
        """Load default configuration."""
        return cls(
            ffmpeg=FFmpegConfig(),
            discovery=DiscoveryConfig(),
            logging=LoggingConfig()
        )

    def apply_env_overrides(self, environ=None) -> "CameraInventoryConfig":
        """Apply environment overrides (ENV > YAML > default)."""
        environ = os.environ if environ is None else environ
        binary = environ.get('CAMERA_INVENTORY_FFMPEG')
        if binary:
            self.ffmpeg.binary = binary
        level = environ.get('CAMERA_INVENTORY_LOG_LEVEL')
        if level:
            self.logging.level = level
        return self
