#!/usr/bin/env python3
"""
Camera Inventory - Main Entry Point

Refreshes the camera inventory once and prints what was found.
"""

import argparse
import json
import sys

import yaml

from .config import CameraInventoryConfig, DEFAULT_CONFIG_PATH
from .devices import CameraInventory
from .logger import configure_logging


def load_config(config_path, logger):
    """Load configuration from a YAML file, falling back to defaults."""
    logger.info("Attempting to load configuration from: %s", config_path)
    try:
        config = CameraInventoryConfig.load_from_file(config_path)
        logger.info("Successfully loaded configuration from %s", config_path)
        return config
    except FileNotFoundError:
        logger.warning("Configuration file not found: %s, using defaults", config_path)
        return CameraInventoryConfig.load_default()


def setup_logging(config):
    """Setup package logging based on config."""
    logging_config = config.logging
    log_dir = logging_config.log_path if logging_config.log_to_file else None
    return configure_logging(logging_config.level, log_dir=log_dir)


def print_inventory(inventory, out=None):
    """Print one line per device followed by one indented line per mode."""
    out = out or sys.stdout
    for device_id, device in inventory.get_inventory().items():
        print(f"Device={device_id}, Format={device.format.value}, Name={device.name}", file=out)
        for mode in device.modes:
            line = f"  Resolution={mode.width}x{mode.height}"
            if mode.is_discrete:
                rates = " ".join(str(fps) for fps in mode.rate_info.values)
                line += f", valid fps rates are {rates}"
            else:
                line += f", minFPS={mode.rate_info.min_fps}, maxFPS={mode.rate_info.max_fps}"
            print(line, file=out)


def main(argv=None):
    """
    Main entry point for Camera Inventory.
    """
    parser = argparse.ArgumentParser(description='List video capture devices and their modes using ffmpeg')
    parser.add_argument('--config-path', type=str, default=DEFAULT_CONFIG_PATH,
                        help='Path to the configuration file')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Override the configured log level (trace, debug, info, ...)')
    parser.add_argument('--json', action='store_true',
                        help='Print the inventory as JSON')

    args = parser.parse_args(argv)

    logger = configure_logging()
    try:
        config = load_config(args.config_path, logger)
    except (yaml.YAMLError, TypeError, ValueError) as e:
        logger.error("Invalid configuration file %s: %s", args.config_path, e)
        return 1

    config.apply_env_overrides()
    if args.log_level:
        config.logging.level = args.log_level
    setup_logging(config)

    inventory = CameraInventory.from_config(config)
    inventory.refresh()

    if args.json:
        print(json.dumps(inventory.get_available_sources(), indent=2))
    else:
        print_inventory(inventory)

    return 0


if __name__ == '__main__':
    sys.exit(main())
