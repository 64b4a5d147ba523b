#!/usr/bin/env python3
"""
Camera Inventory entry point when run as a module.

Allows execution via: python -m camera_inventory
"""

import sys

from .main import main

if __name__ == '__main__':
    sys.exit(main())
