"""
Fuzzmenu

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .engine import MenuEngine
from .tree import ConfigTree

logger = logging.getLogger("fuzzmenu")


__all__ = [
    "ConfigTree",
    "MenuEngine",
]
