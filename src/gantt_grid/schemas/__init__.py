"""Schemas package.

- config.py: Configuration models (GridConfig, MagnetConfig, DisplayMode)
- data.py: Value records (TimeFrame, Placement, Partition)
"""

from .config import DisplayMode, GridConfig, MagnetConfig, TimeFrameRule
from .data import Partition, Placement, TimeFrame

__all__ = [
    "DisplayMode",
    "GridConfig",
    "MagnetConfig",
    "Partition",
    "Placement",
    "TimeFrame",
    "TimeFrameRule",
]
