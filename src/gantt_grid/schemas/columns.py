"""Strongly typed column names for TimeFrame DataFrames.

Defines the data contract between schemas and consumers (export, metrics).
"""


class ColumnNames:
    """Column name constants for exported time frame tables."""

    COLUMN_START = "column_start"
    DAY = "day"
    START = "start"
    END = "end"
    DURATION_MS = "duration_ms"
    WORKING = "working"
    HIDDEN = "hidden"
    CROPPED = "cropped"
    MAGNET = "magnet"
    LEFT = "left"
    WIDTH = "width"
    ORIGINAL_LEFT = "original_left"
    ORIGINAL_WIDTH = "original_width"
    NAME = "name"
