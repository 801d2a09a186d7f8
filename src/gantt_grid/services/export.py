"""Export of column partitions as tables (DataFrame and CSV).

One row per time frame, with the column start and calendar day it belongs
to, its time range, classification, flags and pixel placements.
"""

import logging
import os
from datetime import datetime
from typing import Sequence

import pandas as pd

from gantt_grid.core.column import Column
from gantt_grid.core.partition import day_key
from gantt_grid.schemas.columns import ColumnNames

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    ColumnNames.COLUMN_START,
    ColumnNames.DAY,
    ColumnNames.START,
    ColumnNames.END,
    ColumnNames.DURATION_MS,
    ColumnNames.WORKING,
    ColumnNames.HIDDEN,
    ColumnNames.CROPPED,
    ColumnNames.MAGNET,
    ColumnNames.LEFT,
    ColumnNames.WIDTH,
    ColumnNames.ORIGINAL_LEFT,
    ColumnNames.ORIGINAL_WIDTH,
    ColumnNames.NAME,
]


def time_frames_to_dataframe(column: Column) -> pd.DataFrame:
    """Flatten a column's time frames into a DataFrame."""
    rows = [
        {
            ColumnNames.COLUMN_START: column.start,
            ColumnNames.DAY: day_key(frame.start),
            ColumnNames.START: frame.start,
            ColumnNames.END: frame.end,
            ColumnNames.DURATION_MS: frame.duration,
            ColumnNames.WORKING: frame.working,
            ColumnNames.HIDDEN: frame.hidden,
            ColumnNames.CROPPED: frame.cropped,
            ColumnNames.MAGNET: frame.magnet,
            ColumnNames.LEFT: frame.left,
            ColumnNames.WIDTH: frame.width,
            ColumnNames.ORIGINAL_LEFT: frame.original_placement.left,
            ColumnNames.ORIGINAL_WIDTH: frame.original_placement.width,
            ColumnNames.NAME: frame.name,
        }
        for frame in column.time_frames
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def columns_to_dataframe(columns: Sequence[Column]) -> pd.DataFrame:
    """Concatenate the time frame tables of several columns."""
    frames = [time_frames_to_dataframe(c) for c in columns]
    if not frames:
        return pd.DataFrame(columns=EXPORT_COLUMNS)
    return pd.concat(frames, ignore_index=True)


def export_time_frames_to_csv(
    columns: Sequence[Column], output_path: str | None = None
) -> str:
    """Export the time frames of `columns` to CSV.

    Args:
        columns: Columns to export.
        output_path: File path to write to.
                     - If None (default): Generates a path in outputs/.
                     - If "": Returns the CSV text (in-memory).
                     - If valid path: Writes to that path.

    Returns:
        The path written to, or the CSV text if output_path was "".
    """
    df = columns_to_dataframe(columns)

    if output_path == "":
        return df.to_csv(index=False)

    if output_path is None:
        os.makedirs("outputs", exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = f"outputs/time_frames_{stamp}.csv"

    df.to_csv(output_path, index=False)
    logger.info(f"Exported {len(df)} time frames to {output_path}")
    return output_path
