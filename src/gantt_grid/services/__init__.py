"""Services package for grid orchestration.

This package contains:
- layout.py: Column generation and grid-level position/instant lookups
- metrics.py: Summary figures over column partitions
- export.py: DataFrame/CSV export of time frames
- config_manager.py: Grid config file loading/saving
"""

from gantt_grid.services.layout import (
    columns_from_config,
    date_from_position,
    find_column,
    generate_columns,
    position_from_date,
)

__all__ = [
    "columns_from_config",
    "date_from_position",
    "find_column",
    "generate_columns",
    "position_from_date",
]
