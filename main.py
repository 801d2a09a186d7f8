"""Entry point for the Gantt grid engine."""

import logging
from datetime import datetime, timedelta

from gantt_grid.schemas import GridConfig
from gantt_grid.services.config_manager import list_grid_configs, load_grid_config
from gantt_grid.services.layout import columns_from_config, date_from_position
from gantt_grid.services.metrics import (
    calculate_cropped_fraction,
    calculate_working_share,
    is_mostly_cropped,
)

# --- Logging Configuration ---
logger = logging.getLogger("gantt_grid")
logger.setLevel(logging.INFO)
stream_handler = logging.StreamHandler()
stream_handler.setFormatter(
    logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
)
logger.addHandler(stream_handler)


def run_grid(config: GridConfig, days: int = 7) -> None:
    """Lay out a grid for the coming `days` and print a summary.

    Args:
        config: Grid configuration.
        days: Number of days to cover, starting today.
    """
    print(f"--- {config.name}: {config.description} ---")
    start = datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)
    columns = columns_from_config(config, start, start + timedelta(days=days))

    for column in columns:
        flag = " (mostly cropped)" if is_mostly_cropped(column) else ""
        print(
            f"  {column.start:%a %Y-%m-%d %H:%M}  left={column.left:7.1f}  "
            f"frames={len(column.visible_time_frames):2d}  "
            f"working={calculate_working_share(column):6.1%}  "
            f"cropped={calculate_cropped_fraction(column):6.1%}{flag}"
        )

    # Snap the middle of the grid with the configured magnet
    middle = (columns[-1].left + columns[-1].width) / 2
    instant = date_from_position(columns, middle, config.magnet)
    print(f"  Position {middle:.1f}px -> {instant}")
    print("\n")


def main() -> None:
    """Load grid configs and lay each one out."""
    filenames = list_grid_configs()
    if not filenames:
        print("No grid configs found, using defaults.")
        run_grid(GridConfig())
        return

    for filename in filenames:
        run_grid(load_grid_config(filename))


if __name__ == "__main__":
    main()
