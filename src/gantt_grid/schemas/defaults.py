"""Default values for the Gantt grid engine.

These constants are used as `Field(default=...)` values in the Pydantic
config schemas and as the fallbacks of `Column` construction.  They live
here (in the schemas layer) rather than in `core/constants.py` so that
`schemas` does not depend on `core`.
"""

# --- Display Modes ---
# One of "hidden" | "visible" | "cropped" (see DisplayMode).
DEFAULT_WORKING_MODE = "visible"
DEFAULT_NON_WORKING_MODE = "visible"

# --- Magnet (snapping) ---
# value <= 0 disables unit snapping entirely.
DEFAULT_MAGNET_VALUE = 0.0
DEFAULT_MAGNET_UNIT = None
DEFAULT_MAGNET_MIDPOINT = None  # None = round to nearest
DEFAULT_TIME_FRAMES_MAGNET = False

# --- Grid Layout ---
DEFAULT_GRID_UNIT = "day"
DEFAULT_COLUMN_WIDTH = 240.0  # px

# --- Time Frames ---
DEFAULT_TIME_FRAME_PRIORITY = 1
DEFAULT_TIME_FRAME_MAGNET = True
DEFAULT_FILL_WORKING = True  # classification of gap-filling frames
