"""Time Frame and Partition Schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from gantt_grid.schemas.defaults import DEFAULT_TIME_FRAME_MAGNET, DEFAULT_TIME_FRAME_PRIORITY


class Placement(BaseModel):
    """Pixel placement of a column or a time frame."""

    left: float | None = Field(None, description="Left offset in pixels")
    width: float = Field(0.0, description="Width in pixels")

    model_config = ConfigDict(frozen=True)


class TimeFrame(BaseModel):
    """A sub-interval of a column classified as working or non-working.

    Records are immutable: the calendar produces them with unresolved
    boundaries and no placement, and every later stage (clip, place, crop)
    returns a new record through ``model_copy``.
    """

    start: datetime | None = Field(None, description="Start instant (None = day start)")
    end: datetime | None = Field(None, description="End instant (None = day end)")
    working: bool = Field(..., description="Working/non-working classification")
    magnet: bool = Field(
        DEFAULT_TIME_FRAME_MAGNET,
        description="Whether boundaries participate in snap search",
    )
    hidden: bool = Field(False, description="Resolved visibility for rendering")
    cropped: bool = Field(False, description="Pixel footprint collapsed to zero")
    left: float | None = Field(None, description="Left offset relative to column")
    width: float = Field(0.0, description="Width in pixels")
    original_placement: Placement = Field(
        default_factory=Placement, description="Placement before crop redistribution"
    )

    # Calendar metadata, carried through untouched for the rendering layer.
    name: str | None = Field(None, description="Calendar rule name")
    priority: int = Field(
        DEFAULT_TIME_FRAME_PRIORITY, description="Precedence when frames overlap"
    )
    color: str | None = None
    classes: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def duration(self) -> float:
        """Duration in milliseconds (0.0 while a boundary is unresolved)."""
        if self.start is None or self.end is None:
            return 0.0
        return (self.end - self.start).total_seconds() * 1000.0


class Partition(BaseModel):
    """Result of one partition rebuild of a column."""

    time_frames: tuple[TimeFrame, ...] = ()
    visible_time_frames: tuple[TimeFrame, ...] = ()
    day_index: dict[date, tuple[TimeFrame, ...]] = Field(default_factory=dict)
    cropped: bool = Field(False, description="Every frame ended up cropped")

    model_config = ConfigDict(frozen=True)
