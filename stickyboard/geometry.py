"""Board geometry: viewport bounds and note position clamping."""

from dataclasses import dataclass, replace
from typing import Final

from stickyboard.utils import clamp

#: Default padding between a note and the board edge, in pixels.
DEFAULT_PADDING: Final[float] = 10.0
#: Default nominal note width, in pixels.
DEFAULT_NOTE_WIDTH: Final[float] = 260.0
#: Default nominal note height, in pixels.
DEFAULT_NOTE_HEIGHT: Final[float] = 220.0

#: Position of the first note in the default cascade.
CASCADE_ORIGIN: Final[float] = 24.0
#: Horizontal step between cascaded notes.
CASCADE_STEP_X: Final[float] = 32.0
#: Vertical step between cascaded notes.
CASCADE_STEP_Y: Final[float] = 28.0
#: Number of notes in one cascade before starting the next column.
CASCADE_LENGTH: Final[int] = 8
#: Horizontal offset between cascade columns.
CASCADE_COLUMN_WIDTH: Final[float] = 280.0


@dataclass(frozen=True)
class Viewport:
    """Measured size of the visible board."""

    #: Board width in pixels.
    width: float
    #: Board height in pixels.
    height: float


@dataclass(frozen=True)
class Footprint:
    """Nominal on-screen size of a note."""

    #: Note width in pixels.
    width: float = DEFAULT_NOTE_WIDTH
    #: Note height in pixels.
    height: float = DEFAULT_NOTE_HEIGHT


@dataclass(frozen=True)
class Bounds:
    """Allowed range for a note's top-left corner."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    def contains(self, x: float, y: float) -> bool:
        """Check whether ``(x, y)`` lies inside the bounds."""
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y


def _axis_range(dimension: float, nominal: float, padding: float) -> tuple[float, float]:
    """
    Get the allowed ``(low, high)`` range for one axis.

    The footprint shrinks on narrow viewports so the upper bound never drops
    below the padding.
    """
    effective = min(nominal, dimension - 2 * padding)
    return padding, max(padding, dimension - effective - padding)


def board_bounds(viewport: Viewport, footprint: Footprint, padding: float) -> Bounds:
    """
    Compute the allowed position range for a note.

    Args:
        viewport: Current board size
        footprint: Nominal note size
        padding: Gap to keep between notes and the board edge

    Returns:
        The bounds for the note's top-left corner

    """
    min_x, max_x = _axis_range(viewport.width, footprint.width, padding)
    min_y, max_y = _axis_range(viewport.height, footprint.height, padding)
    return Bounds(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y)


def clamp_position(
    x: float,
    y: float,
    viewport: Viewport,
    footprint: Footprint,
    padding: float,
) -> tuple[float, float]:
    """
    Clamp a note position to the visible board.

    Args:
        x: Requested x coordinate
        y: Requested y coordinate
        viewport: Current board size
        footprint: Nominal note size
        padding: Gap to keep between notes and the board edge

    Returns:
        The ``(x, y)`` pair clamped into :func:`board_bounds`

    """
    bounds = board_bounds(viewport, footprint, padding)
    return (
        float(clamp(x, bounds.min_x, bounds.max_x)),
        float(clamp(y, bounds.min_y, bounds.max_y)),
    )


def default_position(index: int) -> tuple[float, float]:
    """
    Get the unclamped cascade position for the ``index``-th note.

    Notes step down and to the right; every :data:`CASCADE_LENGTH` notes the
    cascade starts again one column over.
    """
    step = index % CASCADE_LENGTH
    column = index // CASCADE_LENGTH
    return (
        CASCADE_ORIGIN + step * CASCADE_STEP_X + column * CASCADE_COLUMN_WIDTH,
        CASCADE_ORIGIN + step * CASCADE_STEP_Y,
    )


@dataclass(frozen=True)
class BoardGeometry:
    """
    The board's current viewport, note footprint and edge padding.

    Instances are immutable; a viewport change produces a new geometry via
    :meth:`with_viewport`.
    """

    #: Current board size.
    viewport: Viewport
    #: Nominal note size.
    footprint: Footprint = Footprint()
    #: Gap to keep between notes and the board edge.
    padding: float = DEFAULT_PADDING

    def bounds(self) -> Bounds:
        """Get the allowed position range for the current viewport."""
        return board_bounds(self.viewport, self.footprint, self.padding)

    def clamp(self, x: float, y: float) -> tuple[float, float]:
        """Clamp ``(x, y)`` to the current viewport."""
        return clamp_position(x, y, self.viewport, self.footprint, self.padding)

    def default_position(self, index: int) -> tuple[float, float]:
        """Get the clamped cascade position for the ``index``-th note."""
        return self.clamp(*default_position(index))

    def with_viewport(self, viewport: Viewport) -> "BoardGeometry":
        """Return a copy of this geometry for a different viewport."""
        return replace(self, viewport=viewport)
