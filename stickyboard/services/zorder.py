"""Stacking-order allocation."""

from collections.abc import Iterable

from stickyboard.models.note import Note


class ZOrderAllocator:
    """
    Monotonic counter handing out stacking keys.

    Each call to :meth:`next` returns a value strictly greater than every
    value returned before.  The counter never goes backwards, even after the
    notes holding the highest keys are deleted.

    Args:
        start: First value to hand out

    """

    def __init__(self, start: int = 1) -> None:
        #: The next value to hand out.
        self._next = max(1, int(start))

    @classmethod
    def from_notes(cls, notes: Iterable[Note]) -> "ZOrderAllocator":
        """
        Seed an allocator one above the highest ``z`` in ``notes``.

        Args:
            notes: Notes already on the board

        Returns:
            The allocator; it starts at 1 when there are no notes

        """
        highest = max((note.z for note in notes), default=0)
        return cls(highest + 1)

    def next(self) -> int:
        """Hand out the current value and advance the counter."""
        value = self._next
        self._next += 1
        return value

    def peek(self) -> int:
        """Get the value the next call to :meth:`next` will return."""
        return self._next
