"""Note model."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final

from stickyboard.exc import InvalidNoteRecord
from stickyboard.geometry import default_position
from stickyboard.models.palette import resolve_color_key
from stickyboard.utils import is_finite_number

#: Maximum title length, in characters.
TITLE_MAX_LENGTH: Final[int] = 80
#: Maximum body length, in characters.
BODY_MAX_LENGTH: Final[int] = 600
#: Title given to newly added notes.
DEFAULT_TITLE: Final[str] = "New note"


def coerce_text(value: Any, limit: int) -> str:
    """
    Coerce a stored value to note text.

    Strings are kept, other scalars are stringified, and anything else
    (missing values, lists, objects) becomes an empty string.  The result is
    truncated to ``limit`` characters.

    Args:
        value: Raw value
        limit: Maximum length

    Returns:
        The coerced text

    """
    if isinstance(value, str):
        text = value
    elif isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, int | float):
        text = str(value)
    else:
        text = ""
    return text[:limit]


def explicit_id(value: Any) -> str | None:
    """
    Get the note ID a stored value names, or None if it names none.
    """
    if isinstance(value, str) and value.strip():
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return None


def placeholder_id(index: int) -> str:
    """Get the positional placeholder ID for the ``index``-th stored record."""
    return f"note-{index + 1}"


def coerce_id(value: Any, index: int) -> str:
    """
    Coerce a stored note ID, falling back to a positional placeholder.
    """
    note_id = explicit_id(value)
    return placeholder_id(index) if note_id is None else note_id


@dataclass(frozen=True)
class Note:
    """
    A single sticky note on the board.

    Notes are immutable; the store replaces a note with an updated copy
    whenever it changes.
    """

    #: The note ID.
    id: str
    #: The note title.
    title: str
    #: The note body.
    body: str
    #: Key of the note's palette entry.
    color_key: str
    #: Whether the note is pinned in place.
    pinned: bool
    #: Left edge on the board.
    x: float
    #: Top edge on the board.
    y: float
    #: Stacking key; larger values paint on top.
    z: int
    #: Creation time in epoch milliseconds.
    created_at: float

    def to_json(self) -> dict[str, Any]:
        """
        Serialize note to a JSON-compatible dictionary.

        Returns:
            Dictionary in the stored record format

        """
        return {
            "id": self.id,
            "title": self.title,
            "body": self.body,
            "colorKey": self.color_key,
            "pinned": self.pinned,
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_json(cls, record: Any, index: int) -> "NoteParseResult":
        """
        Build a note from a stored record.

        Anything that is not a mapping fails.  Every field of a mapping is
        coerced: missing or malformed values fall back to defaults derived
        from ``index``, text is truncated to the length caps, and unknown
        colors resolve to the first palette entry.  Extra keys are ignored.

        Args:
            record: Raw record decoded from storage
            index: Position of the record in the stored list

        Returns:
            A result holding either the note or the reason it was rejected

        """
        if not isinstance(record, Mapping):
            return NoteParseResult(
                error=InvalidNoteRecord(
                    index, f"expected an object, got {type(record).__name__}"
                )
            )

        fallback_x, fallback_y = default_position(index)
        x = record.get("x")
        y = record.get("y")
        z = record.get("z")
        created_at = record.get("createdAt")
        note = cls(
            id=coerce_id(record.get("id"), index),
            title=coerce_text(record.get("title"), TITLE_MAX_LENGTH),
            body=coerce_text(record.get("body"), BODY_MAX_LENGTH),
            color_key=resolve_color_key(record.get("colorKey")),
            pinned=bool(record.get("pinned")),
            x=float(x) if is_finite_number(x) else fallback_x,
            y=float(y) if is_finite_number(y) else fallback_y,
            z=int(z) if is_finite_number(z) else index + 1,
            created_at=created_at if is_finite_number(created_at) else index,
        )
        return NoteParseResult(note=note)


@dataclass(frozen=True)
class NoteParseResult:
    """Outcome of :meth:`Note.from_json` for one stored record."""

    #: The parsed note, if the record was usable.
    note: Note | None = None
    #: Why the record was rejected, if it was.
    error: InvalidNoteRecord | None = None

    @property
    def ok(self) -> bool:
        """Whether the record produced a note."""
        return self.note is not None
