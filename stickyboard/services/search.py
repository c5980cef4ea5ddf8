"""Search filtering and render ordering for notes."""

from collections.abc import Iterable

from stickyboard.models.note import Note


def filter_notes(notes: Iterable[Note], query: str | None) -> list[Note]:
    """
    Find notes whose title or body contains ``query``.

    Matching is a case-insensitive substring test of the trimmed query
    against ``title + " " + body``.

    Args:
        notes: Notes to search
        query: Search text; blank or None matches every note

    Returns:
        Matching notes in their original order

    """
    needle = (query or "").strip().casefold()
    if not needle:
        return list(notes)
    return [
        note for note in notes if needle in f"{note.title} {note.body}".casefold()
    ]


def render_order(notes: Iterable[Note]) -> list[Note]:
    """
    Order notes for painting: pinned first, then by ascending ``z``.

    The sort is stable, so notes with equal keys keep their relative order.
    """
    return sorted(notes, key=lambda note: (not note.pinned, note.z))
