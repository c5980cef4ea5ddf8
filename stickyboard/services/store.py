"""The note store: one board session owning notes, stacking and persistence."""

import logging
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any, Final

from PySide6.QtCore import QObject, QSettings, Signal

from stickyboard.config import BoardConfig
from stickyboard.exc import StorageWriteFailed
from stickyboard.geometry import BoardGeometry, Viewport
from stickyboard.models.note import (
    BODY_MAX_LENGTH,
    DEFAULT_TITLE,
    TITLE_MAX_LENGTH,
    Note,
    coerce_text,
)
from stickyboard.models.palette import resolve_color_key
from stickyboard.services.persistence import PersistenceAdapter
from stickyboard.services.search import filter_notes, render_order
from stickyboard.services.zorder import ZOrderAllocator
from stickyboard.utils import is_finite_number, now_ms

logger = logging.getLogger(__name__)

#: Drags shorter than this on both axes are treated as clicks.
MOVE_THRESHOLD: Final[float] = 0.5
#: Viewport used until the board is first measured.
DEFAULT_VIEWPORT: Final[Viewport] = Viewport(width=1280, height=800)
#: Fields :meth:`NoteStore.update_note` will merge.
UPDATABLE_FIELDS: Final[frozenset[str]] = frozenset(
    {"title", "body", "color_key", "pinned", "x", "y", "created_at"}
)


class NoteStore(QObject):
    """
    Owns the notes on one board and every change made to them.

    A store is constructed once per board and torn down once with
    :meth:`close`; stores never share notes, counters or storage handles.
    Every committed change is written through the persistence adapter right
    away and announced with :attr:`notes_changed`.

    Operations on unknown note IDs do nothing and raise nothing.  A failed
    write is logged, kept in :attr:`last_save_error` and announced with
    :attr:`save_failed`; the in-memory notes stay as they are.

    Args:
        adapter: Where the notes are loaded from and saved to
        geometry: Board geometry; defaults to a :data:`DEFAULT_VIEWPORT` board
        notes: Initial notes; when None they are loaded from ``adapter``

    """

    #: Emitted after every committed change to the notes.
    notes_changed = Signal()
    #: Emitted with an error message when a write fails.
    save_failed = Signal(str)

    def __init__(
        self,
        adapter: PersistenceAdapter,
        geometry: BoardGeometry | None = None,
        notes: Iterable[Note] | None = None,
    ) -> None:
        super().__init__()
        #: The persistence adapter.
        self.adapter = adapter
        #: The current board geometry.
        self.geometry = geometry or BoardGeometry(viewport=DEFAULT_VIEWPORT)
        loaded = adapter.load() if notes is None else list(notes)
        #: The notes, in insertion order.
        self._notes: list[Note] = [self._clamped(note) for note in loaded]
        #: The stacking-order allocator.
        self.zorder = ZOrderAllocator.from_notes(self._notes)
        #: Every ID used during this session, so deleted IDs are never reused.
        self._used_ids: set[str] = {note.id for note in self._notes}
        #: The error from the most recent failed write, if the last write failed.
        self.last_save_error: StorageWriteFailed | None = None
        #: Whether :meth:`close` has been called.
        self._closed = False

    @classmethod
    def from_settings(
        cls, settings: QSettings, viewport: Viewport = DEFAULT_VIEWPORT
    ) -> "NoteStore":
        """
        Build a store, its adapter and its geometry from one settings object.

        Args:
            settings: Settings holding both the configuration and the notes
            viewport: Current board size

        Returns:
            The store, with notes loaded from ``settings``

        """
        config = BoardConfig.from_settings(settings)
        geometry = BoardGeometry(
            viewport=viewport, footprint=config.footprint(), padding=config.padding
        )
        return cls(PersistenceAdapter.from_config(settings, config), geometry)

    def __len__(self) -> int:
        return len(self._notes)

    @property
    def notes(self) -> tuple[Note, ...]:
        """Snapshot of the notes, in insertion order."""
        return tuple(self._notes)

    def get(self, note_id: str) -> Note | None:
        """
        Get a note by ID.

        Args:
            note_id: Note ID

        Returns:
            Note or None if not found

        """
        index = self._index_of(note_id)
        return None if index is None else self._notes[index]

    def visible_notes(self, query: str | None = "") -> list[Note]:
        """
        Get the notes matching ``query`` in paint order.
        """
        return render_order(filter_notes(self._notes, query))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_note(self, color_key: str | None = None) -> Note | None:
        """
        Add a new note with the default title and an empty body.

        The note is placed at the next cascade position and stacked on top.

        Args:
            color_key: Palette key for the note; unknown keys use the first
                palette entry

        Returns:
            The new note, or None if the store is closed

        """
        if self._check_closed("add_note"):
            return None
        x, y = self.geometry.default_position(len(self._notes))
        note = Note(
            id=self._new_id(),
            title=DEFAULT_TITLE,
            body="",
            color_key=resolve_color_key(color_key),
            pinned=False,
            x=x,
            y=y,
            z=self.zorder.next(),
            created_at=now_ms(),
        )
        self._notes.append(note)
        self._commit()
        return note

    def update_note(self, note_id: str, fields: Mapping[str, Any]) -> None:
        """
        Merge ``fields`` into a note.

        Only the attributes in :data:`UPDATABLE_FIELDS` are merged; ``id`` and
        ``z`` cannot be changed this way.  Values are sanitized: text is cut
        to its length cap, colors resolve against the palette and positions
        are clamped to the board.

        Args:
            note_id: Note ID
            fields: Attribute names mapped to new values

        """
        if self._check_closed("update_note"):
            return
        index = self._index_of(note_id)
        if index is None:
            logger.debug("update_note: no note with ID %r", note_id)
            return
        note = self._notes[index]
        changes: dict[str, Any] = {}
        for name, value in fields.items():
            if name not in UPDATABLE_FIELDS:
                logger.debug("update_note: ignoring field %r", name)
                continue
            changes[name] = value
        if "title" in changes:
            changes["title"] = coerce_text(changes["title"], TITLE_MAX_LENGTH)
        if "body" in changes:
            changes["body"] = coerce_text(changes["body"], BODY_MAX_LENGTH)
        if "color_key" in changes:
            changes["color_key"] = resolve_color_key(changes["color_key"])
        if "pinned" in changes:
            changes["pinned"] = bool(changes["pinned"])
        if "created_at" in changes and not is_finite_number(changes["created_at"]):
            del changes["created_at"]
        if not changes:
            logger.debug("update_note: nothing to merge into %r", note_id)
            return
        if "x" in changes or "y" in changes:
            changes["x"], changes["y"] = self.geometry.clamp(
                changes.get("x", note.x), changes.get("y", note.y)
            )
        self._notes[index] = replace(note, **changes)
        self._commit()

    def move_note(self, note_id: str, dx: float, dy: float) -> None:
        """
        Move a note by a completed drag offset and bring it to the front.

        Pinned notes do not move.  Offsets under :data:`MOVE_THRESHOLD` on
        both axes are ignored, and so are non-finite offsets.

        Args:
            note_id: Note ID
            dx: Horizontal drag offset
            dy: Vertical drag offset

        """
        if self._check_closed("move_note"):
            return
        index = self._index_of(note_id)
        if index is None:
            logger.debug("move_note: no note with ID %r", note_id)
            return
        note = self._notes[index]
        if note.pinned:
            logger.debug("move_note: note %r is pinned", note_id)
            return
        if not (is_finite_number(dx) and is_finite_number(dy)):
            logger.debug("move_note: ignoring offset (%r, %r)", dx, dy)
            return
        if abs(dx) < MOVE_THRESHOLD and abs(dy) < MOVE_THRESHOLD:
            return
        x, y = self.geometry.clamp(note.x + dx, note.y + dy)
        self._notes[index] = replace(note, x=x, y=y, z=self.zorder.next())
        self._commit()

    def preview_move(
        self, note_id: str, dx: float, dy: float
    ) -> tuple[float, float] | None:
        """
        Get where :meth:`move_note` would put a note, without moving it.

        Args:
            note_id: Note ID
            dx: In-progress horizontal drag offset
            dy: In-progress vertical drag offset

        Returns:
            The clamped position, or None for unknown or pinned notes and
            non-finite offsets

        """
        note = self.get(note_id)
        if note is None or note.pinned:
            return None
        if not (is_finite_number(dx) and is_finite_number(dy)):
            return None
        return self.geometry.clamp(note.x + dx, note.y + dy)

    def delete_note(self, note_id: str) -> None:
        """
        Delete a note.

        Args:
            note_id: Note ID

        """
        if self._check_closed("delete_note"):
            return
        index = self._index_of(note_id)
        if index is None:
            logger.debug("delete_note: no note with ID %r", note_id)
            return
        del self._notes[index]
        self._commit()

    def toggle_pin(self, note_id: str) -> None:
        """
        Pin or unpin a note.  Either way the note comes to the front.

        Args:
            note_id: Note ID

        """
        if self._check_closed("toggle_pin"):
            return
        index = self._index_of(note_id)
        if index is None:
            logger.debug("toggle_pin: no note with ID %r", note_id)
            return
        note = self._notes[index]
        self._notes[index] = replace(
            note, pinned=not note.pinned, z=self.zorder.next()
        )
        self._commit()

    def bring_to_front(self, note_id: str) -> None:
        """
        Stack a note above every other note.

        Args:
            note_id: Note ID

        """
        if self._check_closed("bring_to_front"):
            return
        index = self._index_of(note_id)
        if index is None:
            logger.debug("bring_to_front: no note with ID %r", note_id)
            return
        self._notes[index] = replace(self._notes[index], z=self.zorder.next())
        self._commit()

    def change_color(self, note_id: str, color_key: str) -> None:
        """
        Change a note's color.

        Args:
            note_id: Note ID
            color_key: Palette key; unknown keys use the first palette entry

        """
        self.update_note(note_id, {"color_key": color_key})

    def resize(self, width: float, height: float) -> None:
        """
        Set the board size and pull every note back inside the new bounds.

        Running this repeatedly with the same size changes nothing after the
        first call.

        Args:
            width: Board width in pixels
            height: Board height in pixels

        """
        if self._check_closed("resize"):
            return
        self.geometry = self.geometry.with_viewport(Viewport(width=width, height=height))
        changed = False
        for index, note in enumerate(self._notes):
            clamped = self._clamped(note)
            if clamped is not note:
                self._notes[index] = clamped
                changed = True
        if changed:
            self._commit()

    def close(self) -> None:
        """
        Write the notes one last time and release the storage.

        Further calls to mutating operations are ignored.
        """
        if self._closed:
            return
        self._persist()
        self.adapter.close()
        self._closed = True
        logger.info("Closed board with %d notes", len(self._notes))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _index_of(self, note_id: str) -> int | None:
        for index, note in enumerate(self._notes):
            if note.id == note_id:
                return index
        return None

    def _new_id(self) -> str:
        note_id = f"note-{uuid.uuid4().hex[:12]}"
        while note_id in self._used_ids:
            note_id = f"note-{uuid.uuid4().hex[:12]}"
        self._used_ids.add(note_id)
        return note_id

    def _clamped(self, note: Note) -> Note:
        """Return ``note`` clamped to the board, or ``note`` itself if inside."""
        x, y = self.geometry.clamp(note.x, note.y)
        if (x, y) == (note.x, note.y):
            return note
        return replace(note, x=x, y=y)

    def _check_closed(self, operation: str) -> bool:
        if self._closed:
            logger.warning("%s called on a closed board; ignoring", operation)
        return self._closed

    def _commit(self) -> None:
        self._persist()
        self.notes_changed.emit()

    def _persist(self) -> None:
        try:
            self.adapter.save(self._notes)
        except StorageWriteFailed as e:
            logger.warning("Could not save notes: %s", e)
            self.last_save_error = e
            self.save_failed.emit(str(e))
        else:
            self.last_save_error = None
