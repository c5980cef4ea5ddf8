"""Persistence of the note collection in QSettings."""

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from PySide6.QtCore import QByteArray, QSettings

from stickyboard.config import DEFAULT_QUOTA_BYTES, DEFAULT_STORAGE_KEY, BoardConfig
from stickyboard.exc import StorageWriteFailed
from stickyboard.geometry import default_position
from stickyboard.models.note import Note, explicit_id
from stickyboard.models.palette import PALETTE

logger = logging.getLogger(__name__)

_SEED_CONTENT: tuple[tuple[str, str, str], ...] = (
    (
        "Welcome to your board",
        "Add a note, type away, and drag it anywhere on the board. "
        "Everything is saved as you go.",
        PALETTE[0].key,
    ),
    (
        "Pin what matters",
        "Pinned notes stay put and always sit above the rest. "
        "Click the pin again to let a note move.",
        PALETTE[1].key,
    ),
    (
        "Find things fast",
        "Search matches note titles and bodies, ignoring case.",
        PALETTE[2].key,
    ),
)


def fallback_notes() -> list[Note]:
    """
    Build the notes shown on a board with no usable saved state.

    A new list of new notes is built on every call, so changes to one result
    never show up in another.
    """
    notes = []
    for index, (title, body, color_key) in enumerate(_SEED_CONTENT):
        x, y = default_position(index)
        notes.append(
            Note(
                id=f"seed-{index + 1}",
                title=title,
                body=body,
                color_key=color_key,
                pinned=False,
                x=x,
                y=y,
                z=index + 1,
                created_at=index,
            )
        )
    return notes


def normalize(raw: Iterable[Any]) -> list[Note]:
    """
    Turn decoded stored records into notes.

    Each record goes through :meth:`Note.from_json`.  Records that are
    rejected, and records repeating an explicit ID already seen, are dropped
    without affecting the rest.  Records without an ID get a placeholder that
    never takes an ID stored on another record.

    Args:
        raw: Records decoded from storage

    Returns:
        The usable notes, in stored order

    """
    records = list(raw)
    stored_ids = {
        explicit_id(record.get("id"))
        for record in records
        if isinstance(record, Mapping)
    }
    stored_ids.discard(None)
    notes: list[Note] = []
    seen: set[str] = set()
    for index, record in enumerate(records):
        result = Note.from_json(record, index)
        note = result.note
        if note is None:
            logger.warning("Dropping stored note: %s", result.error)
            continue
        if explicit_id(record.get("id")) is None:
            note_id = note.id
            suffix = 2
            while note_id in stored_ids or note_id in seen:
                note_id = f"{note.id}-{suffix}"
                suffix += 1
            note = replace(note, id=note_id)
        elif note.id in seen:
            logger.warning("Dropping stored note %d: duplicate ID %r", index, note.id)
            continue
        seen.add(note.id)
        notes.append(note)
    return notes


class PersistenceAdapter:
    """
    Reads and writes the note collection as one JSON entry in QSettings.

    Args:
        settings: Settings store to use
        key: Settings key holding the notes
        quota_bytes: Largest payload :meth:`save` will write

    """

    def __init__(
        self,
        settings: QSettings,
        key: str = DEFAULT_STORAGE_KEY,
        quota_bytes: int = DEFAULT_QUOTA_BYTES,
    ) -> None:
        #: The settings store.
        self.settings = settings
        #: The key the notes are stored under.
        self.key = key
        #: The largest payload we will write, in bytes.
        self.quota_bytes = quota_bytes

    @classmethod
    def from_config(
        cls, settings: QSettings, config: BoardConfig
    ) -> "PersistenceAdapter":
        """Build an adapter using the key and quota from ``config``."""
        return cls(settings, key=config.storage_key, quota_bytes=config.quota_bytes)

    def save(self, notes: Iterable[Note]) -> None:
        """
        Write the full note collection.

        Args:
            notes: Every note on the board

        Raises:
            StorageWriteFailed: The notes could not be serialized, the payload
                is over quota, or the settings store could not be written

        """
        try:
            payload = json.dumps(
                [note.to_json() for note in notes],
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError) as e:
            raise StorageWriteFailed(e, self.key) from e
        size = len(payload.encode("utf-8"))
        if size > self.quota_bytes:
            msg = f"payload of {size} bytes exceeds quota of {self.quota_bytes} bytes"
            raise StorageWriteFailed(msg, self.key)
        self.settings.setValue(self.key, payload)
        self.settings.sync()
        # FormatError is sticky from reading a malformed file; the write itself
        # only fails with AccessError.
        status = self.settings.status()
        if status == QSettings.Status.AccessError:
            raise StorageWriteFailed(f"settings status {status.name}", self.key)

    def read_raw(self) -> Any:
        """
        Read and decode the stored entry.

        Returns:
            The decoded JSON value, or None if the entry is missing or is not
            valid JSON

        """
        value = self.settings.value(self.key)
        if value is None:
            return None
        if isinstance(value, QByteArray):
            value = bytes(value.data()).decode("utf-8", errors="replace")
        elif isinstance(value, bytes):
            value = value.decode("utf-8", errors="replace")
        if not isinstance(value, str):
            logger.warning(
                "Stored notes under %r are not text (%s)", self.key, type(value).__name__
            )
            return None
        try:
            return json.loads(value)
        except json.JSONDecodeError as e:
            logger.warning("Stored notes under %r are not valid JSON: %s", self.key, e)
            return None

    def load(self) -> list[Note]:
        """
        Load the note collection.

        Missing, unreadable or empty state never raises; it resolves to
        :func:`fallback_notes`.

        Returns:
            The stored notes, or a fresh copy of the fallback notes

        """
        raw = self.read_raw()
        if not isinstance(raw, list):
            if raw is not None:
                logger.warning(
                    "Stored notes under %r are not a list; using fallback notes",
                    self.key,
                )
            return fallback_notes()
        notes = normalize(raw)
        if not notes:
            logger.info("No usable stored notes under %r; using fallback notes", self.key)
            return fallback_notes()
        logger.info("Loaded %d notes from %r", len(notes), self.key)
        return notes

    def clear(self) -> None:
        """Remove the stored entry."""
        self.settings.remove(self.key)
        self.settings.sync()

    def close(self) -> None:
        """Flush pending settings writes to disk."""
        self.settings.sync()
