"""Board configuration stored in QSettings."""

from dataclasses import dataclass
from typing import Final, cast

from PySide6.QtCore import QSettings

from stickyboard.geometry import (
    DEFAULT_NOTE_HEIGHT,
    DEFAULT_NOTE_WIDTH,
    DEFAULT_PADDING,
    Footprint,
)

#: Default settings key holding the serialized notes.
DEFAULT_STORAGE_KEY: Final[str] = "stickyboard/notes"
#: Default upper bound on the serialized notes, in bytes.
DEFAULT_QUOTA_BYTES: Final[int] = 5 * 1024 * 1024


@dataclass(frozen=True)
class BoardConfig:
    """Tunable board settings."""

    #: Settings key the notes are stored under.
    storage_key: str = DEFAULT_STORAGE_KEY
    #: Gap between notes and the board edge, in pixels.
    padding: float = DEFAULT_PADDING
    #: Nominal note width, in pixels.
    note_width: float = DEFAULT_NOTE_WIDTH
    #: Nominal note height, in pixels.
    note_height: float = DEFAULT_NOTE_HEIGHT
    #: Largest serialized payload the store will write, in bytes.
    quota_bytes: int = DEFAULT_QUOTA_BYTES

    @classmethod
    def from_settings(cls, settings: QSettings) -> "BoardConfig":
        """
        Read the board configuration from ``settings``.

        Missing keys fall back to the defaults.

        Args:
            settings: Settings to read from

        Returns:
            The configuration

        """
        return cls(
            storage_key=cast(
                "str",
                settings.value("board/storage_key", DEFAULT_STORAGE_KEY, type=str),
            )
            or DEFAULT_STORAGE_KEY,
            padding=cast(
                "float", settings.value("board/padding", DEFAULT_PADDING, type=float)
            ),
            note_width=cast(
                "float",
                settings.value("board/note_width", DEFAULT_NOTE_WIDTH, type=float),
            ),
            note_height=cast(
                "float",
                settings.value("board/note_height", DEFAULT_NOTE_HEIGHT, type=float),
            ),
            quota_bytes=cast(
                "int",
                settings.value("board/quota_bytes", DEFAULT_QUOTA_BYTES, type=int),
            ),
        )

    def footprint(self) -> Footprint:
        """Get the nominal note footprint."""
        return Footprint(width=self.note_width, height=self.note_height)
