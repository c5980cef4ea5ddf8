"""Note color palette."""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class PaletteEntry:
    """A selectable note color theme."""

    #: The stored key for the theme.
    key: str
    #: The human-readable label.
    label: str
    #: Note background color.
    surface: str
    #: Note border color.
    border: str
    #: Accent color for controls.
    accent: str
    #: Drop shadow color.
    shadow: str
    #: Color of the tape strip on top of the note.
    tape: str


#: The fixed, ordered palette.  The first entry is the default.
PALETTE: Final[tuple[PaletteEntry, ...]] = (
    PaletteEntry(
        key="sunflower",
        label="Sunflower",
        surface="#fff3b0",
        border="#f2d55c",
        accent="#b8860b",
        shadow="rgba(184, 134, 11, 0.28)",
        tape="rgba(255, 255, 255, 0.55)",
    ),
    PaletteEntry(
        key="mint",
        label="Mint",
        surface="#d4f5e4",
        border="#8fd9b6",
        accent="#2e8b57",
        shadow="rgba(46, 139, 87, 0.26)",
        tape="rgba(255, 255, 255, 0.55)",
    ),
    PaletteEntry(
        key="sky",
        label="Sky",
        surface="#d6ebff",
        border="#94c5f5",
        accent="#2f6fb3",
        shadow="rgba(47, 111, 179, 0.26)",
        tape="rgba(255, 255, 255, 0.5)",
    ),
    PaletteEntry(
        key="blush",
        label="Blush",
        surface="#ffdbe4",
        border="#f5a3b8",
        accent="#c2416b",
        shadow="rgba(194, 65, 107, 0.24)",
        tape="rgba(255, 255, 255, 0.5)",
    ),
    PaletteEntry(
        key="lavender",
        label="Lavender",
        surface="#e8defc",
        border="#bda6f0",
        accent="#6a4bb8",
        shadow="rgba(106, 75, 184, 0.24)",
        tape="rgba(255, 255, 255, 0.5)",
    ),
    PaletteEntry(
        key="peach",
        label="Peach",
        surface="#ffe2cc",
        border="#f7b48a",
        accent="#c4622d",
        shadow="rgba(196, 98, 45, 0.24)",
        tape="rgba(255, 255, 255, 0.55)",
    ),
)

#: Key of the default palette entry.
DEFAULT_COLOR_KEY: Final[str] = PALETTE[0].key

_BY_KEY: Final[dict[str, PaletteEntry]] = {entry.key: entry for entry in PALETTE}


def is_valid_color_key(value: object) -> bool:
    """Check whether ``value`` names a palette entry."""
    return isinstance(value, str) and value in _BY_KEY


def resolve_color_key(value: object) -> str:
    """
    Resolve ``value`` to a palette key.

    Args:
        value: Candidate color key, possibly from untrusted storage

    Returns:
        ``value`` if it names a palette entry, otherwise the first palette key

    """
    if is_valid_color_key(value):
        return value  # type: ignore[return-value]
    return DEFAULT_COLOR_KEY


def get_palette_entry(key: object) -> PaletteEntry:
    """
    Get the palette entry for ``key``, falling back to the first entry.
    """
    return _BY_KEY[resolve_color_key(key)]
