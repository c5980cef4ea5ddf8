"""Data models for Sticky Board."""

from stickyboard.models.note import Note, NoteParseResult
from stickyboard.models.palette import PALETTE, PaletteEntry

__all__ = ["PALETTE", "Note", "NoteParseResult", "PaletteEntry"]
