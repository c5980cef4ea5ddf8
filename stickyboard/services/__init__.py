"""Services package initialization."""

from stickyboard.services.persistence import (
    PersistenceAdapter,
    fallback_notes,
    normalize,
)
from stickyboard.services.search import filter_notes, render_order
from stickyboard.services.store import NoteStore
from stickyboard.services.zorder import ZOrderAllocator

__all__ = [
    "NoteStore",
    "PersistenceAdapter",
    "ZOrderAllocator",
    "fallback_notes",
    "filter_notes",
    "normalize",
    "render_order",
]
