"""Shared pytest fixtures and test helpers for Sticky Board tests."""

import pytest
from PySide6.QtCore import QCoreApplication, QSettings

from stickyboard.geometry import BoardGeometry, Footprint, Viewport
from stickyboard.models.note import Note
from stickyboard.services.persistence import PersistenceAdapter
from stickyboard.services.store import NoteStore


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """Create a QCoreApplication instance for QObject signals and QSettings."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


@pytest.fixture
def settings(tmp_path):
    """Create a QSettings store backed by a temporary INI file."""
    settings = QSettings(str(tmp_path / "board.ini"), QSettings.Format.IniFormat)
    yield settings
    settings.clear()
    settings.sync()


@pytest.fixture
def adapter(settings):
    """Create a PersistenceAdapter on the temporary settings."""
    return PersistenceAdapter(settings)


@pytest.fixture
def geometry():
    """An 800x600 board with 260x220 notes and 10px padding."""
    return BoardGeometry(
        viewport=Viewport(width=800, height=600),
        footprint=Footprint(width=260, height=220),
        padding=10,
    )


@pytest.fixture
def store(adapter, geometry):
    """Create an empty NoteStore on an 800x600 board."""
    store = NoteStore(adapter, geometry, notes=[])
    yield store
    store.close()


def _make_note(note_id="n1", **fields):
    """
    Helper to create a note with defaults.

    Args:
        note_id: Note ID
        **fields: Attribute overrides

    Returns:
        Created Note instance
    """
    values = {
        "title": "Title",
        "body": "Body",
        "color_key": "sunflower",
        "pinned": False,
        "x": 24.0,
        "y": 24.0,
        "z": 1,
        "created_at": 0,
    }
    values.update(fields)
    return Note(id=note_id, **values)


@pytest.fixture
def make_note():
    """Factory for notes with test defaults."""
    return _make_note
