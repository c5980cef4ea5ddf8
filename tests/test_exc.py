"""Unit tests for custom exceptions."""

from stickyboard.exc import InvalidNoteRecord, StorageWriteFailed


class TestStorageWriteFailed:
    """Test cases for StorageWriteFailed exception."""

    def test_creates_exception_with_error_and_key(self):
        """Test creates exception with the underlying error and storage key."""
        error = OSError("disk full")
        exc = StorageWriteFailed(error, "stickyboard/notes")
        assert exc.error is error
        assert exc.key == "stickyboard/notes"
        assert "stickyboard/notes" in str(exc)
        assert "disk full" in str(exc)

    def test_accepts_message(self):
        """Test a plain message can stand in for the error."""
        exc = StorageWriteFailed("quota exceeded", "k")
        assert "quota exceeded" in str(exc)

    def test_inherits_from_exception(self):
        """Test exception inherits from Exception."""
        assert isinstance(StorageWriteFailed("x", "k"), Exception)


class TestInvalidNoteRecord:
    """Test cases for InvalidNoteRecord exception."""

    def test_creates_exception_with_index_and_reason(self):
        """Test creates exception with record index and reason."""
        exc = InvalidNoteRecord(4, "expected an object, got list")
        assert exc.index == 4
        assert exc.reason == "expected an object, got list"
        assert "4" in str(exc)
        assert "expected an object" in str(exc)

    def test_inherits_from_exception(self):
        """Test exception inherits from Exception."""
        assert isinstance(InvalidNoteRecord(0, "bad"), Exception)
