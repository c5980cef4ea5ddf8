class StorageWriteFailed(Exception):  # noqa: N818
    """Exception raised when the note collection could not be written."""

    def __init__(self, error: Exception | str, key: str):
        self.error = error
        self.key = key
        super().__init__(f'Storage write to "{key}" failed: {error!s}')


class InvalidNoteRecord(Exception):  # noqa: N818
    """Exception describing a stored note record that could not be loaded."""

    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Note record {index} is invalid: {reason}")
