"""Exceptions raised by the duplicate detection engine."""


class DupetreeError(Exception):
    """Base class for dupetree errors."""


class NotAFileError(DupetreeError):
    """A path does not reference a regular file."""

    def __init__(self, path, reason: str = "not a regular file"):
        self.path = path
        super().__init__(f"{path}: {reason}")


class HashComputationError(DupetreeError):
    """Reading a file's bytes failed while computing its fingerprint."""

    def __init__(self, path, cause: OSError):
        self.path = path
        super().__init__(f"Error hashing {path}: {cause}")


class DeletionError(DupetreeError):
    """A matched duplicate could not be removed."""

    def __init__(self, path, cause: OSError):
        self.path = path
        super().__init__(f"Error deleting {path}: {cause}")
