"""Lazily hashed file fingerprints."""

import logging
import os
import stat
from pathlib import Path

from dupetree.core.hasher import sampled_hash
from dupetree.errors import HashComputationError, NotAFileError

logger = logging.getLogger(__name__)


class Fingerprint:
    """Content identity of a single file.

    A fingerprint is the file's length plus a SHA-256 digest of its sampled
    contents. The digest is computed on first comparison and then kept for
    the lifetime of the object, even if the file changes on disk afterwards.

    ``hash()`` only reflects the length, so fingerprints can be bucketed in a
    dict or set without reading any file. Two fingerprints are equal when
    their lengths and digests match, which keeps ``a == b`` implying
    ``hash(a) == hash(b)``.
    """

    __slots__ = ("_path", "_length", "_hash", "_hashing")

    def __init__(self, path: Path | str):
        path = Path(path)
        try:
            st = path.stat()
        except OSError as e:
            raise NotAFileError(path, e.strerror or str(e)) from e

        if not stat.S_ISREG(st.st_mode):
            raise NotAFileError(path)

        self._path = path
        self._length = st.st_size
        self._hash: bytes | None = None
        self._hashing = False

    @classmethod
    def from_path(cls, path: Path | str) -> "Fingerprint":
        return cls(path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def length(self) -> int:
        return self._length

    @property
    def bucket_key(self) -> int:
        return self._length

    @property
    def is_hashed(self) -> bool:
        """Whether the content digest has been computed yet."""
        return self._hash is not None

    @property
    def content_hash(self) -> bytes:
        """The sampled content digest, computed once on first access."""
        if self._hash is None:
            if self._hashing:
                raise RuntimeError(f"Re-entrant hash computation for {self._path}")
            self._hashing = True
            try:
                logger.debug("Hashing %s (%d bytes)", self._path, self._length)
                self._hash = sampled_hash(self._path, self._length)
            except OSError as e:
                raise HashComputationError(self._path, e) from e
            finally:
                self._hashing = False
        return self._hash

    def __eq__(self, other):
        if not isinstance(other, Fingerprint):
            return NotImplemented
        if self is other:
            return True
        return self._length == other._length and self.content_hash == other.content_hash

    def __hash__(self):
        return hash(self._length)

    def __repr__(self):
        return f"Fingerprint({os.fspath(self._path)!r}, length={self._length})"
