"""Bounded content hashing for fingerprints."""

import hashlib
from pathlib import Path

WINDOW_SIZE = 0x0080_0000  # 8 MiB


def sampled_hash(path: Path, length: int) -> bytes:
    """SHA-256 over the first and last WINDOW_SIZE bytes of a file.

    Files no larger than WINDOW_SIZE are hashed in full. For larger files the
    suffix window is ``min(WINDOW_SIZE, length - WINDOW_SIZE)`` bytes, so the
    two windows never overlap. Both windows feed the same accumulator, prefix
    first.
    """
    h = hashlib.sha256()

    with open(path, "rb") as f:
        h.update(f.read(WINDOW_SIZE))
        if length > WINDOW_SIZE:
            remaining = min(WINDOW_SIZE, length - WINDOW_SIZE)
            f.seek(-remaining, 2)
            h.update(f.read(remaining))

    return h.digest()
