"""Matching context files against a target tree."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from dupetree.core.fingerprint import Fingerprint
from dupetree.core.scanner import anchor, relativize
from dupetree.errors import DeletionError, NotAFileError

logger = logging.getLogger(__name__)


class TargetIndex:
    """Target fingerprints, bucketed by file length.

    Looking up a candidate returns the target's own fingerprint. When several
    target files share the same content, the first one added represents them.
    """

    def __init__(self, fingerprints: Iterable[Fingerprint] = ()):
        self._entries: dict[Fingerprint, Fingerprint] = {}
        for fingerprint in fingerprints:
            self.add(fingerprint)

    def add(self, fingerprint: Fingerprint) -> Fingerprint:
        return self._entries.setdefault(fingerprint, fingerprint)

    def lookup(self, candidate: Fingerprint) -> Fingerprint | None:
        return self._entries.get(candidate)

    def __contains__(self, candidate) -> bool:
        return candidate in self._entries

    def __iter__(self) -> Iterator[Fingerprint]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class DuplicateGroup:
    """A target file and the context files sharing its content."""

    canonical: Path
    fingerprint: Fingerprint
    duplicates: list[Path] = field(default_factory=list)

    @property
    def members(self) -> list[Path]:
        return [self.canonical, *self.duplicates]

    @property
    def size(self) -> int:
        return self.fingerprint.length

    @property
    def wasted(self) -> int:
        return self.size * len(self.duplicates)


@dataclass(frozen=True)
class Removal:
    """One matched context file handled by remove_duplicates."""

    path: Path
    canonical: Path
    deleted: bool


def build_index(paths: Iterable[Path], working_dir: Path | None = None) -> TargetIndex:
    """Fingerprint every target path.

    Raises NotAFileError if a target path is no longer a regular file.
    """
    index = TargetIndex()
    for path in paths:
        index.add(Fingerprint(anchor(path, working_dir)))
    logger.debug("Indexed %d distinct target fingerprints", len(index))
    return index


def _candidate(path: Path, working_dir: Path | None) -> Fingerprint | None:
    try:
        return Fingerprint(anchor(path, working_dir))
    except NotAFileError as e:
        logger.debug("Skipping candidate %s", e)
        return None


def _matches(
    index: TargetIndex,
    context: Iterable[Path],
    working_dir: Path | None,
) -> Iterator[tuple[Path, Fingerprint, Fingerprint]]:
    for path in context:
        candidate = _candidate(path, working_dir)
        if candidate is None:
            continue
        original = index.lookup(candidate)
        if original is None:
            continue
        if candidate.path.resolve() == original.path.resolve():
            # same physical file reached from both trees
            continue
        yield path, candidate, original


def find_duplicates(
    index: TargetIndex,
    context: Iterable[Path],
    working_dir: Path | None = None,
) -> list[DuplicateGroup]:
    """Group context files by the target file they duplicate.

    Groups come out in order of their first match; duplicates within a group
    keep context order. Target files without any duplicate are left out.
    """
    groups: dict[Fingerprint, DuplicateGroup] = {}
    for path, _, original in _matches(index, context, working_dir):
        group = groups.get(original)
        if group is None:
            group = DuplicateGroup(relativize(original.path, working_dir), original)
            groups[original] = group
        group.duplicates.append(path)

    # a group only exists once its first duplicate is appended
    return list(groups.values())


def remove_duplicates(
    index: TargetIndex,
    context: Iterable[Path],
    debug: bool = False,
    working_dir: Path | None = None,
) -> Iterator[Removal]:
    """Delete every context file that duplicates a target file.

    This is a generator: each match is handled as the caller iterates, and a
    Removal is yielded after the file has been deleted. With ``debug`` nothing
    is deleted and each Removal reports the target file that would be kept.

    Raises DeletionError on the first file that cannot be removed. Files
    deleted before the failure stay deleted.
    """
    for path, candidate, original in _matches(index, context, working_dir):
        if not debug:
            try:
                candidate.path.unlink()
            except OSError as e:
                raise DeletionError(path, e) from e
            logger.debug("Deleted %s (duplicate of %s)", candidate.path, original.path)
        yield Removal(path, relativize(original.path, working_dir), deleted=not debug)
