"""Directory walking and tree materialization."""

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

logger = logging.getLogger(__name__)


def _canonical(path: Path) -> Path | None:
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        logger.debug("Skipping %s: %s", path, e)
        return None


def walk_files(root: Path) -> Iterator[Path]:
    """Yield canonical absolute paths of the regular files under root.

    If root is a file, yields it directly. Entries that cannot be resolved
    (broken symlinks, symlink loops, permission errors) are skipped; a
    missing root yields nothing.
    """
    root = Path(root)

    if root.is_file():
        resolved = _canonical(root)
        if resolved is not None:
            yield resolved
        return

    if not root.is_dir():
        logger.debug("Not a directory, nothing to walk: %s", root)
        return

    for path in sorted(root.rglob("*")):
        resolved = _canonical(path)
        if resolved is not None and resolved.is_file():
            yield resolved


def relativize(path: Path, working_dir: Path | None) -> Path:
    """Express path relative to working_dir when it lies beneath it."""
    if working_dir is None:
        return path
    try:
        return path.relative_to(working_dir)
    except ValueError:
        return path


def anchor(path: Path, working_dir: Path | None) -> Path:
    """Inverse of relativize: turn a materialized path back into a usable one."""
    if working_dir is None or path.is_absolute():
        return path
    return working_dir / path


def _materialize(root: Path, working_dir: Path | None) -> Iterator[Path]:
    if working_dir is not None:
        working_dir = Path(working_dir).resolve()
    for path in walk_files(root):
        yield relativize(path, working_dir)


def materialize_target(root: Path, working_dir: Path | None = None) -> set[Path]:
    """All files under the target root, canonicalized and relativized."""
    return set(_materialize(root, working_dir))


def materialize_context(
    root: Path,
    target_set: Iterable[Path],
    working_dir: Path | None = None,
) -> list[Path]:
    """All files under the context root that are not part of the target set.

    Order follows the walk; a file reached more than once (through symlinks)
    is listed only at its first occurrence.
    """
    excluded = target_set if isinstance(target_set, (set, frozenset)) else set(target_set)
    seen = set()
    context = []
    for path in _materialize(root, working_dir):
        if path in excluded or path in seen:
            continue
        seen.add(path)
        context.append(path)
    return context
