from __future__ import annotations

import logging
from dataclasses import dataclass, field

from reclaim.services.fs import DEFAULT_FS, FileSystem

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TreeSize:
    size_bytes: int = 0
    files: int = 0
    access_errors: int = 0


@dataclass(slots=True)
class DeleteStats:
    removed: int = 0
    failed: list[str] = field(default_factory=list)


def measure_tree(path: str, fs: FileSystem = DEFAULT_FS) -> TreeSize:
    """Sum the size of every file beneath *path*.

    Missing paths and unreadable subtrees contribute 0 bytes; they are
    counted in ``access_errors`` but never stop the walk. Links and
    junctions are neither followed nor counted.
    """
    total = TreeSize()
    if not fs.exists(path):
        return total

    stack = [path]
    while stack:
        current = stack.pop()
        try:
            entries = list(fs.scandir(current))
        except OSError as exc:
            logger.debug("Cannot read %s: %s", current, exc)
            total.access_errors += 1
            continue
        for entry in entries:
            st = entry.stat
            if st is None:
                total.access_errors += 1
                continue
            if st.is_link:
                continue
            if st.is_dir:
                stack.append(entry.path)
            else:
                total.size_bytes += st.size
                total.files += 1
    return total


def delete_contents(path: str, fs: FileSystem = DEFAULT_FS) -> DeleteStats:
    """Delete everything beneath *path*, leaving *path* itself in place.

    Every entry is attempted once; entries that cannot be removed (locked,
    in use, access denied) are recorded in ``failed`` and skipped. Links and
    junctions are removed themselves, their targets are never touched.
    """
    stats = DeleteStats()
    try:
        entries = list(fs.scandir(path))
    except OSError as exc:
        logger.debug("Cannot list %s: %s", path, exc)
        stats.failed.append(path)
        return stats

    for entry in entries:
        st = entry.stat
        try:
            if st is not None and st.is_dir and not st.is_link:
                failed = fs.remove_tree(entry.path)
                if failed:
                    stats.failed.extend(failed)
                    continue
            else:
                fs.remove(entry.path)
            stats.removed += 1
        except OSError as exc:
            logger.debug("Cannot delete %s: %s", entry.path, exc)
            stats.failed.append(entry.path)
    return stats
