from __future__ import annotations

import os
import shutil
import stat as statmod
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Protocol

# Directory junctions (mount points) and symlinks; other reparse points
# such as cloud placeholders are ordinary files.
_LINK_REPARSE_TAGS = {
    getattr(statmod, "IO_REPARSE_TAG_MOUNT_POINT", 0xA0000003),
    getattr(statmod, "IO_REPARSE_TAG_SYMLINK", 0xA000000C),
}


@dataclass(slots=True, frozen=True)
class StatResult:
    size: int
    is_dir: bool
    is_link: bool = False


@dataclass(slots=True, frozen=True)
class DirEntry:
    path: str
    name: str
    stat: StatResult | None = None


@dataclass(slots=True, frozen=True)
class DiskUsage:
    total: int
    used: int
    free: int


class FileSystem(Protocol):
    def expanduser(self, path: str) -> str: ...

    def exists(self, path: str) -> bool: ...

    def stat(self, path: str) -> StatResult: ...

    def scandir(self, path: str) -> Iterable[DirEntry]: ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str: ...

    def remove(self, path: str) -> None: ...

    def remove_tree(self, path: str) -> list[str]:
        """Delete directory *path* and everything in it without following links.

        Returns the paths that could not be removed.
        """
        ...

    def disk_usage(self, path: str) -> DiskUsage: ...


def _stat_result(st: os.stat_result) -> StatResult:
    is_link = statmod.S_ISLNK(st.st_mode) or getattr(st, "st_reparse_tag", 0) in _LINK_REPARSE_TAGS
    return StatResult(
        size=st.st_size,
        is_dir=statmod.S_ISDIR(st.st_mode) and not is_link,
        is_link=is_link,
    )


def _clear_readonly(path: str) -> None:
    os.chmod(path, statmod.S_IWRITE | statmod.S_IREAD)


class OsFileSystem:
    def expanduser(self, path: str) -> str:
        return str(Path(path).expanduser())

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def stat(self, path: str) -> StatResult:
        return _stat_result(os.stat(path, follow_symlinks=False))

    def scandir(self, path: str) -> Iterable[DirEntry]:
        # Hidden and system entries are listed like any other.
        with os.scandir(path) as entries:
            for e in entries:
                try:
                    sr = _stat_result(e.stat(follow_symlinks=False))
                except OSError:
                    sr = None
                yield DirEntry(path=e.path, name=e.name, stat=sr)

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        return Path(path).read_text(encoding=encoding)

    def remove(self, path: str) -> None:
        # Removes a link or junction itself, never its target.
        try:
            os.remove(path)
        except PermissionError:
            _clear_readonly(path)
            os.remove(path)

    def remove_tree(self, path: str) -> list[str]:
        failed: list[str] = []

        def on_error(func: Any, failed_path: str, _exc: Any) -> None:
            if func in (os.remove, os.unlink, os.rmdir):
                try:
                    _clear_readonly(failed_path)
                    func(failed_path)
                    return
                except OSError:
                    pass
            failed.append(failed_path)

        if sys.version_info >= (3, 12):
            shutil.rmtree(path, onexc=on_error)
        else:
            shutil.rmtree(path, onerror=on_error)
        return failed

    def disk_usage(self, path: str) -> DiskUsage:
        usage = shutil.disk_usage(path)
        return DiskUsage(total=usage.total, used=usage.used, free=usage.free)


DEFAULT_FS: FileSystem = OsFileSystem()
