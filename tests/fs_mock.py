from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

from result import Ok, Result

from reclaim.config.defaults import LocationTable
from reclaim.models.location import LocationEntry
from reclaim.services.fs import DirEntry, DiskUsage, StatResult


@dataclass
class _MockEntry:
    is_dir: bool
    size: int
    content: str
    is_link: bool = False


class MemoryFileSystem:
    def __init__(self) -> None:
        self._entries: dict[str, _MockEntry] = {}
        self._volumes: dict[str, DiskUsage] = {}
        self._locked: set[str] = set()
        self._unreadable: set[str] = set()
        self.calls: list[tuple[str, str]] = []

    def add_dir(self, path: str) -> MemoryFileSystem:
        self._add_parents(self._normalize(path))
        self._entries[self._normalize(path)] = _MockEntry(is_dir=True, size=0, content="")
        return self

    def add_file(self, path: str, size: int = 0, content: str = "") -> MemoryFileSystem:
        key = self._normalize(path)
        self._add_parents(key)
        self._entries[key] = _MockEntry(is_dir=False, size=size, content=content)
        return self

    def add_link(self, path: str, size: int = 0) -> MemoryFileSystem:
        """Add a symlink or junction; its target is outside the mock and never visible."""
        key = self._normalize(path)
        self._add_parents(key)
        self._entries[key] = _MockEntry(is_dir=False, size=size, content="", is_link=True)
        return self

    def add_volume(self, root: str, total: int, used: int, free: int) -> MemoryFileSystem:
        self._volumes[root] = DiskUsage(total=total, used=used, free=free)
        return self

    def lock(self, path: str) -> MemoryFileSystem:
        """Make *path* impossible to delete, like a file held open by another process."""
        self._locked.add(self._normalize(path))
        return self

    def deny(self, path: str) -> MemoryFileSystem:
        """Make listing directory *path* fail with access denied."""
        self._unreadable.add(self._normalize(path))
        return self

    def paths_under(self, path: str) -> list[str]:
        prefix = self._normalize(path) + "/"
        return sorted(p for p in self._entries if p.startswith(prefix))

    def expanduser(self, path: str) -> str:
        self.calls.append(("expanduser", path))
        return path.replace("~", "/mock/home")

    def exists(self, path: str) -> bool:
        self.calls.append(("exists", path))
        return path in self._volumes or self._normalize(path) in self._entries

    def stat(self, path: str) -> StatResult:
        self.calls.append(("stat", path))
        entry = self._entries.get(self._normalize(path))
        if entry is None:
            raise OSError(f"No such file or directory: '{path}'")
        return StatResult(size=entry.size, is_dir=entry.is_dir, is_link=entry.is_link)

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        self.calls.append(("read_text", path))
        entry = self._entries.get(self._normalize(path))
        if entry is None:
            raise OSError(f"No such file or directory: '{path}'")
        return entry.content

    def scandir(self, path: str) -> list[DirEntry]:
        self.calls.append(("scandir", path))
        key = self._normalize(path)
        if key in self._unreadable:
            raise PermissionError(f"Access is denied: '{key}'")
        entry = self._entries.get(key)
        if entry is None:
            raise OSError(f"No such file or directory: '{key}'")
        prefix = key + "/"
        result: list[DirEntry] = []
        for p, mock in self._entries.items():
            if not p.startswith(prefix) or "/" in p[len(prefix) :]:
                continue
            result.append(
                DirEntry(
                    path=p,
                    name=p[len(prefix) :],
                    stat=StatResult(size=mock.size, is_dir=mock.is_dir, is_link=mock.is_link),
                )
            )
        return result

    def remove(self, path: str) -> None:
        self.calls.append(("remove", path))
        key = self._normalize(path)
        entry = self._entries.get(key)
        if entry is None:
            raise FileNotFoundError(key)
        if entry.is_dir:
            raise IsADirectoryError(key)
        if key in self._locked:
            raise PermissionError(f"The process cannot access the file: '{key}'")
        del self._entries[key]

    def remove_tree(self, path: str) -> list[str]:
        self.calls.append(("remove_tree", path))
        key = self._normalize(path)
        entry = self._entries.get(key)
        if entry is None or not entry.is_dir:
            return [key]
        failed: list[str] = []
        self._remove_tree(key, failed)
        return failed

    def disk_usage(self, path: str) -> DiskUsage:
        self.calls.append(("disk_usage", path))
        usage = self._volumes.get(path)
        if usage is None:
            raise FileNotFoundError(path)
        return usage

    def _remove_tree(self, key: str, failed: list[str]) -> None:
        if key in self._unreadable:
            failed.append(key)
            return
        prefix = key + "/"
        children = [p for p in self._entries if p.startswith(prefix) and "/" not in p[len(prefix) :]]
        for child in children:
            mock = self._entries[child]
            if mock.is_dir:
                self._remove_tree(child, failed)
            elif child in self._locked:
                failed.append(child)
            else:
                del self._entries[child]
        if key in self._locked or self.paths_under(key):
            failed.append(key)
        else:
            del self._entries[key]

    def _add_parents(self, key: str) -> None:
        for parent in reversed(PurePosixPath(key).parents):
            pk = str(parent)
            if pk not in self._entries:
                self._entries[pk] = _MockEntry(is_dir=True, size=0, content="")

    @staticmethod
    def _normalize(path: str) -> str:
        return path.rstrip("/") or "/"


class FakeSystem:
    def __init__(
        self,
        *,
        elevated: bool = True,
        stop: Result[None, str] | Exception = Ok(None),
        start: Result[None, str] | Exception = Ok(None),
        empty: Result[None, str] | Exception = Ok(None),
        launch: Result[None, str] | Exception = Ok(None),
    ) -> None:
        self.elevated = elevated
        self._results = {"stop": stop, "start": start, "empty": empty, "launch": launch}
        self.calls: list[tuple[str, object]] = []

    def _respond(self, name: str, arg: object) -> Result[None, str]:
        self.calls.append((name, arg))
        outcome = self._results[name]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def is_elevated(self) -> bool:
        self.calls.append(("is_elevated", None))
        return self.elevated

    def stop_service(self, name: str) -> Result[None, str]:
        return self._respond("stop", name)

    def start_service(self, name: str) -> Result[None, str]:
        return self._respond("start", name)

    def empty_recycle_bin(self, drive: str) -> Result[None, str]:
        return self._respond("empty", drive)

    def launch_detached(self, argv: list[str]) -> Result[None, str]:
        return self._respond("launch", argv)


def posix_locations(root: str = "/win") -> LocationTable:
    """A location table rooted at *root*, laid out like a Windows install."""
    return LocationTable(
        system_temp=LocationEntry("Windows Temp", f"{root}/Windows/Temp"),
        user_temp=LocationEntry("User Temp", f"{root}/Users/me/AppData/Local/Temp"),
        recycle_bin=LocationEntry("Recycle Bin", f"{root}/$Recycle.Bin"),
        update_cache=LocationEntry("Windows Update", f"{root}/Windows/SoftwareDistribution/Download"),
        logs=LocationEntry("Windows Logs", f"{root}/Windows/Logs"),
        prefetch=LocationEntry("Prefetch", f"{root}/Windows/Prefetch"),
    )
