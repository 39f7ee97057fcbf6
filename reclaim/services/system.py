from __future__ import annotations

import ctypes
import logging
import subprocess
from typing import Protocol

from result import Err, Ok, Result

from reclaim.models.space import volume_root

logger = logging.getLogger(__name__)

SHERB_NOCONFIRMATION = 0x00000001
SHERB_NOPROGRESSUI = 0x00000002
SHERB_NOSOUND = 0x00000004
# Returned by SHEmptyRecycleBinW when the bin is already empty.
E_UNEXPECTED = 0x8000FFFF

# "service is not started" / "service has already been started"
_NET_ALREADY_STOPPED = "3521"
_NET_ALREADY_STARTED = "2182"


class System(Protocol):
    def is_elevated(self) -> bool: ...

    def stop_service(self, name: str) -> Result[None, str]: ...

    def start_service(self, name: str) -> Result[None, str]: ...

    def empty_recycle_bin(self, drive: str) -> Result[None, str]: ...

    def launch_detached(self, argv: list[str]) -> Result[None, str]: ...


def _net(verb: str, name: str, benign_code: str) -> Result[None, str]:
    try:
        proc = subprocess.run(
            ["net", verb, name],
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        return Err(f"Cannot run 'net {verb} {name}': {exc}")

    output = f"{proc.stdout}\n{proc.stderr}".strip()
    if proc.returncode == 0 or benign_code in output:
        logger.debug("net %s %s: %s", verb, name, output)
        return Ok(None)
    return Err(f"'net {verb} {name}' exited with {proc.returncode}: {output}")


class WindowsSystem:
    def is_elevated(self) -> bool:
        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())  # type: ignore[attr-defined]
        except (AttributeError, OSError):
            return False

    def stop_service(self, name: str) -> Result[None, str]:
        return _net("stop", name, _NET_ALREADY_STOPPED)

    def start_service(self, name: str) -> Result[None, str]:
        return _net("start", name, _NET_ALREADY_STARTED)

    def empty_recycle_bin(self, drive: str) -> Result[None, str]:
        flags = SHERB_NOCONFIRMATION | SHERB_NOPROGRESSUI | SHERB_NOSOUND
        try:
            hr = ctypes.windll.shell32.SHEmptyRecycleBinW(  # type: ignore[attr-defined]
                None, volume_root(drive), flags
            )
        except (AttributeError, OSError) as exc:
            return Err(f"SHEmptyRecycleBinW unavailable: {exc}")
        hr &= 0xFFFFFFFF
        if hr in (0, E_UNEXPECTED):
            return Ok(None)
        return Err(f"SHEmptyRecycleBinW returned 0x{hr:08X}")

    def launch_detached(self, argv: list[str]) -> Result[None, str]:
        flags = getattr(subprocess, "DETACHED_PROCESS", 0) | getattr(
            subprocess, "CREATE_NEW_PROCESS_GROUP", 0
        )
        try:
            subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                close_fds=True,
                creationflags=flags,
            )
        except (OSError, ValueError) as exc:
            return Err(f"Cannot launch {argv[0]}: {exc}")
        return Ok(None)


DEFAULT_SYSTEM: System = WindowsSystem()
