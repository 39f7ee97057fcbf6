from __future__ import annotations

import logging
import ntpath
import os
from collections.abc import Mapping
from dataclasses import dataclass

from reclaim.config.schema import AppConfig
from reclaim.models.location import LocationEntry

FALLBACK_DRIVE = "C"

logger = logging.getLogger(__name__)


def default_config() -> AppConfig:
    return AppConfig()


@dataclass(slots=True, frozen=True)
class LocationTable:
    system_temp: LocationEntry
    user_temp: LocationEntry
    recycle_bin: LocationEntry
    update_cache: LocationEntry
    logs: LocationEntry
    prefetch: LocationEntry
    extra_temp: tuple[LocationEntry, ...] = ()

    @property
    def entries(self) -> tuple[LocationEntry, ...]:
        """All locations in display order."""
        return (
            self.system_temp,
            self.user_temp,
            self.recycle_bin,
            self.update_cache,
            self.logs,
            self.prefetch,
            *self.extra_temp,
        )

    @property
    def temp_dirs(self) -> tuple[LocationEntry, ...]:
        return (self.system_temp, self.user_temp, *self.extra_temp)


def system_drive(env: Mapping[str, str] | None = None) -> str:
    """Letter of the volume Windows is installed on, e.g. ``"C"``."""
    env = os.environ if env is None else env
    raw = env.get("SystemDrive", "").strip().rstrip(":\\/")
    if len(raw) == 1 and raw.isalpha():
        return raw.upper()
    return FALLBACK_DRIVE


def _system_root(drive: str, env: Mapping[str, str]) -> str:
    raw = env.get("SystemRoot") or env.get("WINDIR")
    _, tail = ntpath.splitdrive(raw or "")
    if not tail:
        return f"{drive}:\\Windows"
    return f"{drive}:{tail}"


def _user_temp(drive: str, env: Mapping[str, str]) -> str:
    temp = env.get("TEMP") or env.get("TMP")
    if temp:
        return temp
    profile = env.get("USERPROFILE") or f"{drive}:\\Users\\Default"
    return ntpath.join(profile, "AppData", "Local", "Temp")


def _usable_temp_paths(paths: list[str]) -> list[str]:
    """Keep absolute, drive-qualified paths that are not a bare volume root."""
    usable: list[str] = []
    for path in paths:
        drive_part, tail = ntpath.splitdrive(path)
        if not drive_part or not ntpath.isabs(path):
            logger.warning("Ignoring additional temp path %r: not an absolute path", path)
            continue
        if not tail.strip("\\/"):
            logger.warning("Ignoring additional temp path %r: a volume root", path)
            continue
        usable.append(path)
    return usable


def default_locations(
    drive: str,
    config: AppConfig | None = None,
    env: Mapping[str, str] | None = None,
) -> LocationTable:
    env = os.environ if env is None else env
    config = config or default_config()
    drive = drive.upper()
    root = _system_root(drive, env)

    return LocationTable(
        system_temp=LocationEntry("Windows Temp", ntpath.join(root, "Temp")),
        user_temp=LocationEntry("User Temp", _user_temp(drive, env)),
        recycle_bin=LocationEntry("Recycle Bin", f"{drive}:\\$Recycle.Bin"),
        update_cache=LocationEntry(
            "Windows Update", ntpath.join(root, "SoftwareDistribution", "Download")
        ),
        logs=LocationEntry("Windows Logs", ntpath.join(root, "Logs")),
        prefetch=LocationEntry("Prefetch", ntpath.join(root, "Prefetch")),
        extra_temp=tuple(
            LocationEntry(f"Extra Temp {idx}", path)
            for idx, path in enumerate(_usable_temp_paths(config.additional_temp_paths), start=1)
        ),
    )
