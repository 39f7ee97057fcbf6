from __future__ import annotations

import re

from result import Err, Ok, Result

from reclaim.services.system import System

_DRIVE_PATTERN = re.compile(r"[A-Za-z]")


def validate_drive(value: str) -> Result[str, str]:
    """Accept a single drive letter and return it upper-cased."""
    if _DRIVE_PATTERN.fullmatch(value) is None:
        return Err(f"Drive must be a single letter such as 'C', got {value!r}.")
    return Ok(value.upper())


def check_platform(platform: str) -> Result[None, str]:
    if platform != "win32":
        return Err("reclaim only runs on Windows.")
    return Ok(None)


def check_elevation(system: System) -> Result[None, str]:
    if not system.is_elevated():
        return Err("Administrator rights are required. Re-run from an elevated prompt.")
    return Ok(None)
