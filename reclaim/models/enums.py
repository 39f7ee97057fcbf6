from __future__ import annotations

from enum import Enum


class Operation(str, Enum):
    ALL = "All"
    TEMP_FILES = "TempFiles"
    WINDOWS_UPDATE = "WindowsUpdate"
    RECYCLE_BIN = "RecycleBin"
    SYSTEM_CLEANUP = "SystemCleanup"
    ANALYZE = "Analyze"


class Action(str, Enum):
    ANALYZE = "analyze"
    TEMP_FILES = "temp_files"
    WINDOWS_UPDATE = "windows_update"
    RECYCLE_BIN = "recycle_bin"
    SYSTEM_CLEANUP = "system_cleanup"
