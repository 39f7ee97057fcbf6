from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from result import Result


@dataclass(slots=True, frozen=True)
class SpaceSnapshot:
    total_bytes: int
    used_bytes: int
    free_bytes: int

    @property
    def percent_used(self) -> float:
        capacity = self.used_bytes + self.free_bytes
        if capacity <= 0:
            return 0.0
        return round(self.used_bytes / capacity * 100, 2)


class VolumeErrorCode(str, Enum):
    NOT_FOUND = "not_found"
    QUERY_FAILED = "query_failed"


@dataclass(slots=True, frozen=True)
class VolumeError:
    code: VolumeErrorCode
    drive: str
    message: str


SpaceResult = Result[SpaceSnapshot, VolumeError]


def volume_root(drive: str) -> str:
    return f"{drive.upper()}:\\"
