from __future__ import annotations

from dataclasses import dataclass, field

GIB = 1024**3


def bytes_to_gb(size: int) -> float:
    return round(size / GIB, 2)


@dataclass(slots=True, frozen=True)
class LocationEntry:
    label: str
    path: str


@dataclass(slots=True, frozen=True)
class LocationUsage:
    entry: LocationEntry
    size_bytes: int

    @property
    def size_gb(self) -> float:
        return bytes_to_gb(self.size_bytes)


@dataclass(slots=True, frozen=True)
class AnalysisReport:
    usages: tuple[LocationUsage, ...] = field(default_factory=tuple)

    @property
    def total_bytes(self) -> int:
        return sum(usage.size_bytes for usage in self.usages)

    @property
    def total_gb(self) -> float:
        return bytes_to_gb(self.total_bytes)

    @property
    def itemized(self) -> list[LocationUsage]:
        """Locations with a non-zero size, in table order."""
        return [usage for usage in self.usages if usage.size_bytes > 0]
