from __future__ import annotations

from dataclasses import dataclass, field

from reclaim.models.enums import Action


@dataclass(slots=True)
class CleanupOutcome:
    action: Action
    freed_bytes: int = 0
    warnings: list[str] = field(default_factory=list)
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return not self.warnings
