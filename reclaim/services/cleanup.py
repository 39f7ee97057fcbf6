from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from result import Err
from rich.console import Console

from reclaim.config.defaults import LocationTable, default_config
from reclaim.config.schema import AppConfig
from reclaim.models.cleanup import CleanupOutcome
from reclaim.models.enums import Action
from reclaim.models.location import AnalysisReport, LocationEntry
from reclaim.services.analyzer import analyze, render_analysis
from reclaim.services.fs import DEFAULT_FS, FileSystem
from reclaim.services.system import DEFAULT_SYSTEM, System
from reclaim.services.tree import delete_contents, measure_tree

logger = logging.getLogger(__name__)


def _warn(outcome: CleanupOutcome, message: str) -> None:
    logger.warning(message)
    outcome.warnings.append(message)


@contextmanager
def stopped_service(system: System, name: str, outcome: CleanupOutcome) -> Iterator[bool]:
    """Stop service *name* for the duration of the block, then start it again.

    Yields whether the stop succeeded. The restart runs on every exit path,
    including a failed stop and an exception raised inside the block.
    """
    stopped = True
    try:
        stop = system.stop_service(name)
        if isinstance(stop, Err):
            stopped = False
            _warn(outcome, f"Could not stop service {name}: {stop.unwrap_err()}")
    except Exception as exc:  # noqa: BLE001
        stopped = False
        _warn(outcome, f"Could not stop service {name}: {exc}")

    try:
        yield stopped
    finally:
        try:
            start = system.start_service(name)
            if isinstance(start, Err):
                _warn(outcome, f"Could not restart service {name}: {start.unwrap_err()}")
        except Exception as exc:  # noqa: BLE001
            _warn(outcome, f"Could not restart service {name}: {exc}")


class Cleaner:
    def __init__(
        self,
        drive: str,
        locations: LocationTable,
        console: Console,
        config: AppConfig | None = None,
        fs: FileSystem = DEFAULT_FS,
        system: System = DEFAULT_SYSTEM,
        dry_run: bool = False,
    ) -> None:
        self.drive = drive.upper()
        self.locations = locations
        self.config = config or default_config()
        self._console = console
        self._fs = fs
        self._system = system
        self.dry_run = dry_run

    def analyze(self) -> AnalysisReport:
        report = analyze(self.locations.entries, self._fs)
        render_analysis(self._console, report)
        return report

    def _purge_dir(self, entry: LocationEntry, outcome: CleanupOutcome) -> int:
        if not self._fs.exists(entry.path):
            logger.debug("%s not present at %s", entry.label, entry.path)
            return 0
        if self._fs.stat(entry.path).is_link:
            _warn(outcome, f"{entry.label}: {entry.path} is a link or junction, skipped")
            return 0
        before = measure_tree(entry.path, self._fs).size_bytes
        if self.dry_run:
            return before
        stats = delete_contents(entry.path, self._fs)
        if stats.failed:
            _warn(
                outcome,
                f"{entry.label}: {len(stats.failed)} entries under {entry.path} could not be deleted",
            )
        remaining = measure_tree(entry.path, self._fs).size_bytes
        return max(0, before - remaining)

    def purge_temp_files(self) -> CleanupOutcome:
        outcome = CleanupOutcome(Action.TEMP_FILES, skipped=self.dry_run)
        for entry in self.locations.temp_dirs:
            try:
                outcome.freed_bytes += self._purge_dir(entry, outcome)
            except Exception as exc:  # noqa: BLE001
                _warn(outcome, f"Failed to clean {entry.label} ({entry.path}): {exc}")
        return outcome

    def purge_update_cache(self) -> CleanupOutcome:
        outcome = CleanupOutcome(Action.WINDOWS_UPDATE, skipped=self.dry_run)
        entry = self.locations.update_cache
        try:
            if self.dry_run:
                outcome.freed_bytes = self._purge_dir(entry, outcome)
                return outcome
            with stopped_service(self._system, self.config.update_service, outcome) as stopped:
                if stopped:
                    outcome.freed_bytes = self._purge_dir(entry, outcome)
        except Exception as exc:  # noqa: BLE001
            _warn(outcome, f"Failed to clean {entry.label} ({entry.path}): {exc}")
        return outcome

    def purge_recycle_bin(self) -> CleanupOutcome:
        outcome = CleanupOutcome(Action.RECYCLE_BIN, skipped=self.dry_run)
        entry = self.locations.recycle_bin
        try:
            size = measure_tree(entry.path, self._fs).size_bytes
            if self.dry_run:
                outcome.freed_bytes = size
                return outcome
            result = self._system.empty_recycle_bin(self.drive)
            if isinstance(result, Err):
                _warn(outcome, f"Could not empty the Recycle Bin on {self.drive}: {result.unwrap_err()}")
            else:
                outcome.freed_bytes = size
        except Exception as exc:  # noqa: BLE001
            _warn(outcome, f"Could not empty the Recycle Bin on {self.drive}: {exc}")
        return outcome

    def launch_system_cleanup(self) -> CleanupOutcome:
        outcome = CleanupOutcome(Action.SYSTEM_CLEANUP, skipped=self.dry_run)
        argv = [self.config.cleanup_utility, "/d", self.drive]
        if self.dry_run:
            logger.info("Would launch %s", " ".join(argv))
            return outcome
        try:
            result = self._system.launch_detached(argv)
            if isinstance(result, Err):
                _warn(outcome, f"Could not launch Disk Cleanup: {result.unwrap_err()}")
            else:
                self._console.print(
                    f"[#8abeb7]Disk Cleanup launched for {self.drive}:; "
                    "select the items to remove in its window.[/]"
                )
        except Exception as exc:  # noqa: BLE001
            _warn(outcome, f"Could not launch Disk Cleanup: {exc}")
        return outcome
