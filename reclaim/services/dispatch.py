from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.table import Table

from reclaim.models.cleanup import CleanupOutcome
from reclaim.models.enums import Action, Operation
from reclaim.models.location import AnalysisReport
from reclaim.services.formatting import format_bytes


class CleanupRunner(Protocol):
    def analyze(self) -> AnalysisReport: ...

    def purge_temp_files(self) -> CleanupOutcome: ...

    def purge_update_cache(self) -> CleanupOutcome: ...

    def purge_recycle_bin(self) -> CleanupOutcome: ...

    def launch_system_cleanup(self) -> CleanupOutcome: ...


# SystemCleanup is interactive, so it only runs when asked for by name.
_OPERATION_ACTIONS: dict[Operation, tuple[Action, ...]] = {
    Operation.ANALYZE: (),
    Operation.TEMP_FILES: (Action.TEMP_FILES,),
    Operation.WINDOWS_UPDATE: (Action.WINDOWS_UPDATE,),
    Operation.RECYCLE_BIN: (Action.RECYCLE_BIN,),
    Operation.SYSTEM_CLEANUP: (Action.SYSTEM_CLEANUP,),
    Operation.ALL: (Action.TEMP_FILES, Action.WINDOWS_UPDATE, Action.RECYCLE_BIN),
}

_ACTION_LABELS: dict[Action, str] = {
    Action.TEMP_FILES: "Temporary files",
    Action.WINDOWS_UPDATE: "Windows Update cache",
    Action.RECYCLE_BIN: "Recycle Bin",
    Action.SYSTEM_CLEANUP: "Disk Cleanup (interactive)",
}


def plan(operation: Operation) -> tuple[Action, ...]:
    """Actions run for *operation*, in order. Analysis always comes first."""
    return (Action.ANALYZE, *_OPERATION_ACTIONS[operation])


def _run_action(action: Action, runner: CleanupRunner) -> CleanupOutcome:
    if action is Action.TEMP_FILES:
        return runner.purge_temp_files()
    if action is Action.WINDOWS_UPDATE:
        return runner.purge_update_cache()
    if action is Action.RECYCLE_BIN:
        return runner.purge_recycle_bin()
    if action is Action.SYSTEM_CLEANUP:
        return runner.launch_system_cleanup()
    raise ValueError(f"Not a cleanup action: {action}")


def execute(operation: Operation, runner: CleanupRunner) -> list[CleanupOutcome]:
    outcomes: list[CleanupOutcome] = []
    for action in plan(operation):
        if action is Action.ANALYZE:
            runner.analyze()
            continue
        outcomes.append(_run_action(action, runner))
    return outcomes


def render_outcomes(console: Console, outcomes: list[CleanupOutcome], *, dry_run: bool = False) -> None:
    if not outcomes:
        return
    freed_header = "Would Free" if dry_run else "Freed"
    table = Table(title="Cleanup Results", header_style="bold cyan")
    table.add_column("Action")
    table.add_column(freed_header, justify="right")
    table.add_column("Status", justify="center")
    for outcome in outcomes:
        if outcome.action is Action.SYSTEM_CLEANUP:
            freed = "n/a"
        else:
            freed = format_bytes(outcome.freed_bytes)
        if outcome.skipped:
            status = "[dim]dry run[/dim]"
        elif outcome.ok:
            status = "[green]ok[/green]"
        else:
            status = f"[yellow]{len(outcome.warnings)} warning(s)[/yellow]"
        table.add_row(_ACTION_LABELS[outcome.action], freed, status)
    table.add_section()
    total = sum(outcome.freed_bytes for outcome in outcomes)
    table.add_row("[bold]Total[/bold]", f"[bold]{format_bytes(total)}[/bold]", "")
    console.print(table)
