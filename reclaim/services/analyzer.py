from __future__ import annotations

import logging
from collections.abc import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from reclaim.models.location import AnalysisReport, LocationEntry, LocationUsage
from reclaim.services.formatting import format_gb
from reclaim.services.fs import DEFAULT_FS, FileSystem
from reclaim.services.tree import measure_tree

logger = logging.getLogger(__name__)


def analyze(locations: Iterable[LocationEntry], fs: FileSystem = DEFAULT_FS) -> AnalysisReport:
    usages: list[LocationUsage] = []
    for entry in locations:
        try:
            size = measure_tree(entry.path, fs)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Could not measure %s (%s): %s", entry.label, entry.path, exc)
            usages.append(LocationUsage(entry=entry, size_bytes=0))
            continue
        if size.access_errors:
            logger.debug("%s: %d unreadable entries skipped", entry.path, size.access_errors)
        usages.append(LocationUsage(entry=entry, size_bytes=size.size_bytes))
    return AnalysisReport(usages=tuple(usages))


def render_analysis(console: Console, report: AnalysisReport) -> None:
    table = Table(title="Reclaimable Space", header_style="bold yellow")
    table.add_column("Location")
    table.add_column("Path")
    table.add_column("Size", justify="right")
    for usage in report.itemized:
        table.add_row(escape(usage.entry.label), escape(usage.entry.path), format_gb(usage.size_gb))
    table.add_section()
    table.add_row("[bold]Total[/bold]", "", f"[bold]{format_gb(report.total_gb)}[/bold]")
    console.print(table)
