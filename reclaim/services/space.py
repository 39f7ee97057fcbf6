from __future__ import annotations

import logging

from result import Err, Ok
from rich.console import Console
from rich.table import Table

from reclaim.models.space import (
    SpaceResult,
    SpaceSnapshot,
    VolumeError,
    VolumeErrorCode,
    volume_root,
)
from reclaim.services.formatting import format_bytes
from reclaim.services.fs import DEFAULT_FS, FileSystem

logger = logging.getLogger(__name__)


def query_space(drive: str, fs: FileSystem = DEFAULT_FS) -> SpaceResult:
    root = volume_root(drive)
    if not fs.exists(root):
        return Err(
            VolumeError(
                code=VolumeErrorCode.NOT_FOUND,
                drive=drive,
                message=f"Volume {root} not found",
            )
        )
    try:
        usage = fs.disk_usage(root)
    except OSError as exc:
        return Err(
            VolumeError(
                code=VolumeErrorCode.QUERY_FAILED,
                drive=drive,
                message=f"Cannot query {root}: {exc}",
            )
        )
    return Ok(SpaceSnapshot(total_bytes=usage.total, used_bytes=usage.used, free_bytes=usage.free))


def render_space_report(console: Console, drive: str, snapshot: SpaceSnapshot, title: str) -> None:
    table = Table(title=title, header_style="bold cyan", show_header=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Drive", f"{drive.upper()}:")
    table.add_row("Total", format_bytes(snapshot.total_bytes))
    table.add_row("Used", f"{format_bytes(snapshot.used_bytes)} ({snapshot.percent_used:.2f}%)")
    table.add_row("Free", format_bytes(snapshot.free_bytes))
    console.print(table)


def report_space(
    console: Console, drive: str, title: str, fs: FileSystem = DEFAULT_FS
) -> SpaceSnapshot | None:
    """Print the space report for *drive*; an unresolvable volume prints nothing."""
    result = query_space(drive, fs)
    if isinstance(result, Err):
        error = result.unwrap_err()
        logger.debug("Skipping space report: %s", error.message)
        return None
    snapshot = result.unwrap()
    render_space_report(console, drive, snapshot, title)
    return snapshot
