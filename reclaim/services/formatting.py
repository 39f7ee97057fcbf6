from __future__ import annotations

_UNITS = (
    (1024**3, "GB"),
    (1024**2, "MB"),
    (1024, "KB"),
)


def format_bytes(size: float) -> str:
    for threshold, unit in _UNITS:
        if size >= threshold:
            return f"{size / threshold:.2f} {unit}"
    return f"{int(max(0, size))} Bytes"


def format_gb(size_gb: float) -> str:
    return f"{size_gb:.2f} GB"
