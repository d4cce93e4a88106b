"""Read process and host memory figures from the operating system."""

from __future__ import annotations

import os
import resource
import sys
from dataclasses import dataclass
from pathlib import Path

_PROC_STATM = Path("/proc/self/statm")
_PROC_MEMINFO = Path("/proc/meminfo")


@dataclass(frozen=True)
class SystemMemory:
    total_bytes: int
    available_bytes: int

    @property
    def used_percent(self) -> float:
        if self.total_bytes <= 0:
            return 0.0
        used = self.total_bytes - self.available_bytes
        return round(used / self.total_bytes * 100, 2)


def process_rss_bytes() -> int:
    """Return the resident set size of the current process in bytes."""

    try:
        resident_pages = int(_PROC_STATM.read_text().split()[1])
    except (OSError, IndexError, ValueError):
        # ru_maxrss is the peak RSS: kilobytes on Linux, bytes on macOS.
        peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
        return int(peak if sys.platform == "darwin" else peak * 1024)
    return resident_pages * os.sysconf("SC_PAGE_SIZE")


def system_memory() -> SystemMemory:
    """Return total and available host memory in bytes."""

    try:
        fields: dict[str, int] = {}
        for line in _PROC_MEMINFO.read_text().splitlines():
            name, _, value = line.partition(":")
            parts = value.split()
            if parts:
                fields[name] = int(parts[0]) * 1024
        return SystemMemory(
            total_bytes=fields["MemTotal"],
            available_bytes=fields.get("MemAvailable", fields.get("MemFree", 0)),
        )
    except (OSError, KeyError, ValueError):
        page_size = os.sysconf("SC_PAGE_SIZE")
        return SystemMemory(
            total_bytes=os.sysconf("SC_PHYS_PAGES") * page_size,
            available_bytes=os.sysconf("SC_AVPHYS_PAGES") * page_size,
        )


__all__ = ["SystemMemory", "process_rss_bytes", "system_memory"]
