"""Health indicators and operating system probes."""

from .indicators import (
    CacheIndicator,
    DatabaseIndicator,
    HealthIndicator,
    MemoryIndicator,
    SystemMemoryIndicator,
    UptimeIndicator,
)
from .metrics import collect_metrics
from .probes import SystemMemory, process_rss_bytes, system_memory

__all__ = [
    "CacheIndicator",
    "DatabaseIndicator",
    "HealthIndicator",
    "MemoryIndicator",
    "SystemMemoryIndicator",
    "UptimeIndicator",
    "SystemMemory",
    "collect_metrics",
    "process_rss_bytes",
    "system_memory",
]
