"""Application services - use case implementations."""

from .monitor_service import MonitorEvent, MonitorService

__all__ = [
    "MonitorService",
    "MonitorEvent",
]
