"""Dependency container - holds all wired dependencies."""

from dataclasses import dataclass

from serialtail.application.services import MonitorService
from serialtail.config import Config
from serialtail.domain import TransportFactory
from serialtail.infrastructure.storage import FileRecordingStore


@dataclass(frozen=True)
class Container:
    """Immutable dependency container.

    All dependencies are wired at startup and cannot be modified.
    """

    # Services
    monitor_service: MonitorService

    # Collaborators
    recording_store: FileRecordingStore
    transport_factory: TransportFactory

    # Configuration
    config: Config
