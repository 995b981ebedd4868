"""Printer socket status types and enums."""

from enum import Enum
from typing import Optional


class InstallationStatus(Enum):
    """Status indicating whether the unit files are installed."""
    INSTALLED = "INSTALLED"
    NOT_INSTALLED = "NOT_INSTALLED"


class EnablementStatus(Enum):
    """Status indicating whether the socket is enabled to start at boot."""
    ENABLED = "ENABLED"
    DISABLED = "DISABLED"


class RunningStatus(Enum):
    """Status indicating whether the socket is currently listening."""
    RUNNING = "RUNNING"
    NOT_RUNNING = "NOT_RUNNING"


class ServiceStatus:
    """Combined status of the printer socket and the printer it feeds."""

    def __init__(
        self,
        installation_status: InstallationStatus,
        enablement_status: EnablementStatus,
        running_status: RunningStatus,
        printer_path: Optional[str] = None,
    ):
        self.installation_status = installation_status
        self.enablement_status = enablement_status
        self.running_status = running_status
        self.printer_path = printer_path

    @property
    def is_ready(self) -> bool:
        """True when the units are installed, enabled and listening."""
        return (
            self.installation_status == InstallationStatus.INSTALLED
            and self.enablement_status == EnablementStatus.ENABLED
            and self.running_status == RunningStatus.RUNNING
        )

    def __str__(self) -> str:
        return (
            f'ServiceStatus('
            f'installation={self.installation_status.name}, '
            f'enablement={self.enablement_status.name}, '
            f'running={self.running_status.name}, '
            f'printer={self.printer_path})'
        )

    def __repr__(self) -> str:
        return self.__str__()
