"""Abstract base class for printer socket backends."""

from abc import ABC, abstractmethod
from typing import Callable, Optional
import logging

from packaging.version import Version

from escpos_socket_manager.config import PrinterSocketConfig
from escpos_socket_manager.status import ServiceStatus

DEFAULT_STATUS_WAIT_TIMEOUT_SECONDS = 10
DEFAULT_POLL_INTERVAL_MS = 200
DEFAULT_SUBPROCESS_TIMEOUT_SECONDS = 30

ProgressCallback = Callable[[str], None]


class PrinterSocketBackend(ABC):
    """Abstract base class for init-system specific printer socket implementations."""

    def __init__(self, config: PrinterSocketConfig):
        """
        Initialize the backend.

        Args:
            config: Printer socket configuration.
        """
        self.config = config
        self.service_name = config.service_name
        self.logger = logging.getLogger(f'{self.__class__.__name__}.{config.service_name}')

    @abstractmethod
    def install(
        self,
        printer_path: str,
        version: Version,
        raise_if_already_installed: bool = False,
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        """
        Write the unit files for printer_path and activate the socket.

        Args:
            printer_path: Device the service forwards print jobs to.
            version: Version recorded in the service unit.
            raise_if_already_installed: If True, raise exception if already installed.
            progress: Optional callback receiving user-facing progress lines.
        """
        pass

    @abstractmethod
    def uninstall(self, raise_if_not_installed: bool = False) -> None:
        pass

    @abstractmethod
    def enable(self, raise_if_already_enabled: bool = False) -> None:
        pass

    @abstractmethod
    def disable(self, raise_if_already_disabled: bool = False) -> None:
        pass

    @abstractmethod
    def start(self, raise_if_already_running: bool = False) -> None:
        pass

    @abstractmethod
    def stop(self, raise_if_already_stopped: bool = False) -> None:
        pass

    @abstractmethod
    def restart(self) -> None:
        pass

    @property
    @abstractmethod
    def status(self) -> ServiceStatus:
        """Get the current status of the printer socket."""
        pass

    @property
    @abstractmethod
    def version(self) -> Optional[Version]:
        """Get the version recorded in the installed units, or None if not installed."""
        pass

    @property
    @abstractmethod
    def printer_path(self) -> Optional[str]:
        """Get the printer the installed service writes to, or None if not installed."""
        pass
