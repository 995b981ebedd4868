"""Printer service manager - network printer provisioning."""

import platform
from pathlib import Path
from typing import Optional

from packaging.version import Version

from escpos_socket_manager.config import PrinterSocketConfig, check_unit_value
from escpos_socket_manager.status import ServiceStatus
from escpos_socket_manager.backends.base import PrinterSocketBackend, ProgressCallback
from escpos_socket_manager.backends.systemd import SystemdSocketBackend


class PrinterServiceManager:
    """
    Network printer service manager.

    Exposes a local printer device on a TCP port through a systemd socket
    unit and a per-connection template service.
    """

    def __init__(self, config: PrinterSocketConfig):
        """
        Initialize the printer service manager.

        Args:
            config: Printer socket configuration.

        Raises:
            NotImplementedError: If the current platform is not supported.
        """
        self.config = config
        self._backend: PrinterSocketBackend

        system = platform.system()
        if system == 'Linux':
            self._backend = SystemdSocketBackend(config)
        else:
            raise NotImplementedError(f'Unsupported platform: {system}')

    def install(
        self,
        printer_path: str,
        version: Version,
        raise_if_already_installed: bool = False,
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        """
        Write the unit files and activate the printer socket.

        Args:
            printer_path: Printer device print jobs are written to.
            version: Version recorded in the service unit.
            raise_if_already_installed: If True, raise exception if already installed.
            progress: Optional callback receiving user-facing progress lines.

        Raises:
            ValueError: If printer_path contains control characters.
            FileNotFoundError: If printer_path doesn't exist.
            ServiceAlreadyInstalledError: If units are installed and raise_if_already_installed is True.
            ServiceOperationError: If writing a unit or a systemctl command fails.
        """
        check_unit_value('Printer path', printer_path)
        if not Path(printer_path).exists():
            raise FileNotFoundError(f'Printer device does not exist: {printer_path}')

        self._backend.install(printer_path, version, raise_if_already_installed, progress)

    def uninstall(self, raise_if_not_installed: bool = False) -> None:
        """
        Disable the socket and remove both unit files.

        Raises:
            ServiceNotInstalledError: If units are not installed and raise_if_not_installed is True.
            ServiceOperationError: If uninstallation fails.
        """
        self._backend.uninstall(raise_if_not_installed)

    def enable(self, raise_if_already_enabled: bool = False) -> None:
        self._backend.enable(raise_if_already_enabled)

    def disable(self, raise_if_already_disabled: bool = False) -> None:
        self._backend.disable(raise_if_already_disabled)

    def start(self, raise_if_already_running: bool = False) -> None:
        self._backend.start(raise_if_already_running)

    def stop(self, raise_if_already_stopped: bool = False) -> None:
        self._backend.stop(raise_if_already_stopped)

    def restart(self) -> None:
        self._backend.restart()

    @property
    def name(self) -> str:
        """Get the service name."""
        return self._backend.service_name

    @property
    def status(self) -> ServiceStatus:
        """Get the current status of the printer socket."""
        return self._backend.status

    @property
    def version(self) -> Optional[Version]:
        """Get the installed version, or None if not installed."""
        return self._backend.version

    @property
    def printer_path(self) -> Optional[str]:
        """Get the printer the installed service writes to."""
        return self._backend.printer_path
