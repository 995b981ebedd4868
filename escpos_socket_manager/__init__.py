"""
ESC/POS Socket Manager - expose a local printer as a raw TCP print service.

The printer is published through a systemd socket unit listening on port
9100 and a template service that copies each connection to the device.
"""
__version__ = "0.1.0"

from escpos_socket_manager.manager import PrinterServiceManager
from escpos_socket_manager.config import PrinterSocketConfig
from escpos_socket_manager.devices import find_printers
from escpos_socket_manager.prompt import select_printer
from escpos_socket_manager.privileges import is_root, require_root
from escpos_socket_manager.status import (
    ServiceStatus,
    InstallationStatus,
    EnablementStatus,
    RunningStatus,
)
from escpos_socket_manager.exceptions import (
    PrinterServiceError,
    NotRootError,
    NoPrintersFoundError,
    PrinterSelectionAborted,
    ServiceNotInstalledError,
    ServiceAlreadyInstalledError,
    ServiceAlreadyEnabledError,
    ServiceAlreadyDisabledError,
    ServiceAlreadyRunningError,
    ServiceAlreadyStoppedError,
    ServiceOperationError,
    ServiceOperation,
)

__all__ = [
    # Main classes
    "PrinterServiceManager",
    "PrinterSocketConfig",
    # Setup steps
    "find_printers",
    "select_printer",
    "is_root",
    "require_root",
    # Status types
    "ServiceStatus",
    "InstallationStatus",
    "EnablementStatus",
    "RunningStatus",
    # Exceptions
    "PrinterServiceError",
    "NotRootError",
    "NoPrintersFoundError",
    "PrinterSelectionAborted",
    "ServiceNotInstalledError",
    "ServiceAlreadyInstalledError",
    "ServiceAlreadyEnabledError",
    "ServiceAlreadyDisabledError",
    "ServiceAlreadyRunningError",
    "ServiceAlreadyStoppedError",
    "ServiceOperationError",
    "ServiceOperation",
]
