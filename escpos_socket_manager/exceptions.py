"""Printer service exceptions."""

from enum import Enum


class ServiceOperation(Enum):
    """Operations that can be performed on the printer service."""
    INSTALL = 'install'
    UNINSTALL = 'uninstall'
    ENABLE = 'enable'
    DISABLE = 'disable'
    START = 'start'
    STOP = 'stop'
    RESTART = 'restart'
    GET_STATUS = 'getStatus'


class PrinterServiceError(Exception):
    """Base exception for printer service errors."""
    pass


class NotRootError(PrinterServiceError):
    """Raised when an operation needs root privileges."""

    def __init__(self):
        super().__init__('This program must be run as root or with sudo.')


class NoPrintersFoundError(PrinterServiceError):
    """Raised when no printer devices were discovered."""

    def __init__(self, pattern: str = '/dev/usb/lp*'):
        super().__init__(f'No USB printers found matching {pattern}')
        self.pattern = pattern


class PrinterSelectionAborted(PrinterServiceError):
    """Raised when input ends before a printer was selected."""
    pass


class ServiceNotInstalledError(PrinterServiceError):
    """Raised when an operation requires the units to be installed."""
    pass


class ServiceAlreadyInstalledError(PrinterServiceError):
    """Raised when trying to install units that are already installed."""
    pass


class ServiceAlreadyEnabledError(PrinterServiceError):
    """Raised when trying to enable a socket that is already enabled."""
    pass


class ServiceAlreadyDisabledError(PrinterServiceError):
    """Raised when trying to disable a socket that is already disabled."""
    pass


class ServiceAlreadyRunningError(PrinterServiceError):
    """Raised when trying to start a socket that is already listening."""
    pass


class ServiceAlreadyStoppedError(PrinterServiceError):
    """Raised when trying to stop a socket that is already stopped."""
    pass


class ServiceOperationError(PrinterServiceError):
    """Raised when a service operation fails."""

    def __init__(self, operation: ServiceOperation, message: str):
        super().__init__(f"Operation {operation.value} failed: {message}")
        self.operation = operation
        self.message = message
