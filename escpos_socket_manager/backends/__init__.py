"""Init-system specific printer socket backends."""

from escpos_socket_manager.backends.base import PrinterSocketBackend
from escpos_socket_manager.backends.systemd import SystemdSocketBackend

__all__ = [
    'PrinterSocketBackend',
    'SystemdSocketBackend',
]
