"""Printer socket configuration."""

from pathlib import Path

DEFAULT_SERVICE_NAME = 'escpos-printer'
DEFAULT_LISTEN_ADDRESS = '0.0.0.0'
DEFAULT_PORT = 9100
DEFAULT_UNIT_DIR = Path('/etc/systemd/system')


def check_unit_value(name: str, value: str) -> None:
    """Raise ValueError if value would break out of its line in a unit file."""
    if any(ord(char) < 32 or ord(char) == 127 for char in value):
        raise ValueError(f'{name} must not contain control characters: {value!r}')


class PrinterSocketConfig:
    """Configuration for the printer socket and its template service."""

    def __init__(
        self,
        service_name: str = DEFAULT_SERVICE_NAME,
        listen_address: str = DEFAULT_LISTEN_ADDRESS,
        port: int = DEFAULT_PORT,
        unit_dir: Path = DEFAULT_UNIT_DIR,
    ):
        """
        Initialize printer socket configuration.

        Args:
            service_name: Base name shared by the socket and service units.
            listen_address: Address the socket listens on.
            port: TCP port the socket listens on.
            unit_dir: Directory where the unit files are written.

        Raises:
            ValueError: If service_name is empty, port is out of range, or a
                value contains control characters.
        """
        if not service_name:
            raise ValueError('Service name cannot be empty')
        if not 1 <= port <= 65535:
            raise ValueError(f'Port must be between 1 and 65535, got {port}')
        check_unit_value('Service name', service_name)
        check_unit_value('Listen address', listen_address)
        self.service_name = service_name
        self.listen_address = listen_address
        self.port = port
        self.unit_dir = Path(unit_dir)

    @property
    def socket_unit(self) -> str:
        return f'{self.service_name}.socket'

    @property
    def service_unit(self) -> str:
        return f'{self.service_name}@.service'

    @property
    def socket_file_path(self) -> Path:
        return self.unit_dir / self.socket_unit

    @property
    def service_file_path(self) -> Path:
        return self.unit_dir / self.service_unit

    @property
    def listen_stream(self) -> str:
        return f'{self.listen_address}:{self.port}'
