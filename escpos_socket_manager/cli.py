"""Command line interface for provisioning the network printer service."""

import logging
from pathlib import Path
from typing import Optional

import typer
from packaging.version import Version

from escpos_socket_manager import __version__
from escpos_socket_manager.config import (
    PrinterSocketConfig,
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_PORT,
    DEFAULT_UNIT_DIR,
)
from escpos_socket_manager.devices import DEFAULT_DEVICE_PATTERN, find_printers
from escpos_socket_manager.exceptions import (
    NoPrintersFoundError,
    PrinterServiceError,
    ServiceNotInstalledError,
)
from escpos_socket_manager.manager import PrinterServiceManager
from escpos_socket_manager.privileges import require_root
from escpos_socket_manager.prompt import select_printer

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="escpos-socket",
    help="Expose a local ESC/POS printer as a raw TCP print service.",
    add_completion=False,
    no_args_is_help=True,
)

PortOption = typer.Option(DEFAULT_PORT, "--port", "-p", envvar="ESCPOS_SOCKET_PORT",
                          help="TCP port the socket listens on")
ListenAddressOption = typer.Option(DEFAULT_LISTEN_ADDRESS, "--listen-address", envvar="ESCPOS_SOCKET_LISTEN_ADDRESS",
                                   help="Address the socket listens on")
UnitDirOption = typer.Option(DEFAULT_UNIT_DIR, "--unit-dir", envvar="ESCPOS_SOCKET_UNIT_DIR",
                             help="Directory the systemd unit files are written to")
PatternOption = typer.Option(DEFAULT_DEVICE_PATTERN, "--pattern", envvar="ESCPOS_SOCKET_DEVICE_PATTERN",
                             help="Glob pattern used to discover printer devices")


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _fail(error: Exception) -> None:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(1)


def _build_manager(port: int, listen_address: str, unit_dir: Path) -> PrinterServiceManager:
    config = PrinterSocketConfig(listen_address=listen_address, port=port, unit_dir=unit_dir)
    return PrinterServiceManager(config)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """Expose a local ESC/POS printer as a raw TCP print service."""
    setup_logging(verbose)


@app.command()
def install(
    device: Optional[str] = typer.Option(None, "--device", "-d", help="Printer device to use, skips the prompt"),
    pattern: str = PatternOption,
    port: int = PortOption,
    listen_address: str = ListenAddressOption,
    unit_dir: Path = UnitDirOption,
):
    """Write the socket and service units for a printer and activate them."""
    typer.echo("Starting ESC/POS printer service setup...")
    try:
        require_root()
        typer.echo("✓ Root permissions confirmed.")

        if device:
            selected = device
        else:
            printers = find_printers(pattern)
            typer.echo(f"Found {len(printers)} printer device(s):")
            if not printers:
                raise NoPrintersFoundError(pattern)
            for printer in printers:
                typer.echo(printer)
            selected = select_printer(printers)
        typer.echo(f"✓ Printer selected: {selected}")

        manager = _build_manager(port, listen_address, unit_dir)
        manager.install(selected, Version(__version__), progress=typer.echo)
    except (PrinterServiceError, FileNotFoundError, ValueError, NotImplementedError) as e:
        logger.debug("Install failed", exc_info=True)
        _fail(e)

    typer.echo("\n🎉 Setup complete! The ESC/POS printer socket is active and enabled.")
    typer.echo(f"The PC is ready to accept print jobs on TCP port {port}.")


@app.command()
def uninstall(
    unit_dir: Path = UnitDirOption,
):
    """Disable the printer socket and remove its unit files."""
    try:
        require_root()
        manager = _build_manager(DEFAULT_PORT, DEFAULT_LISTEN_ADDRESS, unit_dir)
        manager.uninstall(raise_if_not_installed=True)
    except ServiceNotInstalledError:
        _fail(PrinterServiceError("The printer socket is not installed."))
    except (PrinterServiceError, NotImplementedError) as e:
        _fail(e)
    typer.echo("✓ Printer socket removed.")


@app.command()
def status(
    unit_dir: Path = UnitDirOption,
):
    """Show whether the printer socket is installed, enabled and listening."""
    try:
        manager = _build_manager(DEFAULT_PORT, DEFAULT_LISTEN_ADDRESS, unit_dir)
        current = manager.status
        version = manager.version
    except (PrinterServiceError, NotImplementedError) as e:
        _fail(e)

    typer.echo(f"Installation: {current.installation_status.name}")
    typer.echo(f"Enablement:   {current.enablement_status.name}")
    typer.echo(f"Running:      {current.running_status.name}")
    typer.echo(f"Printer:      {current.printer_path or '-'}")
    typer.echo(f"Version:      {version or '-'}")


@app.command("list")
def list_printers(
    pattern: str = PatternOption,
):
    """List printer devices that can be exposed."""
    printers = find_printers(pattern)
    if not printers:
        typer.echo(f"No printers found matching {pattern}")
        return
    for index, printer in enumerate(printers, start=1):
        typer.echo(f"{index}. {printer}")


if __name__ == "__main__":
    app()
