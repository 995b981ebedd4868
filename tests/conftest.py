"""Pytest configuration and fixtures for escpos-socket-manager tests."""

import os
import platform
import subprocess
from pathlib import Path
from typing import Dict, Generator, List, Tuple
import logging

import pytest

from escpos_socket_manager import (
    PrinterSocketConfig,
    PrinterServiceManager,
)
from packaging.version import Version

# Configure logging for tests
logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Test configuration
TEST_VERSION = Version("1.0.0")
TEST_SOCKET_UNIT = "escpos-printer.socket"
STATUS_QUERIES = ("is-enabled", "is-active")


class FakeSystemctl:
    """Stand-in for subprocess.run that emulates systemctl for a single socket unit.

    Every call is recorded in ``calls`` (arguments after ``systemctl``).
    Commands listed in ``failures`` return the configured exit code and
    output instead of changing state.
    """

    def __init__(self):
        self.calls: List[List[str]] = []
        self.failures: Dict[Tuple[str, ...], Tuple[int, str]] = {}
        self.enabled = False
        self.active = False
        self.stuck_inactive = False

    @property
    def mutating_calls(self) -> List[List[str]]:
        """Calls that are not status queries."""
        return [call for call in self.calls if call[0] not in STATUS_QUERIES]

    def fail(self, args: List[str], returncode: int = 1, output: str = "") -> None:
        self.failures[tuple(args)] = (returncode, output)

    def __call__(self, command, **kwargs) -> subprocess.CompletedProcess:
        assert command[0] == "systemctl", f"Unexpected command: {command}"
        args = list(command[1:])
        self.calls.append(args)

        if tuple(args) in self.failures:
            returncode, output = self.failures[tuple(args)]
            return subprocess.CompletedProcess(command, returncode, stdout=output)

        verb, rest = args[0], args[1:]
        now = "--now" in rest
        if verb == "is-enabled":
            return subprocess.CompletedProcess(
                command, 0 if self.enabled else 1, stdout="enabled\n" if self.enabled else "disabled\n"
            )
        if verb == "is-active":
            return subprocess.CompletedProcess(
                command, 0 if self.active else 3, stdout="active\n" if self.active else "inactive\n"
            )
        if verb == "enable":
            self.enabled = True
            if now:
                self._activate()
        elif verb == "disable":
            self.enabled = False
            if now:
                self.active = False
        elif verb in ("start", "restart"):
            self._activate()
        elif verb == "stop":
            self.active = False
        return subprocess.CompletedProcess(command, 0, stdout="")

    def _activate(self) -> None:
        if not self.stuck_inactive:
            self.active = True


class FakeClock:
    """Clock that advances one second on every reading."""

    def __init__(self):
        self.now = 0.0

    def time(self) -> float:
        self.now += 1.0
        return self.now

    def sleep(self, seconds: float) -> None:
        pass


@pytest.fixture
def fake_systemctl(monkeypatch) -> FakeSystemctl:
    """Fixture replacing subprocess.run with an emulated systemctl."""
    fake = FakeSystemctl()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture
def fake_clock(monkeypatch) -> FakeClock:
    """Fixture making status polling time out without real waiting."""
    clock = FakeClock()
    monkeypatch.setattr("escpos_socket_manager.backends.systemd.time", clock)
    return clock


@pytest.fixture
def unit_dir(tmp_path: Path) -> Path:
    """Fixture providing a temporary directory for unit files."""
    directory = tmp_path / "systemd" / "system"
    directory.mkdir(parents=True, exist_ok=True)
    return directory


@pytest.fixture
def device_dir(tmp_path: Path) -> Path:
    """Fixture providing a temporary /dev/usb lookalike."""
    directory = tmp_path / "dev" / "usb"
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def make_printer(device_dir: Path, name: str) -> str:
    """Create a fake printer device: a symlink to the /dev/null character device."""
    path = device_dir / name
    os.symlink("/dev/null", path)
    return str(path)


@pytest.fixture
def printer_device(device_dir: Path) -> str:
    """Fixture providing a single fake printer device."""
    return make_printer(device_dir, "lp0")


@pytest.fixture
def socket_config(unit_dir: Path) -> PrinterSocketConfig:
    """Fixture providing a PrinterSocketConfig writing into unit_dir."""
    return PrinterSocketConfig(unit_dir=unit_dir)


@pytest.fixture
def service_manager(
    socket_config: PrinterSocketConfig,
    fake_systemctl: FakeSystemctl,
) -> PrinterServiceManager:
    """Fixture providing a PrinterServiceManager backed by the fake systemctl."""
    if platform.system() != "Linux":
        pytest.skip("systemd socket activation is only available on Linux")
    return PrinterServiceManager(socket_config)


@pytest.fixture
def installed_service(
    service_manager: PrinterServiceManager,
    printer_device: str,
    fake_systemctl: FakeSystemctl,
) -> Generator[PrinterServiceManager, None, None]:
    """Fixture providing a PrinterServiceManager with the units already installed."""
    service_manager.install(
        printer_path=printer_device,
        version=TEST_VERSION,
        raise_if_already_installed=True,
    )
    fake_systemctl.calls.clear()

    yield service_manager
