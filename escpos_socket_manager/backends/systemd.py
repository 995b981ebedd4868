"""systemd socket-activation backend."""

import os
import re
import subprocess
import time
from typing import Callable, List, Optional

from packaging.version import InvalidVersion, Version

from escpos_socket_manager.backends.base import (
    PrinterSocketBackend,
    ProgressCallback,
    DEFAULT_STATUS_WAIT_TIMEOUT_SECONDS,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_SUBPROCESS_TIMEOUT_SECONDS,
)
from escpos_socket_manager.backends.systemd_templates import (
    SOCKET_UNIT_TEMPLATE,
    SERVICE_UNIT_TEMPLATE,
)
from escpos_socket_manager.config import PrinterSocketConfig
from escpos_socket_manager.status import (
    ServiceStatus, InstallationStatus, EnablementStatus, RunningStatus
)
from escpos_socket_manager.exceptions import (
    ServiceOperation, ServiceOperationError, ServiceNotInstalledError,
    ServiceAlreadyInstalledError, ServiceAlreadyEnabledError,
    ServiceAlreadyDisabledError, ServiceAlreadyRunningError,
    ServiceAlreadyStoppedError
)

UNIT_FILE_MODE = 0o644


class SystemdSocketBackend(PrinterSocketBackend):
    """System-wide systemd socket unit feeding a per-connection template service."""

    def __init__(self, config: PrinterSocketConfig):
        super().__init__(config)
        self.socket_file_path = config.socket_file_path
        self.service_file_path = config.service_file_path

        self.logger.info('SystemdSocketBackend initialized for socket: %s', config.socket_unit)
        self.logger.debug('socket_file_path: %s, service_file_path: %s',
                          self.socket_file_path, self.service_file_path)

    def activation_commands(self) -> List[List[str]]:
        """systemctl argument lists run, in order, after the units are written."""
        return [
            ['daemon-reload'],
            ['enable', '--now', self.config.socket_unit],
            ['restart', self.config.socket_unit],
        ]

    def render_socket_unit(self) -> str:
        return SOCKET_UNIT_TEMPLATE.format(listen_stream=self.config.listen_stream)

    def render_service_unit(self, printer_path: str, version: Version) -> str:
        return SERVICE_UNIT_TEMPLATE.format(printer_path=printer_path, version=str(version))

    def install(
        self,
        printer_path: str,
        version: Version,
        raise_if_already_installed: bool = False,
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        self.logger.info('Installing printer socket for %s, version: %s', printer_path, version)
        report = progress or (lambda line: None)

        if self.status.installation_status == InstallationStatus.INSTALLED:
            if raise_if_already_installed:
                raise ServiceAlreadyInstalledError()
            self.logger.info('Units already installed, overwriting')

        try:
            os.makedirs(self.config.unit_dir, exist_ok=True)
            self._write_unit(self.socket_file_path, self.render_socket_unit())
        except OSError as e:
            raise ServiceOperationError(
                ServiceOperation.INSTALL, f'Failed to write socket file {self.socket_file_path}: {e}'
            ) from e
        report(f'✓ Socket file created: {self.socket_file_path}')

        try:
            self._write_unit(self.service_file_path, self.render_service_unit(printer_path, version))
        except OSError as e:
            raise ServiceOperationError(
                ServiceOperation.INSTALL, f'Failed to write service file {self.service_file_path}: {e}'
            ) from e
        report(f'✓ Service file created: {self.service_file_path}')

        for args in self.activation_commands():
            report(f'Running: {self._format_command(args)}...')
            self._systemctl(ServiceOperation.INSTALL, args)
            report('✓ Command succeeded.')

        if not self._wait_for_service_status(lambda s: s.running_status == RunningStatus.RUNNING):
            raise ServiceOperationError(ServiceOperation.INSTALL, 'Socket did not become active within timeout')
        self.logger.info('Successfully installed and started socket: %s', self.config.socket_unit)

    def uninstall(self, raise_if_not_installed: bool = False) -> None:
        self.logger.info('Uninstalling printer socket: %s', self.config.socket_unit)

        current_status = self.status
        if current_status.installation_status == InstallationStatus.NOT_INSTALLED:
            if raise_if_not_installed:
                raise ServiceNotInstalledError()
            self.logger.debug('Units are not installed, skipping')
            return

        if (current_status.running_status == RunningStatus.RUNNING
                or current_status.enablement_status == EnablementStatus.ENABLED):
            self.logger.info('Socket is active or enabled, disabling it first')
            self._systemctl(ServiceOperation.UNINSTALL, ['disable', '--now', self.config.socket_unit])

        for path in (self.socket_file_path, self.service_file_path):
            if path.exists():
                self.logger.info('Removing unit file: %s', path)
                try:
                    path.unlink()
                except OSError as e:
                    raise ServiceOperationError(
                        ServiceOperation.UNINSTALL, f'Failed to remove unit file {path}: {e}'
                    ) from e

        self._systemctl(ServiceOperation.UNINSTALL, ['daemon-reload'])
        self.logger.info('Socket %s successfully uninstalled', self.config.socket_unit)

    def enable(self, raise_if_already_enabled: bool = False) -> None:
        self.logger.info('Enabling socket: %s', self.config.socket_unit)

        current_status = self.status
        if current_status.installation_status == InstallationStatus.NOT_INSTALLED:
            self.logger.warning('Units are not installed')
            raise ServiceNotInstalledError()

        if current_status.enablement_status == EnablementStatus.ENABLED:
            if raise_if_already_enabled:
                self.logger.warning('Socket is already enabled')
                raise ServiceAlreadyEnabledError()
            self.logger.debug('Socket is already enabled, skipping')
            return

        self._systemctl(ServiceOperation.ENABLE, ['enable', self.config.socket_unit])
        self.logger.info('Socket %s successfully enabled', self.config.socket_unit)

    def disable(self, raise_if_already_disabled: bool = False) -> None:
        self.logger.info('Disabling socket: %s', self.config.socket_unit)

        current_status = self.status
        if current_status.installation_status == InstallationStatus.NOT_INSTALLED:
            self.logger.warning('Units are not installed')
            raise ServiceNotInstalledError()

        if current_status.enablement_status == EnablementStatus.DISABLED:
            if raise_if_already_disabled:
                self.logger.warning('Socket is already disabled')
                raise ServiceAlreadyDisabledError()
            self.logger.debug('Socket is already disabled, skipping')
            return

        if current_status.running_status == RunningStatus.RUNNING:
            self.logger.info('Socket is active, stopping first')
            self.stop()

        self._systemctl(ServiceOperation.DISABLE, ['disable', self.config.socket_unit])
        self.logger.info('Socket %s successfully disabled', self.config.socket_unit)

    def start(self, raise_if_already_running: bool = False) -> None:
        self.logger.info('Starting socket: %s', self.config.socket_unit)

        current_status = self.status
        if current_status.installation_status == InstallationStatus.NOT_INSTALLED:
            self.logger.warning('Units are not installed')
            raise ServiceNotInstalledError()

        if current_status.enablement_status == EnablementStatus.DISABLED:
            self.logger.info('Socket is disabled, enabling first')
            self.enable()

        if current_status.running_status == RunningStatus.RUNNING:
            if raise_if_already_running:
                self.logger.warning('Socket is already active')
                raise ServiceAlreadyRunningError()
            self.logger.debug('Socket is already active, skipping')
            return

        self._systemctl(ServiceOperation.START, ['start', self.config.socket_unit])

        if not self._wait_for_service_status(lambda s: s.running_status == RunningStatus.RUNNING):
            raise ServiceOperationError(ServiceOperation.START, 'Socket did not start within timeout')
        self.logger.info('Socket %s successfully started', self.config.socket_unit)

    def stop(self, raise_if_already_stopped: bool = False) -> None:
        self.logger.info('Stopping socket: %s', self.config.socket_unit)

        current_status = self.status
        if current_status.installation_status == InstallationStatus.NOT_INSTALLED:
            self.logger.warning('Units are not installed')
            raise ServiceNotInstalledError()

        if current_status.running_status == RunningStatus.NOT_RUNNING:
            if raise_if_already_stopped:
                self.logger.warning('Socket is not active')
                raise ServiceAlreadyStoppedError()
            self.logger.debug('Socket is not active, skipping')
            return

        self._systemctl(ServiceOperation.STOP, ['stop', self.config.socket_unit])

        if not self._wait_for_service_status(lambda s: s.running_status == RunningStatus.NOT_RUNNING):
            raise ServiceOperationError(ServiceOperation.STOP, 'Socket did not stop within timeout')
        self.logger.info('Socket %s successfully stopped', self.config.socket_unit)

    def restart(self) -> None:
        self.logger.info('Restarting socket: %s', self.config.socket_unit)

        if self.status.installation_status == InstallationStatus.NOT_INSTALLED:
            self.logger.warning('Units are not installed')
            raise ServiceNotInstalledError()

        self._systemctl(ServiceOperation.RESTART, ['restart', self.config.socket_unit])

        if not self._wait_for_service_status(lambda s: s.running_status == RunningStatus.RUNNING):
            raise ServiceOperationError(ServiceOperation.RESTART, 'Socket did not restart within timeout')
        self.logger.info('Socket %s successfully restarted', self.config.socket_unit)

    @property
    def status(self) -> ServiceStatus:
        self.logger.debug('Checking status of socket: %s', self.config.socket_unit)

        service_status = ServiceStatus(
            InstallationStatus.NOT_INSTALLED,
            EnablementStatus.DISABLED,
            RunningStatus.NOT_RUNNING
        )

        if self.socket_file_path.exists() and self.service_file_path.exists():
            service_status.installation_status = InstallationStatus.INSTALLED
            service_status.printer_path = self.printer_path
        else:
            return service_status

        result_enabled = self._systemctl(
            ServiceOperation.GET_STATUS, ['is-enabled', self.config.socket_unit], check=False
        )
        if result_enabled.returncode == 0:
            service_status.enablement_status = EnablementStatus.ENABLED

        result_active = self._systemctl(
            ServiceOperation.GET_STATUS, ['is-active', self.config.socket_unit], check=False
        )
        if result_active.returncode == 0:
            service_status.running_status = RunningStatus.RUNNING

        self.logger.info('Socket %s status: %s', self.config.socket_unit, service_status)
        return service_status

    @property
    def version(self) -> Optional[Version]:
        match = self._search_service_unit(r'^Environment="VERSION=([^"]+)"$')
        if match is None:
            return None
        self.logger.debug('Found version: %s', match)
        try:
            return Version(match)
        except InvalidVersion as e:
            self.logger.error('Error parsing service version: %s', e)
            return None

    @property
    def printer_path(self) -> Optional[str]:
        return self._search_service_unit(r'^ExecStart=-/usr/bin/tee /dev/null > (.+)$')

    def _search_service_unit(self, pattern: str) -> Optional[str]:
        if not self.service_file_path.exists():
            self.logger.warning('Service file not found, units may not be installed')
            return None

        try:
            content = self.service_file_path.read_text()
        except OSError as e:
            self.logger.error('Error reading service file: %s', e)
            return None

        match = re.search(pattern, content, re.MULTILINE)
        if match is None:
            self.logger.warning('Pattern %s not found in service file', pattern)
            return None
        return match.group(1).strip()

    def _write_unit(self, path, content: str) -> None:
        self.logger.info('Writing unit file: %s', path)
        path.write_text(content)
        os.chmod(path, UNIT_FILE_MODE)

    @staticmethod
    def _format_command(args: List[str]) -> str:
        return ' '.join(['systemctl', *args])

    def _systemctl(
        self,
        operation: ServiceOperation,
        args: List[str],
        check: bool = True,
    ) -> subprocess.CompletedProcess:
        """Run systemctl with args, raising ServiceOperationError on failure when check is set."""
        command = ['systemctl', *args]
        self.logger.debug('Running: %s', command)
        try:
            result = subprocess.run(
                command,
                stdout=subprocess.PIPE, stderr=subprocess.STDOUT,
                text=True, check=False, timeout=DEFAULT_SUBPROCESS_TIMEOUT_SECONDS
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            self.logger.error('Failed to run %s: %s', command, e)
            raise ServiceOperationError(
                operation, f"Error running command '{self._format_command(args)}': {e}"
            ) from e

        if check and result.returncode != 0:
            self.logger.error('Command %s exited with %d: %s', command, result.returncode, result.stdout)
            raise ServiceOperationError(
                operation,
                f"Error running command '{self._format_command(args)}': "
                f"exit status {result.returncode}\nOutput: {result.stdout}"
            )
        return result

    def _wait_for_service_status(
        self,
        predicate: Callable[[ServiceStatus], bool],
        timeout_seconds: int = DEFAULT_STATUS_WAIT_TIMEOUT_SECONDS,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    ) -> bool:
        self.logger.info('Waiting for socket %s status to change (timeout: %ss)',
                         self.config.socket_unit, timeout_seconds)
        start_time = time.time()

        while (time.time() - start_time) < timeout_seconds:
            current_status = self.status
            if predicate(current_status):
                elapsed = (time.time() - start_time) * 1000
                self.logger.info('Socket %s reached desired status after %.0fms',
                                 self.config.socket_unit, elapsed)
                return True

            time.sleep(poll_interval_ms / 1000.0)

        self.logger.warning('Timeout reached while waiting for %s status change', self.config.socket_unit)
        return False
