"""Tests for socket state transitions and status consistency.

Redundant operations (e.g. starting an already listening socket) do not
raise unless explicitly requested via the raise_if_* parameters.
"""

import pytest

from escpos_socket_manager import (
    EnablementStatus,
    RunningStatus,
    ServiceAlreadyDisabledError,
    ServiceAlreadyEnabledError,
    ServiceAlreadyRunningError,
    ServiceAlreadyStoppedError,
    ServiceNotInstalledError,
)
from conftest import TEST_SOCKET_UNIT


class TestStateTransitions:
    """Tests for socket state transitions and status consistency."""

    def test_start_running_maintains_status(self, installed_service, fake_systemctl):
        status = installed_service.status
        assert status.running_status == RunningStatus.RUNNING
        assert status.enablement_status == EnablementStatus.ENABLED

        installed_service.start()

        status = installed_service.status
        assert status.running_status == RunningStatus.RUNNING
        assert status.enablement_status == EnablementStatus.ENABLED
        assert fake_systemctl.mutating_calls == []

    def test_enable_enabled_maintains_status(self, installed_service, fake_systemctl):
        installed_service.enable()

        assert installed_service.status.enablement_status == EnablementStatus.ENABLED
        assert fake_systemctl.mutating_calls == []

    def test_stop_stopped_maintains_status(self, installed_service):
        installed_service.stop()

        status = installed_service.status
        assert status.running_status == RunningStatus.NOT_RUNNING
        assert status.enablement_status == EnablementStatus.ENABLED

        installed_service.stop()

        assert installed_service.status.running_status == RunningStatus.NOT_RUNNING

    def test_disable_stops_running_socket(self, installed_service, fake_systemctl):
        """Disabling a listening socket stops it first."""
        installed_service.disable()

        status = installed_service.status
        assert status.enablement_status == EnablementStatus.DISABLED
        assert status.running_status == RunningStatus.NOT_RUNNING
        assert fake_systemctl.mutating_calls == [
            ["stop", TEST_SOCKET_UNIT],
            ["disable", TEST_SOCKET_UNIT],
        ]

    def test_start_disabled_enables_it(self, installed_service, fake_systemctl):
        """Starting a disabled socket enables it as well."""
        installed_service.disable()
        fake_systemctl.calls.clear()

        installed_service.start()

        status = installed_service.status
        assert status.running_status == RunningStatus.RUNNING
        assert status.enablement_status == EnablementStatus.ENABLED
        assert fake_systemctl.mutating_calls == [
            ["enable", TEST_SOCKET_UNIT],
            ["start", TEST_SOCKET_UNIT],
        ]

    def test_restart(self, installed_service, fake_systemctl):
        installed_service.restart()

        assert installed_service.status.running_status == RunningStatus.RUNNING
        assert fake_systemctl.mutating_calls == [["restart", TEST_SOCKET_UNIT]]

    def test_stopped_and_disabled_operations(self, installed_service):
        installed_service.stop()
        installed_service.disable()

        installed_service.stop()
        installed_service.disable()

        status = installed_service.status
        assert status.running_status == RunningStatus.NOT_RUNNING
        assert status.enablement_status == EnablementStatus.DISABLED


class TestRaiseIfRequested:
    """Tests for the raise_if_* parameters."""

    def test_already_running(self, installed_service):
        with pytest.raises(ServiceAlreadyRunningError):
            installed_service.start(raise_if_already_running=True)

    def test_already_enabled(self, installed_service):
        with pytest.raises(ServiceAlreadyEnabledError):
            installed_service.enable(raise_if_already_enabled=True)

    def test_already_stopped(self, installed_service):
        installed_service.stop()
        with pytest.raises(ServiceAlreadyStoppedError):
            installed_service.stop(raise_if_already_stopped=True)

    def test_already_disabled(self, installed_service):
        installed_service.disable()
        with pytest.raises(ServiceAlreadyDisabledError):
            installed_service.disable(raise_if_already_disabled=True)


class TestNotInstalled:
    """Operations on the socket require the units to be installed."""

    @pytest.mark.parametrize("operation", ["enable", "disable", "start", "stop", "restart"])
    def test_operation_raises(self, service_manager, fake_systemctl, operation):
        with pytest.raises(ServiceNotInstalledError):
            getattr(service_manager, operation)()
        assert fake_systemctl.calls == []
