"""Privilege checks."""

import os

from escpos_socket_manager.exceptions import NotRootError


def is_root() -> bool:
    """Check whether the process runs with an effective uid of 0."""
    return os.geteuid() == 0


def require_root() -> None:
    """
    Ensure the process runs as root.

    Writing to /etc/systemd/system and running systemctl against the
    system manager both need elevated permissions.

    Raises:
        NotRootError: If the effective uid is not 0.
    """
    if not is_root():
        raise NotRootError()
