"""Printer device discovery."""

import glob
import logging
import os
import stat
from typing import List

DEFAULT_DEVICE_PATTERN = '/dev/usb/lp*'

logger = logging.getLogger(__name__)


def is_character_device(path: str) -> bool:
    """Return True if path resolves to a character device."""
    try:
        mode = os.stat(path).st_mode
    except OSError as e:
        logger.debug('Cannot stat %s, skipping: %s', path, e)
        return False
    return stat.S_ISCHR(mode)


def find_printers(pattern: str = DEFAULT_DEVICE_PATTERN) -> List[str]:
    """
    Find printer devices matching a glob pattern.

    USB line printers are expected to show up as /dev/usb/lpX. Matches
    that are not character devices are dropped.

    Args:
        pattern: Glob pattern used to look for devices.

    Returns:
        Sorted list of device paths.
    """
    matches = sorted(glob.glob(pattern))
    logger.debug('Pattern %s matched: %s', pattern, matches)
    printers = [match for match in matches if is_character_device(match)]
    logger.info('Found %d printer(s) for %s', len(printers), pattern)
    return printers
