"""Interactive printer selection."""

import logging
from typing import Callable, List

import typer

from escpos_socket_manager.exceptions import NoPrintersFoundError, PrinterSelectionAborted

SELECTION_PROMPT = 'Select the number of the printer to use: '
INVALID_SELECTION = 'Invalid input. Please enter a number from the list.'

logger = logging.getLogger(__name__)


def select_printer(printers: List[str], prompt: Callable[[str], str] = input) -> str:
    """
    Show the discovered printers and ask the user to pick one.

    Args:
        printers: Device paths to choose from.
        prompt: Callable that shows a prompt and returns one line of input.

    Returns:
        The selected device path.

    Raises:
        NoPrintersFoundError: If printers is empty.
        PrinterSelectionAborted: If input ends before a valid choice is made.
    """
    if not printers:
        raise NoPrintersFoundError()

    typer.echo('\nThe following USB printers were found:')
    for index, printer in enumerate(printers, start=1):
        typer.echo(f'{index}. {printer}')

    while True:
        try:
            answer = prompt(SELECTION_PROMPT)
        except EOFError:
            raise PrinterSelectionAborted('Input ended before a printer was selected') from None

        try:
            choice = int(answer.strip())
        except ValueError:
            choice = 0

        if 1 <= choice <= len(printers):
            logger.debug('Selected printer %d: %s', choice, printers[choice - 1])
            return printers[choice - 1]

        typer.echo(INVALID_SELECTION)
