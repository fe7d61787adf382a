"""Standardized error handling for the vcel command."""

import functools
import sys
from typing import Any, Callable, Optional

from rich.console import Console

from ..core.exceptions import VcelError
from ..io.logger import get_logger

logger = get_logger("cli")

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


class CLIErrorHandler:
    """Reports a fatal error as one ``Error: <message>`` line and exits.

    Every error, known or not, ends the process with status 1. The
    traceback is only logged when debug logging is on.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)

    def _print(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def handle_error(self, error: BaseException) -> None:
        if isinstance(error, KeyboardInterrupt):
            self._handle_interrupt()
        elif isinstance(error, VcelError):
            self._handle_known_error(error)
        else:
            self._handle_unexpected_error(error)

    def _handle_interrupt(self) -> None:
        self._print("Interrupted")
        sys.exit(EXIT_INTERRUPTED)

    def _handle_known_error(self, error: VcelError) -> None:
        logger.debug("Fatal error", exc_info=error)
        self._print(f"Error: {error}")
        sys.exit(EXIT_FAILURE)

    def _handle_unexpected_error(self, error: BaseException) -> None:
        logger.debug("Unexpected error", exc_info=error)
        self._print(f"Error: {str(error) or type(error).__name__}")
        sys.exit(EXIT_FAILURE)

    def wrap_command(self, func: Callable) -> Callable:
        """Decorator to wrap a command with error handling."""

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            try:
                return func(*args, **kwargs)
            except (Exception, KeyboardInterrupt) as e:
                self.handle_error(e)

        return wrapper


# Global instance for convenience
default_handler = CLIErrorHandler()


def handle_cli_error(func: Callable) -> Callable:
    """Decorator for standardized CLI error handling."""
    return default_handler.wrap_command(func)
