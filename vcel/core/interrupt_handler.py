"""Signal handling for a clean stop of the poll loop."""

import signal
import threading
from typing import Dict, Optional, Sequence

from ..io.logger import get_logger

logger = get_logger("interrupt")

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ShutdownHandler:
    """Turns SIGINT/SIGTERM into a stop request.

    The poll loop waits on ``wait`` instead of sleeping, so a signal cuts
    the wait short and the loop ends after the batch in hand. A second
    signal restores the original handlers and raises ``KeyboardInterrupt``
    in whatever call is blocking.
    """

    def __init__(self, signals: Sequence[int] = SHUTDOWN_SIGNALS):
        self.signals = tuple(signals)
        self.stop_event = threading.Event()
        self.received_signal: Optional[int] = None
        self._original_handlers: Dict[int, object] = {}

    def _handle_signal(self, signum, frame):
        if self.stop_event.is_set():
            # Second signal: the loop is stuck in a remote call, abort it
            self.restore()
            raise KeyboardInterrupt
        self.received_signal = signum
        logger.info(f"Received {signal.Signals(signum).name}, stopping")
        self.stop_event.set()

    def install(self) -> "ShutdownHandler":
        for signum in self.signals:
            self._original_handlers[signum] = signal.signal(signum, self._handle_signal)
        return self

    def restore(self) -> None:
        """Put back the handlers that were active before ``install``."""
        for signum, handler in self._original_handlers.items():
            signal.signal(signum, handler)
        self._original_handlers.clear()

    def request_stop(self) -> None:
        self.stop_event.set()

    def should_stop(self) -> bool:
        return self.stop_event.is_set()

    def wait(self, seconds: float) -> None:
        self.stop_event.wait(seconds)

    def __enter__(self) -> "ShutdownHandler":
        return self.install()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()
