"""The poll loop: fetch new events, flatten them, write one line each."""

import time
from typing import Any, Callable, Optional

from ..config.schema import Settings
from ..io.logger import get_logger
from ..io.output import RecordWriter
from .app_context import TailerContext
from .events import event_from_vim, normalize_event
from .exceptions import FetchError
from .interrupt_handler import ShutdownHandler
from .retry import retry_with_exponential_backoff
from .session import VSphereSession

logger = get_logger("tailer")


class EventTailer:
    """Runs the poll loop against an open ``TailerContext``.

    ``sleep`` and ``should_stop`` are injectable so the loop can be driven
    without waiting in real time.
    """

    def __init__(
        self,
        context: TailerContext,
        sleep: Callable[[float], Any] = time.sleep,
        should_stop: Callable[[], bool] = lambda: False,
    ):
        self.context = context
        self.sleep = sleep
        self.should_stop = should_stop
        self.polling = context.settings.tuning.polling
        self.retry = context.settings.tuning.retry

    def fetch(self) -> list:
        return retry_with_exponential_backoff(
            lambda: self.context.collector.read_next(self.polling.batch_size),
            sleep=self.sleep,
            max_retries=self.retry.max_retries,
            base_delay=self.retry.base_delay,
            max_delay=self.retry.max_delay,
            retry_on=(FetchError,),
        )

    def category_of(self, raw_event: Any) -> str:
        """Category of the event, or "" when the lookup fails."""
        try:
            return self.context.categories.category(raw_event)
        except Exception as e:
            logger.debug(f"Category lookup failed: {e}")
            return ""

    def emit(self, raw_event: Any) -> None:
        event = event_from_vim(raw_event)
        record = normalize_event(event, self.category_of(raw_event))
        self.context.writer.write(record, event.created_time)

    def poll_once(self) -> int:
        """Fetch one batch and write it out in server order."""
        batch = self.fetch()
        for raw_event in batch:
            self.emit(raw_event)
        logger.debug(f"Wrote {len(batch)} event(s)")
        return len(batch)

    def run(self, max_iterations: Optional[int] = None) -> int:
        """Poll until stopped; returns the number of completed iterations."""
        iterations = 0
        while not self.should_stop():
            self.poll_once()
            iterations += 1
            if self.should_stop():
                break
            self.sleep(self.polling.interval)
            if max_iterations is not None and iterations >= max_iterations:
                break
        return iterations


def run_tailer(
    settings: Settings,
    writer: Optional[RecordWriter] = None,
    shutdown: Optional[ShutdownHandler] = None,
    session_factory: Callable[..., VSphereSession] = VSphereSession,
    max_iterations: Optional[int] = None,
) -> int:
    """Open the context and tail until stopped.

    The collector and the session are released on every exit path once
    they exist, fatal errors included.
    """
    writer = writer or RecordWriter()
    shutdown = shutdown or ShutdownHandler()

    context = TailerContext.open(settings, writer, session_factory)
    try:
        tailer = EventTailer(
            context, sleep=shutdown.wait, should_stop=shutdown.should_stop
        )
        return tailer.run(max_iterations=max_iterations)
    finally:
        context.close()
