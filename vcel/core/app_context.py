"""Owned context for one tailing run."""

from typing import Any, Callable, Optional

from ..config.config import parse_endpoint_url
from ..config.schema import Settings
from ..io.logger import get_logger
from ..io.output import RecordWriter
from .collector import CategoryResolver, EventCollector
from .session import VSphereSession

logger = get_logger("context")


class TailerContext:
    """Everything the poll loop works with, built explicitly at startup.

    Holds the settings, the open session, the event collector scoped to the
    datacenter subtree, the category resolver and the output writer.
    ``close`` releases the collector and the session.
    """

    def __init__(
        self,
        settings: Settings,
        session: VSphereSession,
        collector: EventCollector,
        categories: CategoryResolver,
        writer: RecordWriter,
        datacenter: Any = None,
    ):
        self.settings = settings
        self.session = session
        self.collector = collector
        self.categories = categories
        self.writer = writer
        self.datacenter = datacenter

    @classmethod
    def open(
        cls,
        settings: Settings,
        writer: Optional[RecordWriter] = None,
        session_factory: Callable[..., VSphereSession] = VSphereSession,
    ) -> "TailerContext":
        """Connect, resolve the datacenter and start a collector at "now".

        Anything created before a failing step is released before the
        error propagates.
        """
        endpoint = parse_endpoint_url(settings.url)
        session = session_factory(endpoint, insecure=settings.insecure)
        session.open()

        collector = None
        try:
            datacenter = session.find_datacenter(settings.datacenter)
            logger.info(f"Using datacenter {datacenter.name}")

            event_manager = session.event_manager
            collector = EventCollector.create(event_manager, datacenter)
            collector.configure(page_size=settings.tuning.polling.page_size)
        except BaseException:
            try:
                if collector is not None:
                    collector.destroy()
            finally:
                session.close()
            raise

        return cls(
            settings=settings,
            session=session,
            collector=collector,
            categories=CategoryResolver(event_manager),
            writer=writer or RecordWriter(),
            datacenter=datacenter,
        )

    def close(self) -> None:
        try:
            self.collector.destroy()
        finally:
            self.session.close()

    def __enter__(self) -> "TailerContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
