"""Server-side event collector and event category lookup."""

from typing import Any, Dict, List, Optional

from pyVmomi import vim

from ..io.logger import get_logger
from .events import type_name_of
from .exceptions import CollectorError, FetchError, RemoteError
from .session import REMOTE_ERRORS, describe_fault

logger = get_logger("collector")

DEFAULT_SEVERITY = "info"


def build_filter_spec(entity: Any) -> Any:
    """Filter matching ``entity`` and every entity below it."""
    return vim.event.EventFilterSpec(
        entity=vim.event.EventFilterSpec.ByEntity(
            entity=entity,
            recursion=vim.event.EventFilterSpec.RecursionOption.all,
        )
    )


class EventCollector:
    """A remote cursor over the event stream.

    The server keeps the read position; every ``read_next`` call returns
    only events not handed out before.
    """

    def __init__(self, collector: Any):
        self._collector: Optional[Any] = collector

    @classmethod
    def create(cls, event_manager: Any, entity: Any) -> "EventCollector":
        try:
            remote = event_manager.CreateCollectorForEvents(
                filter=build_filter_spec(entity)
            )
        except REMOTE_ERRORS as e:
            raise CollectorError(
                f"cannot create event collector: {describe_fault(e)}"
            ) from e
        logger.info(f"Created event collector for {getattr(entity, 'name', entity)}")
        return cls(remote)

    @property
    def active(self) -> bool:
        return self._collector is not None

    def _remote(self) -> Any:
        if self._collector is None:
            raise CollectorError("event collector has been destroyed")
        return self._collector

    def configure(self, page_size: int = 0) -> None:
        """Set the page size and move the cursor to the newest event."""
        remote = self._remote()
        try:
            remote.SetCollectorPageSize(maxCount=page_size)
            remote.ResetCollector()
        except REMOTE_ERRORS as e:
            raise CollectorError(
                f"cannot configure event collector: {describe_fault(e)}"
            ) from e

    def read_next(self, max_count: int) -> List[Any]:
        """Up to ``max_count`` events newer than the previous call, oldest first."""
        remote = self._remote()
        try:
            events = remote.ReadNextEvents(maxCount=max_count)
        except REMOTE_ERRORS as e:
            raise FetchError(describe_fault(e)) from e
        return list(events or [])

    def destroy(self) -> None:
        """Release the server-side collector. Safe to call more than once."""
        if self._collector is None:
            return
        remote, self._collector = self._collector, None
        try:
            remote.DestroyCollector()
        except REMOTE_ERRORS as e:
            logger.warning(f"Destroying event collector failed: {describe_fault(e)}")


class CategoryResolver:
    """Maps events to their category (info, warning, error, user).

    Events that carry a severity report it. For all others the category is
    looked up by type name in the event manager's description table, which
    is static, so it is fetched once.
    """

    def __init__(self, event_manager: Any):
        self.event_manager = event_manager
        self._categories: Optional[Dict[str, str]] = None

    def _category_table(self) -> Dict[str, str]:
        if self._categories is None:
            try:
                details = self.event_manager.description.eventInfo
            except REMOTE_ERRORS as e:
                raise RemoteError(
                    f"cannot read event descriptions: {describe_fault(e)}"
                ) from e
            self._categories = {
                detail.key: detail.category for detail in details or []
            }
        return self._categories

    def category(self, raw_event: Any) -> str:
        if hasattr(raw_event, "severity"):
            return raw_event.severity or DEFAULT_SEVERITY
        return self._category_table().get(type_name_of(raw_event), "")
