"""Core of vcel: event shapes and the exception hierarchy.

Session, collector and the poll loop live in their own modules and are
imported from there.
"""

from .events import (
    EVENT_KIND,
    TASK_KIND,
    GenericEvent,
    RawEvent,
    TaskEvent,
    event_from_vim,
    normalize_event,
)
from .exceptions import (
    CollectorError,
    ConfigurationError,
    DatacenterNotFoundError,
    FetchError,
    RemoteError,
    SessionError,
    VcelError,
)

__all__ = [
    "CollectorError",
    "ConfigurationError",
    "DatacenterNotFoundError",
    "EVENT_KIND",
    "FetchError",
    "GenericEvent",
    "RawEvent",
    "RemoteError",
    "SessionError",
    "TASK_KIND",
    "TaskEvent",
    "VcelError",
    "event_from_vim",
    "normalize_event",
]
