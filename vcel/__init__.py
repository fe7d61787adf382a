"""vcel - tail vCenter events as line-delimited JSON"""

__version__ = "0.1.0"

from .core import (
    GenericEvent,
    TaskEvent,
    VcelError,
    event_from_vim,
    normalize_event,
)
from .io import RecordWriter, get_logger

__all__ = [
    "__version__",
    "GenericEvent",
    "RecordWriter",
    "TaskEvent",
    "VcelError",
    "event_from_vim",
    "get_logger",
    "normalize_event",
]
