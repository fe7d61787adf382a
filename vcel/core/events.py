"""Event shapes read from the endpoint and their flattened output records.

Events come back from the SDK as a deep class hierarchy. Only two shapes
matter for the output stream: a plain event and a task event, which also
names the entity the task ran against. ``event_from_vim`` turns any SDK
event into one of the two dataclasses below by checking which attributes
it carries, never by checking its class, so the rest of the package (and
the tests) never touch SDK types.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, Optional, Union

EVENT_KIND = "Event"
TASK_KIND = "Task"


@dataclass(frozen=True)
class GenericEvent:
    """An event with no task attached."""

    kind: ClassVar[str] = EVENT_KIND

    type_name: str
    created_time: datetime
    message: str = ""
    host: str = ""
    vm: str = ""
    username: str = ""


@dataclass(frozen=True)
class TaskEvent(GenericEvent):
    """An event raised for a task, carrying the task's subject entity."""

    kind: ClassVar[str] = TASK_KIND

    target_type: str = ""
    target_name: str = ""


RawEvent = Union[GenericEvent, TaskEvent]


def type_name_of(obj: Any) -> str:
    """Return the API type name of an SDK object (``VmPoweredOnEvent``)."""
    wsdl_name = getattr(type(obj), "_wsdlName", None) or getattr(
        obj, "_wsdlName", None
    )
    if isinstance(wsdl_name, str) and wsdl_name:
        return wsdl_name
    return type(obj).__name__


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps, convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _argument_name(argument: Any) -> str:
    if argument is None:
        return ""
    return getattr(argument, "name", None) or ""


def _task_info(raw: Any) -> Optional[Any]:
    """Return the task info of ``raw`` if it has one with an entity name."""
    info = getattr(raw, "info", None)
    if info is None or not hasattr(info, "entityName"):
        return None
    return info


def event_from_vim(raw: Any) -> RawEvent:
    """Build a ``GenericEvent`` or ``TaskEvent`` from an SDK event object."""
    created = getattr(raw, "createdTime", None)
    if created is None:
        created = datetime.fromtimestamp(0, tz=timezone.utc)

    common = dict(
        type_name=type_name_of(raw),
        created_time=as_utc(created),
        message=getattr(raw, "fullFormattedMessage", None) or "",
        host=_argument_name(getattr(raw, "host", None)),
        vm=_argument_name(getattr(raw, "vm", None)),
        username=getattr(raw, "userName", None) or "",
    )

    info = _task_info(raw)
    if info is None:
        return GenericEvent(**common)

    entity = getattr(info, "entity", None)
    return TaskEvent(
        target_type=type_name_of(entity) if entity is not None else "",
        target_name=info.entityName or "",
        **common,
    )


def epoch_seconds(value: datetime) -> int:
    """Whole Unix seconds of ``value``, rounded towards the past."""
    return int(as_utc(value).timestamp() // 1)


def normalize_event(event: RawEvent, category: str = "") -> Dict[str, Any]:
    """Flatten an event into the record written to the output stream.

    ``host``, ``vm`` and ``username`` are left out when empty; the task
    target keys only exist for task events.
    """
    record: Dict[str, Any] = {"type": event.kind}
    if isinstance(event, TaskEvent):
        record["targetType"] = event.target_type
        record["targetName"] = event.target_name

    record["message"] = event.message.strip()
    record["category"] = category or ""

    if event.host:
        record["host"] = event.host
    if event.vm:
        record["vm"] = event.vm
    if event.username:
        record["username"] = event.username

    record["time"] = epoch_seconds(event.created_time)
    return record
