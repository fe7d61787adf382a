"""Line format of the output stream.

Each event becomes one line::

    <RFC3339 local timestamp>\\t<compact JSON object>\\n
"""

import json
import sys
from datetime import datetime, tzinfo
from typing import Any, Dict, Optional, TextIO

from ..core.events import as_utc


def format_timestamp(value: datetime, tz: Optional[tzinfo] = None) -> str:
    """Render ``value`` as RFC3339 in ``tz`` (the local zone by default).

    A zero offset is written as ``Z``.
    """
    local = as_utc(value).astimezone(tz)
    text = local.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def encode_record(record: Dict[str, Any]) -> str:
    """Compact JSON, keys in insertion order, non-ASCII kept as is."""
    return json.dumps(record, separators=(",", ":"), ensure_ascii=False)


def format_line(record: Dict[str, Any], created: datetime, tz: Optional[tzinfo] = None) -> str:
    return f"{format_timestamp(created, tz)}\t{encode_record(record)}\n"


class RecordWriter:
    """Writes banner and event lines to a text stream, flushing each line."""

    def __init__(self, stream: Optional[TextIO] = None, tz: Optional[tzinfo] = None):
        self.stream = stream if stream is not None else sys.stdout
        self.tz = tz
        self.lines_written = 0

    def banner(self, url: str, insecure: bool) -> None:
        self.stream.write(f"url={url} insecure={str(insecure).lower()}\n")
        self.stream.flush()

    def write(self, record: Dict[str, Any], created: datetime) -> None:
        self.stream.write(format_line(record, created, self.tz))
        self.stream.flush()
        self.lines_written += 1
