"""Input/output helpers: logging, config locations and the record stream."""

from .directories import get_config_dir, get_default_config_path
from .logger import get_logger, setup_logging
from .output import RecordWriter, encode_record, format_line, format_timestamp

__all__ = [
    "RecordWriter",
    "encode_record",
    "format_line",
    "format_timestamp",
    "get_config_dir",
    "get_default_config_path",
    "get_logger",
    "setup_logging",
]
