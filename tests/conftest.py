"""Minimal test fixtures - just what we actually need."""

import io
import logging
from datetime import timezone
from unittest.mock import patch

import pytest

from vcel.io.output import RecordWriter


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Keep a real ~/.config/vcel/vcel.yaml and VCEL_* variables out of tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in ("VCEL_URL", "VCEL_INSECURE", "VCEL_DATACENTER", "VCEL_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield tmp_path


@pytest.fixture(autouse=True)
def reset_vcel_logger():
    """Tests may reconfigure logging; put the defaults back afterwards."""
    yield
    from vcel.io.logger import setup_logging

    setup_logging()


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def writer(stream):
    """A writer rendering timestamps in UTC so lines are deterministic."""
    return RecordWriter(stream, tz=timezone.utc)


@pytest.fixture
def plain_filter_spec():
    """Skip building a real SDK filter spec around fake datacenters."""
    with patch(
        "vcel.core.collector.build_filter_spec",
        side_effect=lambda entity: {"entity": entity, "recursion": "all"},
    ) as spec:
        yield spec
