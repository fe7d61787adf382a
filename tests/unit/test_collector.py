"""Tests for the event collector wrapper and category lookup."""

from http.client import HTTPException, IncompleteRead
from types import SimpleNamespace
from unittest.mock import Mock

import pytest
from pyVmomi import vim

from vcel.core.collector import CategoryResolver, EventCollector, build_filter_spec
from vcel.core.exceptions import CollectorError, FetchError, RemoteError
from tests.builders import (
    FakeCollector,
    FakeEventManager,
    make_event_info,
    make_vim_event,
    make_vim_task_event,
)


class TestBuildFilterSpec:
    def test_scopes_to_entity_and_all_descendants(self):
        datacenter = vim.Datacenter("datacenter-1")

        spec = build_filter_spec(datacenter)

        assert isinstance(spec, vim.event.EventFilterSpec)
        assert spec.entity.entity == datacenter
        assert spec.entity.recursion == vim.event.EventFilterSpec.RecursionOption.all


class TestEventCollector:
    def test_create_passes_filter(self, plain_filter_spec):
        manager = FakeEventManager()
        datacenter = SimpleNamespace(name="dc1")

        collector = EventCollector.create(manager, datacenter)

        assert collector.active
        assert manager.filters == [{"entity": datacenter, "recursion": "all"}]

    def test_create_failure(self, plain_filter_spec):
        manager = Mock()
        manager.CreateCollectorForEvents.side_effect = OSError("connection reset")

        with pytest.raises(CollectorError, match="connection reset") as exc_info:
            EventCollector.create(manager, SimpleNamespace(name="dc1"))

        assert isinstance(exc_info.value.__cause__, OSError)

    def test_configure_sets_page_size_then_resets(self):
        remote = FakeCollector()

        EventCollector(remote).configure(page_size=0)

        assert remote.calls == [("SetCollectorPageSize", 0), ("ResetCollector",)]

    def test_configure_failure(self):
        remote = Mock()
        remote.ResetCollector.side_effect = OSError("broken pipe")

        with pytest.raises(CollectorError, match="broken pipe"):
            EventCollector(remote).configure()

    def test_read_next_returns_batch_in_order(self):
        first, second = make_vim_event(message="1"), make_vim_event(message="2")
        remote = FakeCollector([[first, second]])

        assert EventCollector(remote).read_next(10) == [first, second]
        assert remote.calls == [("ReadNextEvents", 10)]

    def test_read_next_none_is_empty(self):
        remote = Mock()
        remote.ReadNextEvents.return_value = None

        assert EventCollector(remote).read_next(10) == []

    def test_read_next_failure_is_fetch_error(self):
        remote = FakeCollector([TimeoutError("timed out")])

        with pytest.raises(FetchError, match="timed out"):
            EventCollector(remote).read_next(10)

    def test_http_error_is_fetch_error(self):
        remote = FakeCollector([HTTPException("503 Service Unavailable")])

        with pytest.raises(FetchError, match="503 Service Unavailable") as exc_info:
            EventCollector(remote).read_next(10)

        assert isinstance(exc_info.value.__cause__, HTTPException)

    def test_truncated_reply_is_fetch_error(self):
        remote = FakeCollector([IncompleteRead(b"<soapenv", 512)])

        with pytest.raises(FetchError):
            EventCollector(remote).read_next(10)

    def test_fault_message_is_used(self):
        fault = vim.fault.NotAuthenticated(msg="The session is not authenticated.")
        remote = FakeCollector([fault])

        with pytest.raises(FetchError, match="The session is not authenticated."):
            EventCollector(remote).read_next(10)

    def test_destroy_is_idempotent(self):
        remote = FakeCollector()
        collector = EventCollector(remote)

        collector.destroy()
        collector.destroy()

        assert remote.calls == [("DestroyCollector",)]
        assert not collector.active

    def test_destroy_failure_is_not_raised(self):
        remote = Mock()
        remote.DestroyCollector.side_effect = OSError("gone")
        collector = EventCollector(remote)

        collector.destroy()

        assert not collector.active

    def test_destroy_http_error_is_not_raised(self):
        remote = Mock()
        remote.DestroyCollector.side_effect = HTTPException("502 Bad Gateway")
        collector = EventCollector(remote)

        collector.destroy()

        assert not collector.active

    def test_use_after_destroy(self):
        collector = EventCollector(FakeCollector())
        collector.destroy()

        with pytest.raises(CollectorError):
            collector.read_next(10)


class TestCategoryResolver:
    def test_lookup_by_type_name(self):
        manager = FakeEventManager(
            event_info=make_event_info(VmPoweredOnEvent="info", VmFailedToPowerOnEvent="error")
        )
        resolver = CategoryResolver(manager)

        assert resolver.category(make_vim_event("VmPoweredOnEvent")) == "info"
        assert resolver.category(make_vim_event("VmFailedToPowerOnEvent")) == "error"

    def test_unknown_type_is_empty(self):
        resolver = CategoryResolver(FakeEventManager(event_info=[]))

        assert resolver.category(make_vim_event("BrandNewEvent")) == ""

    def test_task_event_uses_table(self):
        resolver = CategoryResolver(FakeEventManager(event_info=make_event_info(TaskEvent="user")))

        assert resolver.category(make_vim_task_event()) == "user"

    def test_severity_wins(self):
        resolver = CategoryResolver(FakeEventManager(event_info=make_event_info(EventEx="info")))

        assert resolver.category(make_vim_event("EventEx", severity="warning")) == "warning"

    def test_empty_severity_is_info(self):
        resolver = CategoryResolver(FakeEventManager(event_info=[]))

        assert resolver.category(make_vim_event("EventEx", severity="")) == "info"

    def test_table_is_fetched_once(self):
        class CountingManager:
            reads = 0

            @property
            def description(self):
                self.reads += 1
                return SimpleNamespace(eventInfo=make_event_info(VmPoweredOnEvent="info"))

        manager = CountingManager()
        resolver = CategoryResolver(manager)

        for _ in range(3):
            assert resolver.category(make_vim_event("VmPoweredOnEvent")) == "info"

        assert manager.reads == 1

    def test_lookup_failure_raises_remote_error(self):
        class BrokenManager:
            @property
            def description(self):
                raise OSError("connection refused")

        resolver = CategoryResolver(BrokenManager())

        with pytest.raises(RemoteError, match="connection refused"):
            resolver.category(make_vim_event())
        assert resolver._categories is None
