"""Unit tests for the traced decorator against an in-memory span exporter."""

from unittest.mock import patch

import pytest
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from tasks_management.domain.exceptions import ResourceNotFoundException
from tasks_management.shared.telemetry.tracing import add_span_attributes, traced


@pytest.fixture
def exporter():
    """Spans finished while the fixture is active; traced() picks up its provider."""
    span_exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    with patch.object(trace, "get_tracer", provider.get_tracer):
        yield span_exporter
    provider.shutdown()


async def test_async_function_gets_ok_span_with_safe_kwargs(exporter) -> None:
    @traced("task.add", attributes={"component": "tasks"})
    async def add(*, task_id: int, title: str) -> int:
        add_span_attributes(assets_synced=1)
        return task_id

    assert await add(task_id=7, title="Quarterly numbers") == 7

    (span,) = exporter.get_finished_spans()
    assert span.name == "task.add"
    assert span.status.status_code == StatusCode.OK
    assert span.attributes["component"] == "tasks"
    assert span.attributes["arg.task_id"] == "7"
    assert span.attributes["assets_synced"] == 1
    assert "arg.title" not in span.attributes


async def test_async_failure_is_recorded_and_reraised(exporter) -> None:
    @traced("task.delete")
    async def delete(task_id: int) -> None:
        raise ResourceNotFoundException("task", task_id)

    with pytest.raises(ResourceNotFoundException):
        await delete(5)

    (span,) = exporter.get_finished_spans()
    assert span.status.status_code == StatusCode.ERROR
    assert [e.name for e in span.events] == ["exception"]


def test_sync_function_and_default_span_name(exporter) -> None:
    @traced()
    def summarize(text: str) -> str:
        return text.upper()

    assert summarize("ok") == "OK"
    (span,) = exporter.get_finished_spans()
    assert span.name.endswith("summarize")


def test_add_span_attributes_without_span_is_noop() -> None:
    add_span_attributes(tasks_deleted=3)
