"""
Unit tests for observability features.

Tests cover:
- Structured logging with JSON format
- Request correlation ID (request_id) context
- Prometheus metrics for rendering
- Metrics endpoint
"""

import json
import logging
import sys

import pytest
from prometheus_client import generate_latest

from pdl_composer.compiler import serialize_rule
from pdl_composer.core.observability import (
    StructuredFormatter,
    generate_request_id,
    get_request_id,
    metrics,
    metrics_endpoint,
    set_correlation_id,
)
from pdl_composer.domain.nodes import Rule, create_clause


@pytest.fixture
def reset_request_id():
    yield
    set_correlation_id("")


class TestRequestIdContext:
    @pytest.mark.anyio
    async def test_generated_ids_are_unique(self):
        assert generate_request_id() != generate_request_id()

    @pytest.mark.anyio
    async def test_set_and_get(self, reset_request_id):
        set_correlation_id("req-42")

        assert get_request_id() == "req-42"


class TestStructuredFormatter:
    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            name="pdl_composer.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=10,
            msg="Rendered %s rule",
            args=("allow",),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    @pytest.mark.anyio
    async def test_outputs_json(self):
        entry = json.loads(StructuredFormatter().format(self._record()))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "pdl_composer.test"
        assert entry["message"] == "Rendered allow rule"
        assert entry["line"] == 10
        assert "timestamp" in entry

    @pytest.mark.anyio
    async def test_includes_request_id(self, reset_request_id):
        set_correlation_id("req-7")

        entry = json.loads(StructuredFormatter().format(self._record()))

        assert entry["request_id"] == "req-7"

    @pytest.mark.anyio
    async def test_includes_extra_fields(self):
        entry = json.loads(StructuredFormatter().format(self._record(node_count=3)))

        assert entry["extra"] == {"node_count": 3}

    @pytest.mark.anyio
    async def test_includes_exception(self):
        try:
            raise ValueError("bad tree")
        except ValueError:
            record = logging.LogRecord(
                "pdl_composer.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["exception"] == {"type": "ValueError", "message": "bad tree"}


class TestRenderMetrics:
    @pytest.mark.anyio
    async def test_render_increments_counter(self):
        counter = metrics.render_total.labels(status="success")
        before = counter._value.get()

        serialize_rule(Rule(items=(create_clause("a"),)))

        assert counter._value.get() == before + 1

    @pytest.mark.anyio
    async def test_metrics_exported(self):
        serialize_rule(Rule(items=(create_clause("a"),)))

        output = generate_latest(metrics.registry).decode()

        assert "pdl_render_total" in output
        assert "pdl_render_nodes" in output


class TestMetricsEndpoint:
    @pytest.mark.anyio
    async def test_metrics_endpoint_response(self):
        response = metrics_endpoint()

        assert response.media_type.startswith("text/plain")
        assert b"http_requests_total" in response.body

    @pytest.mark.anyio
    async def test_metrics_route(self, client):
        client.get("/api/v1/fields")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "http_requests_total" in response.text


def _request_routes() -> set[str]:
    return {
        sample.labels["route"]
        for family in metrics.http_requests_total.collect()
        for sample in family.samples
        if sample.name == "http_requests_total"
    }


class TestRouteLabels:
    @pytest.mark.anyio
    async def test_path_parameters_share_one_series(self, client):
        for i in range(20):
            client.get(f"/api/v1/fields/unknown.path.{i}")

        field_routes = {route for route in _request_routes() if route.startswith("/api/v1/fields/")}

        assert field_routes == {"/api/v1/fields/{field_path}"}

    @pytest.mark.anyio
    async def test_unmatched_paths_use_fixed_label(self, client):
        for i in range(5):
            assert client.get(f"/no/such/route/{i}").status_code == 404

        routes = _request_routes()

        assert "unmatched" in routes
        assert not any(route.startswith("/no/such/route") for route in routes)


class TestRenderErrorMetrics:
    @pytest.mark.anyio
    async def test_failed_render_counts_as_error(self, monkeypatch):
        def broken_render(items, depth=0):
            raise RuntimeError("render failed")

        monkeypatch.setattr("pdl_composer.compiler.serializer.render", broken_render)
        counter = metrics.render_total.labels(status="error")
        before = counter._value.get()

        with pytest.raises(RuntimeError, match="render failed"):
            serialize_rule(Rule(items=(create_clause("a"),)))

        assert counter._value.get() == before + 1
