"""
API tests — /management/processes endpoints and system routes.

Uses FastAPI TestClient against apps built by `create_app` with an explicit
engine, so no test depends on the processes/ directory.
"""

import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from app import create_app
from process_catalog.config import CatalogSettings
from process_catalog.engine import InMemoryProcessEngine, ProcessDefinition
from process_catalog.models import ResponseMode


def _client(engine, **settings):
    app = create_app(settings=CatalogSettings(**settings), engine=engine)
    return TestClient(app)


# ── Listing ────────────────────────────────────────────────────────────


def test_list_processes_metadata_mode(engine):
    """GET /management/processes/ returns metadata views in registry order."""
    response = _client(engine, response_mode=ResponseMode.METADATA).get("/management/processes/")
    assert response.status_code == 200
    assert response.json() == [
        {"id": "orders", "name": "Order Process", "description": "Handles orders"},
        {"id": "shipping", "name": "Shipping Process", "description": "default description"},
    ]


def test_list_processes_ids_mode(engine):
    """GET /management/processes/ returns sorted ids in ids mode."""
    engine.register(ProcessDefinition(id="billing", name="Billing Process"))
    response = _client(engine, response_mode=ResponseMode.IDS).get("/management/processes/")
    assert response.status_code == 200
    assert response.json() == ["billing", "orders", "shipping"]


def test_list_processes_summary_mode(engine):
    response = _client(engine, response_mode=ResponseMode.SUMMARY).get("/management/processes/")
    assert response.status_code == 200
    assert response.json() == [
        {"id": "orders", "name": "Order Process"},
        {"id": "shipping", "name": "Shipping Process"},
    ]


def test_list_processes_sorted_views(engine):
    engine.register(ProcessDefinition(id="billing", name="Billing Process"))
    response = _client(engine, sort_views=True).get("/management/processes/")
    assert [p["id"] for p in response.json()] == ["billing", "orders", "shipping"]


def test_list_processes_without_trailing_slash(engine):
    response = _client(engine).get("/management/processes")
    assert response.status_code == 200
    assert len(response.json()) == 2


def test_configured_default_description(engine):
    response = _client(engine, default_description="No description").get("/management/processes/")
    assert response.json()[1]["description"] == "No description"


def test_list_processes_skips_vanished_process():
    definitions = {
        "a": ProcessDefinition(id="a", name="A"),
        "c": ProcessDefinition(id="c", name="C"),
    }
    fake = MagicMock()
    fake.process_ids.return_value = ["a", "b", "c"]
    fake.process_by_id.side_effect = lambda pid: definitions[pid]

    response = _client(fake).get("/management/processes/")
    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == ["a", "c"]


def test_list_processes_failure_returns_500_envelope():
    fake = MagicMock()
    fake.process_ids.return_value = ["a"]
    fake.process_by_id.side_effect = RuntimeError("engine down")

    response = _client(fake).get("/management/processes/")
    assert response.status_code == 500
    error = response.json()["error"]
    assert error["error_code"] == "AGGREGATION_ERROR"
    assert error["detail"] == "engine down"
    assert error["retryable"] is False


# ── Single process ─────────────────────────────────────────────────────


def test_get_process(engine):
    response = _client(engine).get("/management/processes/orders")
    assert response.status_code == 200
    assert response.json() == {
        "id": "orders",
        "name": "Order Process",
        "description": "Handles orders",
    }


def test_get_unknown_process_returns_404(engine):
    response = _client(engine).get("/management/processes/missing")
    assert response.status_code == 404
    error = response.json()["error"]
    assert error["error_code"] == "PROCESS_NOT_FOUND"
    assert error["process_id"] == "missing"


def test_get_process_engine_failure_returns_500_envelope():
    fake = MagicMock()
    fake.process_by_id.side_effect = RuntimeError("engine down")

    response = _client(fake).get("/management/processes/a")
    assert response.status_code == 500
    error = response.json()["error"]
    assert error["error_code"] == "AGGREGATION_ERROR"
    assert error["detail"] == "engine down"


def test_get_process_with_empty_name_returns_500_envelope():
    engine = InMemoryProcessEngine([ProcessDefinition(id="a", name="")])

    response = _client(engine).get("/management/processes/a")
    assert response.status_code == 500
    assert response.json()["error"]["error_code"] == "AGGREGATION_ERROR"


# ── System ─────────────────────────────────────────────────────────────


def test_health(engine):
    response = _client(engine, response_mode=ResponseMode.IDS).get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["processes_registered"] == 2
    assert data["response_mode"] == "ids"


def test_root(engine):
    response = _client(engine).get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "online"


def test_metrics_exposes_listing_counters(engine):
    client = _client(engine)
    client.get("/management/processes/")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "process_catalog_listings_total" in response.text


def test_request_id_is_echoed(engine):
    response = _client(engine).get("/management/processes/", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


# ── CORS ───────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "origins, expected",
    [("", None), ("https://admin.example.com", "https://admin.example.com")],
)
def test_cors_is_opt_in(engine, origins, expected):
    client = _client(engine, cors_origins=origins)
    response = client.options(
        "/management/processes/",
        headers={
            "Origin": "https://admin.example.com",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert response.headers.get("access-control-allow-origin") == expected
