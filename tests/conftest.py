import pytest
from opentelemetry import trace

from process_catalog.engine import InMemoryProcessEngine, ProcessDefinition


@pytest.fixture(autouse=True)
def disable_tracing():
    """Install a silent tracer provider so spans never print to pytest stdout."""
    from opentelemetry.sdk.trace import TracerProvider
    trace.set_tracer_provider(TracerProvider())
    yield


@pytest.fixture
def engine():
    """The orders/shipping engine used across the catalog tests."""
    return InMemoryProcessEngine(
        [
            ProcessDefinition(
                id="orders",
                name="Order Process",
                meta_data={"Description": "Handles orders"},
            ),
            ProcessDefinition(id="shipping", name="Shipping Process"),
        ]
    )
