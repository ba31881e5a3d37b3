"""
Service observability — OpenTelemetry tracing + Prometheus metrics.

Provides:
- Distributed tracing with a span per aggregation
- Listing counters (by mode and outcome) and a skipped-process counter
- Prometheus scraping utilities
"""

import time
from contextlib import contextmanager
from typing import Generator

import structlog
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

logger = structlog.get_logger(__name__)

# ── OpenTelemetry Setup ──────────────────────────────────────────────

_tracer: trace.Tracer | None = None


def setup_tracing(service_name: str | None = None, console_export: bool = False) -> trace.Tracer:
    """
    Initialize OpenTelemetry tracing.

    Args:
        service_name: Name of the service (appears in traces).
                      Defaults to APP_NAME.
        console_export: Print finished spans to stdout (local debugging).
    """
    global _tracer

    from process_catalog.version import APP_NAME, VERSION

    if service_name is None:
        service_name = APP_NAME.lower()

    resource = Resource.create({"service.name": service_name, "service.version": VERSION})
    provider = TracerProvider(resource=resource)

    if console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer(__name__)
    logger.info("otel_tracing_initialized", service=service_name, console_export=console_export)
    return _tracer


def get_tracer() -> trace.Tracer:
    """Get the service tracer (falls back to the globally configured provider)."""
    if _tracer is None:
        return trace.get_tracer(__name__)
    return _tracer


@contextmanager
def trace_aggregation(mode: str, **attributes) -> Generator:
    """
    Context manager to trace and time one aggregation.

    Usage:
        with trace_aggregation("metadata") as span:
            views = build_views()
            span.set_attribute("catalog.count", len(views))
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(
        "catalog.aggregate",
        attributes={
            "catalog.mode": mode,
            **{k: str(v) for k, v in attributes.items()},
        },
    ) as span:
        start = time.monotonic()
        try:
            yield span
            span.set_attribute("catalog.status", "success")
            LISTINGS.labels(mode=mode, status="success").inc()
        except Exception as e:
            span.set_attribute("catalog.status", "error")
            span.set_attribute("catalog.error", str(e))
            span.record_exception(e)
            LISTINGS.labels(mode=mode, status="error").inc()
            raise
        finally:
            latency = time.monotonic() - start
            span.set_attribute("catalog.latency_ms", round(latency * 1000))
            LISTING_LATENCY.labels(mode=mode).observe(latency)


# ── Catalog Metrics ──────────────────────────────────────────────────

LISTINGS = Counter(
    "listings_total",
    "Process listings built, by response mode and outcome",
    ["mode", "status"],
    namespace="process_catalog",
)

LISTING_LATENCY = Histogram(
    "listing_latency_seconds",
    "Time spent building a process listing",
    ["mode"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1],
    namespace="process_catalog",
)

PROCESSES_SKIPPED = Counter(
    "processes_skipped_total",
    "Processes dropped because they vanished between listing and lookup",
    namespace="process_catalog",
)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    """Content type for Prometheus metrics endpoint."""
    return CONTENT_TYPE_LATEST
