"""
Centralized structured logging configuration.
Import and call `setup_logging()` once at application startup.

Every log line carries the service name and version, bound through
structlog contextvars so request-scoped bindings merge on top of them.
"""

import structlog

from process_catalog.version import VERSION


def setup_logging(
    level: int = 20,
    json_output: bool = False,
    service_name: str = "process-catalog",
) -> None:
    """
    Configure structlog for the catalog service.

    Args:
        level: Minimum log level (10=DEBUG, 20=INFO, 30=WARNING).
        json_output: If True, emit one JSON object per line (production).
                     If False, emit human-readable colored console logs.
        service_name: Bound as `service` on every event.
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if json_output:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors += [
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(service=service_name, version=VERSION)
