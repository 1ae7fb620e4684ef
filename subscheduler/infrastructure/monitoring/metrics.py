"""
Prometheus metrics for system monitoring.
"""

import os

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    multiprocess,
)

from subscheduler.config.logging import get_logger

logger = get_logger(__name__)


def _build_registry() -> CollectorRegistry:
    """Use the multiprocess collector when PROMETHEUS_MULTIPROC_DIR is usable."""
    registry = CollectorRegistry()
    multiproc_dir = os.getenv("PROMETHEUS_MULTIPROC_DIR")
    if not multiproc_dir:
        return registry

    if not os.path.isdir(multiproc_dir) or not os.access(multiproc_dir, os.W_OK):
        logger.warning(
            "PROMETHEUS_MULTIPROC_DIR is not a writable directory",
            path=multiproc_dir,
        )
        return registry

    try:
        multiprocess.MultiProcessCollector(registry)
    except ValueError as e:
        logger.warning("Failed to initialize multiprocess collector", error=str(e))
        return CollectorRegistry()

    return registry


registry = _build_registry()


class DummyMetric:
    """No-op stand-in for a metric that failed to register."""

    def labels(self, *args, **kwargs):
        return self

    def set(self, value):
        pass

    def inc(self, amount=1):
        pass

    def observe(self, value):
        pass


def get_registry():
    """Get the current registry."""
    return registry


def _get_metric(metric_class, *args, **kwargs):
    try:
        return metric_class(*args, **kwargs, registry=get_registry())
    except ValueError as e:
        # Duplicate registration, e.g. on module reload
        logger.warning(
            "Failed to create metric", metric=metric_class.__name__, error=str(e)
        )
        return DummyMetric()


BOARD_SAVES = _get_metric(
    Counter,
    "board_saves_total",
    "Total number of assignment board saves",
    ["status"],
)

ASSIGNMENT_ROWS_SAVED = _get_metric(
    Counter,
    "assignment_rows_saved_total",
    "Total number of job assignment rows upserted",
)

ASSIGNMENT_BATCHES = _get_metric(
    Counter,
    "assignment_batches_total",
    "Total number of assignment upsert batches",
    ["status"],
)

BOARD_SAVE_DURATION = _get_metric(
    Histogram,
    "board_save_duration_seconds",
    "Time spent saving assignment board changes",
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
)

ASSIGNMENT_DECISIONS = _get_metric(
    Counter,
    "assignment_decisions_total",
    "Total number of assignment decisions submitted",
    ["decision", "status"],
)

ADMIN_NOTIFICATIONS = _get_metric(
    Counter,
    "admin_notifications_total",
    "Total number of admin notification deliveries",
    ["channel", "status"],
)

API_REQUESTS = _get_metric(
    Counter,
    "api_requests_total",
    "Total number of API requests",
    ["method", "endpoint", "status_code"],
)

API_REQUEST_DURATION = _get_metric(
    Histogram,
    "api_request_duration_seconds",
    "Time spent processing API requests",
    ["method", "endpoint"],
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
)

ERRORS_TOTAL = _get_metric(
    Counter,
    "errors_total",
    "Total number of errors",
    ["error_type", "component"],
)


def record_board_save(status: str, rows: int = 0, duration: float = 0.0):
    """Record a board save and the rows it wrote."""
    BOARD_SAVES.labels(status=status).inc()
    if rows:
        ASSIGNMENT_ROWS_SAVED.inc(rows)
    BOARD_SAVE_DURATION.observe(duration)


def record_assignment_batch(status: str):
    ASSIGNMENT_BATCHES.labels(status=status).inc()


def record_assignment_decision(decision: str, status: str):
    ASSIGNMENT_DECISIONS.labels(decision=decision, status=status).inc()


def record_admin_notification(channel: str, status: str):
    ADMIN_NOTIFICATIONS.labels(channel=channel, status=status).inc()


def record_api_request(method: str, endpoint: str, status_code: int, duration: float):
    API_REQUESTS.labels(method=method, endpoint=endpoint, status_code=status_code).inc()
    API_REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration)


def record_error(error_type: str, component: str):
    """Record error metric."""
    ERRORS_TOTAL.labels(error_type=error_type, component=component).inc()


def get_metrics():
    """Get all metrics in Prometheus format."""
    return generate_latest(registry)


def get_metrics_content_type():
    """Get the content type for metrics."""
    return CONTENT_TYPE_LATEST
