"""Prometheus metrics instrumentation.

This module provides:
- Automatic HTTP request metrics via prometheus-fastapi-instrumentator
- Counters for review lifecycle transitions and rating recomputations
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator, metrics

from restaurant_reviews.core.config import get_settings
from restaurant_reviews.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

logger = get_logger(__name__)

METRIC_NAMESPACE = "restaurant_reviews"

REVIEW_MUTATIONS = Counter(
    "review_mutations_total",
    "Review lifecycle transitions by operation and outcome",
    labelnames=("operation", "outcome"),
    namespace=METRIC_NAMESPACE,
)

RATING_RECOMPUTATIONS = Counter(
    "rating_recomputations_total",
    "Restaurant rating recomputations by outcome",
    labelnames=("outcome",),
    namespace=METRIC_NAMESPACE,
)


def record_review_mutation(operation: str, outcome: str) -> None:
    """Count a review create/update/delete attempt."""
    REVIEW_MUTATIONS.labels(operation=operation, outcome=outcome).inc()


def record_rating_recomputation(outcome: str) -> None:
    """Count a rating recomputation (``success``, ``not_found`` or ``error``)."""
    RATING_RECOMPUTATIONS.labels(outcome=outcome).inc()


def setup_metrics(app: FastAPI) -> Instrumentator:
    """Instrument the app and expose ``{v1_prefix}/metrics``.

    Args:
        app: The FastAPI application instance.

    Returns:
        The instrumentator, unconfigured when metrics are disabled.
    """
    settings = get_settings()

    if not settings.observability.metrics.enabled:
        logger.info("Metrics collection disabled")
        return Instrumentator()

    prefix = settings.api.v1_prefix

    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=[
            f"{prefix}/health",
            f"{prefix}/ready",
            f"{prefix}/metrics",
        ],
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True,
    )
    instrumentator.add(
        metrics.default(
            metric_namespace=METRIC_NAMESPACE,
            metric_subsystem="http",
        )
    )
    instrumentator.instrument(app)

    metrics_endpoint = f"{prefix}/metrics"
    instrumentator.expose(
        app,
        endpoint=metrics_endpoint,
        include_in_schema=True,
        tags=["Monitoring"],
    )

    logger.info("Prometheus metrics configured", endpoint=metrics_endpoint)
    return instrumentator
