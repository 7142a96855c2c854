"""Observability components: logging and metrics."""

from restaurant_reviews.observability.logging import (
    bind_context,
    clear_context,
    get_context,
    get_logger,
    logger,
    setup_logging,
)
from restaurant_reviews.observability.metrics import (
    record_rating_recomputation,
    record_review_mutation,
    setup_metrics,
)


__all__ = [
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "logger",
    "record_rating_recomputation",
    "record_review_mutation",
    "setup_logging",
    "setup_metrics",
]
