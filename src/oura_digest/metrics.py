"""Prometheus metrics definitions for the digest job.

The job is a short-lived batch process, so metrics live in a dedicated
registry and are pushed to a Pushgateway at exit instead of being scraped.
"""

import structlog
from prometheus_client import CollectorRegistry, Counter, Histogram, push_to_gateway

from .config import MetricsSettings

logger = structlog.get_logger(__name__)

REGISTRY = CollectorRegistry()

# -- Oura fetches --
FETCHES = Counter(
    "oura_digest_fetches_total",
    "Total Oura API fetches",
    ["category", "status"],
    registry=REGISTRY,
)
FETCH_DURATION = Histogram(
    "oura_digest_fetch_duration_seconds",
    "Oura API fetch latency",
    ["category"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=REGISTRY,
)

# -- LINE deliveries --
DELIVERIES = Counter(
    "oura_digest_deliveries_total",
    "Total LINE push attempts",
    ["kind", "status"],
    registry=REGISTRY,
)


def push_metrics(settings: MetricsSettings) -> bool:
    """Push the job's metrics to the configured Pushgateway.

    Returns:
        True if metrics were pushed, False if not configured or the push failed.
    """
    if not settings.pushgateway_url:
        return False
    try:
        push_to_gateway(settings.pushgateway_url, job=settings.job_name, registry=REGISTRY)
    except OSError as e:
        logger.warning("metrics_push_failed", url=settings.pushgateway_url, error=str(e))
        return False
    logger.debug("metrics_pushed", url=settings.pushgateway_url)
    return True
