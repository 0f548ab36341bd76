"""CloudWatch metrics for impact estimation, sent as AWS Embedded Metrics Format.

Nothing is sent unless METRICS_ENABLED=true. Metrics carry a ``Backend``
dimension naming the impact provider, so Boavizta failures can be told apart
from those of another backend.

The EMF agent is configured by the aws_embedded_metrics environment variables
(AWS_EMF_ENVIRONMENT, AWS_EMF_AGENT_ENDPOINT, AWS_EMF_NAMESPACE).
"""

from logging import getLogger

from aws_embedded_metrics import metric_scope
from aws_embedded_metrics.storage_resolution import StorageResolution

from impact_scanner.config import MetricsConfig

logger = getLogger(__name__)


@metric_scope
def _put_metric(
    metric_name: str, value: float, unit: str, dimensions: dict[str, str] | None, metrics
) -> None:
    if dimensions:
        metrics.put_dimensions(dimensions)
    metrics.put_metric(metric_name, value, unit, StorageResolution.STANDARD)


def _emit(
    metric_name: str,
    value: float,
    unit: str,
    backend: str | None,
    config: MetricsConfig | None,
) -> None:
    config = config or MetricsConfig()
    if not config.enabled:
        return

    dimensions = {"Backend": backend} if backend else None
    logger.debug(f"put metric: {metric_name}={value} {unit} {dimensions or ''}")
    try:
        _put_metric(metric_name, value, unit, dimensions)
    except Exception as e:
        logger.error(f"Error sending metric {metric_name}: {e}")


def counter(
    metric_name: str,
    value: float = 1,
    backend: str | None = None,
    config: MetricsConfig | None = None,
) -> None:
    """Record a count, e.g. resources assessed by one estimation.

    Metric failures are logged and never raised.
    """
    _emit(metric_name, value, "Count", backend, config)


def duration(
    metric_name: str,
    seconds: float,
    backend: str | None = None,
    config: MetricsConfig | None = None,
) -> None:
    """Record an elapsed time in seconds."""
    _emit(metric_name, seconds, "Seconds", backend, config)
