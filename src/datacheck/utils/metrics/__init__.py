"""
Prometheus metrics for datacheck

Usage:
    from prometheus_client import CollectorRegistry
    from datacheck.utils.metrics import DataCheckMetrics, write_metrics_file

    registry = CollectorRegistry()
    metrics = DataCheckMetrics(registry=registry)
    metrics.record_assertion("fk", passed=False, diagnostics=3)
    write_metrics_file("/var/lib/node_exporter/datacheck.prom", registry)
"""

import logging
import os

from prometheus_client import REGISTRY, CollectorRegistry, write_to_textfile

from .assertions import DataCheckMetrics, get_or_create_metric

logger = logging.getLogger(__name__)


def write_metrics_file(path: str, registry: CollectorRegistry = REGISTRY) -> None:
    """
    Write the registry in Prometheus text format for the node-exporter
    textfile collector.

    Args:
        path: Destination .prom file
        registry: Registry to export
    """
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    write_to_textfile(path, registry)
    logger.info(f"Metrics written to {path}")


__all__ = [
    "DataCheckMetrics",
    "get_or_create_metric",
    "write_metrics_file",
]
