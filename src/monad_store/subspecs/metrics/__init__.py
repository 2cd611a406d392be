"""
Metrics module for observability.

Provides counters and gauges for tracking store activity.
Exposes metrics in Prometheus text format.
"""

from .registry import (
    REGISTRY,
    generate_metrics,
    max_checkpoint_height,
    store_opens,
    store_write_errors,
    store_writes,
)

__all__ = [
    "REGISTRY",
    "generate_metrics",
    "max_checkpoint_height",
    "store_opens",
    "store_write_errors",
    "store_writes",
]
