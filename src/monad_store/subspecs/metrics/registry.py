"""
Metric registry using prometheus_client.

Provides pre-defined metrics for the auxiliary store.
Exposes metrics in Prometheus text format.
"""

from __future__ import annotations

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    generate_latest,
)

# Create a dedicated registry for store metrics.
#
# Using a dedicated registry avoids pollution from default Python process metrics.
REGISTRY = CollectorRegistry()

# -----------------------------------------------------------------------------
# Database Lifecycle
# -----------------------------------------------------------------------------

store_opens = Counter(
    "monad_store_opens_total",
    "Databases opened, per namespace",
    ["namespace"],
    registry=REGISTRY,
)

# -----------------------------------------------------------------------------
# Writes
# -----------------------------------------------------------------------------

store_writes = Counter(
    "monad_store_writes_total",
    "Successful puts and deletes, per namespace",
    ["namespace", "operation"],
    registry=REGISTRY,
)

store_write_errors = Counter(
    "monad_store_write_errors_total",
    "Puts and deletes rejected by the engine, per namespace",
    ["namespace"],
    registry=REGISTRY,
)

# -----------------------------------------------------------------------------
# Checkpoints
# -----------------------------------------------------------------------------

max_checkpoint_height = Gauge(
    "monad_max_checkpoint_height",
    "Highest user checkpoint height seen by the last lookup",
    registry=REGISTRY,
)


def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics output.

    Returns:
        Prometheus text format output as bytes.
    """
    return generate_latest(REGISTRY)
