"""Prometheus counters. Exposed by the ASGI app mounted at /metrics."""

from prometheus_client import Counter

STRATEGIES_BUILT = Counter(
    "batch_engine_strategies_built",
    "Batch strategies produced by strategy builds",
)

ADJUSTMENTS = Counter(
    "batch_engine_adjustments",
    "Batch adjustments by direction and outcome",
    ["direction", "outcome"],
)
