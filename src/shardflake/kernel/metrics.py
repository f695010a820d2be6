"""
Prometheus metrics collection for Shardflake.

Counts issued IDs per shard and records how often (and how long) generators
had to wait on the clock.
"""

from prometheus_client import Counter, Histogram, start_http_server

# ============================================================================
# Generator Metrics
# ============================================================================

ids_generated_total = Counter(
    "shardflake_ids_generated_total",
    "Total number of IDs issued",
    ["shard_id"],
)

sequence_exhausted_total = Counter(
    "shardflake_sequence_exhausted_total",
    "Total number of times a millisecond's sequence space was used up",
    ["shard_id"],
)

clock_regressions_total = Counter(
    "shardflake_clock_regressions_total",
    "Total number of times the clock was observed moving backwards",
    ["shard_id"],
)

clock_wait_seconds = Histogram(
    "shardflake_clock_wait_seconds",
    "Time spent waiting for the clock to advance",
    ["reason"],  # reason: sequence_exhausted, clock_regressed
    buckets=(0.0001, 0.0005, 0.001, 0.0025, 0.005, 0.01, 0.05, 0.1, 1.0, 10.0),
)


def start_metrics_server(port: int = 9090) -> None:
    """
    Start Prometheus metrics HTTP server.

    Args:
        port: Port to listen on (default: 9090)
    """
    start_http_server(port)
