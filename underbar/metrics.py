"""
Prometheus metrics for underbar combinators.

Counts memoize cache lookups, throttle decisions and deferred calls.
Nothing is registered until init_metrics() runs; until then every track_*
helper is a no-op, so importing the library never touches the default
prometheus registry.

Environment Variables (see underbar.config):
    UNDERBAR_METRICS_ENABLED: Enable metrics server (true/false) - default: false
    UNDERBAR_METRICS_PORT: HTTP port for /metrics endpoint - default: 8080

Usage:
    from underbar.metrics import start_metrics_server

    start_metrics_server(enabled=True, port=8080)
"""

import logging
import threading

from prometheus_client import Counter, start_http_server

logger = logging.getLogger(__name__)

MEMOIZE_LOOKUPS: "Counter" = None  # type: ignore
THROTTLE_CALLS: "Counter" = None  # type: ignore
DELAY_SCHEDULED: "Counter" = None  # type: ignore
DEFERRED_FAILURES: "Counter" = None  # type: ignore

_metrics_initialized = False
_metrics_lock = threading.Lock()


def init_metrics() -> None:
    """
    Register counters with the default prometheus registry (idempotent).
    """
    global MEMOIZE_LOOKUPS, THROTTLE_CALLS, DELAY_SCHEDULED, DEFERRED_FAILURES
    global _metrics_initialized

    with _metrics_lock:
        if _metrics_initialized:
            return

        # labels: result=hit|miss
        MEMOIZE_LOOKUPS = Counter(
            "underbar_memoize_lookups_total",
            "Memoize cache lookups",
            labelnames=["result"],
        )

        # labels: outcome=invoked|suppressed
        THROTTLE_CALLS = Counter(
            "underbar_throttle_calls_total",
            "Calls to throttled wrappers",
            labelnames=["outcome"],
        )

        DELAY_SCHEDULED = Counter(
            "underbar_delay_scheduled_total",
            "Calls deferred with delay()",
        )

        DEFERRED_FAILURES = Counter(
            "underbar_deferred_failures_total",
            "Scheduled callbacks that raised",
        )

        _metrics_initialized = True
        logger.info("Prometheus metrics initialized")


def start_metrics_server(enabled: bool, port: int) -> None:
    """
    Start Prometheus metrics HTTP server in background thread.

    Initializes the counters first. Does nothing when enabled is False.
    """
    if not enabled:
        logger.info("Metrics server disabled (UNDERBAR_METRICS_ENABLED=false)")
        return

    init_metrics()

    try:
        start_http_server(port, addr="0.0.0.0")
        logger.info(f"Metrics server started on http://0.0.0.0:{port}/metrics")
    except OSError as e:
        logger.error(f"Failed to start metrics server: {e}")


def track_memoize_lookup(hit: bool) -> None:
    if MEMOIZE_LOOKUPS is not None:
        MEMOIZE_LOOKUPS.labels(result="hit" if hit else "miss").inc()


def track_throttle_call(invoked: bool) -> None:
    if THROTTLE_CALLS is not None:
        THROTTLE_CALLS.labels(outcome="invoked" if invoked else "suppressed").inc()


def track_delay_scheduled() -> None:
    if DELAY_SCHEDULED is not None:
        DELAY_SCHEDULED.inc()


def track_deferred_failure() -> None:
    if DEFERRED_FAILURES is not None:
        DEFERRED_FAILURES.inc()
