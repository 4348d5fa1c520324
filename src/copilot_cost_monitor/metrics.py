from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram

from copilot_cost_monitor.models import FetchOutcome


class MetricsUpdater:
    """
    applies refresh results to Prometheus metrics.
     - cost_usd: last presented billing period total.
     - fetches_total: completed fetches, labeled by outcome
     (modified/not_modified).
     - refresh_errors_total: failed refreshes, labeled by error kind.
    """

    def __init__(self, registry: "CollectorRegistry" = REGISTRY) -> "None":
        self._cost: "Gauge" = Gauge(
            "copilot_cost_monitor_cost_usd",
            "Copilot cost for the current billing period in USD",
            registry=registry,
        )
        self._fetches: "Counter" = Counter(
            "copilot_cost_monitor_fetches_total",
            "Total completed billing usage fetches by outcome",
            ["outcome"],
            registry=registry,
        )
        self._errors: "Counter" = Counter(
            "copilot_cost_monitor_refresh_errors_total",
            "Total number of failed refreshes by error kind",
            ["kind"],
            registry=registry,
        )
        self._fetch_duration: "Histogram" = Histogram(
            "copilot_cost_monitor_fetch_duration_seconds",
            "Duration of billing usage fetches",
            registry=registry,
        )
        self._last_success: "Gauge" = Gauge(
            "copilot_cost_monitor_last_success_timestamp_seconds",
            "Unix timestamp of the last successful refresh",
            registry=registry,
        )

    def record_fetch(self, outcome: "FetchOutcome", duration_seconds: "float") -> "None":
        label = "not_modified" if outcome.not_modified else "modified"
        self._fetches.labels(outcome=label).inc()
        self._fetch_duration.observe(duration_seconds)

    def set_cost(self, total: "float", timestamp: "float") -> "None":
        self._cost.set(total)
        self._last_success.set(timestamp)

    def inc_error(self, kind: "str") -> "None":
        self._errors.labels(kind=kind).inc()
