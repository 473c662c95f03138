"""Central registry for Prometheus metrics used across the service."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNTER = Counter(
	"matchfeed_http_requests_total",
	"Total HTTP requests processed",
	["route", "method", "status"],
)

REQUEST_LATENCY = Histogram(
	"matchfeed_http_request_duration_seconds",
	"HTTP request latency in seconds",
	["route", "method"],
	buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0),
)

DISCOVERY_FEED_REQUESTS = Counter(
	"matchfeed_discovery_feed_requests_total",
	"Discovery feed requests by outcome",
	["outcome"],
)

DISCOVERY_RANK_CANDIDATES = Counter(
	"matchfeed_discovery_rank_candidates_total",
	"Candidates scored by the discovery ranker",
)

DISCOVERY_RANK_DURATION = Histogram(
	"matchfeed_discovery_rank_duration_ms",
	"Discovery rank duration",
	buckets=[1, 2, 5, 10, 20, 40, 80, 160],
)

DISCOVERY_EXCLUSION_SIZE = Histogram(
	"matchfeed_discovery_exclusion_size",
	"Exclusion set size per feed request",
	buckets=[1, 10, 50, 100, 250, 500, 1000, 5000],
)

DISCOVERY_SIGNAL_FAILURES = Counter(
	"matchfeed_discovery_signal_failures_total",
	"Signals that failed on a candidate and contributed zero",
	["signal"],
)

STORE_FAILURES = Counter(
	"matchfeed_store_failures_total",
	"Data store lookups that failed",
	["operation"],
)


def observe_request(route: str, method: str, status: int, elapsed_seconds: float) -> None:
	REQUEST_COUNTER.labels(route=route, method=method, status=str(status)).inc()
	REQUEST_LATENCY.labels(route=route, method=method).observe(elapsed_seconds)


def feed_served(outcome: str) -> None:
	DISCOVERY_FEED_REQUESTS.labels(outcome=outcome).inc()


def observe_rank(candidates: int, elapsed_ms: float) -> None:
	if candidates:
		DISCOVERY_RANK_CANDIDATES.inc(candidates)
	DISCOVERY_RANK_DURATION.observe(elapsed_ms)


def observe_exclusions(size: int) -> None:
	DISCOVERY_EXCLUSION_SIZE.observe(size)


def signal_failed(signal: str) -> None:
	DISCOVERY_SIGNAL_FAILURES.labels(signal=signal).inc()


def store_failed(operation: str) -> None:
	STORE_FAILURES.labels(operation=operation).inc()
