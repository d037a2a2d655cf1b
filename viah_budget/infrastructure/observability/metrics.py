"""Prometheus metrics for monitoring estimates, forecasts and wedding API calls"""

from prometheus_client import Counter, Histogram

# Estimate metrics
event_estimate_counter = Counter(
    "viah_event_estimate_total",
    "Event cost estimates computed",
    ["model"],  # line_items | fallback
)

scenario_preview_counter = Counter(
    "viah_scenario_preview_total",
    "Scenario impact previews computed",
)

# Forecast metrics
malformed_milestone_counter = Counter(
    "viah_malformed_milestones_total",
    "Contracts whose payment milestones could not be parsed",
)

# Wedding API metrics
wedding_api_latency_histogram = Histogram(
    "wedding_api_latency_seconds",
    "Wedding API response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

wedding_api_failure_counter = Counter(
    "wedding_api_failures_total",
    "Failed wedding API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_event_estimates(line_item_count: int, fallback_count: int) -> None:
    """Record how many events used a ceremony breakdown vs the generic estimate"""
    if line_item_count:
        event_estimate_counter.labels(model="line_items").inc(line_item_count)
    if fallback_count:
        event_estimate_counter.labels(model="fallback").inc(fallback_count)
