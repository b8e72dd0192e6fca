"""Prometheus metrics for intent detection, itinerary edits and tool calls."""

from prometheus_client import Counter, Histogram

# Intent detection
intent_detections_total = Counter(
    "intent_detections_total",
    "Total intent classifications",
    ["intent", "source"],
)

# Itinerary mutation
itinerary_modifications_total = Counter(
    "itinerary_modifications_total",
    "Total itinerary modification attempts",
    ["operation", "outcome"],
)

# Tool execution
tool_latency_ms = Histogram(
    "tool_latency_ms",
    "Tool execution latency in milliseconds",
    ["tool", "outcome"],
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 4000, 8000],
)

tool_errors_total = Counter(
    "tool_errors_total",
    "Total tool execution errors",
    ["tool", "reason"],
)


class PrometheusMetrics:
    """Prometheus-backed recorder shared by detector, orchestrator and tool registry."""

    def inc_detection(self, intent: str, source: str) -> None:
        """Count a classification; source is "llm" or "fallback"."""
        intent_detections_total.labels(intent=intent, source=source).inc()

    def inc_modification(self, operation: str, outcome: str) -> None:
        """Count an itinerary edit; outcome is "success" or an error code."""
        itinerary_modifications_total.labels(operation=operation, outcome=outcome).inc()

    def record_tool_latency(self, tool: str, outcome: str, latency_ms: float) -> None:
        tool_latency_ms.labels(tool=tool, outcome=outcome).observe(latency_ms)

    def inc_tool_error(self, tool: str, reason: str) -> None:
        tool_errors_total.labels(tool=tool, reason=reason).inc()
