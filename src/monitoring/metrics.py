"""
Metrics Collection
Prometheus metrics for the builder pipeline and preview compiler
"""

import time

from prometheus_client import Counter, Gauge, Histogram, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for the builder.
    """

    def __init__(self) -> None:
        # Pipeline metrics
        self.generations_total = Counter(
            "builder_generations_total",
            "Total number of generate requests",
            ["status"],
        )
        self.generation_duration = Histogram(
            "builder_generation_duration_seconds",
            "End-to-end generate duration in seconds",
            buckets=[0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0],
        )

        # Validation metrics
        self.violations_total = Counter(
            "builder_validation_violations_total",
            "Validation violations by rule",
            ["rule"],
        )

        # Tree engine metrics
        self.parse_fallbacks_total = Counter(
            "builder_parse_fallbacks_total",
            "Candidates stored without a tree",
            ["error_type"],
        )

        # Preview metrics
        self.preview_compiles_total = Counter(
            "builder_preview_compiles_total",
            "Preview documents produced",
            ["outcome"],
        )

        # LLM metrics
        self.llm_calls_total = Counter(
            "builder_llm_calls_total",
            "Total number of LLM calls",
            ["role", "status"],
        )
        self.llm_duration = Histogram(
            "builder_llm_duration_seconds",
            "LLM call duration in seconds",
            ["role"],
            buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0],
        )

        # Error metrics
        self.errors_total = Counter(
            "builder_errors_total",
            "Total number of errors",
            ["error_type", "component"],
        )

        # System metrics
        self.uptime = Gauge(
            "builder_uptime_seconds",
            "Service uptime in seconds",
        )
        self.start_time = time.time()

    def record_generation(self, status: str, duration: float) -> None:
        """Record a generate request."""
        self.generations_total.labels(status=status).inc()
        self.generation_duration.observe(duration)

    def record_violation(self, rule: str, count: int = 1) -> None:
        """Record validation violations for a rule."""
        self.violations_total.labels(rule=rule).inc(count)

    def record_parse_fallback(self, error_type: str) -> None:
        """Record a candidate kept as raw code."""
        self.parse_fallbacks_total.labels(error_type=error_type).inc()

    def record_preview_compile(self, outcome: str) -> None:
        """Record a preview document build (ok or fallback)."""
        self.preview_compiles_total.labels(outcome=outcome).inc()

    def record_llm_call(self, role: str, status: str, duration: float) -> None:
        """Record an LLM call by pipeline role (planner, generator, explainer)."""
        self.llm_calls_total.labels(role=role, status=status).inc()
        self.llm_duration.labels(role=role).observe(duration)

    def record_error(self, error_type: str, component: str) -> None:
        """Record an error."""
        self.errors_total.labels(error_type=error_type, component=component).inc()

    def update_uptime(self) -> None:
        """Update the uptime metric."""
        self.uptime.set(time.time() - self.start_time)

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus format."""
        self.update_uptime()
        return generate_latest()


# Global metrics collector instance
metrics_collector = MetricsCollector()
