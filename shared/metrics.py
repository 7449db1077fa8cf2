"""
Shared metrics configuration for the ACL decision engine.
"""

from prometheus_client import REGISTRY, Counter, Histogram, Info, CollectorRegistry
from typing import Dict, Any, Optional
import threading


class MetricsCollector:
    """Centralized metrics collector for the engine."""

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry if registry is not None else REGISTRY
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up the engine metrics."""

        self._metrics["service_info"] = Info(
            "service_info",
            "Service information",
            registry=self.registry
        )
        self._metrics["service_info"].info({
            "service": self.service_name,
            "version": "1.0.0"
        })

        self._metrics["acl_evaluations_total"] = Counter(
            "acl_evaluations_total",
            "Total ACL evaluations",
            ["rule", "decision"],
            registry=self.registry
        )

        self._metrics["acl_evaluation_duration_seconds"] = Histogram(
            "acl_evaluation_duration_seconds",
            "ACL evaluation duration in seconds",
            registry=self.registry
        )

        self._metrics["acl_decode_errors_total"] = Counter(
            "acl_decode_errors_total",
            "Total ACL decode failures",
            ["code"],
            registry=self.registry
        )

    def record_evaluation(self, rule: str, allowed: bool, duration: float):
        """Record the outcome of one access evaluation."""
        self._metrics["acl_evaluations_total"].labels(
            rule=rule,
            decision="allow" if allowed else "deny"
        ).inc()
        self._metrics["acl_evaluation_duration_seconds"].observe(duration)

    def record_decode_error(self, code: str):
        """Record a failed ACL decode."""
        self._metrics["acl_decode_errors_total"].labels(code=code).inc()

    def sample_value(self, name: str, labels: Optional[Dict[str, str]] = None) -> Optional[float]:
        """Read back a sample, mostly useful in tests."""
        return self.registry.get_sample_value(name, labels or {})


_collector: Optional[MetricsCollector] = None
_collector_lock = threading.Lock()


def get_metrics_collector(service_name: str, registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get the process-wide metrics collector.

    The shared collector reports to the default prometheus registry, which
    holds each metric name once, so the first ``service_name`` wins. Passing
    an explicit registry always builds a fresh collector bound to it.
    """
    global _collector

    if registry is not None:
        return MetricsCollector(service_name, registry)

    with _collector_lock:
        if _collector is None:
            _collector = MetricsCollector(service_name)
        return _collector
