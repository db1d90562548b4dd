"""Issue bot metrics.

- InteractionMetrics: Container for all Prometheus metrics
- get_metrics: Get or create the process-wide metrics instance
"""

from src.issuebot.events.metrics import InteractionMetrics, get_metrics

__all__ = [
    "InteractionMetrics",
    "get_metrics",
]
