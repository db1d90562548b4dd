"""Prometheus metrics for issue bot observability.

Metrics are exposed at the `/metrics` endpoint in Prometheus format.

Metrics Defined:
- issuebot_interactions_total: Counter of routed interactions by kind
- issuebot_signature_failures_total: Counter of rejected signatures
- issuebot_issues_created_total: Counter of issue creations by result
- issuebot_issue_creation_duration_seconds: Histogram of GitHub call time
- issuebot_followup_edits_total: Counter of follow-up edits by result
"""

import logging
from typing import Optional

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

logger = logging.getLogger(__name__)


# GitHub issue creation usually completes in well under a few seconds
DEFAULT_DURATION_BUCKETS = (0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)


class InteractionMetrics:
    """Container for all issue bot Prometheus metrics.

    Supports a custom registry so tests do not collide on the global one.

    Attributes:
        registry: The Prometheus registry for these metrics.
        interactions_total: Counter for routed interactions.
            Labels: kind (ping, command, modal_submit, unknown)
        signature_failures_total: Counter for rejected requests.
        issues_created_total: Counter for issue creations.
            Labels: result (success/failure)
        issue_creation_duration_seconds: Histogram for GitHub call time.
        followup_edits_total: Counter for follow-up edits.
            Labels: result (success/failure)
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """Initialize metrics.

        Args:
            registry: Optional Prometheus registry. If None, uses the
                      default REGISTRY. Pass a custom registry for testing.
        """
        self.registry = registry or REGISTRY

        self.interactions_total = Counter(
            "issuebot_interactions_total",
            "Total number of interactions handled",
            labelnames=["kind"],
            registry=self.registry,
        )

        self.signature_failures_total = Counter(
            "issuebot_signature_failures_total",
            "Total number of requests rejected for a bad signature",
            registry=self.registry,
        )

        self.issues_created_total = Counter(
            "issuebot_issues_created_total",
            "Total number of issue creation attempts",
            labelnames=["result"],
            registry=self.registry,
        )

        self.issue_creation_duration_seconds = Histogram(
            "issuebot_issue_creation_duration_seconds",
            "Time spent creating issues on GitHub in seconds",
            buckets=DEFAULT_DURATION_BUCKETS,
            registry=self.registry,
        )

        self.followup_edits_total = Counter(
            "issuebot_followup_edits_total",
            "Total number of follow-up message edits",
            labelnames=["result"],
            registry=self.registry,
        )

    def record_interaction(self, kind: str) -> None:
        self.interactions_total.labels(kind=kind).inc()

    def record_signature_failure(self) -> None:
        self.signature_failures_total.inc()

    def record_issue_creation(self, success: bool, duration_seconds: float) -> None:
        """Record the outcome and duration of an issue creation attempt."""
        result = "success" if success else "failure"
        self.issues_created_total.labels(result=result).inc()
        self.issue_creation_duration_seconds.observe(duration_seconds)

    def record_followup_edit(self, success: bool) -> None:
        result = "success" if success else "failure"
        self.followup_edits_total.labels(result=result).inc()

    def generate_output(self) -> bytes:
        """Generate Prometheus format output for this registry."""
        return generate_latest(self.registry)


_metrics: Optional[InteractionMetrics] = None


def get_metrics() -> InteractionMetrics:
    """Get or create the process-wide metrics on the default registry."""
    global _metrics
    if _metrics is None:
        logger.debug("Creating default interaction metrics")
        _metrics = InteractionMetrics()
    return _metrics
