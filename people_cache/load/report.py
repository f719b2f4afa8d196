"""
Aggregation of load-test outcomes.
"""

from __future__ import annotations

import math
import statistics
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from people_cache.domain.models import RequestOutcome
from people_cache.utils.profiler import ProfileStats


def _round_float(value: float, decimals: int = 2) -> float:
    return round(value, decimals)


def _percentile(sorted_values: List[float], pct: float) -> float:
    """Nearest-rank percentile of an already sorted, non-empty list."""
    rank = max(1, math.ceil(pct / 100.0 * len(sorted_values)))
    return sorted_values[rank - 1]


@dataclass
class LoadTestReport:
    """
    Outcomes of one harness run plus the parameters that produced them.
    """

    url: str
    clients: int
    duration_seconds: float
    elapsed_seconds: float
    outcomes: List[RequestOutcome] = field(default_factory=list)
    profile: Optional[ProfileStats] = None

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    @property
    def requests_per_second(self) -> float:
        return self.total / self.elapsed_seconds if self.elapsed_seconds > 0 else 0.0

    def per_client_counts(self) -> Dict[int, int]:
        """Number of recorded requests for every client, including idle ones."""
        counts = Counter(outcome.client_id for outcome in self.outcomes)
        return {client_id: counts.get(client_id, 0) for client_id in range(self.clients)}

    def errors(self) -> Dict[str, int]:
        """Failure detail strings with their occurrence counts, most common first."""
        counts = Counter(outcome.error for outcome in self.outcomes if not outcome.success)
        return dict(counts.most_common())

    def latency_summary(self) -> Dict[str, float]:
        """Latency statistics in milliseconds over successful requests."""
        latencies = sorted(outcome.latency_ms for outcome in self.outcomes if outcome.success)
        if not latencies:
            return {}
        return {
            "min": _round_float(latencies[0]),
            "mean": _round_float(statistics.mean(latencies)),
            "p50": _round_float(_percentile(latencies, 50)),
            "p95": _round_float(_percentile(latencies, 95)),
            "p99": _round_float(_percentile(latencies, 99)),
            "max": _round_float(latencies[-1]),
        }

    def summary(self) -> Dict[str, Any]:
        """JSON-friendly summary of the run."""
        return {
            "url": self.url,
            "clients": self.clients,
            "duration_seconds": self.duration_seconds,
            "elapsed_seconds": _round_float(self.elapsed_seconds),
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "requests_per_second": _round_float(self.requests_per_second),
            "latency_ms": self.latency_summary(),
            "errors": self.errors(),
            "profile": self.profile.as_dict() if self.profile else None,
        }


__all__ = ["LoadTestReport"]
