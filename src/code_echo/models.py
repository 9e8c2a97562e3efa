from dataclasses import dataclass, fields


@dataclass
class PerformanceMetrics:
    """Track counters for the suggestion pipeline."""

    total_requests: int = 0
    suppressed: int = 0
    static_hits: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    dropped_busy: int = 0
    model_calls: int = 0
    model_failures: int = 0
    empty_results: int = 0
    total_model_time_ms: float = 0.0

    @property
    def cache_hit_rate(self) -> float:
        """Calculate cache hit rate over lookups that reached the cache."""
        lookups = self.cache_hits + self.cache_misses
        if lookups == 0:
            return 0.0
        return self.cache_hits / lookups

    @property
    def avg_model_time_ms(self) -> float:
        """Calculate average model call latency."""
        if self.model_calls == 0:
            return 0.0
        return self.total_model_time_ms / self.model_calls

    def record_model_call(self, duration_ms: float) -> None:
        """Record a model API call, successful or not."""
        self.model_calls += 1
        self.total_model_time_ms += duration_ms

    def reset(self) -> None:
        """Zero every counter."""
        for f in fields(self):
            setattr(self, f.name, f.default)

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "total_requests": self.total_requests,
            "suppressed": self.suppressed,
            "static_hits": self.static_hits,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "cache_hit_rate": self.cache_hit_rate,
            "dropped_busy": self.dropped_busy,
            "model_calls": self.model_calls,
            "model_failures": self.model_failures,
            "empty_results": self.empty_results,
            "avg_model_time_ms": self.avg_model_time_ms,
        }
