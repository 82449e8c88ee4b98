from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from threading import Lock


@dataclass
class RouteStats:
    method: str
    route: str
    count: int = 0
    total_latency_ms: float = 0.0
    min_latency_ms: float = 0.0
    max_latency_ms: float = 0.0
    client_errors: int = 0
    server_errors: int = 0

    def record(self, duration_ms: float, status_code: int) -> None:
        if self.count == 0:
            self.min_latency_ms = self.max_latency_ms = duration_ms
        else:
            self.min_latency_ms = min(self.min_latency_ms, duration_ms)
            self.max_latency_ms = max(self.max_latency_ms, duration_ms)

        self.count += 1
        self.total_latency_ms += duration_ms
        if _is_client_error(status_code):
            self.client_errors += 1
        elif status_code >= 500:
            self.server_errors += 1

    @property
    def avg_latency_ms(self) -> float:
        return self.total_latency_ms / self.count if self.count else 0.0

    def as_dict(self) -> dict[str, object]:
        return {
            "method": self.method,
            "path": self.route,
            "count": self.count,
            "avg_latency_ms": round(self.avg_latency_ms, 2),
            "min_latency_ms": round(self.min_latency_ms, 2),
            "max_latency_ms": round(self.max_latency_ms, 2),
            "client_errors": self.client_errors,
            "server_errors": self.server_errors,
        }


class ObservabilityTracker:
    """In-process request counters, keyed by method and route template.

    Keying by template (``/api/v1/pools/{pool_id}``) keeps the table bounded
    no matter how many pools are addressed. Requests that match no route share
    a single ``<unmatched>`` entry.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self.reset()

    def reset(self) -> None:
        with self._lock:
            self._started_at = datetime.now(tz=timezone.utc)
            self._routes: dict[tuple[str, str], RouteStats] = {}

    def record(self, *, method: str, route: str, status_code: int, duration_ms: float) -> None:
        with self._lock:
            stats = self._routes.setdefault((method, route), RouteStats(method=method, route=route))
            stats.record(duration_ms=duration_ms, status_code=status_code)

    def snapshot(self) -> dict[str, object]:
        with self._lock:
            now = datetime.now(tz=timezone.utc)
            routes = sorted(self._routes.values(), key=lambda item: (item.route, item.method))
            return {
                "started_at": self._started_at,
                "generated_at": now,
                "uptime_seconds": int((now - self._started_at).total_seconds()),
                "total_requests": sum(item.count for item in routes),
                "total_client_errors": sum(item.client_errors for item in routes),
                "total_server_errors": sum(item.server_errors for item in routes),
                "routes": [item.as_dict() for item in routes],
            }


def _is_client_error(status_code: int) -> bool:
    return 400 <= status_code <= 499


observability_tracker = ObservabilityTracker()
