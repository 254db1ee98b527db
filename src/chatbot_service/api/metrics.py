"""
Prometheus request metrics.

'RequestMetrics' owns a dedicated 'CollectorRegistry' instead of the
prometheus_client global one, so each application instance (and each test)
has its own counters. The registry carries the default process, platform and
GC collectors plus:

    http_request_duration_seconds{method, route, code}  histogram
    http_requests_total{method, route, code}            counter

'route' is the matched route template (e.g. '/api/chatbot'), or 'unknown'
when no route matched.
"""

import time
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    GCCollector,
    Histogram,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

DURATION_BUCKETS = (0.1, 0.5, 1, 2, 5)
UNKNOWN_ROUTE = "unknown"


class RequestMetrics:
    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()
        ProcessCollector(registry=self.registry)
        PlatformCollector(registry=self.registry)
        GCCollector(registry=self.registry)
        self.request_duration = Histogram(
            "http_request_duration_seconds",
            "Duration of HTTP requests in seconds",
            ["method", "route", "code"],
            buckets=DURATION_BUCKETS,
            registry=self.registry,
        )
        self.requests = Counter(
            "http_requests",
            "Number of HTTP requests handled",
            ["method", "route", "code"],
            registry=self.registry,
        )

    def observe(self, method: str, route: str, code: int, duration: float) -> None:
        labels = {"method": method, "route": route, "code": str(code)}
        self.request_duration.labels(**labels).observe(duration)
        self.requests.labels(**labels).inc()

    def render(self) -> Response:
        return Response(content=generate_latest(self.registry), media_type=CONTENT_TYPE_LATEST)

    async def track_request(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        start = time.perf_counter()
        code = 500
        try:
            response = await call_next(request)
            code = response.status_code
            return response
        finally:
            # The router stores the matched route in the shared ASGI scope.
            route = request.scope.get("route")
            self.observe(request.method, getattr(route, "path", UNKNOWN_ROUTE), code, time.perf_counter() - start)

    def bind_to_app(self, app: FastAPI) -> None:
        app.middleware("http")(self.track_request)
        app.add_api_route("/metrics", self.render, methods=["GET"], include_in_schema=False)
