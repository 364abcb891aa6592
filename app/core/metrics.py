"""Prometheus metrics: HTTP traffic, variant generation, Gemini calls and exports.

Everything is registered on the default registry and served by GET /metrics.
"""

import time

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, Info, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

# --- Metrics ---

APP_INFO = Info("app", "Prompt Lab application info")
APP_INFO.info({"version": "1.0.0", "name": "prompt_lab"})

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30],
)

VARIANTS_GENERATED = Counter(
    "prompt_variants_generated_total",
    "Prompt variants produced by the variation pipeline",
    ["type"],
)

UPSTREAM_CALLS = Counter(
    "upstream_calls_total",
    "Calls to the generative model API",
    ["operation", "outcome"],
)

EXPORTS_WRITTEN = Counter(
    "exports_written_total",
    "Prompt packs written to disk",
)


# --- Middleware ---

# Exported files are unbounded, collapse them into one label value
_PATH_PREFIXES = ("/exports/",)


def _normalize_path(path: str) -> str:
    """Replace per-file path segments with {file} to avoid high cardinality."""
    for prefix in _PATH_PREFIXES:
        if path.startswith(prefix) and len(path) > len(prefix):
            return f"{prefix}{{file}}"
    return path


# Scrapes of /metrics itself are not counted
_UNTRACKED_PATHS = frozenset({"/metrics"})


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Count and time every request by method, normalized path and status.

    A request that escapes as an exception is recorded as status 500.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in _UNTRACKED_PATHS:
            return await call_next(request)

        labels = {"method": request.method, "path": _normalize_path(request.url.path)}
        status = 500
        start = time.perf_counter()
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            REQUEST_DURATION.labels(**labels).observe(time.perf_counter() - start)
            REQUEST_COUNT.labels(status=status, **labels).inc()


def metrics_response() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
