from typing import Any
import time

from prometheus_client import CollectorRegistry, generate_latest, CONTENT_TYPE_LATEST
from prometheus_client import Counter, Gauge
from fastapi import APIRouter, Response


class MonitoringModule:
    """Prometheus metrics and health checks for the diagnostics endpoints.

    Usage: instantiate and include `router` into the FastAPI app.
    """

    def __init__(self, name: str = "monitoring", runtime: Any = None):
        self.name = name
        self.runtime = runtime
        self.registry = CollectorRegistry()
        self._start_time = time.time()

        self.health_requests_total = Counter(
            "rt_health_requests_total",
            "Total health check requests",
            registry=self.registry,
        )
        self.uptime = Gauge("rt_uptime_seconds", "Module uptime seconds", registry=self.registry)

        self.config_requests_total = Counter(
            "rt_config_requests_total",
            "Config endpoint requests by mode and outcome",
            ["mode", "status"],
            registry=self.registry,
        )
        self.index_renders_total = Counter(
            "rt_index_renders_total",
            "Index page renders",
            registry=self.registry,
        )

        self.router = APIRouter()
        self.router.add_api_route("/metrics", self.metrics_endpoint, methods=["GET"])
        self.router.add_api_route("/health", self.health_endpoint, methods=["GET"])

    async def metrics_endpoint(self) -> Response:
        self.uptime.set(time.time() - self._start_time)
        data = generate_latest(self.registry)
        return Response(content=data, media_type=CONTENT_TYPE_LATEST)

    async def health_endpoint(self) -> dict:
        self.health_requests_total.inc()
        checks = {"status": "ok", "uptime": time.time() - self._start_time}

        if self.runtime:
            try:
                runtime_health = await self.runtime.health_check()
                checks["modules"] = runtime_health["modules"]
                checks["runtime_config_loaded"] = runtime_health["runtime_config_loaded"]
                if runtime_health["status"] != "ok":
                    checks["status"] = "degraded"
            except Exception as e:
                checks["status"] = "degraded"
                checks["runtime_error"] = str(e)

        return checks
