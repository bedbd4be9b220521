"""
ApiModule — встроенный модуль HTTP API.

Отображает HTTP-маршруты на сервисы diagnostics.* и поднимает uvicorn
в отдельном потоке. Доменной логики здесь нет: только разбор запроса,
вызов сервиса и перевод ошибок в HTTP-статусы.

Все маршруты живут под `Config.http_prefix`.
"""

from typing import Any, Optional
import threading
import asyncio

from fastapi import FastAPI, HTTPException, Response
from fastapi.responses import JSONResponse
import uvicorn

from core.runtime_module import RuntimeModule
from core.config_inspector import ConfigInspectorError, ConfigMode
from core.index_registry import SECTION_ADMIN_ENDPOINTS
from core.logger_helper import error as log_error, warning as log_warning
from modules.monitoring import MonitoringModule


class ApiModule(RuntimeModule):
    """
    Модуль HTTP API.

    Маршруты:
      GET  /                       — index-страница
      GET  /config?mode=           — конфигурация (full, diff, defaults)
      GET  /runtime_config         — runtime-конфигурация
      POST /runtime_config/reload  — перечитать runtime-конфигурацию
      GET  /admin/links            — ссылки index-а в JSON
      GET  /monitor/metrics, /monitor/health
    """

    @property
    def name(self) -> str:
        """Уникальное имя модуля."""
        return "api"

    def __init__(self, runtime: Any):
        """Инициализация модуля."""
        super().__init__(runtime)
        self.app: Optional[FastAPI] = None
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None
        self.monitoring: Optional[MonitoringModule] = None

    async def register(self) -> None:
        """
        Создаёт FastAPI приложение, маршруты и monitoring router.
        """
        cfg = self.runtime.config
        prefix = cfg.http_prefix

        self.app = FastAPI(title=cfg.service_name, version=self.runtime.version)
        self.app.state.runtime = self.runtime

        self.monitoring = MonitoringModule(runtime=self.runtime)
        self.app.include_router(self.monitoring.router, prefix=f"{prefix}/monitor", tags=["monitoring"])
        self.runtime.index.add_link(SECTION_ADMIN_ENDPOINTS, "/monitor/metrics", "Prometheus Metrics")
        self.runtime.index.add_link(SECTION_ADMIN_ENDPOINTS, "/monitor/health", "Health Check")

        self.app.add_api_route(f"{prefix}/", self.index_handler, methods=["GET"], name="index")
        self.app.add_api_route(f"{prefix}/config", self.config_handler, methods=["GET"], name="config")
        self.app.add_api_route(f"{prefix}/runtime_config", self.runtime_config_handler, methods=["GET"], name="runtime_config")
        self.app.add_api_route(
            f"{prefix}/runtime_config/reload", self.runtime_config_reload_handler, methods=["POST"], name="runtime_config_reload"
        )
        self.app.add_api_route(f"{prefix}/admin/links", self.links_handler, methods=["GET"], name="admin_links")

    async def start(self) -> None:
        """
        Запускает HTTP сервер в отдельном потоке (если http_enabled).
        """
        if self.app is None or not self.runtime.config.http_enabled:
            return

        cfg = self.runtime.config
        config = uvicorn.Config(self.app, host=cfg.http_host, port=cfg.http_port, log_level="info")
        server = uvicorn.Server(config)
        self._server = server

        def run_server():
            try:
                server.run()
            except SystemExit:
                # uvicorn вызывает SystemExit(1) при ошибке привязки порта
                self._log_from_thread("warning", "uvicorn exited during startup (port may be in use)")
            except Exception as e:
                self._log_from_thread("error", f"server run error: {e}")

        self._thread = threading.Thread(target=run_server, daemon=True)
        self._thread.start()

    async def stop(self) -> None:
        """Останавливает HTTP сервер."""
        if self._server is not None:
            self._server.should_exit = True
        if self._thread is not None:
            # join в отдельном потоке, чтобы не блокировать event loop
            await asyncio.to_thread(self._thread.join, timeout=1)
            self._thread = None
        self._server = None

    # --- handlers ---

    async def index_handler(self) -> Response:
        document = await self._call("diagnostics.index")
        if self.monitoring is not None:
            self.monitoring.index_renders_total.inc()
        return Response(content=document.body, media_type=document.media_type)

    async def config_handler(self, mode: str = "") -> Response:
        mode_label = ConfigMode.parse(mode).value
        try:
            document = await self._call("diagnostics.config", mode=mode)
        except HTTPException:
            self._count_config(mode_label, "error")
            raise
        self._count_config(mode_label, "ok")
        return Response(content=document.body, media_type=document.media_type)

    async def runtime_config_handler(self) -> Response:
        document = await self._call("diagnostics.runtime_config")
        return Response(content=document.body, media_type=document.media_type)

    async def runtime_config_reload_handler(self) -> JSONResponse:
        result = await self._call("diagnostics.runtime_config_reload")
        return JSONResponse(result)

    async def links_handler(self) -> JSONResponse:
        links = await self._call("diagnostics.links")
        return JSONResponse(links)

    # --- helpers ---

    async def _call(self, service: str, **params: Any) -> Any:
        """
        Вызвать сервис и перевести ошибки в HTTPException.

        ValueError → 400, ошибки инспекции конфигурации и прочее → 500.
        """
        try:
            return await self.runtime.service_registry.call(service, **params)
        except ConfigInspectorError as e:
            raise HTTPException(status_code=500, detail=str(e))
        except ValueError as e:
            await log_warning(self.runtime, f"Bad request to {service}: {e}", module="api")
            raise HTTPException(status_code=400, detail=str(e))
        except Exception as e:
            await log_error(self.runtime, f"Service {service} failed: {e}", module="api")
            raise HTTPException(status_code=500, detail=str(e))

    def _count_config(self, mode: str, status: str) -> None:
        if self.monitoring is not None:
            self.monitoring.config_requests_total.labels(mode=mode, status=status).inc()

    def _log_from_thread(self, level: str, message: str) -> None:
        # Поток сервера не имеет event loop, создаём временный
        try:
            loop = asyncio.new_event_loop()
            try:
                loop.run_until_complete(
                    self.runtime.service_registry.call("logger.log", level=level, message=message, module="api")
                )
            finally:
                loop.close()
        except Exception:
            pass
