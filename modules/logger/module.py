"""
LoggerModule — встроенный модуль логирования.

Обязательный инфраструктурный модуль, регистрируется первым.

Предоставляет сервис `logger.log` для централизованного логирования.
Выводит в stdout простой читаемый текст: [LEVEL] [module] message (context)
или JSON-строку на событие.
"""

import os
import sys
import json
import logging
from typing import Any

from core.runtime_module import RuntimeModule


_LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class LoggerModule(RuntimeModule):
    """
    Модуль логирования.

    Не меняет глобальное состояние logging (не трогает root logger).
    """

    @property
    def name(self) -> str:
        """Уникальное имя модуля."""
        return "logger"

    async def register(self) -> None:
        """Читает уровень и формат логов, регистрирует сервис logger.log."""
        # LOG_LEVEL=DEBUG для отладки, LOG_LEVEL=WARNING для тихих логов
        log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
        self._log_level = getattr(logging, log_level_str, logging.INFO)

        # text (по умолчанию) | json
        cfg = getattr(self.runtime, "config", None)
        cfg_fmt = getattr(cfg, "log_format", None) if cfg is not None else None
        env_fmt = os.getenv("RUNTIME_LOG_FORMAT") or os.getenv("LOG_FORMAT")
        self._log_format = (cfg_fmt or env_fmt or "text").lower()
        if self._log_format not in ("text", "json"):
            self._log_format = "text"

        await self.runtime.service_registry.register("logger.log", self._log_service)

    async def start(self) -> None:
        try:
            await self._log_service(level="info", message="Logger module started", module="logger")
        except Exception:
            # Не мешаем запуску системы при ошибках логирования
            pass

    async def stop(self) -> None:
        try:
            await self._log_service(level="info", message="Logger module stopped", module="logger")
        except Exception:
            pass

        await self.runtime.service_registry.unregister("logger.log")

    async def _log_service(self, level: str, message: str, **context: Any) -> None:
        """
        Сервис логирования.

        Args:
            level: уровень логирования (debug, info, warning, error)
            message: сообщение для логирования
            **context: дополнительный контекст (module, component, path и др.)
        """
        lvl = (level or "").lower()
        if lvl not in _LEVEL_MAP:
            lvl = "info"
        if _LEVEL_MAP[lvl] < getattr(self, "_log_level", logging.INFO):
            return

        if getattr(self, "_log_format", "text") == "json":
            print(json.dumps(self._json_event(lvl, message, context), ensure_ascii=False),
                  file=sys.stdout, flush=True)
            return

        # Формат: [LEVEL] [module] message (context если есть)
        parts = [f"[{lvl.upper()}]"]
        module = context.get("module")
        if module:
            parts.append(f"[{module}]")
        parts.append(message)
        important_context = {
            key: value
            for key, value in context.items()
            if key != "module" and isinstance(value, (str, int, float, bool, type(None)))
        }
        if important_context:
            context_str = " ".join(f"{k}={v}" for k, v in important_context.items())
            parts.append(f"({context_str})")
        print(" ".join(parts), file=sys.stdout, flush=True)

    @staticmethod
    def _json_event(lvl: str, message: str, context: dict) -> dict:
        event: dict[str, Any] = {"level": lvl.upper(), "message": message}
        if context.get("module"):
            event["module"] = context["module"]
        safe_ctx: dict[str, Any] = {}
        for k, v in context.items():
            if k == "module":
                continue
            # базовые типы + dict/list (json сможет)
            if isinstance(v, (str, int, float, bool, type(None), dict, list)):
                safe_ctx[k] = v
            else:
                safe_ctx[k] = str(v)
        if safe_ctx:
            event["context"] = safe_ctx
        return event
