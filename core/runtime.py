"""
CoreRuntime - главный класс Runtime.

Объединяет все компоненты:
- ServiceRegistry
- ModuleManager
- IndexPageContent (реестр ссылок index-страницы)
- RuntimeConfigManager
- Config (фактическая) и Config() (по умолчанию)
"""

import time
from typing import Any, Dict, Optional

from core.config import Config
from core.index_registry import IndexPageContent
from core.module_manager import ModuleManager
from core.runtime_config import RuntimeConfigManager
from core.service_registry import ServiceRegistry


class CoreRuntime:
    """
    Главный класс Runtime.

    Координирует работу всех компонентов.
    Предоставляет единую точку доступа для модулей.
    """

    version = "0.1.0"

    def __init__(self, config: Optional[Config] = None):
        """
        Инициализация Runtime.

        Args:
            config: фактическая конфигурация (None — конфигурация по умолчанию)
        """
        if config is None:
            config = Config()
        config.validate()
        self._config = config

        self.service_registry = ServiceRegistry(default_timeout=config.service_call_timeout)
        self.module_manager = ModuleManager(self)
        # Реестр ссылок index-а: один на процесс, передаётся модулям через runtime
        self.index = IndexPageContent()
        self.runtime_config = RuntimeConfigManager(config.runtime_config_file)

        self._started_at: Optional[float] = None
        self._running = False

    @property
    def config(self) -> Config:
        """Фактическая конфигурация."""
        return self._config

    @property
    def default_config(self) -> Config:
        """Конфигурация по умолчанию (новый экземпляр на каждый вызов)."""
        return Config()

    @property
    def is_running(self) -> bool:
        """Запущен ли runtime."""
        return self._running

    async def start(self) -> None:
        """
        Запустить Runtime.

        - регистрирует встроенные модули (если ещё не зарегистрированы)
        - запускает их в порядке регистрации

        Raises:
            RuntimeError: если REQUIRED модуль не зарегистрировался или не стартовал
        """
        if self._running:
            return

        await self.module_manager.register_builtin_modules(self)
        self.module_manager.check_required_modules_registered()

        try:
            await self.module_manager.start_all()
        except Exception:
            # stop() вызывается даже при частичном старте
            await self.module_manager.stop_all()
            raise

        self._started_at = time.time()
        self._running = True

    async def stop(self) -> None:
        """Остановить все модули."""
        if not self._running:
            return

        await self.module_manager.stop_all()
        self._running = False

    async def shutdown(self) -> None:
        """
        Полное завершение работы Runtime.

        - останавливает runtime
        - очищает реестр сервисов и модулей
        """
        await self.stop()
        self.module_manager.clear()
        await self.service_registry.clear()

    async def health_check(self) -> Dict[str, Any]:
        """Состояние runtime для /health."""
        uptime = None
        if self._started_at is not None:
            uptime = time.time() - self._started_at
        return {
            "status": "ok" if self._running else "stopped",
            "uptime": uptime,
            "version": self.version,
            "modules": self.module_manager.list_modules(),
            "runtime_config_loaded": self.runtime_config.get_config() is not None,
        }
