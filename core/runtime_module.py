"""
Базовый класс для встроенных модулей Runtime (RuntimeModule).

RuntimeModule — домены сервиса, которые:
- регистрируются напрямую в CoreRuntime через ModuleManager
- используют только Core API (service_registry, index, config)

КОНТРАКТ LIFECYCLE:
- register() вызывается ровно один раз при регистрации модуля
- start() вызывается ровно один раз при runtime.start()
- stop() вызывается ровно один раз при runtime.stop()
- Порядок: __init__ → register() → start() → stop()
"""

from abc import ABC, abstractmethod
from typing import Any


class RuntimeModule(ABC):
    """
    Базовый класс для встроенных модулей Runtime.

    LIFECYCLE:
        - register() вызывается ровно один раз при регистрации модуля
        - start() вызывается ровно один раз при runtime.start()
        - stop() вызывается ровно один раз при runtime.stop()
    """

    def __init__(self, runtime: Any):
        """
        Инициализация модуля.

        Args:
            runtime: экземпляр CoreRuntime
        """
        self.runtime = runtime

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Уникальное имя модуля.

        Returns:
            имя модуля (например, "diagnostics", "api")
        """
        pass

    async def register(self) -> None:
        """
        Регистрация модуля в CoreRuntime.

        Здесь регистрируются:
        - сервисы в service_registry
        - ссылки index-страницы в runtime.index (опционально)

        По умолчанию — no-op. Переопределяется в подклассах.
        """
        pass

    async def start(self) -> None:
        """
        Запуск модуля.

        Вызывается при runtime.start(), после успешного register().
        Для REQUIRED модулей ошибка в start() останавливает runtime.

        По умолчанию — no-op. Переопределяется в подклассах.
        """
        pass

    async def stop(self) -> None:
        """
        Остановка модуля.

        Вызывается даже при частичном старте, поэтому должен быть безопасным
        без предшествующего start().

        По умолчанию — no-op. Переопределяется в подклассах.
        """
        pass
