"""
ServiceRegistry - реестр сервисов runtime.

Модули регистрируют свои сервисы.
HTTP-слой и другие модули вызывают эти сервисы по имени.
"""

import asyncio
from typing import Any, Callable, Awaitable, Optional


# Тип для сервисной функции
ServiceFunc = Callable[..., Awaitable[Any]]


class ServiceRegistry:
    """
    Реестр сервисов для взаимодействия модулей.

    Принцип работы:
    - модули регистрируют сервисы (async функции)
    - другие компоненты вызывают эти сервисы по имени
    - ServiceRegistry маршрутизирует вызовы
    - Вызовы защищены timeout, если он задан
    """

    def __init__(self, default_timeout: Optional[float] = None):
        """
        Инициализация ServiceRegistry.

        Args:
            default_timeout: дефолтный timeout для вызовов сервисов (секунды).
                           Если None, timeout не применяется.
        """
        # Словарь: service_name -> function
        self._services: dict[str, ServiceFunc] = {}
        # Lock для операций с _services
        self._lock = asyncio.Lock()
        self._default_timeout: Optional[float] = default_timeout

    async def register(self, service_name: str, func: ServiceFunc) -> None:
        """
        Зарегистрировать сервис.

        Args:
            service_name: имя сервиса (например, "diagnostics.config")
            func: async функция-обработчик

        Raises:
            ValueError: если сервис уже зарегистрирован

        Пример:
            async def get_config(mode: str = ""):
                ...

            await service_registry.register("diagnostics.config", get_config)
        """
        async with self._lock:
            if service_name in self._services:
                raise ValueError(f"Сервис '{service_name}' уже зарегистрирован")
            self._services[service_name] = func

    async def unregister(self, service_name: str) -> None:
        """
        Удалить сервис из реестра.

        Args:
            service_name: имя сервиса
        """
        async with self._lock:
            self._services.pop(service_name, None)

    async def call(self, service_name: str, *args, **kwargs) -> Any:
        """
        Вызвать сервис.

        Args:
            service_name: имя сервиса
            *args, **kwargs: аргументы для сервиса

        Returns:
            Результат выполнения сервиса

        Raises:
            ValueError: если сервис не найден
            asyncio.TimeoutError: если вызов превысил default_timeout

        Пример:
            text = await service_registry.call("diagnostics.config", mode="diff")
        """
        # Получаем функцию под lock
        async with self._lock:
            func = self._services.get(service_name)
            if func is None:
                raise ValueError(f"Сервис '{service_name}' не найден")

        # Вызываем функцию вне lock, чтобы не блокировать другие вызовы
        if self._default_timeout is not None:
            return await asyncio.wait_for(
                func(*args, **kwargs),
                timeout=self._default_timeout
            )
        return await func(*args, **kwargs)

    async def call_with_timeout(
        self,
        service_name: str,
        timeout: float,
        *args,
        **kwargs
    ) -> Any:
        """
        Вызвать сервис с явным timeout.

        Raises:
            ValueError: если сервис не найден
            asyncio.TimeoutError: если вызов превысил timeout
        """
        return await asyncio.wait_for(
            self.call(service_name, *args, **kwargs),
            timeout=timeout
        )

    async def has_service(self, service_name: str) -> bool:
        """Проверить, зарегистрирован ли сервис."""
        async with self._lock:
            return service_name in self._services

    async def list_services(self) -> list[str]:
        """Получить список имён всех зарегистрированных сервисов."""
        async with self._lock:
            return list(self._services.keys())

    async def clear(self) -> None:
        """Очистить все сервисы."""
        async with self._lock:
            self._services.clear()
