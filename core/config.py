"""
Конфигурация Runtime.

Минимальные настройки. Экземпляр `Config()` без аргументов — это
конфигурация по умолчанию, с которой сравнивается фактическая
(GET /config?mode=diff).
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Config:
    """Конфигурация Runtime."""
    # Имя сервиса (заголовок index-страницы)
    service_name: str = "Runtime"

    # "development" | "production"
    env: str = "development"

    # HTTP сервер
    # False — маршруты создаются, но uvicorn не запускается
    http_enabled: bool = True
    http_host: str = "127.0.0.1"
    http_port: int = 8000
    # Префикс всех маршрутов (например, "/api"), пустая строка — без префикса
    http_prefix: str = ""

    # Путь к YAML-файлу runtime-конфигурации (None — файла нет)
    runtime_config_file: Optional[str] = None

    # Тайм-аут для shutdown (секунды)
    shutdown_timeout: int = 10

    # Тайм-аут для вызовов сервисов (секунды)
    service_call_timeout: float = 30.0

    # Logging
    # "text" | "json"
    log_format: str = "text"

    def validate(self) -> None:
        """
        Валидировать конфигурацию.

        Raises:
            ValueError: если конфигурация невалидна
        """
        if not isinstance(self.service_name, str) or not self.service_name.strip():
            raise ValueError("service_name must be non-empty string")

        if self.env not in ("development", "production"):
            raise ValueError(f"env must be 'development' or 'production', got: {self.env!r}")

        if not isinstance(self.http_host, str) or not self.http_host:
            raise ValueError("http_host must be non-empty string")
        if not isinstance(self.http_port, int) or self.http_port <= 0 or self.http_port > 65535:
            raise ValueError(
                f"http_port must be integer between 1 and 65535, got: {self.http_port}"
            )

        if not isinstance(self.http_prefix, str):
            raise ValueError(f"http_prefix must be string, got: {type(self.http_prefix).__name__}")
        if self.http_prefix and not self.http_prefix.startswith("/"):
            raise ValueError(f"http_prefix must start with '/', got: {self.http_prefix!r}")
        # "/api/" -> "/api", чтобы FastAPI не получал "//" в маршрутах
        self.http_prefix = self.http_prefix.rstrip("/")

        if self.runtime_config_file == "":
            self.runtime_config_file = None

        if not isinstance(self.shutdown_timeout, int) or self.shutdown_timeout <= 0:
            raise ValueError(
                f"shutdown_timeout must be positive integer, got: {self.shutdown_timeout}"
            )
        if not isinstance(self.service_call_timeout, (int, float)) or self.service_call_timeout <= 0:
            raise ValueError(
                f"service_call_timeout must be positive number, got: {self.service_call_timeout}"
            )

        if self.log_format not in ("text", "json"):
            raise ValueError("log_format must be 'text' or 'json'")

    @classmethod
    def from_env(cls) -> "Config":
        """
        Создать конфигурацию из переменных окружения.

        Raises:
            ValueError: если конфигурация невалидна
        """
        config = cls(
            service_name=os.getenv("RUNTIME_SERVICE_NAME", "Runtime"),
            env=os.getenv("RUNTIME_ENV", "development").lower(),
            http_enabled=os.getenv("RUNTIME_HTTP_ENABLED", "true").lower() == "true",
            http_host=os.getenv("RUNTIME_HTTP_HOST", "127.0.0.1"),
            http_port=int(os.getenv("RUNTIME_HTTP_PORT", "8000")),
            http_prefix=os.getenv("RUNTIME_HTTP_PREFIX", ""),
            runtime_config_file=os.getenv("RUNTIME_CONFIG_FILE"),
            shutdown_timeout=int(os.getenv("RUNTIME_SHUTDOWN_TIMEOUT", "10")),
            service_call_timeout=float(os.getenv("RUNTIME_SERVICE_CALL_TIMEOUT", "30.0")),
            log_format=os.getenv("RUNTIME_LOG_FORMAT", "text").lower(),
        )
        config.validate()
        return config
