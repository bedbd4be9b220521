"""
RuntimeConfigManager — источник runtime-конфигурации.

Runtime-конфигурация — это YAML-файл с переопределениями, который может
меняться без рестарта сервиса. Менеджер читает его при старте и по явному
вызову reload(). Периодического перечитывания нет.
"""

import threading
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from core.config_inspector import SerializationError


class RuntimeConfigManager:
    """
    Хранит последнюю успешно загруженную runtime-конфигурацию.

    get_config() возвращает None, если файл не задан, отсутствует или пуст.
    """

    def __init__(self, path: Optional[str] = None):
        """
        Args:
            path: путь к YAML-файлу (None — runtime-конфигурации нет)
        """
        self._path = Path(path) if path else None
        self._lock = threading.Lock()
        self._config: Optional[Dict[str, Any]] = None

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def get_config(self) -> Optional[Dict[str, Any]]:
        """Текущая runtime-конфигурация или None."""
        with self._lock:
            return self._config

    def reload(self) -> Optional[Dict[str, Any]]:
        """
        Перечитать файл runtime-конфигурации.

        Файл читается вне lock, под lock только подменяется значение.
        При ошибке разбора предыдущее значение сохраняется.

        Returns:
            новая конфигурация или None

        Raises:
            SerializationError: если файл не является YAML-mapping
        """
        config = self._load()
        with self._lock:
            self._config = config
        return config

    def _load(self) -> Optional[Dict[str, Any]]:
        if self._path is None or not self._path.is_file():
            return None

        try:
            with self._path.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except yaml.YAMLError as e:
            raise SerializationError(f"failed to parse runtime config {self._path}: {e}") from e

        if data is None:
            return None
        if not isinstance(data, dict):
            raise SerializationError(
                f"runtime config {self._path} must be a mapping, got: {type(data).__name__}"
            )
        return data
