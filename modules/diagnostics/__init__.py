"""
Diagnostics Module — конфигурация сервиса и административный index.

Обязательный модуль, регистрируется автоматически через ModuleManager.
"""

from .module import DiagnosticsModule, Document, RUNTIME_CONFIG_MISSING

__all__ = ["DiagnosticsModule", "Document", "RUNTIME_CONFIG_MISSING"]
