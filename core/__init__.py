"""
Core Runtime - ядро сервиса диагностики конфигурации.
"""

from .config import Config
from .config_inspector import (
    ConfigInspectorError,
    ConfigMode,
    SerializationError,
    UnsupportedTypeError,
    diff_config,
    dump_yaml,
    lower_config,
    render_config,
)
from .index_page import join_path_prefix, render_index_page
from .index_registry import AdminLink, IndexPageContent, SECTION_ADMIN_ENDPOINTS, SECTION_DANGEROUS
from .module_manager import ModuleManager
from .runtime import CoreRuntime
from .runtime_config import RuntimeConfigManager
from .runtime_module import RuntimeModule
from .service_registry import ServiceRegistry
from .logger_helper import info, warning, error

__all__ = [
    "Config",
    "CoreRuntime",
    "ServiceRegistry",
    "ModuleManager",
    "RuntimeModule",
    "RuntimeConfigManager",
    "IndexPageContent",
    "AdminLink",
    "SECTION_ADMIN_ENDPOINTS",
    "SECTION_DANGEROUS",
    "ConfigMode",
    "ConfigInspectorError",
    "SerializationError",
    "UnsupportedTypeError",
    "diff_config",
    "dump_yaml",
    "lower_config",
    "render_config",
    "join_path_prefix",
    "render_index_page",
    "info",
    "warning",
    "error",
]
