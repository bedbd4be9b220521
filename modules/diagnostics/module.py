"""
DiagnosticsModule — встроенный модуль диагностики конфигурации.

Предоставляет сервисы:
- diagnostics.index — HTML index-страница со ссылками из runtime.index
- diagnostics.config — YAML фактической конфигурации, конфигурации
  по умолчанию или diff между ними (mode: "", "diff", "defaults")
- diagnostics.runtime_config — YAML runtime-конфигурации или текстовая заглушка
- diagnostics.runtime_config_reload — перечитать файл runtime-конфигурации
- diagnostics.links — список зарегистрированных ссылок

HTTP не знает: ответы возвращаются как Document (тело + media type),
маршруты создаёт ApiModule.
"""

from dataclasses import dataclass
from typing import Any, Dict, List

from core.runtime_module import RuntimeModule
from core.config_inspector import (
    ConfigMode,
    SerializationError,
    UnsupportedTypeError,
    dump_yaml,
    render_config,
)
from core.index_page import render_index_page
from core.index_registry import SECTION_ADMIN_ENDPOINTS, SECTION_DANGEROUS
from core.logger_helper import error as log_error, info as log_info


YAML_MEDIA_TYPE = "application/yaml"
TEXT_MEDIA_TYPE = "text/plain"
HTML_MEDIA_TYPE = "text/html"

RUNTIME_CONFIG_MISSING = "runtime config file doesn't exist"


@dataclass
class Document:
    """Готовый к отправке текстовый документ."""
    body: str
    media_type: str


class DiagnosticsModule(RuntimeModule):
    """
    Модуль диагностики конфигурации и административного index-а.
    """

    @property
    def name(self) -> str:
        """Уникальное имя модуля."""
        return "diagnostics"

    async def register(self) -> None:
        """
        Регистрирует сервисы diagnostics.* и ссылки index-страницы.
        """
        registry = self.runtime.service_registry
        await registry.register("diagnostics.index", self.index_page)
        await registry.register("diagnostics.config", self.config_document)
        await registry.register("diagnostics.runtime_config", self.runtime_config_document)
        await registry.register("diagnostics.runtime_config_reload", self.reload_runtime_config)
        await registry.register("diagnostics.links", self.list_links)

        index = self.runtime.index
        index.add_link(SECTION_ADMIN_ENDPOINTS, "/config", "Current Config (including the default values)")
        index.add_link(SECTION_ADMIN_ENDPOINTS, "/config?mode=diff", "Current Config (show only values that differ from the defaults)")
        index.add_link(SECTION_ADMIN_ENDPOINTS, "/config?mode=defaults", "Default Config")
        index.add_link(SECTION_ADMIN_ENDPOINTS, "/runtime_config", "Current Runtime Config")
        index.add_link(SECTION_ADMIN_ENDPOINTS, "/admin/links", "Registered Admin Links (JSON)")
        index.add_link(SECTION_DANGEROUS, "/runtime_config/reload", "Reload Runtime Config (POST)")

    async def start(self) -> None:
        """Первичная загрузка runtime-конфигурации."""
        try:
            config = self.runtime.runtime_config.reload()
        except SerializationError as e:
            # Битый файл не мешает старту: /runtime_config покажет заглушку
            await log_error(self.runtime, f"Не удалось загрузить runtime config: {e}", module="diagnostics")
            return
        await log_info(
            self.runtime,
            "Runtime config loaded" if config is not None else "Runtime config not found",
            module="diagnostics",
            path=str(self.runtime.runtime_config.path),
        )

    async def stop(self) -> None:
        registry = self.runtime.service_registry
        for service in (
            "diagnostics.index",
            "diagnostics.config",
            "diagnostics.runtime_config",
            "diagnostics.runtime_config_reload",
            "diagnostics.links",
        ):
            await registry.unregister(service)

    async def index_page(self) -> Document:
        """HTML index-страница по текущему снимку реестра."""
        cfg = self.runtime.config
        html = render_index_page(
            self.runtime.index.get_content(),
            path_prefix=cfg.http_prefix,
            title=cfg.service_name,
        )
        return Document(body=html, media_type=HTML_MEDIA_TYPE)

    async def config_document(self, mode: str = "") -> Document:
        """
        Конфигурация сервиса в YAML.

        Args:
            mode: "" (полная), "defaults" или "diff"

        Raises:
            SerializationError: конфигурацию не удалось сериализовать
            UnsupportedTypeError: diff встретил неизвестный тип узла
        """
        selected = ConfigMode.parse(mode)
        try:
            output = render_config(self.runtime.config, self.runtime.default_config, selected)
            body = dump_yaml(output)
        except UnsupportedTypeError as e:
            await log_error(
                self.runtime,
                f"Config diff does not support type '{e.type_name}'",
                module="diagnostics",
                mode=selected.value,
            )
            raise
        except SerializationError as e:
            await log_error(self.runtime, f"Config serialization failed: {e}", module="diagnostics", mode=selected.value)
            raise
        return Document(body=body, media_type=YAML_MEDIA_TYPE)

    async def runtime_config_document(self) -> Document:
        """Runtime-конфигурация в YAML или текстовая заглушка, если её нет."""
        runtime_config = self.runtime.runtime_config.get_config()
        if runtime_config is None:
            return Document(body=RUNTIME_CONFIG_MISSING, media_type=TEXT_MEDIA_TYPE)
        return Document(body=dump_yaml(runtime_config), media_type=YAML_MEDIA_TYPE)

    async def reload_runtime_config(self) -> Dict[str, Any]:
        """
        Перечитать файл runtime-конфигурации.

        Raises:
            SerializationError: файл не разбирается как YAML-mapping
        """
        config = self.runtime.runtime_config.reload()
        await log_info(self.runtime, "Runtime config reloaded", module="diagnostics", loaded=config is not None)
        return {"loaded": config is not None}

    async def list_links(self) -> List[Dict[str, str]]:
        """Зарегистрированные ссылки, отсортированные по (section, path)."""
        return [
            {"section": link.section, "path": link.path, "description": link.description}
            for link in self.runtime.index.links()
        ]
