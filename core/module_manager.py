"""
ModuleManager — менеджер встроенных модулей Runtime.

Управляет жизненным циклом RuntimeModule:
- обнаружение и регистрация модулей из пакета `modules`
- запуск/остановка модулей
- гарантия уникальности имён

КОНТРАКТ LIFECYCLE:
- register() вызывается ровно один раз для каждого модуля
- start_all() вызывает start() для всех зарегистрированных модулей
- stop_all() вызывает stop() для всех модулей, даже при частичном старте

КОНТРАКТ REQUIRED vs OPTIONAL:
- Runtime не стартует, если REQUIRED модуль не зарегистрирован или не запустился
- OPTIONAL модули могут отсутствовать или фейлиться без остановки runtime
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import sys
import importlib
import importlib.util

from core.runtime_module import RuntimeModule
from core.logger_helper import error as log_error


@dataclass
class ModuleSpec:
    """Спецификация модуля с флагом обязательности."""
    name: str
    required: bool = True


# ВАЖНО: logger должен быть первым, он нужен для логирования других модулей.
# api — последним: к его start() все ссылки index-а уже зарегистрированы.
BUILTIN_MODULES = [
    ModuleSpec("logger", required=True),       # LoggerModule
    ModuleSpec("diagnostics", required=True),  # DiagnosticsModule (config, runtime_config, index)
    ModuleSpec("api", required=True),          # ApiModule (HTTP)
]

REQUIRED_MODULES = [spec.name for spec in BUILTIN_MODULES if spec.required]
OPTIONAL_MODULES = [spec.name for spec in BUILTIN_MODULES if not spec.required]


class ModuleManager:
    """
    Менеджер встроенных модулей Runtime.

    Гарантирует уникальность имён и идемпотентность регистрации.
    """

    def __init__(self, runtime: Optional[Any] = None):
        """
        Args:
            runtime: опциональный экземпляр CoreRuntime для логирования
        """
        self._modules: Dict[str, RuntimeModule] = {}
        self._runtime = runtime

    async def register(self, module: RuntimeModule) -> None:
        """
        Регистрирует модуль и вызывает его register().

        Повторная регистрация того же экземпляра игнорируется.

        Raises:
            ValueError: если под этим именем уже зарегистрирован другой экземпляр
        """
        module_name = module.name

        if module_name in self._modules:
            if self._modules[module_name] is module:
                return
            raise ValueError(
                f"Module '{module_name}' is already registered. "
                f"Use unregister() first or use a different name."
            )

        self._modules[module_name] = module
        await module.register()

    def unregister(self, module_name: str) -> None:
        """Отменяет регистрацию модуля."""
        self._modules.pop(module_name, None)

    def get_module(self, module_name: str) -> Optional[RuntimeModule]:
        """Модуль по имени или None."""
        return self._modules.get(module_name)

    def list_modules(self) -> List[str]:
        """Имена зарегистрированных модулей в порядке регистрации."""
        return list(self._modules.keys())

    def check_required_modules_registered(self) -> None:
        """
        Raises:
            RuntimeError: если какой-то REQUIRED модуль не зарегистрирован
        """
        missing = [name for name in REQUIRED_MODULES if name not in self._modules]
        if missing:
            raise RuntimeError(
                f"Required modules not registered: {missing}. "
                f"Registered modules: {self.list_modules()}"
            )

    async def start_all(self) -> None:
        """
        Запускает все зарегистрированные модули в порядке регистрации.

        Raises:
            RuntimeError: если REQUIRED модуль упал в start()
        """
        failed_required = []

        for module in self._modules.values():
            try:
                await module.start()
            except Exception as e:
                if module.name in REQUIRED_MODULES:
                    failed_required.append((module.name, str(e)))
                else:
                    await self._report(f"Ошибка при запуске optional модуля '{module.name}': {e}", module.name)

        if failed_required:
            raise RuntimeError(self._format_failures("start", failed_required))

    async def stop_all(self) -> None:
        """
        Останавливает все модули в обратном порядке.

        Ошибка одного модуля не мешает остановке остальных.
        """
        for module in reversed(list(self._modules.values())):
            try:
                await module.stop()
            except Exception as e:
                await self._report(f"Ошибка при остановке модуля '{module.name}': {e}", module.name)

    def clear(self) -> None:
        """Очищает все зарегистрированные модули."""
        self._modules.clear()

    async def register_builtin_modules(self, runtime: Any) -> None:
        """
        Регистрирует все модули из BUILTIN_MODULES.

        Уже зарегистрированные модули пропускаются, поэтому тесты могут
        подменить модуль вручную до вызова.

        Raises:
            RuntimeError: если REQUIRED модуль не найден или не зарегистрировался
        """
        failed_required = []

        for module_spec in BUILTIN_MODULES:
            if module_spec.name in self._modules:
                continue

            try:
                await self._register_module_by_name(runtime, module_spec)
            except Exception as e:
                if module_spec.required:
                    failed_required.append((module_spec.name, str(e)))
                else:
                    await self._report(
                        f"Ошибка при регистрации optional модуля '{module_spec.name}': {e}",
                        module_spec.name,
                    )

        if failed_required:
            raise RuntimeError(self._format_failures("register", failed_required))

    def _discover_module(self, module_name: str) -> Optional[type]:
        """
        Находит класс модуля: `modules.<name>` экспортирует `<CamelName>Module`.

        Raises:
            RuntimeError: если импорт упал или класс не является RuntimeModule
        """
        module_path = f"modules.{module_name}"
        if importlib.util.find_spec(module_path) is None:
            return None

        try:
            module = importlib.import_module(module_path)
        except ImportError as e:
            raise RuntimeError(f"Failed to import module '{module_path}': {e}") from e

        class_name = "".join(part.capitalize() for part in module_name.split("_")) + "Module"
        module_class = getattr(module, class_name, None)
        if module_class is None:
            return None
        if not (isinstance(module_class, type) and issubclass(module_class, RuntimeModule)):
            raise RuntimeError(
                f"Module class '{class_name}' in '{module_path}' is not a subclass of RuntimeModule"
            )
        return module_class

    async def _register_module_by_name(self, runtime: Any, module_spec: ModuleSpec) -> None:
        module_class = self._discover_module(module_spec.name)
        if module_class is None:
            if module_spec.required:
                raise RuntimeError(f"Required module '{module_spec.name}' not found")
            return

        try:
            await self.register(module_class(runtime))
        except ValueError as e:
            raise RuntimeError(f"Module '{module_spec.name}' registration failed: {e}") from e

    async def _report(self, message: str, module_name: str) -> None:
        try:
            await log_error(self._runtime, message, component="module_manager", module=module_name)
        except Exception:
            # Fallback на stderr если logger недоступен
            print(f"[ModuleManager] {message}", file=sys.stderr)

    @staticmethod
    def _format_failures(stage: str, failures: List[tuple]) -> str:
        failed_names = [name for name, _ in failures]
        errors = "\n".join(f"  - {name}: {error}" for name, error in failures)
        return (
            f"Failed to {stage} required modules: {failed_names}\n"
            f"Errors:\n{errors}\n"
            f"Runtime cannot start without required modules."
        )
